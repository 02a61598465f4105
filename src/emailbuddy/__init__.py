"""EmailBuddy companion service: style-guided email rewriting with provider fallback."""

__version__ = "0.1.0"
