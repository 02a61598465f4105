"""
Style rules -- parse STYLE.md, layer it over the writing profile, render a prompt.

Usage:
    from .style import merge_style_rules, parse_style_markdown, render_style_prompt

    parsed = parse_style_markdown(markdown)
    merged = merge_style_rules(parsed, mode="casual", profile=profile)
    rules_prompt = render_style_prompt(merged)
"""

from .merger import merge_style_rules
from .models import (
    DEFAULT_MODE,
    MODES,
    RULE_CATEGORIES,
    ParsedStyleDocument,
    RuleSet,
    coerce_rule_set,
    empty_rule_set,
    normalize_mode,
)
from .parser import parse_style_markdown
from .prompt import render_style_prompt
