"""
Companion configuration -- validated settings plus the STYLE.md document.

config.json uses the camelCase wire shape the browser extension edits:

    {
      "host": "127.0.0.1",
      "port": 48123,
      "providerOrder": ["ollama", "openai", "anthropic"],
      "history": {"enabled": false},
      "timeoutMs": 12000
    }

validate_config() is the only way a raw dict becomes a CompanionConfig, so
everything past this module can trust provider_order and timeout_ms.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any

from . import storage
from .security.validators import (
    ValidationError,
    validate_int_range,
    validate_not_empty,
)
from .style import MODES

logger = logging.getLogger(__name__)

ALLOWED_PROVIDERS = ["ollama", "openai", "anthropic", "mock"]

CONFIG_SCHEMA: dict[str, Any] = {
    "defaults": {
        "host": "127.0.0.1",
        "port": 48123,
        "providerOrder": ["ollama", "openai", "anthropic"],
        "history": {"enabled": False},
        "timeoutMs": 12000,
    },
    "constraints": {
        "timeoutMs": {"min": 1000, "max": 60000},
        "port": {"min": 1, "max": 65535},
        "providers": ALLOWED_PROVIDERS,
        "modes": list(MODES),
    },
}

DEFAULT_STYLE = """# EmailBuddy Style Configuration

## global

do: keep language clear and natural for non-native English writer
avoid: overly formal phrases and corporate jargon

## mode: casual

do: sound warm and collaborative

## mode: polished

do: improve grammar and sentence flow

## mode: concise

do: reduce unnecessary words
"""


# =============================================================================
# CONFIG MODEL
# =============================================================================


@dataclass
class HistoryConfig:
    """Opt-in rewrite history."""

    enabled: bool = False


@dataclass
class CompanionConfig:
    """Validated companion settings."""

    host: str = "127.0.0.1"
    port: int = 48123
    provider_order: list[str] = field(
        default_factory=lambda: list(CONFIG_SCHEMA["defaults"]["providerOrder"])
    )
    timeout_ms: int = 12000
    history: HistoryConfig = field(default_factory=HistoryConfig)

    def to_wire(self) -> dict[str, Any]:
        """camelCase shape stored in config.json and returned by the API."""
        return {
            "host": self.host,
            "port": self.port,
            "providerOrder": list(self.provider_order),
            "history": {"enabled": self.history.enabled},
            "timeoutMs": self.timeout_ms,
        }


# =============================================================================
# VALIDATION
# =============================================================================


def _normalize_provider_order(order: Any) -> list[str]:
    if not isinstance(order, (list, tuple)):
        raise ValidationError("providerOrder must be an array")

    normalized = [str(p).strip().lower() for p in order]
    normalized = [p for p in normalized if p]
    if not normalized:
        raise ValidationError("providerOrder must include at least one provider")

    seen: set[str] = set()
    for provider in normalized:
        if provider not in ALLOWED_PROVIDERS:
            raise ValidationError(f"Unsupported provider in providerOrder: {provider}")
        if provider in seen:
            raise ValidationError(f"providerOrder contains duplicate provider: {provider}")
        seen.add(provider)
    return normalized


def _normalize_history(history: Any) -> HistoryConfig:
    if not isinstance(history, dict):
        raise ValidationError("history must be an object")
    if not isinstance(history.get("enabled"), bool):
        raise ValidationError("history.enabled must be boolean")
    return HistoryConfig(enabled=history["enabled"])


def validate_config(raw: dict[str, Any]) -> CompanionConfig:
    """Validate a wire-shaped config dict. Raises ValidationError."""
    constraints = CONFIG_SCHEMA["constraints"]
    host = raw.get("host")
    return CompanionConfig(
        host=validate_not_empty("" if host is None else str(host), "host"),
        port=validate_int_range(
            raw.get("port"), "port",
            minimum=constraints["port"]["min"], maximum=constraints["port"]["max"],
        ),
        provider_order=_normalize_provider_order(raw.get("providerOrder")),
        history=_normalize_history(raw.get("history")),
        timeout_ms=validate_int_range(
            raw.get("timeoutMs"), "timeoutMs",
            minimum=constraints["timeoutMs"]["min"], maximum=constraints["timeoutMs"]["max"],
        ),
    )


def merge_config(base: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    """Shallow merge, except `history` which merges one level deeper."""
    patch_history = patch.get("history")
    merged = {**base, **patch}
    merged["history"] = {
        **(base.get("history") or {}),
        **(patch_history if isinstance(patch_history, dict) else {}),
    }
    return merged


# =============================================================================
# PERSISTENCE
# =============================================================================


def load_config() -> CompanionConfig:
    """Load config.json over the defaults. Invalid files fall back to defaults."""
    storage.ensure_data_dir()
    defaults = copy.deepcopy(CONFIG_SCHEMA["defaults"])
    raw = storage.read_json(storage.config_path(), defaults)
    if not isinstance(raw, dict):
        raw = {}
    try:
        return validate_config(merge_config(defaults, raw))
    except ValidationError as e:
        logger.warning(f"[Config] Stored config invalid ({e}); using defaults")
        return validate_config(defaults)


def save_config(patch: dict[str, Any] | None) -> CompanionConfig:
    """Apply a partial update, validate it, persist it. Raises ValidationError."""
    current = load_config().to_wire()
    validated = validate_config(merge_config(current, patch or {}))
    storage.write_json(storage.config_path(), validated.to_wire())
    logger.info(
        f"[Config] Saved config (providers={validated.provider_order}, "
        f"timeout={validated.timeout_ms}ms, history={validated.history.enabled})"
    )
    return validated


def get_config_schema() -> dict[str, Any]:
    return copy.deepcopy(CONFIG_SCHEMA)


def load_style_markdown() -> str:
    return storage.read_text(storage.style_path(), DEFAULT_STYLE)


def save_style_markdown(markdown: Any) -> str:
    if not isinstance(markdown, str) or not markdown.strip():
        raise ValidationError("style markdown must be a non-empty string")
    storage.write_text(storage.style_path(), markdown)
    return markdown
