"""
Companion data directory -- small JSON and text files under ~/.emailbuddy.

Layout:
    ~/.emailbuddy/config.json    -- validated CompanionConfig
    ~/.emailbuddy/STYLE.md       -- user-authored style rules
    ~/.emailbuddy/profile.json   -- inferred writing profile
    ~/.emailbuddy/history.jsonl  -- opt-in rewrite history (append-only)

Set EMAILBUDDY_HOME to relocate the directory (tests point it at tmp_path).
Paths are resolved on every call so the variable can change at runtime.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "EMAILBUDDY_HOME"


def data_dir() -> Path:
    override = os.environ.get(HOME_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".emailbuddy"


def config_path() -> Path:
    return data_dir() / "config.json"


def style_path() -> Path:
    return data_dir() / "STYLE.md"


def profile_path() -> Path:
    return data_dir() / "profile.json"


def history_path() -> Path:
    return data_dir() / "history.jsonl"


def ensure_data_dir() -> Path:
    directory = data_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def read_json(path: Path, fallback: Any) -> Any:
    """Load JSON from `path`; return `fallback` if missing or unparseable."""
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return fallback
    except (OSError, ValueError) as e:
        logger.warning(f"[Storage] Could not read {path.name}: {e}")
        return fallback


def write_json(path: Path, value: Any) -> None:
    ensure_data_dir()
    with open(path, "w", encoding="utf-8") as f:
        json.dump(value, f, indent=2)


def read_text(path: Path, fallback: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return fallback


def write_text(path: Path, value: str) -> None:
    ensure_data_dir()
    path.write_text(value, encoding="utf-8")
