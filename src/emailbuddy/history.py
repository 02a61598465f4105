"""
HistoryLog -- append-only JSONL record of completed rewrites.

One line per successful rewrite:
    {"ts": "...", "mode": "casual", "provider": "ollama", "text": "...", "rewrittenText": "..."}

Each record is serialized first and written with a single write() under a
lock, so concurrent requests never interleave partial lines.
"""

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from . import storage

logger = logging.getLogger(__name__)

_write_lock = threading.Lock()


def history_record(mode: str, provider: str, text: str, rewritten_text: str) -> dict[str, Any]:
    return {
        "ts": datetime.now(timezone.utc).isoformat(),
        "mode": mode,
        "provider": provider,
        "text": text,
        "rewrittenText": rewritten_text,
    }


class HistoryLog:
    """File-backed history sink. `path=None` follows EMAILBUDDY_HOME."""

    def __init__(self, path: Path | None = None):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path or storage.history_path()

    def append(self, record: dict[str, Any]) -> None:
        line = json.dumps(record, ensure_ascii=False) + "\n"
        path = self.path
        path.parent.mkdir(parents=True, exist_ok=True)
        with _write_lock:
            with open(path, "a", encoding="utf-8") as f:
                f.write(line)
        logger.debug(f"[History] Appended record ({record.get('provider')}, {record.get('mode')})")

    def read_all(self) -> list[dict[str, Any]]:
        """All records in append order; unparseable lines are skipped."""
        try:
            lines = self.path.read_text(encoding="utf-8").splitlines()
        except FileNotFoundError:
            return []
        records = []
        for line in lines:
            try:
                records.append(json.loads(line))
            except ValueError:
                continue
        return records
