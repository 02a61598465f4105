"""
STYLE.md parser.

The document is line-oriented markdown:

    # EmailBuddy Style Configuration      <- title, ignored

    ## global
    do: keep language clear
    avoid: corporate jargon

    ## mode: casual
    do: sound warm

Anything the parser does not understand is skipped rather than reported,
so a half-edited file still produces usable rules.
"""

import logging
import re

from .models import RULE_CATEGORIES, ParsedStyleDocument, empty_rule_set

logger = logging.getLogger(__name__)

GLOBAL_SECTION = "global"
MODE_PREFIX = "mode:"

_LINE_BREAK = re.compile(r"\r?\n")
_SUPPORTED_KEYS = frozenset(RULE_CATEGORIES)


def parse_style_markdown(markdown: str) -> ParsedStyleDocument:
    """Parse a STYLE.md document. Never raises on malformed input."""
    parsed = ParsedStyleDocument()
    if not isinstance(markdown, str):
        return parsed

    section: str | None = None  # None = global
    skipped = 0

    for raw_line in _LINE_BREAK.split(markdown):
        line = raw_line.strip()
        if not line or line.startswith("# ") or line.startswith("###"):
            continue

        if line.startswith("## "):
            header = line[3:].strip().lower()
            if header == GLOBAL_SECTION:
                section = None
            elif header.startswith(MODE_PREFIX):
                section = header[len(MODE_PREFIX):].strip()
                parsed.modes.setdefault(section, empty_rule_set())
            continue

        key, sep, value = line.partition(":")
        key = key.strip().lower()
        value = value.strip()
        if not sep or key not in _SUPPORTED_KEYS or not value:
            skipped += 1
            continue

        if section is None:
            target = parsed.global_rules
        else:
            target = parsed.modes.setdefault(section, empty_rule_set())
        target[key].append(value)

    if skipped:
        logger.debug(f"[StyleParser] Skipped {skipped} unrecognized line(s)")
    return parsed
