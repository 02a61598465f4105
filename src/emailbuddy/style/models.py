"""
Style rule data models -- the shapes shared by the parser, merger and profile.

A RuleSet is a plain dict from rule category to an ordered list of directive
strings. It always carries all five categories, in RULE_CATEGORIES order,
so downstream code never has to guard against a missing key.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

RULE_CATEGORIES: tuple[str, ...] = (
    "do",
    "avoid",
    "signature_style",
    "preferred_phrases",
    "forbidden_phrases",
)

RuleSet = dict[str, list[str]]

MODES: tuple[str, ...] = ("casual", "polished", "concise")
DEFAULT_MODE = "casual"


def empty_rule_set() -> RuleSet:
    """A RuleSet with every category present and empty."""
    return {category: [] for category in RULE_CATEGORIES}


def coerce_rule_set(data: Mapping[str, Any] | None) -> RuleSet:
    """
    Normalize an arbitrary mapping (e.g. profile.json) into a full RuleSet.

    Missing categories become empty lists, unknown keys are dropped, and
    non-string or blank entries are skipped. Order within a category is kept.
    """
    rules = empty_rule_set()
    if not isinstance(data, Mapping):
        return rules
    for category in RULE_CATEGORIES:
        values = data.get(category)
        if not isinstance(values, (list, tuple)):
            continue
        rules[category] = [v.strip() for v in values if isinstance(v, str) and v.strip()]
    return rules


def normalize_mode(mode: Any) -> str:
    """Trim and lower-case a mode; fall back to DEFAULT_MODE if absent."""
    if not isinstance(mode, str) or not mode.strip():
        return DEFAULT_MODE
    return mode.strip().lower()


@dataclass
class ParsedStyleDocument:
    """Result of parsing STYLE.md: global rules plus one RuleSet per mode."""

    global_rules: RuleSet = field(default_factory=empty_rule_set)
    modes: dict[str, RuleSet] = field(default_factory=dict)

    def mode_rules(self, mode: str) -> RuleSet:
        """Rules for `mode`, or an empty RuleSet for a mode with no section."""
        return self.modes.get(mode) or empty_rule_set()

    def to_dict(self) -> dict:
        return {"global": self.global_rules, "modes": self.modes}
