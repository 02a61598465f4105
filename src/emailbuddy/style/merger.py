"""Layered merge of profile, global and per-mode style rules."""

from typing import Mapping

from .models import RULE_CATEGORIES, ParsedStyleDocument, RuleSet


def merge_style_rules(
    rules: ParsedStyleDocument,
    mode: str,
    profile: Mapping[str, list[str]] | None = None,
) -> RuleSet:
    """
    Combine the three directive layers into one RuleSet for a request.

    Each category is profile ++ global ++ mode, in that order. Repeats across
    layers are kept. A mode with no section in STYLE.md contributes nothing.
    """
    mode_rules = rules.mode_rules(mode)
    merged: RuleSet = {}
    for category in RULE_CATEGORIES:
        from_profile = list(profile.get(category) or []) if profile else []
        merged[category] = [
            *from_profile,
            *rules.global_rules.get(category, []),
            *mode_rules.get(category, []),
        ]
    return merged
