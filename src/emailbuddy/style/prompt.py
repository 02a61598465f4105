"""Render a merged RuleSet into the directive block sent to providers."""

from typing import Mapping

from .models import RULE_CATEGORIES


def category_label(category: str) -> str:
    return category.replace("_", " ")


def render_style_prompt(rules: Mapping[str, list[str]]) -> str:
    """
    One line per non-empty category, in RULE_CATEGORIES order:

        do: be clear; be warm
        signature style: short close
    """
    lines = []
    for category in RULE_CATEGORIES:
        values = rules.get(category) or []
        if not values:
            continue
        lines.append(f"{category_label(category)}: {'; '.join(values)}")
    return "\n".join(lines)
