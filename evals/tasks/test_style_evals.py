"""
Style Evals -- STYLE.md parsing, layered merge, prompt rendering.

Pure functions, no I/O. Covers the worked examples from the product docs
(casual merge, two-line render, unknown mode) plus malformed input.
"""

import copy

from emailbuddy.style import (
    RULE_CATEGORIES,
    empty_rule_set,
    merge_style_rules,
    parse_style_markdown,
    render_style_prompt,
)

SAMPLE_STYLE = """# My Style

## global
do: be clear
avoid: buzzwords

## mode: casual
do: be warm
"""


def _profile(**categories):
    profile = empty_rule_set()
    profile.update(categories)
    return profile


class TestStyleParser:
    """Eval: Does the parser turn STYLE.md into global + per-mode rules?"""

    def test_parses_global_and_mode_sections(self):
        parsed = parse_style_markdown(SAMPLE_STYLE)
        assert parsed.global_rules["do"] == ["be clear"]
        assert parsed.global_rules["avoid"] == ["buzzwords"]
        assert parsed.modes["casual"]["do"] == ["be warm"]
        assert parsed.modes["casual"]["avoid"] == []

    def test_directives_before_any_heading_are_global(self):
        parsed = parse_style_markdown("do: be brief\n## mode: concise\ndo: cut filler")
        assert parsed.global_rules["do"] == ["be brief"]
        assert parsed.modes["concise"]["do"] == ["cut filler"]

    def test_crlf_line_endings(self):
        parsed = parse_style_markdown("## global\r\ndo: be clear\r\navoid: jargon\r\n")
        assert parsed.global_rules["do"] == ["be clear"]
        assert parsed.global_rules["avoid"] == ["jargon"]

    def test_headings_and_keys_are_case_insensitive(self):
        parsed = parse_style_markdown("## Mode: Polished\nDO: fix grammar")
        assert parsed.modes["polished"]["do"] == ["fix grammar"]

    def test_empty_mode_section_is_still_recorded(self):
        parsed = parse_style_markdown("## mode: formal\n")
        assert parsed.modes["formal"] == empty_rule_set()

    def test_value_keeps_text_after_first_colon(self):
        parsed = parse_style_markdown("preferred_phrases: Re: your note")
        assert parsed.global_rules["preferred_phrases"] == ["Re: your note"]

    def test_all_five_categories_recognized(self):
        doc = "\n".join(f"{category}: value {i}" for i, category in enumerate(RULE_CATEGORIES))
        parsed = parse_style_markdown(doc)
        for i, category in enumerate(RULE_CATEGORIES):
            assert parsed.global_rules[category] == [f"value {i}"]

    def test_unknown_heading_keeps_current_section(self):
        parsed = parse_style_markdown("## mode: casual\n## notes\ndo: be warm")
        assert parsed.modes["casual"]["do"] == ["be warm"]
        assert parsed.global_rules["do"] == []

    def test_titles_and_deep_headings_ignored(self):
        parsed = parse_style_markdown("# do: not a rule\n### do: nor this\ndo: this one")
        assert parsed.global_rules["do"] == ["this one"]


class TestStyleParserTolerance:
    """Eval: Malformed input is skipped, never raised."""

    def test_stray_and_unknown_lines_dropped(self):
        doc = "\n".join([
            "## global",
            "just some prose",
            "tone: friendly",
            "do:",
            "do:    ",
            ": orphan value",
            "do: kept",
        ])
        parsed = parse_style_markdown(doc)
        assert parsed.global_rules == {**empty_rule_set(), "do": ["kept"]}
        assert parsed.modes == {}

    def test_none_and_non_string_yield_empty_document(self):
        for bad in (None, 42, ["do: x"], {"do": "x"}):
            parsed = parse_style_markdown(bad)
            assert parsed.global_rules == empty_rule_set()
            assert parsed.modes == {}

    def test_empty_document(self):
        parsed = parse_style_markdown("")
        assert parsed.to_dict() == {"global": empty_rule_set(), "modes": {}}


class TestStyleMerge:
    """Eval: profile ++ global ++ mode, per category, no dedup."""

    def test_casual_example(self):
        parsed = parse_style_markdown(SAMPLE_STYLE)
        profile = _profile(do=["use contractions"], avoid=["legalese"])

        merged = merge_style_rules(parsed, "casual", profile)

        assert merged["do"] == ["use contractions", "be clear", "be warm"]
        assert merged["avoid"] == ["legalese", "buzzwords"]
        assert list(merged) == list(RULE_CATEGORIES)

    def test_unknown_mode_uses_empty_mode_rules(self):
        parsed = parse_style_markdown(SAMPLE_STYLE)
        profile = _profile(do=["use contractions"])

        merged = merge_style_rules(parsed, "grumpy", profile)

        assert merged["do"] == ["use contractions", "be clear"]
        assert "be warm" not in merged["do"]

    def test_duplicates_are_kept(self):
        parsed = parse_style_markdown("do: be clear\n## mode: casual\ndo: be clear")
        merged = merge_style_rules(parsed, "casual", _profile(do=["be clear"]))
        assert merged["do"] == ["be clear", "be clear", "be clear"]

    def test_no_profile(self):
        parsed = parse_style_markdown(SAMPLE_STYLE)
        assert merge_style_rules(parsed, "casual", None)["do"] == ["be clear", "be warm"]

    def test_partial_profile_mapping(self):
        parsed = parse_style_markdown(SAMPLE_STYLE)
        merged = merge_style_rules(parsed, "casual", {"avoid": ["slang"]})
        assert merged["avoid"] == ["slang", "buzzwords"]
        assert merged["do"] == ["be clear", "be warm"]

    def test_deterministic_and_does_not_mutate_inputs(self):
        parsed = parse_style_markdown(SAMPLE_STYLE)
        profile = _profile(do=["use contractions"])
        before = copy.deepcopy((parsed.to_dict(), profile))

        first = merge_style_rules(parsed, "casual", profile)
        first["do"].append("mutated by caller")
        second = merge_style_rules(parsed, "casual", profile)

        assert second["do"] == ["use contractions", "be clear", "be warm"]
        assert (parsed.to_dict(), profile) == before


class TestStylePrompt:
    """Eval: Rendering is fixed-order, one line per non-empty category."""

    def test_two_line_example(self):
        rules = _profile(do=["be clear"], signature_style=["short close"])
        assert render_style_prompt(rules) == "do: be clear\nsignature style: short close"

    def test_values_joined_with_semicolons(self):
        rules = _profile(forbidden_phrases=["per my last email", "circle back"])
        assert render_style_prompt(rules) == (
            "forbidden phrases: per my last email; circle back"
        )

    def test_order_independent_of_mapping_order(self):
        rules = {
            "preferred_phrases": ["thanks so much"],
            "avoid": ["jargon"],
            "do": ["be clear"],
        }
        assert render_style_prompt(rules).splitlines() == [
            "do: be clear",
            "avoid: jargon",
            "preferred phrases: thanks so much",
        ]

    def test_empty_rules_render_empty_string(self):
        assert render_style_prompt(empty_rule_set()) == ""
        assert render_style_prompt({}) == ""
