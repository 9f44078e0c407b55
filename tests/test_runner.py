"""Tests for the host-side lint/fix loop."""

from __future__ import annotations

import pytest

from format_bridge.core.runner import apply_edits, fix_source, lint_source
from format_bridge.errors import FormatSyntaxError
from format_bridge.model import MessageId
from format_bridge.model.diagnostic import Edit, Location
from format_bridge.rule import FormatRule

OPTIONS = {"parser": "babel"}


class TestApplyEdits:

    def test_applies_in_offset_order(self):
        edits = [Edit(5, 5, "!"), Edit(0, 1, "H")]
        assert apply_edits("hello", edits) == "Hello!"

    def test_adjacent_edits(self):
        assert apply_edits("ab", [Edit(0, 1, "x"), Edit(1, 2, "y")]) == "xy"

    def test_no_edits(self):
        assert apply_edits("same", []) == "same"

    def test_overlap_rejected(self):
        with pytest.raises(ValueError, match="overlapping"):
            apply_edits("abcdef", [Edit(0, 3, ""), Edit(2, 4, "")])

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError, match="exceeds"):
            apply_edits("abc", [Edit(1, 9, "")])


class TestLintSource:

    def test_uses_given_rule(self, toy_bridge):
        diagnostics = lint_source("x=1", "a.js", OPTIONS, rule=FormatRule(toy_bridge))
        assert [d.message_id for d in diagnostics] == [MessageId.FORMAT]


class TestFixSource:

    @pytest.mark.parametrize("policy", ["whole", "minimal"])
    def test_fixes_to_formatted_output(self, toy_bridge, policy):
        outcome = fix_source(
            "a=1\n  b=2\nc = 3",
            "a.js",
            {**OPTIONS, "diffPolicy": policy},
            rule=FormatRule(toy_bridge),
        )

        assert outcome.output == "a = 1;\nb = 2;\nc = 3;\n"
        assert outcome.fixed
        assert outcome.passes == 1
        assert outcome.remaining == []

    def test_already_formatted(self, toy_bridge):
        outcome = fix_source("a = 1;\n", "a.js", OPTIONS, rule=FormatRule(toy_bridge))
        assert not outcome.fixed
        assert outcome.passes == 0

    def test_parse_error_left_in_remaining(self, make_bridge):
        def fn(text, options):
            raise FormatSyntaxError("Unexpected token (1:3)", loc=Location(1, 3))

        outcome = fix_source("a (", "a.js", OPTIONS, rule=FormatRule(make_bridge(fn)))

        assert outcome.output == "a ("
        assert outcome.passes == 0
        assert [d.message for d in outcome.remaining] == ["Parsing error: Unexpected token"]

    def test_unstable_formatter_stops_at_max_passes(self, make_bridge):
        rule = FormatRule(make_bridge(lambda text, options: text + "x"))
        outcome = fix_source("a", "a.js", OPTIONS, rule=rule, max_passes=3)

        assert outcome.passes == 3
        assert outcome.output == "axxx"
        assert len(outcome.remaining) == 1
