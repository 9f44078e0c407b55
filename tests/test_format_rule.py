"""Tests for FormatRule — the host-facing check() contract."""

from __future__ import annotations

import jsonschema
import pytest

from format_bridge.contracts.load import validate_instance
from format_bridge.errors import FormatSyntaxError
from format_bridge.model import MessageId
from format_bridge.model.diagnostic import Edit, Location
from format_bridge.rule import FormatRule
from format_bridge.rules import FMT_PARSE_ERROR_001

CODE_FRAME = "> 1 | const x = (\n    |             ^"


@pytest.fixture
def rule(toy_bridge):
    return FormatRule(bridge=toy_bridge)


class TestMeta:

    def test_protocol(self, rule):
        assert rule.id == "format"
        assert rule.version == "1.0.0"
        assert callable(rule.check)

    def test_layout_and_fixable(self):
        assert FormatRule.meta["type"] == "layout"
        assert FormatRule.meta["fixable"] == "whitespace"

    def test_every_message_id_has_a_template(self):
        assert set(FormatRule.meta["messages"]) == {m.value for m in MessageId}

    def test_schema_requires_parser(self, rule):
        assert rule.schema["required"] == ["parser"]
        assert rule.schema["additionalProperties"] is True


class TestCheck:

    def test_reports_unformatted_code(self, rule):
        diagnostics = rule.check("const x=1", "a.js", {"parser": "babel"})

        assert len(diagnostics) == 1
        assert diagnostics[0].fix == (Edit(0, 9, "const x = 1;\n"),)

    def test_formatted_code_is_clean(self, rule):
        assert rule.check("const x = 1;\n", "a.js", {"parser": "babel"}) == []

    def test_minimal_policy(self, rule):
        diagnostics = rule.check(
            "const x=1\n", "a.js", {"parser": "babel", "diffPolicy": "minimal"}
        )
        assert len(diagnostics) > 1
        assert all(d.message_id is MessageId.INSERT for d in diagnostics)

    def test_options_forwarded_verbatim(self, make_bridge):
        seen = []

        def fn(text, options):
            seen.append(options)
            return text

        rule = FormatRule(bridge=make_bridge(fn))
        rule.check(
            "a",
            "src/a.vue",
            {"parser": "vue", "semi": False, "printWidth": 100, "diffPolicy": "minimal"},
        )

        assert seen == [
            {"filepath": "src/a.vue", "parser": "vue", "semi": False, "printWidth": 100}
        ]

    def test_diagnostics_match_schema(self, rule):
        for d in rule.check("a=1\nb=2", "a.js", {"parser": "babel", "diffPolicy": "minimal"}):
            validate_instance(d.to_dict(), "diagnostic.schema.json")


class TestOptionsValidation:

    def test_missing_parser(self, rule):
        with pytest.raises(jsonschema.ValidationError, match="parser"):
            rule.check("a", "a.js", {})

    def test_none_options(self, rule):
        with pytest.raises(jsonschema.ValidationError):
            rule.check("a", "a.js", None)

    def test_parser_must_be_string(self, rule):
        with pytest.raises(jsonschema.ValidationError):
            rule.check("a", "a.js", {"parser": 3})

    def test_unknown_policy(self, rule):
        with pytest.raises(jsonschema.ValidationError):
            rule.check("a", "a.js", {"parser": "babel", "diffPolicy": "tokens"})


class TestFaults:

    def test_parsing_error_diagnostic(self, make_bridge):
        def fn(text, options):
            raise FormatSyntaxError(
                f"Unexpected token (1:13)\n{CODE_FRAME}",
                loc=Location(1, 13),
                code_frame=CODE_FRAME,
            )

        rule = FormatRule(bridge=make_bridge(fn))
        diagnostics = rule.check("const x = (", "a.js", {"parser": "babel"})

        assert len(diagnostics) == 1
        d = diagnostics[0]
        assert d.message == "Parsing error: Unexpected token"
        assert d.location == Location(1, 13)
        assert d.fix is None
        assert d.rule_id == FMT_PARSE_ERROR_001
        validate_instance(d.to_dict(), "diagnostic.schema.json")

    def test_engine_failure_propagates(self, make_bridge):
        def fn(text, options):
            raise RuntimeError("plugin crashed")

        rule = FormatRule(bridge=make_bridge(fn))
        with pytest.raises(RuntimeError, match="plugin crashed"):
            rule.check("a", "a.js", {"parser": "babel"})

    def test_builtin_syntax_error_is_not_an_input_fault(self, make_bridge):
        def fn(text, options):
            raise SyntaxError("raised by engine internals")

        rule = FormatRule(bridge=make_bridge(fn))
        with pytest.raises(SyntaxError):
            rule.check("a", "a.js", {"parser": "babel"})
