"""Tests for the rule registry, rule metadata and message templates."""

import pytest

from catchlint.config import RuleOptions
from catchlint.messages import format_message
from catchlint.models.results import DiagnosticKind, Severity
from catchlint.rules import CONFIGS, RuleRegistry, get_registry, reset_registry
from catchlint.rules.builtin.no_unhandled_catch import META, NoUnhandledCatchRule
from catchlint.rules.protocol import Rule
from jsast import analyze_js, try_catch


@pytest.fixture(autouse=True)
def fresh_registry():
    reset_registry()
    yield
    reset_registry()


class TestRuleRegistry:
    """Tests for RuleRegistry class."""

    def test_register_and_get(self):
        """Should register and retrieve a rule by name."""
        registry = RuleRegistry()
        rule = NoUnhandledCatchRule()
        registry.register(rule)

        assert registry.get("no-unhandled-catch") is rule
        assert registry.get("catchlint/no-unhandled-catch") is rule
        assert registry.get("nonexistent") is None

    def test_all_rules_and_names(self):
        registry = RuleRegistry()

        class MockRule:
            @property
            def name(self) -> str:
                return "mock-rule"

        registry.register(NoUnhandledCatchRule())
        registry.register(MockRule())

        assert registry.names() == ["mock-rule", "no-unhandled-catch"]
        assert len(list(registry.all_rules())) == 2

    def test_builtin_discovery(self):
        """The global registry discovers builtin rules."""
        registry = get_registry()
        rule = registry.get("no-unhandled-catch")

        assert isinstance(rule, NoUnhandledCatchRule)
        assert isinstance(rule, Rule)

    def test_get_registry_is_cached(self):
        assert get_registry() is get_registry()

    def test_all_preset_enables_rule(self):
        assert CONFIGS["all"]["rules"] == {"catchlint/no-unhandled-catch": "error"}


class TestRuleMeta:
    """Tests for the rule's static metadata."""

    def test_meta(self):
        rule = NoUnhandledCatchRule()
        assert rule.meta is META
        assert rule.rule_id == "catchlint/no-unhandled-catch"
        assert META.type == "problem"
        assert META.description == "disallow unused errors in try-catch statements"

    def test_schema_allows_only_ignore_pattern(self):
        (option,) = META.schema[0]["oneOf"]
        assert set(option["properties"]) == {"ignorePattern"}
        assert option["additionalProperties"] is False

    def test_to_dict(self):
        data = META.to_dict()
        assert data["docs"]["category"] == "Variables"
        assert set(data["messages"]) == {"unhandledError", "noOptionalCatchBindingError"}


class TestRuleCheck:
    """Tests for NoUnhandledCatchRule.check."""

    def test_messages(self):
        _, scope = analyze_js(try_catch("err"), try_catch(None))
        diagnostics = NoUnhandledCatchRule().check(scope, RuleOptions())

        assert [d.kind for d in diagnostics] == [
            DiagnosticKind.UNHANDLED_BINDING,
            DiagnosticKind.MISSING_CATCH_BINDING,
        ]
        assert diagnostics[0].message == "'err' error is caught but never handled."
        assert diagnostics[1].message == (
            "Optional catch binding is disallowed, please handle the caught error."
        )
        assert diagnostics[1].node.type == "CatchClause"

    def test_message_with_pattern_suffix(self):
        options = RuleOptions.from_options({"ignorePattern": "^ignore"})
        _, scope = analyze_js(try_catch("ignoreErr"), try_catch("err"))
        (diagnostic,) = NoUnhandledCatchRule().check(scope, options)

        assert diagnostic.message == (
            "'err' error is caught but never handled. "
            "Allowed unhandled exceptions must match regexp: /^ignore/u."
        )
        assert diagnostic.suffix == ". Allowed unhandled exceptions must match regexp: /^ignore/u"

    def test_both_bindings_reported_with_suffix(self):
        options = RuleOptions.from_options({"ignorePattern": "^ignore"})
        _, scope = analyze_js(try_catch("error"), try_catch("err"))
        diagnostics = NoUnhandledCatchRule().check(scope, options)

        assert [d.name for d in diagnostics] == ["error", "err"]
        assert all(d.suffix for d in diagnostics)

    def test_missing_binding_ignores_pattern(self):
        """`catch {}` is reported whatever the ignore pattern says."""
        options = RuleOptions.from_options({"ignorePattern": ".*"})
        _, scope = analyze_js(try_catch(None))
        (diagnostic,) = NoUnhandledCatchRule().check(scope, options)

        assert diagnostic.kind is DiagnosticKind.MISSING_CATCH_BINDING

    def test_severity_is_stamped(self):
        _, scope = analyze_js(try_catch("err"))
        (diagnostic,) = NoUnhandledCatchRule().check(scope, RuleOptions(), Severity.WARN)
        assert diagnostic.severity is Severity.WARN

    def test_off_reports_nothing(self):
        _, scope = analyze_js(try_catch("err"), try_catch(None))
        assert NoUnhandledCatchRule().check(scope, RuleOptions(), Severity.OFF) == []


class TestFormatMessage:
    """Tests for message template interpolation."""

    def test_replaces_placeholders(self):
        assert format_message("'{{errorName}}' x{{ additional }}.", {
            "errorName": "err",
            "additional": "!",
        }) == "'err' x!."

    def test_unknown_placeholder_left_intact(self):
        assert format_message("{{missing}} {{name}}", {"name": "a"}) == "{{missing}} a"

    def test_no_data(self):
        assert format_message("plain {{x}}") == "plain {{x}}"
