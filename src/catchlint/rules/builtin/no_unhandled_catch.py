"""Rule: disallow unused errors in try-catch statements.

Reports every ``catch (err)`` binding that is never meaningfully read, and
every ``catch {}`` that omits the binding altogether.

Valid::

    try {} catch (err) { console.error(err); }
    try {} catch (err) { throw err; }
    try {} catch (err) { err = wrap(function () { log(err); }); }

Invalid::

    try {} catch (err) {}
    try {} catch (err) { err++; }
    try {} catch (err) { err = err.toString(); }
    try {} catch {}
"""

from __future__ import annotations

import logging

from catchlint.analysis.collector import collect_unhandled_errors
from catchlint.analysis.reporter import (
    NO_OPTIONAL_CATCH_BINDING,
    UNHANDLED_ERROR,
    report_missing_bindings,
    report_unhandled,
)
from catchlint.config import RuleOptions
from catchlint.models.results import Diagnostic, Severity
from catchlint.models.scope import Scope
from catchlint.rules import PLUGIN_PREFIX
from catchlint.rules.protocol import RuleMeta

logger = logging.getLogger(__name__)

META = RuleMeta(
    type="problem",
    description="disallow unused errors in try-catch statements",
    category="Variables",
    url="https://github.com/wix-incubator/eslint-plugin-detox/blob/main/README.md",
    schema=[
        {
            "oneOf": [
                {
                    "type": "object",
                    "properties": {
                        "ignorePattern": {"type": "string"},
                    },
                    "additionalProperties": False,
                }
            ]
        }
    ],
    messages={
        UNHANDLED_ERROR: "'{{errorName}}' error is caught but never handled{{additional}}.",
        NO_OPTIONAL_CATCH_BINDING: (
            "Optional catch binding is disallowed, please handle the caught error."
        ),
    },
)


class NoUnhandledCatchRule:
    """Report catch bindings that are never handled."""

    @property
    def name(self) -> str:
        return "no-unhandled-catch"

    @property
    def rule_id(self) -> str:
        return f"{PLUGIN_PREFIX}/{self.name}"

    @property
    def meta(self) -> RuleMeta:
        return META

    def check(
        self,
        global_scope: Scope,
        options: RuleOptions,
        severity: Severity = Severity.ERROR,
    ) -> list[Diagnostic]:
        if severity is Severity.OFF:
            return []

        unhandled = collect_unhandled_errors(global_scope, options)
        logger.debug("Found %d unhandled catch binding(s)", len(unhandled))

        diagnostics = report_unhandled(unhandled, options, META, self.rule_id, severity)
        diagnostics.extend(
            report_missing_bindings(global_scope.block, META, self.rule_id, severity)
        )
        return diagnostics


def create_rule() -> NoUnhandledCatchRule:
    return NoUnhandledCatchRule()
