"""Unit tests for no-null-comparison-on-optional."""

import pytest

from convention_linter.domain.registry import RuleRegistry
from convention_linter.domain.report import Report
from convention_linter.domain.rules import Severity
from convention_linter.domain.rules.null_checks import NullComparisonOnOptionalRule
from convention_linter.use_cases.analyze import Analyzer
from convention_linter.use_cases.build_symbols import SymbolModelBuilder


def _analyze_method(field_type: str, *comparisons: dict[str, object]) -> Report:
    unit = {
        "file": "Notifier.cs",
        "declarations": [
            {
                "kind": "class",
                "name": "Notifier",
                "line": 1,
                "members": [
                    {"kind": "field", "name": "_logger", "type": field_type, "line": 2},
                    {
                        "kind": "method",
                        "name": "Notify",
                        "line": 5,
                        "statements": [{"op": "compare", **c} for c in comparisons],
                    },
                ],
            }
        ],
    }
    root = SymbolModelBuilder().build([unit])
    registry = RuleRegistry.configured([NullComparisonOnOptionalRule.build()])
    return Analyzer(registry).analyze(root)


class TestNullComparisonOnOptionalRule:
    @pytest.mark.parametrize("operator", ["==", "!="])
    def test_equality_against_null_on_optional_field_is_flagged(self, operator: str) -> None:
        report = _analyze_method("ILogger?", {"left": "_logger", "operator": operator, "right": None, "line": 6})
        assert len(report) == 1
        violation = report.violations[0]
        assert violation.rule_id == "no-null-comparison-on-optional"
        assert violation.severity is Severity.WARNING
        assert violation.location.line == 5
        assert f"'{operator}'" in violation.message
        assert "line 6" in violation.message

    def test_null_on_the_left_is_flagged(self) -> None:
        report = _analyze_method(
            "Optional<ILogger>", {"left": "null", "operator": "==", "right": "this._logger", "line": 7}
        )
        assert len(report) == 1

    def test_non_optional_field_is_ignored(self) -> None:
        report = _analyze_method("ILogger", {"left": "_logger", "operator": "==", "right": None, "line": 6})
        assert len(report) == 0

    @pytest.mark.parametrize("operator", ["is", "is not", "<", ">="])
    def test_non_equality_operator_is_ignored(self, operator: str) -> None:
        report = _analyze_method("ILogger?", {"left": "_logger", "operator": operator, "right": None, "line": 6})
        assert len(report) == 0

    def test_comparison_between_two_values_is_ignored(self) -> None:
        report = _analyze_method("ILogger?", {"left": "_logger", "operator": "==", "right": "other", "line": 6})
        assert len(report) == 0

    def test_several_offences_give_one_violation(self) -> None:
        report = _analyze_method(
            "ILogger?",
            {"left": "_logger", "operator": "==", "right": None, "line": 6},
            {"left": "_logger", "operator": "!=", "right": None, "line": 9},
        )
        assert len(report) == 1
        assert "line 6" in report.violations[0].message
