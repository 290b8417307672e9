"""Unit tests for CheckConventionsUseCase."""

from unittest.mock import Mock

import pytest

from convention_linter.domain.config import ConfigurationLoader
from convention_linter.domain.errors import ParseError
from convention_linter.domain.registry import RuleRegistry
from convention_linter.use_cases.check_conventions import CheckConventionsUseCase


class TestCheckConventionsUseCase:
    """Test orchestration of loading and analysis."""

    def test_execute_loads_units_and_analyzes(self, builtin_registry: RuleRegistry) -> None:
        """Units returned by the gateway are analyzed with the configured registry."""
        # Setup
        gateway = Mock()
        gateway.load_all.return_value = [
            {
                "file": "Status.cs",
                "declarations": [
                    {
                        "kind": "enum",
                        "name": "Status",
                        "line": 1,
                        "members": [{"kind": "enum_member", "name": "Open", "line": 2}],
                    }
                ],
            }
        ]
        config = ConfigurationLoader({"exclude": ["bin/"], "workers": 2})
        telemetry = Mock()
        use_case = CheckConventionsUseCase(gateway, builtin_registry, telemetry, config)

        # Execute
        report = use_case.execute(["contracts"])

        # Assert
        gateway.load_all.assert_called_once_with(["contracts"], ("bin/",))
        assert [v.rule_id for v in report] == ["explicit-enum-values"]
        assert report.exit_code() == 1
        telemetry.step.assert_any_call("1 source unit(s), 10 active rule(s).")

    def test_disabled_rules_are_not_counted(self) -> None:
        from convention_linter.domain.rules.catalog import BuiltinRules

        registry = RuleRegistry.configured(BuiltinRules.all(), disabled=["pascal-case-names"])
        gateway = Mock()
        gateway.load_all.return_value = []
        telemetry = Mock()
        report = CheckConventionsUseCase(gateway, registry, telemetry, ConfigurationLoader({})).execute(["."])
        assert len(report) == 0
        telemetry.step.assert_any_call("0 source unit(s), 9 active rule(s).")

    def test_parse_error_propagates(self, builtin_registry: RuleRegistry) -> None:
        gateway = Mock()
        gateway.load_all.side_effect = ParseError("invalid JSON", file="broken.json")
        use_case = CheckConventionsUseCase(gateway, builtin_registry, Mock(), ConfigurationLoader({}))
        with pytest.raises(ParseError, match="broken.json"):
            use_case.execute(["."])
