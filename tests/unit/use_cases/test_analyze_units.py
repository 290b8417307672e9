"""Unit tests for AnalyzeUnitsUseCase (serial and parallel fan-out)."""

import threading
from unittest.mock import Mock

import pytest

from convention_linter.domain.errors import AnalysisCancelled, ParseError
from convention_linter.domain.registry import RuleRegistry
from convention_linter.domain.report import Report
from convention_linter.domain.rules import Rule
from convention_linter.domain.rules.catalog import BuiltinRules
from convention_linter.domain.symbols import Node, NodeKind
from convention_linter.use_cases.analyze import Analyzer
from convention_linter.use_cases.analyze_units import AnalyzeUnitsUseCase
from convention_linter.use_cases.build_symbols import SymbolModelBuilder


def _unit(index: int) -> dict[str, object]:
    """A unit with a few deliberate violations, distinct per index."""
    return {
        "file": f"src/Module{index:02d}.cs",
        "declarations": [
            {
                "kind": "class",
                "name": f"service{index}",
                "line": 1,
                "members": [
                    {"kind": "field", "name": "Cache", "modifiers": ["private"], "line": 2},
                    {
                        "kind": "method",
                        "name": "Run",
                        "line": 4,
                        "members": [{"kind": "parameter", "name": "Input", "line": 4}],
                    },
                ],
            },
            {
                "kind": "enum",
                "name": "Mode",
                "line": 10,
                "members": [{"kind": "enum_member", "name": f"Value{index}", "line": 11}],
            },
        ],
    }


def _use_case(registry: RuleRegistry, workers: int = 1) -> AnalyzeUnitsUseCase:
    return AnalyzeUnitsUseCase(
        builder=SymbolModelBuilder(),
        analyzer=Analyzer(registry),
        telemetry=Mock(),
        workers=workers,
    )


class TestAnalyzeUnitsUseCase:
    """Test parsing, fan-out and merging."""

    def test_rejects_zero_workers(self, builtin_registry: RuleRegistry) -> None:
        with pytest.raises(ValueError):
            _use_case(builtin_registry, workers=0)

    def test_no_units_gives_empty_report(self, builtin_registry: RuleRegistry) -> None:
        assert _use_case(builtin_registry).execute([]) == Report.empty()

    def test_serial_report_covers_every_unit(self, builtin_registry: RuleRegistry) -> None:
        units = [_unit(i) for i in range(3)]
        report = _use_case(builtin_registry).execute(units)
        assert set(report.by_location()) == {"src/Module00.cs", "src/Module01.cs", "src/Module02.cs"}
        # Per unit: class name, field name, parameter name, enum member value.
        assert len(report) == 12

    def test_parallel_equals_serial(self, builtin_registry: RuleRegistry) -> None:
        """Any worker count gives the same report as a serial run."""
        units = [_unit(i) for i in range(12)]
        serial = _use_case(builtin_registry, workers=1).execute(units)
        for workers in (2, 4, 16):
            assert _use_case(builtin_registry, workers=workers).execute(units) == serial

    def test_partial_declarations_across_units(self, builtin_registry: RuleRegistry) -> None:
        """A type split over several files is flagged the same way for any worker count."""
        units = [
            {
                "file": f"Order.Part{i}.cs",
                "declarations": [{"kind": "class", "name": "Order", "modifiers": ["public", "partial"], "line": 3}],
            }
            for i in range(3)
        ]
        serial = _use_case(builtin_registry).execute(units)
        flagged = serial.for_rule("no-partial-declarations")
        assert [v.location.file for v in flagged] == ["Order.Part1.cs", "Order.Part2.cs"]
        assert all("Order.Part0.cs:3" in v.message for v in flagged)
        for workers in (2, 3):
            assert _use_case(builtin_registry, workers=workers).execute(units) == serial

    def test_parse_error_aborts_before_analysis(self) -> None:
        analyzer = Mock()
        use_case = AnalyzeUnitsUseCase(
            builder=SymbolModelBuilder(), analyzer=analyzer, telemetry=Mock(), workers=2
        )
        with pytest.raises(ParseError):
            use_case.execute([_unit(0), {"file": "Broken.cs", "declarations": [{"kind": "nope", "name": "X"}]}])
        analyzer.analyze.assert_not_called()

    def test_telemetry_reports_summary(self, builtin_registry: RuleRegistry) -> None:
        use_case = _use_case(builtin_registry)
        use_case.execute([_unit(0)])
        messages = [c.args[0] for c in use_case.telemetry.step.call_args_list]
        assert any("Analysis complete" in m for m in messages)


class TestAnalyzeUnitsCancellation:
    def test_cancelled_serial_run_raises(self, builtin_registry: RuleRegistry) -> None:
        cancel = threading.Event()
        cancel.set()
        use_case = _use_case(builtin_registry)
        with pytest.raises(AnalysisCancelled):
            use_case.execute([_unit(0), _unit(1)], cancel)
        use_case.telemetry.warning.assert_called_once_with("Analysis cancelled; partial results discarded.")

    def test_cancelled_parallel_run_raises(self, builtin_registry: RuleRegistry) -> None:
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(AnalysisCancelled):
            _use_case(builtin_registry, workers=4).execute([_unit(i) for i in range(8)], cancel)

    def test_rule_crash_in_worker_does_not_stop_other_units(self) -> None:
        def explode_on_unit_three(node: Node) -> bool:
            if node.location.file == "src/Module03.cs":
                raise KeyError("boom")
            return False

        flaky = Rule(
            rule_id="flaky",
            description="Crashes on one unit.",
            kinds=frozenset({NodeKind.CLASS}),
            predicate=explode_on_unit_three,
            message_template="{name}",
        )
        registry = RuleRegistry.configured([flaky, *BuiltinRules.all()])
        report = _use_case(registry, workers=4).execute([_unit(i) for i in range(6)])
        crashed = report.for_rule("flaky")
        assert len(crashed) == 1
        assert crashed[0].location.file == "src/Module03.cs"
        assert len(report.for_rule("explicit-enum-values")) == 6


class TestAnalyzeUnitsFailures:
    def test_first_failure_in_unit_order_is_raised(self) -> None:
        def analyze(tree: Node, cancel_event: threading.Event | None) -> Report:
            if tree.name in ("src/Module02.cs", "src/Module05.cs"):
                raise RuntimeError(tree.name)
            return Report.empty()

        analyzer = Mock()
        analyzer.analyze.side_effect = analyze
        use_case = AnalyzeUnitsUseCase(
            builder=SymbolModelBuilder(), analyzer=analyzer, telemetry=Mock(), workers=4
        )
        for _ in range(5):
            with pytest.raises(RuntimeError, match="src/Module02.cs"):
                use_case.execute([_unit(i) for i in range(6)])
