"""Use Case: Check Conventions - load source units from paths and analyze them."""

import threading
from typing import TYPE_CHECKING

from convention_linter.domain.protocols import SourceUnitGatewayProtocol, TelemetryPort
from convention_linter.domain.report import Report
from convention_linter.use_cases.analyze import Analyzer
from convention_linter.use_cases.analyze_units import AnalyzeUnitsUseCase
from convention_linter.use_cases.build_symbols import SymbolModelBuilder

if TYPE_CHECKING:
    from convention_linter.domain.config import ConfigurationLoader
    from convention_linter.domain.registry import RuleRegistry


class CheckConventionsUseCase:
    """Orchestrate discovery, loading and analysis of source unit files."""

    def __init__(
        self,
        source_gateway: SourceUnitGatewayProtocol,
        registry: "RuleRegistry",
        telemetry: TelemetryPort,
        config_loader: "ConfigurationLoader",
    ) -> None:
        self.source_gateway = source_gateway
        self.registry = registry
        self.telemetry = telemetry
        self.config_loader = config_loader

    def execute(
        self, paths: list[str], cancel_event: threading.Event | None = None
    ) -> Report:
        """
        Check every source unit found under paths.

        Args:
            paths: Files or directories holding JSON / YAML source units.
            cancel_event: Optional event; setting it cancels the run.

        Returns:
            The merged Report.

        Raises:
            ParseError: unreadable or malformed input (before any analysis).
            AnalysisCancelled: the run was cancelled.
        """
        self.telemetry.step(f"Loading source units from: {', '.join(paths)}")
        units = self.source_gateway.load_all(paths, self.config_loader.exclude)
        active = sum(1 for r in self.registry.all_rules() if self.registry.is_enabled(r.rule_id))
        self.telemetry.step(f"{len(units)} source unit(s), {active} active rule(s).")
        use_case = AnalyzeUnitsUseCase(
            builder=SymbolModelBuilder(),
            analyzer=Analyzer(self.registry),
            telemetry=self.telemetry,
            workers=self.config_loader.workers,
        )
        return use_case.execute(units, cancel_event)
