"""Use Case: Analyze Units - fan source units out to workers and merge their partial reports."""

import threading
from collections.abc import Mapping, Sequence
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait

from convention_linter.domain.errors import AnalysisCancelled
from convention_linter.domain.protocols import TelemetryPort
from convention_linter.domain.report import Report
from convention_linter.domain.symbols import Node
from convention_linter.use_cases.analyze import Analyzer
from convention_linter.use_cases.build_symbols import SymbolModelBuilder


class AnalyzeUnitsUseCase:
    """Parse every unit into one tree, analyze each unit subtree independently, merge the partial reports."""

    def __init__(
        self,
        builder: SymbolModelBuilder,
        analyzer: Analyzer,
        telemetry: TelemetryPort,
        workers: int = 1,
    ) -> None:
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.builder = builder
        self.analyzer = analyzer
        self.telemetry = telemetry
        self.workers = workers

    def execute(
        self,
        source_units: Sequence[Mapping[str, object]],
        cancel_event: threading.Event | None = None,
    ) -> Report:
        """
        Run the analysis.

        All units are parsed into one tree before any analysis starts, so a
        ParseError aborts the run with no report. Each unit subtree is one task;
        the tree is only read while tasks run, so rules that look across units
        see the same tree in every worker. Partial reports are merged with
        Report.merge, which makes the result independent of worker scheduling.

        Raises:
            ParseError: a unit is malformed.
            AnalysisCancelled: cancel_event was set; partial results are dropped.
        """
        self.telemetry.step(f"Building symbol model for {len(source_units)} source unit(s)...")
        root = self.builder.build(source_units)
        trees = list(root.children)
        if not trees:
            return Report.empty()

        try:
            if self.workers == 1 or len(trees) == 1:
                self.telemetry.step("Analyzing serially...")
                partials = [self.analyzer.analyze(tree, cancel_event) for tree in trees]
            else:
                workers = min(self.workers, len(trees))
                self.telemetry.step(f"Analyzing with {workers} workers...")
                partials = self._analyze_parallel(trees, workers, cancel_event)
        except AnalysisCancelled:
            self.telemetry.warning("Analysis cancelled; partial results discarded.")
            raise

        report = Report.merge(*partials)
        summary = report.summary()
        self.telemetry.step(
            f"Analysis complete: {summary.error} error(s), {summary.warning} warning(s), "
            f"{summary.info} info."
        )
        return report

    def _analyze_parallel(
        self,
        trees: list[Node],
        workers: int,
        cancel_event: threading.Event | None,
    ) -> list[Report]:
        """Fan out one task per unit subtree; stop everything on the first failure."""
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="convention-lint") as pool:
            futures: list[Future[Report]] = [
                pool.submit(self.analyzer.analyze, tree, cancel_event) for tree in trees
            ]
            _, pending = wait(futures, return_when=FIRST_EXCEPTION)
            if any(f.done() and f.exception() is not None for f in futures):
                for future in pending:
                    future.cancel()
                wait(futures)
                # first failure in submission order
                failed = [f for f in futures if not f.cancelled() and f.exception() is not None]
                raise failed[0].exception()  # type: ignore[misc]
            return [future.result() for future in futures]
