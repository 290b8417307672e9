"""CLI entry points for the Convention Linter - Thin Controller using Typer."""

import contextlib
import signal
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from convention_linter.domain.config import OUTPUT_FORMATS, ConfigurationLoader
from convention_linter.domain.errors import (
    AnalysisCancelled,
    ConfigurationError,
    ParseError,
)
from convention_linter.domain.protocols import (
    GuidanceServiceProtocol,
    SourceUnitGatewayProtocol,
    TelemetryPort,
)
from convention_linter.domain.registry import RuleRegistry
from convention_linter.infrastructure.reporters import ReporterFactory, TableReporter
from convention_linter.use_cases.check_conventions import CheckConventionsUseCase

EXIT_FATAL = 2
EXIT_CANCELLED = 130

# B008: avoid function call in default; use module-level singletons for Typer params
_CHECK_PATHS = typer.Argument(None, help="Source unit files or directories (default: current directory)")
_DISABLE = typer.Option(None, "--disable", "-d", help="Rule id to disable (repeatable)")


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    source_gateway: SourceUnitGatewayProtocol
    guidance_service: GuidanceServiceProtocol
    registry_factory: Callable[[ConfigurationLoader], RuleRegistry]


class CLIAppFactory:
    """Creates the Typer app. No top-level functions."""

    @staticmethod
    def resolve_target_paths(paths: list[Path] | None) -> list[str]:
        """Explicit paths as given, else the current directory (public API)."""
        if paths:
            return [str(p) for p in paths]
        return ["."]

    @staticmethod
    @contextlib.contextmanager
    def interrupt_cancels(cancel_event: threading.Event) -> Iterator[None]:
        """While active, Ctrl-C sets cancel_event instead of raising KeyboardInterrupt."""
        if threading.current_thread() is not threading.main_thread():
            yield
            return
        previous = signal.getsignal(signal.SIGINT)
        signal.signal(signal.SIGINT, lambda _signum, _frame: cancel_event.set())
        try:
            yield
        finally:
            signal.signal(signal.SIGINT, previous)

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="convention-lint",
            help="Convention Linter: enforce coding conventions over an abstract symbol model.",
            add_completion=False,
        )

        @app.command()
        def check(
            paths: list[Path] | None = _CHECK_PATHS,
            output_format: str | None = typer.Option(
                None, "--format", "-f", help="Output format: text, json or table"),
            view: str = typer.Option(
                "by_violation", help="Table view: by_violation (default) or by_file"),
            workers: int | None = typer.Option(
                None, "--workers", "-w", min=1, help="Parallel workers for independent source units"),
            disable: list[str] | None = _DISABLE,
        ) -> None:
            """Analyze source units and report convention violations. Exit 1 if any error is found."""
            if output_format is not None and output_format not in OUTPUT_FORMATS:
                deps.telemetry.error(
                    f"Unknown format '{output_format}' (expected one of: {', '.join(OUTPUT_FORMATS)})")
                raise typer.Exit(code=EXIT_FATAL)
            if view not in TableReporter.VIEWS:
                deps.telemetry.error(
                    f"Unknown view '{view}' (expected one of: {', '.join(TableReporter.VIEWS)})")
                raise typer.Exit(code=EXIT_FATAL)

            config = deps.config_loader.with_overrides(
                disable=disable, workers=workers, output_format=output_format)
            deps.telemetry.handshake()
            cancel_event = threading.Event()
            try:
                registry = deps.registry_factory(config)
                use_case = CheckConventionsUseCase(
                    source_gateway=deps.source_gateway,
                    registry=registry,
                    telemetry=deps.telemetry,
                    config_loader=config,
                )
                with CLIAppFactory.interrupt_cancels(cancel_event):
                    report = use_case.execute(
                        CLIAppFactory.resolve_target_paths(paths), cancel_event)
            except (ParseError, ConfigurationError) as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=EXIT_FATAL) from exc
            except AnalysisCancelled as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=EXIT_CANCELLED) from exc

            renderer = ReporterFactory.create(config.output_format, view=view)
            typer.echo(renderer.format(report), nl=False)
            raise typer.Exit(code=report.exit_code())

        @app.command()
        def rules() -> None:
            """List the rules with severity and enabled state (after configuration)."""
            try:
                registry = deps.registry_factory(deps.config_loader)
            except ConfigurationError as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=EXIT_FATAL) from exc
            all_rules = registry.all_rules()
            table = Table(title="Convention Rules", header_style="bold #007BFF")
            # rule ids are never wrapped or truncated
            table.add_column(
                "Rule ID",
                style="#C41E3A",
                no_wrap=True,
                min_width=max((len(rule.rule_id) for rule in all_rules), default=7),
            )
            table.add_column("Severity")
            table.add_column("Enabled")
            table.add_column("Applies To")
            table.add_column("Description")
            for rule in all_rules:
                table.add_row(
                    rule.rule_id,
                    rule.severity.value,
                    "yes" if registry.is_enabled(rule.rule_id) else "no",
                    ", ".join(sorted(k.label for k in rule.kinds)),
                    rule.description,
                )
            Console().print(table)

        @app.command()
        def explain(
            rule_id: str = typer.Argument(..., help="Rule id, e.g. explicit-enum-values"),
        ) -> None:
            """Show rationale, examples and manual fix instructions for one rule."""
            entry = deps.guidance_service.get_entry(rule_id)
            if entry is None:
                deps.telemetry.error(f"No guidance for rule '{rule_id}'.")
                raise typer.Exit(code=EXIT_FATAL)
            typer.echo(f"{rule_id}: {entry.get('display_name', rule_id)}")
            if entry.get("short_description"):
                typer.echo(f"  {entry['short_description']}")
            if entry.get("rationale"):
                typer.echo("\nWhy:\n  " + str(entry["rationale"]).strip())
            if entry.get("non_compliant"):
                typer.echo("\nNon-compliant:\n  " + str(entry["non_compliant"]).strip())
            if entry.get("compliant"):
                typer.echo("\nCompliant:\n  " + str(entry["compliant"]).strip())
            typer.echo("\nHow to fix:\n  " + deps.guidance_service.get_manual_instructions(rule_id))

        return app
