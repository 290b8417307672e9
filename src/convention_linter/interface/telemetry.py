"""Project telemetry: rich console output mirrored to the logging module."""

import logging
import sys

from rich.console import Console
from rich.markup import escape

from convention_linter.domain.protocols import TelemetryPort


class ProjectTelemetry(TelemetryPort):
    """Status messages for the CLI. Writes to stderr so stdout carries only the report."""

    def __init__(self, project_name: str, color: str, welcome: str) -> None:
        self.project_name = project_name
        self.color = color
        self.welcome = welcome
        self.console = Console(file=sys.stderr, highlight=False)
        self.logger = logging.getLogger(f"convention_linter.{project_name.lower()}")

    def handshake(self) -> None:
        self.console.print(f"[bold {self.color}]{escape(f'[{self.project_name}]')}[/] {escape(self.welcome)}")
        self.logger.info("%s: %s", self.project_name, self.welcome)

    def step(self, message: str) -> None:
        self.console.print(f"[{self.color}]>[/] {escape(message)}")
        self.logger.info(message)

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]error:[/] {escape(message)}")
        self.logger.error(message)

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]warning:[/] {escape(message)}")
        self.logger.warning(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)
