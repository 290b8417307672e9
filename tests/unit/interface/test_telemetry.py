"""Unit tests for ProjectTelemetry."""
import io
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from convention_linter.interface.telemetry import ProjectTelemetry


def _rendered(tel: ProjectTelemetry) -> io.StringIO:
    buffer = io.StringIO()
    tel.console = Console(file=buffer, width=120, color_system=None, highlight=False)
    tel.logger = MagicMock()
    return buffer


@pytest.mark.parametrize("project_name", ["Test", "scan", "CONVENTION"])
def test_handshake_prints_banner(project_name):
    tel = ProjectTelemetry(project_name, "blue", "Hello [world]")
    buffer = _rendered(tel)
    tel.handshake()
    assert buffer.getvalue() == f"[{project_name}] Hello [world]\n"
    tel.logger.info.assert_called_once_with("%s: %s", project_name, "Hello [world]")


def test_step_prints_and_logs():
    tel = ProjectTelemetry("Test", "blue", "Hello")
    tel.console = MagicMock()
    tel.logger = MagicMock()
    tel.step("Done")
    tel.console.print.assert_called_once()
    tel.logger.info.assert_called_once_with("Done")


def test_step_escapes_markup():
    tel = ProjectTelemetry("Test", "blue", "Hello")
    buffer = _rendered(tel)
    tel.step("Loading [bold]x")
    assert buffer.getvalue() == "> Loading [bold]x\n"
    tel.logger.info.assert_called_once_with("Loading [bold]x")


def test_error_prints_and_logs():
    tel = ProjectTelemetry("Test", "blue", "Hello")
    tel.console = MagicMock()
    tel.logger = MagicMock()
    tel.error("Failed")
    tel.console.print.assert_called_once()
    tel.logger.error.assert_called_once_with("Failed")


def test_warning_prints_and_logs():
    tel = ProjectTelemetry("Test", "blue", "Hello")
    tel.console = MagicMock()
    tel.logger = MagicMock()
    tel.warning("Careful")
    tel.logger.warning.assert_called_once_with("Careful")


def test_debug_logs_only():
    tel = ProjectTelemetry("Test", "blue", "Hello")
    tel.console = MagicMock()
    tel.logger = MagicMock()
    tel.debug("Detail")
    tel.logger.debug.assert_called_once_with("Detail")
    tel.console.print.assert_not_called()


def test_logger_is_namespaced_under_package():
    tel = ProjectTelemetry("Scan", "blue", "Hello")
    assert tel.logger.name == "convention_linter.scan"
