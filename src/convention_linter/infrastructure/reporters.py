"""Report renderers: text lines, JSON, and rich tables. All deterministic and idempotent."""

import io
import json
from collections import Counter
from typing import TYPE_CHECKING, ClassVar, TypedDict

from rich.console import Console
from rich.table import Table
from rich.text import Text

from convention_linter.domain.report import Report
from convention_linter.domain.rules import Severity

if TYPE_CHECKING:
    from convention_linter.domain.protocols import ReportRendererProtocol


class FileResultRow(TypedDict):
    """Row for by-file view: file path, total count, rule breakdown."""

    file: str
    total: int
    breakdown: str


class TextReporter:
    """One line per violation: `<severity>: <file>:<line>: [<rule_id>] <message>`."""

    def format(self, report: Report) -> str:
        lines = [
            f"{v.severity.value}: {v.location.file}:{v.location.line}: [{v.rule_id}] {v.message}"
            for v in Report.sort(report.violations)
        ]
        return "\n".join(lines) + "\n" if lines else ""


class JsonReporter:
    """Structured output: {"violations": [...], "summary": {...}} with sorted keys."""

    def format(self, report: Report) -> str:
        ordered = Report.from_violations(report.violations)
        payload = {
            "violations": ordered.to_dicts(),
            "summary": ordered.summary().to_dict(),
        }
        return json.dumps(payload, indent=2, sort_keys=True) + "\n"


class TableReporter:
    """Terminal tables via rich. view: 'by_violation' (default) or 'by_file'."""

    VIEWS: ClassVar[tuple[str, ...]] = ("by_violation", "by_file")

    _SEVERITY_STYLES: ClassVar[dict[Severity, str]] = {
        Severity.ERROR: "bold #C41E3A",
        Severity.WARNING: "#F9A602",
        Severity.INFO: "#00EEFF",
    }

    def __init__(self, view: str = "by_violation", width: int = 140) -> None:
        if view not in self.VIEWS:
            raise ValueError(f"Unknown view '{view}' (expected one of: {', '.join(self.VIEWS)})")
        self.view = view
        self.width = width

    def format(self, report: Report) -> str:
        """Render to plain text (no ANSI codes) so output is byte-stable."""
        buffer = io.StringIO()
        console = Console(
            file=buffer,
            width=self.width,
            color_system=None,
            force_terminal=False,
            highlight=False,
            emoji=False,
        )
        self.render(report, console)
        return buffer.getvalue()

    def render(self, report: Report, console: Console) -> None:
        if not report.violations:
            console.print("No convention violations detected.")
            return
        table = self._by_file_table(report) if self.view == "by_file" else self._violation_table(report)
        console.print(table)
        summary = report.summary()
        console.print(
            f"{summary.total} violation(s): {summary.error} error, "
            f"{summary.warning} warning, {summary.info} info"
        )

    def _violation_table(self, report: Report) -> Table:
        table = Table(title="Convention Violations", header_style="bold #007BFF")
        table.add_column("Severity")
        table.add_column("Location", style="#00EEFF")
        table.add_column("Rule ID", style="#C41E3A")
        table.add_column("Message")
        for v in Report.sort(report.violations):
            table.add_row(
                v.severity.value.upper(),
                str(v.location),
                v.rule_id,
                Text(v.message),
                style=self._SEVERITY_STYLES[v.severity],
            )
        return table

    def _by_file_table(self, report: Report) -> Table:
        table = Table(title="Convention Violations (by file)", header_style="bold #007BFF")
        table.add_column("File", style="#00EEFF")
        table.add_column("Total", style="bold #007BFF")
        table.add_column("Rules")
        for row in self.process_results_by_file(report):
            table.add_row(Text(row["file"]), str(row["total"]), row["breakdown"])
        return table

    @staticmethod
    def process_results_by_file(report: Report) -> list[FileResultRow]:
        """Group by file: file, total, breakdown. Sorted by total descending, then file."""
        rows: list[FileResultRow] = []
        for file_path, violations in report.by_location().items():
            counts = Counter(v.rule_id for v in violations)
            parts = sorted(counts.items(), key=lambda x: (-x[1], x[0]))
            rows.append(
                {
                    "file": file_path,
                    "total": len(violations),
                    "breakdown": ", ".join(f"{rule_id}: {n}" for rule_id, n in parts),
                }
            )
        return sorted(rows, key=lambda x: (-x["total"], x["file"]))


class ReporterFactory:
    """Maps an output format name to its renderer."""

    @staticmethod
    def create(output_format: str, view: str = "by_violation") -> "ReportRendererProtocol":
        if output_format == "text":
            return TextReporter()
        if output_format == "json":
            return JsonReporter()
        if output_format == "table":
            return TableReporter(view=view)
        raise ValueError(f"Unknown output format '{output_format}'")
