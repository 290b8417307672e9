"""Report: the sorted, immutable collection of violations from one run."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from convention_linter.domain.rules import Severity, Violation


@dataclass(frozen=True)
class ReportSummary:
    """Violation counts by severity."""

    error: int = 0
    warning: int = 0
    info: int = 0

    @property
    def total(self) -> int:
        return self.error + self.warning + self.info

    def to_dict(self) -> dict[str, int]:
        return {
            "error": self.error,
            "warning": self.warning,
            "info": self.info,
            "total": self.total,
        }


@dataclass(frozen=True)
class Report:
    """
    Violations in total order: severity desc, (file, line) asc, rule id, message.

    Build with from_violations() or merge(); both sort, so equal violation sets
    always give equal reports regardless of input order.
    """

    violations: tuple[Violation, ...] = field(default_factory=tuple)

    @staticmethod
    def sort(violations: Iterable[Violation]) -> tuple[Violation, ...]:
        """Stable, total sort used by every reporter."""
        return tuple(sorted(violations, key=lambda v: v.sort_key))

    @classmethod
    def from_violations(cls, violations: Iterable[Violation]) -> "Report":
        return cls(violations=cls.sort(violations))

    @classmethod
    def empty(cls) -> "Report":
        return cls()

    @classmethod
    def merge(cls, *reports: "Report") -> "Report":
        """Concatenate partial reports then sort. Associative and commutative."""
        merged: list[Violation] = []
        for report in reports:
            merged.extend(report.violations)
        return cls.from_violations(merged)

    def __len__(self) -> int:
        return len(self.violations)

    def __bool__(self) -> bool:
        return bool(self.violations)

    def __iter__(self) -> Iterator[Violation]:
        return iter(self.violations)

    def summary(self) -> ReportSummary:
        counts = {severity: 0 for severity in Severity}
        for violation in self.violations:
            counts[violation.severity] += 1
        return ReportSummary(
            error=counts[Severity.ERROR],
            warning=counts[Severity.WARNING],
            info=counts[Severity.INFO],
        )

    def has_errors(self) -> bool:
        return any(v.severity is Severity.ERROR for v in self.violations)

    def exit_code(self) -> int:
        """0 when no Error-severity violation is present, 1 otherwise."""
        return 1 if self.has_errors() else 0

    def by_location(self) -> dict[str, tuple[Violation, ...]]:
        """Group by file, files in ascending order, each group ordered by line then severity."""
        groups: dict[str, list[Violation]] = {}
        for violation in sorted(
            self.violations,
            key=lambda v: (v.location.file, v.location.line, -v.severity.rank, v.rule_id, v.message),
        ):
            groups.setdefault(violation.location.file, []).append(violation)
        return {file: tuple(items) for file, items in groups.items()}

    def for_rule(self, rule_id: str) -> tuple[Violation, ...]:
        return tuple(v for v in self.violations if v.rule_id == rule_id)

    def to_dicts(self) -> list[dict[str, str | int]]:
        return [v.to_dict() for v in self.violations]
