"""Domain models for rules and violations."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from convention_linter.domain.symbols import Node, NodeKind, SourceLocation

__all__ = [
    "Checkable",
    "Rule",
    "Severity",
    "Violation",
]


class Severity(Enum):
    """Violation severity. Ordered Error > Warning > Info via `rank`."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @classmethod
    def parse(cls, raw: str) -> "Severity":
        """Parse 'error' / 'Warning' / 'INFO'. Raises ValueError on anything else."""
        try:
            return cls(raw.strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown severity '{raw}' (expected one of: {allowed})") from None


_SEVERITY_RANK: dict[Severity, int] = {
    Severity.ERROR: 3,
    Severity.WARNING: 2,
    Severity.INFO: 1,
}


@dataclass(frozen=True)
class Violation:
    """A breach of one rule at one node. Never mutated after creation."""

    rule_id: str
    message: str
    severity: Severity
    location: SourceLocation
    node: Node | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_node(
        cls,
        *,
        rule_id: str,
        node: Node,
        message: str,
        severity: Severity,
    ) -> "Violation":
        """Build a Violation with location derived from node. Prefer over manual location=."""
        return cls(
            rule_id=rule_id,
            message=message,
            severity=severity,
            location=node.location,
            node=node,
        )

    @property
    def sort_key(self) -> tuple[int, str, int, str, str]:
        """Total order: severity desc, file asc, line asc, rule id, message."""
        return (
            -self.severity.rank,
            self.location.file,
            self.location.line,
            self.rule_id,
            self.message,
        )

    def to_dict(self) -> dict[str, str | int]:
        """Structured form: {rule_id, severity, file, line, message}."""
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "file": self.location.file,
            "line": self.location.line,
            "message": self.message,
        }


class Checkable(Protocol):
    """Capability every rule offers: declared kinds, applies(), evaluate()."""

    rule_id: str
    description: str
    severity: Severity
    kinds: frozenset[NodeKind]

    def applies(self, node: Node) -> bool:
        """True if the rule inspects nodes of this kind."""
        ...

    def evaluate(self, node: Node) -> Violation | None:
        """Side-effect free check of one node. None when compliant."""
        ...


@dataclass(frozen=True)
class Rule:
    """
    Value-like rule descriptor: a pure predicate plus a message template.

    The predicate returns True for a violating node. The message template is
    formatted with `name`, `kind`, `parent` and whatever `message_args` returns
    for the node. Instances are frozen, so a registered rule never changes.
    """

    rule_id: str
    description: str
    kinds: frozenset[NodeKind]
    predicate: Callable[[Node], bool] = field(compare=False, repr=False)
    message_template: str
    severity: Severity = Severity.WARNING
    message_args: Callable[[Node], Mapping[str, object]] | None = field(
        default=None, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        if not self.rule_id:
            raise ValueError("rule_id must not be empty")
        if not self.kinds:
            raise ValueError(f"Rule '{self.rule_id}' must declare the node kinds it inspects")

    def applies(self, node: Node) -> bool:
        return node.kind in self.kinds

    def evaluate(self, node: Node) -> Violation | None:
        """Return a Violation when the predicate flags node; otherwise None."""
        if not self.predicate(node):
            return None
        return Violation.from_node(
            rule_id=self.rule_id,
            node=node,
            message=self.render_message(node),
            severity=self.severity,
        )

    def render_message(self, node: Node) -> str:
        parent = node.parent
        args: dict[str, object] = {
            "name": node.name,
            "kind": node.kind.label,
            "parent": parent.name if parent is not None else "",
        }
        if self.message_args is not None:
            args.update(self.message_args(node))
        return self.message_template.format(**args)
