"""Error taxonomy for the convention linter. Violations are results, never exceptions."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from convention_linter.domain.rules import Violation
    from convention_linter.domain.symbols import Node


class ConventionLinterError(Exception):
    """Base class for every error raised by the linter."""


class ParseError(ConventionLinterError):
    """Malformed source unit. Fatal: the run aborts before analysis begins."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
        path: str | None = None,
    ) -> None:
        self.message = message
        self.file = file
        self.path = path
        super().__init__(self._render())

    def _render(self) -> str:
        where = ""
        if self.file:
            where = self.file
        if self.path:
            where = f"{where}#{self.path}" if where else self.path
        return f"{where}: {self.message}" if where else self.message


class ConfigurationError(ConventionLinterError):
    """Registry or settings fault. Fatal at registry build time."""


class DuplicateRuleError(ConfigurationError):
    """Two rules share one identifier."""

    def __init__(self, rule_id: str) -> None:
        self.rule_id = rule_id
        super().__init__(f"Rule '{rule_id}' is already registered.")


class UnknownRuleError(ConfigurationError):
    """A rule identifier that is not registered."""

    def __init__(self, rule_id: str) -> None:
        self.rule_id = rule_id
        super().__init__(f"Unknown rule '{rule_id}'.")


class RegistryFrozenError(ConfigurationError):
    """Mutation attempted on a registry that has been frozen."""


class AnalysisCancelled(ConventionLinterError):
    """The run was cancelled between node visits. Partial results are discarded."""


class RuleEvaluationFault(ConventionLinterError):
    """
    A rule raised while evaluating a node.

    Recovered locally by the Analyzer: downgraded to an Info violation so the
    run continues.
    """

    def __init__(self, rule_id: str, node: "Node", cause: BaseException) -> None:
        self.rule_id = rule_id
        self.node = node
        self.cause = cause
        super().__init__(
            f"Rule '{rule_id}' crashed on {node.kind.label} '{node.name}': "
            f"{type(cause).__name__}: {cause}"
        )

    def to_violation(self) -> "Violation":
        """Downgrade the fault to an Info-severity 'rule crashed' violation."""
        from convention_linter.domain.rules import Severity, Violation

        return Violation.from_node(
            rule_id=self.rule_id,
            node=self.node,
            message=f"rule crashed: {type(self.cause).__name__}: {self.cause}",
            severity=Severity.INFO,
        )
