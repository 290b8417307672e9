"""Use Case: Analyze - walk one symbol tree and apply every active rule to every node."""

import logging
import threading

from convention_linter.domain.errors import AnalysisCancelled, RuleEvaluationFault
from convention_linter.domain.registry import RuleRegistry
from convention_linter.domain.report import Report
from convention_linter.domain.rules import Violation
from convention_linter.domain.symbols import Node, SymbolTree

logger = logging.getLogger(__name__)


class Analyzer:
    """
    Applies the registry's rules to a symbol tree.

    Traversal is pre-order depth-first in declaration order; every node is
    visited once and every (rule, node) pair evaluated at most once. A rule
    that raises is recorded as an Info 'rule crashed' violation and the walk
    continues. The registry is only read, so one Analyzer can serve many
    worker threads.
    """

    def __init__(self, registry: RuleRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    def analyze(self, root: Node, cancel_event: threading.Event | None = None) -> Report:
        """
        Analyze the tree under root and return its Report.

        Raises:
            AnalysisCancelled: cancel_event was set between two node visits.
                No partial report is returned.
        """
        violations: list[Violation] = []
        for node in SymbolTree.walk(root):
            if cancel_event is not None and cancel_event.is_set():
                raise AnalysisCancelled(
                    f"Analysis of '{root.name}' cancelled at {node.location}."
                )
            violations.extend(self.evaluate_node(node))
        return Report.from_violations(violations)

    def evaluate_node(self, node: Node) -> list[Violation]:
        """Evaluate every active rule for node.kind against node."""
        found: list[Violation] = []
        for rule in self._registry.active_rules(node.kind):
            if not rule.applies(node):
                continue
            try:
                violation = rule.evaluate(node)
            except Exception as exc:  # noqa: BLE001
                fault = RuleEvaluationFault(rule.rule_id, node, exc)
                logger.warning("%s", fault, exc_info=exc)
                found.append(fault.to_violation())
                continue
            if violation is not None:
                found.append(violation)
        return found
