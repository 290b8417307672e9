"""Null-check idiom rule (no equality comparison of optional dependencies to null)."""

from typing import ClassVar

from convention_linter.domain.constants import EQUALITY_OPERATORS
from convention_linter.domain.rules import Rule, Severity
from convention_linter.domain.symbols import Comparison, Node, NodeKind, SymbolTree


class NullComparisonOnOptionalRule:
    """Optional dependencies are tested with a presence query, not `== null` / `!= null`."""

    rule_id: ClassVar[str] = "no-null-comparison-on-optional"
    description: ClassVar[str] = "Test optional fields with a presence query, not an equality comparison to null."
    kinds: ClassVar[frozenset[NodeKind]] = frozenset({NodeKind.METHOD})

    @staticmethod
    def first_offence(node: Node) -> tuple[Comparison, str] | None:
        """(comparison, field name) of the first null-equality test on an optional field."""
        for statement in node.statements:
            if not isinstance(statement, Comparison):
                continue
            if statement.operator.strip() not in EQUALITY_OPERATORS:
                continue
            operand = statement.null_compared_operand()
            if operand is None:
                continue
            field_node = SymbolTree.field_of(node, operand)
            if field_node is not None and field_node.is_optional_type:
                return statement, field_node.name
        return None

    @staticmethod
    def violates(node: Node) -> bool:
        return NullComparisonOnOptionalRule.first_offence(node) is not None

    @staticmethod
    def message_args(node: Node) -> dict[str, object]:
        offence = NullComparisonOnOptionalRule.first_offence(node)
        if offence is None:
            return {"field": "?", "operator": "?", "compare_line": "?"}
        comparison, field_name = offence
        return {
            "field": field_name,
            "operator": comparison.operator.strip(),
            "compare_line": comparison.line,
        }

    @classmethod
    def build(cls) -> Rule:
        return Rule(
            rule_id=cls.rule_id,
            description=cls.description,
            kinds=cls.kinds,
            predicate=cls.violates,
            message_template=(
                "Method '{parent}.{name}' compares optional field '{field}' to null with "
                "'{operator}' (line {compare_line}). Use a presence query (HasValue, is not null)."
            ),
            severity=Severity.WARNING,
            message_args=cls.message_args,
        )
