"""Entity Framework usage rule: prefer async materializers on data contexts."""

from typing import ClassVar

from convention_linter.domain.constants import (
    DATA_CONTEXT_SUFFIXES,
    DATA_SET_TYPES,
    SYNC_MATERIALIZERS,
)
from convention_linter.domain.rules import Rule, Severity
from convention_linter.domain.symbols import Call, Node, NodeKind, SymbolTree


class AsyncDataAccessRule:
    """Queries against a DbContext / DbSet field must use the ...Async materializer."""

    rule_id: ClassVar[str] = "async-data-access"
    description: ClassVar[str] = "Use async materializers (ToListAsync, SaveChangesAsync) on data contexts."
    kinds: ClassVar[frozenset[NodeKind]] = frozenset({NodeKind.METHOD})

    @staticmethod
    def is_data_field(node: Node | None) -> bool:
        if node is None:
            return False
        bare = node.bare_type_name
        return bare.endswith(DATA_CONTEXT_SUFFIXES) or bare in DATA_SET_TYPES

    @staticmethod
    def first_sync_call(node: Node) -> Call | None:
        """First synchronous materializer call whose receiver chain starts at a data field."""
        for statement in node.statements:
            if not isinstance(statement, Call):
                continue
            if statement.member not in SYNC_MATERIALIZERS:
                continue
            head = statement.target.removeprefix("this.").split(".", 1)[0]
            if AsyncDataAccessRule.is_data_field(SymbolTree.field_of(node, head)):
                return statement
        return None

    @staticmethod
    def violates(node: Node) -> bool:
        return AsyncDataAccessRule.first_sync_call(node) is not None

    @staticmethod
    def message_args(node: Node) -> dict[str, object]:
        call = AsyncDataAccessRule.first_sync_call(node)
        if call is None:
            return {"call": "?", "member": "?", "call_line": "?"}
        return {
            "call": f"{call.target}.{call.member}",
            "member": call.member,
            "call_line": call.line,
        }

    @classmethod
    def build(cls) -> Rule:
        return Rule(
            rule_id=cls.rule_id,
            description=cls.description,
            kinds=cls.kinds,
            predicate=cls.violates,
            message_template=(
                "Method '{parent}.{name}' calls {call} synchronously (line {call_line}). "
                "Use {member}Async and await it."
            ),
            severity=Severity.WARNING,
            message_args=cls.message_args,
        )
