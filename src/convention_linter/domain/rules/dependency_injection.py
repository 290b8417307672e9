"""Dependency injection rules: resolve in the constructor only, keep injected fields readonly."""

from typing import ClassVar

from convention_linter.domain.constants import CONTAINER_TYPES, RESOLVER_METHODS
from convention_linter.domain.rules import Rule, Severity
from convention_linter.domain.symbols import Assignment, Call, Node, NodeKind, SymbolTree


class ConstructorOnlyResolutionRule:
    """
    Dependencies are resolved once, in the constructor.

    A method other than the constructor that calls a resolver (GetService,
    Resolve, ...) on a container-typed field of its class is using the
    container as a service locator.
    """

    rule_id: ClassVar[str] = "constructor-only-resolution"
    description: ClassVar[str] = "Resolve dependencies in the constructor only; no service locator calls in methods."
    kinds: ClassVar[frozenset[NodeKind]] = frozenset({NodeKind.METHOD})

    @staticmethod
    def first_resolver_call(node: Node) -> Call | None:
        """First resolver call on a container field of node's class, or None."""
        if node.is_constructor:
            return None
        for statement in node.statements:
            if not isinstance(statement, Call):
                continue
            if statement.member not in RESOLVER_METHODS:
                continue
            field_node = SymbolTree.field_of(node, statement.target)
            if field_node is not None and field_node.bare_type_name in CONTAINER_TYPES:
                return statement
        return None

    @staticmethod
    def violates(node: Node) -> bool:
        return ConstructorOnlyResolutionRule.first_resolver_call(node) is not None

    @staticmethod
    def message_args(node: Node) -> dict[str, object]:
        call = ConstructorOnlyResolutionRule.first_resolver_call(node)
        if call is None:
            return {"call": "?", "call_line": "?"}
        return {"call": f"{call.target}.{call.member}", "call_line": call.line}

    @classmethod
    def build(cls) -> Rule:
        return Rule(
            rule_id=cls.rule_id,
            description=cls.description,
            kinds=cls.kinds,
            predicate=cls.violates,
            message_template=(
                "Method '{parent}.{name}' resolves a dependency via {call} (line {call_line}). "
                "Inject it through the constructor instead."
            ),
            severity=Severity.ERROR,
            message_args=cls.message_args,
        )


class ReadonlyInjectedFieldsRule:
    """A field assigned from a constructor parameter is an injected dependency and must be readonly."""

    rule_id: ClassVar[str] = "readonly-injected-fields"
    description: ClassVar[str] = "Constructor-injected fields must be readonly."
    kinds: ClassVar[frozenset[NodeKind]] = frozenset({NodeKind.FIELD})

    @staticmethod
    def is_constructor_injected(node: Node) -> bool:
        """True if some constructor of the owning class assigns this field from one of its parameters."""
        owner = node.parent
        if owner is None or owner.kind is not NodeKind.CLASS:
            return False
        for method in owner.iter_children(NodeKind.METHOD):
            if not method.is_constructor:
                continue
            params = {p.name for p in method.iter_children(NodeKind.PARAMETER)}
            for statement in method.statements:
                if not isinstance(statement, Assignment):
                    continue
                if statement.target.removeprefix("this.") != node.name:
                    continue
                if statement.value in params:
                    return True
        return False

    @staticmethod
    def violates(node: Node) -> bool:
        if node.has_modifier("readonly") or node.has_modifier("const"):
            return False
        return ReadonlyInjectedFieldsRule.is_constructor_injected(node)

    @classmethod
    def build(cls) -> Rule:
        return Rule(
            rule_id=cls.rule_id,
            description=cls.description,
            kinds=cls.kinds,
            predicate=cls.violates,
            message_template=(
                "Field '{parent}.{name}' is injected through the constructor but is not readonly."
            ),
            severity=Severity.WARNING,
        )
