"""Declaration-shape rules: no partial declarations, explicit enum values."""

import re
from collections.abc import Iterator
from typing import ClassVar

from convention_linter.domain.rules import Rule, Severity
from convention_linter.domain.symbols import Node, NodeKind


class NoPartialDeclarationsRule:
    """A type must be declared in one place: no two top-level `partial` declarations of one name.

    Top-level declarations of every unit under the shared root are siblings here,
    so a type split across files is caught as well as one split within a file.
    """

    rule_id: ClassVar[str] = "no-partial-declarations"
    description: ClassVar[str] = "Partial declarations are forbidden; declare each type once."
    kinds: ClassVar[frozenset[NodeKind]] = frozenset({NodeKind.CLASS, NodeKind.ENUM})

    @staticmethod
    def top_level_scope(node: Node) -> Iterator[Node]:
        """Top-level declarations of every unit under node's root, in declaration order."""
        unit = node.parent
        if unit is None:
            return
        root = unit.parent
        units = root.iter_children(NodeKind.UNIT) if root is not None else (unit,)
        for each_unit in units:
            yield from each_unit.children

    @staticmethod
    def earlier_partial(node: Node) -> Node | None:
        """First earlier top-level declaration that shares node's name and is also partial."""
        if not node.has_modifier("partial") or not node.is_top_level:
            return None
        for sibling in NoPartialDeclarationsRule.top_level_scope(node):
            if sibling is node:
                return None
            if (
                sibling.kind in NoPartialDeclarationsRule.kinds
                and sibling.name == node.name
                and sibling.has_modifier("partial")
            ):
                return sibling
        return None

    @staticmethod
    def violates(node: Node) -> bool:
        return NoPartialDeclarationsRule.earlier_partial(node) is not None

    @staticmethod
    def message_args(node: Node) -> dict[str, object]:
        first = NoPartialDeclarationsRule.earlier_partial(node)
        if first is None:
            return {"first": "?"}
        if first.location.file == node.location.file:
            return {"first": f"line {first.location.line}"}
        return {"first": str(first.location)}

    @classmethod
    def build(cls) -> Rule:
        return Rule(
            rule_id=cls.rule_id,
            description=cls.description,
            kinds=cls.kinds,
            predicate=cls.violates,
            message_template=(
                "Partial {kind} '{name}' continues the declaration at {first}. "
                "Merge the parts into a single declaration."
            ),
            severity=Severity.ERROR,
            message_args=cls.message_args,
        )


class ExplicitEnumValuesRule:
    """Every enum member must carry an explicit integer literal value."""

    rule_id: ClassVar[str] = "explicit-enum-values"
    description: ClassVar[str] = "Enum members must declare explicit integer values."
    kinds: ClassVar[frozenset[NodeKind]] = frozenset({NodeKind.ENUM_MEMBER})

    # C# integer suffixes (1u, 2L, 3UL).
    _INTEGER_SUFFIX: ClassVar[re.Pattern[str]] = re.compile(r"(?i)(ul|lu|u|l)$")

    @classmethod
    def is_integer_literal(cls, value: object) -> bool:
        """True for ints (not bools) and integer literal text: '3', '-1', '0x1F', '0b10', '1_000', '2u'."""
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        if not isinstance(value, str):
            return False
        text = cls._INTEGER_SUFFIX.sub("", value.strip())
        # base 0 reads prefixes (0x, 0b); base 10 accepts leading zeros ('010').
        for base in (0, 10):
            try:
                int(text, base)
            except ValueError:
                continue
            return True
        return False

    @classmethod
    def violates(cls, node: Node) -> bool:
        return not cls.is_integer_literal(node.value)

    @classmethod
    def build(cls) -> Rule:
        return Rule(
            rule_id=cls.rule_id,
            description=cls.description,
            kinds=cls.kinds,
            predicate=cls.violates,
            message_template=(
                "Enum member '{parent}.{name}' has no explicit integer value. "
                "Assign one (e.g. {name} = 1) so persisted values never shift."
            ),
            severity=Severity.ERROR,
        )
