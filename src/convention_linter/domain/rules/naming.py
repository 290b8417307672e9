"""Naming convention rules: PascalCase types and members, camelCase locals, `_camelCase` private fields."""

import re
from typing import ClassVar

from convention_linter.domain.constants import TEST_ATTRIBUTES
from convention_linter.domain.rules import Rule, Severity
from convention_linter.domain.symbols import Node, NodeKind


class NamingPatterns:
    """Compiled casing patterns shared by the naming rules."""

    PASCAL: ClassVar[re.Pattern[str]] = re.compile(r"^[A-Z][A-Za-z0-9]*$")
    CAMEL: ClassVar[re.Pattern[str]] = re.compile(r"^[a-z][A-Za-z0-9]*$")
    PRIVATE_FIELD: ClassVar[re.Pattern[str]] = re.compile(r"^_[a-z][A-Za-z0-9]*$")
    ACCESS_MODIFIERS: ClassVar[frozenset[str]] = frozenset({"public", "protected", "internal"})

    @staticmethod
    def is_pascal(name: str) -> bool:
        return bool(NamingPatterns.PASCAL.match(name))

    @staticmethod
    def is_camel(name: str) -> bool:
        return bool(NamingPatterns.CAMEL.match(name))

    @staticmethod
    def is_private(node: Node) -> bool:
        """Explicitly private, or no access modifier at all (C# default)."""
        if node.has_modifier("private"):
            return True
        return not (node.modifiers & NamingPatterns.ACCESS_MODIFIERS)


class PascalCaseNamesRule:
    """Types, enum members and methods use PascalCase. Test methods are left to test-method-naming."""

    rule_id: ClassVar[str] = "pascal-case-names"
    description: ClassVar[str] = "Types, enum members and methods must be PascalCase."
    kinds: ClassVar[frozenset[NodeKind]] = frozenset(
        {NodeKind.CLASS, NodeKind.ENUM, NodeKind.ENUM_MEMBER, NodeKind.METHOD}
    )

    @staticmethod
    def violates(node: Node) -> bool:
        if node.kind is NodeKind.METHOD and node.attribute_names & TEST_ATTRIBUTES:
            return False
        return not NamingPatterns.is_pascal(node.name)

    @classmethod
    def build(cls) -> Rule:
        return Rule(
            rule_id=cls.rule_id,
            description=cls.description,
            kinds=cls.kinds,
            predicate=cls.violates,
            message_template="The {kind} name '{name}' is not PascalCase.",
            severity=Severity.WARNING,
        )


class CamelCaseLocalsRule:
    """Parameters and local variables use camelCase. A lone discard `_` is allowed."""

    rule_id: ClassVar[str] = "camel-case-locals"
    description: ClassVar[str] = "Parameters and local variables must be camelCase."
    kinds: ClassVar[frozenset[NodeKind]] = frozenset(
        {NodeKind.PARAMETER, NodeKind.LOCAL_VARIABLE}
    )

    @staticmethod
    def violates(node: Node) -> bool:
        if node.name == "_":
            return False
        return not NamingPatterns.is_camel(node.name)

    @classmethod
    def build(cls) -> Rule:
        return Rule(
            rule_id=cls.rule_id,
            description=cls.description,
            kinds=cls.kinds,
            predicate=cls.violates,
            message_template="The {kind} name '{name}' in '{parent}' is not camelCase.",
            severity=Severity.WARNING,
        )


class PrivateFieldNamingRule:
    """
    Field naming by visibility.

    const fields: PascalCase. Private non-const fields: `_camelCase`.
    Non-private non-const fields: PascalCase.
    """

    rule_id: ClassVar[str] = "private-field-naming"
    description: ClassVar[str] = "Private fields are _camelCase; constants and non-private fields are PascalCase."
    kinds: ClassVar[frozenset[NodeKind]] = frozenset({NodeKind.FIELD})

    @staticmethod
    def expected_style(node: Node) -> str:
        if node.has_modifier("const"):
            return "PascalCase"
        if NamingPatterns.is_private(node):
            return "_camelCase"
        return "PascalCase"

    @staticmethod
    def violates(node: Node) -> bool:
        if PrivateFieldNamingRule.expected_style(node) == "_camelCase":
            return not NamingPatterns.PRIVATE_FIELD.match(node.name)
        return not NamingPatterns.is_pascal(node.name)

    @staticmethod
    def message_args(node: Node) -> dict[str, object]:
        return {"expected": PrivateFieldNamingRule.expected_style(node)}

    @classmethod
    def build(cls) -> Rule:
        return Rule(
            rule_id=cls.rule_id,
            description=cls.description,
            kinds=cls.kinds,
            predicate=cls.violates,
            message_template="Field '{parent}.{name}' should be named in {expected}.",
            severity=Severity.WARNING,
            message_args=cls.message_args,
        )
