"""Unit-test naming rule: Method_Scenario_ExpectedResult."""

import re
from typing import ClassVar

from convention_linter.domain.constants import TEST_ATTRIBUTES
from convention_linter.domain.rules import Rule, Severity
from convention_linter.domain.symbols import Node, NodeKind


class UnitTestNamingRule:
    """Methods carrying a test attribute are named `MethodUnderTest_Scenario_ExpectedResult`."""

    rule_id: ClassVar[str] = "test-method-naming"
    description: ClassVar[str] = "Test methods follow MethodUnderTest_Scenario_ExpectedResult."
    kinds: ClassVar[frozenset[NodeKind]] = frozenset({NodeKind.METHOD})

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"^[A-Z][A-Za-z0-9]*_[A-Za-z0-9]+_[A-Za-z0-9]+$"
    )

    @staticmethod
    def is_test(node: Node) -> bool:
        return bool(node.attribute_names & TEST_ATTRIBUTES)

    @classmethod
    def violates(cls, node: Node) -> bool:
        if not cls.is_test(node):
            return False
        return not cls.PATTERN.match(node.name)

    @classmethod
    def build(cls) -> Rule:
        return Rule(
            rule_id=cls.rule_id,
            description=cls.description,
            kinds=cls.kinds,
            predicate=cls.violates,
            message_template=(
                "Test '{parent}.{name}' should be named MethodUnderTest_Scenario_ExpectedResult."
            ),
            severity=Severity.WARNING,
        )
