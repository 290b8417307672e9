"""Unit tests for Severity, Violation and the Rule descriptor."""

import unittest

import pytest

from convention_linter.domain.rules import Rule, Severity, Violation
from convention_linter.domain.symbols import Node, NodeKind, SourceLocation


def _violation(rule_id: str, severity: Severity, file: str, line: int, message: str = "m") -> Violation:
    return Violation(
        rule_id=rule_id,
        message=message,
        severity=severity,
        location=SourceLocation(file, line),
    )


class TestSeverity:
    def test_rank_orders_error_above_warning_above_info(self) -> None:
        assert Severity.ERROR.rank > Severity.WARNING.rank > Severity.INFO.rank

    @pytest.mark.parametrize(
        "raw, expected",
        [("error", Severity.ERROR), (" Warning ", Severity.WARNING), ("INFO", Severity.INFO)],
    )
    def test_parse_is_case_insensitive(self, raw: str, expected: Severity) -> None:
        assert Severity.parse(raw) is expected

    def test_parse_rejects_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown severity 'fatal'"):
            Severity.parse("fatal")


class TestViolation(unittest.TestCase):
    def test_from_node_derives_location(self) -> None:
        node = Node(NodeKind.CLASS, "Foo", SourceLocation("Foo.cs", 7))
        v = Violation.from_node(rule_id="r", node=node, message="msg", severity=Severity.ERROR)
        self.assertEqual(v.location, SourceLocation("Foo.cs", 7))
        self.assertIs(v.node, node)

    def test_equality_ignores_node(self) -> None:
        a = Node(NodeKind.CLASS, "Foo", SourceLocation("Foo.cs", 7))
        b = Node(NodeKind.CLASS, "Foo", SourceLocation("Foo.cs", 7))
        va = Violation.from_node(rule_id="r", node=a, message="msg", severity=Severity.ERROR)
        vb = Violation.from_node(rule_id="r", node=b, message="msg", severity=Severity.ERROR)
        self.assertEqual(va, vb)
        self.assertEqual(hash(va), hash(vb))

    def test_sort_key_puts_severity_first(self) -> None:
        warning = _violation("a", Severity.WARNING, "a.cs", 1)
        error = _violation("z", Severity.ERROR, "z.cs", 99)
        self.assertEqual(sorted([warning, error], key=lambda v: v.sort_key), [error, warning])

    def test_to_dict(self) -> None:
        v = _violation("explicit-enum-values", Severity.ERROR, "Day.cs", 4, "no value")
        self.assertEqual(
            v.to_dict(),
            {
                "rule_id": "explicit-enum-values",
                "severity": "error",
                "file": "Day.cs",
                "line": 4,
                "message": "no value",
            },
        )


class TestRule(unittest.TestCase):
    def setUp(self) -> None:
        self.root = Node(NodeKind.ROOT, "<root>", SourceLocation("", 0))
        self.cls = self.root.append_child(Node(NodeKind.CLASS, "Widget", SourceLocation("w.cs", 2)))
        self.method = self.cls.append_child(Node(NodeKind.METHOD, "spin", SourceLocation("w.cs", 5)))

    def _rule(self, **overrides: object) -> Rule:
        fields: dict[str, object] = {
            "rule_id": "lowercase-method",
            "description": "Methods must not start lowercase.",
            "kinds": frozenset({NodeKind.METHOD}),
            "predicate": lambda node: node.name[0].islower(),
            "message_template": "{kind} '{parent}.{name}' starts lowercase",
        }
        fields.update(overrides)
        return Rule(**fields)  # type: ignore[arg-type]

    def test_applies_only_to_declared_kinds(self) -> None:
        rule = self._rule()
        self.assertTrue(rule.applies(self.method))
        self.assertFalse(rule.applies(self.cls))

    def test_evaluate_renders_message(self) -> None:
        v = self._rule().evaluate(self.method)
        assert v is not None
        self.assertEqual(v.message, "method 'Widget.spin' starts lowercase")
        self.assertEqual(v.severity, Severity.WARNING)
        self.assertEqual(v.location.line, 5)

    def test_evaluate_returns_none_when_compliant(self) -> None:
        self.assertIsNone(self._rule(predicate=lambda node: False).evaluate(self.method))

    def test_message_args_extend_template(self) -> None:
        rule = self._rule(
            message_template="{name} has {count} problems",
            message_args=lambda node: {"count": 3},
        )
        v = rule.evaluate(self.method)
        assert v is not None
        self.assertEqual(v.message, "spin has 3 problems")

    def test_rejects_empty_id_and_kinds(self) -> None:
        with self.assertRaises(ValueError):
            self._rule(rule_id="")
        with self.assertRaises(ValueError):
            self._rule(kinds=frozenset())

    def test_rule_is_frozen(self) -> None:
        rule = self._rule()
        with self.assertRaises(AttributeError):
            rule.severity = Severity.ERROR  # type: ignore[misc]
