"""Pytest configuration and shared fixtures.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
on sys.path so `convention_linter` imports without an install.
"""

from collections.abc import Callable

import pytest

from convention_linter.domain.registry import RuleRegistry
from convention_linter.domain.rules.catalog import BuiltinRules
from convention_linter.use_cases.analyze import Analyzer
from convention_linter.use_cases.build_symbols import SymbolModelBuilder

UnitFactory = Callable[..., dict[str, object]]


@pytest.fixture
def builder() -> SymbolModelBuilder:
    return SymbolModelBuilder()


@pytest.fixture
def builtin_registry() -> RuleRegistry:
    """Every built-in rule, default severities, frozen."""
    return RuleRegistry.configured(BuiltinRules.all())


@pytest.fixture
def analyzer(builtin_registry: RuleRegistry) -> Analyzer:
    return Analyzer(builtin_registry)


@pytest.fixture
def make_unit() -> UnitFactory:
    """Return a factory: make_unit(*declarations, file=...) -> source unit mapping."""

    def _make(*declarations: dict[str, object], file: str = "src/Orders/OrderService.cs") -> dict[str, object]:
        return {"file": file, "declarations": list(declarations)}

    return _make


@pytest.fixture
def clean_service_unit(make_unit: UnitFactory) -> dict[str, object]:
    """A class that follows every convention."""
    return make_unit(
        {
            "kind": "class",
            "name": "OrderService",
            "line": 3,
            "modifiers": ["public"],
            "members": [
                {
                    "kind": "field",
                    "name": "_repository",
                    "type": "IOrderRepository",
                    "modifiers": ["private", "readonly"],
                    "line": 5,
                },
                {
                    "kind": "field",
                    "name": "MaxRetries",
                    "type": "int",
                    "modifiers": ["private", "const"],
                    "line": 6,
                },
                {
                    "kind": "method",
                    "name": "OrderService",
                    "line": 8,
                    "modifiers": ["public"],
                    "members": [
                        {"kind": "parameter", "name": "repository", "type": "IOrderRepository", "line": 8},
                    ],
                    "statements": [
                        {"op": "assign", "target": "_repository", "value": "repository", "line": 10},
                    ],
                },
                {
                    "kind": "method",
                    "name": "PlaceOrder",
                    "line": 13,
                    "modifiers": ["public"],
                    "members": [
                        {"kind": "parameter", "name": "orderId", "type": "int", "line": 13},
                        {"kind": "local_variable", "name": "order", "type": "Order", "line": 15},
                    ],
                    "statements": [
                        {"op": "call", "target": "_repository", "member": "Add", "line": 16},
                    ],
                },
            ],
        },
        {
            "kind": "enum",
            "name": "OrderStatus",
            "line": 20,
            "modifiers": ["public"],
            "members": [
                {"kind": "enum_member", "name": "Pending", "value": 1, "line": 22},
                {"kind": "enum_member", "name": "Shipped", "value": "0x2", "line": 23},
            ],
        },
    )
