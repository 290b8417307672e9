"""Rule Registry: ordered, independently toggled rules; read-only once frozen."""

import dataclasses
from collections.abc import Iterable, Mapping

from convention_linter.domain.errors import (
    DuplicateRuleError,
    RegistryFrozenError,
    UnknownRuleError,
)
from convention_linter.domain.rules import Checkable, Rule, Severity
from convention_linter.domain.symbols import NodeKind


class RuleRegistry:
    """
    Ordered collection of rules.

    Registration order is preserved for deterministic tie-breaking. Build it once
    at the composition root, call freeze(), then share it by reference: a frozen
    registry is never mutated, so workers can read it concurrently.
    """

    def __init__(self) -> None:
        self._rules: dict[str, Checkable] = {}
        self._disabled: set[str] = set()
        self._frozen = False

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, rule: Checkable) -> None:
        """Add rule at the end. Raises DuplicateRuleError if the id is taken."""
        self._ensure_mutable()
        if rule.rule_id in self._rules:
            raise DuplicateRuleError(rule.rule_id)
        self._rules[rule.rule_id] = rule

    def enable(self, rule_id: str) -> None:
        self._ensure_mutable()
        self._ensure_known(rule_id)
        self._disabled.discard(rule_id)

    def disable(self, rule_id: str) -> None:
        self._ensure_mutable()
        self._ensure_known(rule_id)
        self._disabled.add(rule_id)

    def freeze(self) -> "RuleRegistry":
        self._frozen = True
        return self

    def get(self, rule_id: str) -> Checkable:
        self._ensure_known(rule_id)
        return self._rules[rule_id]

    def is_enabled(self, rule_id: str) -> bool:
        self._ensure_known(rule_id)
        return rule_id not in self._disabled

    def all_rules(self) -> tuple[Checkable, ...]:
        """Every registered rule, enabled or not, in registration order."""
        return tuple(self._rules.values())

    def active_rules(self, kind: NodeKind) -> tuple[Checkable, ...]:
        """Enabled rules that inspect `kind`, in registration order."""
        return tuple(
            rule
            for rule_id, rule in self._rules.items()
            if rule_id not in self._disabled and kind in rule.kinds
        )

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("Rule registry is frozen; build a new one to change rules.")

    def _ensure_known(self, rule_id: str) -> None:
        if rule_id not in self._rules:
            raise UnknownRuleError(rule_id)

    @classmethod
    def configured(
        cls,
        rules: Iterable[Rule],
        disabled: Iterable[str] = (),
        severity_overrides: Mapping[str, Severity] | None = None,
    ) -> "RuleRegistry":
        """
        Build and freeze a registry from rules plus settings.

        Severity overrides are applied before registration so registered rules
        stay immutable. Unknown ids in `disabled` or `severity_overrides` raise
        UnknownRuleError; duplicate rule ids raise DuplicateRuleError.
        """
        overrides = dict(severity_overrides or {})
        registry = cls()
        for rule in rules:
            severity = overrides.pop(rule.rule_id, None)
            if severity is not None and severity is not rule.severity:
                rule = dataclasses.replace(rule, severity=severity)
            registry.register(rule)
        if overrides:
            raise UnknownRuleError(sorted(overrides)[0])
        for rule_id in disabled:
            registry.disable(rule_id)
        return registry.freeze()
