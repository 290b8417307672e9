"""Built-in rule catalog. Order here is registration order."""

from convention_linter.domain.rules import Rule
from convention_linter.domain.rules.data_access import AsyncDataAccessRule
from convention_linter.domain.rules.declarations import (
    ExplicitEnumValuesRule,
    NoPartialDeclarationsRule,
)
from convention_linter.domain.rules.dependency_injection import (
    ConstructorOnlyResolutionRule,
    ReadonlyInjectedFieldsRule,
)
from convention_linter.domain.rules.naming import (
    CamelCaseLocalsRule,
    PascalCaseNamesRule,
    PrivateFieldNamingRule,
)
from convention_linter.domain.rules.null_checks import NullComparisonOnOptionalRule
from convention_linter.domain.rules.testing import UnitTestNamingRule


class BuiltinRules:
    """Builds the built-in rules in a fixed order."""

    FAMILIES = (
        ConstructorOnlyResolutionRule,
        ReadonlyInjectedFieldsRule,
        NoPartialDeclarationsRule,
        ExplicitEnumValuesRule,
        NullComparisonOnOptionalRule,
        AsyncDataAccessRule,
        PascalCaseNamesRule,
        CamelCaseLocalsRule,
        PrivateFieldNamingRule,
        UnitTestNamingRule,
    )

    @staticmethod
    def all() -> list[Rule]:
        return [family.build() for family in BuiltinRules.FAMILIES]

    @staticmethod
    def ids() -> list[str]:
        return [family.rule_id for family in BuiltinRules.FAMILIES]
