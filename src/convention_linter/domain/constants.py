"""
Convention Linter: shared constants (config section, vocabulary of the rules).
"""

CONFIG_SECTION: str = "convention-linter"
LOG_LEVEL_ENV: str = "CONVENTION_LINTER_LOG_LEVEL"

SOURCE_UNIT_SUFFIXES: tuple[str, ...] = (".json", ".yaml", ".yml")

# Dependency injection: types that act as a container / service locator.
CONTAINER_TYPES: frozenset[str] = frozenset(
    {
        "IServiceProvider",
        "IServiceScope",
        "IContainer",
        "IComponentContext",
        "ILifetimeScope",
        "IResolver",
        "IServiceLocator",
        "IKernel",
        "Container",
        "ServiceProvider",
    }
)

RESOLVER_METHODS: frozenset[str] = frozenset(
    {
        "GetService",
        "GetRequiredService",
        "GetServices",
        "GetKeyedService",
        "GetRequiredKeyedService",
        "GetInstance",
        "GetAllInstances",
        "Resolve",
        "ResolveOptional",
        "ResolveNamed",
        "ResolveKeyed",
        "Get",
    }
)

# Entity Framework: synchronous materializers that have an ...Async counterpart.
SYNC_MATERIALIZERS: frozenset[str] = frozenset(
    {
        "ToList",
        "ToArray",
        "ToDictionary",
        "First",
        "FirstOrDefault",
        "Single",
        "SingleOrDefault",
        "Last",
        "LastOrDefault",
        "Count",
        "LongCount",
        "Any",
        "All",
        "Sum",
        "Min",
        "Max",
        "Average",
        "Find",
        "SaveChanges",
    }
)

DATA_CONTEXT_SUFFIXES: tuple[str, ...] = ("DbContext",)
DATA_SET_TYPES: frozenset[str] = frozenset({"DbSet", "IQueryable"})

TEST_ATTRIBUTES: frozenset[str] = frozenset(
    {"Fact", "Theory", "Test", "TestMethod", "TestCase", "DataTestMethod"}
)

EQUALITY_OPERATORS: frozenset[str] = frozenset({"==", "!=", "===", "!=="})
