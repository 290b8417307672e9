"""Symbol Model: declarations of a codebase as an abstract tree, independent of syntax."""

import weakref
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class NodeKind(Enum):
    """Kinds of declaration a Node can represent."""

    ROOT = "root"
    UNIT = "unit"
    CLASS = "class"
    METHOD = "method"
    FIELD = "field"
    PARAMETER = "parameter"
    LOCAL_VARIABLE = "local_variable"
    ENUM = "enum"
    ENUM_MEMBER = "enum_member"

    @property
    def label(self) -> str:
        """Human-readable kind name (e.g. 'enum member')."""
        return self.value.replace("_", " ")


@dataclass(frozen=True, order=True)
class SourceLocation:
    """File and 1-based line of a declaration. Orders by (file, line)."""

    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


# Null literal as written in source units ('null' in C#-like code, None from JSON/YAML).
NULL_LITERALS: frozenset[str] = frozenset({"null", "nil", "none", "None", "nullptr"})


@dataclass(frozen=True)
class Call:
    """Call of `member` on `target` (e.g. `_provider.GetService`)."""

    target: str
    member: str
    line: int


@dataclass(frozen=True)
class Comparison:
    """Binary comparison `left operator right`. A None operand is the null literal."""

    left: str | None
    operator: str
    right: str | None
    line: int

    @staticmethod
    def is_null(operand: str | None) -> bool:
        """True if the operand is the null literal."""
        return operand is None or operand in NULL_LITERALS

    def null_compared_operand(self) -> str | None:
        """Return the non-null operand when exactly one side is the null literal."""
        left_null = self.is_null(self.left)
        right_null = self.is_null(self.right)
        if left_null == right_null:
            return None
        return self.right if left_null else self.left


@dataclass(frozen=True)
class Assignment:
    """Assignment `target = value`, where value is a plain identifier or literal text."""

    target: str
    value: str | None
    line: int


Statement = Call | Comparison | Assignment


class Node:
    """
    One declaration in the abstract symbol tree.

    The parent link is a weak, non-owning reference; children are owned and
    kept in declaration order. Every node except the root has exactly one parent.
    """

    __slots__ = (
        "kind",
        "name",
        "location",
        "modifiers",
        "type_name",
        "value",
        "attributes",
        "statements",
        "_parent_ref",
        "_children",
        "__weakref__",
    )

    def __init__(
        self,
        kind: NodeKind,
        name: str,
        location: SourceLocation,
        *,
        modifiers: frozenset[str] = frozenset(),
        type_name: str | None = None,
        value: object = None,
        attributes: tuple[str, ...] = (),
        statements: tuple[Statement, ...] = (),
    ) -> None:
        if not name:
            raise ValueError("Node name must not be empty")
        self.kind = kind
        self.name = name
        self.location = location
        self.modifiers = frozenset(m.lower() for m in modifiers)
        self.type_name = type_name
        self.value = value
        self.attributes = attributes
        self.statements = statements
        self._parent_ref: weakref.ReferenceType["Node"] | None = None
        self._children: list[Node] = []

    def __repr__(self) -> str:
        return f"Node({self.kind.name}, {self.name!r}, {self.location})"

    @property
    def parent(self) -> "Node | None":
        """Enclosing node, or None for the root (or when the root was collected)."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def children(self) -> tuple["Node", ...]:
        """Children in declaration order."""
        return tuple(self._children)

    def append_child(self, child: "Node") -> "Node":
        """Attach child as the last child. Rejects re-parenting and cycles."""
        if child._parent_ref is not None:
            raise ValueError(f"{child!r} already has a parent")
        if child is self or any(a is child for a in self.ancestors()):
            raise ValueError(f"Attaching {child!r} under {self!r} would create a cycle")
        child._parent_ref = weakref.ref(self)
        self._children.append(child)
        return child

    def ancestors(self) -> Iterator["Node"]:
        """Yield parent, grandparent, ... up to the root."""
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def iter_children(self, kind: NodeKind) -> Iterator["Node"]:
        """Yield direct children of the given kind."""
        return (c for c in self._children if c.kind is kind)

    def enclosing(self, kind: NodeKind) -> "Node | None":
        """Nearest ancestor of the given kind."""
        for ancestor in self.ancestors():
            if ancestor.kind is kind:
                return ancestor
        return None

    def has_modifier(self, modifier: str) -> bool:
        return modifier.lower() in self.modifiers

    @property
    def attribute_names(self) -> frozenset[str]:
        """Attribute names normalized: `[Xunit.FactAttribute()]` -> `Fact`."""
        names: set[str] = set()
        for raw in self.attributes:
            name = raw.strip().strip("[]").split("(", 1)[0].strip()
            name = name.split(".")[-1]
            if name.endswith("Attribute") and name != "Attribute":
                name = name[: -len("Attribute")]
            if name:
                names.add(name)
        return frozenset(names)

    @property
    def is_top_level(self) -> bool:
        """True for declarations directly inside a source unit."""
        parent = self.parent
        return parent is not None and parent.kind is NodeKind.UNIT

    @property
    def is_constructor(self) -> bool:
        """A method named after its enclosing class, or explicitly marked 'constructor'."""
        if self.kind is not NodeKind.METHOD:
            return False
        if self.has_modifier("constructor"):
            return True
        parent = self.parent
        return parent is not None and parent.kind is NodeKind.CLASS and parent.name == self.name

    @property
    def is_optional_type(self) -> bool:
        """True if the declared type is nullable (`T?`, `Optional<T>`, `Nullable<T>`)."""
        if not self.type_name:
            return False
        type_name = self.type_name.strip()
        return (
            type_name.endswith("?")
            or type_name.startswith(("Optional<", "Nullable<", "Optional["))
        )

    @property
    def bare_type_name(self) -> str:
        """Type name without nullable marker, namespace or generic arguments."""
        if not self.type_name:
            return ""
        type_name = self.type_name.strip().rstrip("?")
        for wrapper in ("Optional<", "Nullable<"):
            if type_name.startswith(wrapper) and type_name.endswith(">"):
                type_name = type_name[len(wrapper):-1]
        generic_start = type_name.find("<")
        if generic_start != -1:
            type_name = type_name[:generic_start]
        return type_name.split(".")[-1]


class SymbolTree:
    """Traversal helpers over a built tree. No top-level functions."""

    @staticmethod
    def walk(root: Node) -> Iterator[Node]:
        """Pre-order depth-first traversal in declaration order. Each node exactly once."""
        stack: list[Node] = [root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    @staticmethod
    def field_of(node: Node, name: str) -> Node | None:
        """Resolve `name` (optionally `this.name`) to a field of node's enclosing class."""
        owner = node if node.kind is NodeKind.CLASS else node.enclosing(NodeKind.CLASS)
        if owner is None:
            return None
        bare = name.removeprefix("this.")
        for field_node in owner.iter_children(NodeKind.FIELD):
            if field_node.name == bare:
                return field_node
        return None
