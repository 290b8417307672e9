"""Use Case: Build Symbol Model - turn source unit mappings into a linked Node tree."""

from collections.abc import Iterable, Mapping
from typing import ClassVar

from convention_linter.domain.errors import ParseError
from convention_linter.domain.symbols import (
    Assignment,
    Call,
    Comparison,
    Node,
    NodeKind,
    SourceLocation,
    Statement,
)


class SymbolModelBuilder:
    """
    Builds the abstract symbol tree from source units.

    A source unit is `{file: str, declarations: [decl, ...]}`; a declaration is
    `{kind, name, line?, modifiers?, type?, value?, attributes?, members?, statements?}`.
    Any malformed input raises ParseError naming the file and the offending path.
    """

    ROOT_NAME: ClassVar[str] = "<root>"

    KIND_ALIASES: ClassVar[dict[str, NodeKind]] = {
        "class": NodeKind.CLASS,
        "interface": NodeKind.CLASS,
        "struct": NodeKind.CLASS,
        "record": NodeKind.CLASS,
        "method": NodeKind.METHOD,
        "constructor": NodeKind.METHOD,
        "field": NodeKind.FIELD,
        "parameter": NodeKind.PARAMETER,
        "local_variable": NodeKind.LOCAL_VARIABLE,
        "localvariable": NodeKind.LOCAL_VARIABLE,
        "local": NodeKind.LOCAL_VARIABLE,
        "enum": NodeKind.ENUM,
        "enum_member": NodeKind.ENUM_MEMBER,
        "enummember": NodeKind.ENUM_MEMBER,
    }

    ALLOWED_CHILDREN: ClassVar[dict[NodeKind, frozenset[NodeKind]]] = {
        NodeKind.UNIT: frozenset({NodeKind.CLASS, NodeKind.ENUM}),
        NodeKind.CLASS: frozenset(
            {NodeKind.CLASS, NodeKind.ENUM, NodeKind.FIELD, NodeKind.METHOD}
        ),
        NodeKind.ENUM: frozenset({NodeKind.ENUM_MEMBER}),
        NodeKind.METHOD: frozenset({NodeKind.PARAMETER, NodeKind.LOCAL_VARIABLE}),
    }

    STATEMENT_OPS: ClassVar[tuple[str, ...]] = ("call", "compare", "assign")

    def build(self, source_units: Iterable[Mapping[str, object]]) -> Node:
        """Return the root Node. Units become UNIT children in input order."""
        root = Node(NodeKind.ROOT, self.ROOT_NAME, SourceLocation("", 0))
        for index, unit in enumerate(source_units):
            root.append_child(self._build_unit(unit, index))
        return root

    def _build_unit(self, unit: object, index: int) -> Node:
        if not isinstance(unit, Mapping):
            raise ParseError(
                f"source unit must be a mapping, got {type(unit).__name__}",
                path=f"units[{index}]",
            )
        file = unit.get("file")
        if not isinstance(file, str) or not file.strip():
            raise ParseError("source unit needs a non-empty 'file'", path=f"units[{index}]")
        unit_node = Node(NodeKind.UNIT, file, SourceLocation(file, 0))
        declarations = self._list_field(unit, "declarations", file, "")
        for position, declaration in enumerate(declarations):
            self._build_declaration(
                declaration, unit_node, file, f"declarations[{position}]"
            )
        return unit_node

    def _build_declaration(
        self, raw: object, parent: Node, file: str, path: str
    ) -> Node:
        if not isinstance(raw, Mapping):
            raise ParseError(
                f"declaration must be a mapping, got {type(raw).__name__}", file, path
            )
        kind, forced_modifier = self._parse_kind(raw.get("kind"), file, path)
        allowed = self.ALLOWED_CHILDREN.get(parent.kind, frozenset())
        if kind not in allowed:
            raise ParseError(
                f"a {kind.label} cannot be declared inside a {parent.kind.label}", file, path
            )
        name = raw.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ParseError("declaration needs a non-empty 'name'", file, path)

        modifiers = set(self._string_list(raw, "modifiers", file, path))
        if forced_modifier:
            modifiers.add(forced_modifier)
        line = self._parse_line(raw, parent, file, path)
        node = Node(
            kind,
            name.strip(),
            SourceLocation(file, line),
            modifiers=frozenset(modifiers),
            type_name=self._optional_string(raw, "type", file, path),
            value=raw.get("value"),
            attributes=tuple(self._string_list(raw, "attributes", file, path)),
            statements=self._parse_statements(raw, kind, line, file, path),
        )
        parent.append_child(node)
        for position, member in enumerate(self._list_field(raw, "members", file, path)):
            self._build_declaration(member, node, file, f"{path}.members[{position}]")
        return node

    def _parse_kind(
        self, raw_kind: object, file: str, path: str
    ) -> tuple[NodeKind, str | None]:
        if not isinstance(raw_kind, str):
            raise ParseError("declaration needs a string 'kind'", file, path)
        key = raw_kind.strip().lower()
        kind = self.KIND_ALIASES.get(key)
        if kind is None:
            raise ParseError(f"unknown declaration kind '{raw_kind}'", file, path)
        return kind, "constructor" if key == "constructor" else None

    def _parse_line(self, raw: Mapping[str, object], parent: Node, file: str, path: str) -> int:
        """Explicit 'line' (non-negative int); defaults to the parent's line."""
        line = raw.get("line", parent.location.line)
        if isinstance(line, bool) or not isinstance(line, int) or line < 0:
            raise ParseError(f"'line' must be a non-negative integer, got {line!r}", file, path)
        return line

    def _parse_statements(
        self, raw: Mapping[str, object], kind: NodeKind, line_default: int, file: str, path: str
    ) -> tuple[Statement, ...]:
        """Statements of a method; a statement without 'line' takes the method's line."""
        items = self._list_field(raw, "statements", file, path)
        if items and kind is not NodeKind.METHOD:
            raise ParseError(f"only methods carry statements, not a {kind.label}", file, path)
        statements: list[Statement] = []
        for position, item in enumerate(items):
            where = f"{path}.statements[{position}]"
            if not isinstance(item, Mapping):
                raise ParseError("statement must be a mapping", file, where)
            statements.append(self._parse_statement(item, line_default, file, where))
        return tuple(statements)

    def _parse_statement(
        self, item: Mapping[str, object], line_default: int, file: str, where: str
    ) -> Statement:
        op = item.get("op")
        line = item.get("line", line_default)
        if isinstance(line, bool) or not isinstance(line, int) or line < 0:
            raise ParseError(f"'line' must be a non-negative integer, got {line!r}", file, where)
        if op == "call":
            return Call(
                target=self._required_string(item, "target", file, where),
                member=self._required_string(item, "member", file, where),
                line=line,
            )
        if op == "compare":
            return Comparison(
                left=self._operand(item, "left", file, where),
                operator=self._required_string(item, "operator", file, where),
                right=self._operand(item, "right", file, where),
                line=line,
            )
        if op == "assign":
            return Assignment(
                target=self._required_string(item, "target", file, where),
                value=self._operand(item, "value", file, where),
                line=line,
            )
        raise ParseError(
            f"unknown statement op {op!r} (expected one of {', '.join(self.STATEMENT_OPS)})",
            file,
            where,
        )

    @staticmethod
    def _list_field(raw: Mapping[str, object], key: str, file: str, path: str) -> list[object]:
        value = raw.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise ParseError(f"'{key}' must be a list", file, path or None)
        return value

    @staticmethod
    def _string_list(raw: Mapping[str, object], key: str, file: str, path: str) -> list[str]:
        values = SymbolModelBuilder._list_field(raw, key, file, path)
        if not all(isinstance(v, str) for v in values):
            raise ParseError(f"'{key}' must be a list of strings", file, path)
        return [str(v) for v in values]

    @staticmethod
    def _optional_string(raw: Mapping[str, object], key: str, file: str, path: str) -> str | None:
        value = raw.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ParseError(f"'{key}' must be a string", file, path)
        return value

    @staticmethod
    def _required_string(raw: Mapping[str, object], key: str, file: str, path: str) -> str:
        value = raw.get(key)
        if not isinstance(value, str) or not value:
            raise ParseError(f"statement needs a non-empty string '{key}'", file, path)
        return value

    @staticmethod
    def _operand(raw: Mapping[str, object], key: str, file: str, path: str) -> str | None:
        """Identifier or literal text; an explicit null stands for the null literal."""
        if key not in raw:
            raise ParseError(f"statement needs an operand '{key}' (use null for the null literal)", file, path)
        value = raw[key]
        if value is None:
            return None
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, (str, int, float)):
            return str(value)
        raise ParseError(f"'{key}' must be an identifier or literal", file, path)
