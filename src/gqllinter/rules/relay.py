"""Relay cursor connection rules.

A connection type (name ending in ``Connection``) lists ``edges`` and a
non-null ``pageInfo``; each edge type carries a ``node`` and a ``cursor``;
fields returning a connection take ``first``/``after`` and/or
``last``/``before`` arguments.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from graphql import TypeKind
from graphql.language import NamedTypeNode, NonNullTypeNode

from gqllinter.rules.helpers import (
    is_list_type,
    is_nested_list_type,
    named_type,
    schema_types,
    type_to_str,
)
from gqllinter.rules.naming import PASCAL_CASE_RE

if TYPE_CHECKING:
    from collections.abc import Iterator

    from graphql.language import FieldDefinitionNode, TypeNode

    from gqllinter.engine.diagnostics import Diagnostic
    from gqllinter.rules.helpers import SchemaType
    from gqllinter.schema import SchemaDocument

CONNECTION_SUFFIX = "Connection"
EDGE_SUFFIX = "Edge"
NODE_INTERFACE = "Node"

PAGE_INFO_TYPE = "PageInfo"
PAGE_INFO_FIELDS: tuple[tuple[str, str, str], ...] = (
    (
        "hasNextPage",
        "Boolean!",
        "indicates whether more edges exist following the current page",
    ),
    (
        "hasPreviousPage",
        "Boolean!",
        "indicates whether more edges exist prior to the current page",
    ),
    (
        "startCursor",
        "String",
        "cursor corresponding to the first edge in the current page (nullable if no results)",
    ),
    (
        "endCursor",
        "String",
        "cursor corresponding to the last edge in the current page (nullable if no results)",
    ),
)
"""``(field, expected type, meaning)`` for every field a ``PageInfo`` must declare."""

_NODE_KINDS = frozenset(
    {TypeKind.SCALAR, TypeKind.ENUM, TypeKind.OBJECT, TypeKind.INTERFACE, TypeKind.UNION}
)
_INTEGER_TYPES = frozenset({"Int"})
_CURSOR_TYPES = frozenset({"String", "Cursor"})


def is_connection_name(name: str) -> bool:
    return name.lower().endswith("connection")


def is_edge_name(name: str) -> bool:
    return name.lower().endswith("edge")


def _is_named(type_node: TypeNode, names: frozenset[str]) -> bool:
    """True for ``X`` or ``X!`` where ``X`` is one of *names*."""
    if isinstance(type_node, NonNullTypeNode):
        type_node = type_node.type
    return isinstance(type_node, NamedTypeNode) and type_node.name.value in names


def _implements_node(entry: SchemaType, types: dict[str, SchemaType]) -> bool:
    node_iface = types.get(NODE_INTERFACE)
    if node_iface is None or node_iface.kind is not TypeKind.INTERFACE:
        return True
    return NODE_INTERFACE in entry.interfaces


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class RelayConnectionTypes:
    """Connection types are objects with a single-level ``edges`` list and a ``pageInfo!``."""

    name = "relay-connection-types"
    description = (
        "Ensure Connection types follow Relay specification - must be Object types with "
        "edges and pageInfo fields"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for type_name, entry in schema_types(schema).items():
            if is_connection_name(type_name):
                yield from self._check_connection(schema, entry)

    def _check_connection(self, schema: SchemaDocument, entry: SchemaType) -> Iterator[Diagnostic]:
        if entry.kind is not TypeKind.OBJECT:
            yield schema.diagnostic(
                entry.node,
                self.name,
                f"Connection type `{entry.name}` must be an Object type, "
                f"but is {entry.kind.name}.",
            )
            return
        edges = entry.get_field("edges")
        if edges is None:
            yield schema.diagnostic(
                entry.node,
                self.name,
                f"Connection type `{entry.name}` must contain a field `edges` that returns "
                "a list type.",
            )
        elif not is_list_type(edges.type):
            yield schema.diagnostic(
                edges,
                self.name,
                f"Connection type `{entry.name}` field `edges` must return a list type, "
                f"but returns {type_to_str(edges.type)}.",
            )
        elif is_nested_list_type(edges.type):
            yield schema.diagnostic(
                edges,
                self.name,
                f"Connection type `{entry.name}` field `edges` must return a single-level "
                f"list type, but returns a nested list {type_to_str(edges.type)}.",
            )
        page_info = entry.get_field("pageInfo")
        if page_info is None or not isinstance(page_info.type, NonNullTypeNode):
            yield schema.diagnostic(
                entry.node,
                self.name,
                f"Connection type `{entry.name}` must contain a field `pageInfo` that returns "
                "a non-null PageInfo Object type.",
            )


class RelayEdgeTypes:
    """Edge types listed by a connection carry ``node`` and a ``String`` ``cursor``.

    When the schema declares a ``Node`` interface, the edge's node type (or
    every object member of a union node type) must implement it.
    """

    name = "relay-edge-types"
    description = (
        "Ensure Edge types follow Relay specification - must be Object types with node "
        "and cursor fields, where node implements Node interface"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        types = schema_types(schema)
        edge_names: set[str] = set()
        for type_name, entry in types.items():
            if not is_connection_name(type_name) or entry.kind is not TypeKind.OBJECT:
                continue
            edges = entry.get_field("edges")
            if edges is not None:
                edge_names.add(named_type(edges.type))
        for edge_name in sorted(edge_names):
            edge = types.get(edge_name)
            if edge is not None:
                yield from self._check_edge(schema, edge, types)

    def _check_edge(
        self, schema: SchemaDocument, edge: SchemaType, types: dict[str, SchemaType]
    ) -> Iterator[Diagnostic]:
        if edge.kind is not TypeKind.OBJECT:
            yield schema.diagnostic(
                edge.node,
                self.name,
                f"Edge type `{edge.name}` must be an Object type, but is {edge.kind.name}.",
            )
            return
        node = edge.get_field("node")
        if node is None:
            yield schema.diagnostic(
                edge.node,
                self.name,
                f"Edge type `{edge.name}` must contain a field `node` that returns either "
                "Scalar, Enum, Object, Interface, Union, or a non-null wrapper around one "
                "of those types.",
            )
        else:
            yield from self._check_node_field(schema, edge, node, types)

        cursor = edge.get_field("cursor")
        if cursor is None:
            yield schema.diagnostic(
                edge.node,
                self.name,
                f"Edge type `{edge.name}` must contain a field `cursor` that returns either "
                "String, Scalar, or a non-null wrapper around one of those types.",
            )
        elif not _is_named(cursor.type, frozenset({"String"})):
            yield schema.diagnostic(
                cursor,
                self.name,
                f"Edge type `{edge.name}` field `cursor` must return String, or a non-null "
                f"wrapper around a String, but returns {type_to_str(cursor.type)}.",
            )

    def _check_node_field(
        self,
        schema: SchemaDocument,
        edge: SchemaType,
        node: FieldDefinitionNode,
        types: dict[str, SchemaType],
    ) -> Iterator[Diagnostic]:
        if is_list_type(node.type):
            yield schema.diagnostic(
                node,
                self.name,
                f"Edge type `{edge.name}` field `node` cannot return a list type, "
                f"but returns {type_to_str(node.type)}.",
            )
        target = types.get(named_type(node.type))
        if target is None:
            return
        if target.kind not in _NODE_KINDS:
            yield schema.diagnostic(
                node,
                self.name,
                f"Edge type `{edge.name}` field `node` must return Scalar, Enum, Object, "
                f"Interface, or Union type, but returns {target.kind.name}.",
            )
        elif target.kind in (TypeKind.OBJECT, TypeKind.INTERFACE):
            if not _implements_node(target, types):
                yield schema.diagnostic(
                    node,
                    self.name,
                    f"Edge type `{edge.name}` field `node` type `{target.name}` must "
                    "implement Node interface.",
                )
        elif target.kind is TypeKind.UNION:
            for member_name in target.members:
                member = types.get(member_name)
                if member is None or member.kind not in (TypeKind.OBJECT, TypeKind.INTERFACE):
                    continue
                if not _implements_node(member, types):
                    yield schema.diagnostic(
                        node,
                        self.name,
                        f"Edge type `{edge.name}` field `node` union type `{target.name}` "
                        f"member `{member_name}` must implement Node interface.",
                    )


class RelayNamingConvention:
    """``<Entity>Connection`` types list ``<Entity>Edge``; edges are named ``<Entity>Edge``."""

    name = "relay-naming-convention"
    description = (
        "Ensure Connection and Edge types follow Relay naming conventions: Connection must "
        "be named [Entity]Connection with edges field of type [Entity]Edge, Edge must be "
        "named [Entity]Edge"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for type_name, entry in schema_types(schema).items():
            if is_connection_name(type_name):
                yield from self._check_connection(schema, entry)
            if is_edge_name(type_name):
                yield from self._check_entity(schema, entry, EDGE_SUFFIX)

    def _check_entity(
        self, schema: SchemaDocument, entry: SchemaType, suffix: str
    ) -> Iterator[Diagnostic]:
        if not entry.name.endswith(suffix):
            yield schema.diagnostic(
                entry.node,
                self.name,
                f"{suffix} type `{entry.name}` must follow the naming convention "
                f"[Entity]{suffix} with proper case.",
            )
            return
        entity = entry.name.removesuffix(suffix)
        if not entity:
            yield schema.diagnostic(
                entry.node,
                self.name,
                f"{suffix} type `{entry.name}` must have a valid entity name before '{suffix}'.",
            )
        elif not PASCAL_CASE_RE.match(entity):
            yield schema.diagnostic(
                entry.node,
                self.name,
                f"{suffix} type `{entry.name}` entity name `{entity}` must be PascalCase.",
            )

    def _check_connection(self, schema: SchemaDocument, entry: SchemaType) -> Iterator[Diagnostic]:
        problems = list(self._check_entity(schema, entry, CONNECTION_SUFFIX))
        if problems:
            yield from problems
            return
        edges = entry.get_field("edges")
        if edges is None:
            return
        expected = entry.name.removesuffix(CONNECTION_SUFFIX) + EDGE_SUFFIX
        actual = named_type(edges.type)
        if actual != expected:
            yield schema.diagnostic(
                edges,
                self.name,
                f"Connection type `{entry.name}` edges field must reference `{expected}`, "
                f"but references `{actual}`.",
            )


class RelayPageInfo:
    """``PageInfo`` declares the four Relay paging fields with their exact types."""

    name = "relay-pageinfo"
    description = "Ensure PageInfo objects comply with the Relay specification requirements"

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        entry = schema_types(schema).get(PAGE_INFO_TYPE)
        if entry is None or entry.kind is not TypeKind.OBJECT:
            return
        for field_name, expected, meaning in PAGE_INFO_FIELDS:
            field = entry.get_field(field_name)
            if field is None:
                yield schema.diagnostic(
                    entry.node,
                    self.name,
                    f"PageInfo must contain field `{field_name}` that returns {expected} "
                    f"({meaning}).",
                )
                continue
            actual = type_to_str(field.type)
            if actual != expected:
                yield schema.diagnostic(
                    field,
                    self.name,
                    f"PageInfo field `{field_name}` must return {expected}, "
                    f"but returns {actual}.",
                )


class RelayArguments:
    """Fields returning a connection take complete forward and/or backward paging arguments.

    ``first``/``last`` are ``Int``; ``after``/``before`` are ``String`` or
    ``Cursor``. Non-null variants are accepted.
    """

    name = "relay-arguments"
    description = (
        "Ensure fields returning Connection types include proper Relay pagination "
        "arguments (first/after for forward, last/before for backward)"
    )

    _PAIRS: tuple[tuple[str, str, str], ...] = (
        ("first", "after", "forward"),
        ("after", "first", "forward"),
        ("last", "before", "backward"),
        ("before", "last", "backward"),
    )
    _ARGUMENT_TYPES: tuple[tuple[str, frozenset[str], str], ...] = (
        ("first", _INTEGER_TYPES, "a non-negative integer type (Int)"),
        ("after", _CURSOR_TYPES, "a Cursor type (String)"),
        ("last", _INTEGER_TYPES, "a non-negative integer type (Int)"),
        ("before", _CURSOR_TYPES, "a Cursor type (String)"),
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        types = schema_types(schema)
        connections = {name for name in types if is_connection_name(name)}
        for type_name, entry in types.items():
            if entry.kind not in (TypeKind.OBJECT, TypeKind.INTERFACE):
                continue
            for field in entry.fields:
                if named_type(field.type) in connections:
                    yield from self._check_field(schema, type_name, field)

    def _check_field(
        self, schema: SchemaDocument, type_name: str, field: FieldDefinitionNode
    ) -> Iterator[Diagnostic]:
        args = {arg.name.value: arg for arg in field.arguments or ()}
        where = f"Field `{type_name}.{field.name.value}`"
        for present, missing, direction in self._PAIRS:
            if present in args and missing not in args:
                yield schema.diagnostic(
                    field,
                    self.name,
                    f"{where} has `{present}` argument but is missing `{missing}` argument "
                    f"for complete {direction} pagination.",
                )
        if not args.keys() & {"first", "after", "last", "before"}:
            yield schema.diagnostic(
                field,
                self.name,
                f"{where} returns Connection type but lacks proper pagination arguments. "
                "Must include forward pagination arguments (first and after), backward "
                "pagination arguments (last and before), or both.",
            )
        for arg_name, accepted, expected in self._ARGUMENT_TYPES:
            arg = args.get(arg_name)
            if arg is not None and not _is_named(arg.type, accepted):
                yield schema.diagnostic(
                    field,
                    self.name,
                    f"{where} argument `{arg_name}` must be {expected}, "
                    f"but is {type_to_str(arg.type)}.",
                )
