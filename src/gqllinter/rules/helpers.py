"""Traversal helpers shared by the built-in rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from graphql import TypeKind
from graphql.language import (
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ListTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    print_ast,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from graphql.language import (
        DirectiveNode,
        EnumValueDefinitionNode,
        FieldDefinitionNode,
        InputValueDefinitionNode,
        Node,
        OperationType,
        TypeNode,
    )

    from gqllinter.schema import SchemaDocument

OBJECT_NODES = (ObjectTypeDefinitionNode, ObjectTypeExtensionNode)
INTERFACE_NODES = (InterfaceTypeDefinitionNode, InterfaceTypeExtensionNode)
INPUT_NODES = (InputObjectTypeDefinitionNode, InputObjectTypeExtensionNode)
ENUM_NODES = (EnumTypeDefinitionNode, EnumTypeExtensionNode)
UNION_NODES = (UnionTypeDefinitionNode, UnionTypeExtensionNode)
SCALAR_NODES = (ScalarTypeDefinitionNode, ScalarTypeExtensionNode)

BUILTIN_SCALARS = frozenset({"String", "Int", "Float", "Boolean", "ID"})

_KIND_LABELS: tuple[tuple[type[Node], str], ...] = (
    (ObjectTypeDefinitionNode, "object type"),
    (InterfaceTypeDefinitionNode, "interface"),
    (InputObjectTypeDefinitionNode, "input type"),
    (EnumTypeDefinitionNode, "enum"),
    (UnionTypeDefinitionNode, "union"),
    (ScalarTypeDefinitionNode, "scalar"),
)

_TYPE_KINDS: tuple[tuple[tuple[type[Node], ...], TypeKind], ...] = (
    (OBJECT_NODES, TypeKind.OBJECT),
    (INTERFACE_NODES, TypeKind.INTERFACE),
    (INPUT_NODES, TypeKind.INPUT_OBJECT),
    (ENUM_NODES, TypeKind.ENUM),
    (UNION_NODES, TypeKind.UNION),
    (SCALAR_NODES, TypeKind.SCALAR),
)


def is_introspection(name: str) -> bool:
    return name.startswith("__")


def kind_label(node: Node) -> str:
    """Human label for a type definition node (``object type``, ``enum``...)."""
    for cls, label in _KIND_LABELS:
        if isinstance(node, cls):
            return label
    return "type"


def type_kind(node: Node) -> TypeKind | None:
    """Return the introspection kind of a type definition or extension node."""
    for classes, kind in _TYPE_KINDS:
        if isinstance(node, classes):
            return kind
    return None


def description_of(node: Node) -> str:
    """Return the node's description text, or ``""``."""
    description = getattr(node, "description", None)
    if description is None:
        return ""
    return str(description.value)


def type_nodes(schema: SchemaDocument) -> Iterator[Node]:
    """Yield type definitions followed by type extensions."""
    yield from schema.type_definitions()
    yield from schema.type_extensions()


def fields_of(
    schema: SchemaDocument, kinds: tuple[type[Node], ...]
) -> Iterator[tuple[str, FieldDefinitionNode | InputValueDefinitionNode]]:
    """Yield ``(type_name, field)`` for every field of the given node kinds.

    Definitions and their extensions are both visited; introspection types
    and fields are skipped.
    """
    for node in type_nodes(schema):
        if not isinstance(node, kinds):
            continue
        type_name = node.name.value
        if is_introspection(type_name):
            continue
        for field_node in getattr(node, "fields", None) or ():
            if not is_introspection(field_node.name.value):
                yield type_name, field_node


def enum_values_of(schema: SchemaDocument) -> Iterator[tuple[str, EnumValueDefinitionNode]]:
    """Yield ``(enum_name, value)`` for every enum value."""
    for node in type_nodes(schema):
        if not isinstance(node, ENUM_NODES):
            continue
        if is_introspection(node.name.value):
            continue
        for value in node.values or ():
            yield node.name.value, value


def find_directive(node: Node, name: str) -> DirectiveNode | None:
    for directive in getattr(node, "directives", None) or ():
        if directive.name.value == name:
            return directive
    return None


def type_to_str(type_node: TypeNode) -> str:
    """Render a type reference as SDL (``[String!]!``)."""
    return print_ast(type_node)


def named_type(type_node: TypeNode) -> str:
    """Return the name under every list and non-null wrapper (``[User!]!`` -> ``User``)."""
    while isinstance(type_node, (ListTypeNode, NonNullTypeNode)):
        type_node = type_node.type
    return str(type_node.name.value)


def is_list_type(type_node: TypeNode) -> bool:
    """True for ``[X]`` and ``[X]!``."""
    if isinstance(type_node, NonNullTypeNode):
        type_node = type_node.type
    return isinstance(type_node, ListTypeNode)


def is_nested_list_type(type_node: TypeNode) -> bool:
    """True when a list holds another list (``[[X]]``, ``[[X!]!]!``...)."""
    if isinstance(type_node, NonNullTypeNode):
        type_node = type_node.type
    return isinstance(type_node, ListTypeNode) and is_list_type(type_node.type)


# ---------------------------------------------------------------------------
# Merged type view
# ---------------------------------------------------------------------------


@dataclass
class SchemaType:
    """A named type with the members of its ``extend`` blocks folded in.

    ``node`` is the definition, or the first extension when the file only
    extends the type.
    """

    name: str
    kind: TypeKind
    node: Node
    fields: list[FieldDefinitionNode | InputValueDefinitionNode] = field(default_factory=list)
    interfaces: list[str] = field(default_factory=list)
    members: list[str] = field(default_factory=list)
    values: list[EnumValueDefinitionNode] = field(default_factory=list)

    def get_field(self, name: str) -> FieldDefinitionNode | InputValueDefinitionNode | None:
        for field_node in self.fields:
            if field_node.name.value == name:
                return field_node
        return None


def schema_types(schema: SchemaDocument) -> dict[str, SchemaType]:
    """Index the document's named types, definitions first, extensions merged in.

    Introspection types are left out. An extension whose kind differs from
    the definition it extends is ignored.
    """
    types: dict[str, SchemaType] = {}
    for node in type_nodes(schema):
        name = node.name.value
        kind = type_kind(node)
        if kind is None or is_introspection(name):
            continue
        entry = types.get(name)
        if entry is None:
            entry = types[name] = SchemaType(name=name, kind=kind, node=node)
        elif entry.kind is not kind:
            continue
        entry.fields.extend(getattr(node, "fields", None) or ())
        entry.interfaces.extend(i.name.value for i in getattr(node, "interfaces", None) or ())
        entry.members.extend(t.name.value for t in getattr(node, "types", None) or ())
        entry.values.extend(getattr(node, "values", None) or ())
    return types


def root_fields(
    schema: SchemaDocument, types: dict[str, SchemaType], operation: OperationType
) -> list[FieldDefinitionNode]:
    """Return the fields of the *operation* root type, or ``[]`` when the file declares none."""
    root = types.get(schema.root_type_name(operation))
    if root is None or root.kind is not TypeKind.OBJECT:
        return []
    return [f for f in root.fields if not is_introspection(f.name.value)]  # type: ignore[misc]
