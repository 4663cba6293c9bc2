"""List rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graphql.language import ListTypeNode, NonNullTypeNode

from gqllinter.rules.helpers import (
    INPUT_NODES,
    INTERFACE_NODES,
    OBJECT_NODES,
    fields_of,
    type_to_str,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from graphql.language import TypeNode

    from gqllinter.engine.diagnostics import Diagnostic
    from gqllinter.schema import SchemaDocument


class ListNonNullItems:
    """List fields must not contain nullable items, at any nesting depth.

    Relay connection types (``...Connection``) are exempt.
    """

    name = "list-non-null-items"
    description = (
        "Requires list being returned to not contain null values "
        "(checks recursively for nested lists)"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for type_name, field in fields_of(schema, OBJECT_NODES + INTERFACE_NODES + INPUT_NODES):
            if type_name.lower().endswith("connection"):
                continue
            if not has_nullable_items(field.type):
                continue
            yield schema.diagnostic(
                field,
                self.name,
                f"List field `{type_name}.{field.name.value}` contains nullable items. "
                f"Use `{suggest_non_null(field.type)}` instead to prevent null pointer issues.",
            )


def _list_of(type_node: TypeNode) -> ListTypeNode | None:
    if isinstance(type_node, NonNullTypeNode):
        type_node = type_node.type
    return type_node if isinstance(type_node, ListTypeNode) else None


def has_nullable_items(type_node: TypeNode) -> bool:
    """True when *type_node* is a list whose items (or nested items) are nullable."""
    list_node = _list_of(type_node)
    if list_node is None:
        return False
    item = list_node.type
    if not isinstance(item, NonNullTypeNode):
        return True
    return has_nullable_items(item)


def suggest_non_null(type_node: TypeNode) -> str:
    """Render *type_node* with every list item made non-null (``[[A]]`` -> ``[[A!]!]``)."""

    def render_item(node: TypeNode) -> str:
        inner = node.type if isinstance(node, NonNullTypeNode) else node
        if isinstance(inner, ListTypeNode):
            return f"[{render_item(inner.type)}]!"
        return f"{type_to_str(inner)}!"

    outer_non_null = isinstance(type_node, NonNullTypeNode)
    list_node = _list_of(type_node)
    if list_node is None:
        return type_to_str(type_node)
    rendered = f"[{render_item(list_node.type)}]"
    return rendered + "!" if outer_non_null else rendered
