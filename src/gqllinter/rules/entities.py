"""Rules for federated entities (types carrying ``@key``)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graphql.language import NonNullTypeNode

from gqllinter.rules.helpers import (
    BUILTIN_SCALARS,
    INTERFACE_NODES,
    OBJECT_NODES,
    fields_of,
    find_directive,
    is_introspection,
    named_type,
    type_nodes,
    type_to_str,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gqllinter.engine.diagnostics import Diagnostic
    from gqllinter.schema import SchemaDocument

KEY_DIRECTIVE = "key"
ID_SUFFIXES = ("Id", "ID")


def entity_names(schema: SchemaDocument) -> set[str]:
    """Names of types whose definition or an extension carries ``@key``."""
    return {
        node.name.value
        for node in type_nodes(schema)
        if not is_introspection(node.name.value) and find_directive(node, KEY_DIRECTIVE)
    }


class LinkViaTypesNotIds:
    """A scalar ``<entity>Id`` field is replaced by a field returning the entity itself."""

    name = "link-via-types-not-ids"
    description = (
        "Fields should reference entity types directly instead of storing IDs of those entities"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        entities = entity_names(schema)
        if not entities:
            return
        for type_name, field in fields_of(schema, OBJECT_NODES + INTERFACE_NODES):
            field_name = field.name.value
            if not field_name.endswith(ID_SUFFIXES) or len(field_name) <= 2:
                continue
            if named_type(field.type) not in BUILTIN_SCALARS:
                continue
            prefix = field_name[:-2]
            entity = prefix[0].upper() + prefix[1:]
            if entity not in entities:
                continue
            suggestion = f"{prefix[0].lower()}{prefix[1:]}: {entity}"
            if isinstance(field.type, NonNullTypeNode):
                suggestion += "!"
            yield schema.diagnostic(
                field,
                self.name,
                f"Field `{type_name}.{field_name}` should reference the `{entity}` type "
                f"directly instead of storing its ID. Consider using `{suggestion}` instead "
                f"of `{field_name}: {type_to_str(field.type)}`",
            )
