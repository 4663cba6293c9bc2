"""Field nullability rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graphql import TypeKind
from graphql.language import NonNullTypeNode

from gqllinter.rules.helpers import is_introspection, named_type, schema_types, type_to_str

if TYPE_CHECKING:
    from collections.abc import Iterator

    from graphql.language import FieldDefinitionNode

    from gqllinter.engine.diagnostics import Diagnostic
    from gqllinter.schema import SchemaDocument

EXCLUDED_TYPES = frozenset({"PageInfo"})


class FieldsNullableExceptId:
    """Object fields are nullable, except identifiers typed ``ID``.

    Root types, ``PageInfo`` and Relay connection and edge types are not
    checked. An identifier is a field named ``id`` or ending in ``Id``/``ID``.
    """

    name = "fields-nullable-except-id"
    description = (
        "All fields should be nullable except ID fields to enable better schema "
        "evolution and avoid breaking changes"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        roots = schema.root_type_names()
        for type_name, entry in schema_types(schema).items():
            if entry.kind is not TypeKind.OBJECT or type_name in roots:
                continue
            lowered = type_name.lower()
            if type_name in EXCLUDED_TYPES or lowered.endswith(("connection", "edge")):
                continue
            for field in entry.fields:
                if is_introspection(field.name.value) or is_id_field(field):
                    continue
                if not isinstance(field.type, NonNullTypeNode):
                    continue
                yield schema.diagnostic(
                    field,
                    self.name,
                    f"Field `{type_name}.{field.name.value}` should be nullable "
                    f"(`{type_to_str(field.type.type)}` instead of `{type_to_str(field.type)}`) "
                    "to enable schema evolution and avoid breaking changes.",
                )


def is_id_field(field: FieldDefinitionNode) -> bool:
    name = field.name.value
    named_like_id = name == "id" or name.endswith(("Id", "ID"))
    return named_like_id and named_type(field.type) == "ID"
