"""Rules for mutation results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graphql import TypeKind
from graphql.language import NamedTypeNode, NonNullTypeNode, OperationType

from gqllinter.rules.helpers import (
    BUILTIN_SCALARS,
    is_introspection,
    named_type,
    root_fields,
    schema_types,
    type_to_str,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gqllinter.engine.diagnostics import Diagnostic
    from gqllinter.schema import SchemaDocument


def suggest_payload_type(mutation: str) -> str:
    """Suggest an object result type for *mutation* (``deleteUser`` -> ``DeleteUserResult``)."""
    base = mutation.removesuffix("Mutation").removesuffix("Command")
    base = base[:1].upper() + base[1:]
    if "delete" in mutation.lower():
        return base + "Result"
    return base + "Payload"


class NoScalarResultTypeOnMutation:
    """Mutations return an object type rather than a built-in scalar."""

    name = "no-scalar-result-type-on-mutation"
    description = (
        "Mutations should return object types, not scalars - following Guild best "
        "practices for better error handling"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for field in root_fields(schema, schema_types(schema), OperationType.MUTATION):
            result = named_type(field.type)
            if result not in BUILTIN_SCALARS:
                continue
            mutation = field.name.value
            yield schema.diagnostic(
                field,
                self.name,
                f"Mutation `{mutation}` returns scalar type `{result}`. Consider returning "
                f"an object type like `{suggest_payload_type(mutation)}` for better error "
                "handling and extensibility.",
            )


class MutationResponseNullable:
    """Fields of the object types returned by mutations are nullable.

    Only a non-null named type (``User!``) is reported; non-null lists are
    left alone.
    """

    name = "mutation-response-nullable"
    description = (
        "Mutation response fields should be nullable to prevent breaking changes "
        "during schema evolution"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        types = schema_types(schema)
        results = {
            named_type(f.type) for f in root_fields(schema, types, OperationType.MUTATION)
        }
        for type_name in sorted(results):
            entry = types.get(type_name)
            if entry is None or entry.kind is not TypeKind.OBJECT:
                continue
            for field in entry.fields:
                if is_introspection(field.name.value):
                    continue
                if not (
                    isinstance(field.type, NonNullTypeNode)
                    and isinstance(field.type.type, NamedTypeNode)
                ):
                    continue
                actual = type_to_str(field.type)
                yield schema.diagnostic(
                    field,
                    self.name,
                    f"Mutation response field `{type_name}.{field.name.value}` should be "
                    f"nullable (`{actual[:-1]}` instead of `{actual}`) to prevent breaking "
                    "changes when evolving the schema.",
                )

