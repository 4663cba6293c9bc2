"""Enum rules: forward-compatible cases and reserved value names."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graphql import TypeKind

from gqllinter.rules.helpers import (
    enum_values_of,
    is_introspection,
    named_type,
    schema_types,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gqllinter.engine.diagnostics import Diagnostic
    from gqllinter.rules.helpers import SchemaType
    from gqllinter.schema import SchemaDocument

UNKNOWN_CASE = "UNKNOWN"

RESERVED_VALUES: dict[str, str] = {
    "UNKNOWN": "OTHER",
    "UNSPECIFIED": "NOT_SET",
    "INVALID": "INVALID_VALUE",
    "NULL": "EMPTY_VALUE",
    "UNDEFINED": "NOT_DEFINED",
    "DEFAULT": "STANDARD",
    "NONE": "NO_VALUE",
    "EMPTY": "EMPTY_STATE",
    "ANY": "ALL_TYPES",
    "ALL": "EVERY",
}
"""Reserved enum value names mapped to the suggested replacement."""

_OUTPUT_KINDS = (TypeKind.OBJECT, TypeKind.INTERFACE)


def output_enums(types: dict[str, SchemaType]) -> set[str]:
    """Names of enums returned by an object or interface field."""
    used: set[str] = set()
    for entry in types.values():
        if entry.kind not in _OUTPUT_KINDS:
            continue
        for field in entry.fields:
            if is_introspection(field.name.value):
                continue
            used.add(named_type(field.type))
    return {name for name in used if _is_enum(types, name)}


def input_enums(schema: SchemaDocument, types: dict[str, SchemaType]) -> set[str]:
    """Names of enums accepted as input: input fields, field arguments, directive arguments."""
    used: set[str] = set()
    for entry in types.values():
        if entry.kind is TypeKind.INPUT_OBJECT:
            used.update(named_type(field.type) for field in entry.fields)
        elif entry.kind in _OUTPUT_KINDS:
            for field in entry.fields:
                if is_introspection(field.name.value):
                    continue
                used.update(named_type(arg.type) for arg in field.arguments or ())
    for directive in schema.directive_definitions():
        used.update(named_type(arg.type) for arg in directive.arguments or ())
    return {name for name in used if _is_enum(types, name)}


def _is_enum(types: dict[str, SchemaType], name: str) -> bool:
    entry = types.get(name)
    return entry is not None and entry.kind is TypeKind.ENUM


class EnumUnknownCase:
    """Enums returned by output fields declare an ``UNKNOWN`` case.

    Clients built against an older schema can then map values added later.
    Enums only used as input are not checked.
    """

    name = "enum-unknown-case"
    description = (
        "All enums used in output types (not inputs) must have an UNKNOWN case "
        "for future compatibility"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        types = schema_types(schema)
        for enum_name in sorted(output_enums(types)):
            entry = types[enum_name]
            if any(v.name.value == UNKNOWN_CASE for v in entry.values):
                continue
            yield schema.diagnostic(
                entry.node,
                self.name,
                f"Enum `{enum_name}` is used in output types but lacks an UNKNOWN case. "
                "Add `UNKNOWN` for future compatibility when new enum values are introduced.",
            )


class EnumReservedValues:
    """Enum values must not use a reserved name (compared case-insensitively)."""

    name = "enum-reserved-values"
    description = (
        "Prevent use of reserved enum values for extensibility and future compatibility"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for enum_name, value in enum_values_of(schema):
            value_name = value.name.value
            suggestion = RESERVED_VALUES.get(value_name.upper())
            if suggestion is None:
                continue
            yield schema.diagnostic(
                value,
                self.name,
                f"Enum value `{enum_name}.{value_name}` uses a reserved name. Consider "
                f"`{suggestion}` instead to avoid conflicts and maintain extensibility.",
            )
