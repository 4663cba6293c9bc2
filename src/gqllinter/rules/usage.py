"""Rules that find declarations nothing refers to."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graphql import TypeKind

from gqllinter.rules.helpers import BUILTIN_SCALARS, is_introspection, named_type, schema_types

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gqllinter.engine.diagnostics import Diagnostic
    from gqllinter.rules.helpers import SchemaType
    from gqllinter.schema import SchemaDocument

_FIELD_KINDS = (TypeKind.OBJECT, TypeKind.INTERFACE)


def referenced_types(entry: SchemaType) -> set[str]:
    """Names *entry* points at: field and argument types, interfaces, union members."""
    names = {named_type(field.type) for field in entry.fields}
    for field in entry.fields:
        names.update(named_type(arg.type) for arg in getattr(field, "arguments", None) or ())
    names.update(entry.interfaces)
    names.update(entry.members)
    return names


def reachable_types(schema: SchemaDocument, types: dict[str, SchemaType]) -> set[str]:
    """Types reachable from the root types and directive definitions.

    An object or interface implementing a reachable interface is reachable too.
    """
    reached = set(schema.root_type_names()) | BUILTIN_SCALARS
    for directive in schema.directive_definitions():
        reached.update(named_type(arg.type) for arg in directive.arguments or ())
    pending = [name for name in reached if name in types]
    while pending:
        entry = types[pending.pop()]
        found = referenced_types(entry)
        if entry.kind is TypeKind.INTERFACE:
            found.update(name for name, t in types.items() if entry.name in t.interfaces)
        for name in found - reached:
            reached.add(name)
            if name in types:
                pending.append(name)
    return reached


class NoUnusedTypes:
    """Every declared type is reachable from a root type."""

    name = "no-unused-types"
    description = (
        "All declared types must be used somewhere in the schema - custom rule to "
        "support Federation"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        types = schema_types(schema)
        reached = reachable_types(schema, types)
        for type_name, entry in types.items():
            if type_name in reached:
                continue
            yield schema.diagnostic(
                entry.node,
                self.name,
                f"Type `{type_name}` is declared but never used. Consider removing it or "
                "using it in the schema.",
            )


class NoUnusedFields:
    """Fields of object and interface types that no other type refers to.

    Root types are skipped. Fields an object shares with one of its
    interfaces count as used.
    """

    name = "no-unused-fields"
    description = (
        "Detect unused fields in schema - following Guild best practices for clean schemas"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        types = schema_types(schema)
        referenced: set[str] = set()
        for entry in types.values():
            referenced |= referenced_types(entry)
        roots = schema.root_type_names()
        for type_name, entry in types.items():
            if entry.kind not in _FIELD_KINDS or type_name in roots or type_name in referenced:
                continue
            inherited = {
                field.name.value
                for iface in entry.interfaces
                if iface in types
                for field in types[iface].fields
            }
            for field in entry.fields:
                field_name = field.name.value
                if is_introspection(field_name) or field_name in inherited:
                    continue
                yield schema.diagnostic(
                    field,
                    self.name,
                    f"Field `{type_name}.{field_name}` is never used and can be removed.",
                )


class NoUnimplementedInterface:
    """Every interface is implemented by at least one object or interface."""

    name = "no-unimplemented-interface"
    description = "Flags interfaces that are not implemented by any type in the schema"

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        types = schema_types(schema)
        implemented = {name for entry in types.values() for name in entry.interfaces}
        for type_name, entry in types.items():
            if entry.kind is not TypeKind.INTERFACE or type_name in implemented:
                continue
            yield schema.diagnostic(
                entry.node,
                self.name,
                f"Interface '{type_name}' is not implemented by any type",
            )
