"""Naming rules: casing of types, fields and enum values, redundant affixes."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from graphql.language import EnumTypeDefinitionNode

from gqllinter.rules.helpers import (
    ENUM_NODES,
    INTERFACE_NODES,
    OBJECT_NODES,
    enum_values_of,
    fields_of,
    is_introspection,
    type_nodes,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gqllinter.engine.diagnostics import Diagnostic
    from gqllinter.schema import SchemaDocument

PASCAL_CASE_RE = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
CAMEL_CASE_RE = re.compile(r"^[a-z][a-zA-Z0-9]*$")
UPPER_CASE_RE = re.compile(r"^[A-Z0-9_]*[A-Z][A-Z0-9_]*$")


class NamingConvention:
    """Enforce PascalCase types, camelCase fields and UPPER_CASE enum values.

    Object, interface and enum names must not carry the redundant ``Type`` /
    ``Object``, ``Interface`` or ``Enum`` affix.
    """

    name = "naming-convention"
    description = (
        "Enforce specific naming conventions - be specific with type names, "
        "avoid generic names"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for node in schema.type_definitions():
            type_name = node.name.value
            if is_introspection(type_name):
                continue
            if not PASCAL_CASE_RE.match(type_name):
                yield schema.diagnostic(
                    node, self.name, f"Type name `{type_name}` should be PascalCase."
                )
            if isinstance(node, OBJECT_NODES) and _has_affix(type_name, ("Type", "Object")):
                yield schema.diagnostic(
                    node,
                    self.name,
                    f"Type name `{type_name}` should be PascalCase and should not "
                    "start/end with `Type` or `Object`",
                )
            if isinstance(node, INTERFACE_NODES) and _has_affix(type_name, ("Interface",)):
                yield schema.diagnostic(
                    node,
                    self.name,
                    f"Interface name `{type_name}` should be PascalCase and should not "
                    "start/end with `Interface`",
                )
            if isinstance(node, EnumTypeDefinitionNode):
                lowered = type_name.lower()
                if lowered.startswith("enum") or lowered.endswith("enum"):
                    yield schema.diagnostic(
                        node,
                        self.name,
                        f"Enum name `{type_name}` should not start or end with `Enum`",
                    )

        for enum_name, value in enum_values_of(schema):
            if not UPPER_CASE_RE.match(value.name.value):
                yield schema.diagnostic(
                    value,
                    self.name,
                    f"Enum value `{enum_name}.{value.name.value}` should be UPPER_CASE",
                )

        for node in type_nodes(schema):
            if isinstance(node, ENUM_NODES) or is_introspection(node.name.value):
                continue
            for field in getattr(node, "fields", None) or ():
                field_name = field.name.value
                if is_introspection(field_name) or CAMEL_CASE_RE.match(field_name):
                    continue
                yield schema.diagnostic(
                    field,
                    self.name,
                    f"Field name `{node.name.value}.{field_name}` should be camelCase.",
                )


def _has_affix(name: str, affixes: tuple[str, ...]) -> bool:
    """True when *name* ends with an affix, or starts with one followed by a new word."""
    for affix in affixes:
        if name.endswith(affix):
            return True
        rest = name[len(affix) :]
        if name.startswith(affix) and rest[:1].isupper():
            return True
    return False


class NoFieldNamespacing:
    """Field names do not repeat their parent type name (``User.userName`` -> ``name``)."""

    name = "no-field-namespacing"
    description = (
        "Fields don't need to be namespaced with their parent type name - following Yelp "
        "guidelines"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for type_name, field in fields_of(schema, OBJECT_NODES + INTERFACE_NODES):
            suggestion = strip_namespace(type_name, field.name.value)
            if suggestion is None:
                continue
            yield schema.diagnostic(
                field,
                self.name,
                f"Field `{type_name}.{field.name.value}` unnecessarily repeats the type name. "
                f"Consider `{suggestion}` instead.",
            )


def strip_namespace(type_name: str, field_name: str) -> str | None:
    """Return *field_name* without a leading *type_name*, or ``None`` when it has none.

    The type name matches case-insensitively, optionally followed by ``_``,
    and must be followed by a capitalized word.
    """
    lowered = field_name.lower()
    for prefix in (type_name.lower() + "_", type_name.lower()):
        rest = field_name[len(prefix) :]
        if lowered.startswith(prefix) and rest[:1].isupper():
            return rest[0].lower() + rest[1:]
    return None
