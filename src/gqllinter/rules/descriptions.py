"""Rules about descriptions: presence, capitalization and syntax."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from gqllinter.engine.diagnostics import Diagnostic, Location
from gqllinter.rules.helpers import (
    INTERFACE_NODES,
    OBJECT_NODES,
    description_of,
    enum_values_of,
    fields_of,
    is_introspection,
    kind_label,
    type_nodes,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gqllinter.schema import SchemaDocument

UNKNOWN_ENUM_VALUE = "UNKNOWN"


class TypesHaveDescriptions:
    """Every type definition carries a description.

    ``extend type`` blocks cannot take a description and are skipped.
    """

    name = "types-have-descriptions"
    description = "All types should have descriptions to explain their purpose"

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for node in schema.type_definitions():
            type_name = node.name.value
            if is_introspection(type_name) or description_of(node):
                continue
            yield schema.diagnostic(
                node,
                self.name,
                f"The {kind_label(node)} `{type_name}` is missing a description.",
            )


class FieldsHaveDescriptions:
    """Every field of an object or interface carries a description."""

    name = "fields-have-descriptions"
    description = "All fields should have descriptions to explain their purpose"

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for type_name, field in fields_of(schema, OBJECT_NODES + INTERFACE_NODES):
            if not description_of(field):
                yield schema.diagnostic(
                    field,
                    self.name,
                    f"The field `{type_name}.{field.name.value}` is missing a description.",
                )


class EnumDescriptions:
    """Every enum value except ``UNKNOWN`` carries a description."""

    name = "enum-descriptions"
    description = "All enum values must have descriptions except for UNKNOWN case"

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for enum_name, value in enum_values_of(schema):
            value_name = value.name.value
            if value_name == UNKNOWN_ENUM_VALUE or description_of(value):
                continue
            yield schema.diagnostic(
                value,
                self.name,
                f"Enum value `{enum_name}.{value_name}` is missing a description. "
                "All enum values except UNKNOWN should have descriptions.",
            )


class CapitalizedDescriptions:
    """Descriptions start with an upper-case letter."""

    name = "capitalized-descriptions"
    description = "All descriptions must start with a capital letter for consistency"

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for node in type_nodes(schema):
            type_name = node.name.value
            if is_introspection(type_name):
                continue
            if not _is_capitalized(description_of(node)):
                yield schema.diagnostic(
                    node,
                    self.name,
                    f"Description for type `{type_name}` should start with a capital letter.",
                )
            for field in getattr(node, "fields", None) or ():
                field_name = field.name.value
                if is_introspection(field_name):
                    continue
                if not _is_capitalized(description_of(field)):
                    yield schema.diagnostic(
                        field,
                        self.name,
                        f"Description for field `{type_name}.{field_name}` "
                        "should start with a capital letter.",
                    )
                for arg in getattr(field, "arguments", None) or ():
                    if not _is_capitalized(description_of(arg)):
                        yield schema.diagnostic(
                            arg,
                            self.name,
                            f"Description for argument `{type_name}.{field_name}"
                            f"({arg.name.value}:)` should start with a capital letter.",
                        )

        for enum_name, value in enum_values_of(schema):
            if not _is_capitalized(description_of(value)):
                yield schema.diagnostic(
                    value,
                    self.name,
                    f"Description for enum value `{enum_name}.{value.name.value}` "
                    "should start with a capital letter.",
                )

        for directive in schema.directive_definitions():
            directive_name = directive.name.value
            if not _is_capitalized(description_of(directive)):
                yield schema.diagnostic(
                    directive,
                    self.name,
                    f"Description for directive `@{directive_name}` "
                    "should start with a capital letter.",
                )
            for arg in directive.arguments or ():
                if not _is_capitalized(description_of(arg)):
                    yield schema.diagnostic(
                        arg,
                        self.name,
                        f"Description for directive argument `@{directive_name}"
                        f"({arg.name.value}:)` should start with a capital letter.",
                    )


# Lines that look like a type or field definition.
_DEFINITION_RE = re.compile(r"^(type|interface|enum|input|scalar|union)\s|:")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
HASHTAG_MESSAGE = 'Use triple quotes (""") for descriptions instead of hashtag comments.'


class NoHashtagDescription:
    """``#`` comments placed right above a definition should be ``\"\"\"`` descriptions.

    Comments starting with ``# gqllinter`` (tool pragmas) are left alone.
    """

    name = "no-hashtag-description"
    description = (
        "Use triple quotes for descriptions instead of hashtag comments, "
        "following Yelp guidelines"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        lines = _LINE_BREAK_RE.split(schema.source)
        for index, line in enumerate(lines[:-1]):
            stripped = line.strip()
            if not stripped.startswith("#") or stripped.startswith("# gqllinter"):
                continue
            if _DEFINITION_RE.search(lines[index + 1].strip()):
                yield Diagnostic(
                    message=HASHTAG_MESSAGE,
                    rule_name=self.name,
                    location=Location(
                        file=schema.file, line=index + 1, column=line.index("#") + 1
                    ),
                )


def _is_capitalized(description: str) -> bool:
    """Empty descriptions pass; others must start with an upper-case letter."""
    trimmed = description.strip()
    return not trimmed or trimmed[0].isupper()
