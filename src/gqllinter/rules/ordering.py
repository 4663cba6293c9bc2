"""Ordering rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gqllinter.rules.helpers import (
    ENUM_NODES,
    INPUT_NODES,
    INTERFACE_NODES,
    OBJECT_NODES,
    is_introspection,
    type_nodes,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gqllinter.engine.diagnostics import Diagnostic
    from gqllinter.schema import SchemaDocument


class Alphabetize:
    """Fields, input fields and enum values are listed in case-insensitive alphabetical order.

    Each definition and each ``extend`` block is checked on its own, so an
    extension may append members that sort before the definition's.
    """

    name = "alphabetize"
    description = (
        "Enforce alphabetical order for type fields and enum values - "
        "following Guild best practices for consistency"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for node in type_nodes(schema):
            type_name = node.name.value
            if is_introspection(type_name):
                continue
            if isinstance(node, OBJECT_NODES + INTERFACE_NODES):
                label = "Fields in type"
                names = [f.name.value for f in node.fields or ()]
            elif isinstance(node, INPUT_NODES):
                label = "Fields in input type"
                names = [f.name.value for f in node.fields or ()]
            elif isinstance(node, ENUM_NODES):
                label = "Enum values in"
                names = [v.name.value for v in node.values or ()]
            else:
                continue
            names = [n for n in names if not is_introspection(n)]
            expected = sorted(names, key=str.lower)
            if [n.lower() for n in names] == [n.lower() for n in expected]:
                continue
            yield schema.diagnostic(
                node,
                self.name,
                f"{label} `{type_name}` should be alphabetically ordered. "
                f"Expected order: [{', '.join(expected)}]",
            )
