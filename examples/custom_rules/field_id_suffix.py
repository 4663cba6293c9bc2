"""Example plugin: ID fields end with ``ID`` rather than ``Id``.

Load with::

    gqllinter lint --custom-rule-paths examples/custom_rules schema.graphql
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gqllinter.rules.helpers import INPUT_NODES, INTERFACE_NODES, OBJECT_NODES, fields_of

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gqllinter.engine.diagnostics import Diagnostic
    from gqllinter.schema import SchemaDocument


class FieldIdSuffix:
    name = "field-id-suffix"
    description = "Ensures ID fields end with 'ID' not 'Id' for consistency"

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for type_name, field in fields_of(schema, OBJECT_NODES + INTERFACE_NODES + INPUT_NODES):
            field_name = field.name.value
            if not field_name.endswith("Id"):
                continue
            suggestion = field_name[: -len("Id")] + "ID"
            yield schema.diagnostic(
                field,
                self.name,
                f"Field `{type_name}.{field_name}` should end with 'ID' not 'Id'. "
                f"Consider renaming to `{suggestion}`.",
            )


def new_rule() -> FieldIdSuffix:
    return FieldIdSuffix()
