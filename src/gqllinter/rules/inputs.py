"""Rules for mutation inputs and input enums."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graphql.language import OperationType

from gqllinter.rules.enums import input_enums, output_enums
from gqllinter.rules.helpers import named_type, root_fields, schema_types

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gqllinter.engine.diagnostics import Diagnostic
    from gqllinter.schema import SchemaDocument

INPUT_ARGUMENT = "input"
INPUT_SUFFIX = "Input"


class InputName:
    """A mutation takes a single ``input`` argument typed ``<MutationName>Input``."""

    name = "input-name"
    description = (
        "Require mutation argument to be always called 'input' and input type to be "
        "called Mutation name + 'Input' - following Guild best practices"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for field in root_fields(schema, schema_types(schema), OperationType.MUTATION):
            arguments = field.arguments or ()
            mutation = field.name.value
            expected_type = mutation[:1].upper() + mutation[1:] + INPUT_SUFFIX
            if len(arguments) > 1:
                yield schema.diagnostic(
                    field,
                    self.name,
                    f"Mutation `{mutation}` has {len(arguments)} arguments. Consider "
                    f"consolidating into a single 'input' argument of type `{expected_type}`.",
                )
                continue
            for arg in arguments:
                if arg.name.value != INPUT_ARGUMENT:
                    yield schema.diagnostic(
                        arg,
                        self.name,
                        f"Mutation `{mutation}` argument should be named 'input', "
                        f"not '{arg.name.value}'.",
                    )
                actual_type = named_type(arg.type)
                if actual_type != expected_type:
                    yield schema.diagnostic(
                        arg,
                        self.name,
                        f"Mutation `{mutation}` input type should be named "
                        f"`{expected_type}`, not `{actual_type}`.",
                    )


class InputEnumSuffix:
    """Enums accepted as input are named ``...Input`` and are not also returned as output."""

    name = "input-enum-suffix"
    description = (
        "Input enums must be distinct from output enums and suffixed with 'Input' for clarity"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        types = schema_types(schema)
        outputs = output_enums(types)
        for enum_name in sorted(input_enums(schema, types)):
            node = types[enum_name].node
            if enum_name in outputs:
                suggested = enum_name if enum_name.endswith(INPUT_SUFFIX) else enum_name + "Input"
                yield schema.diagnostic(
                    node,
                    self.name,
                    f"Enum `{enum_name}` is used in both input and output contexts. "
                    f"Consider creating separate input enum `{suggested}` for input usage.",
                )
            elif not enum_name.endswith(INPUT_SUFFIX):
                yield schema.diagnostic(
                    node,
                    self.name,
                    f"Input enum `{enum_name}` should be suffixed with 'Input'. "
                    f"Consider renaming to `{enum_name}Input`.",
                )
