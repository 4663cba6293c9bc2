"""Deprecation rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graphql.language import StringValueNode

from gqllinter.rules.helpers import (
    INTERFACE_NODES,
    OBJECT_NODES,
    enum_values_of,
    fields_of,
    find_directive,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from graphql.language import DirectiveNode

    from gqllinter.engine.diagnostics import Diagnostic
    from gqllinter.schema import SchemaDocument

GENERIC_REASONS: tuple[str, ...] = (
    "deprecated",
    "no longer supported",
    "legacy",
    "old",
    "unused",
    "removed",
    "obsolete",
    "outdated",
    "use something else",
    "will be removed",
)
GUIDANCE_HINTS: tuple[str, ...] = ("use ", "instead", "replace", "migrate", "switch to")
MIN_REASON_LENGTH = 10


class RequireDeprecationReason:
    """``@deprecated`` fields and enum values explain why and what to use instead."""

    name = "require-deprecation-reason"
    description = (
        "Require deprecation reasons for deprecated fields - following Guild best practices"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for type_name, field in fields_of(schema, OBJECT_NODES + INTERFACE_NODES):
            directive = find_directive(field, "deprecated")
            if directive is None:
                continue
            subject = f"Deprecated field `{type_name}.{field.name.value}`"
            reason = deprecation_reason(directive)
            if not reason:
                yield schema.diagnostic(
                    field,
                    self.name,
                    f"{subject} must include a deprecation reason explaining why it's "
                    "deprecated and what to use instead.",
                )
            elif is_generic_reason(reason):
                yield schema.diagnostic(
                    field,
                    self.name,
                    f"{subject} has a generic deprecation reason '{reason}'. "
                    "Provide specific guidance on what to use instead.",
                )

        for enum_name, value in enum_values_of(schema):
            directive = find_directive(value, "deprecated")
            if directive is None:
                continue
            subject = f"Deprecated enum value `{enum_name}.{value.name.value}`"
            reason = deprecation_reason(directive)
            if not reason:
                yield schema.diagnostic(
                    value, self.name, f"{subject} must include a deprecation reason."
                )
            elif is_generic_reason(reason):
                yield schema.diagnostic(
                    value,
                    self.name,
                    f"{subject} has a generic deprecation reason '{reason}'. "
                    "Provide specific guidance.",
                )


def deprecation_reason(directive: DirectiveNode) -> str:
    """Return the stripped ``reason`` string argument, or ``""``."""
    for arg in directive.arguments or ():
        if arg.name.value == "reason" and isinstance(arg.value, StringValueNode):
            return arg.value.value.strip()
    return ""


def is_generic_reason(reason: str) -> bool:
    """True when *reason* is too short, generic, or gives no migration guidance."""
    lowered = reason.strip().lower()
    if len(lowered) < MIN_REASON_LENGTH:
        return True
    if any(generic in lowered for generic in GENERIC_REASONS):
        return True
    return not any(hint in lowered for hint in GUIDANCE_HINTS)
