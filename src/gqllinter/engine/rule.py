"""The rule contract satisfied by every check, built-in or plugin."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gqllinter.engine.diagnostics import Diagnostic
    from gqllinter.schema import SchemaDocument

RULE_NAME_RE = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")


@runtime_checkable
class Rule(Protocol):
    """A single lint check.

    ``check`` must be a pure function of the schema it receives: no I/O, no
    state shared between calls, no mutation of the schema. The runner calls
    rules concurrently from worker threads.
    """

    name: str
    description: str

    def check(self, schema: SchemaDocument) -> Iterable[Diagnostic]: ...


def contract_violation(value: object) -> str | None:
    """Return why *value* does not satisfy :class:`Rule`, or ``None`` if it does."""
    if not isinstance(value, Rule):
        return f"{type(value).__name__} does not provide name, description and check()"
    if not isinstance(value.name, str) or not RULE_NAME_RE.match(value.name):
        return f"rule name {value.name!r} is not a kebab-case identifier"
    if not isinstance(value.description, str):
        return f"rule '{value.name}': description must be a string"
    if not callable(value.check):
        return f"rule '{value.name}': check is not callable"
    return None
