"""Formatters: render diagnostics as text or JSON in a reproducible order."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from gqllinter.engine.diagnostics import Diagnostic


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Stable sort by ``(file, line, column, rule_name, message)``."""
    return sorted(diagnostics, key=lambda d: d.sort_key())


def format_text(diagnostics: Iterable[Diagnostic]) -> str:
    """Format diagnostics one per line.

    Example output::

        api.graphql:5:1: Type name `user` should be PascalCase. (naming-convention)
        api.graphql:6:3: Field name `user.Id` should be camelCase. (naming-convention)

    Returns an empty string when there is nothing to report.
    """
    lines = [
        f"{d.location.file}:{d.location.line}:{d.location.column}: {d.message} ({d.rule_name})"
        for d in sort_diagnostics(diagnostics)
    ]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def format_json(diagnostics: Iterable[Diagnostic]) -> str:
    """Format diagnostics as ``{"errors": [...]}``.

    New keys may be added to the document; existing keys keep their meaning.
    """
    output = {"errors": [d.to_dict() for d in sort_diagnostics(diagnostics)]}
    return json.dumps(output, ensure_ascii=False, indent=2) + "\n"


FORMATTERS: dict[str, Callable[[Iterable[Diagnostic]], str]] = {
    "text": format_text,
    "json": format_json,
}


def render(diagnostics: Iterable[Diagnostic], fmt: str) -> str:
    """Render with the formatter registered under *fmt*."""
    formatter = FORMATTERS.get(fmt)
    if formatter is None:
        msg = f"unsupported format: {fmt} (expected one of {sorted(FORMATTERS)})"
        raise ValueError(msg)
    return formatter(diagnostics)
