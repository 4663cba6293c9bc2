"""Ignore resolver: turn ignore-marker comments into diagnostic suppression.

A line containing the marker suppresses diagnostics reported on that same
line of the same file::

    type User {
      legacyId: String # gqllinter-ignore
    }

The match is purely textual: a marker inside a description string counts
too.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from gqllinter.engine.diagnostics import Diagnostic

DEFAULT_IGNORE_MARKER = "# gqllinter-ignore"

# GraphQL line terminators; str.splitlines() also splits on form feeds and U+2028.
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class Suppressions:
    """Set of suppressed ``(file, line)`` pairs for one run."""

    lines: frozenset[tuple[str, int]] = frozenset()

    def is_suppressed(self, diagnostic: Diagnostic) -> bool:
        loc = diagnostic.location
        return (loc.file, loc.line) in self.lines

    def apply(self, diagnostics: Iterable[Diagnostic]) -> tuple[list[Diagnostic], int]:
        """Drop suppressed diagnostics; return the kept ones and the dropped count."""
        kept: list[Diagnostic] = []
        dropped = 0
        for diag in diagnostics:
            if self.is_suppressed(diag):
                dropped += 1
            else:
                kept.append(diag)
        return kept, dropped

    def __len__(self) -> int:
        return len(self.lines)


def marked_lines(source: str, marker: str) -> list[int]:
    """Return the 1-based numbers of the lines of *source* containing *marker*."""
    if not marker:
        return []
    return [
        number
        for number, line in enumerate(_LINE_BREAK_RE.split(source), start=1)
        if marker in line
    ]


def scan_ignore_markers(
    sources: Mapping[str, str], marker: str = DEFAULT_IGNORE_MARKER
) -> Suppressions:
    """Build suppressions from raw source texts keyed by file name."""
    lines = {
        (file, number) for file, text in sources.items() for number in marked_lines(text, marker)
    }
    return Suppressions(lines=frozenset(lines))
