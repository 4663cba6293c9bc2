"""Diagnostic model: the value type every rule produces."""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Location:
    """A 1-based position inside a schema file."""

    file: str
    line: int
    column: int


@dataclass(frozen=True)
class Diagnostic:
    """A single lint finding."""

    message: str
    rule_name: str
    location: Location

    def sort_key(self) -> tuple[str, int, int, str, str]:
        """Return the key that fixes presentation order."""
        loc = self.location
        return (loc.file, loc.line, loc.column, self.rule_name, self.message)

    def to_dict(self) -> dict[str, object]:
        """Return the structured (JSON) wire shape."""
        return {
            "message": self.message,
            "rule": self.rule_name,
            "location": {
                "file": self.location.file,
                "line": self.location.line,
                "column": self.location.column,
            },
        }


@dataclass(frozen=True)
class RuleExecutionError:
    """A rule's ``check`` failed unexpectedly."""

    rule_name: str
    message: str

    def __str__(self) -> str:
        return f"rule '{self.rule_name}' failed: {self.message}"


@dataclass(frozen=True)
class PluginLoadError:
    """A plugin candidate could not be loaded or broke the rule contract."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"failed to load custom rule {self.path}: {self.message}"
