"""Exception hierarchy shared by the engine, the config layer and the CLI."""

from __future__ import annotations


class GqlLinterError(Exception):
    """Base class for all gqllinter errors."""


class ConfigError(GqlLinterError):
    """Raised when a configuration file or value is invalid."""


class LintError(GqlLinterError):
    """Raised when linting cannot start (no files, unreadable file)."""


class RegistryError(GqlLinterError):
    """Raised on invalid rule registration."""


class DuplicateRuleError(RegistryError):
    """A built-in rule with the same name is already registered."""


class InvalidRuleError(RegistryError):
    """A value does not satisfy the rule contract."""
