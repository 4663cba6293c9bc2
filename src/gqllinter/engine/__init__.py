"""Rule evaluation engine: contract, registry, plugins, suppression, runner, formatters."""

from gqllinter.engine.diagnostics import (
    Diagnostic,
    Location,
    PluginLoadError,
    RuleExecutionError,
)
from gqllinter.engine.formatter import (
    FORMATTERS,
    format_json,
    format_text,
    render,
    sort_diagnostics,
)
from gqllinter.engine.ignore import (
    DEFAULT_IGNORE_MARKER,
    Suppressions,
    marked_lines,
    scan_ignore_markers,
)
from gqllinter.engine.plugins import (
    CONSTRUCTOR_NAME,
    discover_plugins,
    load_plugin_directory,
    load_plugin_module,
)
from gqllinter.engine.registry import ActiveRuleSet, RuleRegistry, default_registry
from gqllinter.engine.rule import Rule, contract_violation
from gqllinter.engine.runner import RunResult, run_rules

__all__ = [
    "CONSTRUCTOR_NAME",
    "DEFAULT_IGNORE_MARKER",
    "FORMATTERS",
    "ActiveRuleSet",
    "Diagnostic",
    "Location",
    "PluginLoadError",
    "Rule",
    "RuleExecutionError",
    "RuleRegistry",
    "RunResult",
    "Suppressions",
    "contract_violation",
    "default_registry",
    "discover_plugins",
    "format_json",
    "format_text",
    "load_plugin_directory",
    "load_plugin_module",
    "marked_lines",
    "render",
    "run_rules",
    "scan_ignore_markers",
    "sort_diagnostics",
]
