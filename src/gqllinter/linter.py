"""Lint orchestrator: prepare the registry, read and parse files, run rules, collect results."""

from __future__ import annotations

import glob
import logging
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from gqllinter.engine.diagnostics import Diagnostic, Location, PluginLoadError, RuleExecutionError
from gqllinter.engine.formatter import sort_diagnostics
from gqllinter.engine.ignore import DEFAULT_IGNORE_MARKER
from gqllinter.engine.plugins import load_plugin_directory, load_plugin_module
from gqllinter.engine.registry import RuleRegistry, default_registry
from gqllinter.engine.runner import RunResult, run_rules
from gqllinter.errors import LintError
from gqllinter.schema import SchemaSyntaxError, has_definitions, parse_schema

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from gqllinter.config import LinterConfig
    from gqllinter.engine.rule import Rule

logger = logging.getLogger(__name__)

SYNTAX_ERROR_RULE = "syntax-error"
_GLOB_MAGIC_RE = re.compile(r"[*?[]")


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class RegistrySetup:
    """A registry with plugins loaded, plus what went wrong while loading them."""

    registry: RuleRegistry
    plugin_errors: list[PluginLoadError] = field(default_factory=list)
    override_warnings: list[str] = field(default_factory=list)


@dataclass
class LintResult:
    """Result of a lint run over one or more schema files."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    files_linted: int = 0
    rules_evaluated: int = 0
    rule_errors: list[RuleExecutionError] = field(default_factory=list)
    plugin_errors: list[PluginLoadError] = field(default_factory=list)
    unknown_rules: list[str] = field(default_factory=list)
    override_warnings: list[str] = field(default_factory=list)
    suppressed: int = 0
    elapsed_ms: float = 0.0

    @property
    def has_findings(self) -> bool:
        return bool(self.diagnostics)

    @property
    def warnings(self) -> list[str]:
        """Operational warnings, in a stable order, for display next to the findings."""
        messages = [f"unknown rule '{name}'" for name in self.unknown_rules]
        messages.extend(str(err) for err in self.plugin_errors)
        messages.extend(self.override_warnings)
        messages.extend(str(err) for err in self.rule_errors)
        return messages


# ---------------------------------------------------------------------------
# Registry preparation
# ---------------------------------------------------------------------------


def prepare_registry(
    config: LinterConfig, *, registry: RuleRegistry | None = None
) -> RegistrySetup:
    """Load config-declared modules, then plugin directories, into a registry.

    Later sources override earlier ones: built-in < ``custom_rules`` modules
    < ``custom_rule_paths`` directories.
    """
    setup = RegistrySetup(registry=registry if registry is not None else default_registry())

    for spec in config.custom_rules:
        error = load_plugin_module(spec, setup.registry, warnings=setup.override_warnings)
        if error is not None:
            setup.plugin_errors.append(error)

    for directory in config.custom_rule_paths:
        setup.plugin_errors.extend(
            load_plugin_directory(
                Path(directory), setup.registry, warnings=setup.override_warnings
            )
        )

    return setup


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def expand_paths(patterns: Iterable[str]) -> list[Path]:
    """Expand glob patterns (``**`` allowed) into a sorted, de-duplicated file list.

    A pattern without glob characters is kept as-is so that a missing file
    surfaces as a read error instead of silently matching nothing.
    """
    found: dict[str, Path] = {}
    for pattern in patterns:
        if not _GLOB_MAGIC_RE.search(pattern):
            found.setdefault(pattern, Path(pattern))
            continue
        for match in glob.glob(pattern, recursive=True):
            path = Path(match)
            if path.is_file():
                found.setdefault(str(path), path)
    return [found[key] for key in sorted(found)]


# ---------------------------------------------------------------------------
# Linting
# ---------------------------------------------------------------------------


def lint_source(
    source: str,
    file: str,
    rules: Mapping[str, Rule],
    *,
    ignore_marker: str = DEFAULT_IGNORE_MARKER,
    max_workers: int | None = None,
) -> RunResult:
    """Lint SDL text that was read from *file*.

    A syntax error is reported as a single ``syntax-error`` diagnostic and no
    rule runs for that file. A file holding only whitespace and comments is
    an empty schema and reports nothing.
    """
    if not has_definitions(source):
        logger.info("No definitions in %s", file)
        return RunResult()
    try:
        schema = parse_schema(source, file)
    except SchemaSyntaxError as exc:
        logger.info("Syntax error in %s: %s", file, exc.message)
        diag = Diagnostic(
            message=exc.message,
            rule_name=SYNTAX_ERROR_RULE,
            location=Location(file=file, line=exc.line, column=exc.column),
        )
        return RunResult(diagnostics=[diag])
    return run_rules(schema, rules, ignore_marker=ignore_marker, max_workers=max_workers)


def lint_files(
    paths: Iterable[Path],
    config: LinterConfig,
    *,
    registry: RuleRegistry | None = None,
) -> LintResult:
    """Lint every file in *paths* with the rules selected by *config*.

    Parameters
    ----------
    paths:
        Schema files to lint.
    config:
        Resolved settings (rule selection, plugins, ignore marker, workers).
    registry:
        A ready registry. When *None* a fresh one is built from the built-in
        rules plus the plugins named by *config*.

    Returns
    -------
    LintResult
        Sorted diagnostics and every non-fatal warning.

    Raises
    ------
    LintError
        When no file is given or a file cannot be read.
    """
    start = time.monotonic()
    files = list(paths)
    if not files:
        msg = "no schema files found"
        raise LintError(msg)

    if registry is None:
        setup = prepare_registry(config)
    else:
        setup = RegistrySetup(registry=registry)
    active = setup.registry.resolve(config.rules or None, excluded=config.exclude)

    result = LintResult(
        rules_evaluated=len(active),
        plugin_errors=setup.plugin_errors,
        unknown_rules=list(active.unknown),
        override_warnings=setup.override_warnings,
    )

    collected: list[Diagnostic] = []
    for path in files:
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"failed to lint {path}: {exc}"
            raise LintError(msg) from exc

        run = lint_source(
            source,
            str(path),
            active.rules,
            ignore_marker=config.ignore,
            max_workers=config.workers,
        )
        collected.extend(run.diagnostics)
        result.rule_errors.extend(run.errors)
        result.suppressed += run.suppressed
        result.files_linted += 1
        logger.info("Linted %s: %d diagnostic(s)", path, len(run.diagnostics))

    result.diagnostics = sort_diagnostics(collected)
    result.elapsed_ms = (time.monotonic() - start) * 1000
    return result
