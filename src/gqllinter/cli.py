"""gqllinter CLI entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from gqllinter import __version__
from gqllinter.config import LinterConfig, discover_config, load_config
from gqllinter.errors import ConfigError, LintError


def _split_names(values: tuple[str, ...]) -> list[str]:
    """Flatten repeated, comma-separated option values."""
    return [name.strip() for value in values for name in value.split(",") if name.strip()]


def _load_settings(config_path: Path | None) -> LinterConfig:
    """Load the explicit or discovered config file; exit 2 on errors."""
    path = config_path or discover_config(Path.cwd())
    if path is None:
        return LinterConfig()
    try:
        return load_config(path)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)


@click.group()
@click.version_option(version=__version__, prog_name="gqllinter")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
@click.pass_context
def main(ctx: click.Context, *, verbose: bool, quiet: bool) -> None:
    """gqllinter - GraphQL schema linter with pluggable rules."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("patterns", nargs=-1)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to a YAML/JSON configuration file (default: .gqllinter.yml if present).",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json"]),
    default=None,
    help="Output format (default: text).",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write results to a file instead of stdout.",
)
@click.option("--rules", multiple=True, help="Comma-separated list of rules to run.")
@click.option("--exclude", multiple=True, help="Comma-separated list of rules to skip.")
@click.option("--ignore", default=None, help="Comment marking lines to ignore.")
@click.option(
    "--custom-rule-paths",
    "custom_rule_paths",
    type=click.Path(path_type=Path),
    multiple=True,
    help="Directory holding custom rule plugins (repeatable).",
)
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Rule worker threads.")
@click.pass_context
def lint(
    ctx: click.Context,
    *,
    patterns: tuple[str, ...],
    config_path: Path | None,
    fmt: str | None,
    output: Path | None,
    rules: tuple[str, ...],
    exclude: tuple[str, ...],
    ignore: str | None,
    custom_rule_paths: tuple[Path, ...],
    workers: int | None,
) -> None:
    """Lint GraphQL schema files matching PATTERNS.

    Exit codes: 0 = no findings, 1 = findings reported,
    2 = configuration error or unreadable input.
    """
    from gqllinter.engine.formatter import render
    from gqllinter.linter import expand_paths, lint_files

    settings = _load_settings(config_path)
    try:
        settings = settings.merge(
            rules=_split_names(rules),
            exclude=_split_names(exclude),
            ignore=ignore,
            format=fmt,
            output=str(output) if output is not None else None,
            custom_rule_paths=[str(p) for p in custom_rule_paths],
            workers=workers,
        )
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    files = expand_paths(patterns or settings.schema)
    try:
        result = lint_files(files, settings)
    except LintError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    if not quiet:
        for warning in result.warnings:
            click.echo(f"Warning: {warning}", err=True)

    rendered = render(result.diagnostics, settings.format)
    if settings.output is not None:
        try:
            Path(settings.output).write_text(rendered, encoding="utf-8")
        except OSError as exc:
            click.echo(f"Error: cannot write {settings.output}: {exc}", err=True)
            sys.exit(2)
    elif rendered:
        click.echo(rendered, nl=False)

    if result.has_findings:
        sys.exit(1)


@main.command("rules")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to a YAML/JSON configuration file.",
)
@click.option(
    "--custom-rule-paths",
    "custom_rule_paths",
    type=click.Path(path_type=Path),
    multiple=True,
    help="Directory holding custom rule plugins (repeatable).",
)
@click.option("--json", "as_json", is_flag=True, help="JSON output.")
def rules_cmd(
    *,
    config_path: Path | None,
    custom_rule_paths: tuple[Path, ...],
    as_json: bool,
) -> None:
    """List available rules, including loaded plugins."""
    from gqllinter.linter import prepare_registry

    settings = _load_settings(config_path).merge(
        custom_rule_paths=[str(p) for p in custom_rule_paths]
    )
    setup = prepare_registry(settings)
    registry = setup.registry

    for error in setup.plugin_errors:
        click.echo(f"Warning: {error}", err=True)

    if as_json:
        data = [
            {
                "name": rule.name,
                "description": rule.description,
                "origin": registry.origin_of(rule.name),
            }
            for rule in registry
        ]
        click.echo(json.dumps({"rules": data}, ensure_ascii=False, indent=2))
        return

    from rich.console import Console
    from rich.table import Table

    table = Table(title=f"Rules ({len(registry)})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Origin", style="dim")
    for rule in registry:
        table.add_row(rule.name, rule.description, registry.origin_of(rule.name) or "")
    Console().print(table)
