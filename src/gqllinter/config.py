"""Configuration: load ``.gqllinter.yml`` / ``.gqllinter.json`` and merge CLI overrides."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from gqllinter.engine.formatter import FORMATTERS
from gqllinter.engine.ignore import DEFAULT_IGNORE_MARKER
from gqllinter.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAMES: tuple[str, ...] = (".gqllinter.yml", ".gqllinter.yaml", ".gqllinter.json")

_LIST_KEYS: frozenset[str] = frozenset(
    {"rules", "exclude", "custom_rule_paths", "custom_rules", "schema"}
)
# Keys whose values are paths relative to the config file.
_PATH_KEYS: frozenset[str] = frozenset({"custom_rule_paths", "schema"})


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LinterConfig:
    """Resolved linter settings.

    Attributes
    ----------
    rules:
        Rule names to run; empty means every registered rule.
    exclude:
        Rule names never to run.
    custom_rule_paths:
        Directories scanned for plugin files.
    custom_rules:
        Importable plugin modules (``package.module`` or ``package.module:factory``).
    ignore:
        Ignore marker; an empty string disables suppression.
    format:
        Output format name (``text`` or ``json``).
    output:
        Output file, ``None`` for stdout.
    schema:
        Schema file globs used when the CLI receives no paths.
    workers:
        Rule worker threads, ``None`` for the executor default.
    """

    rules: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    custom_rule_paths: tuple[str, ...] = ()
    custom_rules: tuple[str, ...] = ()
    ignore: str = DEFAULT_IGNORE_MARKER
    format: str = "text"
    output: str | None = None
    schema: tuple[str, ...] = ()
    workers: int | None = None

    def merge(self, **overrides: Any) -> LinterConfig:
        """Return a copy with every override that is not ``None`` or empty applied."""
        changes = {
            key: (tuple(value) if key in _LIST_KEYS else value)
            for key, value in overrides.items()
            if value is not None and value != () and value != []
        }
        merged = replace(self, **changes)
        _validate_values(merged, "command line")
        return merged


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def discover_config(directory: Path) -> Path | None:
    """Return the first default config file present in *directory*."""
    for name in CONFIG_FILENAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path) -> LinterConfig:
    """Read and validate a YAML or JSON config file.

    Relative directories and globs are resolved against the config file's
    directory.

    Raises
    ------
    ConfigError
        When the file cannot be read or holds invalid settings.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"{path}: cannot read config file: {exc}"
        raise ConfigError(msg) from exc

    try:
        data = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        msg = f"{path}: invalid config file: {exc}"
        raise ConfigError(msg) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = f"{path}: config must be a mapping, got {type(data).__name__}"
        raise ConfigError(msg)

    config = parse_config(data, context=str(path), base_dir=path.parent)
    logger.debug("Loaded config from %s", path)
    return config


def parse_config(
    data: dict[str, Any], *, context: str = "config", base_dir: Path | None = None
) -> LinterConfig:
    """Build a :class:`LinterConfig` from an already decoded mapping."""
    known = {f.name for f in fields(LinterConfig)}
    values: dict[str, Any] = {}

    for raw_key, value in data.items():
        key = str(raw_key).replace("-", "_")
        if key not in known:
            msg = f"{context}: unknown key '{raw_key}', expected one of {sorted(known)}"
            raise ConfigError(msg)
        if key in _LIST_KEYS:
            value = _as_str_list(value, context, raw_key)
            if base_dir is not None and key in _PATH_KEYS:
                value = [str(base_dir / item) for item in value]
            values[key] = tuple(value)
        elif key == "output" and value is not None and base_dir is not None:
            values[key] = str(base_dir / str(value))
        else:
            values[key] = value

    config = LinterConfig(**values)
    _validate_values(config, context)
    return config


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _as_str_list(value: object, context: str, key: str) -> list[str]:
    """Accept a list of strings or a single comma-separated string."""
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if not isinstance(value, list):
        msg = f"{context}: '{key}' must be a list of strings"
        raise ConfigError(msg)
    for idx, item in enumerate(value):
        if not isinstance(item, str):
            msg = f"{context}: '{key}' index {idx}: expected a string, got {type(item).__name__}"
            raise ConfigError(msg)
    return list(value)


def _validate_values(config: LinterConfig, context: str) -> None:
    if not isinstance(config.ignore, str):
        msg = f"{context}: 'ignore' must be a string"
        raise ConfigError(msg)
    if config.format not in FORMATTERS:
        expected = sorted(FORMATTERS)
        msg = f"{context}: unsupported format '{config.format}', expected one of {expected}"
        raise ConfigError(msg)
    if config.output is not None and not isinstance(config.output, str):
        msg = f"{context}: 'output' must be a string"
        raise ConfigError(msg)
    workers = config.workers
    if workers is not None and (
        isinstance(workers, bool) or not isinstance(workers, int) or workers < 1
    ):
        msg = f"{context}: 'workers' must be a positive integer"
        raise ConfigError(msg)
