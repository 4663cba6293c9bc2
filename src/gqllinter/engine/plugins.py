"""Plugin loader: import custom rules from directories and modules at runtime.

A plugin is a Python file (or importable module) exposing a zero-argument
constructor named ``new_rule`` that returns an object satisfying
:class:`~gqllinter.engine.rule.Rule`::

    # rules/field_id_suffix.py
    class FieldIdSuffix:
        name = "field-id-suffix"
        description = "ID fields end with 'ID' not 'Id'"

        def check(self, schema):
            ...

    def new_rule():
        return FieldIdSuffix()

Plugins run with the privileges of the linter process. The loader checks
the shape of what ``new_rule`` returns and nothing else.
"""

from __future__ import annotations

import hashlib
import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from gqllinter.engine.diagnostics import PluginLoadError
from gqllinter.errors import InvalidRuleError

if TYPE_CHECKING:
    from types import ModuleType

    from gqllinter.engine.registry import RuleRegistry

logger = logging.getLogger(__name__)

CONSTRUCTOR_NAME = "new_rule"
PLUGIN_SUFFIX = ".py"
_MODULE_PREFIX = "gqllinter_plugin_"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def discover_plugins(directory: Path) -> list[Path]:
    """Return candidate plugin files in *directory* (non-recursive, sorted).

    Files whose name starts with ``_`` (``__init__.py``, private helpers) are
    skipped.
    """
    return sorted(
        p
        for p in directory.iterdir()
        if p.is_file() and p.suffix == PLUGIN_SUFFIX and not p.name.startswith("_")
    )


def load_plugin_directory(
    directory: Path,
    registry: RuleRegistry,
    *,
    warnings: list[str] | None = None,
) -> list[PluginLoadError]:
    """Load every plugin in *directory* into *registry*.

    One failing candidate never prevents the others from loading. Override
    warnings from the registry are appended to *warnings* when given.

    Returns
    -------
    list[PluginLoadError]
        One entry per candidate that failed; empty when all loaded.
    """
    if not directory.is_dir():
        return [PluginLoadError(path=str(directory), message="not a directory")]

    errors: list[PluginLoadError] = []
    candidates = discover_plugins(directory)
    logger.debug("Found %d plugin candidate(s) in %s", len(candidates), directory)

    for path in candidates:
        try:
            module = _import_file(path)
            _register_from_module(module, CONSTRUCTOR_NAME, registry, str(path), warnings)
        except (Exception, SystemExit) as exc:  # noqa: BLE001 - plugin code may raise anything
            logger.warning("Failed to load custom rule %s: %s", path, exc)
            errors.append(PluginLoadError(path=str(path), message=_describe(exc)))
        else:
            logger.info("Loaded custom rule from %s", path)

    return errors


def load_plugin_module(
    spec: str,
    registry: RuleRegistry,
    *,
    warnings: list[str] | None = None,
) -> PluginLoadError | None:
    """Load a rule from an importable module.

    *spec* is ``package.module`` (constructor ``new_rule``) or
    ``package.module:factory``. Returns a :class:`PluginLoadError` on
    failure, ``None`` on success.
    """
    module_name, _, constructor = spec.partition(":")
    constructor = constructor or CONSTRUCTOR_NAME
    try:
        module = importlib.import_module(module_name)
        _register_from_module(module, constructor, registry, spec, warnings)
    except (Exception, SystemExit) as exc:  # noqa: BLE001 - plugin code may raise anything
        logger.warning("Failed to load custom rule %s: %s", spec, exc)
        return PluginLoadError(path=spec, message=_describe(exc))
    logger.info("Loaded custom rule from module %s", spec)
    return None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _module_name_for(path: Path) -> str:
    """Private, collision-free module name for a plugin file."""
    digest = hashlib.sha256(str(path.resolve()).encode()).hexdigest()[:12]
    return f"{_MODULE_PREFIX}{path.stem}_{digest}"


def _import_file(path: Path) -> ModuleType:
    module_name = _module_name_for(path)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = "cannot create an import spec"
        raise ImportError(msg)
    module = importlib.util.module_from_spec(spec)
    # Registered before execution so dataclasses and pickling can find the module.
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


def _register_from_module(
    module: ModuleType,
    constructor_name: str,
    registry: RuleRegistry,
    origin: str,
    warnings: list[str] | None,
) -> None:
    constructor = getattr(module, constructor_name, None)
    if constructor is None:
        msg = f"missing {constructor_name}() constructor"
        raise InvalidRuleError(msg)
    if not callable(constructor):
        msg = f"{constructor_name} is not callable"
        raise InvalidRuleError(msg)

    rule = constructor()
    warning = registry.register_dynamic(rule, origin=origin)
    if warning is not None and warnings is not None:
        warnings.append(warning)


def _describe(exc: BaseException) -> str:
    text = str(exc)
    if isinstance(exc, InvalidRuleError):
        return text
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__
