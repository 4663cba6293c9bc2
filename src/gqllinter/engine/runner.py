"""Rule runner: execute the active rules over one schema and merge their findings."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gqllinter.engine.diagnostics import Diagnostic, RuleExecutionError
from gqllinter.engine.ignore import DEFAULT_IGNORE_MARKER, scan_ignore_markers

if TYPE_CHECKING:
    from collections.abc import Mapping

    from gqllinter.engine.rule import Rule
    from gqllinter.schema import SchemaDocument

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class RunResult:
    """Outcome of running a rule set against one schema."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    errors: list[RuleExecutionError] = field(default_factory=list)
    suppressed: int = 0


@dataclass
class _Slot:
    """Result slot owned by exactly one rule; merged after all rules finish."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    error: RuleExecutionError | None = None


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def run_rules(
    schema: SchemaDocument,
    rules: Mapping[str, Rule],
    *,
    ignore_marker: str = DEFAULT_IGNORE_MARKER,
    max_workers: int | None = None,
) -> RunResult:
    """Run every rule in *rules* against *schema*.

    Parameters
    ----------
    schema:
        Parsed schema shared read-only by all rules.
    rules:
        Active rules keyed by name.
    ignore_marker:
        Marker whose presence on a source line suppresses diagnostics on
        that line. An empty marker disables suppression.
    max_workers:
        Worker threads. ``1`` runs the rules inline, ``None`` lets
        :class:`~concurrent.futures.ThreadPoolExecutor` decide.

    Returns
    -------
    RunResult
        Unsuppressed diagnostics (unordered), one
        :class:`RuleExecutionError` per crashed rule, and the number of
        suppressed diagnostics.
    """
    names = sorted(rules)
    slots: dict[str, _Slot] = {}

    if max_workers == 1 or len(names) <= 1:
        for name in names:
            slots[name] = _execute(name, rules[name], schema)
    else:
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="gqllinter") as ex:
            futures = {name: ex.submit(_execute, name, rules[name], schema) for name in names}
            for name, future in futures.items():
                slots[name] = future.result()

    collected: list[Diagnostic] = []
    errors: list[RuleExecutionError] = []
    for name in names:
        slot = slots[name]
        collected.extend(slot.diagnostics)
        if slot.error is not None:
            errors.append(slot.error)

    suppressions = scan_ignore_markers({schema.file: schema.source}, ignore_marker)
    kept, suppressed = suppressions.apply(collected)
    return RunResult(diagnostics=kept, errors=errors, suppressed=suppressed)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _execute(name: str, rule: Rule, schema: SchemaDocument) -> _Slot:
    """Run one rule, converting any failure into a :class:`RuleExecutionError`.

    Diagnostics are only kept when the whole ``check`` call succeeds, so a
    rule that crashes halfway through a generator reports nothing partial.
    """
    start = time.monotonic()
    try:
        diagnostics = list(rule.check(schema))
    except (Exception, SystemExit) as exc:  # noqa: BLE001 - isolate arbitrary rule failures
        logger.warning("Rule %s failed on %s: %s", name, schema.file, exc)
        logger.debug("Rule %s traceback", name, exc_info=True)
        return _Slot(error=RuleExecutionError(rule_name=name, message=_describe(exc)))

    for item in diagnostics:
        if not isinstance(item, Diagnostic):
            msg = f"check() returned {type(item).__name__}, expected Diagnostic"
            logger.warning("Rule %s failed on %s: %s", name, schema.file, msg)
            return _Slot(error=RuleExecutionError(rule_name=name, message=msg))

    logger.debug(
        "Rule %s: %d diagnostic(s) in %.1fms",
        name,
        len(diagnostics),
        (time.monotonic() - start) * 1000,
    )
    return _Slot(diagnostics=diagnostics)


def _describe(exc: BaseException) -> str:
    text = str(exc)
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__
