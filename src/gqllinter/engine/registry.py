"""Rule registry: owns the known rules and resolves the active subset."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gqllinter.engine.rule import contract_violation
from gqllinter.errors import DuplicateRuleError, InvalidRuleError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from gqllinter.engine.rule import Rule

logger = logging.getLogger(__name__)

ORIGIN_BUILTIN = "builtin"


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ActiveRuleSet:
    """Rules selected for one invocation, plus requested names that matched nothing."""

    rules: Mapping[str, Rule] = field(default_factory=dict)
    unknown: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.rules)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class RuleRegistry:
    """Name-keyed collection of rules.

    Built-in rules are registered once at startup and must have unique names.
    Dynamic rules (config-declared modules, plugin directories) replace any
    existing entry with the same name, so a later source overrides an
    earlier one: built-in < config-declared < plugin directory.
    """

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}
        self._origins: dict[str, str] = {}

    def register_builtin(self, rule: Rule) -> None:
        """Add a built-in rule.

        Raises
        ------
        DuplicateRuleError
            When a rule with the same name is already registered.
        InvalidRuleError
            When *rule* does not satisfy the rule contract.
        """
        _ensure_contract(rule)
        if rule.name in self._rules:
            msg = f"Duplicate built-in rule '{rule.name}'"
            raise DuplicateRuleError(msg)
        self._rules[rule.name] = rule
        self._origins[rule.name] = ORIGIN_BUILTIN

    def register_dynamic(self, rule: Rule, *, origin: str) -> str | None:
        """Add a rule loaded at runtime, replacing any rule with the same name.

        Returns a warning message when an existing rule was overridden,
        ``None`` otherwise.
        """
        _ensure_contract(rule)
        warning: str | None = None
        previous = self._origins.get(rule.name)
        if previous is not None:
            warning = f"rule '{rule.name}' from {previous} overridden by {origin}"
            logger.warning("Rule %s from %s overridden by %s", rule.name, previous, origin)
        self._rules[rule.name] = rule
        self._origins[rule.name] = origin
        return warning

    def resolve(
        self,
        requested: Iterable[str] | None = None,
        *,
        excluded: Iterable[str] = (),
    ) -> ActiveRuleSet:
        """Select the rules to run.

        With no *requested* names every registered rule is active. Otherwise
        only the requested rules are, plus every dynamically loaded rule.
        Requested names that match nothing are reported in
        ``ActiveRuleSet.unknown`` instead of failing. *excluded* names are
        removed last.
        """
        requested_names = _dedupe(requested or ())
        excluded_names = set(excluded)

        if not requested_names:
            selected = dict(self._rules)
            unknown: list[str] = []
        else:
            selected = {}
            unknown = []
            for name in requested_names:
                rule = self._rules.get(name)
                if rule is None:
                    unknown.append(name)
                else:
                    selected[name] = rule
            for name, rule in self._rules.items():
                if self._origins[name] != ORIGIN_BUILTIN:
                    selected.setdefault(name, rule)

        active = {
            name: selected[name] for name in sorted(selected) if name not in excluded_names
        }
        return ActiveRuleSet(rules=active, unknown=tuple(unknown))

    def get(self, name: str) -> Rule | None:
        return self._rules.get(name)

    def origin_of(self, name: str) -> str | None:
        """Return where *name* was registered from (``builtin``, a path, a module)."""
        return self._origins.get(name)

    def names(self) -> list[str]:
        return sorted(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter([self._rules[name] for name in sorted(self._rules)])


def default_registry() -> RuleRegistry:
    """Return a new registry holding every built-in rule."""
    from gqllinter.rules import builtin_rules

    registry = RuleRegistry()
    for rule in builtin_rules():
        registry.register_builtin(rule)
    return registry


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _ensure_contract(rule: object) -> None:
    reason = contract_violation(rule)
    if reason is not None:
        raise InvalidRuleError(reason)


def _dedupe(names: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for raw in names:
        name = raw.strip()
        if name and name not in seen:
            seen.add(name)
            result.append(name)
    return result
