"""Tests for gqllinter.engine.runner — parallel execution and error isolation."""

from __future__ import annotations

import sys
import threading
from typing import TYPE_CHECKING

import pytest

from gqllinter.engine.diagnostics import Diagnostic, Location
from gqllinter.engine.formatter import sort_diagnostics
from gqllinter.engine.registry import default_registry
from gqllinter.engine.runner import run_rules

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from gqllinter.schema import SchemaDocument


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _LineRule:
    """Reports one diagnostic per requested line."""

    description = "test rule"

    def __init__(self, name: str, lines: Iterable[int]) -> None:
        self.name = name
        self.lines = list(lines)

    def check(self, schema: SchemaDocument) -> Iterable[Diagnostic]:
        return [
            Diagnostic(f"line {n}", self.name, Location(schema.file, n, 1)) for n in self.lines
        ]


class _CrashingRule:
    name = "crasher"
    description = "always fails"

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        yield Diagnostic("partial", self.name, Location(schema.file, 1, 1))
        msg = "boom"
        raise RuntimeError(msg)


class _ExitingRule:
    name = "exits"
    description = "calls sys.exit"

    def check(self, schema: SchemaDocument) -> Iterable[Diagnostic]:
        sys.exit(2)


class _WrongTypeRule:
    name = "wrong-type"
    description = "returns strings"

    def check(self, schema: SchemaDocument) -> Iterable[Diagnostic]:
        return ["not a diagnostic"]  # type: ignore[list-item]


class _ThreadRecordingRule:
    description = "records the calling thread"

    def __init__(self, name: str, seen: set[str]) -> None:
        self.name = name
        self._seen = seen

    def check(self, schema: SchemaDocument) -> Iterable[Diagnostic]:
        self._seen.add(threading.current_thread().name)
        return []


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestRunRules:
    """Tests for run_rules()."""

    def test_collects_from_every_rule(
        self, make_schema: Callable[..., SchemaDocument], query_root_sdl: str
    ) -> None:
        rules = {"a": _LineRule("a", [1, 2]), "b": _LineRule("b", [3])}
        result = run_rules(make_schema(query_root_sdl), rules)
        assert sorted(d.rule_name for d in result.diagnostics) == ["a", "a", "b"]
        assert result.errors == []

    def test_no_rules_no_output(
        self, make_schema: Callable[..., SchemaDocument], query_root_sdl: str
    ) -> None:
        result = run_rules(make_schema(query_root_sdl), {})
        assert result.diagnostics == []
        assert result.errors == []

    def test_crashing_rule_is_isolated(
        self, make_schema: Callable[..., SchemaDocument], query_root_sdl: str
    ) -> None:
        rules = {"a": _LineRule("a", [2]), "crasher": _CrashingRule()}
        result = run_rules(make_schema(query_root_sdl), rules)
        assert [d.rule_name for d in result.diagnostics] == ["a"]
        assert len(result.errors) == 1
        assert result.errors[0].rule_name == "crasher"
        assert result.errors[0].message == "RuntimeError: boom"
        assert str(result.errors[0]) == "rule 'crasher' failed: RuntimeError: boom"

    def test_system_exit_in_rule_is_isolated(
        self, make_schema: Callable[..., SchemaDocument], query_root_sdl: str
    ) -> None:
        rules = {"a": _LineRule("a", [2]), "exits": _ExitingRule()}
        result = run_rules(make_schema(query_root_sdl), rules, max_workers=2)
        assert [d.rule_name for d in result.diagnostics] == ["a"]
        assert [str(e) for e in result.errors] == ["rule 'exits' failed: SystemExit: 2"]

    def test_non_diagnostic_output_is_an_error(
        self, make_schema: Callable[..., SchemaDocument], query_root_sdl: str
    ) -> None:
        result = run_rules(make_schema(query_root_sdl), {"wrong-type": _WrongTypeRule()})
        assert result.diagnostics == []
        assert "expected Diagnostic" in result.errors[0].message

    @pytest.mark.parametrize("workers", [1, 2, 8, None])
    def test_output_independent_of_worker_count(
        self,
        make_schema: Callable[..., SchemaDocument],
        query_root_sdl: str,
        workers: int | None,
    ) -> None:
        rules = {f"r{i}": _LineRule(f"r{i}", range(i, i + 3)) for i in range(6)}
        schema = make_schema(query_root_sdl)
        baseline = sort_diagnostics(run_rules(schema, rules, max_workers=1).diagnostics)
        result = run_rules(schema, rules, max_workers=workers)
        assert sort_diagnostics(result.diagnostics) == baseline

    def test_single_worker_runs_inline(
        self, make_schema: Callable[..., SchemaDocument], query_root_sdl: str
    ) -> None:
        seen: set[str] = set()
        rules = {n: _ThreadRecordingRule(n, seen) for n in ("a", "b", "c")}
        run_rules(make_schema(query_root_sdl), rules, max_workers=1)
        assert seen == {threading.current_thread().name}

    def test_pool_threads_are_named(
        self, make_schema: Callable[..., SchemaDocument], query_root_sdl: str
    ) -> None:
        seen: set[str] = set()
        rules = {n: _ThreadRecordingRule(n, seen) for n in ("a", "b", "c")}
        run_rules(make_schema(query_root_sdl), rules, max_workers=2)
        assert seen
        assert all(name.startswith("gqllinter") for name in seen)


class TestRunnerSuppression:
    """Ignore markers applied by run_rules()."""

    def test_marker_suppresses_only_its_line(
        self, make_schema: Callable[..., SchemaDocument]
    ) -> None:
        sdl = "type Query {\n  a: String # gqllinter-ignore\n  b: String\n}\n"
        result = run_rules(make_schema(sdl), {"r": _LineRule("r", [1, 2, 3])})
        assert sorted(d.location.line for d in result.diagnostics) == [1, 3]
        assert result.suppressed == 1

    def test_custom_marker(self, make_schema: Callable[..., SchemaDocument]) -> None:
        sdl = "type Query {\n  a: String # nolint\n}\n"
        rules = {"r": _LineRule("r", [2])}
        assert run_rules(make_schema(sdl), rules, ignore_marker="# nolint").diagnostics == []
        assert len(run_rules(make_schema(sdl), rules).diagnostics) == 1

    def test_builtin_findings_suppressed(
        self, make_schema: Callable[..., SchemaDocument], query_root_sdl: str
    ) -> None:
        schema_plain = make_schema(query_root_sdl)
        marked = query_root_sdl.replace("  a: String\n", "  a: String # gqllinter-ignore\n")
        schema_marked = make_schema(marked)
        rules = dict(default_registry().resolve(["fields-have-descriptions"]).rules)

        plain = run_rules(schema_plain, rules)
        assert [(d.location.line, d.location.column) for d in plain.diagnostics] == [(6, 3)]
        assert run_rules(schema_marked, rules).diagnostics == []


class TestDefaultRuleScenario:
    """The built-in description rules against a minimal undocumented schema."""

    def test_type_and_field_reported(
        self, make_schema: Callable[..., SchemaDocument], query_root_sdl: str
    ) -> None:
        active = default_registry().resolve(
            ["types-have-descriptions", "fields-have-descriptions"]
        )
        result = run_rules(make_schema(query_root_sdl, "api.graphql"), active.rules)
        found = [
            (d.location.line, d.location.column, d.rule_name)
            for d in sort_diagnostics(result.diagnostics)
        ]
        assert found == [
            (5, 1, "types-have-descriptions"),
            (6, 3, "fields-have-descriptions"),
        ]
        assert result.errors == []
