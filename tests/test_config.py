"""Tests for gqllinter.config — loading, validation and CLI merging."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from gqllinter.config import LinterConfig, discover_config, load_config, parse_config
from gqllinter.engine.ignore import DEFAULT_IGNORE_MARKER
from gqllinter.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path


class TestDefaults:
    """Tests for LinterConfig defaults."""

    def test_defaults(self) -> None:
        config = LinterConfig()
        assert config.rules == ()
        assert config.ignore == DEFAULT_IGNORE_MARKER
        assert config.format == "text"
        assert config.output is None
        assert config.workers is None


class TestLoadConfig:
    """Tests for load_config()."""

    def test_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / ".gqllinter.yml"
        path.write_text(
            "rules: [types-have-descriptions, naming-convention]\n"
            "exclude: no-query-prefixes\n"
            "custom-rule-paths: [lint-rules]\n"
            "custom_rules: [acme.rules:make]\n"
            'ignore: "# nolint"\n'
            "format: json\n"
            "output: out/results.json\n"
            'schema: ["schema/**/*.graphql"]\n'
            "workers: 4\n"
        )
        config = load_config(path)
        assert config.rules == ("types-have-descriptions", "naming-convention")
        assert config.exclude == ("no-query-prefixes",)
        assert config.custom_rule_paths == (str(tmp_path / "lint-rules"),)
        assert config.custom_rules == ("acme.rules:make",)
        assert config.ignore == "# nolint"
        assert config.format == "json"
        assert config.output == str(tmp_path / "out" / "results.json")
        assert config.schema == (str(tmp_path / "schema" / "**" / "*.graphql"),)
        assert config.workers == 4

    def test_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / ".gqllinter.json"
        path.write_text('{"rules": "a-rule, b-rule", "format": "text"}')
        assert load_config(path).rules == ("a-rule", "b-rule")

    def test_empty_file_is_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / ".gqllinter.yml"
        path.write_text("")
        assert load_config(path) == LinterConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="cannot read config file"):
            load_config(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / ".gqllinter.yml"
        path.write_text("rules: [unclosed\n")
        with pytest.raises(ConfigError, match="invalid config file"):
            load_config(path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / ".gqllinter.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="invalid config file"):
            load_config(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / ".gqllinter.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="must be a mapping, got list"):
            load_config(path)


class TestParseConfig:
    """Tests for parse_config() validation."""

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigError, match="unknown key 'colour'"):
            parse_config({"colour": "red"})

    def test_list_with_non_string(self) -> None:
        with pytest.raises(ConfigError, match="'rules' index 1: expected a string, got int"):
            parse_config({"rules": ["a", 3]})

    def test_list_key_wrong_type(self) -> None:
        with pytest.raises(ConfigError, match="'exclude' must be a list of strings"):
            parse_config({"exclude": {"a": 1}})

    def test_unsupported_format(self) -> None:
        with pytest.raises(ConfigError, match="unsupported format 'xml'"):
            parse_config({"format": "xml"})

    @pytest.mark.parametrize("workers", [0, -1, "4", True])
    def test_bad_workers(self, workers: object) -> None:
        with pytest.raises(ConfigError, match="'workers' must be a positive integer"):
            parse_config({"workers": workers})

    def test_non_string_ignore(self) -> None:
        with pytest.raises(ConfigError, match="'ignore' must be a string"):
            parse_config({"ignore": 5})

    def test_empty_ignore_allowed(self) -> None:
        assert parse_config({"ignore": ""}).ignore == ""

    def test_context_in_message(self) -> None:
        with pytest.raises(ConfigError, match=r"^settings\.yml: "):
            parse_config({"bogus": 1}, context="settings.yml")

    def test_paths_kept_without_base_dir(self) -> None:
        assert parse_config({"custom_rule_paths": ["rules"]}).custom_rule_paths == ("rules",)


class TestMerge:
    """Tests for LinterConfig.merge()."""

    def test_cli_values_win(self) -> None:
        base = LinterConfig(rules=("a",), format="text")
        merged = base.merge(rules=["b", "c"], format="json")
        assert merged.rules == ("b", "c")
        assert merged.format == "json"

    def test_unset_values_keep_file_settings(self) -> None:
        base = LinterConfig(rules=("a",), ignore="# nolint", workers=2)
        merged = base.merge(rules=[], ignore=None, workers=None, exclude=())
        assert merged == base

    def test_invalid_override_rejected(self) -> None:
        with pytest.raises(ConfigError, match="^command line: "):
            LinterConfig().merge(workers=0)


class TestDiscoverConfig:
    """Tests for discover_config()."""

    def test_first_match_wins(self, tmp_path: Path) -> None:
        (tmp_path / ".gqllinter.json").write_text("{}")
        (tmp_path / ".gqllinter.yml").write_text("")
        assert discover_config(tmp_path) == tmp_path / ".gqllinter.yml"

    def test_none_when_absent(self, tmp_path: Path) -> None:
        assert discover_config(tmp_path) is None
