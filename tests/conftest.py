"""Shared test fixtures for gqllinter."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from gqllinter.schema import SchemaDocument, parse_schema

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

# Type QueryRoot at 5:1, its field ``a`` at 6:3, no descriptions anywhere.
QUERY_ROOT_SDL = "schema {\n  query: QueryRoot\n}\n\ntype QueryRoot {\n  a: String\n}\n"

GOOD_PLUGIN = '''\
class NoFooFields:
    name = "no-foo-fields"
    description = "Fields must not be called foo"

    def check(self, schema):
        for node in schema.type_definitions():
            for field in getattr(node, "fields", None) or ():
                if field.name.value == "foo":
                    yield schema.diagnostic(field, self.name, "Field `foo` is not allowed.")


def new_rule():
    return NoFooFields()
'''

MISSING_CONSTRUCTOR_PLUGIN = '''\
class Orphan:
    name = "orphan"
    description = "Never registered"

    def check(self, schema):
        return []
'''


@pytest.fixture()
def query_root_sdl() -> str:
    return QUERY_ROOT_SDL


@pytest.fixture()
def make_schema() -> Callable[..., SchemaDocument]:
    """Parse SDL text into a SchemaDocument (file name defaults to schema.graphql)."""

    def _make(source: str, file: str = "schema.graphql") -> SchemaDocument:
        return parse_schema(source, file)

    return _make


@pytest.fixture()
def plugin_dir(tmp_path: Path) -> Path:
    """Directory with one well-formed plugin and one missing its constructor."""
    directory = tmp_path / "custom_rules"
    directory.mkdir()
    (directory / "no_foo_fields.py").write_text(GOOD_PLUGIN)
    (directory / "orphan.py").write_text(MISSING_CONSTRUCTOR_PLUGIN)
    return directory


@pytest.fixture()
def good_plugin() -> str:
    """Source of a well-formed plugin registering ``no-foo-fields``."""
    return GOOD_PLUGIN
