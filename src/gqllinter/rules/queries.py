"""Rules for the query root type."""

from __future__ import annotations

from typing import TYPE_CHECKING

from graphql.language import NonNullTypeNode, OperationType

from gqllinter.rules.helpers import (
    OBJECT_NODES,
    fields_of,
    root_fields,
    schema_types,
    type_to_str,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gqllinter.engine.diagnostics import Diagnostic
    from gqllinter.schema import SchemaDocument

FORBIDDEN_PREFIXES: tuple[str, ...] = ("get", "list", "find", "fetch", "retrieve", "load", "read")
MAX_TOP_LEVEL_QUERIES = 12


class NoQueryPrefixes:
    """Query fields are not prefixed with ``get``/``list``/... since that is implied."""

    name = "no-query-prefixes"
    description = (
        "Query fields cannot be prefixed with get/list/find as it's implied by being a query"
    )

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        query_type = schema.query_type_name()
        for type_name, field in fields_of(schema, OBJECT_NODES):
            if type_name != query_type:
                continue
            field_name = field.name.value
            prefix = forbidden_prefix(field_name)
            if prefix is None:
                continue
            suggestion = field_name[len(prefix)].lower() + field_name[len(prefix) + 1 :]
            yield schema.diagnostic(
                field,
                self.name,
                f"Query field `{field_name}` should not be prefixed with '{prefix}' as it's "
                f"implied by being a query. Consider `{suggestion}` instead.",
            )


def forbidden_prefix(field_name: str) -> str | None:
    """Return the first forbidden prefix followed by a capitalized word, if any."""
    for prefix in FORBIDDEN_PREFIXES:
        rest = field_name[len(prefix) :]
        if field_name.lower().startswith(prefix) and rest[:1].isupper():
            return prefix
    return None


class QueryResponseNullable:
    """Fields of the query root are nullable, so one missing value does not null the response."""

    name = "query-response-nullable"
    description = "Query root response fields should be nullable."

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        for field in root_fields(schema, schema_types(schema), OperationType.QUERY):
            if not isinstance(field.type, NonNullTypeNode):
                continue
            actual = type_to_str(field.type)
            yield schema.diagnostic(
                field,
                self.name,
                f"Query root field `{field.name.value}` should be nullable "
                f"(`{type_to_str(field.type.type)}` instead of `{actual}`) to prevent "
                "nulling out entire query response due to missing data.",
            )


class MinimalTopLevelQueries:
    """The query root stays small; related lookups belong under core types."""

    name = "minimal-top-level-queries"
    description = (
        "Keep the top level queries to a minimum - following Yelp guidelines for better "
        "schema organization"
    )

    max_fields = MAX_TOP_LEVEL_QUERIES

    def check(self, schema: SchemaDocument) -> Iterator[Diagnostic]:
        types = schema_types(schema)
        fields = root_fields(schema, types, OperationType.QUERY)
        if len(fields) <= self.max_fields:
            return
        yield schema.diagnostic(
            types[schema.query_type_name()].node,
            self.name,
            f"Query type has {len(fields)} fields, consider reducing to {self.max_fields} "
            "or fewer. Group related queries under core types instead.",
        )
