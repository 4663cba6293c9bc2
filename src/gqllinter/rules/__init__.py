"""Built-in lint rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gqllinter.rules.deprecation import RequireDeprecationReason
from gqllinter.rules.descriptions import (
    CapitalizedDescriptions,
    EnumDescriptions,
    FieldsHaveDescriptions,
    NoHashtagDescription,
    TypesHaveDescriptions,
)
from gqllinter.rules.entities import LinkViaTypesNotIds
from gqllinter.rules.enums import EnumReservedValues, EnumUnknownCase
from gqllinter.rules.inputs import InputEnumSuffix, InputName
from gqllinter.rules.lists import ListNonNullItems
from gqllinter.rules.mutations import MutationResponseNullable, NoScalarResultTypeOnMutation
from gqllinter.rules.naming import NamingConvention, NoFieldNamespacing
from gqllinter.rules.nullability import FieldsNullableExceptId
from gqllinter.rules.ordering import Alphabetize
from gqllinter.rules.queries import MinimalTopLevelQueries, NoQueryPrefixes, QueryResponseNullable
from gqllinter.rules.relay import (
    RelayArguments,
    RelayConnectionTypes,
    RelayEdgeTypes,
    RelayNamingConvention,
    RelayPageInfo,
)
from gqllinter.rules.usage import NoUnimplementedInterface, NoUnusedFields, NoUnusedTypes

if TYPE_CHECKING:
    from gqllinter.engine.rule import Rule

BUILTIN_RULE_CLASSES: tuple[type, ...] = (
    # descriptions
    TypesHaveDescriptions,
    FieldsHaveDescriptions,
    EnumDescriptions,
    CapitalizedDescriptions,
    NoHashtagDescription,
    RequireDeprecationReason,
    # naming and ordering
    NamingConvention,
    NoFieldNamespacing,
    Alphabetize,
    # types and fields
    ListNonNullItems,
    FieldsNullableExceptId,
    EnumUnknownCase,
    EnumReservedValues,
    InputEnumSuffix,
    LinkViaTypesNotIds,
    NoUnusedTypes,
    NoUnusedFields,
    NoUnimplementedInterface,
    # root operations
    NoQueryPrefixes,
    QueryResponseNullable,
    MinimalTopLevelQueries,
    InputName,
    NoScalarResultTypeOnMutation,
    MutationResponseNullable,
    # relay
    RelayConnectionTypes,
    RelayEdgeTypes,
    RelayNamingConvention,
    RelayPageInfo,
    RelayArguments,
)


def builtin_rules() -> list[Rule]:
    """Return fresh instances of every built-in rule."""
    return [cls() for cls in BUILTIN_RULE_CLASSES]


__all__ = [
    "BUILTIN_RULE_CLASSES",
    "Alphabetize",
    "CapitalizedDescriptions",
    "EnumDescriptions",
    "EnumReservedValues",
    "EnumUnknownCase",
    "FieldsHaveDescriptions",
    "FieldsNullableExceptId",
    "InputEnumSuffix",
    "InputName",
    "LinkViaTypesNotIds",
    "ListNonNullItems",
    "MinimalTopLevelQueries",
    "MutationResponseNullable",
    "NamingConvention",
    "NoFieldNamespacing",
    "NoHashtagDescription",
    "NoQueryPrefixes",
    "NoScalarResultTypeOnMutation",
    "NoUnimplementedInterface",
    "NoUnusedFields",
    "NoUnusedTypes",
    "QueryResponseNullable",
    "RelayArguments",
    "RelayConnectionTypes",
    "RelayEdgeTypes",
    "RelayNamingConvention",
    "RelayPageInfo",
    "RequireDeprecationReason",
    "TypesHaveDescriptions",
    "builtin_rules",
]
