"""Schema adapter: parse SDL with graphql-core into a read-only, position-tagged document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from graphql import GraphQLSyntaxError, Source, parse
from graphql.language import (
    DirectiveDefinitionNode,
    DocumentNode,
    Lexer,
    OperationType,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    TokenKind,
    TypeDefinitionNode,
    TypeExtensionNode,
)

from gqllinter.engine.diagnostics import Diagnostic, Location
from gqllinter.errors import GqlLinterError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from graphql.language import Node

DEFAULT_QUERY_TYPE = "Query"
DEFAULT_ROOT_TYPES: dict[OperationType, str] = {
    OperationType.QUERY: DEFAULT_QUERY_TYPE,
    OperationType.MUTATION: "Mutation",
    OperationType.SUBSCRIPTION: "Subscription",
}


class SchemaSyntaxError(GqlLinterError):
    """Raised when SDL text cannot be parsed."""

    def __init__(self, file: str, line: int, column: int, message: str) -> None:
        super().__init__(f"{file}:{line}:{column}: {message}")
        self.file = file
        self.line = line
        self.column = column
        self.message = message


@dataclass(frozen=True)
class SchemaDocument:
    """One parsed schema file, shared read-only by every rule of a run.

    Rules receive the raw ``source`` next to the graphql-core ``document`` so
    that purely textual checks (comments, formatting) need no extra I/O.
    """

    file: str
    source: str
    document: DocumentNode

    # -- traversal ----------------------------------------------------------

    def type_definitions(self) -> Iterator[TypeDefinitionNode]:
        """Yield type definitions (object, interface, input, enum, union, scalar)."""
        for definition in self.document.definitions:
            if isinstance(definition, TypeDefinitionNode):
                yield definition

    def type_extensions(self) -> Iterator[TypeExtensionNode]:
        """Yield ``extend ...`` type extensions."""
        for definition in self.document.definitions:
            if isinstance(definition, TypeExtensionNode):
                yield definition

    def directive_definitions(self) -> Iterator[DirectiveDefinitionNode]:
        for definition in self.document.definitions:
            if isinstance(definition, DirectiveDefinitionNode):
                yield definition

    def root_type_name(self, operation: OperationType) -> str:
        """Return the root type name for *operation*.

        A ``schema { ... }`` block (or its extension) overrides the default
        ``Query`` / ``Mutation`` / ``Subscription`` name.
        """
        for definition in self.document.definitions:
            if isinstance(definition, (SchemaDefinitionNode, SchemaExtensionNode)):
                for op in definition.operation_types or ():
                    if op.operation == operation:
                        return op.type.name.value
        return DEFAULT_ROOT_TYPES[operation]

    def query_type_name(self) -> str:
        return self.root_type_name(OperationType.QUERY)

    def root_type_names(self) -> frozenset[str]:
        return frozenset(self.root_type_name(op) for op in OperationType)

    # -- positions ----------------------------------------------------------

    def location_of(self, node: Node) -> Location:
        """Return the position of *node*.

        A node preceded by a description is located at the token following
        the description (the ``type`` keyword, the field name, ...).
        """
        loc = node.loc
        if loc is None:
            return Location(file=self.file, line=1, column=1)
        token = loc.start_token
        if getattr(node, "description", None) is not None:
            nxt = token.next
            while nxt is not None and nxt.kind == TokenKind.COMMENT:
                nxt = nxt.next
            if nxt is not None:
                token = nxt
        return Location(file=self.file, line=token.line, column=token.column)

    def diagnostic(self, node: Node, rule_name: str, message: str) -> Diagnostic:
        """Build a diagnostic located at *node*."""
        return Diagnostic(message=message, rule_name=rule_name, location=self.location_of(node))


def parse_schema(source: str, file: str) -> SchemaDocument:
    """Parse SDL *source* read from *file*.

    Raises
    ------
    SchemaSyntaxError
        When graphql-core rejects the text.
    """
    try:
        document = parse(Source(source, file))
    except GraphQLSyntaxError as exc:
        line, column = 1, 1
        if exc.locations:
            line, column = exc.locations[0].line, exc.locations[0].column
        raise SchemaSyntaxError(file, line, column, exc.message) from exc
    return SchemaDocument(file=file, source=source, document=document)


def has_definitions(source: str) -> bool:
    """Return ``False`` when *source* holds only whitespace and comments.

    Text the lexer rejects counts as content so that the parser reports it.
    """
    try:
        return Lexer(Source(source)).advance().kind != TokenKind.EOF
    except GraphQLSyntaxError:
        return True
