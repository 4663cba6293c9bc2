"""gqllinter: GraphQL schema linter with pluggable rules."""

__version__ = "0.4.0"
