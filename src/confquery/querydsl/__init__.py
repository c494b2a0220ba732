"""Query DSL module.

Exports the `QueryBuilder` that compiles query configurations into
MongoDB-style filter documents, and shorthand constructors for condition
nodes.
"""

from .builder import QueryBuilder, compile_query, query_builder
from .helpers import and_, date_range, field, nor, or_, ref
from .resolver import get_nested_value, is_reference, resolve_value

__all__ = (
    "QueryBuilder",
    "query_builder",
    "compile_query",
    "field",
    "and_",
    "or_",
    "nor",
    "date_range",
    "ref",
    "get_nested_value",
    "is_reference",
    "resolve_value",
)
