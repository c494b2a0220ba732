"""
confquery compiles declarative query configurations into MongoDB-style
filter documents.

The main entry points are `compile_query` / `QueryBuilder`, the schema
validator (`validate_config`) and `QueryConfigManager` for named
configurations kept in a store.
"""

from .abc import ConfigStoreAdapter
from .constants import Operator
from .manager import QueryConfigManager
from .querydsl import QueryBuilder, and_, compile_query, date_range, field, nor, or_, ref
from .schema import (
    DateRangeCondition,
    FieldCondition,
    LogicalCondition,
    QueryConfig,
    StoredQueryConfig,
    safe_validate_config,
    validate_config,
)
from .stores import InMemoryConfigStore

__version__ = "0.1.0"

__all__ = [
    "QueryBuilder",
    "compile_query",
    "QueryConfig",
    "StoredQueryConfig",
    "FieldCondition",
    "LogicalCondition",
    "DateRangeCondition",
    "validate_config",
    "safe_validate_config",
    "Operator",
    "field",
    "and_",
    "or_",
    "nor",
    "date_range",
    "ref",
    "ConfigStoreAdapter",
    "InMemoryConfigStore",
    "QueryConfigManager",
]
