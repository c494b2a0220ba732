"""Query builder.

Compiles a validated `QueryConfig` plus a runtime data bag into a
MongoDB-style filter document. Stages run in a fixed order and each merges
into the same output dict:

1. static filters, copied verbatim
2. field mappings, copied when the data bag holds a value
3. date ranges, emitted as ``$gte``/``$lte`` pairs
4. the condition tree, reduced recursively

A reference that resolves to ``None`` drops only the condition that owns it.
Empty groupings vanish, and a single surviving condition under an AND is
emitted without its ``$and`` wrapper. ``$or``/``$nor`` always keep theirs.

The builder holds no state; one instance is safe to share across threads.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence

from ..constants import Operator
from ..schema import Condition, DateRangeCondition, FieldCondition, LogicalCondition, QueryConfig
from .resolver import get_nested_value, is_reference, resolve_value
from .utils import normalize_config_input

__all__ = (
    "QueryBuilder",
    "query_builder",
    "compile_query",
)


class QueryBuilder:
    """Compile query configurations into filter documents."""

    def build(self, config: QueryConfig | Mapping, data: Optional[Mapping] = None) -> Dict[str, Any]:
        """Build a filter document.

        Args:
            config: Validated `QueryConfig`, or a raw mapping to validate first
            data: Runtime values for field mappings, date ranges and references

        Returns:
            Filter document ready for a MongoDB-style driver

        Raises:
            ConfigValidationError: If `config` is a mapping that fails validation
            TypeError: If `config` is neither a `QueryConfig` nor a mapping
        """
        config = normalize_config_input(config)
        data = {} if data is None else data
        query: Dict[str, Any] = {}

        if config.static_filters:
            query.update(config.static_filters)

        if config.field_mappings:
            for field, path in config.field_mappings.items():
                value = get_nested_value(data, path)
                if value is not None:
                    query[field] = value

        if config.date_ranges:
            for date_range in config.date_ranges:
                range_query = self.build_date_range(date_range, data)
                if range_query:
                    query.update(range_query)

        if config.conditions:
            conditions_query = self.build_conditions(config.conditions, data)
            if conditions_query:
                query.update(conditions_query)

        return query

    def build_conditions(self, conditions: Sequence[Condition], data: Mapping) -> Optional[Dict[str, Any]]:
        """Reduce a list of sibling conditions under an implicit AND."""
        built = self._build_all(conditions, data)
        if not built:
            return None
        if len(built) == 1:
            return built[0]
        return {Operator.AND: built}

    def build_condition(self, condition: Condition, data: Mapping) -> Optional[Dict[str, Any]]:
        """Build a single node of any kind; None means the node is omitted."""
        if isinstance(condition, LogicalCondition):
            return self.build_logical_condition(condition, data)
        if isinstance(condition, DateRangeCondition):
            return self.build_date_range(condition, data)
        if isinstance(condition, FieldCondition):
            return self.build_field_condition(condition, data)
        raise TypeError(f"Unsupported condition node: {type(condition).__name__}")

    def build_logical_condition(self, condition: LogicalCondition, data: Mapping) -> Optional[Dict[str, Any]]:
        built = self._build_all(condition.conditions, data)
        if not built:
            return None
        if len(built) == 1 and condition.operator == Operator.AND:
            return built[0]
        return {condition.operator: built}

    def build_field_condition(self, condition: FieldCondition, data: Mapping) -> Optional[Dict[str, Any]]:
        value = condition.value
        if is_reference(value):
            value = resolve_value(value, data)
            # Absent data makes the condition optional
            if value is None:
                return None

        if condition.operator == Operator.EQ:
            return {condition.field: value}
        return {condition.field: {condition.operator: value}}

    def build_date_range(self, condition: DateRangeCondition, data: Mapping) -> Optional[Dict[str, Any]]:
        """Build ``{field: {"$gte": from, "$lte": to}}`` with whichever bounds are known.

        Bounds supplied by the data bag under ``data[field]["from"|"to"]``
        win over the condition's own defaults.
        """
        range_data = get_nested_value(data, condition.field)
        if not isinstance(range_data, Mapping):
            range_data = {}

        start = range_data.get("from")
        if start is None:
            start = resolve_value(condition.from_, data)
        end = range_data.get("to")
        if end is None:
            end = resolve_value(condition.to, data)

        bounds: Dict[str, Any] = {}
        if start is not None:
            bounds[Operator.GTE] = start
        if end is not None:
            bounds[Operator.LTE] = end
        if not bounds:
            return None
        return {condition.field: bounds}

    def _build_all(self, conditions: Sequence[Condition], data: Mapping) -> List[Dict[str, Any]]:
        built = []
        for condition in conditions:
            result = self.build_condition(condition, data)
            if result:
                built.append(result)
        return built


query_builder = QueryBuilder()


def compile_query(config: QueryConfig | Mapping, data: Optional[Mapping] = None) -> Dict[str, Any]:
    """Compile `config` against `data` using the shared `QueryBuilder`."""
    return query_builder.build(config, data)
