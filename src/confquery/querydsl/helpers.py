"""Shorthand constructors for condition nodes.

Typical usage:

    config = QueryConfig(
        conditions=[
            field("status", Operator.EQ, ref("status")),
            or_(
                field("priority", Operator.GTE, 3),
                field("assignedTo", Operator.EXISTS, True),
            ),
        ]
    )
"""

from datetime import date, datetime
from typing import Any, Optional, Union

from ..constants import Operator, REFERENCE_PREFIX
from ..schema import Condition, DateRangeCondition, FieldCondition, LogicalCondition

__all__ = (
    "field",
    "and_",
    "or_",
    "nor",
    "date_range",
    "ref",
)


def field(name: str, operator: str, value: Any) -> FieldCondition:
    return FieldCondition(field=name, operator=operator, value=value)


def and_(*conditions: Condition) -> LogicalCondition:
    return LogicalCondition(operator=Operator.AND, conditions=list(conditions))


def or_(*conditions: Condition) -> LogicalCondition:
    return LogicalCondition(operator=Operator.OR, conditions=list(conditions))


def nor(*conditions: Condition) -> LogicalCondition:
    return LogicalCondition(operator=Operator.NOR, conditions=list(conditions))


def date_range(
    name: str,
    from_: Optional[Union[datetime, date, str]] = None,
    to: Optional[Union[datetime, date, str]] = None,
) -> DateRangeCondition:
    """Build a date range.

    Both bounds are always set (possibly to None) so the node keeps its
    ``from``/``to`` keys when dumped and is classified as a date range again
    when the dump is validated.
    """
    return DateRangeCondition(field=name, from_=from_, to=to)


def ref(path: str) -> str:
    """Return the reference string for a dotted data path: ``ref("a.b") == "$a.b"``."""
    return f"{REFERENCE_PREFIX}{path}"
