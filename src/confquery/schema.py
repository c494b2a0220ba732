"""Pydantic schemas for query configurations.

These models are the schema validator: a raw configuration (parsed JSON, a
document loaded from a store) is validated into a `QueryConfig` once, and the
query builder only ever walks the resulting typed tree.

Condition nodes carry no explicit type key. `classify_condition` sniffs the
shape in a fixed order (logical, then date range, then field) and the result
drives pydantic's tagged-union validation.
"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Literal, NamedTuple, Optional, Type, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    Tag,
    model_serializer,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from .constants import LOGICAL_OPERATORS
from .exceptions import ConfigValidationError, MaxDepthExceededError
from .settings import settings

DateValue = Union[datetime, date, str]


class FieldCondition(BaseModel):
    """One comparison on one field, e.g. ``{"field": "age", "operator": "$gte", "value": 18}``.

    `value` may be a literal or a reference string (``"$path.in.data"``).
    An explicit ``None`` literal is kept as-is.
    """

    field: str = Field(..., min_length=1, description="Target field, dotted for nested documents.")
    operator: str = Field(..., min_length=1, description="Filter operator, passed through verbatim.")
    value: Any = Field(..., description="Literal value or data reference.")


class DateRangeCondition(BaseModel):
    """Inclusive range on one field, filled from the data bag or from defaults."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    field: str = Field(..., min_length=1)
    from_: Optional[DateValue] = Field(None, alias="from")
    to: Optional[DateValue] = None

    @model_serializer(mode="wrap")
    def dump_bounds(self, handler: SerializerFunctionWrapHandler, info: SerializationInfo) -> Dict[str, Any]:
        # Bound keys are always present so the dump still classifies as a date range
        data = handler(self)
        data.setdefault("from" if info.by_alias else "from_", None)
        data.setdefault("to", None)
        return data


class LogicalCondition(BaseModel):
    """Boolean grouping of child conditions under ``$and``, ``$or`` or ``$nor``."""

    operator: Literal["$and", "$or", "$nor"]
    conditions: List["Condition"] = Field(..., min_length=1)


def classify_condition(node: Any) -> Optional[str]:
    """Return the union tag for a condition node.

    Order matters: a node whose operator is a logical operator is a
    `LogicalCondition` even if it also has ``from``/``to`` keys.
    """
    if isinstance(node, BaseModel):
        return type(node).__name__
    if not isinstance(node, Mapping):
        return None
    if node.get("operator") in LOGICAL_OPERATORS:
        return "LogicalCondition"
    if "from" in node or "to" in node or "from_" in node:
        return "DateRangeCondition"
    return "FieldCondition"


Condition = Annotated[
    Union[
        Annotated[FieldCondition, Tag("FieldCondition")],
        Annotated[LogicalCondition, Tag("LogicalCondition")],
        Annotated[DateRangeCondition, Tag("DateRangeCondition")],
    ],
    Discriminator(classify_condition),
]

_TAGS = {"FieldCondition", "LogicalCondition", "DateRangeCondition"}


class QueryConfig(BaseModel):
    """Declarative description of a filter document.

    Every section is optional; an absent section is skipped by the builder.
    Keys use the camelCase wire names, snake_case attribute names are also
    accepted.
    """

    model_config = ConfigDict(populate_by_name=True)

    static_filters: Optional[Dict[str, Any]] = Field(None, alias="staticFilters")
    field_mappings: Optional[Dict[str, str]] = Field(None, alias="fieldMappings")
    date_ranges: Optional[List[DateRangeCondition]] = Field(None, alias="dateRanges")
    conditions: Optional[List[Condition]] = None

    @model_validator(mode="before")
    @classmethod
    def check_depth(cls, data: Any) -> Any:
        # Runs before field validation so oversized trees are never recursed into
        if isinstance(data, Mapping):
            check_condition_depth(data.get("conditions"), settings.QUERY_MAX_DEPTH)
        return data

    def to_document(self) -> Dict[str, Any]:
        """Dump to the wire shape (camelCase keys, ``from`` for date ranges)."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class StoredQueryConfig(QueryConfig):
    """A named `QueryConfig` as persisted by a configuration store."""

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    version: Optional[int] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    tags: List[str] = Field(default_factory=list)


LogicalCondition.model_rebuild()
QueryConfig.model_rebuild()
StoredQueryConfig.model_rebuild()


def check_condition_depth(conditions: Any, max_depth: int) -> None:
    """Reject condition trees nested deeper than `max_depth`.

    Top-level conditions sit at depth 1. Walks iteratively and accepts raw
    mappings as well as already-built models.

    Raises:
        MaxDepthExceededError: naming the first node found beyond the limit
    """
    if not isinstance(conditions, (list, tuple)):
        return
    stack = [(node, 1, f"conditions.{i}") for i, node in enumerate(conditions)]
    while stack:
        node, depth, path = stack.pop()
        if depth > max_depth:
            raise MaxDepthExceededError(
                "Condition tree too deep",
                errors=[{"path": path, "message": f"Nesting exceeds {max_depth} levels", "type": "max_depth"}],
                max_depth=max_depth,
            )
        if classify_condition(node) != "LogicalCondition":
            continue
        children = node.conditions if isinstance(node, LogicalCondition) else node.get("conditions")
        if isinstance(children, (list, tuple)):
            stack.extend((child, depth + 1, f"{path}.conditions.{i}") for i, child in enumerate(children))


def _format_errors(exc: PydanticValidationError) -> List[Dict[str, Any]]:
    """Flatten pydantic errors into ``{"path", "message", "type"}`` entries."""
    errors = []
    for err in exc.errors():
        parts = [str(p) for p in err.get("loc", ()) if p not in _TAGS]
        errors.append({"path": ".".join(parts), "message": err.get("msg", ""), "type": err.get("type", "")})
    return errors


def validate_config(config: Any, model: Type[QueryConfig] = QueryConfig) -> QueryConfig:
    """Validate a raw configuration.

    Args:
        config: Mapping (or model instance) to validate
        model: `QueryConfig` or `StoredQueryConfig`

    Returns:
        Validated model instance

    Raises:
        ConfigValidationError: listing every offending path
    """
    try:
        return model.model_validate(config)
    except PydanticValidationError as exc:
        errors = _format_errors(exc)
        raise ConfigValidationError("Invalid query configuration", errors=errors) from exc


class ValidationResult(NamedTuple):
    success: bool
    data: Optional[QueryConfig] = None
    error: Optional[ConfigValidationError] = None


def safe_validate_config(config: Any, model: Type[QueryConfig] = QueryConfig) -> ValidationResult:
    """Like `validate_config` but reports failure in the result instead of raising."""
    try:
        return ValidationResult(success=True, data=validate_config(config, model))
    except ConfigValidationError as exc:
        return ValidationResult(success=False, error=exc)
