"""Builder utility functions."""

from collections.abc import Mapping
from typing import Any

from ..schema import QueryConfig, validate_config


def normalize_config_input(config: Any) -> QueryConfig:
    """Normalize a `QueryConfig` or raw mapping to a validated `QueryConfig`.

    Args:
        config: `QueryConfig` instance (used as-is) or mapping (validated)

    Returns:
        Validated configuration ready for the builder

    Raises:
        ConfigValidationError: If a mapping fails validation
        TypeError: If input is neither a `QueryConfig` nor a mapping
    """
    if isinstance(config, QueryConfig):
        return config
    elif isinstance(config, Mapping):
        return validate_config(config)
    else:
        raise TypeError(f"config must be a QueryConfig or mapping, got {type(config).__name__}")
