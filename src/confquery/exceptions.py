"""Custom exceptions for confquery.

This module defines all custom exceptions used throughout the library for
consistent error handling and clear error messaging.
"""

from typing import Any, Dict


def _format_error(error: Any) -> str:
    if isinstance(error, dict) and "message" in error:
        path = error.get("path")
        return f"{path}: {error['message']}" if path else str(error["message"])
    return str(error)


# Base exception
class ConfQueryError(Exception):
    """Base exception for all confquery errors.

    Attributes:
        message: Error message
        details: Additional error context as key-value pairs
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        """Initialize exception with message and additional details.

        Args:
            message: Human-readable error message
            **kwargs: Additional context (e.g., config_name, max_depth). An
                ``errors`` list of ``{"path", "message"}`` entries is rendered
                as ``path: message`` pairs.
        """
        self.message = message
        self.details: Dict[str, Any] = kwargs
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the message, then validator errors as ``path: message``, then other details."""
        message = self.message
        errors = self.details.get("errors")
        if errors:
            rendered = "; ".join(_format_error(err) for err in errors)
            message = f"{message}: {rendered}" if message else rendered

        extra = {k: v for k, v in self.details.items() if k != "errors"}
        if not extra:
            return message

        details_str = ", ".join(f"{k}={v!r}" for k, v in extra.items())
        if message:
            return f"{message} ({details_str})"
        return details_str

    def __repr__(self) -> str:
        """Return detailed representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# Validation exceptions
class ValidationError(ConfQueryError):
    """Raised when a query configuration is structurally invalid.

    Example:
        >>> raise ValidationError("Invalid condition", path="conditions.0")
    """


class ConfigValidationError(ValidationError):
    """Raised by the schema validator with one entry per offending path.

    Example:
        >>> raise ConfigValidationError(
        ...     "Invalid query configuration",
        ...     errors=[{"path": "conditions.0.operator", "message": "Field required", "type": "missing"}],
        ... )
    """

    @property
    def errors(self) -> list:
        return self.details.get("errors", [])


class MaxDepthExceededError(ConfigValidationError):
    """Raised when a condition tree nests deeper than QUERY_MAX_DEPTH.

    Example:
        >>> raise MaxDepthExceededError(
        ...     "Condition tree too deep",
        ...     errors=[{"path": "conditions.0.conditions.0", "message": "Nesting exceeds 32", "type": "max_depth"}],
        ...     max_depth=32,
        ... )
    """


# Configuration exceptions
class ConfigurationError(ConfQueryError):
    """Raised when library settings are invalid or missing.

    Example:
        >>> raise ConfigurationError("Invalid configuration", setting="QUERY_MAX_DEPTH", value=0)
    """


class MissingConfigError(ConfigurationError):
    """Raised when required settings are not set.

    Example:
        >>> raise MissingConfigError("Configuration not set", config_key="MONGODB_URI")
    """


# Store exceptions
class ConfigStoreError(ConfQueryError):
    """Raised when a configuration store operation fails.

    Example:
        >>> raise ConfigStoreError("Failed to save configuration", config_name="active-orders")
    """


class ConfigNotFoundError(ConfigStoreError):
    """Raised when a named query configuration does not exist.

    Example:
        >>> raise ConfigNotFoundError("Query configuration not found", config_name="active-orders")
    """

