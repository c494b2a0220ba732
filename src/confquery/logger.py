"""Logging helpers for confquery.

Library loggers live under the ``confquery`` namespace so applications can
tune them independently of their own loggers.
"""

import logging
from typing import Optional

from confquery.settings import settings as api_settings

ROOT_LOGGER_NAME = "confquery"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

_configured = False


def resolve_level(level: Optional[str]) -> int:
    """Map a level name to a logging constant, defaulting to INFO."""
    return _LEVELS.get((level or "").upper(), logging.INFO)


def setup_global_logging(level: str = "INFO") -> None:
    """Configure the root logger once in a standardized format.

    Args:
        level: Log level name (e.g., "DEBUG", "INFO")
    """
    global _configured
    if _configured:
        return
    logging.basicConfig(level=resolve_level(level), format=LOG_FORMAT)
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(resolve_level(level))
    _configured = True


class Logger:
    """Namespaced wrapper over standard logging.

    ``Logger("QueryConfigManager")`` logs to ``confquery.QueryConfigManager``.
    `.message()` is for lifecycle events (connections, cache loads): it logs
    at DEBUG when LOG_LEVEL is DEBUG and at INFO otherwise.
    """

    def __init__(self, name: Optional[str] = None) -> None:
        if not _configured:
            setup_global_logging(api_settings.LOG_LEVEL)
        if not name:
            full_name = ROOT_LOGGER_NAME
        elif name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
            full_name = name
        else:
            full_name = f"{ROOT_LOGGER_NAME}.{name}"
        self._logger = logging.getLogger(full_name)

    @property
    def name(self) -> str:
        return self._logger.name

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)

    def message(self, msg: str, *args, **kwargs) -> None:
        if (api_settings.LOG_LEVEL or "").upper() == "DEBUG":
            self.debug(msg, *args, **kwargs)
        else:
            self.info(msg, *args, **kwargs)
