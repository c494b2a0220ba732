"""Abstract base class for configuration stores.

A store persists named `StoredQueryConfig` objects. The query builder never
talks to a store directly; `QueryConfigManager` loads a configuration and hands
the validated model to the builder.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .logger import Logger
from .schema import StoredQueryConfig


class ConfigStoreAdapter(ABC):
    """Abstract base class for configuration store backends."""

    def __init__(self, **kwargs) -> None:
        self.logger = Logger(self.__class__.__name__)

    @abstractmethod
    def save(self, config: StoredQueryConfig) -> None:
        """Insert or replace the configuration with the same name."""
        raise NotImplementedError

    @abstractmethod
    def get(self, name: str) -> Optional[StoredQueryConfig]:
        """Return the named configuration, or None if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    def list(self, tags: Optional[Sequence[str]] = None) -> List[StoredQueryConfig]:
        """Return all configurations, or those sharing at least one of `tags`."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, name: str) -> bool:
        """Delete the named configuration; return True if one was removed."""
        raise NotImplementedError
