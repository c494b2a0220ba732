"""
Manager for stored query configurations.

This module provides `QueryConfigManager`, which sits between a configuration
store and the query builder: configurations are validated before they are
persisted, optionally cached in memory after the first read, and compiled by
name against runtime data.
"""

import threading
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Union

from .abc import ConfigStoreAdapter
from .exceptions import ConfigNotFoundError
from .logger import Logger
from .querydsl.builder import QueryBuilder, query_builder
from .schema import StoredQueryConfig, validate_config
from .settings import settings


class QueryConfigManager:
    """Save, load and compile named query configurations.

    Attributes:
        store: Configuration store backend
        cache_enabled: Whether configurations are cached after the first read
        builder: Query builder used by `build_query`
    """

    def __init__(
        self,
        store: ConfigStoreAdapter,
        cache_enabled: bool = settings.QUERY_CONFIG_CACHE_ENABLED,
        builder: QueryBuilder = query_builder,
    ) -> None:
        self.store = store
        self.cache_enabled = cache_enabled
        self.builder = builder
        self._cache: Dict[str, StoredQueryConfig] = {}
        self._lock = threading.Lock()
        self.logger = Logger(self.__class__.__name__)
        self.logger.message(
            "QueryConfigManager initialized: store=%s cache_enabled=%s",
            store.__class__.__name__,
            cache_enabled,
        )

    def save_config(self, config: Union[StoredQueryConfig, Mapping]) -> StoredQueryConfig:
        """Validate and persist a configuration, stamping its timestamps.

        Args:
            config: `StoredQueryConfig` or raw mapping with a ``name``

        Returns:
            The configuration as stored

        Raises:
            ConfigValidationError: If the configuration is malformed
        """
        validated = validate_config(config, StoredQueryConfig)
        now = datetime.now(timezone.utc)
        update: Dict[str, Any] = {"updated_at": now}
        if validated.created_at is None:
            update["created_at"] = now
        stored = validated.model_copy(update=update)

        self.store.save(stored)
        if self.cache_enabled:
            with self._lock:
                self._cache[stored.name] = stored.model_copy(deep=True)
        self.logger.message("Saved query configuration %s", stored.name)
        return stored

    def get_config(self, name: str) -> Optional[StoredQueryConfig]:
        """Return the named configuration, reading through the cache.

        Callers always receive their own copy; the cached instance is never
        handed out.
        """
        if self.cache_enabled:
            with self._lock:
                cached = self._cache.get(name)
            if cached is not None:
                return cached.model_copy(deep=True)

        config = self.store.get(name)
        if config is not None and self.cache_enabled:
            with self._lock:
                self._cache[name] = config.model_copy(deep=True)
        return config

    def build_query(self, config_name: str, data: Optional[Mapping] = None) -> Dict[str, Any]:
        """Compile the named configuration against `data`.

        Raises:
            ConfigNotFoundError: If no configuration has that name
        """
        config = self.get_config(config_name)
        if config is None:
            raise ConfigNotFoundError(f"Query configuration '{config_name}' not found", config_name=config_name)
        return self.builder.build(config, data)

    def list_configs(self, tags: Optional[Sequence[str]] = None) -> List[StoredQueryConfig]:
        return self.store.list(tags)

    def delete_config(self, name: str) -> bool:
        deleted = self.store.delete(name)
        if self.cache_enabled:
            with self._lock:
                self._cache.pop(name, None)
        if deleted:
            self.logger.message("Deleted query configuration %s", name)
        return deleted

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def preload_cache(self) -> int:
        """Load every stored configuration into the cache.

        Returns:
            Number of configurations cached (0 when caching is disabled)
        """
        if not self.cache_enabled:
            return 0
        configs = self.store.list()
        with self._lock:
            for config in configs:
                self._cache[config.name] = config.model_copy(deep=True)
        self.logger.message("Preloaded %d query configurations", len(configs))
        return len(configs)
