"""In-process configuration store.

Keeps validated configurations in a dict keyed by name. Copies are returned so
callers cannot mutate stored state. Useful for tests and for applications that
load configurations from files at startup.
"""

import threading
from typing import Dict, List, Optional, Sequence

from confquery.abc import ConfigStoreAdapter
from confquery.schema import StoredQueryConfig


class InMemoryConfigStore(ConfigStoreAdapter):
    """Dictionary-backed configuration store."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._configs: Dict[str, StoredQueryConfig] = {}
        self._lock = threading.Lock()

    def save(self, config: StoredQueryConfig) -> None:
        with self._lock:
            self._configs[config.name] = config.model_copy(deep=True)
        self.logger.debug("Saved configuration %s", config.name)

    def get(self, name: str) -> Optional[StoredQueryConfig]:
        with self._lock:
            config = self._configs.get(name)
        return config.model_copy(deep=True) if config is not None else None

    def list(self, tags: Optional[Sequence[str]] = None) -> List[StoredQueryConfig]:
        with self._lock:
            configs = list(self._configs.values())
        if tags:
            wanted = set(tags)
            configs = [c for c in configs if wanted.intersection(c.tags)]
        return [c.model_copy(deep=True) for c in configs]

    def delete(self, name: str) -> bool:
        with self._lock:
            removed = self._configs.pop(name, None) is not None
        if removed:
            self.logger.debug("Deleted configuration %s", name)
        return removed
