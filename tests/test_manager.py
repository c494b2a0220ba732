"""Tests for QueryConfigManager and the in-memory configuration store."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from confquery import InMemoryConfigStore, QueryConfigManager, StoredQueryConfig
from confquery.abc import ConfigStoreAdapter
from confquery.exceptions import ConfigNotFoundError, ConfigValidationError


class TestInMemoryConfigStore:
    def test_save_and_get(self, memory_store, raw_order_config):
        config = StoredQueryConfig.model_validate(raw_order_config)
        memory_store.save(config)
        assert memory_store.get("fulfilled-orders") == config

    def test_get_missing(self, memory_store):
        assert memory_store.get("missing") is None

    def test_returns_copies(self, memory_store, raw_order_config):
        memory_store.save(StoredQueryConfig.model_validate(raw_order_config))
        loaded = memory_store.get("fulfilled-orders")
        loaded.static_filters["status"] = "changed"
        assert memory_store.get("fulfilled-orders").static_filters == {"status": "fulfilled"}

    def test_list_by_tags(self, memory_store):
        memory_store.save(StoredQueryConfig(name="a", tags=["orders"]))
        memory_store.save(StoredQueryConfig(name="b", tags=["users"]))
        memory_store.save(StoredQueryConfig(name="c"))
        assert {c.name for c in memory_store.list()} == {"a", "b", "c"}
        assert [c.name for c in memory_store.list(["orders", "billing"])] == ["a"]

    def test_delete(self, memory_store):
        memory_store.save(StoredQueryConfig(name="a"))
        assert memory_store.delete("a") is True
        assert memory_store.delete("a") is False


class TestQueryConfigManager:
    def test_save_validates_and_stamps(self, manager, memory_store, raw_order_config):
        stored = manager.save_config(raw_order_config)
        assert isinstance(stored.created_at, datetime)
        assert stored.updated_at == stored.created_at
        assert memory_store.get("fulfilled-orders").updated_at == stored.updated_at

    def test_save_keeps_created_at(self, manager, raw_order_config):
        created = datetime(2023, 5, 1)
        stored = manager.save_config({**raw_order_config, "createdAt": created})
        assert stored.created_at == created
        assert stored.updated_at != created

    def test_save_rejects_invalid(self, manager, memory_store):
        with pytest.raises(ConfigValidationError):
            manager.save_config({"name": "bad", "conditions": [{"operator": "$or", "conditions": []}]})
        assert memory_store.get("bad") is None

    def test_build_query(self, manager, raw_order_config):
        manager.save_config(raw_order_config)
        data = {"customer": {"id": "cust-1"}, "orderDate": {"from": "2025-01-01"}, "minTotal": 100}
        assert manager.build_query("fulfilled-orders", data) == {
            "status": "fulfilled",
            "customerId": "cust-1",
            "orderDate": {"$gte": "2025-01-01"},
            "total": {"$gte": 100},
        }

    def test_build_query_without_data(self, manager, raw_order_config):
        manager.save_config(raw_order_config)
        assert manager.build_query("fulfilled-orders") == {"status": "fulfilled"}

    def test_build_query_unknown_name(self, manager):
        with pytest.raises(ConfigNotFoundError) as exc_info:
            manager.build_query("missing", {})
        assert exc_info.value.details["config_name"] == "missing"

    def test_get_config_reads_through_cache(self, raw_order_config):
        store = MagicMock(spec=ConfigStoreAdapter)
        store.get.return_value = StoredQueryConfig.model_validate(raw_order_config)
        manager = QueryConfigManager(store=store, cache_enabled=True)
        first = manager.get_config("fulfilled-orders")
        second = manager.get_config("fulfilled-orders")
        assert first == second
        assert first is not second
        store.get.assert_called_once_with("fulfilled-orders")

    def test_cached_config_is_isolated_from_callers(self, manager, raw_order_config):
        """Editing a returned or saved config does not leak into later builds."""
        saved = manager.save_config(raw_order_config)
        saved.static_filters["status"] = "edited"
        manager.get_config("fulfilled-orders").static_filters["status"] = "tampered"
        assert manager.build_query("fulfilled-orders") == {"status": "fulfilled"}

    def test_cache_disabled_hits_store(self, raw_order_config):
        store = MagicMock(spec=ConfigStoreAdapter)
        store.get.return_value = StoredQueryConfig.model_validate(raw_order_config)
        manager = QueryConfigManager(store=store, cache_enabled=False)
        manager.get_config("fulfilled-orders")
        manager.get_config("fulfilled-orders")
        assert store.get.call_count == 2
        assert manager.preload_cache() == 0
        store.list.assert_not_called()

    def test_missing_config_is_not_cached(self):
        store = MagicMock(spec=ConfigStoreAdapter)
        store.get.return_value = None
        manager = QueryConfigManager(store=store)
        assert manager.get_config("missing") is None
        assert manager.get_config("missing") is None
        assert store.get.call_count == 2

    def test_delete_evicts_cache(self, manager, memory_store, raw_order_config):
        manager.save_config(raw_order_config)
        assert manager.delete_config("fulfilled-orders") is True
        assert manager.get_config("fulfilled-orders") is None
        assert manager.delete_config("fulfilled-orders") is False

    def test_clear_cache(self, manager, memory_store, raw_order_config):
        manager.save_config(raw_order_config)
        memory_store.delete("fulfilled-orders")
        assert manager.get_config("fulfilled-orders") is not None
        manager.clear_cache()
        assert manager.get_config("fulfilled-orders") is None

    def test_preload_cache(self, memory_store):
        memory_store.save(StoredQueryConfig(name="a", static_filters={"x": 1}))
        memory_store.save(StoredQueryConfig(name="b"))
        manager = QueryConfigManager(store=memory_store)
        assert manager.preload_cache() == 2
        memory_store.delete("a")
        assert manager.build_query("a") == {"x": 1}

    def test_list_configs(self, manager, raw_order_config):
        manager.save_config(raw_order_config)
        manager.save_config({"name": "other", "tags": ["users"]})
        assert [c.name for c in manager.list_configs(["reporting"])] == ["fulfilled-orders"]
        assert len(manager.list_configs()) == 2
