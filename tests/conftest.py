"""Pytest configuration and fixtures for confquery tests."""

from datetime import datetime

import pytest
from dotenv import load_dotenv

from confquery import (
    InMemoryConfigStore,
    Operator,
    QueryConfig,
    QueryConfigManager,
    and_,
    date_range,
    field,
    or_,
    ref,
)

# Load environment variables
load_dotenv()


@pytest.fixture
def jan_first():
    return datetime(2024, 1, 1)


@pytest.fixture
def dec_last():
    return datetime(2024, 12, 31)


@pytest.fixture
def completion_config():
    """Completed-items query: exact completion date OR a completion window."""
    return QueryConfig(
        static_filters={"status": "completed"},
        date_ranges=[date_range("createdAt"), date_range("updatedAt")],
        conditions=[
            field("programGroups", Operator.IN, ref("programGroups")),
            or_(
                field("completedAt", Operator.EQ, ref("completedAt.exactDate")),
                and_(
                    field("completedAt", Operator.GTE, ref("completedAt.from")),
                    field("completedAt", Operator.LTE, ref("completedAt.to")),
                ),
            ),
        ],
    )


@pytest.fixture
def raw_order_config():
    """Stored configuration in its JSON wire shape."""
    return {
        "name": "fulfilled-orders",
        "description": "Fulfilled orders for a customer",
        "tags": ["orders", "reporting"],
        "staticFilters": {"status": "fulfilled"},
        "fieldMappings": {"customerId": "customer.id"},
        "dateRanges": [{"field": "orderDate"}],
        "conditions": [
            {"field": "total", "operator": "$gte", "value": "$minTotal"},
        ],
    }


@pytest.fixture
def memory_store():
    return InMemoryConfigStore()


@pytest.fixture
def manager(memory_store):
    return QueryConfigManager(store=memory_store, cache_enabled=True)
