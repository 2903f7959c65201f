"""
Pytest configuration and fixtures for KPI dashboard tests.

Provides a fixed reference time, the generated corpus for that time,
an order factory for hand-built scenarios, and isolation of the
process-wide configuration, corpus cache and rate limits.
"""

from datetime import UTC, datetime, timedelta

import pytest

from kpi_dashboard.config.models import DashboardConfig
from kpi_dashboard.generators.order_generator import generate_orders
from kpi_dashboard.shared import dependencies
from kpi_dashboard.shared.models import (
    Order,
    OrderCategory,
    OrderStatus,
    Region,
    TrafficSource,
)

REFERENCE_NOW = datetime(2026, 10, 17, 12, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def isolated_state(monkeypatch):
    """Reset global configuration, corpus and rate limits around each test."""
    for name in (
        "DASHBOARD_CONFIG_FILE",
        "DASHBOARD_SEED",
        "DASHBOARD_ORDER_COUNT",
        "DASHBOARD_LOOKBACK_DAYS",
        "DASHBOARD_GROWTH_MULTIPLIER",
        "DASHBOARD_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    dependencies.update_config(DashboardConfig())
    dependencies.reset_order_corpus()
    dependencies.reset_rate_limits()

    yield

    dependencies.reset_order_corpus()
    dependencies.reset_rate_limits()
    dependencies._config = None


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for generation and filtering."""
    return REFERENCE_NOW


@pytest.fixture(scope="session")
def corpus() -> list[Order]:
    """Default corpus (seed 42, 2000 orders) generated at REFERENCE_NOW."""
    return generate_orders(seed=42, count=2000, now=REFERENCE_NOW)


@pytest.fixture
def make_order(now):
    """Factory for hand-built orders relative to ``now``."""
    counter = {"next": 1}

    def _make(
        days_ago: float = 0,
        status: OrderStatus = OrderStatus.PAID,
        category: OrderCategory = OrderCategory.SUBSCRIPTIONS,
        total: float = 1000.0,
        region: Region = Region.NA,
        traffic_source: TrafficSource = TrafficSource.ORGANIC,
        is_returning_customer: bool = False,
        customer_name: str = "Emma Smith",
    ) -> Order:
        order_id = f"ORD-{counter['next']:05d}"
        counter["next"] += 1
        return Order(
            id=order_id,
            customer_name=customer_name,
            date=now - timedelta(days=days_ago),
            status=status,
            category=category,
            total=total,
            region=region,
            traffic_source=traffic_source,
            is_returning_customer=is_returning_customer,
        )

    return _make
