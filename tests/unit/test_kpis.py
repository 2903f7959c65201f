"""
Tests for KPI aggregation and period-over-period change.
"""

import pytest

from kpi_dashboard.analytics.kpis import (
    calculate_kpis,
    paid_orders,
    percent_change,
    summarize_period,
)
from kpi_dashboard.shared.models import OrderStatus


class TestPercentChange:
    """Test the change formula."""

    def test_growth(self):
        """Test a plain increase."""
        assert percent_change(150, 100) == pytest.approx(50.0)

    def test_decline(self):
        """Test a plain decrease."""
        assert percent_change(75, 100) == pytest.approx(-25.0)

    def test_zero_previous_is_zero(self):
        """Test that a zero previous value reports no change."""
        assert percent_change(500, 0) == 0.0

    def test_multiplier_applies_to_current(self):
        """Test that the multiplier scales the current value only."""
        assert percent_change(100, 100, multiplier=1.2) == pytest.approx(20.0)


class TestSummarizePeriod:
    """Test single-period totals."""

    def test_only_paid_orders_count(self, make_order):
        """Test that pending and refunded orders are excluded."""
        orders = [
            make_order(total=1000),
            make_order(total=2000),
            make_order(total=5000, status=OrderStatus.PENDING),
            make_order(total=7000, status=OrderStatus.REFUNDED),
        ]
        totals = summarize_period(orders, conversion_rate=2.4)
        assert totals.revenue == pytest.approx(3000)
        assert totals.order_count == 2
        assert totals.avg_order_value == pytest.approx(1500)
        assert totals.conversion_rate == 2.4

    def test_empty_period(self):
        """Test that an empty period reports zeros throughout."""
        totals = summarize_period([], conversion_rate=2.4)
        assert totals.revenue == 0
        assert totals.order_count == 0
        assert totals.avg_order_value == 0
        assert totals.conversion_rate == 0

    def test_unpaid_only_period_is_empty(self, make_order):
        """Test that a period with no paid orders has a zero conversion rate."""
        totals = summarize_period(
            [make_order(status=OrderStatus.PENDING)], conversion_rate=2.4
        )
        assert totals.order_count == 0
        assert totals.conversion_rate == 0

    def test_paid_orders_helper(self, make_order):
        """Test the paid subset helper."""
        paid = make_order()
        assert paid_orders([paid, make_order(status=OrderStatus.REFUNDED)]) == [paid]


class TestCalculateKpis:
    """Test the four dashboard KPIs."""

    def test_values_and_changes(self, make_order):
        """Test current values and changes against the previous period."""
        current = [make_order(total=1000), make_order(total=2000)]
        previous = [make_order(days_ago=40, total=1500)]

        kpis = calculate_kpis(current, previous)

        assert kpis.revenue.value == pytest.approx(3000)
        assert kpis.revenue.change == pytest.approx(100.0)
        assert kpis.orders.value == 2
        assert kpis.orders.change == pytest.approx(100.0)
        assert kpis.avg_order_value.value == pytest.approx(1500)
        assert kpis.avg_order_value.change == pytest.approx(0.0)
        assert kpis.conversion_rate.value == 2.4
        assert kpis.conversion_rate.change == pytest.approx((2.4 - 2.1) / 2.1 * 100)

    def test_empty_current_and_previous(self):
        """Test that empty periods produce all-zero KPIs."""
        kpis = calculate_kpis([], [])
        for kpi in (kpis.revenue, kpis.orders, kpis.conversion_rate, kpis.avg_order_value):
            assert kpi.value == 0
            assert kpi.change == 0

    def test_empty_previous_reports_zero_change(self, make_order):
        """Test that a missing comparison window yields zero change."""
        kpis = calculate_kpis([make_order(total=1234)], [])
        assert kpis.revenue.value == pytest.approx(1234)
        assert kpis.revenue.change == 0
        assert kpis.conversion_rate.change == 0

    def test_growth_multiplier_does_not_change_values(self, make_order):
        """Test that the multiplier only affects the change computation."""
        current = [make_order(total=1000)]
        previous = [make_order(days_ago=40, total=1000)]

        kpis = calculate_kpis(current, previous, growth_multiplier=1.1)

        assert kpis.revenue.value == pytest.approx(1000)
        assert kpis.revenue.change == pytest.approx(10.0)
        assert kpis.orders.value == 1
        assert kpis.orders.change == pytest.approx(10.0)

    def test_previous_unpaid_orders_ignored(self, make_order):
        """Test that the previous period is also paid-only."""
        current = [make_order(total=2000)]
        previous = [
            make_order(days_ago=40, total=1000),
            make_order(days_ago=40, total=9000, status=OrderStatus.REFUNDED),
        ]
        kpis = calculate_kpis(current, previous)
        assert kpis.revenue.change == pytest.approx(100.0)

    def test_camel_case_serialization(self, make_order):
        """Test the wire names of the KPI payload."""
        payload = calculate_kpis([make_order()], []).model_dump(by_alias=True)
        assert set(payload) == {"revenue", "orders", "conversionRate", "avgOrderValue"}
        assert set(payload["revenue"]) == {"value", "change"}
