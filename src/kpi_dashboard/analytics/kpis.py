"""
KPI aggregation with period-over-period comparison.

Only paid orders count toward revenue, order count and average order value,
in both the current and the previous period. The conversion rate is a
synthetic constant: the demo has no visitor data to derive it from.
"""

from collections.abc import Sequence

from pydantic import Field

from ..shared.models import CamelModel, Order

CURRENT_CONVERSION_RATE = 2.4
PREVIOUS_CONVERSION_RATE = 2.1


class KPIValue(CamelModel):
    """A metric value with its percent change vs the previous period."""

    value: float = Field(..., ge=0.0)
    change: float = Field(0.0, description="Percent change vs previous period")


class KPIData(CamelModel):
    """The four dashboard KPIs."""

    revenue: KPIValue
    orders: KPIValue
    conversion_rate: KPIValue
    avg_order_value: KPIValue


class PeriodTotals(CamelModel):
    """Raw totals for a single period."""

    revenue: float = 0.0
    order_count: int = 0
    avg_order_value: float = 0.0
    conversion_rate: float = 0.0


def paid_orders(orders: Sequence[Order]) -> list[Order]:
    return [order for order in orders if order.is_paid]


def summarize_period(orders: Sequence[Order], conversion_rate: float) -> PeriodTotals:
    """Compute revenue, count and average order value over paid orders."""
    paid = paid_orders(orders)
    revenue = sum(order.total for order in paid)
    order_count = len(paid)
    return PeriodTotals(
        revenue=revenue,
        order_count=order_count,
        avg_order_value=revenue / order_count if order_count > 0 else 0.0,
        conversion_rate=conversion_rate if order_count > 0 else 0.0,
    )


def percent_change(current: float, previous: float, multiplier: float = 1.0) -> float:
    """
    Percent change from ``previous`` to ``current * multiplier``.

    Returns 0 when there is no previous value to compare against.
    """
    if previous <= 0:
        return 0.0
    return (current * multiplier - previous) / previous * 100


def calculate_kpis(
    current_orders: Sequence[Order],
    previous_orders: Sequence[Order],
    growth_multiplier: float = 1.0,
    current_conversion_rate: float = CURRENT_CONVERSION_RATE,
    previous_conversion_rate: float = PREVIOUS_CONVERSION_RATE,
) -> KPIData:
    """
    Compute the dashboard KPIs for a period against the previous period.

    Args:
        current_orders: Filtered orders for the reporting window
        previous_orders: Filtered orders for the preceding window
        growth_multiplier: Applied to current values when computing change
            only; reported values are never adjusted
        current_conversion_rate: Placeholder rate for a non-empty current period
        previous_conversion_rate: Placeholder rate for a non-empty previous period

    Returns:
        KPIData with value and percent change for each metric
    """
    current = summarize_period(current_orders, current_conversion_rate)
    previous = summarize_period(previous_orders, previous_conversion_rate)

    def kpi(current_value: float, previous_value: float) -> KPIValue:
        return KPIValue(
            value=current_value,
            change=percent_change(current_value, previous_value, growth_multiplier),
        )

    return KPIData(
        revenue=kpi(current.revenue, previous.revenue),
        orders=kpi(current.order_count, previous.order_count),
        conversion_rate=kpi(current.conversion_rate, previous.conversion_rate),
        avg_order_value=kpi(current.avg_order_value, previous.avg_order_value),
    )
