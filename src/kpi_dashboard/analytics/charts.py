"""
Chart aggregation over paid orders.

Each projection is a small pandas group-by over the same paid subset that
the KPIs use, so chart totals always reconcile with the KPI cards.
"""

from collections.abc import Sequence

import pandas as pd
from pydantic import BaseModel, Field

from ..shared.models import CamelModel, Order, OrderCategory, TrafficSource

ORDER_COLUMNS = ["id", "date", "category", "total", "traffic_source"]


class RevenueDataPoint(CamelModel):
    date: str = Field(..., description="ISO calendar date (UTC)")
    revenue: float = Field(..., ge=0.0)


class CategoryDataPoint(CamelModel):
    category: OrderCategory
    orders: int = Field(..., ge=0)


class TrafficSourceDataPoint(CamelModel):
    source: TrafficSource
    value: int = Field(..., ge=0)


class ChartData(BaseModel):
    """The three chart projections of a filtered order set."""

    revenue_over_time: list[RevenueDataPoint]
    orders_by_category: list[CategoryDataPoint]
    traffic_sources: list[TrafficSourceDataPoint]


def paid_orders_frame(orders: Sequence[Order]) -> pd.DataFrame:
    """Build a DataFrame of paid orders with plain string columns."""
    rows = [
        {
            "id": order.id,
            "date": order.iso_date,
            "category": order.category.value,
            "total": order.total,
            "traffic_source": order.traffic_source.value,
        }
        for order in orders
        if order.is_paid
    ]
    return pd.DataFrame(rows, columns=ORDER_COLUMNS)


def revenue_over_time(orders: Sequence[Order]) -> list[RevenueDataPoint]:
    """Daily revenue, ascending by date. Days without paid orders are omitted."""
    df = paid_orders_frame(orders)
    if df.empty:
        return []
    daily = df.groupby("date", sort=True)["total"].sum()
    return [
        RevenueDataPoint(date=str(day), revenue=float(revenue))
        for day, revenue in daily.items()
    ]


def orders_by_category(orders: Sequence[Order]) -> list[CategoryDataPoint]:
    """Order count per category; always all four categories, zero-filled."""
    df = paid_orders_frame(orders)
    counts = df["category"].value_counts()
    return [
        CategoryDataPoint(category=category, orders=int(counts.get(category.value, 0)))
        for category in OrderCategory
    ]


def traffic_sources(orders: Sequence[Order]) -> list[TrafficSourceDataPoint]:
    """Order count per traffic source, in order of first appearance."""
    df = paid_orders_frame(orders)
    if df.empty:
        return []
    counts = df.groupby("traffic_source", sort=False).size()
    return [
        TrafficSourceDataPoint(source=TrafficSource(source), value=int(count))
        for source, count in counts.items()
    ]


def aggregate(orders: Sequence[Order]) -> ChartData:
    return ChartData(
        revenue_over_time=revenue_over_time(orders),
        orders_by_category=orders_by_category(orders),
        traffic_sources=traffic_sources(orders),
    )
