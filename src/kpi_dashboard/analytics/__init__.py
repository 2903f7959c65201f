"""
Filtering and aggregation over the order corpus.

All functions here are pure: they take order lists and return new lists or
summary models without touching shared state.
"""

from .charts import aggregate, orders_by_category, revenue_over_time, traffic_sources
from .customers import search_customers, sort_customers, summarize_customers
from .filters import (
    DashboardFilters,
    DateRange,
    RegionFilter,
    Segment,
    apply_filters,
    previous_period,
    window_days,
)
from .kpis import calculate_kpis, percent_change
from .tables import Page, drilldown_orders, paginate, search_orders, sort_orders

__all__ = [
    "DashboardFilters",
    "DateRange",
    "Segment",
    "RegionFilter",
    "apply_filters",
    "previous_period",
    "window_days",
    "calculate_kpis",
    "percent_change",
    "aggregate",
    "revenue_over_time",
    "orders_by_category",
    "traffic_sources",
    "summarize_customers",
    "search_customers",
    "sort_customers",
    "Page",
    "drilldown_orders",
    "search_orders",
    "sort_orders",
    "paginate",
]
