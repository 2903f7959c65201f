"""
Query facade for the dashboard views.

Every view starts from the same step: take the cached corpus, apply the
(date range, segment, region) filters for the current window. The dashboard
additionally filters the previous window and aggregates both; the table
views narrow, sort and paginate the current window.
"""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from pydantic import Field

from ..analytics.charts import (
    CategoryDataPoint,
    RevenueDataPoint,
    TrafficSourceDataPoint,
    aggregate,
)
from ..analytics.customers import (
    CustomerSummary,
    search_customers,
    sort_customers,
    summarize_customers,
)
from ..analytics.filters import DashboardFilters, apply_filters, previous_period
from ..analytics.kpis import KPIData, calculate_kpis
from ..analytics.tables import (
    Page,
    drilldown_orders,
    paginate,
    search_orders,
    sort_orders,
)
from ..config.models import DashboardConfig
from ..shared.dependencies import get_config, get_order_corpus
from ..shared.exceptions import AggregationError, DashboardError
from ..shared.metrics import Timer, metrics_collector
from ..shared.models import CamelModel, Order

logger = logging.getLogger(__name__)


class DashboardData(CamelModel):
    """Full dashboard payload for one set of filters."""

    kpis: KPIData
    revenue_over_time: list[RevenueDataPoint] = Field(default_factory=list)
    orders_by_category: list[CategoryDataPoint] = Field(default_factory=list)
    traffic_sources: list[TrafficSourceDataPoint] = Field(default_factory=list)
    orders: list[Order] = Field(default_factory=list)


def _resolve(
    orders: Sequence[Order] | None,
    config: DashboardConfig | None,
    now: datetime | None,
) -> tuple[Sequence[Order], DashboardConfig, datetime]:
    config = config or get_config()
    if orders is None:
        orders = get_order_corpus(config)
    return orders, config, now or datetime.now(UTC)


def get_dashboard_data(
    filters: DashboardFilters,
    now: datetime | None = None,
    orders: Sequence[Order] | None = None,
    config: DashboardConfig | None = None,
) -> DashboardData:
    """
    Build the dashboard payload for ``filters``.

    Args:
        filters: Date range, segment and region to report on
        now: End of the reporting window (defaults to now, UTC)
        orders: Corpus to query (defaults to the cached process corpus)
        config: Configuration (defaults to the global configuration)

    Returns:
        DashboardData with KPIs, chart series and the current window's orders

    Raises:
        CorpusGenerationError: If the corpus cannot be built
        AggregationError: If filtering or aggregation fails
    """
    orders, config, now = _resolve(orders, config, now)

    try:
        with Timer() as timer:
            current = apply_filters(orders, filters, now)
            previous = previous_period(orders, filters, now)
            kpis = calculate_kpis(
                current,
                previous,
                growth_multiplier=config.kpi.growth_multiplier,
                current_conversion_rate=config.kpi.current_conversion_rate,
                previous_conversion_rate=config.kpi.previous_conversion_rate,
            )
            charts = aggregate(current)
    except DashboardError:
        raise
    except Exception as e:
        raise AggregationError(
            "Failed to build dashboard data",
            filters=filters.model_dump(by_alias=True, mode="json"),
            original_error=e,
        ) from e

    metrics_collector.record_dashboard_compute(timer.elapsed)
    logger.debug(
        f"Dashboard for {filters.date_range.value}/{filters.segment.value}/"
        f"{filters.region.value}: {len(current)} current, {len(previous)} previous "
        f"orders in {timer.elapsed:.4f}s"
    )

    return DashboardData(
        kpis=kpis,
        revenue_over_time=charts.revenue_over_time,
        orders_by_category=charts.orders_by_category,
        traffic_sources=charts.traffic_sources,
        orders=current,
    )


def get_filtered_orders(
    filters: DashboardFilters,
    now: datetime | None = None,
    orders: Sequence[Order] | None = None,
    config: DashboardConfig | None = None,
) -> list[Order]:
    """Current-window orders for ``filters``, newest first."""
    orders, _, now = _resolve(orders, config, now)
    return apply_filters(orders, filters, now)


def get_orders_page(
    filters: DashboardFilters,
    drilldown_type: str | None = None,
    drilldown_value: str | None = None,
    search: str | None = None,
    sort_field: str | None = None,
    sort_direction: str | None = None,
    page: int = 1,
    page_size: int | None = None,
    now: datetime | None = None,
    orders: Sequence[Order] | None = None,
    config: DashboardConfig | None = None,
) -> Page[Order]:
    """Filtered, drilled-down, searched, sorted and paginated orders."""
    orders, config, now = _resolve(orders, config, now)

    rows = apply_filters(orders, filters, now)
    rows = drilldown_orders(rows, drilldown_type, drilldown_value)
    rows = search_orders(rows, search)
    rows = sort_orders(rows, sort_field, sort_direction)
    return paginate(rows, page, page_size or config.api.default_page_size)


def get_customers_page(
    filters: DashboardFilters,
    search: str | None = None,
    sort_field: str | None = None,
    sort_direction: str | None = None,
    page: int = 1,
    page_size: int | None = None,
    now: datetime | None = None,
    orders: Sequence[Order] | None = None,
    config: DashboardConfig | None = None,
) -> Page[CustomerSummary]:
    """Customer summaries for the filtered window, searched, sorted and paginated."""
    orders, config, now = _resolve(orders, config, now)

    customers = summarize_customers(apply_filters(orders, filters, now))
    customers = search_customers(customers, search)
    customers = sort_customers(customers, sort_field, sort_direction)
    return paginate(customers, page, page_size or config.api.default_page_size)
