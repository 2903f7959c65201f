"""
FastAPI router for the dashboard, orders and customers endpoints.

Every endpoint accepts the same dateRange/segment/region query parameters.
Unknown values fall back to defaults rather than failing validation, so
parameters are declared as plain strings (lists for the filters, so a
repeated parameter keeps its first value) and coerced here.
"""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Query, Request, Response, status
from fastapi.responses import JSONResponse

from ..analytics.filters import DashboardFilters
from ..services.dashboard_service import (
    get_customers_page,
    get_dashboard_data,
    get_filtered_orders,
    get_orders_page,
)
from ..services.export_service import CSV_MEDIA_TYPE, export_filename, orders_to_csv
from ..shared.dependencies import rate_limit
from ..shared.metrics import metrics_collector
from .models import (
    CustomersPageResponse,
    DashboardResponse,
    ErrorResponse,
    OrdersPageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _filters(
    date_range: list[str] | None,
    segment: list[str] | None,
    region: list[str] | None,
) -> DashboardFilters:
    # Repeated parameters arrive as lists; the first value wins
    return DashboardFilters.from_params(date_range, segment, region)


def _parse_positive_int(value: str | None, default: int | None) -> int | None:
    """Parse a positive integer query value, returning ``default`` if invalid."""
    try:
        parsed = int(value) if value is not None else default
    except ValueError:
        return default
    if parsed is not None and parsed < 1:
        return default
    return parsed


def _internal_error(endpoint: str, exc: Exception) -> JSONResponse:
    logger.error(f"{endpoint} failed: {exc}", exc_info=True)
    metrics_collector.record_error(endpoint, type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=INTERNAL_ERROR_MESSAGE).model_dump(
            exclude_none=True
        ),
    )


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Dashboard data",
    description="KPIs, chart series and orders for the selected filters",
    responses={500: {"model": ErrorResponse}},
)
def dashboard(
    date_range: list[str] | None = Query(None, alias="dateRange"),
    segment: list[str] | None = Query(None),
    region: list[str] | None = Query(None),
):
    """Return the dashboard payload for the given filters."""
    filters = _filters(date_range, segment, region)
    try:
        return get_dashboard_data(filters)
    except Exception as e:
        return _internal_error("/api/dashboard", e)


@router.options("/dashboard", include_in_schema=False)
def dashboard_options():
    """CORS preflight; headers are added by the CORS middleware."""
    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "/orders",
    response_model=OrdersPageResponse,
    summary="Orders table",
    description="Filtered orders with drilldown, search, sorting and pagination",
    responses={500: {"model": ErrorResponse}},
)
def orders(
    date_range: list[str] | None = Query(None, alias="dateRange"),
    segment: list[str] | None = Query(None),
    region: list[str] | None = Query(None),
    drilldown_type: str | None = Query(None, alias="drilldownType"),
    drilldown_value: str | None = Query(None, alias="drilldownValue"),
    search: str | None = Query(None),
    sort_field: str | None = Query(None, alias="sortField"),
    sort_direction: str | None = Query(None, alias="sortDirection"),
    page: str | None = Query(None),
    page_size: str | None = Query(None, alias="pageSize"),
):
    """Return one page of the orders table."""
    filters = _filters(date_range, segment, region)
    try:
        return get_orders_page(
            filters,
            drilldown_type=drilldown_type,
            drilldown_value=drilldown_value,
            search=search,
            sort_field=sort_field,
            sort_direction=sort_direction,
            page=_parse_positive_int(page, 1),
            page_size=_parse_positive_int(page_size, None),
        )
    except Exception as e:
        return _internal_error("/api/orders", e)


@router.get(
    "/orders/export",
    summary="Export orders as CSV",
    description="Download the filtered orders as a CSV file",
    response_class=Response,
    responses={
        200: {"content": {"text/csv": {}}},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
@rate_limit()
def export_orders(
    request: Request,
    date_range: list[str] | None = Query(None, alias="dateRange"),
    segment: list[str] | None = Query(None),
    region: list[str] | None = Query(None),
):
    """Return the filtered orders as a CSV attachment."""
    filters = _filters(date_range, segment, region)
    try:
        content = orders_to_csv(get_filtered_orders(filters))
    except Exception as e:
        return _internal_error("/api/orders/export", e)

    metrics_collector.record_csv_export()
    filename = export_filename(datetime.now(UTC))
    return Response(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get(
    "/customers",
    response_model=CustomersPageResponse,
    summary="Customers table",
    description="Customers derived from paid orders, with search, sorting and pagination",
    responses={500: {"model": ErrorResponse}},
)
def customers(
    date_range: list[str] | None = Query(None, alias="dateRange"),
    segment: list[str] | None = Query(None),
    region: list[str] | None = Query(None),
    search: str | None = Query(None),
    sort_field: str | None = Query(None, alias="sortField"),
    sort_direction: str | None = Query(None, alias="sortDirection"),
    page: str | None = Query(None),
    page_size: str | None = Query(None, alias="pageSize"),
):
    """Return one page of the customers table."""
    filters = _filters(date_range, segment, region)
    try:
        return get_customers_page(
            filters,
            search=search,
            sort_field=sort_field,
            sort_direction=sort_direction,
            page=_parse_positive_int(page, 1),
            page_size=_parse_positive_int(page_size, None),
        )
    except Exception as e:
        return _internal_error("/api/customers", e)
