"""
Orders table helpers: drilldown, search, sorting and pagination.

These operate on an already-filtered order list, the way the orders table
narrows the dashboard payload.
"""

import math
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import Field

from ..shared.models import CamelModel, Order

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


class DrilldownType(str, Enum):
    DAY = "day"
    CATEGORY = "category"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


ORDER_SORT_KEYS: dict[str, Callable[[Order], Any]] = {
    "id": lambda order: order.id,
    "customerName": lambda order: order.customer_name.lower(),
    "date": lambda order: order.date,
    "status": lambda order: order.status.value,
    "category": lambda order: order.category.value,
    "total": lambda order: order.total,
    "region": lambda order: order.region.value,
}

DEFAULT_ORDER_SORT_FIELD = "date"


class Page(CamelModel, Generic[T]):
    """One page of a larger result set."""

    items: list[T]
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_items: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)


def drilldown_orders(
    orders: Sequence[Order],
    kind: DrilldownType | str | None,
    value: str | None,
) -> list[Order]:
    """
    Narrow orders to a single day or category.

    Args:
        orders: Already-filtered orders
        kind: "day" (value is an ISO date) or "category" (value is a label)
        value: The day or category to keep

    Returns:
        Matching orders; all orders if kind or value is missing or unknown
    """
    if not kind or not value:
        return list(orders)
    try:
        kind = DrilldownType(kind)
    except ValueError:
        return list(orders)

    if kind == DrilldownType.DAY:
        return [order for order in orders if order.iso_date == value]
    return [order for order in orders if order.category.value == value]


def search_orders(orders: Sequence[Order], query: str | None) -> list[Order]:
    """Case-insensitive substring match on id, customer, category, region, status."""
    if not query or not query.strip():
        return list(orders)
    needle = query.strip().lower()
    return [
        order
        for order in orders
        if needle in order.id.lower()
        or needle in order.customer_name.lower()
        or needle in order.category.value.lower()
        or needle in order.region.value.lower()
        or needle in order.status.value.lower()
    ]


def coerce_direction(direction: str | None, default: SortDirection) -> SortDirection:
    try:
        return SortDirection((direction or "").lower())
    except ValueError:
        return default


def sort_orders(
    orders: Sequence[Order],
    field: str | None = DEFAULT_ORDER_SORT_FIELD,
    direction: SortDirection | str | None = SortDirection.DESC,
) -> list[Order]:
    """Sort orders by a table column; unknown fields sort by date, newest first."""
    if field not in ORDER_SORT_KEYS:
        field, direction = DEFAULT_ORDER_SORT_FIELD, SortDirection.DESC
    direction = coerce_direction(direction, SortDirection.DESC)
    return sorted(
        orders,
        key=ORDER_SORT_KEYS[field],
        reverse=direction == SortDirection.DESC,
    )


def paginate(
    items: Sequence[T], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
) -> Page[T]:
    """
    Slice ``items`` into a page.

    The page number is clamped to [1, total_pages] so out-of-range requests
    return the nearest valid page instead of an empty one.
    """
    page_size = max(1, page_size)
    total_items = len(items)
    total_pages = math.ceil(total_items / page_size)
    page = min(max(1, page), max(1, total_pages))
    start = (page - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
    )
