"""
Dashboard filters and the filter engine.

Query values are coerced into the allowed sets here; anything unrecognized
falls back to the defaults (Last 30 days, All, All) instead of raising.
"""

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from enum import Enum
from urllib.parse import unquote_plus

from pydantic import BaseModel, ConfigDict, Field

from ..shared.models import Order, Region


class DateRange(str, Enum):
    """Trailing window the dashboard reports on."""

    LAST_7_DAYS = "Last 7 days"
    LAST_30_DAYS = "Last 30 days"
    LAST_90_DAYS = "Last 90 days"


class Segment(str, Enum):
    """Customer segment filter."""

    ALL = "All"
    NEW = "New customers"
    RETURNING = "Returning customers"


class RegionFilter(str, Enum):
    """Region filter; ALL disables region matching."""

    ALL = "All"
    NA = "NA"
    EU = "EU"
    APAC = "APAC"


WINDOW_DAYS = {
    DateRange.LAST_7_DAYS: 7,
    DateRange.LAST_30_DAYS: 30,
    DateRange.LAST_90_DAYS: 90,
}

DEFAULT_DATE_RANGE = DateRange.LAST_30_DAYS
DEFAULT_SEGMENT = Segment.ALL
DEFAULT_REGION = RegionFilter.ALL


def decode_param(value: str | list[str] | None) -> str | None:
    """
    Decode a raw query value, treating ``+`` as a space.

    Lists (repeated parameters) use their first element.
    """
    if isinstance(value, list):
        value = value[0] if value else None
    if not isinstance(value, str):
        return None
    return unquote_plus(value)


def _coerce(enum_cls: type[Enum], value: str | list[str] | None, default: Enum):
    decoded = decode_param(value)
    if decoded is None:
        return default
    try:
        return enum_cls(decoded)
    except ValueError:
        return default


def coerce_date_range(value: str | list[str] | None) -> DateRange:
    return _coerce(DateRange, value, DEFAULT_DATE_RANGE)


def coerce_segment(value: str | list[str] | None) -> Segment:
    return _coerce(Segment, value, DEFAULT_SEGMENT)


def coerce_region(value: str | list[str] | None) -> RegionFilter:
    return _coerce(RegionFilter, value, DEFAULT_REGION)


class DashboardFilters(BaseModel):
    """The (date range, segment, region) triple every dashboard view uses."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    date_range: DateRange = Field(DEFAULT_DATE_RANGE, alias="dateRange")
    segment: Segment = Field(DEFAULT_SEGMENT)
    region: RegionFilter = Field(DEFAULT_REGION)

    @classmethod
    def from_params(
        cls,
        date_range: str | list[str] | None = None,
        segment: str | list[str] | None = None,
        region: str | list[str] | None = None,
    ) -> "DashboardFilters":
        """Build filters from raw query values, defaulting anything unknown."""
        return cls(
            date_range=coerce_date_range(date_range),
            segment=coerce_segment(segment),
            region=coerce_region(region),
        )

    @property
    def window_days(self) -> int:
        return window_days(self.date_range)


def window_days(date_range: DateRange) -> int:
    """Number of days covered by ``date_range``."""
    return WINDOW_DAYS[date_range]


def matches_segment(order: Order, segment: Segment) -> bool:
    if segment == Segment.NEW:
        return not order.is_returning_customer
    if segment == Segment.RETURNING:
        return order.is_returning_customer
    return True


def matches_region(order: Order, region: RegionFilter) -> bool:
    if region == RegionFilter.ALL:
        return True
    return order.region == Region(region.value)


def _resolve_now(now: datetime | None) -> datetime:
    return datetime.now(UTC) if now is None else now


def apply_filters(
    orders: Iterable[Order],
    filters: DashboardFilters,
    now: datetime | None = None,
) -> list[Order]:
    """
    Keep orders inside the trailing window that match segment and region.

    Args:
        orders: Orders to filter
        filters: Date range, segment and region to apply
        now: End of the window (defaults to now, UTC)

    Returns:
        Matching orders in their original relative order
    """
    cutoff = _resolve_now(now) - timedelta(days=filters.window_days)
    return [
        order
        for order in orders
        if order.date >= cutoff
        and matches_segment(order, filters.segment)
        and matches_region(order, filters.region)
    ]


def previous_period(
    orders: Iterable[Order],
    filters: DashboardFilters,
    now: datetime | None = None,
) -> list[Order]:
    """
    Orders in the equal-length window immediately before the current one.

    For a window of N days ending at ``now`` this is [now - 2N, now - N).
    Segment and region predicates apply exactly as for the current window.
    """
    now = _resolve_now(now)
    days = filters.window_days
    current_cutoff = now - timedelta(days=days)
    previous_cutoff = now - timedelta(days=2 * days)
    return [
        order
        for order in orders
        if previous_cutoff <= order.date < current_cutoff
        and matches_segment(order, filters.segment)
        and matches_region(order, filters.region)
    ]
