"""
CSV export of order lists.

Rows are built into a pandas DataFrame and written with ``to_csv`` using the
orders table's column headers. Totals carry two decimals and dates use the
short US form (M/D/YYYY) of the order's UTC date.
"""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

import pandas as pd

from ..shared.models import Order

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Order ID",
    "Customer",
    "Date",
    "Status",
    "Category",
    "Total",
    "Region",
    "Traffic Source",
]

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


def format_short_date(value: datetime) -> str:
    """Format a date as M/D/YYYY without zero padding."""
    return f"{value.month}/{value.day}/{value.year}"


def orders_to_frame(orders: Sequence[Order]) -> pd.DataFrame:
    """Build the export DataFrame, one row per order in input order."""
    rows = [
        [
            order.id,
            order.customer_name,
            format_short_date(order.date),
            order.status.value,
            order.category.value,
            f"{order.total:.2f}",
            order.region.value,
            order.traffic_source.value,
        ]
        for order in orders
    ]
    return pd.DataFrame(rows, columns=CSV_HEADERS)


def orders_to_csv(orders: Sequence[Order]) -> str:
    """
    Render orders as CSV text.

    Args:
        orders: Orders to export

    Returns:
        CSV with a header row and one line per order, lines joined by
        newlines with no trailing newline
    """
    df = orders_to_frame(orders)
    content = df.to_csv(index=False, lineterminator="\n").rstrip("\n")
    logger.info(f"Exported {len(df):,} orders to CSV")
    return content


def export_filename(now: datetime | None = None) -> str:
    """Download name for an export made at ``now``, e.g. orders_2024-05-01.csv."""
    now = now or datetime.now(UTC)
    return f"orders_{now.date().isoformat()}.csv"
