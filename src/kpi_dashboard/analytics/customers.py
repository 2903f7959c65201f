"""
Customers table derived from orders.

Customers are keyed by name. Only paid orders contribute; the returning flag
and region come from the customer's first paid order in the input order.
"""

from collections.abc import Callable, Sequence
from typing import Any

from pydantic import Field

from ..shared.models import CamelModel, Order, Region
from .tables import SortDirection, coerce_direction


class CustomerSummary(CamelModel):
    name: str
    total_orders: int = Field(..., ge=0)
    total_spent: float = Field(..., ge=0.0)
    is_returning: bool
    region: Region


CUSTOMER_SORT_KEYS: dict[str, Callable[[CustomerSummary], Any]] = {
    "name": lambda customer: customer.name.lower(),
    "totalOrders": lambda customer: customer.total_orders,
    "totalSpent": lambda customer: customer.total_spent,
    "region": lambda customer: customer.region.value,
}

DEFAULT_CUSTOMER_SORT_FIELD = "totalSpent"


def summarize_customers(orders: Sequence[Order]) -> list[CustomerSummary]:
    """Aggregate paid orders per customer, in order of first appearance."""
    totals: dict[str, dict[str, Any]] = {}
    for order in orders:
        if not order.is_paid:
            continue
        entry = totals.get(order.customer_name)
        if entry is None:
            totals[order.customer_name] = {
                "name": order.customer_name,
                "total_orders": 1,
                "total_spent": order.total,
                "is_returning": order.is_returning_customer,
                "region": order.region,
            }
        else:
            entry["total_orders"] += 1
            entry["total_spent"] += order.total

    return [CustomerSummary(**entry) for entry in totals.values()]


def search_customers(
    customers: Sequence[CustomerSummary], query: str | None
) -> list[CustomerSummary]:
    if not query or not query.strip():
        return list(customers)
    needle = query.strip().lower()
    return [customer for customer in customers if needle in customer.name.lower()]


def sort_customers(
    customers: Sequence[CustomerSummary],
    field: str | None = DEFAULT_CUSTOMER_SORT_FIELD,
    direction: SortDirection | str | None = SortDirection.DESC,
) -> list[CustomerSummary]:
    """Sort customers by a table column; unknown fields sort by spend, highest first."""
    if field not in CUSTOMER_SORT_KEYS:
        field, direction = DEFAULT_CUSTOMER_SORT_FIELD, SortDirection.DESC
    direction = coerce_direction(direction, SortDirection.DESC)
    return sorted(
        customers,
        key=CUSTOMER_SORT_KEYS[field],
        reverse=direction == SortDirection.DESC,
    )
