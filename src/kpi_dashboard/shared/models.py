"""
Core data models for the KPI dashboard.

This module contains the enumerations describing orders and the immutable
Order record that makes up the generated corpus. Attributes are snake_case
in Python and camelCase on the wire.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that serializes field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ================================
# ENUMERATIONS
# ================================


class OrderStatus(str, Enum):
    """Payment status of an order."""

    PAID = "Paid"
    PENDING = "Pending"
    REFUNDED = "Refunded"


class OrderCategory(str, Enum):
    """Product category of an order."""

    SUBSCRIPTIONS = "Subscriptions"
    SERVICES = "Services"
    ADD_ONS = "Add-ons"
    OTHER = "Other"


class Region(str, Enum):
    """Sales region."""

    NA = "NA"
    EU = "EU"
    APAC = "APAC"


class TrafficSource(str, Enum):
    """Acquisition channel the order came through."""

    ORGANIC = "Organic"
    PAID = "Paid"
    REFERRAL = "Referral"
    EMAIL = "Email"


# ================================
# ORDER RECORD
# ================================


class Order(CamelModel):
    """A single synthetic order. Instances are immutable."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: str = Field(..., pattern=r"^ORD-\d+$", description="Ordinal order ID")
    customer_name: str = Field(..., min_length=1, description="Customer full name")
    date: datetime = Field(..., description="Order timestamp (UTC)")
    status: OrderStatus = Field(..., description="Payment status")
    category: OrderCategory = Field(..., description="Product category")
    total: float = Field(..., ge=0.0, description="Order amount")
    region: Region = Field(..., description="Sales region")
    traffic_source: TrafficSource = Field(..., description="Acquisition channel")
    is_returning_customer: bool = Field(
        ..., description="Whether the customer had ordered before"
    )

    @property
    def is_paid(self) -> bool:
        return self.status == OrderStatus.PAID

    @property
    def iso_date(self) -> str:
        """Calendar date of the order in ISO format (UTC)."""
        return self.date.date().isoformat()
