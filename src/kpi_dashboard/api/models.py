"""
Pydantic models for FastAPI responses.

Payload models for the dashboard and table views live with the code that
builds them; this module holds the envelope and status models of the API.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from ..analytics.customers import CustomerSummary
from ..analytics.tables import Page
from ..services.dashboard_service import DashboardData
from ..shared.models import Order

DashboardResponse = DashboardData
OrdersPageResponse = Page[Order]
CustomersPageResponse = Page[CustomerSummary]


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Short error description")
    message: str | None = Field(None, description="Additional detail, if any")


class HealthCheckResponse(BaseModel):
    """Response model for health checks."""

    status: str = Field(..., description="Overall health status")
    timestamp: datetime = Field(..., description="Health check timestamp")
    version: str = Field(..., description="Application version")
    checks: dict[str, dict[str, Any]] = Field(
        ..., description="Individual component health checks"
    )
