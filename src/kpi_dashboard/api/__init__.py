"""HTTP API for the KPI dashboard."""

from .dashboard_router import router

__all__ = ["router"]
