"""
Services module for the KPI dashboard.

This module provides the query facade that assembles dashboard payloads and
the CSV export of order lists.
"""

from .dashboard_service import (
    DashboardData,
    get_customers_page,
    get_dashboard_data,
    get_orders_page,
)
from .export_service import export_filename, orders_to_csv, orders_to_frame

__all__ = [
    # Query facade
    "DashboardData",
    "get_dashboard_data",
    "get_orders_page",
    "get_customers_page",
    # Export
    "orders_to_csv",
    "orders_to_frame",
    "export_filename",
]
