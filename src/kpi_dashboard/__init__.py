"""
Business KPI Dashboard

A demo analytics backend supporting:
- Deterministic synthetic order generation
- Filtering by date range, customer segment and region
- KPI and chart aggregation served over a FastAPI application
"""

__version__ = "1.0.0"
__author__ = "KPI Dashboard"
