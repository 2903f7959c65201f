"""
Deterministic synthetic data generators.

This package provides the seeded pseudo-random sequence and the order
corpus builder used by the dashboard.
"""

from .order_generator import (
    CATEGORIES,
    DEFAULT_ORDER_COUNT,
    FIRST_NAMES,
    LAST_NAMES,
    REGIONS,
    STATUS_POOL,
    TRAFFIC_SOURCES,
    generate_orders,
)
from .seeded_random import SeededRandom

__all__ = [
    "SeededRandom",
    "generate_orders",
    "DEFAULT_ORDER_COUNT",
    "FIRST_NAMES",
    "LAST_NAMES",
    "STATUS_POOL",
    "CATEGORIES",
    "REGIONS",
    "TRAFFIC_SOURCES",
]
