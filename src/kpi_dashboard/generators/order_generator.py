"""
Synthetic order corpus generation.

Orders are drawn from a single SeededRandom instance in a fixed sequence per
order: days-ago, first name, last name, status, category, total, region,
traffic source, returning flag. Changing that sequence changes every order
after the first, so it must stay as is.
"""

import logging
from datetime import UTC, datetime, timedelta

from ..shared.models import (
    Order,
    OrderCategory,
    OrderStatus,
    Region,
    TrafficSource,
)
from .seeded_random import SeededRandom

logger = logging.getLogger(__name__)

DEFAULT_SEED = 42
DEFAULT_ORDER_COUNT = 2000
DEFAULT_LOOKBACK_DAYS = 90

ORDER_ID_OFFSET = 10000
MIN_ORDER_TOTAL = 800.0
MAX_ORDER_TOTAL = 4500.0
RETURNING_CUSTOMER_THRESHOLD = 0.6

FIRST_NAMES = [
    "Emma",
    "Liam",
    "Olivia",
    "Noah",
    "Ava",
    "Ethan",
    "Sophia",
    "Mason",
    "Isabella",
    "William",
    "Mia",
    "James",
    "Charlotte",
    "Benjamin",
    "Amelia",
    "Lucas",
    "Harper",
    "Henry",
    "Evelyn",
    "Alexander",
    "Abigail",
    "Michael",
    "Emily",
    "Daniel",
    "Elizabeth",
    "Matthew",
    "Sofia",
    "Jackson",
    "Avery",
    "David",
    "Ella",
    "Joseph",
    "Scarlett",
    "Samuel",
    "Grace",
    "Sebastian",
]

LAST_NAMES = [
    "Smith",
    "Johnson",
    "Williams",
    "Brown",
    "Jones",
    "Garcia",
    "Miller",
    "Davis",
    "Rodriguez",
    "Martinez",
    "Hernandez",
    "Lopez",
    "Gonzalez",
    "Wilson",
    "Anderson",
    "Thomas",
    "Taylor",
    "Moore",
    "Jackson",
    "Martin",
    "Lee",
    "Perez",
    "Thompson",
    "White",
    "Harris",
    "Sanchez",
    "Clark",
    "Ramirez",
    "Lewis",
    "Robinson",
    "Walker",
    "Young",
    "Allen",
    "King",
]

# Weighted toward Paid: 5 of 7 draws
STATUS_POOL = [
    OrderStatus.PAID,
    OrderStatus.PAID,
    OrderStatus.PAID,
    OrderStatus.PAID,
    OrderStatus.PAID,
    OrderStatus.PENDING,
    OrderStatus.REFUNDED,
]

CATEGORIES = list(OrderCategory)
REGIONS = list(Region)
TRAFFIC_SOURCES = list(TrafficSource)


def format_order_id(index: int) -> str:
    """Build the ordinal order ID for the ``index``-th generated order."""
    return f"ORD-{ORDER_ID_OFFSET + index}"


def generate_orders(
    seed: int = DEFAULT_SEED,
    count: int = DEFAULT_ORDER_COUNT,
    now: datetime | None = None,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> list[Order]:
    """
    Generate the synthetic order corpus.

    Args:
        seed: Seed for the LCG sequence
        count: Number of orders to generate
        now: Reference time order dates are offset from (defaults to now, UTC)
        lookback_days: Orders fall within this many days before ``now``

    Returns:
        Orders sorted by date, newest first. Orders on the same day keep
        their generation order.

    Raises:
        ValueError: If count is negative, lookback_days is not positive,
                    or now is not timezone-aware
    """
    if count < 0:
        raise ValueError("count must be >= 0")
    if lookback_days < 1:
        raise ValueError("lookback_days must be >= 1")

    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is None:
        raise ValueError("now must be timezone-aware")

    rng = SeededRandom(seed)
    orders: list[Order] = []

    for i in range(count):
        days_ago = rng.next_int(0, lookback_days - 1)
        first_name = rng.pick(FIRST_NAMES)
        last_name = rng.pick(LAST_NAMES)

        orders.append(
            Order(
                id=format_order_id(i),
                customer_name=f"{first_name} {last_name}",
                date=now - timedelta(days=days_ago),
                status=rng.pick(STATUS_POOL),
                category=rng.pick(CATEGORIES),
                total=rng.next_float(MIN_ORDER_TOTAL, MAX_ORDER_TOTAL),
                region=rng.pick(REGIONS),
                traffic_source=rng.pick(TRAFFIC_SOURCES),
                is_returning_customer=rng.next() > RETURNING_CUSTOMER_THRESHOLD,
            )
        )

    logger.debug(f"Generated {len(orders):,} orders (seed={seed})")
    return sorted(orders, key=lambda order: order.date, reverse=True)
