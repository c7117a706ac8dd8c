"""Temporal expansion of order groups into timestamped orders."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, date, datetime, time, timedelta, tzinfo

from numpy.random import Generator

from ordergen.models.order import Order, OrderGroup

# Working day: 08:00 to 20:00 local time.
WORKDAY_START_HOUR: int = 8
WORKDAY_HOURS: int = 12
WORKDAY_SECONDS: int = WORKDAY_HOURS * 3600


def working_window(report_date: date, tz: tzinfo = UTC) -> tuple[datetime, datetime]:
    """Return the ``[start, end)`` operating window for a report date."""
    start = datetime.combine(report_date, time(hour=WORKDAY_START_HOUR), tzinfo=tz)
    return start, start + timedelta(seconds=WORKDAY_SECONDS)


def generate_order_id(rng: Generator) -> str:
    """Generate a UUID-formatted order ID from seeded random bytes.

    Uses the injected RNG rather than ``uuid4`` so runs are reproducible.
    """
    hex_str = rng.bytes(16).hex()
    return (
        f"{hex_str[:8]}-{hex_str[8:12]}-{hex_str[12:16]}-"
        f"{hex_str[16:20]}-{hex_str[20:32]}"
    )


def schedule_orders(
    rng: Generator,
    groups: Iterable[OrderGroup],
    report_date: date,
    tz: tzinfo = UTC,
) -> list[Order]:
    """Expand each group into ``count`` orders spread over the working day.

    Every order gets an independent, uniformly drawn timestamp (second
    granularity) inside the working window. Timestamps may collide.

    Args:
        rng: NumPy random generator.
        groups: Order groups to expand.
        report_date: Day the orders belong to.
        tz: Timezone of the working window. Defaults to UTC.

    Returns:
        Orders sorted ascending by timestamp.
    """
    window_start, _ = working_window(report_date, tz)
    orders: list[Order] = []

    for group in groups:
        for _ in range(group.count):
            offset = int(rng.integers(0, WORKDAY_SECONDS))
            orders.append(
                Order(
                    id=generate_order_id(rng),
                    amount=group.amount,
                    timestamp=window_start + timedelta(seconds=offset),
                    payment_method=group.payment_method,
                    description=group.description,
                )
            )

    orders.sort(key=lambda order: order.timestamp)
    return orders
