"""Order and order-group records produced by the distribution engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

import polars as pl

from ordergen.models.enums import DistributionStatus, PaymentMethod


@dataclass
class OrderGroup:
    """A bucket of identical-amount, identical-payment-method orders.

    Attributes:
        amount: Amount of every order in the group.
        count: Number of orders in the group (>= 1).
        payment_method: Payment method shared by the orders.
        description: Optional label copied from the template entry.
    """

    amount: Decimal
    count: int
    payment_method: PaymentMethod
    description: str | None = None

    @property
    def key(self) -> tuple[Decimal, PaymentMethod]:
        return (self.amount, self.payment_method)

    @property
    def total(self) -> Decimal:
        return self.amount * self.count

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": str(self.amount),
            "count": self.count,
            "paymentMethod": self.payment_method.value,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OrderGroup:
        return cls(
            amount=Decimal(str(data["amount"])),
            count=int(data["count"]),
            payment_method=PaymentMethod(data["paymentMethod"]),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class Order:
    """One concrete, timestamped transaction.

    Attributes:
        id: UUID-formatted identifier.
        amount: Order amount.
        timestamp: Timezone-aware time of the order.
        payment_method: Cash or card.
        description: Optional label.
    """

    id: str
    amount: Decimal
    timestamp: datetime
    payment_method: PaymentMethod
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "amount": str(self.amount),
            "timestamp": self.timestamp.isoformat(),
            "paymentMethod": self.payment_method.value,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Order:
        return cls(
            id=data["id"],
            amount=Decimal(str(data["amount"])),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            payment_method=PaymentMethod(data["paymentMethod"]),
            description=data.get("description"),
        )


def orders_schema() -> dict[str, pl.DataType]:
    """Return the Polars schema for exported orders."""
    return {
        "order_id": pl.Utf8,
        "timestamp": pl.Datetime("us", time_zone="UTC"),
        "amount": pl.Float64,
        "payment_method": pl.Utf8,
        "description": pl.Utf8,
    }


def orders_to_dataframe(orders: list[Order]) -> pl.DataFrame:
    """Build a Polars DataFrame from generated orders.

    Timestamps are converted to UTC; amounts are exported as floats.
    """
    return pl.DataFrame(
        {
            "order_id": [o.id for o in orders],
            "timestamp": [o.timestamp for o in orders],
            "amount": [float(o.amount) for o in orders],
            "payment_method": [o.payment_method.value for o in orders],
            "description": [o.description for o in orders],
        },
        schema=orders_schema(),
    )


@dataclass
class DistributionResult:
    """Output of one distribution run.

    Attributes:
        orders: Individual orders sorted by timestamp.
        order_groups: Merged groups the orders were expanded from.
        status: Terminal state of the decomposition loop.
        iterations: Number of loop iterations performed.
        remaining: Balance left unassigned (non-zero only when exhausted).
    """

    orders: list[Order] = field(default_factory=list)
    order_groups: list[OrderGroup] = field(default_factory=list)
    status: DistributionStatus = DistributionStatus.CONVERGED
    iterations: int = 0
    remaining: Decimal = Decimal(0)

    @property
    def total(self) -> Decimal:
        return sum((o.amount for o in self.orders), Decimal(0))

    @property
    def is_exhausted(self) -> bool:
        return self.status == DistributionStatus.EXHAUSTED

    def to_dataframe(self) -> pl.DataFrame:
        return orders_to_dataframe(self.orders)

    def to_dict(self) -> dict[str, Any]:
        return {
            "orders": [o.to_dict() for o in self.orders],
            "orderGroups": [g.to_dict() for g in self.order_groups],
            "status": self.status.value,
            "iterations": self.iterations,
            "remaining": str(self.remaining),
        }
