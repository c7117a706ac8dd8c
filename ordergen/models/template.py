"""User-defined order templates and template analytics."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any

from ordergen.lib.rounding import to_decimal
from ordergen.models.enums import PaymentMethod, PaymentPolicy

MERGED_TEMPLATE_ID = "merged"
MERGED_TEMPLATE_NAME = "Merged templates"


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


@dataclass
class OrderTemplate:
    """A typical order amount in a template.

    Attributes:
        id: Identifier of the entry inside its template.
        amount: Typical order amount.
        frequency: How many times the amount was observed (raw count).
        description: Optional label.
        payment_method: Optional payment method hint.
    """

    id: str
    amount: Decimal
    frequency: int
    description: str | None = None
    payment_method: PaymentMethod | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "amount": float(self.amount),
            "frequency": self.frequency,
        }
        if self.description is not None:
            data["description"] = self.description
        if self.payment_method is not None:
            data["paymentMethod"] = self.payment_method.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OrderTemplate:
        method = data.get("paymentMethod")
        return cls(
            id=data.get("id") or str(uuid.uuid4()),
            amount=to_decimal(data["amount"]),
            frequency=data["frequency"],
            description=data.get("description"),
            payment_method=PaymentMethod(method) if method else None,
        )


@dataclass
class Template:
    """A named catalog of typical orders captured for one day.

    Attributes:
        id: Unique template identifier.
        name: Display name.
        date: Day the template was captured from (YYYY-MM-DD).
        payment_method: Payment policy the template was recorded under.
        total_amount: Total of the captured day.
        orders: Typical orders with their frequencies.
        created_at: ISO 8601 creation time.
        updated_at: ISO 8601 last update time.
    """

    id: str
    name: str
    date: str
    payment_method: PaymentPolicy
    total_amount: Decimal
    orders: list[OrderTemplate] = field(default_factory=list)
    created_at: str = field(default_factory=_now_iso)
    updated_at: str = field(default_factory=_now_iso)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "date": self.date,
            "paymentMethod": self.payment_method.value,
            "totalAmount": float(self.total_amount),
            "orders": [o.to_dict() for o in self.orders],
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Template:
        return cls(
            id=data["id"],
            name=data["name"],
            date=data["date"],
            payment_method=PaymentPolicy.from_value(data["paymentMethod"]),
            total_amount=to_decimal(data.get("totalAmount", 0)),
            orders=[OrderTemplate.from_dict(o) for o in data.get("orders", [])],
            created_at=data.get("createdAt") or _now_iso(),
            updated_at=data.get("updatedAt") or _now_iso(),
        )


@dataclass
class TemplateStats:
    """Summary statistics of a template.

    Attributes:
        average_order_value: Frequency-weighted mean amount.
        order_count_distribution: Number of entries per frequency value.
        frequency_by_amount: Total frequency per distinct amount.
        total_orders: Sum of all frequencies.
    """

    average_order_value: Decimal
    order_count_distribution: dict[int, int]
    frequency_by_amount: dict[Decimal, int]
    total_orders: int


def analyze_template(template: Template) -> TemplateStats:
    """Compute summary statistics for a template.

    Args:
        template: Template to analyze.

    Returns:
        TemplateStats. The average is zero for a template with no orders.
    """
    total_orders = sum(o.frequency for o in template.orders)
    total_value = sum((o.amount * o.frequency for o in template.orders), Decimal(0))
    average = total_value / total_orders if total_orders else Decimal(0)

    count_distribution: dict[int, int] = {}
    frequency_by_amount: dict[Decimal, int] = {}
    for order in template.orders:
        count_distribution[order.frequency] = count_distribution.get(order.frequency, 0) + 1
        frequency_by_amount[order.amount] = (
            frequency_by_amount.get(order.amount, 0) + order.frequency
        )

    return TemplateStats(
        average_order_value=average,
        order_count_distribution=count_distribution,
        frequency_by_amount=frequency_by_amount,
        total_orders=total_orders,
    )


def merge_templates(templates: Iterable[Template]) -> Template | None:
    """Combine several templates into one, summing frequencies per amount.

    The first occurrence of an amount keeps its description and payment
    hint. Input templates are not modified.

    Args:
        templates: Templates to merge.

    Returns:
        A merged template with policy ``mixed``, or None if none were given.
    """
    templates = list(templates)
    if not templates:
        return None

    merged_orders: dict[Decimal, OrderTemplate] = {}
    for template in templates:
        for order in template.orders:
            existing = merged_orders.get(order.amount)
            if existing is not None:
                existing.frequency += order.frequency
            else:
                merged_orders[order.amount] = OrderTemplate(
                    id=str(uuid.uuid4()),
                    amount=order.amount,
                    frequency=order.frequency,
                    description=order.description,
                    payment_method=order.payment_method,
                )

    return Template(
        id=MERGED_TEMPLATE_ID,
        name=MERGED_TEMPLATE_NAME,
        date=date.today().isoformat(),
        payment_method=PaymentPolicy.MIXED,
        total_amount=sum((t.total_amount for t in templates), Decimal(0)),
        orders=list(merged_orders.values()),
    )
