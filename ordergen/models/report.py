"""Daily report records assembled from distribution results."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from ordergen.models.enums import DistributionStatus, PaymentMethod
from ordergen.models.order import DistributionResult, Order, OrderGroup


@dataclass
class DailyReport:
    """A generated day of orders.

    Attributes:
        id: Unique report identifier.
        date: Report day (YYYY-MM-DD).
        total_amount: Sum of all order amounts.
        target_amount: Requested total.
        cash_amount: Sum of cash orders.
        card_amount: Sum of card orders.
        orders: Orders sorted by timestamp.
        order_groups: Groups the orders were expanded from.
        generated_at: ISO 8601 generation time.
        template_ids: Templates the report was generated from.
        status: Terminal state of the distribution run.
    """

    id: str
    date: str
    total_amount: Decimal
    target_amount: Decimal
    cash_amount: Decimal
    card_amount: Decimal
    orders: list[Order]
    order_groups: list[OrderGroup]
    generated_at: str
    template_ids: list[str] = field(default_factory=list)
    status: DistributionStatus = DistributionStatus.CONVERGED

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "totalAmount": str(self.total_amount),
            "targetAmount": str(self.target_amount),
            "cashAmount": str(self.cash_amount),
            "cardAmount": str(self.card_amount),
            "orders": [o.to_dict() for o in self.orders],
            "orderGroups": [g.to_dict() for g in self.order_groups],
            "generatedAt": self.generated_at,
            "templateIds": list(self.template_ids),
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DailyReport:
        return cls(
            id=data["id"],
            date=data["date"],
            total_amount=Decimal(str(data["totalAmount"])),
            target_amount=Decimal(str(data["targetAmount"])),
            cash_amount=Decimal(str(data["cashAmount"])),
            card_amount=Decimal(str(data["cardAmount"])),
            orders=[Order.from_dict(o) for o in data.get("orders", [])],
            order_groups=[OrderGroup.from_dict(g) for g in data.get("orderGroups", [])],
            generated_at=data["generatedAt"],
            template_ids=list(data.get("templateIds", [])),
            status=DistributionStatus(data.get("status", DistributionStatus.CONVERGED.value)),
        )


def _sum_by_method(orders: Iterable[Order], method: PaymentMethod) -> Decimal:
    return sum((o.amount for o in orders if o.payment_method == method), Decimal(0))


def build_daily_report(
    *,
    report_date: str,
    target_amount: Decimal,
    result: DistributionResult,
    template_ids: list[str],
) -> DailyReport:
    """Assemble a report from a distribution result.

    Args:
        report_date: Report day (YYYY-MM-DD).
        target_amount: Requested total.
        result: Engine output.
        template_ids: Templates used for generation.

    Returns:
        A new DailyReport with payment-method totals filled in.
    """
    return DailyReport(
        id=str(uuid.uuid4()),
        date=report_date,
        total_amount=result.total,
        target_amount=target_amount,
        cash_amount=_sum_by_method(result.orders, PaymentMethod.CASH),
        card_amount=_sum_by_method(result.orders, PaymentMethod.CARD),
        orders=list(result.orders),
        order_groups=list(result.order_groups),
        generated_at=datetime.now(UTC).isoformat(),
        template_ids=list(template_ids),
        status=result.status,
    )


def regroup_orders(orders: Iterable[Order]) -> list[OrderGroup]:
    """Recompute order groups keyed by (amount, payment method)."""
    groups: dict[tuple[Decimal, PaymentMethod], OrderGroup] = {}
    for order in orders:
        key = (order.amount, order.payment_method)
        group = groups.get(key)
        if group is None:
            groups[key] = OrderGroup(
                amount=order.amount,
                count=1,
                payment_method=order.payment_method,
                description=order.description,
            )
        else:
            group.count += 1
    return list(groups.values())


def merge_reports_by_date(reports: Iterable[DailyReport]) -> list[DailyReport]:
    """Combine reports that share a date.

    Reports alone on their date are returned as-is. Merged reports get a
    fresh id, summed amounts, orders re-sorted by time and regrouped.
    A merged report is ``exhausted`` if any of its parts was.

    Args:
        reports: Reports to merge.

    Returns:
        One report per distinct date, in first-seen date order.
    """
    by_date: dict[str, list[DailyReport]] = {}
    for report in reports:
        by_date.setdefault(report.date, []).append(report)

    merged: list[DailyReport] = []
    for report_date, same_day in by_date.items():
        if len(same_day) == 1:
            merged.append(same_day[0])
            continue

        orders = sorted(
            (o for r in same_day for o in r.orders), key=lambda o: o.timestamp,
        )
        template_ids = list(dict.fromkeys(t for r in same_day for t in r.template_ids))
        exhausted = any(r.status == DistributionStatus.EXHAUSTED for r in same_day)
        merged.append(
            DailyReport(
                id=str(uuid.uuid4()),
                date=report_date,
                total_amount=sum((r.total_amount for r in same_day), Decimal(0)),
                target_amount=sum((r.target_amount for r in same_day), Decimal(0)),
                cash_amount=sum((r.cash_amount for r in same_day), Decimal(0)),
                card_amount=sum((r.card_amount for r in same_day), Decimal(0)),
                orders=orders,
                order_groups=regroup_orders(orders),
                generated_at=datetime.now(UTC).isoformat(),
                template_ids=template_ids,
                status=(
                    DistributionStatus.EXHAUSTED if exhausted else DistributionStatus.CONVERGED
                ),
            )
        )
    return merged
