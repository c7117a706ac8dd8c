"""Template pattern: the normalized amount/frequency catalog used as a prior."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import TYPE_CHECKING

from ordergen.engine.errors import InvalidTemplate
from ordergen.lib.rounding import round_to_decimal, to_decimal
from ordergen.models.enums import PaymentMethod

if TYPE_CHECKING:
    from ordergen.models.template import Template

# Tolerance for the sum of normalized frequencies.
FREQUENCY_TOLERANCE: float = 1e-9


@dataclass(frozen=True)
class PatternEntry:
    """One typical order amount and how often it occurs.

    Attributes:
        amount: Order amount (>= 0).
        frequency: Raw count before normalization, share in [0, 1] after.
        payment_method: Optional payment method hint for this amount.
        description: Optional label copied onto generated orders.
    """

    amount: Decimal
    frequency: float
    payment_method: PaymentMethod | None = None
    description: str | None = None


@dataclass(frozen=True)
class TemplatePattern:
    """Immutable, normalized snapshot of pattern entries.

    Frequencies sum to 1. Instances are only built through ``from_raw`` or
    ``from_template`` so the invariant always holds.

    Attributes:
        entries: Entries in catalog order (iteration order is stable).
        min_amount: Smallest entry amount.
    """

    entries: tuple[PatternEntry, ...]
    min_amount: Decimal

    @classmethod
    def from_raw(cls, entries: Iterable[PatternEntry]) -> TemplatePattern:
        """Clone raw entries and normalize their frequencies.

        Args:
            entries: Entries carrying raw (typically integer) frequencies.

        Returns:
            A new pattern whose frequencies sum to 1.

        Raises:
            InvalidTemplate: If there are no entries, any amount or frequency
                is negative or not finite, or no frequency is positive.
        """
        raw = [
            replace(entry, amount=to_decimal(entry.amount), frequency=float(entry.frequency))
            for entry in entries
        ]
        if not raw:
            raise InvalidTemplate("Template pattern has no entries")

        for entry in raw:
            if not entry.amount.is_finite() or entry.amount < 0:
                raise InvalidTemplate(f"Pattern amount must be >= 0, got {entry.amount}")
            if not math.isfinite(entry.frequency) or entry.frequency < 0:
                raise InvalidTemplate(
                    f"Pattern frequency must be >= 0, got {entry.frequency}"
                )

        total_frequency = sum(entry.frequency for entry in raw)
        if total_frequency <= 0:
            raise InvalidTemplate("Template pattern has no positive-frequency entries")

        normalized = tuple(
            replace(entry, frequency=entry.frequency / total_frequency) for entry in raw
        )
        return cls(
            entries=normalized,
            min_amount=min(entry.amount for entry in normalized),
        )

    @classmethod
    def from_template(cls, template: Template) -> TemplatePattern:
        """Build a normalized pattern from a stored template's order catalog."""
        return cls.from_raw(
            PatternEntry(
                amount=to_decimal(order.amount),
                frequency=order.frequency,
                payment_method=order.payment_method,
                description=order.description,
            )
            for order in template.orders
        )

    def quantized(self, places: int) -> TemplatePattern:
        """Return a copy with every amount rounded to ``places`` decimals."""
        entries = tuple(
            replace(entry, amount=round_to_decimal(entry.amount, places))
            for entry in self.entries
        )
        return TemplatePattern(
            entries=entries,
            min_amount=min(entry.amount for entry in entries),
        )

    @property
    def total_frequency(self) -> float:
        return sum(entry.frequency for entry in self.entries)

    def is_normalized(self) -> bool:
        """Return True when frequencies sum to 1 within tolerance."""
        return abs(self.total_frequency - 1.0) <= FREQUENCY_TOLERANCE

    def __len__(self) -> int:
        return len(self.entries)
