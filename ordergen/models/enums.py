"""Shared enums for order generation.

Values are the lowercase strings stored in template and report JSON files.
"""

from __future__ import annotations

from enum import StrEnum


class PaymentMethod(StrEnum):
    """Payment method of a single order."""

    CASH = "cash"
    CARD = "card"


class PaymentPolicy(StrEnum):
    """Payment method requested by the caller for a generation run.

    ``mixed`` splits orders without a template hint between cash and card.
    """

    CASH = "cash"
    CARD = "card"
    MIXED = "mixed"

    @classmethod
    def from_value(cls, value: str | PaymentPolicy) -> PaymentPolicy:
        """Parse a policy name, accepting the stored alias ``both`` for mixed.

        Raises:
            ValueError: If the value names no known policy.
        """
        if isinstance(value, PaymentPolicy):
            return value
        normalized = str(value).strip().lower()
        if normalized == "both":
            return cls.MIXED
        return cls(normalized)


class DistributionStatus(StrEnum):
    """Terminal state of a decomposition run.

    - CONVERGED: remaining balance reached zero.
    - EXHAUSTED: iteration ceiling reached with a positive balance left.
    - FALLBACK: no group was produced; a single full-target group was used.
    """

    CONVERGED = "converged"
    EXHAUSTED = "exhausted"
    FALLBACK = "fallback"
