"""Errors raised by the amount distribution engine.

Only input-contract violations are exceptions. Reaching the iteration
ceiling is reported through ``DistributionResult.status`` instead.
"""

from __future__ import annotations


class DistributionError(Exception):
    """Base class for generation input errors."""


class InvalidTemplate(DistributionError, ValueError):
    """Pattern is empty, has no positive frequency, or holds negative values."""


class InvalidTarget(DistributionError, ValueError):
    """Target amount is not strictly positive."""


class InvalidSettings(DistributionError, ValueError):
    """Algorithm settings are out of their valid ranges."""


class InvalidDate(DistributionError, ValueError):
    """Report date is not an ISO ``YYYY-MM-DD`` string."""
