"""Bounded random perturbation of order amounts."""

from __future__ import annotations

from decimal import Decimal

from numpy.random import Generator

from ordergen.lib.rounding import round_to_decimal, to_decimal


def apply_variance(
    rng: Generator,
    base: Decimal,
    variation_factor: float,
    min_amount: Decimal,
    places: int,
) -> Decimal:
    """Perturb a template amount by up to ``2 * variation_factor`` of itself.

    ``perturbed = base + uniform(-1, 1) * base * 2 * variation_factor``,
    floored at ``min_amount`` and rounded half away from zero. A zero
    factor returns ``base`` untouched and draws nothing from ``rng``.

    Args:
        rng: NumPy random generator.
        base: Template amount to perturb.
        variation_factor: Variation in [0, 1].
        min_amount: Lower bound for the result (pattern minimum).
        places: Rounding precision.

    Returns:
        The perturbed, rounded amount.
    """
    if variation_factor == 0:
        return base

    max_variance = base * to_decimal(variation_factor * 2)
    variance = to_decimal(rng.uniform(-1.0, 1.0)) * max_variance
    return round_to_decimal(max(min_amount, base + variance), places)


def synthesize_amount(
    rng: Generator,
    low: Decimal,
    high: Decimal,
    places: int,
) -> Decimal:
    """Draw a fresh amount uniformly in ``[low, high]``.

    When the interval is empty or a single point, ``low`` is returned.
    The rounded result is clamped back into the interval.
    """
    span = high - low
    if span <= 0:
        return low
    amount = round_to_decimal(low + to_decimal(rng.random()) * span, places)
    return min(max(amount, low), high)
