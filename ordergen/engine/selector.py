"""Frequency-weighted selection of pattern entries."""

from __future__ import annotations

from collections.abc import Sequence

from numpy.random import Generator

from ordergen.models.pattern import PatternEntry


def weighted_select(rng: Generator, entries: Sequence[PatternEntry]) -> PatternEntry:
    """Pick an entry with probability proportional to its frequency.

    Draws a uniform value in ``[0, total_weight)`` and subtracts each weight
    in iteration order until the running value is no longer positive. A
    linear scan is enough for catalogs of a few dozen entries.

    Args:
        rng: NumPy random generator (seeded for reproducibility).
        entries: Pattern entries in stable iteration order.

    Returns:
        The selected entry. If every weight is zero, the first entry.

    Raises:
        ValueError: If ``entries`` is empty.
    """
    if not entries:
        raise ValueError("Cannot select from an empty pattern")

    total_weight = sum(entry.frequency for entry in entries)
    if total_weight <= 0:
        return entries[0]

    remaining = rng.random() * total_weight
    for entry in entries:
        remaining -= entry.frequency
        if remaining <= 0:
            return entry

    # Float accumulation can leave a tiny positive residue after the last entry
    return entries[-1]
