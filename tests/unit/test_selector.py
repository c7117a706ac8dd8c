"""Unit tests for frequency-weighted pattern selection."""

from __future__ import annotations

from collections import Counter
from decimal import Decimal

import numpy as np
import pytest
from scipy import stats

from ordergen.engine.selector import weighted_select
from ordergen.models.pattern import PatternEntry, TemplatePattern


class TestWeightedSelect:
    """Tests for the weighted_select function."""

    def test_selection_matches_frequencies(self) -> None:
        """Observed counts must be consistent with normalized frequencies."""
        pattern = TemplatePattern.from_raw([
            PatternEntry(amount=Decimal(1), frequency=5),
            PatternEntry(amount=Decimal(2), frequency=3),
            PatternEntry(amount=Decimal(3), frequency=2),
        ])
        rng = np.random.default_rng(42)
        draws = 10_000
        counts = Counter(weighted_select(rng, pattern.entries).amount for _ in range(draws))

        observed = [counts[Decimal(a)] for a in (1, 2, 3)]
        expected = [draws * e.frequency for e in pattern.entries]
        _, p_value = stats.chisquare(observed, expected)
        assert p_value > 0.001, f"Selection deviates from weights: {observed}"

    def test_zero_weight_entry_never_selected(self) -> None:
        pattern = TemplatePattern.from_raw([
            PatternEntry(amount=Decimal(1), frequency=0),
            PatternEntry(amount=Decimal(2), frequency=1),
        ])
        rng = np.random.default_rng(7)
        picks = {weighted_select(rng, pattern.entries).amount for _ in range(500)}
        assert picks == {Decimal(2)}

    def test_all_zero_weights_fall_back_to_first(self) -> None:
        entries = [
            PatternEntry(amount=Decimal(4), frequency=0.0),
            PatternEntry(amount=Decimal(6), frequency=0.0),
        ]
        assert weighted_select(np.random.default_rng(1), entries).amount == Decimal(4)

    def test_single_entry_always_selected(self) -> None:
        entries = [PatternEntry(amount=Decimal(10), frequency=1.0)]
        rng = np.random.default_rng(3)
        assert all(weighted_select(rng, entries) is entries[0] for _ in range(20))

    def test_empty_sequence_raises(self) -> None:
        with pytest.raises(ValueError):
            weighted_select(np.random.default_rng(1), [])

    def test_deterministic_with_same_seed(self, cafe_pattern: TemplatePattern) -> None:
        rng1 = np.random.default_rng(42)
        rng2 = np.random.default_rng(42)
        picks1 = [weighted_select(rng1, cafe_pattern.entries).amount for _ in range(50)]
        picks2 = [weighted_select(rng2, cafe_pattern.entries).amount for _ in range(50)]
        assert picks1 == picks2
