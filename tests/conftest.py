"""Shared test fixtures for the order report generator."""

from __future__ import annotations

import json
from datetime import date
from decimal import Decimal
from pathlib import Path

import numpy as np
import pytest

from ordergen.models.enums import PaymentMethod
from ordergen.models.pattern import PatternEntry, TemplatePattern
from ordergen.models.settings import AlgorithmSettings

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def default_seed() -> int:
    """Provide a deterministic seed for reproducible tests."""
    return 42


@pytest.fixture
def rng(default_seed: int) -> np.random.Generator:
    """Provide a seeded NumPy random generator."""
    return np.random.default_rng(default_seed)


@pytest.fixture
def report_date() -> date:
    return date(2026, 3, 10)


@pytest.fixture
def cafe_pattern() -> TemplatePattern:
    """Provide a small cafe pattern with one card-only entry.

    Returns:
        Normalized pattern built from raw integer frequencies.
    """
    return TemplatePattern.from_raw([
        PatternEntry(amount=Decimal("2.50"), frequency=40, description="Espresso"),
        PatternEntry(amount=Decimal("4.50"), frequency=30, description="Latte"),
        PatternEntry(amount=Decimal("9.00"), frequency=12, description="Breakfast"),
        PatternEntry(
            amount=Decimal("14.50"),
            frequency=8,
            payment_method=PaymentMethod.CARD,
            description="Lunch",
        ),
    ])


@pytest.fixture
def strict_settings() -> AlgorithmSettings:
    """Provide strict-mode settings (no variation)."""
    return AlgorithmSettings(variation_factor=0, max_iterations=1000)


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def templates_schema() -> dict:
    """Load the template catalog JSON Schema contract."""
    path = PROJECT_ROOT / "ordergen" / "contracts" / "templates.schema.json"
    return json.loads(path.read_text())


@pytest.fixture
def sample_catalog() -> dict:
    """Provide a valid two-template catalog document."""
    return {
        "templates": [
            {
                "id": "weekday",
                "name": "Weekday",
                "date": "2026-03-10",
                "paymentMethod": "mixed",
                "totalAmount": 100.0,
                "orders": [
                    {"id": "a", "amount": 5.0, "frequency": 10, "description": "Small"},
                    {"id": "b", "amount": 12.5, "frequency": 4, "paymentMethod": "card"},
                ],
            },
            {
                "id": "weekend",
                "name": "Weekend",
                "date": "2026-03-14",
                "paymentMethod": "both",
                "totalAmount": 150.0,
                "orders": [
                    {"id": "c", "amount": 5.0, "frequency": 6},
                    {"id": "d", "amount": 20.0, "frequency": 3},
                ],
            },
        ]
    }


@pytest.fixture
def catalog_path(tmp_path: Path, sample_catalog: dict) -> Path:
    """Write the sample catalog to a temporary file and return its path."""
    path = tmp_path / "templates.json"
    path.write_text(json.dumps(sample_catalog))
    return path
