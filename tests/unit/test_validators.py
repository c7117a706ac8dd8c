"""Unit tests for CLI parameter validation."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from ordergen.lib.validators import ValidatedParams, validate_params
from ordergen.models.enums import PaymentPolicy


def _validate(**overrides: object) -> ValidatedParams | list:
    values: dict = {
        "report_date": "2026-03-10",
        "target_amount": "150.25",
        "payment_policy": "mixed",
        "template_ids": ["weekday"],
        "output_format": "parquet",
        "seed": 42,
    }
    values.update(overrides)
    return validate_params(**values)


class TestValidateParams:
    """Tests for the validate_params function."""

    def test_valid_params(self) -> None:
        result = _validate()
        assert isinstance(result, ValidatedParams)
        assert result.report_date == date(2026, 3, 10)
        assert result.target_amount == Decimal("150.25")
        assert result.payment_policy == PaymentPolicy.MIXED
        assert result.seed == 42

    def test_default_date_is_today(self) -> None:
        result = _validate(report_date=None)
        assert isinstance(result, ValidatedParams)
        assert result.report_date == date.today()

    def test_seed_generated_when_missing(self) -> None:
        result = _validate(seed=None)
        assert isinstance(result, ValidatedParams)
        assert 0 <= result.seed < 2**31

    def test_invalid_date(self) -> None:
        result = _validate(report_date="10/03/2026")
        assert isinstance(result, list)
        assert any(e.field == "date" for e in result)

    def test_zero_target(self) -> None:
        result = _validate(target_amount="0")
        assert isinstance(result, list)
        assert any(e.field == "target" for e in result)

    def test_non_numeric_target(self) -> None:
        result = _validate(target_amount="lots")
        assert isinstance(result, list)
        assert any(e.field == "target" for e in result)

    def test_nan_target(self) -> None:
        result = _validate(target_amount="NaN")
        assert isinstance(result, list)
        assert any(e.field == "target" for e in result)

    def test_unknown_policy(self) -> None:
        result = _validate(payment_policy="cheque")
        assert isinstance(result, list)
        assert any(e.field == "payment" for e in result)

    def test_missing_templates(self) -> None:
        result = _validate(template_ids=[])
        assert isinstance(result, list)
        assert any(e.field == "template_id" for e in result)

    def test_invalid_format(self) -> None:
        result = _validate(output_format="xlsx")
        assert isinstance(result, list)
        assert any(e.field == "format" for e in result)

    def test_multiple_errors_collected(self) -> None:
        result = _validate(target_amount="-1", output_format="xml")
        assert isinstance(result, list)
        assert {e.field for e in result} == {"target", "format"}
