"""Input parameter validation for the report generator CLI."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from ordergen.models.enums import PaymentPolicy

VALID_FORMATS: set[str] = {"parquet", "csv"}


@dataclass
class ValidationError:
    """Represents a single validation failure.

    Attributes:
        field: Name of the invalid parameter.
        message: Human-readable error description.
    """

    field: str
    message: str


@dataclass
class ValidatedParams:
    """Validated and normalized generation parameters.

    Attributes:
        report_date: Day to generate orders for.
        target_amount: Total the orders must sum to.
        payment_policy: Requested payment policy.
        template_ids: Templates to generate from.
        format: Output format ('parquet' or 'csv').
        seed: Random seed (may be auto-generated).
    """

    report_date: date
    target_amount: Decimal
    payment_policy: PaymentPolicy
    template_ids: list[str]
    format: str
    seed: int


def validate_params(
    *,
    report_date: str | None,
    target_amount: str,
    payment_policy: str,
    template_ids: list[str],
    output_format: str,
    seed: int | None,
) -> ValidatedParams | list[ValidationError]:
    """Validate and normalize all generation parameters.

    Args:
        report_date: Date string (YYYY-MM-DD) or None for today.
        target_amount: Target total as entered.
        payment_policy: Payment policy name.
        template_ids: Template ids; at least one is required.
        output_format: Output format string ('parquet' or 'csv').
        seed: Random seed or None for auto-generated.

    Returns:
        ValidatedParams on success, or a list of ValidationError on failure.
    """
    errors: list[ValidationError] = []

    parsed_date: date | None = date.today()
    if report_date is not None:
        try:
            parsed_date = datetime.strptime(report_date, "%Y-%m-%d").date()
        except ValueError:
            errors.append(
                ValidationError(
                    "date", f"Invalid date format '{report_date}', expected YYYY-MM-DD",
                )
            )

    parsed_target: Decimal | None = None
    try:
        parsed_target = Decimal(str(target_amount))
    except InvalidOperation:
        errors.append(
            ValidationError("target", f"Target must be a number, got '{target_amount}'")
        )
    else:
        if not parsed_target.is_finite() or parsed_target <= 0:
            errors.append(
                ValidationError("target", f"Target must be > 0, got {target_amount}")
            )

    parsed_policy: PaymentPolicy | None = None
    try:
        parsed_policy = PaymentPolicy.from_value(payment_policy)
    except ValueError:
        errors.append(
            ValidationError(
                "payment",
                f"Invalid payment policy '{payment_policy}', "
                f"must be one of: {', '.join(p.value for p in PaymentPolicy)}",
            )
        )

    if not template_ids:
        errors.append(ValidationError("template_id", "At least one template id is required"))

    if output_format not in VALID_FORMATS:
        errors.append(
            ValidationError(
                "format",
                f"Invalid format '{output_format}', "
                f"must be one of: {', '.join(sorted(VALID_FORMATS))}",
            )
        )

    if errors:
        return errors

    effective_seed = seed if seed is not None else secrets.randbelow(2**31)

    return ValidatedParams(
        report_date=parsed_date,  # type: ignore[arg-type]
        target_amount=parsed_target,  # type: ignore[arg-type]
        payment_policy=parsed_policy,  # type: ignore[arg-type]
        template_ids=list(template_ids),
        format=output_format,
        seed=effective_seed,
    )
