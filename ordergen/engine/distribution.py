"""Amount distribution engine.

Decomposes a target total into order groups that follow a template's
amount/frequency pattern, then spreads the resulting orders over a
working day. The decomposition loop runs until the remaining balance
reaches zero or ``max_iterations`` is hit:

    Accumulating -> Converged (remaining == 0)
                 -> Exhausted (iteration ceiling, remaining > 0)

Every random draw goes through the injected ``numpy.random.Generator``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, tzinfo
from decimal import Decimal

import numpy as np
from numpy.random import Generator

from ordergen.engine.errors import InvalidTarget, InvalidTemplate
from ordergen.engine.payment import default_payment_method, resolve_payment_method
from ordergen.engine.progress import ProgressObserver, notify
from ordergen.engine.scheduler import schedule_orders
from ordergen.engine.selector import weighted_select
from ordergen.engine.variance import apply_variance, synthesize_amount
from ordergen.lib.logging_config import get_logger
from ordergen.lib.rounding import amounts_equal, precision_unit, round_to_decimal
from ordergen.models.enums import DistributionStatus, PaymentMethod, PaymentPolicy
from ordergen.models.order import DistributionResult, OrderGroup
from ordergen.models.pattern import PatternEntry, TemplatePattern
from ordergen.models.settings import AlgorithmSettings

logger = get_logger("distribution")

FALLBACK_DESCRIPTION = "Automatically generated order"


@dataclass
class _LoopOutcome:
    groups: list[OrderGroup]
    status: DistributionStatus
    iterations: int
    remaining: Decimal


def _find_exact_match(
    entries: Iterable[PatternEntry], remaining: Decimal, places: int,
) -> PatternEntry | None:
    for entry in entries:
        if amounts_equal(entry.amount, remaining, places):
            return entry
    return None


def _select_strict(pattern: TemplatePattern, remaining: Decimal, places: int) -> PatternEntry:
    """Greedy selection: exact match, else largest fitting entry, else smallest."""
    exact = _find_exact_match(pattern.entries, remaining, places)
    if exact is not None:
        return exact

    fitting = [e for e in pattern.entries if 0 < e.amount <= remaining]
    if fitting:
        return max(fitting, key=lambda e: e.amount)

    return min(pattern.entries, key=lambda e: e.amount)


def _add_to_groups(
    groups: list[OrderGroup],
    amount: Decimal,
    payment_method: PaymentMethod,
    description: str | None,
    places: int,
) -> None:
    """Count one order into the matching group, or open a new group."""
    for group in groups:
        if group.payment_method == payment_method and amounts_equal(group.amount, amount, places):
            group.count += 1
            return
    groups.append(
        OrderGroup(
            amount=amount,
            count=1,
            payment_method=payment_method,
            description=description,
        )
    )


def _absorb_leftover(
    rng: Generator, groups: list[OrderGroup], leftover: Decimal, places: int,
) -> None:
    """Fold a balance below the pattern minimum into a random existing order.

    One order of the chosen group is moved into a group whose amount is
    the donor amount plus the leftover, so the grand total grows by
    exactly ``leftover``.
    """
    index = int(rng.integers(0, len(groups)))
    donor = groups[index]
    donor.count -= 1
    if donor.count == 0:
        del groups[index]
    _add_to_groups(
        groups,
        round_to_decimal(donor.amount + leftover, places),
        donor.payment_method,
        donor.description,
        places,
    )


def _decompose(
    rng: Generator,
    target: Decimal,
    pattern: TemplatePattern,
    policy: PaymentPolicy,
    settings: AlgorithmSettings,
) -> _LoopOutcome:
    places = settings.rounding_precision
    unit = precision_unit(places)
    min_amount = pattern.min_amount

    groups: list[OrderGroup] = []
    remaining = target
    iterations = 0

    while remaining > 0 and iterations < settings.max_iterations:
        iterations += 1

        exact_first = False
        if settings.is_strict:
            selected = _select_strict(pattern, remaining, places)
        elif settings.prefer_exact_match and iterations == 1:
            selected = _find_exact_match(pattern.entries, remaining, places)
            exact_first = selected is not None
            if selected is None:
                selected = weighted_select(rng, pattern.entries)
        else:
            selected = weighted_select(rng, pattern.entries)

        payment_method = resolve_payment_method(rng, selected.payment_method, policy)

        order_amount = selected.amount
        if not settings.is_strict and not exact_first:
            order_amount = apply_variance(
                rng, selected.amount, settings.variation_factor, min_amount, places,
            )

        if order_amount > remaining or order_amount <= 0:
            if settings.is_strict:
                if groups:
                    _absorb_leftover(rng, groups, remaining, places)
                    remaining = Decimal(0)
                    break
                order_amount = remaining
            elif settings.allow_new_order_types or remaining >= min_amount:
                if remaining >= min_amount:
                    order_amount = synthesize_amount(
                        rng, max(min_amount, unit), remaining, places,
                    )
                else:
                    order_amount = remaining
            elif groups:
                _absorb_leftover(rng, groups, remaining, places)
                remaining = Decimal(0)
                break
            else:
                order_amount = remaining

        remaining = round_to_decimal(remaining - order_amount, places)
        if 0 < remaining < unit:
            remaining = Decimal(0)

        _add_to_groups(groups, order_amount, payment_method, selected.description, places)

    status = DistributionStatus.CONVERGED if remaining <= 0 else DistributionStatus.EXHAUSTED
    return _LoopOutcome(groups=groups, status=status, iterations=iterations, remaining=remaining)


def distribute_amount(
    target_amount: Decimal | float | int | str,
    pattern: TemplatePattern | Iterable[PatternEntry],
    payment_policy: PaymentPolicy | str,
    settings: AlgorithmSettings | None = None,
    *,
    report_date: date | None = None,
    tz: tzinfo = UTC,
    rng: Generator | None = None,
    observer: ProgressObserver | None = None,
) -> DistributionResult:
    """Distribute a target total into individual timestamped orders.

    The caller's pattern is never modified; the engine works on a copy
    whose amounts are rounded to the configured precision.

    Args:
        target_amount: Total the orders must sum to (> 0).
        pattern: Normalized pattern, or raw entries to normalize.
        payment_policy: ``cash``, ``card`` or ``mixed``.
        settings: Algorithm settings. Defaults to ``AlgorithmSettings()``.
        report_date: Day the orders are scheduled on. Defaults to today.
        tz: Timezone of the working window.
        rng: Random generator. A fresh unseeded one when omitted.
        observer: Optional callback receiving coarse ``ProgressEvent`` updates.

    Returns:
        DistributionResult whose order amounts sum to the rounded target,
        unless the run was exhausted (see ``status`` and ``remaining``).

    Raises:
        InvalidTarget: If the target is not a number or its rounded value is
            not positive.
        InvalidTemplate: If the pattern is empty or has no positive frequency.
        InvalidSettings: If settings are out of range.
        ValueError: If the payment policy is unknown.
    """
    settings = (settings or AlgorithmSettings()).validate()
    places = settings.rounding_precision
    policy = PaymentPolicy.from_value(payment_policy)

    try:
        target = round_to_decimal(target_amount, places)
    except (ArithmeticError, TypeError, ValueError) as exc:
        raise InvalidTarget(f"Target amount must be a number, got {target_amount!r}") from exc
    if not target.is_finite() or target <= 0:
        raise InvalidTarget(f"Target amount must be > 0, got {target_amount}")

    if not isinstance(pattern, TemplatePattern):
        pattern = TemplatePattern.from_raw(pattern)
    if not pattern.entries or pattern.total_frequency <= 0:
        raise InvalidTemplate("Template pattern has no positive-frequency entries")

    rng = rng if rng is not None else np.random.default_rng()
    report_date = report_date or date.today()

    notify(observer, "Analyzing template patterns...", 0)
    working = pattern.quantized(places)

    notify(observer, "Calculating order distribution...", 25)
    outcome = _decompose(rng, target, working, policy, settings)

    groups = outcome.groups
    status = outcome.status
    remaining = outcome.remaining
    if not groups:
        logger.warning("No order groups produced for %s; using a single fallback order", target)
        groups = [
            OrderGroup(
                amount=target,
                count=1,
                payment_method=default_payment_method(policy),
                description=FALLBACK_DESCRIPTION,
            )
        ]
        status = DistributionStatus.FALLBACK
        remaining = Decimal(0)

    if status == DistributionStatus.EXHAUSTED:
        logger.warning(
            "Iteration ceiling (%d) reached with %s left; total is approximate",
            settings.max_iterations,
            remaining,
        )

    notify(observer, "Generating temporal distribution...", 75)
    orders = schedule_orders(rng, groups, report_date, tz)

    logger.info(
        "Distributed %s into %d orders across %d groups in %d iterations (%s)",
        target,
        len(orders),
        len(groups),
        outcome.iterations,
        status.value,
    )
    notify(observer, "Finalizing transaction details...", 100)

    return DistributionResult(
        orders=orders,
        order_groups=groups,
        status=status,
        iterations=outcome.iterations,
        remaining=remaining,
    )
