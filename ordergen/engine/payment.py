"""Payment method resolution for generated orders."""

from __future__ import annotations

from numpy.random import Generator

from ordergen.models.enums import PaymentMethod, PaymentPolicy


def resolve_payment_method(
    rng: Generator,
    hint: PaymentMethod | None,
    policy: PaymentPolicy,
) -> PaymentMethod:
    """Resolve the payment method for one selected pattern entry.

    Order of precedence: the entry's own hint, then an unbiased coin flip
    under the ``mixed`` policy, then the policy's single method.

    Args:
        rng: NumPy random generator. Only consumed for ``mixed`` without hint.
        hint: Payment method attached to the pattern entry, if any.
        policy: Payment policy requested by the caller.

    Returns:
        The resolved payment method.
    """
    if hint is not None:
        return hint
    if policy == PaymentPolicy.MIXED:
        return PaymentMethod.CASH if rng.random() < 0.5 else PaymentMethod.CARD
    return PaymentMethod(policy.value)


def default_payment_method(policy: PaymentPolicy) -> PaymentMethod:
    """Payment method for fallback groups: the policy's method, cash if mixed."""
    if policy == PaymentPolicy.MIXED:
        return PaymentMethod.CASH
    return PaymentMethod(policy.value)
