"""Algorithm settings governing every decision point of the engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any

from ordergen.engine.errors import InvalidSettings


@dataclass(frozen=True)
class AlgorithmSettings:
    """Tuning parameters for amount distribution.

    Attributes:
        variation_factor: 0-1, how far amounts may drift from the template.
            Zero selects strict mode (no randomness in amounts).
        rounding_precision: Decimal places for every amount.
        prefer_exact_match: On the first iteration, use a template amount
            equal to the whole target when one exists.
        allow_new_order_types: Allow fresh amounts below the template minimum.
        max_iterations: Ceiling on decomposition iterations.
        template_fidelity: 0-1, stored with reports for compatibility; the
            engine does not read it.
    """

    variation_factor: float = 0.2
    rounding_precision: int = 2
    prefer_exact_match: bool = True
    allow_new_order_types: bool = False
    max_iterations: int = 1000
    template_fidelity: float = 1.0

    @property
    def is_strict(self) -> bool:
        return self.variation_factor == 0

    def validate(self) -> AlgorithmSettings:
        """Check value ranges.

        Returns:
            The same settings, for chaining.

        Raises:
            InvalidSettings: If any value is out of range.
        """
        if not 0 <= self.variation_factor <= 1:
            raise InvalidSettings(
                f"variation_factor must be between 0 and 1, got {self.variation_factor}"
            )
        if not isinstance(self.rounding_precision, int) or self.rounding_precision < 0:
            raise InvalidSettings(
                f"rounding_precision must be an integer >= 0, got {self.rounding_precision}"
            )
        if not isinstance(self.max_iterations, int) or self.max_iterations <= 0:
            raise InvalidSettings(
                f"max_iterations must be an integer > 0, got {self.max_iterations}"
            )
        if not 0 <= self.template_fidelity <= 1:
            raise InvalidSettings(
                f"template_fidelity must be between 0 and 1, got {self.template_fidelity}"
            )
        return self

    def with_overrides(self, **overrides: Any) -> AlgorithmSettings:
        """Return a copy with the given fields replaced (``None`` values ignored).

        Raises:
            InvalidSettings: If an override names an unknown setting.
        """
        unknown = set(overrides) - {f.name for f in fields(self)}
        if unknown:
            raise InvalidSettings(f"Unknown algorithm settings: {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
