"""Carbon estimation from logged quantities.

Each activity is converted with a per-unit factor looked up by the exact
``(type, unit)`` pair. Pairs missing from the table fall back to a factor of
1.0, so an unknown category counts one unit of quantity as one kilogram of CO₂.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

FactorKey = Tuple[str, str]

DEFAULT_FACTORS: Mapping[FactorKey, float] = MappingProxyType(
    {
        ("transport", "km"): 0.2,
        ("electricity", "kWh"): 0.5,
        ("food", "kg"): 2.5,
    }
)

FALLBACK_FACTOR = 1.0


class CarbonEstimator:
    """Converts activity quantities into kilograms of CO₂."""

    def __init__(self, factors: Optional[Mapping[FactorKey, float]] = None) -> None:
        self._factors: Mapping[FactorKey, float] = MappingProxyType(
            dict(DEFAULT_FACTORS if factors is None else factors)
        )

    @property
    def factors(self) -> Mapping[FactorKey, float]:
        return self._factors

    def factor(self, activity_type: str, unit: str) -> float:
        return self._factors.get((activity_type, unit), FALLBACK_FACTOR)

    def estimate(self, activity_type: str, value: float, unit: str) -> float:
        # No range checks: negative or NaN quantities propagate as-is.
        return value * self.factor(activity_type, unit)


_default_estimator = CarbonEstimator()


def estimate(activity_type: str, value: float, unit: str) -> float:
    """Estimate carbon mass using the built-in factor table."""
    return _default_estimator.estimate(activity_type, value, unit)
