"""
Epsilon-based precision context for floating point comparisons.

Every geometric decision in sphere_paths (point equality, angle ordering,
interval membership, side-of-circle tests) goes through a PrecisionContext.
Two values compare equal when their absolute difference is <= epsilon.

Instances are immutable and hashable so they can be shared by any number of
circles and arcs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from sphere_paths.common.constants import DEFAULT_EPSILON


@dataclass(frozen=True)
class PrecisionContext:
    """
    Tolerance-aware comparison of real numbers.

    Attributes:
        epsilon: Maximum absolute difference for two values to be equal (>= 0)
    """
    epsilon: float = DEFAULT_EPSILON

    def __post_init__(self) -> None:
        eps = float(self.epsilon)
        if not math.isfinite(eps) or eps < 0.0:
            raise ValueError(f"epsilon must be finite and >= 0, got {self.epsilon}")
        object.__setattr__(self, "epsilon", eps)

    def compare(self, a: float, b: float) -> int:
        """Return 0 if a == b within epsilon, -1 if a < b, +1 if a > b."""
        if abs(a - b) <= self.epsilon:
            return 0
        return -1 if a < b else 1

    def eq(self, a: float, b: float) -> bool:
        return self.compare(a, b) == 0

    def eq_zero(self, a: float) -> bool:
        return self.compare(a, 0.0) == 0

    def lt(self, a: float, b: float) -> bool:
        return self.compare(a, b) < 0

    def lte(self, a: float, b: float) -> bool:
        return self.compare(a, b) <= 0

    def gt(self, a: float, b: float) -> bool:
        return self.compare(a, b) > 0

    def gte(self, a: float, b: float) -> bool:
        return self.compare(a, b) >= 0

    def sign(self, a: float) -> int:
        """Sign of a, with values within epsilon of zero reported as 0."""
        return self.compare(a, 0.0)

    def tighter(self, other: "PrecisionContext") -> "PrecisionContext":
        """Return whichever of self and other has the smaller epsilon (self on ties)."""
        return other if other.epsilon < self.epsilon else self
