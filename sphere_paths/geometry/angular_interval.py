"""
One-dimensional regions on a circle's angular parameter space.

An AngularInterval is full, empty, or a convex range [min, max] measured
counter-clockwise, with size <= pi. The min bound is normalized into [0, 2pi)
and max is stored unwrapped in (min, min + 2pi), so max may exceed 2pi when the
interval wraps through zero.

A CutAngle is the 1-D hyperplane: a single azimuth with a facing direction.
Splitting a convex interval by a *diameter* (a cut angle and its antipode) is
the primitive the great-arc split is built on.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from sphere_paths.common.constants import PI, TWO_PI
from sphere_paths.common.errors import InvalidIntervalError
from sphere_paths.common.partition import HyperplaneLocation, RegionLocation, Split
from sphere_paths.common.precision import PrecisionContext
from sphere_paths.geometry.point2s import normalize_azimuth


def _ccw_offset(azimuth: float, origin: float) -> float:
    """Counter-clockwise angle from origin to azimuth, in [0, 2pi)."""
    return normalize_azimuth(azimuth - origin)


def circle_distance(a: float, b: float) -> float:
    """Shortest angular distance between two azimuths, in [0, pi]."""
    d = _ccw_offset(a, b)
    return min(d, TWO_PI - d)


# =============================================================================
# CutAngle
# =============================================================================


@dataclass(frozen=True)
class CutAngle:
    """
    Oriented point on the circle.

    Points with a larger normalized azimuth than the cut are on the PLUS side
    of a positive-facing cut and on the MINUS side of a negative-facing one.
    """
    azimuth: float
    positive_facing: bool
    precision: PrecisionContext

    def __post_init__(self) -> None:
        if not math.isfinite(self.azimuth):
            raise InvalidIntervalError(f"Invalid cut angle azimuth: {self.azimuth}")
        object.__setattr__(self, "azimuth", normalize_azimuth(float(self.azimuth)))

    def offset(self, azimuth: float) -> float:
        dist = normalize_azimuth(azimuth) - self.azimuth
        return dist if self.positive_facing else -dist

    def classify(self, azimuth: float) -> HyperplaneLocation:
        # values just below 2pi are treated as zero
        if self.precision.eq_zero(circle_distance(azimuth, 0.0)):
            azimuth = 0.0
        sign = self.precision.sign(self.offset(azimuth))
        if sign > 0:
            return HyperplaneLocation.PLUS
        if sign < 0:
            return HyperplaneLocation.MINUS
        return HyperplaneLocation.ON

    def reverse(self) -> "CutAngle":
        return CutAngle(self.azimuth, not self.positive_facing, self.precision)

    @classmethod
    def positive_facing_at(cls, azimuth: float, precision: PrecisionContext) -> "CutAngle":
        return cls(azimuth, True, precision)

    @classmethod
    def negative_facing_at(cls, azimuth: float, precision: PrecisionContext) -> "CutAngle":
        return cls(azimuth, False, precision)


# =============================================================================
# AngularInterval
# =============================================================================


class AngularInterval:
    """
    Full, empty or convex angular interval.

    Use the factories full(), empty() and of(); the constructor does not
    validate its input.
    """

    __slots__ = ("_min", "_max", "_precision", "_empty")

    def __init__(self, min_az: Optional[float], max_az: Optional[float],
                 precision: Optional[PrecisionContext], empty: bool = False):
        self._min = min_az
        self._max = max_az
        self._precision = precision
        self._empty = empty

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def full(cls) -> "AngularInterval":
        return _FULL

    @classmethod
    def empty(cls) -> "AngularInterval":
        return _EMPTY

    @classmethod
    def of(cls, min_az: float, max_az: float, precision: PrecisionContext) -> "AngularInterval":
        """
        Create the interval running counter-clockwise from min_az to max_az.

        Bounds equal under the precision yield the full interval.

        Raises:
            InvalidIntervalError: If a bound is not finite or the interval is
                larger than pi (not convex)
        """
        if not (math.isfinite(min_az) and math.isfinite(max_az)):
            raise InvalidIntervalError(f"Invalid angular interval: [{min_az}, {max_az}]")

        if precision.eq_zero(circle_distance(min_az, max_az)):
            return _FULL

        lo = normalize_azimuth(min_az)
        size = _ccw_offset(max_az, lo)
        if precision.gt(size, PI):
            raise InvalidIntervalError(
                f"Angular interval [{min_az}, {max_az}] is not convex: size {size} > pi"
            )
        return cls(lo, lo + size, precision)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def min(self) -> float:
        return 0.0 if self._min is None else self._min

    @property
    def max(self) -> float:
        if self._max is None:
            return 0.0 if self._empty else TWO_PI
        return self._max

    @property
    def precision(self) -> Optional[PrecisionContext]:
        return self._precision

    @property
    def size(self) -> float:
        return self.max - self.min

    @property
    def midpoint(self) -> Optional[float]:
        """Azimuth halfway between min and max, normalized; None if full or empty."""
        if self.is_full() or self.is_empty():
            return None
        return normalize_azimuth(0.5 * (self._min + self._max))

    def is_full(self) -> bool:
        return self._min is None and not self._empty

    def is_empty(self) -> bool:
        return self._empty

    def wraps_zero(self) -> bool:
        return self._max is not None and self._max > TWO_PI

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def classify(self, azimuth: float) -> RegionLocation:
        if self.is_full():
            return RegionLocation.INSIDE
        if self.is_empty():
            return RegionLocation.OUTSIDE

        precision = self._precision
        d = _ccw_offset(azimuth, self._min)
        if precision.eq_zero(d) or precision.eq(d, TWO_PI) or precision.eq(d, self.size):
            return RegionLocation.BOUNDARY
        if d < self.size:
            return RegionLocation.INSIDE
        return RegionLocation.OUTSIDE

    def contains(self, azimuth: float) -> bool:
        return self.classify(azimuth) != RegionLocation.OUTSIDE

    def negate(self) -> "AngularInterval":
        """Mirror the interval through azimuth zero: [min, max] -> [-max, -min]."""
        if self.is_full() or self.is_empty():
            return self
        lo = normalize_azimuth(-self._max)
        return AngularInterval(lo, lo + self.size, self._precision)

    def split_diameter(self, cut: CutAngle,
                       full_precision: Optional[PrecisionContext] = None) -> Split["AngularInterval"]:
        """
        Split by the diameter through cut.azimuth and its antipode.

        The half (a, a + pi) counter-clockwise from the cut azimuth a is the PLUS
        side for a positive-facing cut and the MINUS side otherwise. Parts that
        do not need splitting are returned as this same instance. Cut locations
        inside the interval are tested with the interval's precision. Halves of
        the full interval take full_precision, defaulting to the cut's.
        """
        a = cut.azimuth
        upper_is_plus = cut.positive_facing

        if self.is_empty():
            return Split()

        if self.is_full():
            halves_precision = full_precision or cut.precision
            anti = normalize_azimuth(a + PI)
            upper = AngularInterval(a, a + PI, halves_precision)
            lower = AngularInterval(anti, anti + PI, halves_precision)
            return _assign(upper, lower, upper_is_plus)

        precision = self._precision
        size = self.size

        def strictly_inside(d: float) -> bool:
            return precision.gt(d, 0.0) and precision.lt(d, size)

        d_cut = _ccw_offset(a, self._min)
        d_anti = _ccw_offset(a + PI, self._min)

        if strictly_inside(d_cut):
            # crosses a going counter-clockwise: lower half first
            lower = AngularInterval(self._min, self._min + d_cut, precision)
            upper = AngularInterval(normalize_azimuth(a), normalize_azimuth(a) + (size - d_cut), precision)
            return _assign(upper, lower, upper_is_plus)

        if strictly_inside(d_anti):
            upper = AngularInterval(self._min, self._min + d_anti, precision)
            anti = normalize_azimuth(a + PI)
            lower = AngularInterval(anti, anti + (size - d_anti), precision)
            return _assign(upper, lower, upper_is_plus)

        # not cut; the midpoint decides the side
        in_upper = _ccw_offset(self.midpoint, a) < PI
        if in_upper == upper_is_plus:
            return Split(minus=None, plus=self)
        return Split(minus=self, plus=None)

    def __repr__(self) -> str:
        if self.is_empty():
            return "AngularInterval[empty]"
        if self.is_full():
            return "AngularInterval[full]"
        return f"AngularInterval[min={self._min!r}, max={self._max!r}]"


def _assign(upper: AngularInterval, lower: AngularInterval, upper_is_plus: bool) -> Split[AngularInterval]:
    if upper_is_plus:
        return Split(minus=lower, plus=upper)
    return Split(minus=upper, plus=lower)


_FULL = AngularInterval(None, None, None)
_EMPTY = AngularInterval(None, None, None, empty=True)
