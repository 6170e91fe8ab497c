"""
Points on the unit 2-sphere.

A Point2S stores its spherical coordinates (azimuth, polar) together with the
equivalent unit vector so that neither has to be recomputed by the geometry
code. Exact equality (==) compares coordinates bit for bit and exists only for
hashing; geometric equality always goes through eq(other, precision).
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from sphere_paths.common.constants import PI, TWO_PI
from sphere_paths.common.precision import PrecisionContext
from sphere_paths.geometry import vectors


def normalize_azimuth(azimuth: float) -> float:
    """Map an azimuth into [0, 2pi)."""
    if not math.isfinite(azimuth):
        return azimuth
    az = math.fmod(azimuth, TWO_PI)
    if az < 0.0:
        az += TWO_PI
    # fmod of a tiny negative value plus 2pi can round up to 2pi
    return 0.0 if az >= TWO_PI else az


def normalize_polar(polar: float) -> float:
    """Map a polar angle into [0, pi]."""
    if not math.isfinite(polar):
        return polar
    p = math.remainder(polar, TWO_PI)
    return abs(p)


class Point2S:
    """
    Point on the unit sphere.

    Attributes:
        azimuth: Angle in the x-y plane from +x, in [0, 2pi)
        polar: Angle from +z, in [0, pi]
        vector: Unit vector (read-only (3,) array)
    """

    __slots__ = ("_azimuth", "_polar", "_vector")

    def __init__(self, azimuth: float, polar: float, vector: Optional[np.ndarray] = None):
        self._azimuth = normalize_azimuth(float(azimuth))
        self._polar = normalize_polar(float(polar))
        if vector is None:
            sin_polar = math.sin(self._polar)
            vector = np.array([
                math.cos(self._azimuth) * sin_polar,
                math.sin(self._azimuth) * sin_polar,
                math.cos(self._polar),
            ], dtype=float)
        vector = np.array(vector, dtype=float)
        vector.setflags(write=False)
        self._vector = vector

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, azimuth: float, polar: float) -> "Point2S":
        """Create a point from its azimuth and polar angles (radians)."""
        if not (math.isfinite(azimuth) and math.isfinite(polar)):
            raise ValueError(f"Invalid spherical coordinates: ({azimuth}, {polar})")
        return cls(azimuth, polar)

    @classmethod
    def from_vector(cls, vector) -> "Point2S":
        """
        Create a point from a (not necessarily unit) 3-vector.

        Raises:
            DegenerateGeometryError: If the vector is zero or not finite
        """
        unit = vectors.normalize(vector)
        azimuth = math.atan2(unit[1], unit[0])
        polar = math.atan2(math.hypot(unit[0], unit[1]), unit[2])
        return cls(azimuth, polar, unit)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def azimuth(self) -> float:
        return self._azimuth

    @property
    def polar(self) -> float:
        return self._polar

    @property
    def vector(self) -> np.ndarray:
        return self._vector

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def antipodal(self) -> "Point2S":
        """Return the point on the opposite side of the sphere."""
        return Point2S(self._azimuth + PI, PI - self._polar, -self._vector)

    def distance(self, other: "Point2S") -> float:
        """Great-circle distance to other, in [0, pi]."""
        return vectors.angle_between(self._vector, other._vector)

    def eq(self, other: "Point2S", precision: PrecisionContext) -> bool:
        """Return True if the points are equal within the given precision."""
        return precision.eq_zero(self.distance(other))

    def is_antipodal_to(self, other: "Point2S", precision: PrecisionContext) -> bool:
        return precision.eq(self.distance(other), PI)

    # -------------------------------------------------------------------------
    # Dunder
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point2S):
            return NotImplemented
        return self._azimuth == other._azimuth and self._polar == other._polar

    def __hash__(self) -> int:
        return hash((self._azimuth, self._polar))

    def __repr__(self) -> str:
        return f"Point2S(azimuth={self._azimuth!r}, polar={self._polar!r})"


Point2S.PLUS_I = Point2S(0.0, 0.5 * PI, vectors.PLUS_X)
Point2S.PLUS_J = Point2S(0.5 * PI, 0.5 * PI, vectors.PLUS_Y)
Point2S.PLUS_K = Point2S(0.0, 0.0, vectors.PLUS_Z)
Point2S.MINUS_I = Point2S(PI, 0.5 * PI, -vectors.PLUS_X)
Point2S.MINUS_J = Point2S(1.5 * PI, 0.5 * PI, -vectors.PLUS_Y)
Point2S.MINUS_K = Point2S(0.0, PI, -vectors.PLUS_Z)
