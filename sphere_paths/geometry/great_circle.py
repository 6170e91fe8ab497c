"""
Oriented great circles on the unit sphere.

A GreatCircle is the intersection of the sphere with a plane through its
center. It is stored as an orthonormal frame (u, v, pole) with u x v = pole:
u is the origin of the circle's azimuth parameter and the azimuth increases
counter-clockwise when looking down the pole. Points on the pole's side of the
plane are on the circle's MINUS side.

Reversing a circle negates pole and v and keeps u, so the same point set is
traversed in the opposite direction.
"""

from __future__ import annotations

import math
from typing import Optional, Union

import numpy as np

from sphere_paths.common.constants import HALF_PI
from sphere_paths.common.errors import DegenerateGeometryError
from sphere_paths.common.partition import HyperplaneLocation
from sphere_paths.common.precision import PrecisionContext
from sphere_paths.geometry import vectors
from sphere_paths.geometry.point2s import Point2S, normalize_azimuth

PointLike = Union[Point2S, np.ndarray]


def _vec(point: PointLike) -> np.ndarray:
    if isinstance(point, Point2S):
        return point.vector
    return vectors.as_vector(point)


def _vec_eq(a: np.ndarray, b: np.ndarray, precision: PrecisionContext) -> bool:
    return all(precision.eq(float(x), float(y)) for x, y in zip(a, b))


class GreatCircle:
    """
    Oriented great circle.

    Attributes:
        pole: Unit normal of the circle's plane (also available as w)
        u: Unit vector at azimuth 0
        v: Unit vector at azimuth pi/2
        precision: Precision context for every decision made with this circle
    """

    __slots__ = ("_pole", "_u", "_v", "_precision")

    def __init__(self, pole: np.ndarray, u: np.ndarray, v: np.ndarray, precision: PrecisionContext):
        for name, arr in (("pole", pole), ("u", u), ("v", v)):
            arr = np.array(arr, dtype=float)
            arr.setflags(write=False)
            setattr(self, "_" + name, arr)
        self._precision = precision

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def from_pole(cls, pole, precision: PrecisionContext) -> "GreatCircle":
        """
        Create a circle from its pole; u is an arbitrary vector on the circle.

        Raises:
            DegenerateGeometryError: If the pole is zero
        """
        w = vectors.normalize(pole)
        u = vectors.orthogonal(w)
        v = np.cross(w, u)
        return cls(w, u, v, precision)

    @classmethod
    def from_pole_and_u(cls, pole, u, precision: PrecisionContext) -> "GreatCircle":
        """
        Create a circle from its pole and azimuth origin.

        u is projected onto the circle's plane before use.

        Raises:
            DegenerateGeometryError: If the pole is zero or u is parallel to it
        """
        w = vectors.normalize(pole)
        u_unit = vectors.normalize(vectors.reject(vectors.as_vector(u), w))
        v = np.cross(w, u_unit)
        return cls(w, u_unit, v, precision)

    @classmethod
    def from_points(cls, a: Point2S, b: Point2S, precision: PrecisionContext) -> "GreatCircle":
        """
        Create the circle through a and b, oriented from a toward b along the
        shorter path. a becomes the azimuth origin.

        Raises:
            DegenerateGeometryError: If the points are equal or antipodal under
                the precision
        """
        if a.eq(b, precision) or a.is_antipodal_to(b, precision):
            raise DegenerateGeometryError(
                f"Cannot create great circle from points {a} and {b}: points are equal or antipodal"
            )
        u = a.vector
        w = vectors.normalize(np.cross(u, b.vector))
        v = np.cross(w, u)
        return cls(w, u, v, precision)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def pole(self) -> np.ndarray:
        return self._pole

    @property
    def w(self) -> np.ndarray:
        return self._pole

    @property
    def u(self) -> np.ndarray:
        return self._u

    @property
    def v(self) -> np.ndarray:
        return self._v

    @property
    def precision(self) -> PrecisionContext:
        return self._precision

    @property
    def pole_point(self) -> Point2S:
        return Point2S.from_vector(self._pole)

    # -------------------------------------------------------------------------
    # Parameter space
    # -------------------------------------------------------------------------

    def offset(self, point: PointLike) -> float:
        """Signed angular distance from the circle; negative on the pole side."""
        return vectors.angle_between(self._pole, _vec(point)) - HALF_PI

    def azimuth(self, point: PointLike) -> float:
        """
        Azimuth of the point's projection onto the circle, in [0, 2pi).

        Points parallel to the pole have no defined azimuth; 0 is returned.
        """
        p = _vec(point)
        return normalize_azimuth(math.atan2(float(np.dot(self._v, p)), float(np.dot(self._u, p))))

    def vector_at(self, azimuth: float) -> np.ndarray:
        return math.cos(azimuth) * self._u + math.sin(azimuth) * self._v

    def to_subspace(self, point: PointLike) -> float:
        return self.azimuth(point)

    def to_space(self, azimuth: float) -> Point2S:
        return Point2S.from_vector(self.vector_at(azimuth))

    def project(self, point: PointLike) -> Optional[Point2S]:
        """Closest point on the circle, or None for the circle's poles."""
        p = _vec(point)
        if self._precision.eq_zero(vectors.norm(vectors.reject(p, self._pole))):
            return None
        return self.to_space(self.azimuth(p))

    def classify(self, point: PointLike) -> HyperplaneLocation:
        sign = self._precision.sign(self.offset(point))
        if sign < 0:
            return HyperplaneLocation.MINUS
        if sign > 0:
            return HyperplaneLocation.PLUS
        return HyperplaneLocation.ON

    def contains(self, point: PointLike) -> bool:
        return self.classify(point) == HyperplaneLocation.ON

    # -------------------------------------------------------------------------
    # Relations to other circles
    # -------------------------------------------------------------------------

    def intersection(self, other: "GreatCircle") -> Optional[Point2S]:
        """
        One of the two intersection points with other, located at
        pole x other.pole. The second one is its antipode. Returns None when
        the circles coincide or are antiparallel.
        """
        cross = np.cross(self._pole, other._pole)
        if _vec_eq(cross, np.zeros(3), self._precision):
            return None
        return Point2S.from_vector(cross)

    def angle(self, other: "GreatCircle", point: Optional[PointLike] = None) -> float:
        """
        Angle between this circle and other.

        Without a point this is the angle between the poles, in [0, pi]. With a
        point it is measured at the intersection closest to that point and is
        negative when the point is not strictly on the side of pole x other.pole.

        Args:
            other: Circle to measure against
            point: Optional point selecting the intersection

        Returns:
            Angle in radians
        """
        theta = vectors.angle_between(self._pole, other._pole)
        if point is None:
            return theta
        cross = np.cross(self._pole, other._pole)
        return theta if self._precision.gt(float(np.dot(_vec(point), cross)), 0.0) else -theta

    def similar_orientation(self, other: "GreatCircle") -> bool:
        return float(np.dot(self._pole, other._pole)) > 0.0

    def eq(self, other: "GreatCircle") -> bool:
        """True if both circles share precision and the same frame within it."""
        if self is other:
            return True
        precision = self._precision
        return (
            precision == other._precision
            and _vec_eq(self._pole, other._pole, precision)
            and _vec_eq(self._u, other._u, precision)
            and _vec_eq(self._v, other._v, precision)
        )

    # -------------------------------------------------------------------------
    # Derived objects
    # -------------------------------------------------------------------------

    def reverse(self) -> "GreatCircle":
        return GreatCircle(-self._pole, self._u, -self._v, self._precision)

    def transform(self, transform) -> "GreatCircle":
        """Image of the circle under an orthogonal Transform2S."""
        return GreatCircle.from_points(
            transform.apply(self.to_space(0.0)),
            transform.apply(self.to_space(HALF_PI)),
            self._precision,
        )

    def span(self):
        """Full arc covering the whole circle."""
        from sphere_paths.geometry.great_arc import GreatArc
        from sphere_paths.geometry.angular_interval import AngularInterval

        return GreatArc(self, AngularInterval.full())

    def arc(self, start: Union[float, Point2S], end: Union[float, Point2S]):
        """
        Arc running counter-clockwise from start to end.

        start and end are azimuths or points (projected onto the circle).
        Equal bounds yield the full arc.

        Raises:
            InvalidIntervalError: If the arc is longer than pi
        """
        from sphere_paths.geometry.great_arc import GreatArc
        from sphere_paths.geometry.angular_interval import AngularInterval

        if isinstance(start, Point2S):
            start = self.azimuth(start)
        if isinstance(end, Point2S):
            end = self.azimuth(end)
        return GreatArc(self, AngularInterval.of(start, end, self._precision))

    def __repr__(self) -> str:
        return (
            f"GreatCircle(pole={self._pole.tolist()}, u={self._u.tolist()}, "
            f"v={self._v.tolist()})"
        )
