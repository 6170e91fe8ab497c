"""
Convex arcs of great circles.

A GreatArc pairs a GreatCircle with a convex (or full) AngularInterval in the
circle's azimuth parameter space. Bounded arcs have start and end points; the
full arc covers the whole circle and has neither.
"""

from __future__ import annotations

from typing import List, Optional

from sphere_paths.common.constants import TWO_PI
from sphere_paths.common.errors import InvalidIntervalError
from sphere_paths.common.partition import RegionLocation, Split
from sphere_paths.common.precision import PrecisionContext
from sphere_paths.geometry.angular_interval import AngularInterval, CutAngle
from sphere_paths.geometry.great_circle import GreatCircle, PointLike
from sphere_paths.geometry.point2s import Point2S


class GreatArc:
    """
    Convex arc of a great circle.

    Attributes:
        circle: Supporting great circle
        interval: Convex or full interval in the circle's azimuth space
    """

    __slots__ = ("_circle", "_interval", "_start", "_end")

    def __init__(self, circle: GreatCircle, interval: AngularInterval):
        if interval.is_empty():
            raise InvalidIntervalError("Great arcs cannot be empty")
        self._circle = circle
        self._interval = interval
        if interval.is_full():
            self._start = None
            self._end = None
        else:
            self._start = circle.to_space(interval.min)
            self._end = circle.to_space(interval.max)

    @classmethod
    def from_points(cls, start: Point2S, end: Point2S, precision: PrecisionContext) -> "GreatArc":
        """
        Shortest arc from start to end.

        Raises:
            DegenerateGeometryError: If the points are equal or antipodal
        """
        circle = GreatCircle.from_points(start, end, precision)
        return circle.arc(start, end)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def circle(self) -> GreatCircle:
        return self._circle

    @property
    def interval(self) -> AngularInterval:
        return self._interval

    @property
    def precision(self) -> PrecisionContext:
        return self._circle.precision

    @property
    def start_point(self) -> Optional[Point2S]:
        return self._start

    @property
    def end_point(self) -> Optional[Point2S]:
        return self._end

    @property
    def midpoint(self) -> Optional[Point2S]:
        mid = self._interval.midpoint
        return None if mid is None else self._circle.to_space(mid)

    @property
    def centroid(self) -> Optional[Point2S]:
        return self.midpoint

    @property
    def size(self) -> float:
        return TWO_PI if self._interval.is_full() else self._interval.size

    def is_full(self) -> bool:
        return self._interval.is_full()

    def is_empty(self) -> bool:
        return False

    def is_finite(self) -> bool:
        return True

    def is_infinite(self) -> bool:
        return False

    # -------------------------------------------------------------------------
    # Point queries
    # -------------------------------------------------------------------------

    def classify(self, point: PointLike) -> RegionLocation:
        """
        Classify a point against the arc.

        Points off the supporting circle (offset not zero under the arc's
        precision) are OUTSIDE; the remaining points are classified by azimuth
        against the interval.
        """
        circle = self._circle
        if not circle.precision.eq_zero(circle.offset(point)):
            return RegionLocation.OUTSIDE
        return self._interval.classify(circle.azimuth(point))

    def contains(self, point: PointLike) -> bool:
        return self.classify(point) != RegionLocation.OUTSIDE

    def closest(self, point: PointLike) -> Optional[Point2S]:
        """
        Closest point of the arc to the given point.

        Returns None only for a full arc queried at one of its poles.
        """
        circle = self._circle
        if self.is_full():
            return circle.project(point)

        az = circle.azimuth(point)
        if self._interval.classify(az) != RegionLocation.OUTSIDE:
            projected = circle.project(point)
            if projected is not None:
                return projected

        target = point if isinstance(point, Point2S) else Point2S.from_vector(point)
        if self._start.distance(target) <= self._end.distance(target):
            return self._start
        return self._end

    # -------------------------------------------------------------------------
    # Derived arcs
    # -------------------------------------------------------------------------

    def reverse(self) -> "GreatArc":
        """Same point set traversed end to start."""
        return GreatArc(self._circle.reverse(), self._interval.negate())

    def transform(self, transform) -> "GreatArc":
        return GreatArc(self._circle.transform(transform), self._interval)

    def split(self, splitter: GreatCircle) -> Split["GreatArc"]:
        """
        Split the arc with a great circle.

        Returns:
            Split with location BOTH (both parts new arcs), MINUS or PLUS (this
            arc on that side of splitter), or NEITHER when splitter coincides
            with the supporting circle in either orientation.
        """
        circle = self._circle
        crossing = splitter.intersection(circle)
        if crossing is None:
            return Split()

        # moving counter-clockwise through the crossing enters splitter's MINUS side
        cut = CutAngle.negative_facing_at(circle.to_subspace(crossing), splitter.precision)
        sub = self._interval.split_diameter(cut, full_precision=circle.precision)

        minus = sub.minus
        plus = sub.plus
        if minus is not None and plus is not None:
            return Split(minus=GreatArc(circle, minus), plus=GreatArc(circle, plus))
        if minus is not None:
            return Split(minus=self)
        if plus is not None:
            return Split(plus=self)
        return Split()

    def to_convex(self) -> List["GreatArc"]:
        return [self]

    def __repr__(self) -> str:
        if self.is_full():
            return f"GreatArc(full, circle={self._circle!r})"
        return f"GreatArc(start={self._start!r}, end={self._end!r})"


def arc_from_points(start: Point2S, end: Point2S, precision: PrecisionContext) -> GreatArc:
    """Shortest great arc between two points."""
    return GreatArc.from_points(start, end, precision)
