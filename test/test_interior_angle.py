"""
Tests for the interior-angle selection policies.

The two-triangle fixture shares the vertex K between triangle a
(K -> I -> J -> K) and triangle b (K -> -I -> -J -> K). At K, arriving on b3,
the connector can continue on a1 or b1; maximizing the interior angle merges
the triangles into one loop, minimizing keeps them apart.
"""

import math

import pytest

from sphere_paths.common.precision import PrecisionContext
from sphere_paths.geometry.great_arc import GreatArc
from sphere_paths.geometry.point2s import Point2S
from sphere_paths.operators.arc_connector import ArcConnector, ConnectableArc
from sphere_paths.operators.interior_angle import (
    ConnectionPolicy,
    InteriorAngleArcConnector,
    connect_maximized,
    connect_minimized,
    connector_for_policy,
    interior_angle,
    maximize_interior_angle,
    minimize_interior_angle,
)

from conftest import assert_vertices

PI = math.pi
I, J, K = Point2S.PLUS_I, Point2S.PLUS_J, Point2S.PLUS_K
MI, MJ = Point2S.MINUS_I, Point2S.MINUS_J


def _ordered(two_triangles):
    t = two_triangles
    return [t["b3"], t["b1"], t["a1"], t["a3"], t["b2"], t["a2"]]


class TestInteriorAngle:
    """Angle values at a junction."""

    def test_values_at_shared_vertex(self, two_triangles):
        t = two_triangles
        incoming = ConnectableArc(0, t["b3"])
        assert interior_angle(incoming, ConnectableArc(1, t["a1"])) == pytest.approx(1.5 * PI)
        assert interior_angle(incoming, ConnectableArc(2, t["b1"])) == pytest.approx(0.5 * PI)

    def test_straight_continuation(self, precision):
        """Continuing along the same circle gives an interior angle of pi."""
        a = GreatArc.from_points(I, Point2S.of(0.25 * PI, 0.5 * PI), precision)
        b = GreatArc.from_points(Point2S.of(0.25 * PI, 0.5 * PI), J, precision)
        assert interior_angle(ConnectableArc(0, a), ConnectableArc(1, b)) == pytest.approx(PI)

    def test_maximize_and_minimize_select(self, two_triangles):
        t = two_triangles
        incoming = ConnectableArc(0, t["b3"])
        cands = [ConnectableArc(1, t["b1"]), ConnectableArc(2, t["a1"])]
        assert maximize_interior_angle(incoming, cands) is cands[1]
        assert minimize_interior_angle(incoming, cands) is cands[0]

    def test_ties_go_to_earliest(self, precision):
        """Candidates with equal angles resolve to the first one listed."""
        incoming = ConnectableArc(0, GreatArc.from_points(I, J, precision))
        first = ConnectableArc(1, GreatArc.from_points(J, K, precision))
        second = ConnectableArc(2, GreatArc.from_points(J, Point2S.of(0.5 * PI, 0.25 * PI), precision))
        cands = [first, second]
        assert interior_angle(incoming, first) == pytest.approx(interior_angle(incoming, second))
        assert maximize_interior_angle(incoming, cands) is first
        assert minimize_interior_angle(incoming, cands) is first
        assert maximize_interior_angle(incoming, cands[::-1]) is second

    def test_ties_use_incoming_precision(self):
        """Angles within the incoming arc's epsilon count as equal."""
        loose = PrecisionContext(1e-2)
        incoming = ConnectableArc(0, GreatArc.from_points(I, J, loose))
        a = ConnectableArc(1, GreatArc.from_points(J, K, loose))
        b = ConnectableArc(2, GreatArc.from_points(J, Point2S.of(0.5 * PI + 1e-3, 0.1), loose))
        assert maximize_interior_angle(incoming, [a, b]) is a
        assert minimize_interior_angle(incoming, [a, b]) is a


class TestInteriorAngleConnector:
    """Two triangles touching at K."""

    def test_maximize_merges_loops(self, two_triangles):
        t = two_triangles
        paths = InteriorAngleArcConnector.maximize().connect_all(_ordered(two_triangles))
        assert len(paths) == 1
        path = paths[0]
        assert path.is_closed()
        assert path.arcs == (t["b3"], t["a1"], t["a2"], t["a3"], t["b1"], t["b2"])
        assert_vertices(path, MJ, K, I, J, K, MI, MJ)

    def test_minimize_splits_loops(self, two_triangles):
        t = two_triangles
        paths = InteriorAngleArcConnector.minimize().connect_all(_ordered(two_triangles))
        assert len(paths) == 2
        assert paths[0].arcs == (t["b3"], t["b1"], t["b2"])
        assert paths[1].arcs == (t["a1"], t["a2"], t["a3"])
        assert_vertices(paths[0], MJ, K, MI, MJ)
        assert_vertices(paths[1], K, I, J, K)
        assert all(p.is_closed() for p in paths)

    def test_every_arc_exported(self, two_triangles):
        for fn in (connect_maximized, connect_minimized):
            paths = fn(_ordered(two_triangles))
            exported = [arc for p in paths for arc in p]
            assert sorted(map(id, exported)) == sorted(map(id, two_triangles.values()))

    def test_factories(self):
        assert InteriorAngleArcConnector.maximize().is_maximizing
        assert not InteriorAngleArcConnector.minimize().is_maximizing
        assert isinstance(InteriorAngleArcConnector(), ArcConnector)

    def test_single_triangle_unaffected(self, axis_triangle):
        for fn in (connect_maximized, connect_minimized):
            paths = fn(axis_triangle)
            assert len(paths) == 1
            assert paths[0].is_closed()


class TestConnectionPolicy:
    """Named policies."""

    def test_connector_for_policy(self):
        assert isinstance(connector_for_policy("maximize"), InteriorAngleArcConnector)
        assert connector_for_policy(ConnectionPolicy.MAXIMIZE).is_maximizing
        assert not connector_for_policy("minimize").is_maximizing
        first = connector_for_policy("first")
        assert type(first) is ArcConnector
        assert type(connector_for_policy(None)) is ArcConnector

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            connector_for_policy("largest")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
