import os
import sys
from typing import Dict, List

import numpy as np
import pytest

# Ensure local package import works for pytest collection.
_TEST_DIR = os.path.dirname(__file__)
_PKG_ROOT = os.path.abspath(os.path.join(_TEST_DIR, ".."))
if _PKG_ROOT not in sys.path:
    sys.path.insert(0, _PKG_ROOT)

from sphere_paths.common.precision import PrecisionContext  # noqa: E402
from sphere_paths.geometry.great_arc import GreatArc  # noqa: E402
from sphere_paths.geometry.point2s import Point2S  # noqa: E402

TEST_EPS = 1e-10


# =============================================================================
# Assertion helpers
# =============================================================================


def assert_point_eq(actual: Point2S, expected: Point2S, tol: float = 1e-9) -> None:
    """Assert two points coincide (by angular distance)."""
    assert actual is not None, f"expected {expected}, got None"
    assert actual.distance(expected) < tol, f"{actual} != {expected}"


def assert_vertices(path, *expected: Point2S, tol: float = 1e-9) -> None:
    """Assert a path's vertex sequence matches the expected points."""
    vertices = path.vertices
    assert len(vertices) == len(expected), f"vertices {vertices} != {list(expected)}"
    for actual, exp in zip(vertices, expected):
        assert_point_eq(actual, exp, tol)


# =============================================================================
# Precision Fixtures
# =============================================================================


@pytest.fixture
def precision() -> PrecisionContext:
    """Default fine precision used throughout the tests."""
    return PrecisionContext(TEST_EPS)


@pytest.fixture
def coarse_precision() -> PrecisionContext:
    """Loose precision (0.1 rad) for tolerance-mixing scenarios."""
    return PrecisionContext(1e-1)


# =============================================================================
# Arc Fixtures
# =============================================================================


@pytest.fixture
def axis_triangle(precision) -> List[GreatArc]:
    """Octant triangle I -> J -> K -> I, in path order."""
    return [
        GreatArc.from_points(Point2S.PLUS_I, Point2S.PLUS_J, precision),
        GreatArc.from_points(Point2S.PLUS_J, Point2S.PLUS_K, precision),
        GreatArc.from_points(Point2S.PLUS_K, Point2S.PLUS_I, precision),
    ]


@pytest.fixture
def two_triangles(precision) -> Dict[str, GreatArc]:
    """
    Two octant triangles touching at the north pole K.

    a: K -> I -> J -> K
    b: K -> -I -> -J -> K
    """
    p = precision
    return {
        "a1": GreatArc.from_points(Point2S.PLUS_K, Point2S.PLUS_I, p),
        "a2": GreatArc.from_points(Point2S.PLUS_I, Point2S.PLUS_J, p),
        "a3": GreatArc.from_points(Point2S.PLUS_J, Point2S.PLUS_K, p),
        "b1": GreatArc.from_points(Point2S.PLUS_K, Point2S.MINUS_I, p),
        "b2": GreatArc.from_points(Point2S.MINUS_I, Point2S.MINUS_J, p),
        "b3": GreatArc.from_points(Point2S.MINUS_J, Point2S.PLUS_K, p),
    }


# =============================================================================
# Test Utility Fixtures
# =============================================================================


@pytest.fixture
def numpy_seed():
    """Set numpy random seed for reproducible tests."""
    np.random.seed(42)
    yield


@pytest.fixture
def config_file(tmp_path):
    """Write a small connector config and return its path."""
    path = tmp_path / "sphere_paths.yaml"
    path.write_text(
        "policy: maximize\n"
        "precision:\n"
        "  epsilon: 1.0e-6\n"
    )
    return str(path)


@pytest.fixture
def repo_config_path() -> str:
    """Path of the shipped default config."""
    return os.path.join(_PKG_ROOT, "config", "sphere_paths.yaml")
