"""
Small NumPy helpers for 3-vectors.

All functions accept anything np.asarray can turn into a (3,) float array and
return fresh float64 arrays. Nothing here applies a precision context; these
are raw computations used by the geometry classes.
"""

import math

import numpy as np

from sphere_paths.common.constants import VECTOR_NORM_EPSILON
from sphere_paths.common.errors import DegenerateGeometryError

PLUS_X = np.array([1.0, 0.0, 0.0])
PLUS_Y = np.array([0.0, 1.0, 0.0])
PLUS_Z = np.array([0.0, 0.0, 1.0])


def as_vector(v) -> np.ndarray:
    """Coerce to a (3,) float64 array."""
    v = np.asarray(v, dtype=float).reshape(-1)
    if v.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {v.shape}")
    return v


def norm(v: np.ndarray) -> float:
    return float(np.linalg.norm(v))


def normalize(v) -> np.ndarray:
    """
    Return v / |v|.

    Raises:
        DegenerateGeometryError: If v is zero or not finite
    """
    v = as_vector(v)
    n = norm(v)
    if not math.isfinite(n) or n < VECTOR_NORM_EPSILON:
        raise DegenerateGeometryError(f"Cannot normalize vector {v.tolist()}")
    return v / n


def angle_between(a: np.ndarray, b: np.ndarray) -> float:
    """
    Angle between two vectors in [0, pi].

    Uses atan2(|a x b|, a . b), which stays accurate for nearly parallel and
    nearly antiparallel inputs where acos loses precision.
    """
    cross = np.cross(a, b)
    return math.atan2(norm(cross), float(np.dot(a, b)))


def orthogonal(v: np.ndarray) -> np.ndarray:
    """
    Return a unit vector orthogonal to v.

    The component of v with the smallest magnitude is zeroed and the other two
    are swapped (one negated), which keeps the result well conditioned.
    """
    v = normalize(v)
    ax = np.abs(v)
    if ax[0] <= ax[1] and ax[0] <= ax[2]:
        w = np.array([0.0, v[2], -v[1]])
    elif ax[1] <= ax[2]:
        w = np.array([-v[2], 0.0, v[0]])
    else:
        w = np.array([v[1], -v[0], 0.0])
    return normalize(w)


def reject(v: np.ndarray, axis: np.ndarray) -> np.ndarray:
    """Component of v orthogonal to the unit vector axis."""
    return v - float(np.dot(v, axis)) * axis
