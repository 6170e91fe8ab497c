"""
Orthogonal transforms of the unit sphere.

A Transform2S wraps a 3x3 orthogonal matrix (rotation or reflection) and maps
points, vectors, great circles and arcs onto their images. Rotations are built
from a rotation vector (axis-angle) with Rodrigues' formula or from a unit
quaternion (x, y, z, w).

Numerical Policy:
    ROTATION_EPSILON = 1e-10: below this rotation angle the first-order Taylor
    form I + [w]_x is used instead of Rodrigues' formula.
    ORTHOGONALITY_TOLERANCE = 1e-9: max |M^T M - I| accepted by from_matrix.

    These are numerical stability choices. They affect only the computational
    path, not the mathematical result.
"""

from __future__ import annotations

import math

import numpy as np

from sphere_paths.common.errors import DegenerateGeometryError
from sphere_paths.geometry import vectors


# =============================================================================
# Numerical Constants (stability, not policy)
# =============================================================================

ROTATION_EPSILON: float = 1e-10

ORTHOGONALITY_TOLERANCE: float = 1e-9


# =============================================================================
# Matrix builders
# =============================================================================


def skew(v: np.ndarray) -> np.ndarray:
    """Skew-symmetric matrix from 3-vector (hat operator)."""
    v = np.asarray(v, dtype=float).reshape(-1)
    return np.array([
        [0.0, -v[2], v[1]],
        [v[2], 0.0, -v[0]],
        [-v[1], v[0], 0.0]
    ], dtype=float)


def rotvec_to_rotmat(rotvec: np.ndarray) -> np.ndarray:
    """
    Convert rotation vector (axis-angle) to rotation matrix.
    Uses Rodrigues' formula: R = I + sin(t)[k]_x + (1 - cos(t))[k]_x^2

    For t < ROTATION_EPSILON the first-order form I + [rotvec]_x is returned;
    the error is O(t^2).
    """
    rotvec = np.asarray(rotvec, dtype=float).reshape(-1)
    theta = float(np.linalg.norm(rotvec))

    if theta < ROTATION_EPSILON:
        return np.eye(3, dtype=float) + skew(rotvec)

    K = skew(rotvec / theta)
    return np.eye(3, dtype=float) + math.sin(theta) * K + (1.0 - math.cos(theta)) * (K @ K)


def quat_to_rotmat(qx: float, qy: float, qz: float, qw: float) -> np.ndarray:
    """
    Convert quaternion (x, y, z, w) to rotation matrix.

    Raises:
        DegenerateGeometryError: If the quaternion has zero norm
    """
    n = math.sqrt(qx*qx + qy*qy + qz*qz + qw*qw)
    if n < 1e-12:
        raise DegenerateGeometryError(f"Zero-norm quaternion ({qx}, {qy}, {qz}, {qw})")
    qx, qy, qz, qw = qx/n, qy/n, qz/n, qw/n

    xx, yy, zz = qx*qx, qy*qy, qz*qz
    xy, xz, yz = qx*qy, qx*qz, qy*qz
    wx, wy, wz = qw*qx, qw*qy, qw*qz

    return np.array([
        [1.0 - 2.0*(yy + zz), 2.0*(xy - wz), 2.0*(xz + wy)],
        [2.0*(xy + wz), 1.0 - 2.0*(xx + zz), 2.0*(yz - wx)],
        [2.0*(xz - wy), 2.0*(yz + wx), 1.0 - 2.0*(xx + yy)]
    ], dtype=float)


def householder(normal: np.ndarray) -> np.ndarray:
    """Reflection matrix I - 2 n n^T through the plane with the given normal."""
    n = vectors.normalize(normal)
    return np.eye(3, dtype=float) - 2.0 * np.outer(n, n)


# =============================================================================
# Transform2S
# =============================================================================


class Transform2S:
    """
    Orthogonal transform of the unit sphere.

    Attributes:
        matrix: Read-only (3, 3) orthogonal matrix
    """

    __slots__ = ("_matrix",)

    def __init__(self, matrix: np.ndarray):
        matrix = np.array(matrix, dtype=float)
        matrix.setflags(write=False)
        self._matrix = matrix

    @classmethod
    def identity(cls) -> "Transform2S":
        return cls(np.eye(3, dtype=float))

    @classmethod
    def from_matrix(cls, matrix) -> "Transform2S":
        """
        Wrap an existing matrix.

        Raises:
            ValueError: If the matrix is not (3, 3) or not orthogonal
        """
        m = np.asarray(matrix, dtype=float)
        if m.shape != (3, 3):
            raise ValueError(f"Expected a (3, 3) matrix, got shape {m.shape}")
        err = float(np.max(np.abs(m.T @ m - np.eye(3))))
        if not math.isfinite(err) or err > ORTHOGONALITY_TOLERANCE:
            raise ValueError(f"Matrix is not orthogonal (max |M^T M - I| = {err:.3e})")
        return cls(m)

    @classmethod
    def create_rotation(cls, axis, angle: float) -> "Transform2S":
        """
        Rotation by angle (radians, counter-clockwise) about axis.

        Raises:
            DegenerateGeometryError: If the axis is zero
        """
        return cls(rotvec_to_rotmat(vectors.normalize(axis) * float(angle)))

    @classmethod
    def from_rotation_vector(cls, rotvec) -> "Transform2S":
        return cls(rotvec_to_rotmat(vectors.as_vector(rotvec)))

    @classmethod
    def from_quaternion(cls, qx: float, qy: float, qz: float, qw: float) -> "Transform2S":
        return cls(quat_to_rotmat(qx, qy, qz, qw))

    @classmethod
    def create_reflection(cls, normal) -> "Transform2S":
        """Reflection across the plane through the origin with the given normal."""
        return cls(householder(normal))

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    def apply_vector(self, v) -> np.ndarray:
        return self._matrix @ vectors.as_vector(v)

    def apply(self, point):
        """Map a Point2S onto its image."""
        from sphere_paths.geometry.point2s import Point2S

        return Point2S.from_vector(self.apply_vector(point.vector))

    def multiply(self, other: "Transform2S") -> "Transform2S":
        """Composition self o other (other is applied first)."""
        return Transform2S(self._matrix @ other._matrix)

    def inverse(self) -> "Transform2S":
        return Transform2S(self._matrix.T)

    def preserves_orientation(self) -> bool:
        """True for rotations, False for reflections."""
        return float(np.linalg.det(self._matrix)) > 0.0

    def __repr__(self) -> str:
        return f"Transform2S({self._matrix.tolist()!r})"
