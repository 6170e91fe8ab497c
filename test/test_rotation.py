"""
Unit tests for Transform2S and the rotation matrix builders.
"""

import math

import numpy as np
import pytest

from sphere_paths.common.errors import DegenerateGeometryError
from sphere_paths.common.transforms.rotation import (
    Transform2S,
    householder,
    quat_to_rotmat,
    rotvec_to_rotmat,
    skew,
)
from sphere_paths.geometry.point2s import Point2S

from conftest import assert_point_eq

PI = math.pi


class TestRotationBuilders:
    """Rodrigues, quaternion and reflection matrices."""

    def test_skew(self):
        v = np.array([1.0, 2.0, 3.0])
        w = np.array([-0.5, 0.2, 4.0])
        assert np.allclose(skew(v) @ w, np.cross(v, w))

    def test_rotvec_identity(self):
        assert np.allclose(rotvec_to_rotmat(np.zeros(3)), np.eye(3))

    def test_rotvec_exactly_pi(self):
        """180 deg rotation around x-axis is diag(1, -1, -1)."""
        R = rotvec_to_rotmat(np.array([PI, 0.0, 0.0]))
        assert np.allclose(R, np.diag([1.0, -1.0, -1.0]), atol=1e-12)

    def test_rotvec_is_orthogonal(self):
        R = rotvec_to_rotmat(np.array([0.3, -1.1, 0.7]))
        assert np.allclose(R.T @ R, np.eye(3), atol=1e-12)
        assert np.linalg.det(R) == pytest.approx(1.0)

    def test_quaternion_matches_rotvec(self):
        """q = (sin(t/2) axis, cos(t/2)) and the rotation vector t * axis agree."""
        axis = np.array([1.0, 2.0, -2.0]) / 3.0
        theta = 0.8
        s = math.sin(0.5 * theta)
        R_q = quat_to_rotmat(s * axis[0], s * axis[1], s * axis[2], math.cos(0.5 * theta))
        assert np.allclose(R_q, rotvec_to_rotmat(theta * axis), atol=1e-12)

    def test_zero_quaternion_rejected(self):
        with pytest.raises(DegenerateGeometryError):
            quat_to_rotmat(0.0, 0.0, 0.0, 0.0)

    def test_householder(self):
        H = householder(np.array([0.0, 0.0, 2.0]))
        assert np.allclose(H, np.diag([1.0, 1.0, -1.0]))


class TestTransform2S:
    """Transforms acting on points."""

    def test_rotation_about_z(self):
        t = Transform2S.create_rotation([0, 0, 1], 0.5 * PI)
        assert_point_eq(t.apply(Point2S.PLUS_I), Point2S.PLUS_J)
        assert_point_eq(t.apply(Point2S.PLUS_K), Point2S.PLUS_K)
        assert t.preserves_orientation()

    def test_inverse_and_multiply(self):
        t = Transform2S.create_rotation([1, 1, 0], 1.2)
        p = Point2S.of(0.4, 1.1)
        assert_point_eq(t.inverse().apply(t.apply(p)), p)
        assert np.allclose(t.multiply(t.inverse()).matrix, np.eye(3), atol=1e-12)

    def test_multiply_order(self):
        """multiply applies the argument first."""
        rz = Transform2S.create_rotation([0, 0, 1], 0.5 * PI)
        rx = Transform2S.create_rotation([1, 0, 0], 0.5 * PI)
        # rx: J -> K, then rz leaves K fixed
        assert_point_eq(rz.multiply(rx).apply(Point2S.PLUS_J), Point2S.PLUS_K)
        # rz: J -> -I, then rx leaves -I fixed
        assert_point_eq(rx.multiply(rz).apply(Point2S.PLUS_J), Point2S.MINUS_I)

    def test_reflection(self):
        t = Transform2S.create_reflection([1, 0, 0])
        assert_point_eq(t.apply(Point2S.PLUS_I), Point2S.MINUS_I)
        assert_point_eq(t.apply(Point2S.PLUS_J), Point2S.PLUS_J)
        assert not t.preserves_orientation()

    def test_from_quaternion_and_rotvec(self):
        t = Transform2S.from_quaternion(0.0, 0.0, math.sin(0.25 * PI), math.cos(0.25 * PI))
        u = Transform2S.from_rotation_vector([0.0, 0.0, 0.5 * PI])
        assert np.allclose(t.matrix, u.matrix, atol=1e-12)

    def test_identity(self):
        p = Point2S.of(2.0, 0.3)
        assert_point_eq(Transform2S.identity().apply(p), p)

    def test_from_matrix_validation(self):
        Transform2S.from_matrix(np.diag([1.0, -1.0, 1.0]))
        with pytest.raises(ValueError, match="orthogonal"):
            Transform2S.from_matrix(np.diag([1.0, 2.0, 1.0]))
        with pytest.raises(ValueError, match="shape"):
            Transform2S.from_matrix(np.eye(2))

    def test_zero_axis_rejected(self):
        with pytest.raises(DegenerateGeometryError):
            Transform2S.create_rotation([0, 0, 0], 1.0)

    def test_matrix_read_only(self):
        t = Transform2S.identity()
        with pytest.raises(ValueError):
            t.matrix[0, 0] = 2.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
