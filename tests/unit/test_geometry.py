"""Unit tests for planar pose helpers."""

import math

import numpy as np
import pytest

from mprimgen.utils.se2_utils import Pose2D, rotate_z, round_half_away, wrap_to_pi


class TestRotateZ:
    """Tests for rotation about the vertical axis."""

    def test_quarter_turn(self):
        assert np.allclose(rotate_z([1.0, 0.0, 0.0], math.pi / 2), [0.0, 1.0, 0.0])

    def test_z_component_untouched(self):
        out = rotate_z([1.0, 2.0, 3.0], 0.7)
        assert out[2] == pytest.approx(3.0)
        assert np.hypot(out[0], out[1]) == pytest.approx(math.hypot(1.0, 2.0))

    def test_negative_angle_mirrors(self):
        """Rotating by -a mirrors the result of +a across the x-axis."""
        left = rotate_z([0.0, -1.0, 0.0], 0.3)
        right = rotate_z([0.0, 1.0, 0.0], -0.3)
        assert left[0] == pytest.approx(right[0])
        assert left[1] == pytest.approx(-right[1])


class TestWrapToPi:
    """Headings are normalized into (-pi, pi]."""

    @pytest.mark.parametrize(
        "theta,expected",
        [
            (0.0, 0.0),
            (math.pi, math.pi),
            (-math.pi, math.pi),
            (1.5 * math.pi, -0.5 * math.pi),
            (-1.5 * math.pi, 0.5 * math.pi),
            (10 * math.pi + 0.1, 0.1),
        ],
    )
    def test_wrap(self, theta, expected):
        assert wrap_to_pi(theta) == pytest.approx(expected)

    def test_range(self):
        for theta in np.linspace(-20.0, 20.0, 401):
            w = wrap_to_pi(float(theta))
            assert -math.pi < w <= math.pi


class TestRoundHalfAway:
    """Grid rounding sends halves away from zero."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0.5, 1.0), (-0.5, -1.0), (1.4, 1.0), (-1.4, -1.0), (2.5, 3.0), (-2.5, -3.0)],
    )
    def test_round(self, value, expected):
        assert round_half_away(value) == expected


class TestPose2D:
    """Tests for the immutable planar transform."""

    def test_identity_composition(self):
        pose = Pose2D.from_xy_yaw(1.0, -2.0, 0.4)
        ident = pose * pose.inverse()
        assert np.allclose(ident.matrix, np.eye(3))

    def test_transform_point(self):
        pose = Pose2D.from_xy_yaw(1.0, 2.0, math.pi / 2)
        assert np.allclose(pose.transform_point((1.0, 0.0)), [1.0, 3.0])

    def test_inverse_maps_back(self):
        pose = Pose2D.from_xy_yaw(0.3, 0.1, -1.2)
        p = np.array([0.5, -0.25])
        assert np.allclose(pose.inverse().transform_point(pose.transform_point(p)), p)

    def test_compose_adds_yaw(self):
        a = Pose2D.from_xy_yaw(0.0, 0.0, 0.5)
        b = Pose2D.from_xy_yaw(1.0, 0.0, 0.25)
        c = a * b
        assert c.yaw == pytest.approx(0.75)
        assert c.x == pytest.approx(math.cos(0.5))
        assert c.y == pytest.approx(math.sin(0.5))

    def test_matrix_is_read_only(self):
        pose = Pose2D.identity()
        with pytest.raises(ValueError):
            pose.matrix[0, 2] = 1.0

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            Pose2D(np.eye(4))

    def test_position_is_a_copy(self):
        pose = Pose2D.from_xy_yaw(0.5, -0.25, 1.0)
        pos = pose.position
        assert np.allclose(pos, [0.5, -0.25])
        pos[0] = 9.0
        assert pose.x == pytest.approx(0.5)
