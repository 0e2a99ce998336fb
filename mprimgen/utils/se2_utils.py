"""Planar pose helpers built on scipy rotations and the numba SE2 kernels.

Primitive geometry lives on a grid, so every rotation is about the vertical
axis. Vectors are kept as 3-vectors (x, y, z) to match the rest of the
pipeline; z is carried through untouched.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.spatial.transform import Rotation

from mprimgen.utils.se2_numba import (
    round_half_away,
    se2_apply,
    se2_from_xy_yaw,
    se2_inverse,
    se2_mul,
    se2_yaw,
    wrap_angle,
)

__all__ = [
    "Pose2D",
    "rotate_z",
    "wrap_to_pi",
    "round_half_away",
]


def rotate_z(vec: ArrayLike, angle: float) -> NDArray[np.float64]:
    """Rotate a 3-vector about the Z axis by angle (radians)."""
    return Rotation.from_euler("z", angle).apply(np.asarray(vec, dtype=np.float64))


def wrap_to_pi(theta: float) -> float:
    """Normalize an angle into (-pi, pi]."""
    return float(wrap_angle(float(theta)))


class Pose2D:
    """Immutable planar rigid transform (position plus heading).

    Composition follows the usual frame convention: ``a * b`` maps a point
    expressed in frame ``b`` through ``b`` and then ``a``.
    """

    __slots__ = ("_matrix",)

    def __init__(self, matrix: NDArray[np.float64]):
        m = np.array(matrix, dtype=np.float64)
        if m.shape != (3, 3):
            raise ValueError(f"Pose2D expects a 3x3 matrix, got {m.shape}")
        m.flags.writeable = False
        self._matrix = m

    @classmethod
    def from_xy_yaw(cls, x: float, y: float, yaw: float) -> Pose2D:
        out = np.empty((3, 3), dtype=np.float64)
        se2_from_xy_yaw(float(x), float(y), float(yaw), out)
        return cls(out)

    @classmethod
    def identity(cls) -> Pose2D:
        return cls(np.eye(3))

    @property
    def matrix(self) -> NDArray[np.float64]:
        return self._matrix

    @property
    def x(self) -> float:
        return float(self._matrix[0, 2])

    @property
    def y(self) -> float:
        return float(self._matrix[1, 2])

    @property
    def position(self) -> NDArray[np.float64]:
        return self._matrix[:2, 2].copy()

    @property
    def yaw(self) -> float:
        """Heading in [-pi, pi] extracted from the rotation block."""
        return float(se2_yaw(self._matrix))

    def compose(self, other: Pose2D) -> Pose2D:
        out = np.empty((3, 3), dtype=np.float64)
        se2_mul(self._matrix, other._matrix, out)
        return Pose2D(out)

    def __mul__(self, other: Pose2D) -> Pose2D:
        if not isinstance(other, Pose2D):
            return NotImplemented
        return self.compose(other)

    def inverse(self) -> Pose2D:
        out = np.empty((3, 3), dtype=np.float64)
        se2_inverse(self._matrix, out)
        return Pose2D(out)

    def transform_point(self, point: ArrayLike) -> NDArray[np.float64]:
        """Map a point (x, y[, z]) from this frame's child into its parent."""
        p = np.asarray(point, dtype=np.float64)
        px, py = se2_apply(self._matrix, float(p[0]), float(p[1]))
        return np.array([px, py], dtype=np.float64)

    def __repr__(self) -> str:
        return f"Pose2D(x={self.x:.6f}, y={self.y:.6f}, yaw={self.yaw:.6f})"
