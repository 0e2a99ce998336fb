"""Numba-compatible SE2 utilities.

This module provides pure-numba implementations of planar rigid-transform
operations for the primitive generation hot paths. SE2 transforms are
represented as 3x3 numpy arrays (homogeneous transformation matrices).
"""

import math

import numpy as np
from numba import njit  # type: ignore[import-untyped]

TWO_PI = 2.0 * math.pi


@njit(cache=True)
def se2_identity(out: np.ndarray) -> None:
    """Set out to identity SE2 (3x3)."""
    out[:] = 0.0
    out[0, 0] = 1.0
    out[1, 1] = 1.0
    out[2, 2] = 1.0


@njit(cache=True)
def se2_from_xy_yaw(x: float, y: float, yaw: float, out: np.ndarray) -> None:
    """Create SE2 from translation and rotation about the vertical axis."""
    c = math.cos(yaw)
    s = math.sin(yaw)
    se2_identity(out)
    out[0, 0] = c
    out[0, 1] = -s
    out[1, 0] = s
    out[1, 1] = c
    out[0, 2] = x
    out[1, 2] = y


@njit(cache=True)
def se2_mul(A: np.ndarray, B: np.ndarray, out: np.ndarray) -> None:
    """SE2 multiplication: out = A @ B (3x3 matrix multiply)."""
    for i in range(3):
        for j in range(3):
            out[i, j] = A[i, 0] * B[0, j] + A[i, 1] * B[1, j] + A[i, 2] * B[2, j]


@njit(cache=True)
def se2_inverse(A: np.ndarray, out: np.ndarray) -> None:
    """Rigid inverse: R^T, -R^T t."""
    se2_identity(out)
    out[0, 0] = A[0, 0]
    out[0, 1] = A[1, 0]
    out[1, 0] = A[0, 1]
    out[1, 1] = A[1, 1]
    out[0, 2] = -(A[0, 0] * A[0, 2] + A[1, 0] * A[1, 2])
    out[1, 2] = -(A[0, 1] * A[0, 2] + A[1, 1] * A[1, 2])


@njit(cache=True)
def se2_apply(A: np.ndarray, x: float, y: float) -> tuple[float, float]:
    """Transform the point (x, y) by A."""
    return (
        A[0, 0] * x + A[0, 1] * y + A[0, 2],
        A[1, 0] * x + A[1, 1] * y + A[1, 2],
    )


@njit(cache=True)
def se2_yaw(A: np.ndarray) -> float:
    """Extract the rotation angle of A in [-pi, pi]."""
    return math.atan2(A[1, 0], A[0, 0])


@njit(cache=True)
def wrap_angle(theta: float) -> float:
    """Wrap theta into (-pi, pi]."""
    while theta <= -math.pi:
        theta += TWO_PI
    while theta > math.pi:
        theta -= TWO_PI
    return theta


@njit(cache=True)
def round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero."""
    if value < 0.0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)
