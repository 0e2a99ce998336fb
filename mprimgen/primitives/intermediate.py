"""
Intermediate-pose synthesis for discrete primitives.

Each primitive gets ``num_poses_per_prim`` continuous (x, y, theta) samples
from the origin at its start heading to its scaled discrete end pose:

  - translations interpolate x/y linearly at constant heading,
  - point turns rotate in place through the non-truncated heading delta,
  - arcs are interpolated around the center of rotation, rotating and
    scaling the radius linearly from start to end.

Positions are in metres, headings in radians wrapped into (-pi, pi].
"""

import logging
import math

import numpy as np
from numpy.typing import NDArray

from mprimgen.config import TRACE, GenerationConfig
from mprimgen.primitives.types import MovementType, Primitive
from mprimgen.utils.se2_utils import Pose2D, wrap_to_pi

logger = logging.getLogger(__name__)


def _arc_poses(
    prim: Primitive,
    end_local: NDArray[np.float64],
    start_orientation: float,
    rot_diff: int,
    config: GenerationConfig,
) -> NDArray[np.float64]:
    """Sample an arc about the primitive's center of rotation."""
    assert prim.center_of_rotation is not None
    n = config.num_poses_per_prim
    steps = float(n - 1)

    center_local = prim.center_of_rotation[:2] * config.grid_size
    cor2base = Pose2D.from_xy_yaw(center_local[0], center_local[1], start_orientation)
    base2cor = cor2base.inverse()

    # Start (origin) and end position as seen from the pivot
    base_in_cor = base2cor.transform_point((0.0, 0.0))
    end_in_cor = base2cor.transform_point(end_local)

    len_base = float(np.linalg.norm(base_in_cor))
    len_end = float(np.linalg.norm(end_in_cor))
    len_scale_factor = (len_end / len_base - 1.0) / steps

    # Actual swept angle, may differ from the discrete one after rounding
    cos_angle = float(np.dot(base_in_cor, end_in_cor)) / (len_base * len_end)
    angle = math.acos(min(1.0, max(-1.0, cos_angle)))
    if rot_diff < 0:
        angle = -angle
    angle_delta = angle / steps

    logger.log(
        TRACE,
        "prim %d arc: base %s end %s angle %.5f scale/step %.5f",
        prim.id,
        base_in_cor,
        end_in_cor,
        angle,
        len_scale_factor,
    )

    poses = np.empty((n, 3), dtype=np.float64)
    for i in range(n):
        rot = i * angle_delta
        radial = base_in_cor * (1.0 + len_scale_factor * i)
        x, y = Pose2D.from_xy_yaw(0.0, 0.0, rot).transform_point(radial)
        local = Pose2D.from_xy_yaw(x, y, rot)
        pose = cor2base * local
        poses[i, :2] = pose.position
        poses[i, 2] = pose.yaw
    # Pin the final heading to the discrete one; rounding bends the arc slightly
    poses[-1, 2] = prim.end_angle * config.rad_per_discrete_angle
    return poses


def compute_intermediate_poses(
    prim: Primitive, config: GenerationConfig
) -> NDArray[np.float64]:
    """
    Continuous trajectory for one discrete primitive.

    Args:
        prim: Discrete primitive (output of the discretization search)
        config: Generation parameters

    Returns:
        (num_poses_per_prim, 3) array of [x_m, y_m, theta_rad]
    """
    n = config.num_poses_per_prim
    steps = float(n - 1)
    rad = config.rad_per_discrete_angle

    start_orientation = prim.start_angle * rad
    # Non-truncated delta so rotations never take the wrapped shortcut
    rot_diff = prim.end_angle_raw - prim.start_angle
    end_local = prim.end_pose[:2] * config.grid_size

    mov_type = prim.movement_type
    if mov_type.is_translation:
        t = np.arange(n, dtype=np.float64)
        poses = np.empty((n, 3), dtype=np.float64)
        poses[:, 0] = t * (end_local[0] / steps)
        poses[:, 1] = t * (end_local[1] / steps)
        poses[:, 2] = start_orientation
    elif mov_type is MovementType.POINT_TURN:
        theta_step = (rot_diff * rad) / steps
        poses = np.empty((n, 3), dtype=np.float64)
        poses[:, 0] = end_local[0]
        poses[:, 1] = end_local[1]
        poses[:, 2] = start_orientation + np.arange(n) * theta_step
    elif mov_type.is_arc:
        poses = _arc_poses(prim, end_local, start_orientation, rot_diff, config)
    else:
        raise ValueError(f"Unknown movement type {mov_type}")

    for i in range(n):
        poses[i, 2] = wrap_to_pi(poses[i, 2])
    # Drop negative zeros
    poses += 0.0
    return poses


def add_intermediate_poses(
    prims: list[Primitive], config: GenerationConfig
) -> list[Primitive]:
    """Attach intermediate poses to every primitive in place."""
    for prim in prims:
        prim.intermediate_poses = compute_intermediate_poses(prim, config)
    return prims
