"""
Type definitions for motion primitives.

Defines the movement enum and the Primitive record shared by the base
builder, the discretization search and the exporter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np
from numpy.typing import NDArray


class MovementType(Enum):
    """Elementary motion a primitive performs."""

    FORWARD = 0
    BACKWARD = 1
    LATERAL = 2
    POINT_TURN = 3
    FORWARD_TURN = 4
    BACKWARD_TURN = 5

    @property
    def is_arc(self) -> bool:
        return self in (MovementType.FORWARD_TURN, MovementType.BACKWARD_TURN)

    @property
    def is_translation(self) -> bool:
        return self in (
            MovementType.FORWARD,
            MovementType.BACKWARD,
            MovementType.LATERAL,
        )


@dataclass(slots=True)
class Primitive:
    """
    One motion from a discrete start heading to a relative grid pose.

    For base primitives ``end_pose`` is a unit direction (x, y) plus the turn
    direction in its third component. For discrete primitives it holds the
    integer grid offset and the end heading truncated into [0, num_angles);
    the non-truncated heading is kept in ``end_angle_raw``.

    Attributes:
        id: Unique id within the generated set
        start_angle: Discrete start heading index
        end_pose: (3,) array [dx, dy, theta]
        cost_multiplier: Additional action cost multiplier
        movement_type: Elementary motion
        center_of_rotation: (3,) pivot in grid cells, arc types only
        end_angle_raw: End heading before wraparound (may be < 0 or >= N)
        intermediate_poses: (K, 3) array of [x_m, y_m, theta_rad]
    """

    id: int
    start_angle: int
    end_pose: NDArray[np.float64]
    cost_multiplier: int
    movement_type: MovementType
    center_of_rotation: NDArray[np.float64] | None = None
    end_angle_raw: int = 0
    intermediate_poses: NDArray[np.float64] = field(
        default_factory=lambda: np.empty((0, 3), dtype=np.float64)
    )

    def set_discrete_end_orientation(self, theta: int, num_angles: int) -> None:
        """Store the raw end heading and its truncation into [0, num_angles)."""
        self.end_angle_raw = int(theta)
        self.end_pose[2] = theta % num_angles

    @property
    def end_angle(self) -> int:
        """Truncated discrete end heading."""
        return int(self.end_pose[2])

    @property
    def discrete_end_pose(self) -> tuple[int, int, int]:
        return (int(self.end_pose[0]), int(self.end_pose[1]), int(self.end_pose[2]))

    @property
    def turn_direction(self) -> int:
        """+1 for left (counter-clockwise), -1 for right, 0 for none (base prims)."""
        return int(np.sign(self.end_pose[2]))

    def __str__(self) -> str:
        return (
            f"Primitive(id={self.id}, type={self.movement_type.name}, "
            f"start={self.start_angle}, end={self.discrete_end_pose}, "
            f"raw_end_angle={self.end_angle_raw}, mult={self.cost_multiplier})"
        )
