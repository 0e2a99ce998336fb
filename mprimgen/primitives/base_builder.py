"""
Angle-zero primitive synthesis.

Turns a mobility profile into canonical unit primitives at heading 0. The
discretization search later rotates and stretches these into every discrete
heading. Each base primitive also contributes one signed speed to the speed
table, replicated once per sub-primitive slot.
"""

import logging

import numpy as np

from mprimgen.config import MIN_TURNING_RADIUS_GRIDS, GenerationConfig, MobilityProfile
from mprimgen.primitives.speed import SpeedTable
from mprimgen.primitives.types import MovementType, Primitive

logger = logging.getLogger(__name__)


def turning_radius_grids(mobility: MobilityProfile, grid_size: float) -> float:
    """Minimal turning radius in grid cells, floored at one cell."""
    return max(MIN_TURNING_RADIUS_GRIDS, mobility.min_turning_radius / grid_size)


def build_base_primitives(
    mobility: MobilityProfile, config: GenerationConfig
) -> tuple[list[Primitive], SpeedTable]:
    """
    Create the heading-0 base primitives for every enabled motion.

    Translations carry a unit direction in end_pose[:2]. Point turns and arcs
    carry the turn direction (+1 left, -1 right) in end_pose[2]; arcs also get
    a center of rotation on the lateral axis.

    Returns:
        (base primitives in emission order, speed table replicated by the
        configured partition count)
    """
    prims: list[Primitive] = []
    speeds = SpeedTable()

    if not mobility.is_set():
        logger.warning(
            "No primitives will be created, all multipliers of the mobility profile are 0"
        )
        return prims, speeds

    v = mobility.speed

    def add(
        end_pose: tuple[float, float, float],
        multiplier: int,
        mov_type: MovementType,
        speed: float,
        center: tuple[float, float, float] | None = None,
    ) -> None:
        prim = Primitive(
            id=len(prims),
            start_angle=0,
            end_pose=np.array(end_pose, dtype=np.float64),
            cost_multiplier=multiplier,
            movement_type=mov_type,
            center_of_rotation=None
            if center is None
            else np.array(center, dtype=np.float64),
        )
        prims.append(prim)
        speeds.append(speed)

    if mobility.multiplier_forward > 0:
        add((1.0, 0.0, 0.0), mobility.multiplier_forward, MovementType.FORWARD, v)

    if mobility.multiplier_backward > 0:
        add((-1.0, 0.0, 0.0), mobility.multiplier_backward, MovementType.BACKWARD, -v)

    if mobility.multiplier_lateral > 0:
        # Direction is carried by the offset, speed stays positive
        add((0.0, 1.0, 0.0), mobility.multiplier_lateral, MovementType.LATERAL, v)
        add((0.0, -1.0, 0.0), mobility.multiplier_lateral, MovementType.LATERAL, v)

    if mobility.multiplier_point_turn > 0:
        add((0.0, 0.0, 1.0), mobility.multiplier_point_turn, MovementType.POINT_TURN, v)
        add((0.0, 0.0, -1.0), mobility.multiplier_point_turn, MovementType.POINT_TURN, v)

    r = turning_radius_grids(mobility, config.grid_size)

    if mobility.multiplier_forward_turn > 0:
        # Left hand bend pivots on the left, right hand bend on the right
        add(
            (0.0, 0.0, 1.0),
            mobility.multiplier_forward_turn,
            MovementType.FORWARD_TURN,
            v,
            center=(0.0, r, 0.0),
        )
        add(
            (0.0, 0.0, -1.0),
            mobility.multiplier_forward_turn,
            MovementType.FORWARD_TURN,
            v,
            center=(0.0, -r, 0.0),
        )

    if mobility.multiplier_backward_turn > 0:
        # Reversing swaps the pivot side for the same heading change
        add(
            (0.0, 0.0, 1.0),
            mobility.multiplier_backward_turn,
            MovementType.BACKWARD_TURN,
            -v,
            center=(0.0, -r, 0.0),
        )
        add(
            (0.0, 0.0, -1.0),
            mobility.multiplier_backward_turn,
            MovementType.BACKWARD_TURN,
            -v,
            center=(0.0, r, 0.0),
        )

    logger.debug(
        "Created %d base primitives (turning radius %.3f cells)", len(prims), r
    )
    return prims, speeds.replicated(config.num_prim_partition)
