"""
Discretization search: expands base primitives into every discrete heading.

For each (heading, base primitive) pair the base motion is rotated into the
heading and then grown step by step (longer translations, wider arcs, larger
point turns) until ``num_prim_partition`` distinct discrete end poses have
been accepted or a bound ends the search.

A candidate is accepted when:
  - its continuous end position lies within ``prim_accuracy`` cells of the
    rounded grid cell,
  - arcs end on the same side of the longitudinal axis as their pivot,
  - point turns stay below a quarter turn,
  - its end lies within MAX_DIST_TO_CENTER_GRIDS of the start,
  - its (dx, dy, raw end heading) has not been reached before for the pair.

Ids are reserved per slot (``base_id * partition + k``), so a search that
stops early leaves gaps instead of shifting later ids.
"""

from __future__ import annotations

import logging
import math
import multiprocessing
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from functools import partial

import numpy as np
from numpy.typing import NDArray

from mprimgen.config import (
    MAX_DIST_TO_CENTER_GRIDS,
    SCALE_STEP,
    TRACE,
    GenerationConfig,
)
from mprimgen.primitives.types import MovementType, Primitive
from mprimgen.utils.se2_utils import rotate_z, round_half_away

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Candidate:
    """One continuous end pose proposed by the growth cursor."""

    end_position: NDArray[np.float64]  # (3,) grid cells, z unused
    discrete_angle: int  # raw end heading, may be < 0 or >= num_angles
    center_of_rotation: NDArray[np.float64] | None = None


class GrowthCursor:
    """
    Iterative search state for one (heading, base primitive) pair.

    Translations scale the rotated unit vector by 1.0, 1.1, 1.2, ...
    Arcs sweep heading offsets 1..ceil(N/4) around the pivot, then widen the
    pivot distance by 10% of the base radius and sweep again.
    Point turns advance one discrete heading per attempt.
    """

    def __init__(self, base: Primitive, heading: int, config: GenerationConfig):
        self.base = base
        self.heading = heading
        self.rad_per_angle = config.rad_per_discrete_angle
        self.max_offset = config.max_turn_offset

        direction = base.end_pose.astype(np.float64).copy()
        self.turn = int(direction[2])
        direction[2] = 0.0

        heading_rad = heading * self.rad_per_angle
        self.turned_end_position = rotate_z(direction, heading_rad)
        self.turned_center_of_rotation = (
            rotate_z(base.center_of_rotation, heading_rad)
            if base.center_of_rotation is not None
            else None
        )

        self.scale = 0.0
        self.turn_steps = 0
        self.offset = 1

    @property
    def point_turn_exhausted(self) -> bool:
        """True once the next point turn would exceed a quarter revolution."""
        return self.turn_steps + 1 > self.max_offset

    def out_of_reach(self, candidate: Candidate) -> bool:
        """True if this and every later candidate end beyond the distance cap."""
        if self.base.movement_type.is_translation:
            return float(np.linalg.norm(candidate.end_position[:2])) > MAX_DIST_TO_CENTER_GRIDS
        if self.base.movement_type.is_arc:
            # Shortest chord of the sweep: one discrete angle at the current pivot distance
            assert candidate.center_of_rotation is not None
            radius = float(np.linalg.norm(candidate.center_of_rotation[:2]))
            return 2.0 * radius * math.sin(self.rad_per_angle / 2.0) > MAX_DIST_TO_CENTER_GRIDS
        return False

    def advance(self) -> Candidate:
        mov_type = self.base.movement_type

        if mov_type.is_translation:
            end = self.turned_end_position * (1.0 + self.scale)
            self.scale += SCALE_STEP
            return Candidate(end, self.heading)

        if mov_type is MovementType.POINT_TURN:
            discrete_angle = (self.turn_steps + 1) * self.turn + self.heading
            self.turn_steps += 1
            return Candidate(np.zeros(3), discrete_angle)

        if mov_type.is_arc:
            assert self.turned_center_of_rotation is not None
            angle_rad = self.offset * self.turn * self.rad_per_angle
            center = self.turned_center_of_rotation * (1.0 + self.scale)
            # Start sits at the origin, swing it around the pivot
            end = rotate_z(-center, angle_rad) + center
            discrete_angle = self.offset * self.turn + self.heading
            self.offset += 1
            if self.offset > self.max_offset:
                self.offset = 1
                self.scale += SCALE_STEP
            return Candidate(end, discrete_angle, center)

        raise ValueError(f"Unknown movement type {mov_type}")


def is_curve_valid(
    base: Primitive, rounded_end: NDArray[np.float64], heading: int, config: GenerationConfig
) -> bool:
    """Arc end, rotated back to heading 0, must lie on the pivot's side of the x-axis."""
    assert base.center_of_rotation is not None
    back = rotate_z(rounded_end, -heading * config.rad_per_discrete_angle)
    cy = base.center_of_rotation[1]
    return bool((cy > 0 and back[1] > 0) or (cy < 0 and back[1] < 0))


def expand_base_primitive(
    base: Primitive, heading: int, config: GenerationConfig
) -> list[Primitive]:
    """Search up to num_prim_partition discrete primitives for one base primitive."""
    partition = config.num_prim_partition
    cursor = GrowthCursor(base, heading, config)
    reached_end_positions: set[tuple[int, int, int]] = set()
    accepted: list[Primitive] = []

    while len(accepted) < partition:
        prim_id = base.id * partition + len(accepted)
        candidate = cursor.advance()
        end = candidate.end_position

        # Ends searches whose gates can never pass again (e.g. zero tolerance)
        if cursor.out_of_reach(candidate):
            logger.debug(
                "No candidate within %.0f cells left, only %d of %d prims found for angle %d / prim id %d",
                MAX_DIST_TO_CENTER_GRIDS,
                len(accepted),
                partition,
                heading,
                prim_id,
            )
            break

        # + 0.0 drops negative zeros
        rounded = np.array(
            [round_half_away(end[0]) + 0.0, round_half_away(end[1]) + 0.0, 0.0]
        )
        error = float(np.linalg.norm(rounded[:2] - end[:2]))
        if error > config.prim_accuracy:
            logger.log(
                TRACE,
                "prim %d angle %d: (%.4f, %.4f) not close enough to a cell (%.4f)",
                prim_id,
                heading,
                end[0],
                end[1],
                error,
            )
            continue

        if base.movement_type.is_arc and not is_curve_valid(
            base, rounded, heading, config
        ):
            logger.log(
                TRACE,
                "prim %d angle %d: curve end (%d, %d) on the wrong side",
                prim_id,
                heading,
                rounded[0],
                rounded[1],
            )
            continue

        if (
            base.movement_type is MovementType.POINT_TURN
            and cursor.point_turn_exhausted
        ):
            logger.log(
                TRACE,
                "prim %d angle %d: point turn would exceed %d discrete angles",
                prim_id,
                heading,
                cursor.max_offset,
            )
            break

        if float(np.linalg.norm(end[:2])) > MAX_DIST_TO_CENTER_GRIDS:
            logger.debug(
                "Primitive becomes too long, only %d of %d prims found for angle %d / prim id %d",
                len(accepted),
                partition,
                heading,
                prim_id,
            )
            break

        key = (int(rounded[0]), int(rounded[1]), candidate.discrete_angle)
        if key in reached_end_positions:
            logger.log(TRACE, "prim %d angle %d: end pose %s already reached", prim_id, heading, key)
            continue
        reached_end_positions.add(key)

        prim = Primitive(
            id=prim_id,
            start_angle=heading,
            end_pose=rounded,
            cost_multiplier=base.cost_multiplier,
            movement_type=base.movement_type,
            center_of_rotation=candidate.center_of_rotation,
        )
        prim.set_discrete_end_orientation(candidate.discrete_angle, config.num_angles)
        logger.log(TRACE, "New primitive added: %s", prim)
        accepted.append(prim)

    return accepted


def expand_heading(
    heading: int, base_prims: list[Primitive], config: GenerationConfig
) -> list[Primitive]:
    """All discrete primitives departing from one heading, in base primitive order."""
    prims: list[Primitive] = []
    for base in base_prims:
        prims.extend(expand_base_primitive(base, heading, config))
    return prims


def expand_primitives(
    base_prims: list[Primitive], config: GenerationConfig, workers: int = 1
) -> list[Primitive]:
    """
    Rotate the angle-0 base primitives into every discrete heading.

    Args:
        base_prims: Output of build_base_primitives
        config: Generation parameters
        workers: Process count; headings are independent so they can be
            expanded in parallel. Results are merged in heading order and are
            identical to the serial run.

    Returns:
        Discrete primitives ordered by heading, then base primitive.
    """
    headings = range(config.num_angles)
    if not base_prims:
        return []

    if workers <= 1:
        per_heading = [expand_heading(h, base_prims, config) for h in headings]
    else:
        ctx = multiprocessing.get_context("spawn")
        with ProcessPoolExecutor(max_workers=workers, mp_context=ctx) as pool:
            per_heading = list(
                pool.map(
                    partial(expand_heading, base_prims=base_prims, config=config),
                    headings,
                )
            )

    prims = [p for chunk in per_heading for p in chunk]
    logger.debug(
        "Expanded %d base primitives into %d discrete primitives over %d angles",
        len(base_prims),
        len(prims),
        config.num_angles,
    )
    return prims
