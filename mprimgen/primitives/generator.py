"""
Primitive generation pipeline.

  1. build_base_primitives: mobility profile -> heading-0 base primitives
     and the speed table
  2. expand_primitives: base primitives -> discrete primitives for every
     heading
  3. add_intermediate_poses: continuous trajectory per primitive

The result is a PrimitiveTable, consumed in memory or written to disk.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from mprimgen.config import SUPPORTED_PRIM_PARTITIONS, GenerationConfig, MobilityProfile
from mprimgen.primitives.base_builder import build_base_primitives
from mprimgen.primitives.discretization import expand_primitives
from mprimgen.primitives.intermediate import add_intermediate_poses
from mprimgen.primitives.speed import SpeedTable
from mprimgen.primitives.types import Primitive

logger = logging.getLogger(__name__)


@dataclass
class PrimitiveTable:
    """Generated primitives plus the speed lookup used at execution time."""

    config: GenerationConfig
    primitives: list[Primitive] = field(default_factory=list)
    speed_table: SpeedTable = field(default_factory=SpeedTable)

    def __len__(self) -> int:
        return len(self.primitives)

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self.primitives)

    def get_speed(self, prim_id: int) -> float | None:
        return self.speed_table.get_speed(prim_id)

    def for_start_angle(self, start_angle: int) -> list[Primitive]:
        """Primitives departing from one discrete heading."""
        return [p for p in self.primitives if p.start_angle == start_angle]

    def write(self, target: str | Path | TextIO) -> None:
        """Serialize to the lattice planner's text format."""
        from mprimgen.io.mprim_writer import write_mprim

        write_mprim(self, target)


def generate_primitives(
    mobility: MobilityProfile, config: GenerationConfig, workers: int = 1
) -> PrimitiveTable:
    """
    Build the full primitive table for a mobility profile.

    Args:
        mobility: Enabled motions, their cost multipliers, speed and radius
        config: Grid and discretization parameters
        workers: Processes used to expand headings (1 = serial)

    Returns:
        PrimitiveTable; empty if every motion is disabled
    """
    if not config.partition_supported():
        logger.warning(
            "num_prim_partition=%d is not one of %s, results may be unusable",
            config.num_prim_partition,
            SUPPORTED_PRIM_PARTITIONS,
        )

    base_prims, speed_table = build_base_primitives(mobility, config)
    if not base_prims:
        return PrimitiveTable(config=config)

    prims = expand_primitives(base_prims, config, workers=workers)
    add_intermediate_poses(prims, config)

    logger.info(
        "Generated %d primitives (%d angles, %d base primitives, partition %d)",
        len(prims),
        config.num_angles,
        len(base_prims),
        config.num_prim_partition,
    )
    return PrimitiveTable(config=config, primitives=prims, speed_table=speed_table)
