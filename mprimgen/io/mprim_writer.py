"""
Writer for the lattice planner's motion primitive text format.

    resolution_m: 0.100000
    numberofangles: 16
    totalnumberofprimitives: 32
    primID: 0
    startangle_c: 0
    endpose_c: 1 0 0
    additionalactioncostmult: 1
    intermediateposes: 10
    0.0000 0.0000 0.0000
    ...
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from mprimgen.primitives.generator import PrimitiveTable

logger = logging.getLogger(__name__)


def _format_multiplier(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.6f}"


def _fmt(value: float) -> str:
    # Tiny negatives print as 0.0000, not -0.0000
    return f"{round(float(value), 4) + 0.0:.4f}"


def dump_mprim(table: PrimitiveTable, stream: TextIO) -> None:
    """Write the table to an open text stream."""
    cfg = table.config
    stream.write(f"resolution_m: {cfg.grid_size:.6f}\n")
    stream.write(f"numberofangles: {cfg.num_angles}\n")
    stream.write(f"totalnumberofprimitives: {len(table.primitives)}\n")

    for prim in table.primitives:
        dx, dy, theta = prim.discrete_end_pose
        stream.write(f"primID: {prim.id}\n")
        stream.write(f"startangle_c: {prim.start_angle}\n")
        stream.write(f"endpose_c: {dx} {dy} {theta}\n")
        stream.write(
            f"additionalactioncostmult: {_format_multiplier(prim.cost_multiplier)}\n"
        )
        stream.write(f"intermediateposes: {len(prim.intermediate_poses)}\n")
        for x, y, yaw in prim.intermediate_poses:
            stream.write(f"{_fmt(x)} {_fmt(y)} {_fmt(yaw)}\n")


def format_mprim(table: PrimitiveTable) -> str:
    """Render the table as a string."""
    buf = io.StringIO()
    dump_mprim(table, buf)
    return buf.getvalue()


def write_mprim(table: PrimitiveTable, target: str | Path | TextIO) -> None:
    """Write the table to a path (parent dirs created) or an open stream."""
    if isinstance(target, (str, Path)):
        path = Path(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="ascii", newline="\n") as f:
            dump_mprim(table, f)
        logger.info("Wrote %d primitives to %s", len(table.primitives), path)
    else:
        dump_mprim(table, target)
