"""
Central configuration for mprimgen tunables and shared constants.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field

from mprimgen.utils.errors import ConfigurationError

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]

TRACE_ENABLED = str(os.getenv("MPRIMGEN_TRACE", "0")).lower() in ("1", "true", "yes", "on")

logger = logging.getLogger(__name__)

# Generation defaults (overridable by env/CLI)
GRID_SIZE_DEFAULT: float = float(os.getenv("MPRIMGEN_GRID_SIZE", "0.1"))
NUM_ANGLES_DEFAULT: int = int(os.getenv("MPRIMGEN_NUM_ANGLES", "16"))
NUM_PRIM_PARTITION_DEFAULT: int = int(os.getenv("MPRIMGEN_NUM_PRIM_PARTITION", "2"))
PRIM_ACCURACY_DEFAULT: float = float(os.getenv("MPRIMGEN_PRIM_ACCURACY", "0.1"))
NUM_POSES_PER_PRIM_DEFAULT: int = int(os.getenv("MPRIMGEN_NUM_POSES_PER_PRIM", "10"))
LOG_LEVEL_DEFAULT: str = os.getenv("MPRIMGEN_LOG_LEVEL", "WARNING").upper()

# Partition counts the lattice planner is known to handle
SUPPORTED_PRIM_PARTITIONS: tuple[int, ...] = (1, 2, 4, 8)

# Discretization search
MAX_DIST_TO_CENTER_GRIDS: float = 100.0  # Candidates farther than this end the search (cells)
SCALE_STEP: float = 0.1  # Growth of translation length / arc radius per attempt
MIN_TURNING_RADIUS_GRIDS: float = 1.0  # Arc radius floor (cells)


@dataclass(frozen=True, slots=True)
class MobilityProfile:
    """Which elementary motions a vehicle supports and what they cost.

    A multiplier of 0 disables the motion; any positive value enables it and
    becomes the primitive's additional action cost multiplier.
    """

    multiplier_forward: int = 0
    multiplier_backward: int = 0
    multiplier_lateral: int = 0
    multiplier_point_turn: int = 0
    multiplier_forward_turn: int = 0
    multiplier_backward_turn: int = 0
    speed: float = 1.0  # m/s, sign is applied per motion
    min_turning_radius: float = 0.0  # m

    def __post_init__(self) -> None:
        for name in _MULTIPLIER_FIELDS:
            value = getattr(self, name)
            if value < 0:
                raise ConfigurationError(f"{name} must be >= 0 (got {value})")
        if self.speed < 0:
            raise ConfigurationError(f"speed must be >= 0 (got {self.speed})")
        if self.min_turning_radius < 0:
            raise ConfigurationError(
                f"min_turning_radius must be >= 0 (got {self.min_turning_radius})"
            )

    def is_set(self) -> bool:
        """True if at least one motion type is enabled."""
        return any(getattr(self, name) > 0 for name in _MULTIPLIER_FIELDS)


_MULTIPLIER_FIELDS: tuple[str, ...] = (
    "multiplier_forward",
    "multiplier_backward",
    "multiplier_lateral",
    "multiplier_point_turn",
    "multiplier_forward_turn",
    "multiplier_backward_turn",
)


@dataclass(frozen=True, slots=True)
class GenerationConfig:
    """Grid and discretization parameters for one primitive table."""

    grid_size: float = GRID_SIZE_DEFAULT  # m per cell
    num_angles: int = NUM_ANGLES_DEFAULT
    num_prim_partition: int = NUM_PRIM_PARTITION_DEFAULT  # sub-prims per base prim
    prim_accuracy: float = PRIM_ACCURACY_DEFAULT  # max rounding error (cells)
    num_poses_per_prim: int = NUM_POSES_PER_PRIM_DEFAULT
    rad_per_discrete_angle: float = field(init=False)

    def __post_init__(self) -> None:
        if not self.grid_size > 0:
            raise ConfigurationError(f"grid_size must be > 0 (got {self.grid_size})")
        if self.num_angles <= 0:
            raise ConfigurationError(f"num_angles must be > 0 (got {self.num_angles})")
        if self.num_prim_partition < 1:
            raise ConfigurationError(
                f"num_prim_partition must be >= 1 (got {self.num_prim_partition})"
            )
        if self.prim_accuracy < 0:
            raise ConfigurationError(
                f"prim_accuracy must be >= 0 (got {self.prim_accuracy})"
            )
        if self.num_poses_per_prim < 2:
            raise ConfigurationError(
                "num_poses_per_prim must be >= 2 to interpolate between start and "
                f"end pose (got {self.num_poses_per_prim})"
            )
        object.__setattr__(
            self, "rad_per_discrete_angle", (2.0 * math.pi) / self.num_angles
        )

    @property
    def max_turn_offset(self) -> int:
        """Largest discrete heading offset swept by arcs (quarter turn, rounded up)."""
        return math.ceil(self.num_angles / 4)

    def partition_supported(self) -> bool:
        return self.num_prim_partition in SUPPORTED_PRIM_PARTITIONS
