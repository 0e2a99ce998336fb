"""
Motion primitive generation for lattice planners.

Pipeline: base primitives at heading 0 -> discretization search across all
headings -> intermediate poses -> PrimitiveTable.
"""

from mprimgen.primitives.base_builder import build_base_primitives
from mprimgen.primitives.discretization import expand_heading, expand_primitives
from mprimgen.primitives.generator import PrimitiveTable, generate_primitives
from mprimgen.primitives.intermediate import (
    add_intermediate_poses,
    compute_intermediate_poses,
)
from mprimgen.primitives.speed import SpeedTable
from mprimgen.primitives.types import MovementType, Primitive

__all__ = [
    # Pipeline
    "generate_primitives",
    "PrimitiveTable",
    # Stages
    "build_base_primitives",
    "expand_primitives",
    "expand_heading",
    "add_intermediate_poses",
    "compute_intermediate_poses",
    # Types
    "MovementType",
    "Primitive",
    "SpeedTable",
]
