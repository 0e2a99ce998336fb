"""
mprimgen Python Package

Generates discretized motion primitive tables for grid-based lattice
planners with a fixed number of discrete headings.

Key components:
- MobilityProfile: which motions a vehicle supports and their cost
- GenerationConfig: grid size, heading count and discretization tolerances
- generate_primitives: builds a PrimitiveTable from both
- PrimitiveTable: primitives, speed lookup and text export
"""

from ._version import __version__
from .config import GenerationConfig, MobilityProfile
from .primitives import (
    MovementType,
    Primitive,
    PrimitiveTable,
    SpeedTable,
    generate_primitives,
)
from .utils.errors import ConfigurationError

__all__ = [
    "__version__",
    "GenerationConfig",
    "MobilityProfile",
    "generate_primitives",
    "PrimitiveTable",
    "Primitive",
    "MovementType",
    "SpeedTable",
    "ConfigurationError",
]
