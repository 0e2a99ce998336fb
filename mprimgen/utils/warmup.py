"""
JIT warmup utilities.

Call warmup_jit() on startup to pre-compile the numba kernels before a large
generation run. With cache=True, this is fast if the cache exists.
"""

import logging
import time

import numpy as np

from mprimgen.utils.se2_numba import (
    round_half_away,
    se2_apply,
    se2_from_xy_yaw,
    se2_identity,
    se2_inverse,
    se2_mul,
    se2_yaw,
    wrap_angle,
)

logger = logging.getLogger(__name__)


def warmup_jit() -> float:
    """
    Pre-compile all numba JIT functions by calling them with dummy data.

    Returns the time taken in seconds.
    """
    logger.debug("Warming JIT...")
    start = time.perf_counter()

    a = np.zeros((3, 3), dtype=np.float64)
    b = np.zeros((3, 3), dtype=np.float64)
    out = np.zeros((3, 3), dtype=np.float64)

    se2_identity(a)
    se2_from_xy_yaw(0.0, 0.0, 0.0, b)
    se2_mul(a, b, out)
    se2_inverse(b, out)
    se2_apply(b, 0.0, 0.0)
    se2_yaw(b)
    wrap_angle(0.0)
    round_half_away(0.0)

    elapsed = time.perf_counter() - start
    logger.debug("JIT warmup done in %.3fs", elapsed)
    return elapsed
