"""Primitive id to signed speed lookup used when executing a planned path."""

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


class SpeedTable:
    """Signed speed per primitive id.

    Entries are appended per base primitive and later replicated so that every
    sub-primitive id ``base_id * partition + k`` resolves to its base's speed.
    Backward motions carry a negative speed.
    """

    def __init__(self, speeds: Iterable[float] = ()):
        self._speeds: list[float] = [float(s) for s in speeds]

    def append(self, speed: float) -> None:
        self._speeds.append(float(speed))

    def replicated(self, partition: int) -> "SpeedTable":
        """Return a table with each entry repeated ``partition`` times."""
        return SpeedTable(s for s in self._speeds for _ in range(partition))

    def get_speed(self, prim_id: int) -> float | None:
        """Speed for prim_id, or None (with a warning) if the id is unknown."""
        if prim_id < 0 or prim_id >= len(self._speeds):
            logger.warning("Speed for primitive id %d is not available", prim_id)
            return None
        return self._speeds[prim_id]

    def as_list(self) -> list[float]:
        return list(self._speeds)

    def __len__(self) -> int:
        return len(self._speeds)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpeedTable):
            return NotImplemented
        return self._speeds == other._speeds

    def __repr__(self) -> str:
        return f"SpeedTable({self._speeds!r})"
