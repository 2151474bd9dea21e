"""
Particle store: spawn one, spawn a jittered cluster, clear everything.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .config import CLUSTER_SIZE

logger = logging.getLogger(__name__)


class ParticleStore:
    """Live particle positions in simulation space, one row per particle."""

    __slots__ = ("_positions", "count", "rng")

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self._positions = np.empty((0, 3), dtype=float)
        self.count = 0
        self.rng = rng if rng is not None else np.random.default_rng()

    @property
    def positions(self) -> np.ndarray:
        return self._positions

    @positions.setter
    def positions(self, value) -> None:
        value = np.asarray(value, dtype=float)
        if value.shape != self._positions.shape:
            raise ValueError(
                f"positions must keep shape {self._positions.shape}, got {value.shape}"
            )
        self._positions = value

    def __len__(self) -> int:
        return len(self._positions)

    def spawn_one(self, sim_pos) -> None:
        pos = np.asarray(sim_pos, dtype=float).reshape(1, 3)
        self._positions = np.concatenate((self._positions, pos))
        self.count += 1
        logger.debug("Spawned particle at %s", pos[0])

    def spawn_cluster(self, sim_pos, n: int = CLUSTER_SIZE) -> None:
        """Spawn n particles at sim_pos, each offset by uniform [0, 1) jitter per axis."""
        if n <= 0:
            return
        base = np.asarray(sim_pos, dtype=float).reshape(1, 3)
        cluster = base + self.rng.random((n, 3))
        self._positions = np.concatenate((self._positions, cluster))
        self.count += n
        logger.debug("Spawned cluster of %d around %s", n, base[0])

    def despawn_all(self) -> None:
        removed = self.count
        self._positions = np.empty((0, 3), dtype=float)
        self.count = 0
        logger.info("Cleared %d particles", removed)
