"""
Cursor -> spawn point.

The cursor is mapped onto the plane through the camera's focus point, facing
the camera. This matches a true ray cast only on the orbit sphere, which is
where particles get placed in normal use.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

import numpy as np

from .camera import OrbitCamera
from .coords import to_simulation
from .particles import ParticleStore

logger = logging.getLogger(__name__)


def resolve_spawn_point(
    camera: Optional[OrbitCamera],
    cursor: Optional[Tuple[float, float]],
    width: float,
    height: float,
) -> Optional[np.ndarray]:
    """Display-space point under the cursor, or None when it can't be resolved.

    cursor is in window pixels with the origin at the top left.
    """
    if camera is None or cursor is None or width <= 0 or height <= 0:
        return None

    half_width = width / 2.0
    half_height = height / 2.0
    px = cursor[0] / half_width - 1.0
    py = cursor[1] / half_height - 1.0

    state = camera.state
    half_extent = state.radius * math.tan(camera.fov / 2.0)
    dx = half_extent * px * (half_width / half_height)
    dy = half_extent * py

    if camera.fresh:
        camera.rebuild_transform()
    transform = camera.transform
    return state.center + transform.down() * dy + transform.right() * dx


def spawn_at_cursor(
    store: ParticleStore,
    camera: Optional[OrbitCamera],
    cursor: Optional[Tuple[float, float]],
    width: float,
    height: float,
    cluster: bool = False,
    cluster_size: Optional[int] = None,
) -> int:
    """Spawn under the cursor; returns how many particles were created."""
    point = resolve_spawn_point(camera, cursor, width, height)
    if point is None:
        return 0

    sim_pos = to_simulation(point)
    if cluster:
        before = store.count
        if cluster_size is None:
            store.spawn_cluster(sim_pos)
        else:
            store.spawn_cluster(sim_pos, cluster_size)
        return store.count - before

    store.spawn_one(sim_pos)
    return 1
