"""
Window-independent frame loop: key actions, camera, spawning and the
fixed-rate integration ticks, in that order.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np

from . import config
from .camera import FrameInput, OrbitCamera, OrbitCameraState
from .controls import CLUSTER_MODIFIER, actions_for_keys, apply_actions
from .coords import to_display
from .particles import ParticleStore
from .spawn import spawn_at_cursor
from .stepper import SimulationConfig, Stepper

logger = logging.getLogger(__name__)

# cap so a long stall doesn't turn into a burst of catch-up ticks
MAX_TICKS_PER_FRAME = 8


def ticks_due(accumulator: float, elapsed: float, tick_dt: float, max_ticks: int = MAX_TICKS_PER_FRAME):
    """Return (ticks to run now, leftover time) for a fixed-rate loop."""
    accumulator += elapsed
    ticks = int(accumulator // tick_dt)
    if ticks > max_ticks:
        ticks = max_ticks
        accumulator = 0.0
    else:
        accumulator -= ticks * tick_dt
    return ticks, accumulator


def format_stats(fps: Optional[float], count: int, substeps: int, dt_multiplier: float) -> str:
    fps_text = f"{fps:>4.0f}fps" if fps else " N/A"
    return f"{fps_text} | {count} particles | {substeps} steps per frame | dt={dt_multiplier:.2f}"


def default_camera() -> OrbitCamera:
    return OrbitCamera(OrbitCameraState(radius=config.CAMERA_RADIUS))


class Simulation:
    """Owns the particle store, integration settings and the camera."""

    def __init__(
        self,
        sim: Optional[SimulationConfig] = None,
        camera: Optional[OrbitCamera] = None,
        store: Optional[ParticleStore] = None,
        tick_hz: float = config.FIXED_TICK_HZ,
    ) -> None:
        self.sim = sim if sim is not None else SimulationConfig()
        self.camera = camera
        self.store = store if store is not None else ParticleStore()
        self.stepper = Stepper(self.sim)
        self.tick_dt = 1.0 / tick_hz
        self._accumulator = 0.0

    def tick(self) -> None:
        self.stepper.tick(self.store)

    def frame(
        self,
        frame: FrameInput,
        elapsed: float,
        cursor: Optional[Tuple[float, float]] = None,
        viewport: Tuple[float, float] = (config.WIDTH, config.HEIGHT),
        spawning: bool = False,
    ) -> bool:
        """Run one display frame. Returns False once a quit was requested."""
        running = apply_actions(actions_for_keys(frame.just_pressed), self.sim, self.store)
        if not running:
            return False

        if self.camera is not None:
            self.camera.update(frame)

        if spawning:
            width, height = viewport
            spawn_at_cursor(
                self.store,
                self.camera,
                cursor,
                width,
                height,
                cluster=CLUSTER_MODIFIER in frame.pressed,
            )

        ticks, self._accumulator = ticks_due(self._accumulator, elapsed, self.tick_dt)
        for _ in range(ticks):
            self.tick()
        return True

    def display_positions(self) -> np.ndarray:
        return to_display(self.store.positions)

    def stats(self, fps: Optional[float]) -> str:
        return format_stats(fps, self.store.count, self.sim.substeps, self.sim.dt_multiplier)
