"""
Equation selection and per-tick integration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from . import config
from .attractors import Attractor, attractor_name, get_attractor, step
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    attractor: Attractor = field(default_factory=lambda: get_attractor(config.DEFAULT_EQUATION))
    substeps: int = config.DEFAULT_SUBSTEPS
    dt_exponent: float = config.DEFAULT_DT_EXPONENT
    base_dt: float = config.SIM_DT
    dt_increment: float = config.DT_EXPONENT_INCREMENT

    def __post_init__(self):
        if self.substeps < 0:
            raise ConfigurationError(f"substeps must be >= 0, got {self.substeps}")
        if self.base_dt <= 0:
            raise ConfigurationError(f"base_dt must be positive, got {self.base_dt}")

    @property
    def dt_multiplier(self) -> float:
        return 2.0 ** self.dt_exponent

    @property
    def effective_dt(self) -> float:
        return self.base_dt * self.dt_multiplier

    def select_equation(self, name: str) -> None:
        self.attractor = get_attractor(name)
        logger.info("Equation set to %s", name)

    def increase_substeps(self) -> None:
        self.substeps += 1
        logger.info("Substeps per tick: %d", self.substeps)

    def decrease_substeps(self) -> None:
        # zero means paused; never goes below it
        if self.substeps > 0:
            self.substeps -= 1
        logger.info("Substeps per tick: %d", self.substeps)

    def increase_dt_exponent(self) -> None:
        self.dt_exponent += self.dt_increment
        logger.info("dt multiplier: %.2f", self.dt_multiplier)

    def decrease_dt_exponent(self) -> None:
        self.dt_exponent -= self.dt_increment
        logger.info("dt multiplier: %.2f", self.dt_multiplier)

    def describe(self) -> str:
        return (
            f"{attractor_name(self.attractor)}, {self.substeps} substeps, "
            f"dt={self.effective_dt:g}"
        )


def advance(positions, sim: SimulationConfig) -> np.ndarray:
    """Apply the active step function `sim.substeps` times, each with the full effective dt."""
    out = np.asarray(positions, dtype=float)
    dt = sim.effective_dt
    for _ in range(sim.substeps):
        out = step(sim.attractor, out, dt)
    return out


class Stepper:
    """Runs one integration tick over the particle store."""

    __slots__ = ("sim", "_diverged")

    def __init__(self, sim: SimulationConfig) -> None:
        self.sim = sim
        self._diverged = False

    def tick(self, store) -> None:
        if store.count == 0 or self.sim.substeps == 0:
            return
        # divergence is allowed to run to inf/nan
        with np.errstate(over="ignore", invalid="ignore"):
            store.positions = advance(store.positions, self.sim)

        finite = bool(np.isfinite(store.positions).all())
        if not finite and not self._diverged:
            logger.warning(
                "Integration diverged (%s); clear the particles or lower dt",
                self.sim.describe(),
            )
        self._diverged = not finite
