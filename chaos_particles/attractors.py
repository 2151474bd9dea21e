"""
Attractor library.

Every attractor is a frozen dataclass holding the constants of one family of
ODEs. Its step() does one explicit (forward) Euler update of a position, or of
a whole (n, 3) batch of positions, and returns a new array.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Union

import numpy as np

from .errors import ConfigurationError


def _unpack(positions):
    arr = np.asarray(positions, dtype=float)
    if arr.shape[-1:] != (3,):
        raise ValueError(f"expected positions with a trailing axis of 3, got shape {arr.shape}")
    return arr[..., 0], arr[..., 1], arr[..., 2]


def _pack(x, y, z) -> np.ndarray:
    return np.stack((x, y, z), axis=-1)


@dataclass(frozen=True)
class Basic:
    """Uniform drift along every axis; rate 0 keeps particles where they spawned."""
    rate: float = 1.0

    def step(self, positions, dt: float) -> np.ndarray:
        x, y, z = _unpack(positions)
        shift = self.rate * dt
        return _pack(x + shift, y + shift, z + shift)


@dataclass(frozen=True)
class Lorenz:
    rho: float = 28.0
    sigma: float = 10.0
    beta: float = 8.0 / 3.0

    def step(self, positions, dt: float) -> np.ndarray:
        x, y, z = _unpack(positions)
        return _pack(
            x + self.sigma * (y - x) * dt,
            y + (x * (self.rho - z) - z) * dt,
            z + (x * y - self.beta * z) * dt,
        )


@dataclass(frozen=True)
class Rossler:
    a: float = 0.2
    b: float = 0.2
    c: float = 5.7

    def step(self, positions, dt: float) -> np.ndarray:
        x, y, z = _unpack(positions)
        return _pack(
            x + (-y - z) * dt,
            y + (x + self.a * y) * dt,
            z + (self.b + z * (x - self.c)) * dt,
        )


Attractor = Union[Basic, Lorenz, Rossler]

FAMILIES = {
    "basic": Basic,
    "lorenz": Lorenz,
    "rossler": Rossler,
}

# named presets, in key-binding order
ATTRACTORS = {
    "basic": Basic(rate=1.0),
    "lorenz": Lorenz(rho=28.0, sigma=10.0, beta=8.0 / 3.0),
    "rossler-a": Rossler(a=0.1, b=0.1, c=14.0),
    "rossler-b": Rossler(a=0.2, b=0.2, c=5.7),
}


def step(attractor: Attractor, positions, dt: float) -> np.ndarray:
    """Advance positions by one Euler step of the given attractor."""
    if not isinstance(attractor, tuple(FAMILIES.values())):
        raise TypeError(f"not an attractor: {attractor!r}")
    return attractor.step(positions, dt)


def make_attractor(family: str, *params: float) -> Attractor:
    """Build the general form of a family from its constants, in declaration order.

    >>> make_attractor("lorenz", 28.0, 10.0, 8.0 / 3.0)
    Lorenz(rho=28.0, sigma=10.0, beta=2.6666666666666665)
    """
    try:
        cls = FAMILIES[family]
    except KeyError:
        raise ConfigurationError(
            f"unknown attractor family {family!r}, expected one of {sorted(FAMILIES)}"
        ) from None

    names = [f.name for f in fields(cls)]
    if len(params) != len(names):
        raise ConfigurationError(
            f"{family} takes {len(names)} parameters ({', '.join(names)}), got {len(params)}"
        )
    return cls(*(float(p) for p in params))


def get_attractor(name: str) -> Attractor:
    try:
        return ATTRACTORS[name]
    except KeyError:
        raise ConfigurationError(
            f"unknown equation {name!r}, expected one of {list(ATTRACTORS)}"
        ) from None


def attractor_name(attractor: Attractor) -> str:
    """Preset name of an attractor, or its repr for custom parameter sets."""
    for name, preset in ATTRACTORS.items():
        if preset == attractor:
            return name
    return repr(attractor)
