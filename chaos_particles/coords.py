"""
Conversion between simulation space (attractor coordinates, near unit scale)
and display space (camera and scene scale).
"""

import numpy as np

from .config import VIRT_ZOOM


def to_simulation(p) -> np.ndarray:
    return np.asarray(p, dtype=float) / VIRT_ZOOM


def to_display(p) -> np.ndarray:
    return np.asarray(p, dtype=float) * VIRT_ZOOM
