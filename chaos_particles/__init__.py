"""Particles advected by chaotic ODE flows, viewed through an orbit camera."""

__version__ = "0.1.0"
