"""
Pan / orbit / zoom camera.

The camera is described by a focus point (center), a distance from it
(radius) and two angles (yaw, pitch). Every frame the pointer and scroll input
is folded into that state and, when something moved, the world transform is
rebuilt from it. Y is up and the camera looks down its local -Z axis.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from . import config
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# allowed radius range; zoom saturates at the bounds
MIN_RADIUS = 1e-9
MAX_RADIUS = 1e12


class PanOrbitAction(enum.Enum):
    PAN = "pan"
    ORBIT = "orbit"
    ZOOM = "zoom"


class ScrollUnit(enum.Enum):
    LINE = "line"    # notched wheels, like desktop mice
    PIXEL = "pixel"  # smooth scrolling, like touchpads


@dataclass(frozen=True)
class ScrollEvent:
    unit: ScrollUnit
    x: float
    y: float


@dataclass(frozen=True)
class FrameInput:
    """Everything the camera reads from the input collaborator for one frame.

    Keys are identified by name (pygame.key.name() strings, e.g. "left alt").
    """
    motion: Sequence[Tuple[float, float]] = ()
    scroll: Sequence[ScrollEvent] = ()
    pressed: frozenset = frozenset()
    just_pressed: frozenset = frozenset()


@dataclass(frozen=True)
class OrbitCameraSettings:
    pan_sensitivity: float = config.PAN_SENSITIVITY
    orbit_sensitivity: float = config.ORBIT_SENSITIVITY
    zoom_sensitivity: float = config.ZOOM_SENSITIVITY
    pan_key: Optional[str] = "left ctrl"
    orbit_key: Optional[str] = "left alt"
    zoom_key: Optional[str] = "z"
    scroll_action: Optional[PanOrbitAction] = PanOrbitAction.ZOOM
    scroll_line_sensitivity: float = config.SCROLL_LINE_SENSITIVITY
    scroll_pixel_sensitivity: float = config.SCROLL_PIXEL_SENSITIVITY

    def sensitivity(self, action: PanOrbitAction) -> float:
        if action is PanOrbitAction.PAN:
            return self.pan_sensitivity
        if action is PanOrbitAction.ORBIT:
            return self.orbit_sensitivity
        return self.zoom_sensitivity

    def key(self, action: PanOrbitAction) -> Optional[str]:
        if action is PanOrbitAction.PAN:
            return self.pan_key
        if action is PanOrbitAction.ORBIT:
            return self.orbit_key
        return self.zoom_key


@dataclass
class OrbitCameraState:
    center: np.ndarray = field(default_factory=lambda: np.zeros(3))
    radius: float = 1.0
    yaw: float = 0.0
    pitch: float = 0.0
    upside_down: bool = False

    def __post_init__(self):
        self.center = np.asarray(self.center, dtype=float).reshape(3)
        if not MIN_RADIUS <= self.radius <= MAX_RADIUS:
            raise ConfigurationError(
                f"camera radius must be within [{MIN_RADIUS:g}, {MAX_RADIUS:g}], got {self.radius}"
            )
        self.yaw = wrap_angle(self.yaw)
        self.pitch = wrap_angle(self.pitch)


@dataclass
class CameraTransform:
    """World transform; rotation columns are the local X, Y and Z axes."""
    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.eye(3))

    def right(self) -> np.ndarray:
        return self.rotation[:, 0].copy()

    def up(self) -> np.ndarray:
        return self.rotation[:, 1].copy()

    def back(self) -> np.ndarray:
        return self.rotation[:, 2].copy()

    def down(self) -> np.ndarray:
        return -self.up()

    def forward(self) -> np.ndarray:
        return -self.back()

    def view_matrix(self) -> np.ndarray:
        """4x4 world to camera matrix."""
        m = np.eye(4)
        m[:3, :3] = self.rotation.T
        m[:3, 3] = -self.rotation.T @ self.translation
        return m


def wrap_angle(angle: float) -> float:
    """Wrap into (-pi, pi]."""
    wrapped = math.remainder(angle, math.tau)
    if wrapped <= -math.pi:
        wrapped += math.tau
    return wrapped


def rotation_from_yaw_pitch(yaw: float, pitch: float) -> np.ndarray:
    """Yaw about Y, then pitch about the local X, no roll."""
    cy, sy = math.cos(yaw), math.sin(yaw)
    cp, sp = math.cos(pitch), math.sin(pitch)
    ry = np.array([
        [cy, 0.0, sy],
        [0.0, 1.0, 0.0],
        [-sy, 0.0, cy],
    ])
    rx = np.array([
        [1.0, 0.0, 0.0],
        [0.0, cp, -sp],
        [0.0, sp, cp],
    ])
    return ry @ rx


def accumulate_motion(motion: Iterable[Tuple[float, float]]) -> np.ndarray:
    total = np.zeros(2)
    for dx, dy in motion:
        total[0] += dx
        total[1] += dy
    # window coordinates are Y-down, the camera is Y-up
    total[1] = -total[1]
    return total


def accumulate_scroll(events: Iterable[ScrollEvent]) -> Tuple[np.ndarray, np.ndarray]:
    lines = np.zeros(2)
    pixels = np.zeros(2)
    for ev in events:
        target = lines if ev.unit is ScrollUnit.LINE else pixels
        target[0] += ev.x
        target[1] -= ev.y
    return lines, pixels


class OrbitCamera:
    """One orbit camera: settings, spherical state and the derived transform."""

    def __init__(
        self,
        state: Optional[OrbitCameraState] = None,
        settings: Optional[OrbitCameraSettings] = None,
        fov: float = config.CAMERA_FOV,
    ) -> None:
        self.state = state if state is not None else OrbitCameraState()
        self.settings = settings if settings is not None else OrbitCameraSettings()
        self.transform = CameraTransform()
        self.fov = fov
        # set until the transform has been built once
        self.fresh = True

    def maneuver_delta(
        self,
        action: PanOrbitAction,
        motion: np.ndarray,
        scroll_lines: np.ndarray,
        scroll_pixels: np.ndarray,
        pressed,
    ) -> np.ndarray:
        settings = self.settings
        sensitivity = settings.sensitivity(action)
        delta = np.zeros(2)

        key = settings.key(action)
        if key is not None and key in pressed:
            delta -= motion * sensitivity
        if settings.scroll_action is action:
            delta -= scroll_lines * settings.scroll_line_sensitivity * sensitivity
            delta -= scroll_pixels * settings.scroll_pixel_sensitivity * sensitivity
        return delta

    def apply(
        self,
        motion: np.ndarray,
        scroll_lines: np.ndarray,
        scroll_pixels: np.ndarray,
        pressed=frozenset(),
        just_pressed=frozenset(),
    ) -> bool:
        """Fold one frame of accumulated input into the camera.

        Returns True when the transform was rebuilt.
        """
        state = self.state
        settings = self.settings

        total_pan = self.maneuver_delta(PanOrbitAction.PAN, motion, scroll_lines, scroll_pixels, pressed)
        total_orbit = self.maneuver_delta(PanOrbitAction.ORBIT, motion, scroll_lines, scroll_pixels, pressed)
        total_zoom = self.maneuver_delta(PanOrbitAction.ZOOM, motion, scroll_lines, scroll_pixels, pressed)

        # a new orbit maneuver remembers whether it started upside down
        if settings.orbit_key is not None and settings.orbit_key in just_pressed:
            state.upside_down = state.pitch < -math.pi / 2 or state.pitch > math.pi / 2

        if state.upside_down:
            total_orbit[0] = -total_orbit[0]

        changed = False

        if total_zoom.any():
            changed = True
            log_radius = math.log(state.radius) - total_zoom[1]
            log_radius = min(max(log_radius, math.log(MIN_RADIUS)), math.log(MAX_RADIUS))
            state.radius = math.exp(log_radius)

        if total_orbit.any():
            changed = True
            state.yaw = wrap_angle(state.yaw + total_orbit[0])
            state.pitch = wrap_angle(state.pitch - total_orbit[1])

        if total_pan.any():
            changed = True
            radius = state.radius
            state.center = (
                state.center
                + self.transform.right() * total_pan[0] * radius
                + self.transform.up() * total_pan[1] * radius
            )

        needs_rebuild = changed or self.fresh
        if needs_rebuild:
            self.rebuild_transform()
        return needs_rebuild

    def rebuild_transform(self) -> None:
        state = self.state
        self.transform.rotation = rotation_from_yaw_pitch(state.yaw, state.pitch)
        self.transform.translation = state.center + self.transform.back() * state.radius
        if self.fresh:
            logger.debug(
                "Camera initialized at %s looking at %s", self.transform.translation, state.center
            )
        self.fresh = False

    def update(self, frame: FrameInput) -> bool:
        motion = accumulate_motion(frame.motion)
        lines, pixels = accumulate_scroll(frame.scroll)
        return self.apply(motion, lines, pixels, frame.pressed, frame.just_pressed)


def update_cameras(cameras: Iterable[OrbitCamera], frame: FrameInput) -> None:
    """Accumulate the frame's input once and hand it to every camera."""
    motion = accumulate_motion(frame.motion)
    lines, pixels = accumulate_scroll(frame.scroll)
    for camera in cameras:
        camera.apply(motion, lines, pixels, frame.pressed, frame.just_pressed)
