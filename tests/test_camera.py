import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from chaos_particles.camera import (
    MAX_RADIUS,
    MIN_RADIUS,
    FrameInput,
    OrbitCamera,
    OrbitCameraSettings,
    OrbitCameraState,
    PanOrbitAction,
    ScrollEvent,
    ScrollUnit,
    accumulate_motion,
    accumulate_scroll,
    rotation_from_yaw_pitch,
    update_cameras,
    wrap_angle,
)
from chaos_particles.errors import ConfigurationError

ZERO = np.zeros(2)


def built_camera(**state):
    camera = OrbitCamera(OrbitCameraState(**state))
    camera.update(FrameInput())
    return camera


def test_accumulate_motion_flips_y():
    assert_allclose(accumulate_motion([(1, 2), (3, 4)]), [4.0, -6.0])


def test_accumulate_scroll_splits_units():
    lines, pixels = accumulate_scroll([
        ScrollEvent(ScrollUnit.LINE, 1.0, 2.0),
        ScrollEvent(ScrollUnit.PIXEL, 5.0, 10.0),
        ScrollEvent(ScrollUnit.LINE, 0.0, 1.0),
    ])
    assert_allclose(lines, [1.0, -3.0])
    assert_allclose(pixels, [5.0, -10.0])


@pytest.mark.parametrize("angle, expected", [
    (0.0, 0.0),
    (math.pi, math.pi),
    (-math.pi, math.pi),
    (3 * math.pi / 2, -math.pi / 2),
    (-3 * math.pi / 2, math.pi / 2),
    (7 * math.tau + 0.25, 0.25),
])
def test_wrap_angle(angle, expected):
    assert wrap_angle(angle) == pytest.approx(expected)


def test_first_update_builds_transform_then_idles():
    camera = OrbitCamera(OrbitCameraState(radius=5.0))
    assert camera.update(FrameInput()) is True
    assert_allclose(camera.transform.translation, [0.0, 0.0, 5.0])

    before = (camera.state.center.copy(), camera.state.radius, camera.state.yaw, camera.state.pitch)
    assert camera.update(FrameInput()) is False
    assert_allclose(camera.state.center, before[0])
    assert (camera.state.radius, camera.state.yaw, camera.state.pitch) == before[1:]


def test_motion_without_keys_does_nothing():
    camera = built_camera()
    assert camera.update(FrameInput(motion=[(30, 40)])) is False


def test_scroll_zooms_exponentially():
    camera = built_camera(radius=10.0)
    camera.update(FrameInput(scroll=[ScrollEvent(ScrollUnit.LINE, 0.0, 1.0)]))
    # -(-1 line) * 16 * 0.01 = 0.16
    assert camera.state.radius == pytest.approx(10.0 * math.exp(-0.16))

    camera.update(FrameInput(scroll=[ScrollEvent(ScrollUnit.PIXEL, 0.0, -16.0)]))
    assert camera.state.radius == pytest.approx(10.0)


@pytest.mark.parametrize("dy", [1000.0, -1000.0, 1e12])
def test_radius_stays_positive_and_finite(dy):
    settings = OrbitCameraSettings(zoom_sensitivity=1.0)
    camera = OrbitCamera(OrbitCameraState(radius=400.0), settings)
    for _ in range(3):
        # delta = -motion * sensitivity, so motion y = -dy gives zoom delta y = dy
        camera.apply(np.array([0.0, -dy]), ZERO, ZERO, pressed={"z"})
        assert camera.state.radius > 0
        assert math.isfinite(camera.state.radius)


def test_orbit_key_changes_yaw_and_pitch():
    camera = built_camera()
    sens = camera.settings.orbit_sensitivity
    camera.update(FrameInput(motion=[(100, 50)], pressed=frozenset({"left alt"})))
    # motion (100, -50) after the flip; delta = -motion * sens
    assert camera.state.yaw == pytest.approx(-100 * sens)
    assert camera.state.pitch == pytest.approx(-50 * sens)


def test_angles_stay_wrapped():
    settings = OrbitCameraSettings(orbit_sensitivity=0.37)
    camera = OrbitCamera(OrbitCameraState(), settings)
    rng = np.random.default_rng(11)
    for motion in rng.normal(scale=40.0, size=(200, 2)):
        camera.apply(motion, ZERO, ZERO, pressed={"left alt"})
        assert -math.pi < camera.state.yaw <= math.pi
        assert -math.pi < camera.state.pitch <= math.pi


def test_upside_down_reverses_horizontal_orbit():
    camera = built_camera(pitch=2.0)
    sens = camera.settings.orbit_sensitivity
    frame = FrameInput(motion=[(100, 0)], pressed=frozenset({"left alt"}), just_pressed=frozenset({"left alt"}))
    camera.update(frame)
    assert camera.state.upside_down is True
    assert camera.state.yaw == pytest.approx(100 * sens)


def test_upside_down_only_sampled_on_key_press():
    camera = built_camera(pitch=2.0)
    camera.update(FrameInput(motion=[(10, 0)], pressed=frozenset({"left alt"})))
    assert camera.state.upside_down is False


def test_pan_follows_camera_axes_and_radius():
    camera = built_camera(radius=400.0)
    camera.update(FrameInput(motion=[(10, 0)], pressed=frozenset({"left ctrl"})))
    # -10 * 0.001 * 400 along +X
    assert_allclose(camera.state.center, [-4.0, 0.0, 0.0], atol=1e-12)
    assert_allclose(camera.transform.translation, [-4.0, 0.0, 400.0], atol=1e-9)


def test_scroll_bound_to_pan():
    settings = OrbitCameraSettings(scroll_action=PanOrbitAction.PAN)
    camera = OrbitCamera(OrbitCameraState(radius=2.0), settings)
    camera.update(FrameInput())
    camera.update(FrameInput(scroll=[ScrollEvent(ScrollUnit.LINE, 1.0, 0.0)]))
    assert camera.state.radius == 2.0
    assert camera.state.center[0] == pytest.approx(-1.0 * 16.0 * 0.001 * 2.0)


def test_camera_looks_at_center():
    camera = built_camera(center=[1.0, 2.0, 3.0], radius=7.0, yaw=0.8, pitch=-0.4)
    t = camera.transform
    assert_allclose(t.rotation.T @ t.rotation, np.eye(3), atol=1e-12)
    assert_allclose(t.translation + t.forward() * 7.0, [1.0, 2.0, 3.0], atol=1e-12)
    assert_allclose(t.view_matrix() @ np.append(camera.state.center, 1.0), [0.0, 0.0, -7.0, 1.0], atol=1e-9)


def test_rotation_yaw_quarter_turn():
    r = rotation_from_yaw_pitch(math.pi / 2, 0.0)
    assert_allclose(r[:, 2], [1.0, 0.0, 0.0], atol=1e-12)
    assert_allclose(r[:, 0], [0.0, 0.0, -1.0], atol=1e-12)


def test_invalid_radius():
    for radius in (0.0, -1.0, 1e-12, 1e13, float("nan")):
        with pytest.raises(ConfigurationError):
            OrbitCameraState(radius=radius)


def test_small_zoom_near_bounds_stays_multiplicative():
    settings = OrbitCameraSettings(zoom_sensitivity=1.0)
    for radius in (MIN_RADIUS, MAX_RADIUS):
        camera = OrbitCamera(OrbitCameraState(radius=radius), settings)
        # zoom delta y = -0.01 grows, +0.01 shrinks
        step = 0.01 if radius == MIN_RADIUS else -0.01
        camera.apply(np.array([0.0, step]), ZERO, ZERO, pressed={"z"})
        assert camera.state.radius == pytest.approx(radius * math.exp(step))


def test_orbit_and_pan_in_one_tick_pan_uses_previous_axes():
    camera = built_camera(radius=400.0)
    sens = camera.settings.orbit_sensitivity
    camera.update(FrameInput(motion=[(10, 0)], pressed=frozenset({"left ctrl", "left alt"})))

    assert camera.state.yaw == pytest.approx(-10 * sens)
    # right axis before the yaw change was +X
    assert_allclose(camera.state.center, [-4.0, 0.0, 0.0], atol=1e-12)
    expected_back = rotation_from_yaw_pitch(-10 * sens, 0.0)[:, 2]
    assert_allclose(camera.transform.translation, camera.state.center + expected_back * 400.0)


def test_unbound_key_is_ignored():
    settings = OrbitCameraSettings(orbit_key=None)
    camera = OrbitCamera(OrbitCameraState(), settings)
    camera.update(FrameInput())
    assert camera.update(FrameInput(motion=[(5, 5)], pressed=frozenset({"left alt"}))) is False


def test_update_cameras_is_independent_per_camera():
    near = OrbitCamera(OrbitCameraState(radius=1.0))
    far = OrbitCamera(OrbitCameraState(radius=100.0))
    update_cameras([near, far], FrameInput(scroll=[ScrollEvent(ScrollUnit.LINE, 0.0, -1.0)]))
    assert near.state.radius == pytest.approx(math.exp(0.16))
    assert far.state.radius == pytest.approx(100.0 * math.exp(0.16))
