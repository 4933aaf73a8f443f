"""
Unit tests for OrbitCamera.

Tests cover:
1. Initial transform (position, look direction, up vector)
2. Drag and wheel updates with their clamps
3. Drag gesture gating
4. Reset
"""

import random

import pytest

from phasetube.controller.camera import OrbitCamera
from phasetube.model.state import CameraState


@pytest.fixture
def camera():
    return OrbitCamera()


class TestTransform:
    def test_initial_position(self, camera):
        pos = camera.position()
        assert pos.x == pytest.approx(2.8284, abs=1e-4)
        assert pos.y == pytest.approx(6.9282, abs=1e-4)
        assert pos.z == pytest.approx(2.8284, abs=1e-4)
        assert pos.magnitude == pytest.approx(8.0)

    def test_looks_at_origin(self, camera):
        camera.update_from_drag(37.0, -12.0)
        pos, look = camera.position(), camera.look_direction()
        assert look.to_tuple() == pytest.approx((-pos.x, -pos.y, -pos.z))

    def test_up_is_world_y(self, camera):
        assert camera.up().to_tuple() == (0.0, 1.0, 0.0)

    def test_position_tracks_distance(self, camera):
        camera.update_from_wheel(+1)
        assert camera.position().magnitude == pytest.approx(7.2)


class TestDrag:
    def test_drag_math(self, camera):
        camera.update_from_drag(10.0, 4.0)
        assert camera.state.theta == pytest.approx(50.0)
        assert camera.state.phi == pytest.approx(28.0)

    def test_theta_is_unbounded(self, camera):
        camera.update_from_drag(1000.0, 0.0)
        assert camera.state.theta == pytest.approx(545.0)

    @pytest.mark.parametrize("delta_y,expected", [(1000.0, 5.0), (-1000.0, 175.0)])
    def test_phi_clamped(self, camera, delta_y, expected):
        camera.update_from_drag(0.0, delta_y)
        assert camera.state.phi == expected


class TestWheel:
    def test_zoom_in(self, camera):
        camera.update_from_wheel(1)
        assert camera.state.distance == pytest.approx(7.2)

    def test_zoom_out(self, camera):
        camera.update_from_wheel(-1)
        assert camera.state.distance == pytest.approx(8.8)

    def test_zero_sign_zooms_out(self, camera):
        camera.update_from_wheel(0)
        assert camera.state.distance == pytest.approx(8.8)

    def test_distance_clamped(self, camera):
        for _ in range(100):
            camera.update_from_wheel(1)
        assert camera.state.distance == 2.0
        for _ in range(100):
            camera.update_from_wheel(-1)
        assert camera.state.distance == 20.0


class TestGesture:
    def test_move_without_press_is_ignored(self, camera):
        assert camera.drag_to((50, 50)) is False
        assert camera.state.as_tuple() == (45.0, 30.0, 8.0)

    def test_drag_uses_deltas_between_moves(self, camera):
        camera.begin_drag((100, 100))
        assert camera.is_rotating
        assert camera.drag_to((110, 100)) is True
        assert camera.drag_to((120, 96)) is True

        assert camera.state.theta == pytest.approx(55.0)
        assert camera.state.phi == pytest.approx(32.0)

    def test_release_stops_rotation(self, camera):
        camera.begin_drag((0, 0))
        camera.end_drag()
        assert not camera.is_rotating
        assert camera.drag_to((100, 100)) is False
        assert camera.state.theta == 45.0


class TestReset:
    def test_reset(self, camera):
        camera.begin_drag((0, 0))
        camera.drag_to((40, 40))
        camera.update_from_wheel(1)
        camera.reset()

        assert camera.state.as_tuple() == (45.0, 30.0, 8.0)
        assert not camera.is_rotating

    def test_initial_state_is_clamped(self):
        camera = OrbitCamera(CameraState(theta=0.0, phi=0.0, distance=100.0))
        assert camera.state.phi == 5.0
        assert camera.state.distance == 20.0

    def test_initial_state_is_copied(self):
        initial = CameraState(theta=10.0, phi=0.0, distance=100.0)
        camera = OrbitCamera(initial)
        camera.update_from_drag(20.0, 0.0)

        assert initial == CameraState(theta=10.0, phi=0.0, distance=100.0)
        assert camera.state is not initial


def test_random_gestures_keep_limits():
    rng = random.Random(1234)
    camera = OrbitCamera()
    for _ in range(2000):
        if rng.random() < 0.5:
            camera.update_from_drag(rng.uniform(-200, 200), rng.uniform(-200, 200))
        else:
            camera.update_from_wheel(rng.choice([-1, 1]))

        assert 5.0 <= camera.state.phi <= 175.0
        assert 2.0 <= camera.state.distance <= 20.0
        assert camera.position().magnitude == pytest.approx(camera.state.distance)
