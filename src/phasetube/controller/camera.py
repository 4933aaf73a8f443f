"""
Orbit Camera
============
Maps pointer gestures onto a camera that circles the origin.

The camera is fully described by CameraState (theta, phi, distance). Position,
look direction and up vector are derived on every read and never cached, so
the spherical coordinates stay the single source of truth.
"""
from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Optional, Tuple

from phasetube.config import (
    PHI_LIMITS, DISTANCE_LIMITS, DRAG_SENSITIVITY, ZOOM_IN_FACTOR, ZOOM_OUT_FACTOR, clamp,
)
from phasetube.model.geometry_primitives import Vector
from phasetube.model.state import CameraState

logger = logging.getLogger(__name__)

UP = Vector(0.0, 1.0, 0.0)


class OrbitCamera:
    def __init__(self, state: Optional[CameraState] = None) -> None:
        self._state = replace(state) if state is not None else CameraState()
        self._clamp()

        # Drag gesture state
        self._rotating: bool = False
        self._last_pos: Optional[Tuple[float, float]] = None

    # --- STATE ---

    @property
    def state(self) -> CameraState:
        return self._state

    @property
    def is_rotating(self) -> bool:
        return self._rotating

    def reset(self) -> None:
        """Back to theta=45, phi=30, distance=8; cancels any drag in progress."""
        self._state = CameraState()
        self._rotating = False
        self._last_pos = None

    def _clamp(self) -> None:
        self._state.phi = clamp(self._state.phi, *PHI_LIMITS)
        self._state.distance = clamp(self._state.distance, *DISTANCE_LIMITS)

    # --- UPDATES ---

    def update_from_drag(self, delta_x: float, delta_y: float) -> None:
        """Horizontal motion orbits around Y; vertical motion tilts (clamped)."""
        self._state.theta += delta_x * DRAG_SENSITIVITY
        self._state.phi = clamp(self._state.phi - delta_y * DRAG_SENSITIVITY, *PHI_LIMITS)

    def update_from_wheel(self, delta_sign: float) -> None:
        """Positive sign zooms in, anything else zooms out."""
        factor = ZOOM_IN_FACTOR if delta_sign > 0 else ZOOM_OUT_FACTOR
        self._state.distance = clamp(self._state.distance * factor, *DISTANCE_LIMITS)

    # --- DRAG GESTURE ---

    def begin_drag(self, pos: Tuple[float, float]) -> None:
        self._rotating = True
        self._last_pos = (float(pos[0]), float(pos[1]))

    def drag_to(self, pos: Tuple[float, float]) -> bool:
        """
        Rotates by the motion since the last pointer position.

        Returns:
            True if the camera moved; False when no drag is in progress.
        """
        if not self._rotating or self._last_pos is None:
            return False

        x, y = float(pos[0]), float(pos[1])
        self.update_from_drag(x - self._last_pos[0], y - self._last_pos[1])
        self._last_pos = (x, y)
        return True

    def end_drag(self) -> None:
        self._rotating = False
        self._last_pos = None

    # --- DERIVED TRANSFORM ---

    def position(self) -> Vector:
        theta = math.radians(self._state.theta)
        phi = math.radians(self._state.phi)
        r = self._state.distance
        return Vector(
            x=r * math.sin(phi) * math.cos(theta),
            y=r * math.cos(phi),
            z=r * math.sin(phi) * math.sin(theta),
        )

    def look_direction(self) -> Vector:
        """Always towards the origin."""
        return -self.position()

    def up(self) -> Vector:
        return UP

    def __repr__(self) -> str:
        s = self._state
        return f"OrbitCamera(theta={s.theta:.1f}, phi={s.phi:.1f}, distance={s.distance:.2f})"
