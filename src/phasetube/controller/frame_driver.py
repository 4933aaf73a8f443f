"""
Frame Driver
============
The per-tick orchestration of the simulation pipeline.

Why is this file needed?
------------------------
1. Ordering: Every tick runs integrate -> append -> trim -> rebuild mesh, in
   that order, so the mesh always matches the buffer.
2. Control surface: Slider changes, the reset button and pointer events enter
   the core through this class only. Out-of-range slider values are clamped.
3. Ownership: It is the exclusive owner of the SessionState and OrbitCamera.

The driver is synchronous and must be called from a single thread (the Qt
event loop serializes timer ticks and mouse events).
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from phasetube.config import SimulationConfig, EPSILON_RANGE, A_RANGE, CURRENT_RANGE, clamp
from phasetube.controller import integrator
from phasetube.controller.camera import OrbitCamera
from phasetube.controller.mesher import build_tube
from phasetube.model.geometry_primitives import Mesh
from phasetube.model.state import SessionState, SimState, Parameters
from phasetube.model.trajectory import TrajectoryBuffer

logger = logging.getLogger(__name__)


class FrameDriver:
    def __init__(self, config: Optional[SimulationConfig] = None) -> None:
        self.config = config if config is not None else SimulationConfig()
        self.session = SessionState(config=self.config)
        self.camera = OrbitCamera()

        self._mesh: Mesh = Mesh.empty()
        self._tick_count: int = 0

        logger.info(
            f"Frame driver ready: {self.config.steps_per_frame} steps/frame, "
            f"capacity {self.config.max_points} points."
        )

    # --- READ ACCESS ---

    @property
    def state(self) -> SimState:
        return self.session.sim

    @property
    def parameters(self) -> Parameters:
        return self.session.parameters

    @property
    def trajectory(self) -> TrajectoryBuffer:
        return self.session.trajectory

    @property
    def mesh(self) -> Mesh:
        """Tube mesh built by the most recent tick."""
        return self._mesh

    @property
    def tick_count(self) -> int:
        return self._tick_count

    # --- TICK ---

    def on_tick(self) -> Mesh:
        """
        Advances the simulation by one frame and rebuilds the tube mesh.

        Returns:
            The new tube mesh (also available as `mesh`).
        """
        steps = self.config.steps_per_frame
        states = integrator.integrate(self.session.sim, self.session.parameters, steps)

        for s in states:
            self.trajectory.append(s.to_point())
        self.session.sim = states[-1]

        removed = self.trajectory.trim_if_overflow(steps)

        self._mesh = build_tube(
            self.trajectory.points(),
            radius=self.config.tube_radius,
            segments=self.config.tube_segments,
        )
        self._tick_count += 1

        logger.debug(
            f"Tick {self._tick_count}: t={self.state.t:.2f}, points={len(self.trajectory)}"
            f" (-{removed}), vertices={self._mesh.n_vertices}"
        )
        return self._mesh

    # --- PARAMETER INTERFACE ---

    def set_epsilon(self, value: float) -> None:
        self._set_parameter("epsilon", value, EPSILON_RANGE)

    def set_a(self, value: float) -> None:
        self._set_parameter("a", value, A_RANGE)

    def set_current(self, value: float) -> None:
        self._set_parameter("current", value, CURRENT_RANGE)

    def _set_parameter(self, name: str, value: float, bounds: Tuple[float, float]) -> None:
        clamped = clamp(float(value), *bounds)
        if clamped != value:
            logger.warning(f"{name}={value} out of range, clamped to {clamped}.")

        self.session.parameters = self.session.parameters.with_changes(**{name: clamped})
        logger.info(f"Parameter {name} set to {clamped:.4f}.")

    def reset(self) -> None:
        """Initial ODE state, empty trajectory and mesh, default camera."""
        self.session.reset()
        self.camera.reset()
        self._mesh = Mesh.empty()
        logger.info("Session reset.")

    # --- POINTER INTERFACE ---

    def on_drag_start(self, pos: Tuple[float, float]) -> None:
        self.camera.begin_drag(pos)

    def on_drag_move(self, pos: Tuple[float, float]) -> bool:
        """Returns True when the camera moved and the view needs a re-render."""
        return self.camera.drag_to(pos)

    def on_drag_end(self) -> None:
        self.camera.end_drag()

    def on_wheel(self, sign: float) -> None:
        self.camera.update_from_wheel(sign)
