"""
Simulation State (Data Model)
=============================
This module defines the data structures of a running simulation session.

Why is this file needed?
------------------------
1. State Management: The ODE state, the model parameters and the camera angles
   each live in one named structure instead of loose instance fields.
2. Single owner: FrameDriver owns the session; OrbitCamera owns the camera
   state. Nothing else mutates them.
3. Decoupling: Views read from these objects; Controllers write to them.

Classes:
    SimState: Instantaneous (v, w, t) of the FitzHugh-Nagumo system.
    Parameters: Model and integration constants.
    CameraState: Spherical camera coordinates.
    SessionState: Container for everything a session owns.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Optional

from phasetube.config import (
    SimulationConfig, INITIAL_V, INITIAL_W, INITIAL_T, TIME_SCALE,
    INITIAL_THETA, INITIAL_PHI, INITIAL_DISTANCE,
)
from phasetube.model.geometry_primitives import Point3D
from phasetube.model.trajectory import TrajectoryBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimState:
    """
    Instantaneous state of the ODE.
    v: membrane potential, w: recovery variable, t: simulated time.
    """
    v: float = INITIAL_V
    w: float = INITIAL_W
    t: float = INITIAL_T

    def to_point(self, time_scale: float = TIME_SCALE) -> Point3D:
        """Maps the state into render space as (v, w, t / time_scale)."""
        return Point3D(self.v, self.w, self.t / time_scale)


@dataclass(frozen=True)
class Parameters:
    """FitzHugh-Nagumo model constants plus the fixed integration step."""
    epsilon: float = 0.08
    a: float = 0.7
    b: float = 0.8
    current: float = 0.5  # external stimulus I
    dt: float = 0.02

    def with_changes(self, **changes: float) -> Parameters:
        return replace(self, **changes)


@dataclass
class CameraState:
    """
    Spherical camera coordinates around the origin.
    theta/phi in degrees; phi is kept within PHI_LIMITS and distance within
    DISTANCE_LIMITS by OrbitCamera.
    """
    theta: float = INITIAL_THETA
    phi: float = INITIAL_PHI
    distance: float = INITIAL_DISTANCE

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.theta, self.phi, self.distance)


@dataclass
class SessionState:
    """
    Everything a simulation session owns.
    Pass this instance to the FrameDriver; the views only read from it.
    """
    config: SimulationConfig = field(default_factory=SimulationConfig)
    sim: SimState = field(default_factory=SimState)
    parameters: Optional[Parameters] = None
    trajectory: Optional[TrajectoryBuffer] = None

    def __post_init__(self) -> None:
        if self.parameters is None:
            self.parameters = self.config.default_parameters()
        if self.trajectory is None:
            self.trajectory = TrajectoryBuffer(capacity=self.config.max_points)

    def reset(self) -> None:
        """
        Restore the initial ODE state and clear the trajectory.
        Tuned parameters (epsilon, a, I) are kept.
        """
        self.sim = SimState()
        self.trajectory.clear()
        logger.info("Simulation state has been reset.")
