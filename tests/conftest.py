"""Shared fixtures for the phasetube test suite."""

import numpy as np
import pytest

from phasetube.config import SimulationConfig
from phasetube.controller.frame_driver import FrameDriver
from phasetube.model.state import Parameters, SimState


@pytest.fixture
def default_params():
    """Default FitzHugh-Nagumo parameters (epsilon=0.08, a=0.7, b=0.8, I=0.5, dt=0.02)."""
    return Parameters()


@pytest.fixture
def initial_state():
    return SimState()


@pytest.fixture
def driver():
    return FrameDriver(SimulationConfig())


@pytest.fixture
def small_driver():
    """Driver with a tiny buffer so eviction kicks in after a few ticks."""
    return FrameDriver(SimulationConfig(max_points=10, steps_per_frame=3))


@pytest.fixture
def helix_points():
    """Smooth, non-degenerate 3D curve with 20 points."""
    s = np.linspace(0.0, 4.0 * np.pi, 20)
    return np.column_stack([np.cos(s), np.sin(s), 0.1 * s])
