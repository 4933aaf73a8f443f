"""
Configuration & Global Constants
================================
This module serves as the central registry for simulation defaults and global
constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (time steps, slider ranges, camera
   limits) from being scattered throughout the code.
2. Overrides: It loads an optional JSON file so a session can start from a
   different parameter set without editing the source.

Exports:
    SimulationConfig: Dataclass with every tunable default.
    load_config: Reads a JSON override file into a SimulationConfig.
    ConfigError: Raised for unknown keys or out-of-range values.
"""
from __future__ import annotations

import json
import math
import logging
import os
from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from phasetube.model.state import Parameters

logger = logging.getLogger(__name__)


# --- Model parameter ranges (slider limits) ---
EPSILON_RANGE: Tuple[float, float] = (0.01, 0.3)
A_RANGE: Tuple[float, float] = (0.1, 1.5)
CURRENT_RANGE: Tuple[float, float] = (0.0, 2.0)

# --- Initial ODE state ---
INITIAL_V: float = 0.1
INITIAL_W: float = 0.0
INITIAL_T: float = 0.0

# Render space z = t / TIME_SCALE
TIME_SCALE: float = 8.0

# --- Orbit camera ---
INITIAL_THETA: float = 45.0
INITIAL_PHI: float = 30.0
INITIAL_DISTANCE: float = 8.0
PHI_LIMITS: Tuple[float, float] = (5.0, 175.0)
DISTANCE_LIMITS: Tuple[float, float] = (2.0, 20.0)
DRAG_SENSITIVITY: float = 0.5  # degrees per pixel
ZOOM_IN_FACTOR: float = 0.9
ZOOM_OUT_FACTOR: float = 1.1
FIELD_OF_VIEW: float = 60.0
CLIPPING_RANGE: Tuple[float, float] = (0.1, 100.0)

# --- Tick scheduler ---
TICK_INTERVAL_MS: int = 16

# --- Scene decoration ---
AXIS_LENGTH: float = 2.5
AXIS_RADIUS: float = 0.03
ARROW_LENGTH: float = 0.2
ARROW_RADIUS: float = 0.08
GRID_HALF_SIZE: float = 3.0
GRID_DIVISIONS: int = 10
GRID_LINE_RADIUS: float = 0.01
GRID_OPACITY: float = 0.1
TRAJECTORY_OPACITY: float = 0.9

# Oldest -> newest trajectory colour stops (RGB, 0-255)
GRADIENT_STOPS: Tuple[Tuple[int, int, int], ...] = (
    (0, 0, 255),     # blue
    (0, 255, 255),   # cyan
    (255, 255, 0),   # yellow
)


class ConfigError(ValueError):
    """Raised when a configuration file contains invalid entries."""


@dataclass(frozen=True)
class SimulationConfig:
    """
    Tunable defaults of a simulation session.

    Slider-controlled values (epsilon, a, current) must lie in their
    documented ranges; b and dt are fixed for the lifetime of a session.
    """
    dt: float = 0.02
    epsilon: float = 0.08
    a: float = 0.7
    b: float = 0.8
    current: float = 0.5

    max_points: int = 8000
    steps_per_frame: int = 3

    tube_radius: float = 0.025
    tube_segments: int = 8

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raises ConfigError if any value has the wrong type or is outside its valid domain."""
        for name in ("dt", "epsilon", "a", "b", "current", "tube_radius"):
            _check_finite(name, getattr(self, name))
        for name in ("max_points", "steps_per_frame", "tube_segments"):
            _check_int(name, getattr(self, name))

        _check_range("epsilon", self.epsilon, EPSILON_RANGE)
        _check_range("a", self.a, A_RANGE)
        _check_range("current", self.current, CURRENT_RANGE)

        if self.dt <= 0.0:
            raise ConfigError(f"dt must be positive, got {self.dt}.")
        if self.max_points < 2:
            raise ConfigError(f"max_points must be at least 2, got {self.max_points}.")
        if self.steps_per_frame < 1:
            raise ConfigError(f"steps_per_frame must be at least 1, got {self.steps_per_frame}.")
        if self.tube_radius <= 0.0:
            raise ConfigError(f"tube_radius must be positive, got {self.tube_radius}.")
        if self.tube_segments < 3:
            raise ConfigError(f"tube_segments must be at least 3, got {self.tube_segments}.")

    def default_parameters(self) -> Parameters:
        """Builds the initial model parameters for a session."""
        from phasetube.model.state import Parameters

        return Parameters(
            epsilon=self.epsilon,
            a=self.a,
            b=self.b,
            current=self.current,
            dt=self.dt,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SimulationConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigError(str(e)) from e


def _check_finite(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{name} must be a number, got {value!r}.")
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be finite, got {value}.")


def _check_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {value!r}.")


def _check_range(name: str, value: float, bounds: Tuple[float, float]) -> None:
    lo, hi = bounds
    if not lo <= value <= hi:
        raise ConfigError(f"{name}={value} is outside of [{lo}, {hi}].")


def clamp(value: float, lo: float, hi: float) -> float:
    """Restricts value to the closed interval [lo, hi]."""
    return max(lo, min(hi, value))


def load_config(path: Optional[str] = None) -> SimulationConfig:
    """
    Loads a SimulationConfig from a JSON file.

    Args:
        path: Path to a JSON object with any subset of SimulationConfig fields.
              If None, the built-in defaults are returned.

    Raises:
        ConfigError: If the file is not a JSON object, has unknown keys,
            or holds values outside their valid range.
    """
    if path is None:
        return SimulationConfig()

    if not os.path.exists(path):
        raise ConfigError(f"Configuration file not found: {path}")

    logger.info(f"Loading configuration from: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {path}, got {type(data).__name__}.")

    return SimulationConfig.from_dict(data)
