"""
Static Scene Geometry
Coordinate axes (cylinder + cone arrow heads) and the ground grid.
These meshes never change during a session and are built once.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from phasetube.config import (
    AXIS_LENGTH, AXIS_RADIUS, ARROW_LENGTH, ARROW_RADIUS,
    GRID_HALF_SIZE, GRID_DIVISIONS, GRID_LINE_RADIUS,
)
from phasetube.controller.mesher import build_cylinder, build_cone
from phasetube.model.geometry_primitives import Mesh, PointLike, as_xyz


@dataclass
class AxisInfo:
    label: str
    description: str
    direction: Tuple[float, float, float]
    color: str


AXES: List[AxisInfo] = [
    AxisInfo("V", "V-axis: Membrane Potential", (AXIS_LENGTH, 0.0, 0.0), "red"),
    AxisInfo("W", "W-axis: Recovery Variable", (0.0, AXIS_LENGTH, 0.0), "lime"),
    AxisInfo("T", "T-axis: Time", (0.0, 0.0, AXIS_LENGTH), "dodgerblue"),
]


def build_axis_arrow(start: PointLike, direction: PointLike) -> Mesh:
    """
    Shaft from `start` to `start + direction` plus a cone of ARROW_LENGTH
    pointing further along the same direction.
    """
    origin = as_xyz(start)
    vec = as_xyz(direction)
    end = origin + vec

    length = float(np.linalg.norm(vec))
    if length == 0.0:
        return Mesh.empty()

    shaft = build_cylinder(origin, end, AXIS_RADIUS)
    head = build_cone(end, end + ARROW_LENGTH * vec / length, ARROW_RADIUS)
    return Mesh.concatenate([shaft, head])


def build_grid_plane(
    half_size: float = GRID_HALF_SIZE,
    divisions: int = GRID_DIVISIONS,
    line_radius: float = GRID_LINE_RADIUS,
) -> Mesh:
    """Square grid of thin cylinders in the y=0 plane."""
    step = half_size * 2 / divisions
    lines: List[Mesh] = []

    for i in range(divisions + 1):
        pos = -half_size + i * step
        lines.append(build_cylinder((-half_size, 0.0, pos), (half_size, 0.0, pos), line_radius))
        lines.append(build_cylinder((pos, 0.0, -half_size), (pos, 0.0, half_size), line_radius))

    return Mesh.concatenate(lines)
