"""
Geometric Primitives for the render space.

Vector and Point3D are small value types used by the camera and the
trajectory; Mesh is the vertex/index buffer handed to the renderer.
All vector arithmetic on meshes is done on numpy arrays in the mesher.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Union
import math

import numpy as np
import numpy.typing as npt


@dataclass(frozen=True)
class Vector:
    """Camera-space direction or offset."""
    x: float
    y: float
    z: float = 0.0

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])


@dataclass(frozen=True)
class Point3D:
    """A position in render space: (v, w, t / TIME_SCALE) for trajectory points."""
    x: float
    y: float
    z: float

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])


PointLike = Union[Point3D, Sequence[float], npt.NDArray[np.float64]]


def as_xyz(point: PointLike) -> npt.NDArray[np.float64]:
    """Converts a Point3D, tuple or array into a (3,) float array."""
    if isinstance(point, Point3D):
        return point.to_array()
    arr = np.asarray(point, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3D point, got shape {arr.shape}.")
    return arr


def _empty_vertices() -> npt.NDArray[np.float64]:
    return np.empty((0, 3), dtype=np.float64)


def _empty_triangles() -> npt.NDArray[np.int64]:
    return np.empty((0, 3), dtype=np.int64)


@dataclass
class Mesh:
    """
    Triangle mesh as a vertex/index buffer.

    Attributes:
        vertices: (N, 3) float array of positions.
        triangles: (M, 3) int array; each row indexes three vertices.
        path_index: Optional (N,) int array. For tube meshes, the index of the
            centerline point each vertex surrounds (drives the colour gradient).
    """
    vertices: npt.NDArray[np.float64] = field(default_factory=_empty_vertices)
    triangles: npt.NDArray[np.int64] = field(default_factory=_empty_triangles)
    path_index: Optional[npt.NDArray[np.int64]] = None

    @classmethod
    def empty(cls) -> Mesh:
        return cls()

    @property
    def n_vertices(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def n_triangles(self) -> int:
        return int(self.triangles.shape[0])

    @property
    def is_empty(self) -> bool:
        return self.n_vertices == 0

    @staticmethod
    def concatenate(meshes: Iterable[Mesh]) -> Mesh:
        """
        Merges partial meshes into one, shifting triangle indices so that each
        part keeps referring to its own vertices.
        """
        parts = [m for m in meshes if not m.is_empty]
        if not parts:
            return Mesh.empty()

        offsets = np.cumsum([0] + [m.n_vertices for m in parts[:-1]])
        vertices = np.vstack([m.vertices for m in parts])
        triangles = np.vstack([m.triangles + off for m, off in zip(parts, offsets)])

        path_index = None
        if all(m.path_index is not None for m in parts):
            path_index = np.concatenate([m.path_index for m in parts])

        return Mesh(vertices=vertices, triangles=triangles, path_index=path_index)
