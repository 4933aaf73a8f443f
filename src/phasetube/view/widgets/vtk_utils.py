"""
VTK and Geometry Utilities
Helper functions for converting core meshes into PyVista data.
"""
from typing import Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt
import pyvista as pv

import logging

from phasetube.config import GRADIENT_STOPS
from phasetube.model.geometry_primitives import Mesh

logger = logging.getLogger(__name__)

COLORS_ARRAY = "colors"


class VtkUtils:
    @staticmethod
    def triangles_to_faces(triangles: npt.NDArray[np.int64]) -> npt.NDArray[np.int64]:
        """
        Convert a (M, 3) triangle index array to the flat VTK cell layout
        [3, i0, i1, i2, 3, ...].
        """
        tris = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
        if tris.size == 0:
            return np.empty(0, dtype=np.int64)
        sizes = np.full((tris.shape[0], 1), 3, dtype=np.int64)
        return np.hstack([sizes, tris]).ravel()

    def mesh_to_polydata(self, mesh: Mesh) -> pv.PolyData:
        """
        Wrap a core Mesh as PolyData.

        If the mesh carries a `path_index`, per-vertex gradient colours are
        attached as the "colors" point array.
        """
        if mesh.is_empty:
            return pv.PolyData()

        pd = pv.PolyData(mesh.vertices, faces=self.triangles_to_faces(mesh.triangles))

        if mesh.path_index is not None:
            n_path = int(mesh.path_index.max()) + 1 if mesh.path_index.size else 0
            pd.point_data[COLORS_ARRAY] = self.gradient_colors(
                self.path_parameter(mesh.path_index, n_path)
            )

        return pd

    @staticmethod
    def path_parameter(path_index: npt.NDArray[np.int64], n_points: int) -> npt.NDArray[np.float64]:
        """Map centerline indices to [0, 1] (oldest -> newest)."""
        idx = np.asarray(path_index, dtype=np.float64)
        if n_points < 2:
            return np.zeros_like(idx)
        return idx / (n_points - 1)

    @staticmethod
    def gradient_colors(
        t: npt.NDArray[np.float64],
        stops: Optional[Sequence[Tuple[int, int, int]]] = None,
    ) -> npt.NDArray[np.uint8]:
        """
        Evaluate an evenly spaced multi-stop colour gradient.

        Args:
            t: Parameter values; clipped to [0, 1].
            stops: RGB stops (0-255). Defaults to blue -> cyan -> yellow.

        Returns:
            (N, 3) uint8 RGB array.
        """
        rgb_stops = np.asarray(stops if stops is not None else GRADIENT_STOPS, dtype=np.float64)
        if rgb_stops.ndim != 2 or rgb_stops.shape[1] != 3 or len(rgb_stops) < 2:
            raise ValueError(f"Expected at least two RGB stops, got shape {rgb_stops.shape}.")

        t = np.clip(np.asarray(t, dtype=np.float64).reshape(-1), 0.0, 1.0)
        positions = np.linspace(0.0, 1.0, len(rgb_stops))

        channels = [np.interp(t, positions, rgb_stops[:, c]) for c in range(3)]
        return np.round(np.stack(channels, axis=1)).astype(np.uint8)
