"""
Trajectory Buffer
Bounded, time-ordered stream of render-space points produced by the integrator.
"""
from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Tuple
import logging

import numpy as np
import numpy.typing as npt

from phasetube.model.geometry_primitives import PointLike, as_xyz

logger = logging.getLogger(__name__)

XYZ = Tuple[float, float, float]


class TrajectoryBuffer:
    """
    Ordered sequence of points, oldest first.

    Eviction is batch-based: once the length exceeds the capacity, the same
    number of points that a frame produces is dropped from the front. The
    length may therefore exceed the capacity between an append and the
    following trim, and may settle slightly below the capacity afterwards.
    """

    def __init__(self, capacity: int = 8000) -> None:
        if capacity < 1:
            raise ValueError(f"Capacity must be positive, got {capacity}.")
        self._capacity = capacity
        self._points: Deque[XYZ] = deque()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._points)

    def __bool__(self) -> bool:
        return bool(self._points)

    def append(self, point: PointLike) -> None:
        x, y, z = as_xyz(point)
        self._points.append((float(x), float(y), float(z)))

    def extend(self, points: Iterable[PointLike]) -> None:
        for p in points:
            self.append(p)

    def trim_if_overflow(self, batch_size: int) -> int:
        """
        Drops `batch_size` oldest points if the buffer is over capacity.

        Returns:
            Number of points removed.
        """
        if len(self._points) <= self._capacity:
            return 0

        removed = min(batch_size, len(self._points))
        for _ in range(removed):
            self._points.popleft()
        return removed

    def clear(self) -> None:
        self._points.clear()

    def points(self) -> npt.NDArray[np.float64]:
        """Returns a (N, 3) copy of the buffer contents, oldest first."""
        if not self._points:
            return np.empty((0, 3), dtype=np.float64)
        return np.array(self._points, dtype=np.float64)

    def latest(self) -> XYZ:
        if not self._points:
            raise IndexError("Trajectory is empty.")
        return self._points[-1]

    def __repr__(self) -> str:
        return f"TrajectoryBuffer(len={len(self)}, capacity={self._capacity})"
