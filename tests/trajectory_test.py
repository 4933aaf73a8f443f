"""
Unit tests for TrajectoryBuffer.

Tests cover:
1. Append / order / conversion to arrays
2. Batch eviction policy and the capacity bound
3. Clearing
"""

import numpy as np
import pytest

from phasetube.model.geometry_primitives import Point3D
from phasetube.model.trajectory import TrajectoryBuffer


class TestAppend:
    def test_empty(self):
        buf = TrajectoryBuffer(capacity=5)
        assert len(buf) == 0
        assert not buf
        assert buf.points().shape == (0, 3)

    def test_preserves_insertion_order(self):
        buf = TrajectoryBuffer(capacity=10)
        buf.append(Point3D(1.0, 2.0, 3.0))
        buf.append((4.0, 5.0, 6.0))
        buf.append(np.array([7.0, 8.0, 9.0]))

        np.testing.assert_array_equal(
            buf.points(), [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
        )
        assert buf.latest() == (7.0, 8.0, 9.0)

    def test_extend(self):
        buf = TrajectoryBuffer(capacity=10)
        buf.extend([(0, 0, i) for i in range(4)])
        assert len(buf) == 4
        np.testing.assert_array_equal(buf.points()[:, 2], [0, 1, 2, 3])

    def test_rejects_non_3d_point(self):
        buf = TrajectoryBuffer()
        with pytest.raises(ValueError):
            buf.append((1.0, 2.0))

    def test_points_is_a_copy(self):
        buf = TrajectoryBuffer()
        buf.append((1.0, 1.0, 1.0))
        pts = buf.points()
        pts[0, 0] = 99.0
        assert buf.points()[0, 0] == 1.0

    def test_latest_on_empty_raises(self):
        with pytest.raises(IndexError):
            TrajectoryBuffer().latest()

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            TrajectoryBuffer(capacity=0)


class TestTrim:
    def test_no_trim_below_capacity(self):
        buf = TrajectoryBuffer(capacity=5)
        buf.extend([(0, 0, i) for i in range(5)])
        assert buf.trim_if_overflow(3) == 0
        assert len(buf) == 5

    def test_removes_whole_batch_from_front(self):
        buf = TrajectoryBuffer(capacity=10)
        buf.extend([(0, 0, i) for i in range(12)])

        removed = buf.trim_if_overflow(3)

        # batch eviction: 3 points go even though 2 would restore the capacity
        assert removed == 3
        assert len(buf) == 9
        np.testing.assert_array_equal(buf.points()[:, 2], np.arange(3, 12))

    def test_capacity_bound_after_every_frame(self):
        capacity, batch = 100, 3
        buf = TrajectoryBuffer(capacity=capacity)
        z = 0
        for _ in range(500):
            for _ in range(batch):
                buf.append((0.0, 0.0, float(z)))
                z += 1
            buf.trim_if_overflow(batch)
            assert len(buf) <= capacity

        # Oldest point evicted, newest retained
        pts = buf.points()
        assert pts[-1, 2] == z - 1
        assert np.all(np.diff(pts[:, 2]) == 1)

    def test_settles_below_capacity_when_batch_does_not_divide(self):
        buf = TrajectoryBuffer(capacity=10)
        lengths = []
        for _ in range(20):
            buf.extend([(0, 0, 0)] * 3)
            buf.trim_if_overflow(3)
            lengths.append(len(buf))
        assert max(lengths) <= 10
        assert lengths[-1] == 9

    def test_batch_larger_than_buffer(self):
        buf = TrajectoryBuffer(capacity=1)
        buf.extend([(0, 0, 0), (0, 0, 1)])
        assert buf.trim_if_overflow(10) == 2
        assert len(buf) == 0


class TestClear:
    def test_clear(self):
        buf = TrajectoryBuffer(capacity=10)
        buf.extend([(0, 0, i) for i in range(7)])
        buf.clear()
        assert len(buf) == 0
        assert buf.capacity == 10
