"""
Unit tests for the render-space value types.
"""

import numpy as np
import pytest

from phasetube.model.geometry_primitives import Point3D, Vector, as_xyz


class TestVector:
    def test_negation(self):
        assert -Vector(1.0, -2.0, 3.0) == Vector(-1.0, 2.0, -3.0)

    def test_magnitude(self):
        assert Vector(3.0, 4.0, 12.0).magnitude == pytest.approx(13.0)

    def test_default_z(self):
        assert Vector(1.0, 2.0).to_tuple() == (1.0, 2.0, 0.0)

    def test_has_no_arithmetic_beyond_negation(self):
        for name in ("dot", "cross", "__add__", "__mul__"):
            assert not hasattr(Vector, name)


class TestPoint3D:
    def test_conversions(self):
        p = Point3D(1.0, 2.0, 3.0)
        assert p.to_tuple() == (1.0, 2.0, 3.0)
        np.testing.assert_array_equal(p.to_array(), [1.0, 2.0, 3.0])

    def test_frozen(self):
        with pytest.raises(AttributeError):
            Point3D(0.0, 0.0, 0.0).x = 1.0


class TestAsXyz:
    @pytest.mark.parametrize("point", [
        Point3D(1.0, 2.0, 3.0),
        (1, 2, 3),
        np.array([[1.0, 2.0, 3.0]]),
    ])
    def test_accepts(self, point):
        np.testing.assert_array_equal(as_xyz(point), [1.0, 2.0, 3.0])

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            as_xyz((1.0, 2.0, 3.0, 4.0))
