import math

import numpy as np
import pytest

from orbitpath.errors import DomainError
from orbitpath.geometry.vectors import (
    difference,
    distance,
    from_spherical,
    length,
    normalize,
    positions_to_array,
    scale_and_add,
)
from orbitpath.models import Point3D


def test_difference_points_from_a_to_b():
    a = Point3D(1.0, 2.0, 3.0)
    b = Point3D(4.0, 6.0, 3.0)

    assert difference(a, b) == Point3D(3.0, 4.0, 0.0)


def test_length():
    assert length(Point3D(3.0, 4.0, 12.0)) == pytest.approx(13.0)
    assert length(Point3D(0.0, 0.0, 0.0)) == 0.0


def test_normalize_returns_unit_vector():
    """Test that normalize keeps direction and sets length to one."""
    v = normalize(Point3D(0.0, 3.0, 4.0))

    assert length(v) == pytest.approx(1.0)
    assert v.y == pytest.approx(0.6)
    assert v.z == pytest.approx(0.8)


def test_normalize_zero_vector_raises():
    """Test that a zero-length vector fails instead of producing NaN."""
    with pytest.raises(DomainError, match="Cannot normalize"):
        normalize(Point3D(0.0, 0.0, 0.0))


def test_normalize_non_finite_vector_raises():
    with pytest.raises(DomainError):
        normalize(Point3D(math.inf, 0.0, 0.0))


def test_scale_and_add():
    p = Point3D(1.0, 1.0, 1.0)
    v = Point3D(0.0, 1.0, -2.0)

    assert scale_and_add(p, v, 2.5) == Point3D(1.0, 3.5, -4.0)
    assert p == Point3D(1.0, 1.0, 1.0), "Points are immutable"


def test_distance_is_symmetric():
    a = Point3D(1.0, -2.0, 0.5)
    b = Point3D(-3.0, 1.0, 0.5)

    assert distance(a, b) == pytest.approx(5.0)
    assert distance(b, a) == pytest.approx(distance(a, b))


class TestSphericalProjection:
    """Test the latitude/longitude to Cartesian projection."""

    def test_origin_meridian_on_equator(self):
        p = from_spherical(0.0, 0.0, 6371.0, 0.0)

        assert p.x == pytest.approx(-6371.0)
        assert p.y == pytest.approx(0.0)
        assert p.z == pytest.approx(0.0)

    def test_north_pole(self):
        p = from_spherical(90.0, 0.0, 6371.0, 100.0)

        assert p.x == pytest.approx(0.0, abs=1e-9)
        assert p.y == pytest.approx(6471.0)
        assert p.z == pytest.approx(0.0)

    def test_ninety_degrees_east(self):
        p = from_spherical(0.0, 90.0, 10.0, 0.0)

        assert p.x == pytest.approx(0.0, abs=1e-12)
        assert p.z == pytest.approx(10.0)

    def test_altitude_adds_to_radius(self):
        p = Point3D.from_spherical(-33.0, 151.0, 6371.0, 550.0)

        assert length(p) == pytest.approx(6921.0)


def test_positions_to_array():
    points = [Point3D(1.0, 2.0, 3.0), Point3D(4.0, 5.0, 6.0)]

    array = positions_to_array(points)

    assert array.shape == (2, 3)
    assert array.dtype == np.float64
    np.testing.assert_allclose(array[1], [4.0, 5.0, 6.0])


def test_positions_to_array_empty():
    assert positions_to_array([]).shape == (0, 3)
