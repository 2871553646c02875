"""Vector operations on body-centered Cartesian points."""

import math
from typing import Iterable

import numpy as np

from ..errors import DomainError
from ..models.point import Point3D


def difference(a: Point3D, b: Point3D) -> Point3D:
    """Return the vector from a to b."""
    return b - a


def length(v: Point3D) -> float:
    return math.sqrt(v.x * v.x + v.y * v.y + v.z * v.z)


def normalize(v: Point3D) -> Point3D:
    """Return v scaled to unit length.

    Raises:
        DomainError: If v has zero or non-finite length
    """
    norm = length(v)

    if norm == 0.0 or not math.isfinite(norm):
        raise DomainError(
            f"Cannot normalize vector ({v.x}, {v.y}, {v.z}) with length {norm}",
            suggestions=["Check for coincident points in the input positions"],
        )

    return Point3D(v.x / norm, v.y / norm, v.z / norm)


def scale_and_add(p: Point3D, v: Point3D, s: float) -> Point3D:
    """Return p + v * s."""
    return Point3D(p.x + v.x * s, p.y + v.y * s, p.z + v.z * s)


def distance(a: Point3D, b: Point3D) -> float:
    return length(b - a)


def from_spherical(
    latitude: float, longitude: float, radius: float, altitude: float
) -> Point3D:
    return Point3D.from_spherical(latitude, longitude, radius, altitude)


def positions_to_array(points: Iterable[Point3D]) -> np.ndarray:
    """Stack points into an (N, 3) float64 array."""
    coords = [p.as_tuple() for p in points]
    if not coords:
        return np.zeros((0, 3), dtype=np.float64)
    return np.array(coords, dtype=np.float64)
