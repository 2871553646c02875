"""Line-of-sight tests between points around an occluding sphere."""

import math
from enum import IntEnum

import numpy as np

from ..constants import EARTH_RADIUS_KM, MIN_STEP_KM, PREFILTER_MARGIN
from ..errors import DomainError
from ..geometry.vectors import difference, length, normalize, scale_and_add
from ..models.point import Point3D


class SegmentClass(IntEnum):
    UNDECIDED = 0
    CLEAR = 1
    BLOCKED = 2


def has_line_of_sight(
    a: Point3D,
    b: Point3D,
    sphere_radius: float = EARTH_RADIUS_KM,
    min_step: float = MIN_STEP_KM,
) -> bool:
    """Test whether the segment from a to b clears a sphere at the origin.

    Marches from a toward b, advancing by the current distance to the sphere
    surface. That distance can never overshoot the surface, so the march
    either reaches b or ends up inside the sphere. The step is floored at
    min_step so grazing rays still terminate.

    Args:
        a: Segment start
        b: Segment end
        sphere_radius: Radius of the occluding sphere
        min_step: Smallest step taken along the ray

    Returns:
        True if the segment is not occluded

    Raises:
        DomainError: If a and b coincide, or sphere_radius or min_step is
            not finite and positive
    """
    if not (math.isfinite(sphere_radius) and sphere_radius > 0):
        raise DomainError(
            f"Sphere radius must be finite and positive, got {sphere_radius}"
        )
    if not (math.isfinite(min_step) and min_step > 0):
        raise DomainError(
            f"Ray marching step floor must be finite and positive, got {min_step}"
        )
    if a == b:
        raise DomainError(
            f"Cannot test line of sight between identical points {a.as_tuple()}",
            suggestions=["Remove duplicate positions from the input"],
        )

    path = difference(a, b)
    path_length = length(path)
    direction = normalize(path)

    p = a
    traveled = 0.0

    while True:
        dist_to_sphere = length(p) - sphere_radius

        if traveled + dist_to_sphere >= path_length:
            return True
        if dist_to_sphere < 0:
            return False

        step = max(dist_to_sphere, min_step)
        p = scale_and_add(p, direction, step)
        traveled += step


def closest_approach(origin: np.ndarray, targets: np.ndarray) -> np.ndarray:
    """Distance from the coordinate origin to each segment origin -> target.

    Args:
        origin: Segment start, shape (3,)
        targets: Segment ends, shape (N, 3)

    Returns:
        Array of shape (N,) with the minimum norm along each segment
    """
    d = targets - origin
    dd = np.einsum("ij,ij->i", d, d)
    od = d @ origin

    t = np.divide(-od, dd, out=np.zeros_like(dd), where=dd > 0)
    t = np.clip(t, 0.0, 1.0)

    closest = origin + t[:, None] * d
    return np.linalg.norm(closest, axis=1)


def classify_segments(
    origin: np.ndarray,
    targets: np.ndarray,
    sphere_radius: float = EARTH_RADIUS_KM,
    margin: float = PREFILTER_MARGIN,
) -> np.ndarray:
    """Classify segments as clearly visible, clearly occluded or undecided.

    Segments whose closest approach lies within sphere_radius * margin of the
    surface are left UNDECIDED for ray marching.
    """
    approach = closest_approach(origin, targets)

    classes = np.full(approach.shape, SegmentClass.UNDECIDED, dtype=np.int8)
    classes[approach > sphere_radius * (1.0 + margin)] = SegmentClass.CLEAR
    classes[approach < sphere_radius * (1.0 - margin)] = SegmentClass.BLOCKED
    return classes
