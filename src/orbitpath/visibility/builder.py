"""Visibility graph construction."""

import math
from dataclasses import dataclass
from typing import Mapping

from ..constants import EARTH_RADIUS_KM, MIN_STEP_KM, PREFILTER_MARGIN
from ..errors import DomainError, InputError
from ..geometry.vectors import distance, positions_to_array
from ..models.graph import Graph
from ..models.point import Point3D
from .occlusion import SegmentClass, classify_segments, has_line_of_sight


@dataclass(frozen=True)
class BuildStats:
    pairs_tested: int
    pairs_marched: int
    edges_added: int


def validate_positions(positions: Mapping[str, Point3D]) -> None:
    """Check positions before any graph is built.

    Raises:
        InputError: On missing or malformed position data
        DomainError: If two identifiers share the same position
    """
    if len(positions) < 2:
        raise InputError(
            f"At least two positions are required, got {len(positions)}",
            suggestions=["Scenarios need a ROUTE line providing START and GOAL"],
        )

    seen: dict[tuple[float, float, float], str] = {}
    for node_id, position in positions.items():
        if not isinstance(node_id, str) or not node_id.strip():
            raise InputError(f"Invalid node identifier: {node_id!r}")
        if not isinstance(position, Point3D):
            raise InputError(
                f"Position for '{node_id}' must be a Point3D, got {type(position).__name__}"
            )
        if not position.is_finite():
            raise InputError(
                f"Position for '{node_id}' has non-finite coordinates {position.as_tuple()}"
            )

        key = position.as_tuple()
        if key in seen:
            raise DomainError(
                f"'{seen[key]}' and '{node_id}' share position {key}",
                suggestions=["Line of sight is undefined between identical points"],
            )
        seen[key] = node_id


def build_visibility_graph(
    positions: Mapping[str, Point3D],
    sphere_radius: float = EARTH_RADIUS_KM,
    symmetric: bool = True,
    prefilter: bool = True,
) -> Graph:
    """Build a frozen graph connecting every pair with a clear line of sight."""
    graph, _ = build_visibility_graph_with_stats(
        positions,
        sphere_radius=sphere_radius,
        symmetric=symmetric,
        prefilter=prefilter,
    )
    return graph


def build_visibility_graph_with_stats(
    positions: Mapping[str, Point3D],
    sphere_radius: float = EARTH_RADIUS_KM,
    symmetric: bool = True,
    prefilter: bool = True,
    min_step: float = MIN_STEP_KM,
) -> tuple[Graph, BuildStats]:
    """Build the visibility graph and report how much marching was needed.

    Args:
        positions: Node identifier to position mapping
        sphere_radius: Radius of the occluding sphere
        symmetric: Test each unordered pair once and add both directed edges.
            When False every ordered pair is tested on its own, so floating
            point differences may leave one-way edges.
        prefilter: Resolve clearly visible or occluded pairs from their
            closest approach to the sphere center, marching only the rest
        min_step: Ray marching step floor

    Returns:
        Tuple of (graph, stats)
    """
    if not (math.isfinite(sphere_radius) and sphere_radius > 0):
        raise InputError(f"Sphere radius must be positive, got {sphere_radius}")

    validate_positions(positions)

    ids = list(positions)
    points = [positions[node_id] for node_id in ids]
    coords = positions_to_array(points)

    graph = Graph()
    for node_id, point in zip(ids, points):
        graph.add_node(node_id, point)

    pairs_tested = 0
    pairs_marched = 0
    edges_added = 0

    for i, source in enumerate(ids):
        if prefilter:
            classes = classify_segments(
                coords[i], coords, sphere_radius, PREFILTER_MARGIN
            )

        targets = range(i + 1, len(ids)) if symmetric else range(len(ids))
        for j in targets:
            if i == j:
                continue

            pairs_tested += 1
            segment_class = classes[j] if prefilter else SegmentClass.UNDECIDED

            if segment_class == SegmentClass.UNDECIDED:
                pairs_marched += 1
                visible = has_line_of_sight(
                    points[i], points[j], sphere_radius, min_step
                )
            else:
                visible = segment_class == SegmentClass.CLEAR

            if not visible:
                continue

            target = ids[j]
            weight = distance(points[i], points[j])
            edges_added += graph.add_connection(source, target, weight)
            if symmetric:
                edges_added += graph.add_connection(target, source, weight)

    graph.freeze()

    return graph, BuildStats(
        pairs_tested=pairs_tested,
        pairs_marched=pairs_marched,
        edges_added=edges_added,
    )
