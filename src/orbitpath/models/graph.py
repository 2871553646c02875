import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping

from ..errors import GraphFrozenError, InputError
from .point import Point3D


@dataclass(frozen=True)
class Connection:
    target: str
    weight: float


@dataclass(frozen=True)
class Node:
    id: str
    position: Point3D
    _connections: dict[str, Connection] = field(default_factory=dict, repr=False)

    @property
    def connections(self) -> Mapping[str, Connection]:
        """Read-only view of outgoing connections keyed by target identifier."""
        return MappingProxyType(self._connections)

    def weight_to(self, target: str) -> float | None:
        connection = self._connections.get(target)
        return connection.weight if connection is not None else None


class Graph:
    """Identifier to node mapping with per-node outgoing connections."""

    def __init__(self):
        self._nodes: dict[str, Node] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def add_node(self, node_id: str, position: Point3D) -> Node:
        if self._frozen:
            raise GraphFrozenError(f"add node '{node_id}'")
        if node_id in self._nodes:
            raise InputError(f"Duplicate node identifier: '{node_id}'")

        node = Node(id=node_id, position=position)
        self._nodes[node_id] = node
        return node

    def add_connection(self, source: str, target: str, weight: float) -> bool:
        """Add an outgoing connection, keeping the cheaper edge on duplicates.

        Args:
            source: Source node identifier
            target: Target node identifier
            weight: Finite, non-negative edge weight

        Returns:
            True if the connection map changed
        """
        if self._frozen:
            raise GraphFrozenError(f"add connection '{source}' -> '{target}'")
        if target not in self._nodes:
            raise InputError(f"Unknown connection target: '{target}'")

        if not (math.isfinite(weight) and weight >= 0):
            raise ValueError(
                f"Connection weight must be finite and non-negative, got {weight}"
            )

        connections = self[source]._connections
        existing = connections.get(target)
        if existing is not None and existing.weight <= weight:
            return False

        connections[target] = Connection(target=target, weight=weight)
        return True

    def neighbours(self, node_id: str) -> Mapping[str, Connection]:
        return self[node_id].connections

    def edge_count(self) -> int:
        return sum(len(node.connections) for node in self._nodes.values())

    def __getitem__(self, node_id: str) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise InputError(
                f"Unknown node identifier: '{node_id}'",
                suggestions=[f"Graph has {len(self._nodes)} nodes"],
            ) from None

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)
