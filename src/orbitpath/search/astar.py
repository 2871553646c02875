"""A* search over a visibility graph.

Search state lives outside the graph in a per-run dict keyed by node
identifier, so one graph can serve any number of searches. Relaxing a node
that is already in the frontier pushes a fresh entry instead of reordering
the heap; entries whose recorded cost no longer matches the node's best cost
are dropped when popped. With the Euclidean heuristic this keeps the search
optimal, up to FRONTIER_EPSILON in how near-equal priorities are ordered.
"""

import heapq
from dataclasses import dataclass
from typing import Optional

from ..constants import FRONTIER_EPSILON, GOAL, START
from ..errors import InputError
from ..geometry.vectors import distance
from ..models.graph import Graph
from ..models.search import PathResult, SearchState


@dataclass(frozen=True)
class FrontierEntry:
    f: float
    order: int
    g: float
    node_id: str

    def __lt__(self, other: "FrontierEntry") -> bool:
        # Near-equal priorities fall back to insertion order
        if abs(self.f - other.f) < FRONTIER_EPSILON:
            return self.order < other.order
        return self.f < other.f


class AStarSearch:
    """Shortest path search over a read-only graph."""

    def __init__(self, graph: Graph):
        self.graph = graph
        self._states: dict[str, SearchState] = {}

    @property
    def states(self) -> dict[str, SearchState]:
        """Search state of the last run, keyed by node identifier."""
        return self._states

    def reset(self) -> None:
        self._states = {}

    def search(self, start: str = START, goal: str = GOAL) -> PathResult:
        """Find the cheapest path from start to goal.

        Args:
            start: Start node identifier
            goal: Goal node identifier

        Returns:
            PathResult with intermediate hops (start and goal excluded), or a
            not-found result when the frontier is exhausted

        Raises:
            InputError: If start or goal is not in the graph
        """
        for label, node_id in (("start", start), ("goal", goal)):
            if node_id not in self.graph:
                raise InputError(
                    f"Unknown {label} node: '{node_id}'",
                    suggestions=["Check that the scenario contains a ROUTE line"],
                )

        self.reset()
        states = self._states
        goal_position = self.graph[goal].position

        counter = 0
        frontier: list[FrontierEntry] = []

        start_state = SearchState(
            g=0.0, h=distance(self.graph[start].position, goal_position)
        )
        states[start] = start_state
        heapq.heappush(frontier, FrontierEntry(start_state.f, counter, 0.0, start))

        expanded = 0

        while frontier:
            entry = heapq.heappop(frontier)
            current = states[entry.node_id]

            if current.expanded or entry.g > current.g:
                continue
            current.expanded = True
            expanded += 1

            if entry.node_id == goal:
                path = self._reconstruct_path(goal)
                return PathResult(
                    found=True,
                    hops=path[1:-1],
                    cost=current.g,
                    expanded=expanded,
                )

            for target, connection in self.graph.neighbours(entry.node_id).items():
                tentative_g = current.g + connection.weight
                state = states.get(target)

                if state is None:
                    state = SearchState(
                        g=tentative_g,
                        h=distance(self.graph[target].position, goal_position),
                        predecessor=entry.node_id,
                    )
                    states[target] = state
                elif not state.expanded and tentative_g < state.g:
                    state.g = tentative_g
                    state.predecessor = entry.node_id
                else:
                    continue

                counter += 1
                heapq.heappush(
                    frontier, FrontierEntry(state.f, counter, state.g, target)
                )

        return PathResult.not_found(expanded)

    def _reconstruct_path(self, goal: str) -> list[str]:
        """Follow predecessor links back from goal, returned in travel order."""
        path = [goal]
        predecessor: Optional[str] = self._states[goal].predecessor
        while predecessor is not None:
            path.append(predecessor)
            predecessor = self._states[predecessor].predecessor
        path.reverse()
        return path


def find_path(graph: Graph, start: str = START, goal: str = GOAL) -> PathResult:
    """Run a single A* search from start to goal."""
    return AStarSearch(graph).search(start, goal)
