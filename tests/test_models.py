import math

import numpy as np
import pytest

from orbitpath.errors import GraphFrozenError, InputError
from orbitpath.models import (
    Connection,
    Graph,
    Node,
    PathResult,
    Point3D,
    SearchState,
)


def test_point_is_immutable():
    p = Point3D(1.0, 2.0, 3.0)

    with pytest.raises(AttributeError):
        p.x = 5.0


def test_point_arithmetic():
    a = Point3D(1.0, 2.0, 3.0)
    b = Point3D(0.5, 0.5, 0.5)

    assert a + b == Point3D(1.5, 2.5, 3.5)
    assert a - b == Point3D(0.5, 1.5, 2.5)
    assert b * 4 == Point3D(2.0, 2.0, 2.0)


def test_point_as_array():
    np.testing.assert_array_equal(Point3D(1.0, 2.0, 3.0).as_array(), [1.0, 2.0, 3.0])


def test_point_is_finite():
    assert Point3D(1.0, 2.0, 3.0).is_finite()
    assert not Point3D(math.nan, 2.0, 3.0).is_finite()


class TestNodeConnections:
    """Test the per-node connection map."""

    def _graph(self):
        graph = Graph()
        graph.add_node("SAT0", Point3D(1.0, 0.0, 0.0))
        graph.add_node("SAT1", Point3D(0.0, 1.0, 0.0))
        return graph

    def test_add_connection(self):
        graph = self._graph()

        assert graph.add_connection("SAT0", "SAT1", 2.0)
        node = graph["SAT0"]
        assert node.connections["SAT1"] == Connection(target="SAT1", weight=2.0)
        assert node.weight_to("SAT1") == 2.0
        assert node.weight_to("SAT2") is None

    def test_duplicate_keeps_cheaper_weight(self):
        graph = self._graph()
        graph.add_connection("SAT0", "SAT1", 2.0)

        assert not graph.add_connection("SAT0", "SAT1", 3.0)
        assert graph["SAT0"].weight_to("SAT1") == 2.0

        assert graph.add_connection("SAT0", "SAT1", 1.5)
        assert graph["SAT0"].weight_to("SAT1") == 1.5
        assert len(graph.neighbours("SAT0")) == 1

    @pytest.mark.parametrize("weight", [-1.0, math.nan, math.inf])
    def test_invalid_weight_rejected(self, weight):
        graph = self._graph()

        with pytest.raises(ValueError, match="finite and non-negative"):
            graph.add_connection("SAT0", "SAT1", weight)
        assert graph.edge_count() == 0

    def test_connections_view_is_read_only(self):
        node = Node(id="SAT0", position=Point3D(1.0, 0.0, 0.0))

        with pytest.raises(TypeError):
            node.connections["SAT1"] = Connection("SAT1", 1.0)

    def test_node_is_immutable(self):
        node = Node(id="SAT0", position=Point3D(1.0, 0.0, 0.0))

        with pytest.raises(AttributeError):
            node.position = Point3D(2.0, 0.0, 0.0)
        assert not hasattr(node, "add_connection")


class TestGraph:
    """Test graph construction and lookup."""

    def _graph(self):
        graph = Graph()
        graph.add_node("A", Point3D(1.0, 0.0, 0.0))
        graph.add_node("B", Point3D(0.0, 1.0, 0.0))
        return graph

    def test_lookup(self):
        graph = self._graph()
        graph.add_connection("A", "B", 1.4)

        assert len(graph) == 2
        assert "A" in graph
        assert "C" not in graph
        assert set(graph) == {"A", "B"}
        assert graph["A"].position == Point3D(1.0, 0.0, 0.0)
        assert list(graph.neighbours("A")) == ["B"]
        assert graph.edge_count() == 1

    def test_unknown_node_raises_input_error(self):
        graph = self._graph()

        with pytest.raises(InputError, match="Unknown node identifier"):
            graph["C"]

    def test_duplicate_node_rejected(self):
        graph = self._graph()

        with pytest.raises(InputError, match="Duplicate"):
            graph.add_node("A", Point3D(2.0, 0.0, 0.0))

    def test_connection_to_unknown_target_rejected(self):
        graph = self._graph()

        with pytest.raises(InputError):
            graph.add_connection("A", "Z", 1.0)

    def test_frozen_graph_rejects_changes(self):
        graph = self._graph()
        graph.freeze()

        assert graph.frozen
        with pytest.raises(GraphFrozenError):
            graph.add_node("C", Point3D(0.0, 0.0, 1.0))
        with pytest.raises(GraphFrozenError):
            graph.add_connection("A", "B", 1.0)


def test_search_state_defaults():
    state = SearchState()

    assert state.g == 0.0
    assert state.h == 0.0
    assert state.predecessor is None
    assert not state.expanded


def test_search_state_f():
    assert SearchState(g=2.0, h=3.5).f == 5.5


def test_path_result_not_found():
    result = PathResult.not_found(expanded=4)

    assert not result.found
    assert result.hops == []
    assert result.cost == math.inf
    assert result.expanded == 4


def test_path_result_format_hops():
    result = PathResult(found=True, hops=["SAT3", "SAT7"], cost=10.0)

    assert result.format_hops() == "SAT3,SAT7"
    assert PathResult(found=True, hops=[], cost=1.0).format_hops() == ""
