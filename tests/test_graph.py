"""Tests for the graph value: vertices, edges, adjacency and analysis."""

from __future__ import annotations

import pytest

from conftest import build_graph
from graph import Edge, Graph, InvalidReference, Vertex, vertex_label


class TestVertexLabel:
    def test_first_letters(self):
        assert [vertex_label(i) for i in range(3)] == ["A", "B", "C"]
        assert vertex_label(25) == "Z"

    def test_wraps_to_two_letters(self):
        assert vertex_label(26) == "AA"
        assert vertex_label(27) == "AB"
        assert vertex_label(51) == "AZ"
        assert vertex_label(52) == "BA"

    def test_three_letters(self):
        assert vertex_label(701) == "ZZ"
        assert vertex_label(702) == "AAA"

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            vertex_label(-1)


class TestVertexAndEdge:
    def test_vertex_serialises_with_position(self):
        v = Vertex("v0", "A", 10, 20)
        assert v.to_dict() == {"id": "v0", "label": "A", "position": {"x": 10.0, "y": 20.0}}
        assert Vertex.from_dict(v.to_dict()) == v

    def test_vertex_equality_includes_position(self):
        assert Vertex("v0", "A", 1, 1) != Vertex("v0", "A", 2, 1)

    def test_edge_uses_from_to_keys(self):
        e = Edge("v0", "v1")
        assert e.to_dict() == {"from": "v0", "to": "v1"}
        assert e.key == "v0-v1"
        assert Edge.from_dict({"from": "v0", "to": "v1"}) == e

    def test_other_end_respects_direction(self):
        e = Edge("a", "b")
        assert e.other_end("a", directed=True) == "b"
        assert e.other_end("b", directed=True) is None
        assert e.other_end("b", directed=False) == "a"
        assert e.other_end("z", directed=False) is None


class TestGraphCrud:
    def test_create_vertex_assigns_sequential_ids_and_labels(self):
        g = Graph()
        a = g.create_vertex(0, 0)
        b = g.create_vertex(5, 5)
        assert (a.id, a.label) == ("v0", "A")
        assert (b.id, b.label) == ("v1", "B")

    def test_ids_stay_unique_after_removal(self):
        g = build_graph(2, [])
        g.remove_vertex("v0")
        c = g.create_vertex(0, 0)
        assert c.id == "v2"
        assert g.vertex_ids() == ["v1", "v2"]

    def test_add_edge_is_idempotent(self, path_graph):
        assert path_graph.add_edge("v0", "v1") is False
        assert path_graph.edge_count == 2

    def test_reverse_pair_is_a_distinct_edge(self, path_graph):
        assert path_graph.add_edge("v1", "v0") is True
        assert path_graph.edge_count == 3

    def test_add_edge_unknown_vertex(self, path_graph):
        with pytest.raises(InvalidReference):
            path_graph.add_edge("v0", "nope")

    def test_remove_vertex_cascades(self, path_graph):
        assert path_graph.remove_vertex("v1") is True
        assert path_graph.edges == []
        assert not path_graph.has_edge("v0", "v1")

    def test_remove_missing_things_is_noop(self, path_graph):
        assert path_graph.remove_vertex("nope") is False
        assert path_graph.remove_edge("v2", "v0") is False
        assert path_graph.edge_count == 2


class TestAdjacency:
    def test_undirected_neighbours_both_ways(self, path_graph):
        assert path_graph.neighbour_ids("v1") == ["v0", "v2"]
        assert path_graph.neighbour_ids("v2") == ["v1"]

    def test_directed_neighbours_forward_only(self):
        g = build_graph(3, [(0, 1), (1, 2)], directed=True)
        assert g.neighbour_ids("v1") == ["v2"]
        assert g.neighbour_ids("v2") == []

    def test_neighbours_follow_edge_order(self):
        g = build_graph(4, [(0, 3), (0, 1), (2, 0)])
        assert g.neighbour_ids("v0") == ["v3", "v1", "v2"]

    def test_self_loop_is_not_a_neighbour(self):
        g = build_graph(2, [(0, 0), (0, 1)])
        assert g.neighbour_ids("v0") == ["v1"]
        assert g.degree("v0") == 1

    def test_adjacency_matrix_mirrors_undirected(self, path_graph):
        assert path_graph.adjacency_matrix() == [
            [0, 1, 0],
            [1, 0, 1],
            [0, 1, 0],
        ]

    def test_adjacency_matrix_directed(self):
        g = build_graph(2, [(0, 1)], directed=True)
        assert g.adjacency_matrix() == [[0, 1], [0, 0]]

    def test_adjacency_list_uses_labels(self, path_graph):
        assert path_graph.adjacency_list() == {"A": ["B"], "B": ["A", "C"], "C": ["B"]}


class TestAnalysis:
    def test_connected(self, path_graph):
        assert path_graph.is_connected()

    def test_disconnected(self):
        assert not build_graph(3, [(0, 1)]).is_connected()

    def test_empty_graph_is_connected(self):
        assert Graph().is_connected()

    def test_directed_connectivity_follows_arrows(self):
        assert build_graph(2, [(0, 1)], directed=True).is_connected()
        assert not build_graph(2, [(1, 0)], directed=True).is_connected()

    def test_tree_has_no_cycle(self, path_graph):
        assert not path_graph.has_cycle()

    def test_undirected_triangle_has_cycle(self):
        assert build_graph(3, [(0, 1), (1, 2), (2, 0)]).has_cycle()

    def test_undirected_back_and_forth_pair_is_not_a_cycle(self):
        assert not build_graph(2, [(0, 1), (1, 0)]).has_cycle()

    def test_directed_cycle(self):
        assert build_graph(3, [(0, 1), (1, 2), (2, 0)], directed=True).has_cycle()

    def test_directed_dag(self):
        assert not build_graph(3, [(0, 1), (0, 2), (1, 2)], directed=True).has_cycle()

    def test_self_loop_is_a_cycle(self):
        assert build_graph(1, [(0, 0)]).has_cycle()


class TestCopyAndSerialisation:
    def test_copy_is_deep(self, path_graph):
        clone = path_graph.copy()
        clone.get_vertex("v0").move_to(999, 999)
        clone.remove_edge("v0", "v1")
        assert path_graph.get_vertex("v0").x == 0.0
        assert path_graph.has_edge("v0", "v1")

    def test_round_trip(self, path_graph):
        data = path_graph.to_dict()
        assert set(data) == {"vertices", "edges", "isDirected"}
        assert Graph.from_dict(data) == path_graph


class TestGenerateRandom:
    def test_counts(self):
        g = Graph.generate_random(num_vertices=5, num_edges=4, seed=1)
        assert g.vertex_count == 5
        assert g.edge_count == 4
        assert not any(e.is_self_loop for e in g.edges)

    def test_edges_capped_at_maximum(self):
        g = Graph.generate_random(num_vertices=3, num_edges=100, seed=1)
        assert g.edge_count == 3
        d = Graph.generate_random(num_vertices=3, num_edges=100, is_directed=True, seed=1)
        assert d.edge_count == 6

    def test_seed_is_reproducible(self):
        a = Graph.generate_random(num_vertices=6, num_edges=7, seed=42)
        b = Graph.generate_random(num_vertices=6, num_edges=7, seed=42)
        assert a == b

    def test_positions_inside_canvas(self):
        g = Graph.generate_random(num_vertices=10, num_edges=0, seed=3, canvas_w=300, canvas_h=200)
        for v in g.vertices.values():
            assert 50 <= v.x <= 250
            assert 50 <= v.y <= 150
