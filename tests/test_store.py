"""Tests for GraphStore: mutations, import/export and undo/redo history."""

from __future__ import annotations

import json

import pytest

from graph import Graph, GraphStore, ImportValidationError, InvalidReference


def _abc(store: GraphStore):
    a = store.add_vertex(0, 0)
    b = store.add_vertex(100, 0)
    c = store.add_vertex(200, 0)
    return a, b, c


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

class TestMutations:
    def test_add_vertex_returns_id(self, store):
        assert store.add_vertex(10, 20) == "v0"
        v = store.graph.get_vertex("v0")
        assert (v.label, v.x, v.y) == ("A", 10.0, 20.0)

    def test_labels_not_renumbered_after_removal(self, store):
        a, b, c = _abc(store)
        store.remove_vertex(a)
        assert [v.label for v in store.graph.vertices.values()] == ["B", "C"]

    def test_add_edge_twice_equals_once(self, store):
        a, b, _ = _abc(store)
        store.add_edge(a, b)
        once = [e.pair for e in store.graph.edges]
        size = store.history_size
        store.add_edge(a, b)
        assert [e.pair for e in store.graph.edges] == once
        assert store.history_size == size

    def test_add_edge_unknown_endpoint_leaves_graph_untouched(self, store):
        a, _, _ = _abc(store)
        before = store.snapshot()
        with pytest.raises(InvalidReference):
            store.add_edge(a, "ghost")
        assert store.graph == before

    def test_remove_vertex_cascades_in_one_history_step(self, store):
        a, b, c = _abc(store)
        store.add_edge(a, b)
        store.add_edge(c, b)
        store.add_edge(a, c)
        size = store.history_size
        store.remove_vertex(b)
        assert all(not e.touches(b) for e in store.graph.edges)
        assert [e.pair for e in store.graph.edges] == [(a, c)]
        assert store.history_size == size + 1

    def test_remove_missing_vertex_is_noop(self, store):
        _abc(store)
        size = store.history_size
        store.remove_vertex("nope")
        store.remove_edge("v0", "v2")
        assert store.history_size == size

    def test_remove_edge(self, store):
        a, b, _ = _abc(store)
        store.add_edge(a, b)
        store.add_edge(b, a)
        store.remove_edge(a, b)
        assert [e.pair for e in store.graph.edges] == [(b, a)]

    def test_position_update_skips_history(self, store):
        a, _, _ = _abc(store)
        size = store.history_size
        store.update_vertex_position(a, 55, 66)
        assert store.history_size == size
        assert (store.graph.get_vertex(a).x, store.graph.get_vertex(a).y) == (55.0, 66.0)

    def test_toggle_directed_keeps_edges(self, store):
        a, b, _ = _abc(store)
        store.add_edge(a, b)
        store.toggle_directed()
        assert store.graph.is_directed is True
        assert [e.pair for e in store.graph.edges] == [(a, b)]

    def test_clear_preserves_directedness(self, store):
        _abc(store)
        store.toggle_directed()
        store.clear_graph()
        assert store.graph.vertex_count == 0
        assert store.graph.edge_count == 0
        assert store.graph.is_directed is True

    def test_listeners_told_about_structural_changes(self, store):
        calls = []
        store.subscribe(lambda g, structural: calls.append(structural))
        a = store.add_vertex(0, 0)
        store.update_vertex_position(a, 1, 1)
        store.undo()
        assert calls == [True, False, True]


# ---------------------------------------------------------------------------
# Import / Export
# ---------------------------------------------------------------------------

VALID = {
    "vertices": [
        {"id": "v0", "label": "A", "position": {"x": 1, "y": 2}},
        {"id": "v1", "label": "B", "position": {"x": 3.5, "y": 4}},
    ],
    "edges": [{"from": "v0", "to": "v1"}],
    "isDirected": True,
}


class TestImportExport:
    def test_import_replaces_graph_and_is_undoable(self, store):
        _abc(store)
        before = store.snapshot()
        store.import_graph(VALID)
        assert store.graph.vertex_ids() == ["v0", "v1"]
        assert store.graph.is_directed is True
        store.undo()
        assert store.graph == before

    def test_export_has_exactly_three_keys(self, store):
        store.import_graph(VALID)
        data = store.export_graph()
        assert set(data) == {"vertices", "edges", "isDirected"}
        assert data["edges"] == [{"from": "v0", "to": "v1"}]
        assert json.loads(store.export_json()) == data

    def test_export_import_round_trip(self, store):
        a, b, _ = _abc(store)
        store.add_edge(a, b)
        text = store.export_json()
        other = GraphStore()
        other.import_json(text)
        assert other.graph == store.graph

    def test_dangling_edge_rejected(self, store):
        _abc(store)
        before = store.snapshot()
        size = store.history_size
        payload = {"vertices": [], "edges": [{"from": "v0", "to": "v1"}], "isDirected": False}
        with pytest.raises(ImportValidationError, match="Dangling edge v0 → v1"):
            store.import_graph(payload)
        assert store.graph == before
        assert store.history_size == size

    @pytest.mark.parametrize("payload, message", [
        ([], "expected a JSON object"),
        ({"edges": [], "isDirected": False}, "missing vertices array"),
        ({"vertices": [], "isDirected": False}, "missing edges array"),
        ({"vertices": [], "edges": []}, "isDirected must be boolean"),
        ({"vertices": [], "edges": [], "isDirected": "yes"}, "isDirected must be boolean"),
        ({"vertices": [{"label": "A", "position": {"x": 0, "y": 0}}], "edges": [], "isDirected": False},
         "string id"),
        ({"vertices": [{"id": "v0", "label": "A"}], "edges": [], "isDirected": False},
         "numeric position"),
        ({"vertices": [{"id": "v0", "label": "A", "position": {"x": True, "y": 0}}],
          "edges": [], "isDirected": False}, "numeric position"),
    ])
    def test_structural_validation(self, store, payload, message):
        with pytest.raises(ImportValidationError, match=message):
            store.import_graph(payload)
        assert store.graph == Graph()

    def test_duplicate_ids_and_edges_rejected(self, store):
        dup_vertex = json.loads(json.dumps(VALID))
        dup_vertex["vertices"].append(dict(VALID["vertices"][0]))
        with pytest.raises(ImportValidationError, match="Duplicate vertex id"):
            store.import_graph(dup_vertex)

        dup_edge = json.loads(json.dumps(VALID))
        dup_edge["edges"].append({"from": "v0", "to": "v1"})
        with pytest.raises(ImportValidationError, match="Duplicate edge"):
            store.import_graph(dup_edge)

    @pytest.mark.parametrize("text", [
        '{"vertices": [{"id": "v0", "label": "A", "position": {"x": NaN, "y": 0}}],'
        ' "edges": [], "isDirected": false}',
        '{"vertices": [{"id": "v0", "label": "A", "position": {"x": 0, "y": -Infinity}}],'
        ' "edges": [], "isDirected": false}',
    ])
    def test_non_finite_positions_rejected(self, store, text):
        with pytest.raises(ImportValidationError, match="finite numeric position"):
            store.import_json(text)
        assert store.graph == Graph()
        assert "NaN" not in store.export_json()

    def test_invalid_json_text(self, store):
        with pytest.raises(ImportValidationError, match="invalid JSON"):
            store.import_json("{not json")


# ---------------------------------------------------------------------------
# Undo / Redo
# ---------------------------------------------------------------------------

class TestHistory:
    def test_undo_redo_at_ends_are_noops(self, store):
        assert not store.can_undo and not store.can_redo
        assert store.undo() == Graph()
        assert store.redo() == Graph()

    def test_undo_restores_previous_state(self, store):
        a, b, _ = _abc(store)
        before = store.snapshot()
        store.add_edge(a, b)
        store.undo()
        assert store.graph == before

    def test_undo_then_redo_is_identity(self, store):
        a, b, c = _abc(store)
        store.add_edge(a, b)
        store.toggle_directed()
        store.add_edge(b, c)
        for _ in range(4):
            before = store.snapshot()
            store.undo()
            store.redo()
            assert store.graph == before
            store.undo()

    def test_redo_after_undo_keeps_dragged_positions(self, store):
        a, b, _ = _abc(store)
        store.update_vertex_position(a, 42, 43)
        store.add_edge(a, b)
        store.update_vertex_position(b, 7, 8)
        before = store.snapshot()
        store.undo()
        assert store.graph.get_vertex(a).x == 42.0
        store.redo()
        assert store.graph == before

    def test_new_mutation_discards_redo_branch(self, store):
        a, b, c = _abc(store)
        store.add_edge(a, b)
        store.undo()
        assert store.can_redo
        store.add_edge(b, c)
        assert not store.can_redo
        assert [e.pair for e in store.graph.edges] == [(b, c)]

    def test_history_is_bounded(self):
        store = GraphStore(history_limit=50)
        for i in range(80):
            store.add_vertex(i, i)
            assert store.history_size <= 50
        assert store.history_size == 50
        undone = 0
        while store.can_undo:
            store.undo()
            undone += 1
        assert undone == 50
        # oldest 30 snapshots were evicted
        assert store.graph.vertex_count == 30

    def test_small_bound(self):
        store = GraphStore(history_limit=2)
        for i in range(5):
            store.add_vertex(i, i)
        store.undo()
        store.undo()
        store.undo()
        assert store.graph.vertex_count == 3

    def test_version_bumps(self, store):
        v = store.version
        store.add_vertex(0, 0)
        store.undo()
        store.redo()
        assert store.version == v + 3

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            GraphStore(history_limit=0)
