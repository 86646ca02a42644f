"""
store.py — Graph Store with Undo / Redo
========================================
Single owner of the live Graph.  Every structural change goes through here
so referential integrity and the undo history are guaranteed in one place.

Usage:
    store = GraphStore()
    a = store.add_vertex(100, 100)      # "v0", label "A"
    b = store.add_vertex(200, 100)      # "v1", label "B"
    store.add_edge(a, b)
    store.undo()                        # edge gone
    store.redo()                        # edge back

History model:
    One linear list of snapshots plus a cursor.

        entries:  [ s0  s1  s2 | s3  s4 ]
                               ^ cursor
        s0..s2  → undo targets (oldest first)
        s3..s4  → redo targets (nearest first)

    A mutation truncates everything from the cursor on, appends the
    PRE-mutation snapshot and advances the cursor (evicting the oldest entry
    past the bound).  Undo / redo swap the live graph with the entry next to
    the cursor, which is what makes undo-then-redo an exact inverse — even
    for vertex drags, which never create entries of their own.

Every mutation is copy-on-write: it edits a copy and only commits when the
copy is complete, so a failing call leaves the live graph as it was.
"""

import json
import logging
import math
from numbers import Real
from typing import Any, Callable, List, Optional

from graph.errors import ImportValidationError
from graph.graph import Graph

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50

# listener(graph, structural) — structural=False for cosmetic position updates
GraphListener = Callable[[Graph, bool], None]


class GraphStore:
    """
    Attributes:
        history_limit : Max number of snapshots kept.
        version       : Bumped on every structural commit, undo and redo.
    """

    def __init__(self, graph: Optional[Graph] = None, history_limit: int = DEFAULT_HISTORY_LIMIT):
        if history_limit < 1:
            raise ValueError("history_limit must be at least 1")
        self._graph:        Graph              = graph.copy() if graph else Graph()
        self._entries:      List[Graph]        = []
        self._cursor:       int                = 0
        self._listeners:    List[GraphListener] = []
        self.history_limit: int                = history_limit
        self.version:       int                = 0

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def graph(self) -> Graph:
        """The live graph.  Treat as read-only; mutate through the store."""
        return self._graph

    def snapshot(self) -> Graph:
        return self._graph.copy()

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries)

    @property
    def history_size(self) -> int:
        return len(self._entries)

    def subscribe(self, listener: GraphListener) -> None:
        self._listeners.append(listener)

    # ==================================================================
    # MUTATIONS
    # ==================================================================
    def add_vertex(self, x: float, y: float) -> str:
        draft = self._graph.copy()
        vertex = draft.create_vertex(x, y)
        self._commit(draft, f"add vertex {vertex.label} ({vertex.id})")
        return vertex.id

    def add_edge(self, source: str, target: str) -> Graph:
        if self._graph.has_edge(source, target):
            logger.debug("Edge %s → %s already exists; ignoring", source, target)
            return self._graph
        draft = self._graph.copy()
        draft.add_edge(source, target)         # raises InvalidReference on unknown endpoints
        return self._commit(draft, f"add edge {source} → {target}")

    def remove_vertex(self, vertex_id: str) -> Graph:
        if not self._graph.has_vertex(vertex_id):
            return self._graph
        draft = self._graph.copy()
        draft.remove_vertex(vertex_id)
        return self._commit(draft, f"remove vertex {vertex_id}")

    def remove_edge(self, source: str, target: str) -> Graph:
        if not self._graph.has_edge(source, target):
            return self._graph
        draft = self._graph.copy()
        draft.remove_edge(source, target)
        return self._commit(draft, f"remove edge {source} → {target}")

    def update_vertex_position(self, vertex_id: str, x: float, y: float) -> Graph:
        """Cosmetic drag update — deliberately NOT recorded in history."""
        vertex = self._graph.get_vertex(vertex_id)
        if vertex is None:
            return self._graph
        vertex.move_to(x, y)
        self._notify(structural=False)
        return self._graph

    def toggle_directed(self) -> Graph:
        draft = self._graph.copy()
        draft.is_directed = not draft.is_directed
        kind = "directed" if draft.is_directed else "undirected"
        return self._commit(draft, f"switch to {kind}")

    def clear_graph(self) -> Graph:
        return self._commit(Graph(is_directed=self._graph.is_directed), "clear graph")

    # ==================================================================
    # IMPORT / EXPORT
    # ==================================================================
    def import_graph(self, payload: Any) -> Graph:
        try:
            validate_payload(payload)
        except ImportValidationError as exc:
            logger.warning("Rejected graph import: %s", exc)
            raise
        return self._commit(Graph.from_dict(payload), "import graph")

    def import_json(self, text: str) -> Graph:
        try:
            payload = json.loads(text)
        except (TypeError, ValueError) as exc:
            logger.warning("Rejected graph import: not valid JSON (%s)", exc)
            raise ImportValidationError(f"Failed to import graph: invalid JSON ({exc})") from exc
        return self.import_graph(payload)

    def export_graph(self) -> dict:
        return self._graph.to_dict()

    def export_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.export_graph(), indent=indent)

    # ==================================================================
    # UNDO / REDO
    # ==================================================================
    def undo(self) -> Graph:
        if not self.can_undo:
            return self._graph
        self._cursor -= 1
        self._graph, self._entries[self._cursor] = self._entries[self._cursor], self._graph
        self._bump("undo")
        return self._graph

    def redo(self) -> Graph:
        if not self.can_redo:
            return self._graph
        self._graph, self._entries[self._cursor] = self._entries[self._cursor], self._graph
        self._cursor += 1
        self._bump("redo")
        return self._graph

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _commit(self, draft: Graph, what: str) -> Graph:
        del self._entries[self._cursor:]
        self._entries.append(self._graph)       # the pre-mutation value; never mutated again
        if len(self._entries) > self.history_limit:
            del self._entries[0]
        self._cursor = len(self._entries)
        self._graph = draft
        self._bump(what)
        return self._graph

    def _bump(self, what: str) -> None:
        self.version += 1
        logger.debug("%s → %r (history %d/%d)", what, self._graph, self._cursor, len(self._entries))
        self._notify(structural=True)

    def _notify(self, structural: bool) -> None:
        for listener in list(self._listeners):
            listener(self._graph, structural)


# ---------------------------------------------------------------------------
# Import validation
# ---------------------------------------------------------------------------
def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def validate_payload(payload: Any) -> None:
    """
    Check an exchange-format dict before it may replace the live graph.
    Raises ImportValidationError naming the first problem found.
    """
    if not isinstance(payload, dict):
        raise ImportValidationError("Invalid graph structure: expected a JSON object")
    if not isinstance(payload.get("vertices"), list):
        raise ImportValidationError("Invalid graph structure: missing vertices array")
    if not isinstance(payload.get("edges"), list):
        raise ImportValidationError("Invalid graph structure: missing edges array")
    if not isinstance(payload.get("isDirected"), bool):
        raise ImportValidationError("Invalid graph structure: isDirected must be boolean")

    ids = set()
    for i, vd in enumerate(payload["vertices"]):
        if not isinstance(vd, dict) or not isinstance(vd.get("id"), str):
            raise ImportValidationError(f"Vertex #{i} must be an object with a string id")
        if not isinstance(vd.get("label"), str):
            raise ImportValidationError(f"Vertex '{vd['id']}' must have a string label")
        pos = vd.get("position")
        if not isinstance(pos, dict) or not (_is_number(pos.get("x")) and _is_number(pos.get("y"))):
            raise ImportValidationError(f"Vertex '{vd['id']}' must have a finite numeric position {{x, y}}")
        if vd["id"] in ids:
            raise ImportValidationError(f"Duplicate vertex id '{vd['id']}'")
        ids.add(vd["id"])

    pairs = set()
    for i, ed in enumerate(payload["edges"]):
        if not isinstance(ed, dict) or not isinstance(ed.get("from"), str) or not isinstance(ed.get("to"), str):
            raise ImportValidationError(f"Edge #{i} must be an object with string 'from' and 'to'")
        pair = (ed["from"], ed["to"])
        missing = [vid for vid in pair if vid not in ids]
        if missing:
            raise ImportValidationError(
                f"Dangling edge {pair[0]} → {pair[1]}: unknown vertex '{missing[0]}'"
            )
        if pair in pairs:
            raise ImportValidationError(f"Duplicate edge {pair[0]} → {pair[1]}")
        pairs.add(pair)
