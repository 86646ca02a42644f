"""
edge.py — Graph Edge
====================
An ordered pair of vertex ids.

Design decisions:
  - `source` and `target` are vertex-id strings, NOT Vertex references.
    This keeps edges serialisable and avoids circular references.
  - Directionality is NOT stored on the edge.  The graph-level
    `is_directed` flag decides whether (a, b) also means b → a, so flipping
    the flag never rewrites a single edge record.
  - Identity is the ordered pair itself — the graph never holds two edges
    with the same (source, target), so the pair doubles as the key.
  - Serialised keys are "from" / "to" (Python can't use `from` as a name).
"""

from typing import Optional, Tuple


class Edge:
    """
    Attributes:
        source : ID of the tail vertex ("from").
        target : ID of the head vertex ("to").
    """

    __slots__ = ("source", "target")

    def __init__(self, source: str, target: str):
        self.source: str = source
        self.target: str = target

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def key(self) -> str:
        """Stable string key used by the renderer for highlighting."""
        return f"{self.source}-{self.target}"

    @property
    def pair(self) -> Tuple[str, str]:
        return (self.source, self.target)

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    def touches(self, vertex_id: str) -> bool:
        return self.source == vertex_id or self.target == vertex_id

    def other_end(self, vertex_id: str, directed: bool) -> Optional[str]:
        """Given one endpoint, return the reachable other one (or None)."""
        if vertex_id == self.source:
            return self.target
        if vertex_id == self.target and not directed:
            return self.source
        return None          # not an endpoint, or can't walk a directed edge backwards

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"from": self.source, "to": self.target}

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(source=data["from"], target=data["to"])

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.source} → {self.target})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.pair == other.pair

    def __hash__(self) -> int:
        return hash(self.pair)
