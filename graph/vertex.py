"""
vertex.py — Graph Vertex
========================
A labelled point on the canvas.

Design decisions:
  - `id` is stable for the vertex's whole lifetime; `label` is assigned once
    at creation (A, B, C, …) and never renumbered when others are removed.
  - Position lives on the vertex because dragging and export need it, but
    nothing in adjacency or traversal ever reads it.
  - Equality is structural (id, label AND position) so two graph snapshots
    can be compared field-for-field by the undo/redo machinery.
"""

from typing import Optional


# ---------------------------------------------------------------------------
# Label policy
# ---------------------------------------------------------------------------
def vertex_label(index: int) -> str:
    """
    0 → "A", 25 → "Z", 26 → "AA", 27 → "AB", … 701 → "ZZ", 702 → "AAA".

    Bijective base-26 (spreadsheet-column style), so labels stay letters
    past the 26th vertex.
    """
    if index < 0:
        raise ValueError(f"label index must be >= 0, got {index}")
    letters = []
    n = index + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters.append(chr(ord("A") + rem))
    return "".join(reversed(letters))


# ---------------------------------------------------------------------------
# Vertex
# ---------------------------------------------------------------------------
class Vertex:
    """
    Attributes:
        id    : Unique identifier, e.g. "v3".
        label : Display name shown on the canvas, e.g. "D".
        x, y  : Canvas coordinates (pixels — the renderer decides).
    """

    __slots__ = ("id", "label", "x", "y")

    def __init__(
        self,
        vertex_id: str,
        label: Optional[str] = None,
        x: float = 0.0,
        y: float = 0.0,
    ):
        self.id:    str   = vertex_id
        self.label: str   = label if label is not None else vertex_id
        self.x:     float = float(x)
        self.y:     float = float(y)

    def move_to(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def copy(self) -> "Vertex":
        return Vertex(self.id, self.label, self.x, self.y)

    # ------------------------------------------------------------------
    # Serialisation  (exchange format: {id, label, position: {x, y}})
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":       self.id,
            "label":    self.label,
            "position": {"x": self.x, "y": self.y},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Vertex":
        pos = data.get("position", {})
        return cls(
            vertex_id=data["id"],
            label=data.get("label"),
            x=pos.get("x", 0.0),
            y=pos.get("y", 0.0),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Vertex(id={self.id}, label={self.label}, pos=({self.x:.1f},{self.y:.1f}))"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Vertex)
            and self.id == other.id
            and self.label == other.label
            and self.x == other.x
            and self.y == other.y
        )

    def __hash__(self) -> int:
        return hash(self.id)
