"""
step.py — Traversal Step Snapshot
==================================
A traversal is computed up front as a list of Step objects.  A Step is a
frozen-in-time picture of everything the playback layer needs for one
frame:

    • What just happened (push / pop / visit / backtrack / complete)
    • Which vertex is being handled right now
    • The visited set and the stack at this moment
    • The edge just crossed, if this step pushed across one
    • A plain-English explanation for the narration panel

Design decisions:
  - Step is a frozen dataclass holding tuples only.  It is a SNAPSHOT: the
    step engine is the only writer, playback and rendering are pure readers.
  - `visited_vertices` keeps visit order (membership is all the renderer
    needs, order is free and keeps traces byte-for-byte reproducible).
  - `edge` is the graph's own edge record, so the renderer can highlight
    it by key even when an undirected edge was walked "backwards".
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from graph import Edge


class StepAction(Enum):
    PUSH      = "push"        # vertex placed on the stack
    POP       = "pop"         # look-ahead: this vertex comes off next
    VISIT     = "visit"       # popped and marked visited
    BACKTRACK = "backtrack"   # popped but already visited — skip it
    COMPLETE  = "complete"    # stack empty, traversal finished


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number      : 0-based index of this step in the trace.
        action           : StepAction.
        current_vertex   : ID of the vertex this step is about: the one being
                           expanded for PUSH, the one coming off next for POP,
                           None on COMPLETE.
        visited_vertices : IDs marked visited so far, in visit order.
        stack            : Stack contents, top = last element.
        edge             : Edge pushed across (PUSH steps only), else None.
        description      : Human-readable narration.
    """

    step_number:      int
    action:           StepAction
    current_vertex:   Optional[str]
    visited_vertices: Tuple[str, ...]     = ()
    stack:            Tuple[str, ...]     = ()
    edge:             Optional[Edge]      = None
    description:      str                 = ""

    @property
    def is_final(self) -> bool:
        return self.action is StepAction.COMPLETE

    def to_dict(self) -> dict:
        return {
            "stepNumber":      self.step_number,
            "action":          self.action.value,
            "currentVertex":   self.current_vertex,
            "visitedVertices": list(self.visited_vertices),
            "stack":           list(self.stack),
            "edge":            self.edge.to_dict() if self.edge else None,
            "description":     self.description,
        }


# ---------------------------------------------------------------------------
# Trace builder — numbers steps and snapshots the mutable state for you
# ---------------------------------------------------------------------------
class TraceBuilder:
    """
    Usage inside an algorithm:
        tb = TraceBuilder()
        tb.emit(StepAction.VISIT, "v0", visited, stack, "Visit A")
        return tb.steps
    """

    def __init__(self):
        self.steps: List[Step] = []

    def emit(
        self,
        action: StepAction,
        current: Optional[str],
        visited: Sequence[str],
        stack: Sequence[str],
        description: str,
        edge: Optional[Edge] = None,
    ) -> Step:
        step = Step(
            step_number=len(self.steps),
            action=action,
            current_vertex=current,
            visited_vertices=tuple(visited),
            stack=tuple(stack),
            edge=Edge(edge.source, edge.target) if edge else None,
            description=description,
        )
        self.steps.append(step)
        return step
