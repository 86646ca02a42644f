"""
visualization.py — Renderable State per Step
==============================================
Turns (trace, index) into exactly what the canvas needs to paint one
frame.  Pure function, no state: the controller calls it after every move,
and a renderer can call it for any index it likes.

Vertex classification, first match wins:
    current   – the step's current vertex
    visited   – in the step's visited set
    visiting  – sitting on the stack
    unvisited – everything else

Highlighted edges are CUMULATIVE over trace[0..index], so the UI shows the
whole DFS tree explored so far rather than just the last hop.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Sequence

from algorithms.step import Step


class VertexState(Enum):
    UNVISITED = "unvisited"   # default grey
    VISITING  = "visiting"    # amber — on the stack, not yet processed
    VISITED   = "visited"     # green — processed
    CURRENT   = "current"     # bright highlight — the vertex this step is about


READY_DESCRIPTION    = "Ready to start DFS"
NO_STEPS_DESCRIPTION = "No steps available"


@dataclass(frozen=True)
class VisualizationState:
    """
    Attributes:
        current_step      : 1-based position (0 before the first step).
        total_steps       : Trace length.
        vertex_states     : {vertex_id: VertexState} for every vertex.
        highlighted_edges : Edge keys ("from-to") explored so far, in discovery order.
        stack             : Stack contents, top = last.
        visited           : Visited vertex ids, in visit order.
        description       : Narration for this frame.
    """

    current_step:      int                       = 0
    total_steps:       int                       = 0
    vertex_states:     Dict[str, VertexState]    = field(default_factory=dict)
    highlighted_edges: List[str]                 = field(default_factory=list)
    stack:             List[str]                 = field(default_factory=list)
    visited:           List[str]                 = field(default_factory=list)
    description:       str                       = READY_DESCRIPTION

    def to_dict(self) -> dict:
        return {
            "currentStep":      self.current_step,
            "totalSteps":       self.total_steps,
            "vertexStates":     {vid: s.value for vid, s in self.vertex_states.items()},
            "highlightedEdges": list(self.highlighted_edges),
            "stack":            list(self.stack),
            "visited":          list(self.visited),
            "description":      self.description,
        }


def derive_state(vertex_ids: Sequence[str], steps: Sequence[Step], index: int) -> VisualizationState:
    if index < 0 or not steps:
        return VisualizationState(
            current_step=0,
            total_steps=len(steps),
            vertex_states={vid: VertexState.UNVISITED for vid in vertex_ids},
            description=READY_DESCRIPTION if steps else NO_STEPS_DESCRIPTION,
        )

    index = min(index, len(steps) - 1)
    step = steps[index]
    visited = set(step.visited_vertices)
    on_stack = set(step.stack)

    states: Dict[str, VertexState] = {}
    for vid in vertex_ids:
        if vid == step.current_vertex:
            states[vid] = VertexState.CURRENT
        elif vid in visited:
            states[vid] = VertexState.VISITED
        elif vid in on_stack:
            states[vid] = VertexState.VISITING
        else:
            states[vid] = VertexState.UNVISITED

    edges: List[str] = []
    for s in steps[: index + 1]:
        if s.edge is not None and s.edge.key not in edges:
            edges.append(s.edge.key)

    return VisualizationState(
        current_step=index + 1,
        total_steps=len(steps),
        vertex_states=states,
        highlighted_edges=edges,
        stack=list(step.stack),
        visited=list(step.visited_vertices),
        description=step.description,
    )
