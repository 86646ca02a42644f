"""
dfs.py — Depth-First Search
=============================
Iterative DFS using an explicit stack (no Python recursion limit issues),
computed eagerly into a complete trace.

Emits a Step at:
  1. Push start vertex onto the stack             → PUSH
  2. Pop a vertex that was already visited        → BACKTRACK
  3. Pop an unvisited vertex and mark it          → VISIT
  4. Push each unvisited neighbour (with its edge)→ PUSH
  5. Preview the next vertex to come off          → POP
  6. Stack empty                                  → COMPLETE

Unvisited neighbours are pushed in REVERSE edge order so that popping them
visits them left-to-right, the same order a recursive DFS would.

The whole trace is materialised before playback starts: playback can then
rewind, change speed or restart without re-running any algorithm logic.
"""

import logging
from typing import List

from graph import Graph, InvalidStartVertex
from algorithms.step import Step, StepAction, TraceBuilder

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(graph, start):",                           # 0
    "    stack ← [start]",                              # 1
    "    visited ← {}",                                 # 2
    "    while stack is not empty:",                    # 3
    "        node ← stack.pop()",                       # 4
    "        if node in visited: backtrack",            # 5
    "        visited.add(node)",                        # 6
    "        for nbr in reversed(unvisited adj(node)):",# 7
    "            stack.push(nbr)",                      # 8
    "    return visited",                               # 9
]


# ---------------------------------------------------------------------------
# Step engine
# ---------------------------------------------------------------------------
def dfs_steps(graph: Graph, start: str) -> List[Step]:
    """
    Full DFS trace for (graph, start).  Pure: the graph is only read, and
    the same input always yields an identical list.

    Raises InvalidStartVertex for an empty graph or an unknown start.
    """
    if graph.vertex_count == 0:
        raise InvalidStartVertex("Cannot run DFS on an empty graph")
    if not graph.has_vertex(start):
        raise InvalidStartVertex(f"Start vertex '{start}' is not in the graph")

    name    = graph.label_of
    tb      = TraceBuilder()
    stack   = [start]
    visited: List[str] = []
    seen    = set()

    tb.emit(
        StepAction.PUSH, start, visited, stack,
        f"Initialise: push start vertex {name(start)} onto the stack.",
    )

    while stack:
        current = stack.pop()

        if current in seen:
            tb.emit(
                StepAction.BACKTRACK, current, visited, stack,
                f"Pop {name(current)}: already visited, backtrack.",
            )
            continue

        seen.add(current)
        visited.append(current)
        tb.emit(
            StepAction.VISIT, current, visited, stack,
            f"Visit {name(current)} and mark it visited.",
        )

        # distinct unvisited neighbours, first edge wins
        pending = []
        reached = set()
        for nbr, edge in graph.neighbours(current):
            if nbr in seen or nbr in reached:
                continue
            reached.add(nbr)
            pending.append((nbr, edge))

        for nbr, edge in reversed(pending):
            stack.append(nbr)
            tb.emit(
                StepAction.PUSH, current, visited, stack,
                f"Push {name(nbr)} (neighbour of {name(current)}) onto the stack.",
                edge=edge,
            )

        if stack:
            tb.emit(
                StepAction.POP, stack[-1], visited, stack,
                f"Next: pop {name(stack[-1])} from the top of the stack.",
            )

    order = " → ".join(name(v) for v in visited)
    tb.emit(
        StepAction.COMPLETE, None, visited, stack,
        f"DFS complete. Visited {len(visited)} vertices: {order}.",
    )

    logger.debug("DFS from %s: %d steps, %d visited", start, len(tb.steps), len(visited))
    return tb.steps


def dfs_order(graph: Graph, start: str) -> List[str]:
    """Just the visit order — what the final step's visited set lists."""
    return list(dfs_steps(graph, start)[-1].visited_vertices)
