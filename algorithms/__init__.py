"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the playground knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "dfs": AlgoInfo(key, label, fn, pseudocode, implemented, …),
        …
    }

Every `fn` has the same shape — fn(graph, start) -> List[Step] — so the
session layer can run whichever one is selected.  Only DFS is implemented;
BFS and Dijkstra are listed so the UI can show them as "coming soon".
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from algorithms.step     import Step, StepAction, TraceBuilder
from algorithms.dfs      import dfs_steps,      dfs_order, PSEUDOCODE as _dfs_pc
from algorithms.bfs      import bfs_steps,      PSEUDOCODE as _bfs_pc
from algorithms.dijkstra import dijkstra_steps, PSEUDOCODE as _dij_pc


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "dfs"
    label:            str                    # human label, e.g. "Depth-First Search"
    fn:               Callable               # fn(graph, start) -> List[Step]
    pseudocode:       List[str]              # lines for the side-panel
    implemented:      bool      = True
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str       = ""
    complexity_space: str       = ""
    description:      str       = ""

    def to_dict(self) -> dict:
        return {
            "key":             self.key,
            "label":           self.label,
            "pseudocode":      list(self.pseudocode),
            "implemented":     self.implemented,
            "tags":            list(self.tags),
            "complexityTime":  self.complexity_time,
            "complexitySpace": self.complexity_space,
            "description":     self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=dfs_steps, pseudocode=_dfs_pc,
        tags=["traversal", "stack"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking, driven by an explicit stack.",
    ),

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=bfs_steps, pseudocode=_bfs_pc,
        implemented=False,
        tags=["traversal", "queue"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer-by-layer. Coming soon.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=dijkstra_steps, pseudocode=_dij_pc,
        implemented=False,
        tags=["weighted", "shortest-path"],
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Greedily expands the closest vertex. Coming soon.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    return REGISTRY.get(key.lower())


def list_algorithms(implemented_only: bool = False) -> List[AlgoInfo]:
    """Registered algorithms in menu order; stubs included unless asked not to."""
    return [a for a in REGISTRY.values() if a.implemented or not implemented_only]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "Step",
    "StepAction",
    "TraceBuilder",
    "dfs_steps",
    "dfs_order",
]
