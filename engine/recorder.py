"""
recorder.py — Trace Recorder & Analytics
=========================================
Runs an algorithm to completion against a graph SNAPSHOT, keeps the full
trace, and computes the numbers the analytics card shows.

Usage:
    rec = Recorder()
    rec.record(algo_key="dfs", start="v0", graph=store.snapshot())
    rec.steps                    # the immutable trace for playback
    rec.metrics                  # TraceMetrics
    rec.export()                 # serialisable snapshot for save / replay
"""

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from graph import Graph
from algorithms import get_algorithm, AlgoInfo
from algorithms.step import Step, StepAction

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class TraceMetrics:
    algo_key:         str   = ""
    algo_label:       str   = ""
    start:            str   = ""
    vertices_visited: int   = 0
    vertices_total:   int   = 0
    pushes:           int   = 0
    backtracks:       int   = 0
    tree_edges:       int   = 0       # pushes that crossed an edge
    total_steps:      int   = 0
    wall_time_ms:     float = 0.0     # time to compute the whole trace

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def summarize(steps: List[Step], vertices_total: int = 0) -> TraceMetrics:
    """Counts over a finished trace (no algorithm or timing info)."""
    last = steps[-1] if steps else None
    return TraceMetrics(
        vertices_visited=len(last.visited_vertices) if last else 0,
        vertices_total=vertices_total,
        pushes=sum(1 for s in steps if s.action is StepAction.PUSH),
        backtracks=sum(1 for s in steps if s.action is StepAction.BACKTRACK),
        tree_edges=sum(1 for s in steps if s.edge is not None),
        total_steps=len(steps),
    )


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full trace from the last record() call.
        metrics : TraceMetrics for that trace (None before the first run).
    """

    def __init__(self):
        self.steps:   List[Step]             = []
        self.metrics: Optional[TraceMetrics] = None

        self._algo_info: Optional[AlgoInfo] = None
        self._start:     str                = ""
        self._graph:     Optional[Graph]    = None

    def record(self, algo_key: str, start: str, graph: Graph) -> List[Step]:
        """Compute the full trace.  Propagates InvalidStartVertex unchanged."""
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")

        snapshot = graph.copy()
        t0 = time.monotonic()
        steps = info.fn(snapshot, start)
        wall_ms = (time.monotonic() - t0) * 1000

        self._algo_info = info
        self._start     = start
        self._graph     = snapshot
        self.steps      = steps

        metrics = summarize(steps, vertices_total=snapshot.vertex_count)
        metrics.algo_key     = info.key
        metrics.algo_label   = info.label
        metrics.start        = start
        metrics.wall_time_ms = round(wall_ms, 3)
        self.metrics = metrics

        logger.info(
            "%s from %s: %d steps, %d/%d visited in %.3fms",
            info.label, start, metrics.total_steps,
            metrics.vertices_visited, metrics.vertices_total, wall_ms,
        )
        return steps

    def clear(self) -> None:
        self.steps      = []
        self.metrics    = None
        self._algo_info = None
        self._start     = ""
        self._graph     = None

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algoKey": self._algo_info.key if self._algo_info else "",
            "start":   self._start,
            "graph":   self._graph.to_dict() if self._graph else {},
            "metrics": self.metrics.to_dict() if self.metrics else {},
            "steps":   [s.to_dict() for s in self.steps],
        }
