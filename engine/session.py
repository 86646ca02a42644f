"""
session.py — One Editing Session
=================================
Wires the three layers together for a single user:

    GraphStore ──(structural change)──► Recorder ──(new trace)──► PlaybackController

The session is what guarantees a stale trace is never played: every
structural commit (including undo / redo) and every start-vertex change
recomputes the trace from scratch and loads it into the controller, which
cancels any running playback and goes back to IDLE.  Position-only drags
don't touch the trace — positions never influence traversal.

Threading:
  A session is single-threaded inside, but a threaded web server may hand
  two requests for the same browser to two threads.  Callers hold
  `session.lock` around everything they do (tick, mutate, read state), so
  a timer callback can never run between a pause() and its response.
  SessionRegistry owns the sessions of one app and evicts idle ones.
"""

import logging
import secrets
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, List, Optional, Tuple

from graph import GraphStore, InvalidStartVertex, DEFAULT_HISTORY_LIMIT
from engine.playback import PlaybackController, DEFAULT_SPEED_MS, MIN_SPEED_MS
from engine.recorder import Recorder
from engine.scheduler import TickScheduler

logger = logging.getLogger(__name__)


class EditingSession:
    """
    Attributes:
        store        : The session's GraphStore.
        scheduler    : Timer source for auto-advance (TickScheduler by default).
        controller   : PlaybackController over the current trace.
        recorder     : Holds the current trace and its metrics.
        start_vertex : Traversal start (None = no trace).
        lock         : RLock held by whoever drives the session from a thread.
    """

    def __init__(
        self,
        scheduler=None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        animation_speed: float = DEFAULT_SPEED_MS,
        min_speed: float = MIN_SPEED_MS,
        algo_key: str = "dfs",
    ):
        self.store      = GraphStore(history_limit=history_limit)
        self.scheduler  = scheduler or TickScheduler()
        self.controller = PlaybackController(
            self.scheduler, animation_speed=animation_speed, min_speed=min_speed,
        )
        self.recorder   = Recorder()
        self.algo_key   = algo_key
        self.start_vertex: Optional[str] = None
        self.lock       = threading.RLock()

        self.store.subscribe(self._on_graph_change)

    @classmethod
    def from_settings(cls, settings, scheduler=None) -> "EditingSession":
        return cls(
            scheduler=scheduler,
            history_limit=settings.history_limit,
            animation_speed=settings.animation_speed_ms,
            min_speed=settings.min_animation_speed_ms,
        )

    # ------------------------------------------------------------------
    # Start vertex
    # ------------------------------------------------------------------
    def set_start_vertex(self, vertex_id: Optional[str]) -> None:
        if vertex_id is not None and not self.store.graph.has_vertex(vertex_id):
            raise InvalidStartVertex(f"Start vertex '{vertex_id}' is not in the graph")
        self.start_vertex = vertex_id
        self._rebuild_trace()

    def run(self, start: Optional[str] = None) -> None:
        """Pick a start (default: the first vertex) and begin playback."""
        graph = self.store.graph
        if start is None:
            if graph.vertex_count == 0:
                raise InvalidStartVertex("Add some vertices to the graph first")
            start = graph.vertex_ids()[0]
        self.set_start_vertex(start)
        self.controller.start()

    # ------------------------------------------------------------------
    # Snapshot for the presentation layer
    # ------------------------------------------------------------------
    def state(self) -> Dict[str, Any]:
        ctl = self.controller
        return {
            "graph":           self.store.export_graph(),
            "startVertex":     self.start_vertex,
            "status":          ctl.status.value,
            "stepIndex":       ctl.step_index,
            "animationSpeed":  ctl.animation_speed,
            "visualization":   ctl.visualization_state.to_dict(),
            "canStepForward":  ctl.can_step_forward,
            "canStepBackward": ctl.can_step_backward,
            "canUndo":         self.store.can_undo,
            "canRedo":         self.store.can_redo,
            "metrics":         self.recorder.metrics.to_dict() if self.recorder.metrics else None,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _on_graph_change(self, graph, structural: bool) -> None:
        if not structural:
            return
        if self.start_vertex is not None and not graph.has_vertex(self.start_vertex):
            logger.info("Start vertex %s no longer exists; clearing it", self.start_vertex)
            self.start_vertex = None
        self._rebuild_trace()

    def _rebuild_trace(self) -> None:
        graph = self.store.graph
        if self.start_vertex is None:
            self.recorder.clear()
            steps = []
        else:
            steps = self.recorder.record(self.algo_key, self.start_vertex, graph)
        self.controller.load(steps, graph.vertex_ids())


# ---------------------------------------------------------------------------
# Registry — the sessions of one web app
# ---------------------------------------------------------------------------
DEFAULT_MAX_SESSIONS = 100
DEFAULT_IDLE_TIMEOUT = 3600.0


class SessionRegistry:
    """
    Session id → EditingSession, least recently used first.

    A session is dropped once it has been idle longer than `idle_timeout`
    seconds, and the least recently used ones go first whenever more than
    `max_sessions` exist.  A request that still holds an evicted session
    finishes normally; the next request with that id gets a fresh one.
    """

    def __init__(
        self,
        factory: Callable[[], EditingSession],
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
        clock: Optional[Callable[[], float]] = None,
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.factory      = factory
        self.max_sessions = max_sessions
        self.idle_timeout = idle_timeout
        self.clock        = clock or time.monotonic

        self._sessions: "OrderedDict[str, Tuple[EditingSession, float]]" = OrderedDict()
        self._lock = threading.Lock()

    def get_or_create(self, sid: Optional[str]) -> Tuple[str, EditingSession]:
        """Look `sid` up (refreshing it) or start a new session under a new id."""
        with self._lock:
            now = self.clock()
            self._evict_idle(now)
            if sid is not None and sid in self._sessions:
                sess, _ = self._sessions.pop(sid)
                self._sessions[sid] = (sess, now)
                return sid, sess

            sid = secrets.token_hex(16)
            sess = self.factory()
            self._sessions[sid] = (sess, now)
            while len(self._sessions) > self.max_sessions:
                old, _ = self._sessions.popitem(last=False)
                logger.info("Evicted editing session %s (over %d sessions)", old, self.max_sessions)
            logger.info("Started editing session %s", sid)
            return sid, sess

    def sessions(self) -> List[EditingSession]:
        with self._lock:
            return [sess for sess, _ in self._sessions.values()]

    def __contains__(self, sid: str) -> bool:
        return sid in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def _evict_idle(self, now: float) -> None:
        # oldest first, so stop at the first one still fresh
        while self._sessions:
            sid, (_, seen) = next(iter(self._sessions.items()))
            if now - seen <= self.idle_timeout:
                break
            del self._sessions[sid]
            logger.info("Evicted editing session %s (idle %.0fs)", sid, now - seen)
