"""
engine/
-------
Playback & recording layer.

    from engine import PlaybackController, EditingSession, TickScheduler
"""

from engine.scheduler     import TickScheduler, AsyncioScheduler, TimerHandle
from engine.visualization import VertexState, VisualizationState, derive_state
from engine.playback      import PlaybackController, PlaybackStatus, SPEED_PRESETS
from engine.recorder      import Recorder, TraceMetrics, summarize
from engine.session       import EditingSession, SessionRegistry

__all__ = [
    "TickScheduler",
    "AsyncioScheduler",
    "TimerHandle",
    "VertexState",
    "VisualizationState",
    "derive_state",
    "PlaybackController",
    "PlaybackStatus",
    "SPEED_PRESETS",
    "Recorder",
    "TraceMetrics",
    "summarize",
    "EditingSession",
    "SessionRegistry",
]
