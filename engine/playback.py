"""
playback.py — Step-by-Step Playback Controller
===============================================
The controller is the ONLY object the UI talks to during a run.  It owns an
index into a precomputed trace and exposes a VCR-style API:
start / pause / resume / next / previous / reset / speed.

State machine:
    IDLE     →  start()                     →  RUNNING
    RUNNING  →  pause()                     →  PAUSED
    PAUSED   →  resume()                    →  RUNNING
    RUNNING  →  (last step reached)         →  COMPLETE
    IDLE / PAUSED → next_step() onto last   →  COMPLETE
    any      →  reset() / load()            →  IDLE   (index -1)

Timer ownership:
    At most one scheduled advance exists at any time.  Every path that
    changes status cancels the pending handle BEFORE creating a new one, and
    a fired callback re-checks status, so nothing advances after pause()
    or reset() has returned.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence

from algorithms.step import Step
from engine.visualization import VisualizationState, derive_state

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackStatus(Enum):
    IDLE     = "idle"
    RUNNING  = "running"
    PAUSED   = "paused"
    COMPLETE = "complete"


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1000,   # teaching mode
    "medium": 400,
    "fast":   150,    # demo mode
    "turbo":  50,
}

DEFAULT_SPEED_MS = SPEED_PRESETS["slow"]
MIN_SPEED_MS     = 20


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        status          : Current PlaybackStatus.
        steps           : The trace being played (never modified).
        step_index      : Index into `steps` currently displayed (-1 = before the first).
        animation_speed : Milliseconds between auto-advance ticks.
        on_change       : Optional callback(VisualizationState) fired after every
                          index or status change.  The UI hooks its re-render here.
    """

    def __init__(
        self,
        scheduler,
        steps: Sequence[Step] = (),
        vertex_ids: Sequence[str] = (),
        animation_speed: float = DEFAULT_SPEED_MS,
        min_speed: float = MIN_SPEED_MS,
        on_change: Optional[Callable[[VisualizationState], None]] = None,
    ):
        self.scheduler                    = scheduler
        self.steps:       List[Step]      = list(steps)
        self.vertex_ids:  List[str]       = list(vertex_ids)
        self.step_index:  int             = -1
        self.status:      PlaybackStatus  = PlaybackStatus.IDLE
        self.min_speed:   float           = min_speed
        self.animation_speed: float       = max(min_speed, animation_speed)
        self.on_change = on_change

        self._timer = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, steps: Sequence[Step], vertex_ids: Sequence[str]) -> None:
        """Swap in a fresh trace.  Any in-flight playback is discarded."""
        self._cancel()
        self.steps      = list(steps)
        self.vertex_ids = list(vertex_ids)
        self.step_index = -1
        self.status     = PlaybackStatus.IDLE
        logger.debug("Loaded trace of %d steps", len(self.steps))
        self._notify()

    def reset(self) -> None:
        self._cancel()
        self.step_index = -1
        self.status     = PlaybackStatus.IDLE
        self._notify()

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def start(self) -> None:
        if not self.steps:
            return
        self._cancel()
        if self.step_index >= self.last_index:
            self.step_index = -1
        self.status = PlaybackStatus.RUNNING
        self._schedule()
        logger.debug("Playback running from index %d every %sms", self.step_index, self.animation_speed)
        self._notify()

    def pause(self) -> None:
        self._cancel()
        if self.status is PlaybackStatus.RUNNING:
            self.status = PlaybackStatus.PAUSED
            self._notify()

    def resume(self) -> None:
        if self.status is PlaybackStatus.PAUSED:
            self.start()

    def toggle_play(self) -> None:
        if self.status is PlaybackStatus.RUNNING:
            self.pause()
        elif self.status is PlaybackStatus.PAUSED:
            self.resume()
        else:
            self.start()

    # ------------------------------------------------------------------
    # Manual navigation (refused while running)
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step.  Returns False if nothing moved."""
        if self.is_running or not self.steps:
            return False
        if self.step_index >= self.last_index:
            if self.status is not PlaybackStatus.COMPLETE:
                self.status = PlaybackStatus.COMPLETE
                self._notify()
            return False
        self.step_index += 1
        if self.step_index == self.last_index:
            self.status = PlaybackStatus.COMPLETE
        else:
            self.status = PlaybackStatus.PAUSED
        self._notify()
        return True

    def previous_step(self) -> bool:
        """Rewind one step.  Returns False if already before the first."""
        if self.is_running or self.step_index < 0:
            return False
        self.step_index -= 1
        self.status = PlaybackStatus.IDLE if self.step_index < 0 else PlaybackStatus.PAUSED
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, milliseconds: float) -> None:
        self.animation_speed = max(self.min_speed, float(milliseconds))
        if self.is_running and self._timer is not None:
            # same pending step, new interval
            self._cancel()
            self._schedule()

    def set_speed_preset(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise ValueError(f"Unknown speed preset: {preset}")
        self.set_speed(SPEED_PRESETS[preset])

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def last_index(self) -> int:
        return len(self.steps) - 1

    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.step_index < len(self.steps):
            return self.steps[self.step_index]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_running(self) -> bool:
        return self.status is PlaybackStatus.RUNNING

    @property
    def can_step_forward(self) -> bool:
        return self.step_index < self.last_index

    @property
    def can_step_backward(self) -> bool:
        return self.step_index >= 0

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    @property
    def visualization_state(self) -> VisualizationState:
        return derive_state(self.vertex_ids, self.steps, self.step_index)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _schedule(self) -> None:
        self._cancel()
        self._timer = self.scheduler.call_later(self.animation_speed / 1000.0, self._advance)

    def _cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _advance(self) -> None:
        self._timer = None
        if not self.is_running:
            return
        if self.step_index < self.last_index:
            self.step_index += 1
        if self.step_index >= self.last_index:
            self.status = PlaybackStatus.COMPLETE
            logger.debug("Playback complete at index %d", self.step_index)
        else:
            self._schedule()
        self._notify()

    def _notify(self) -> None:
        if self.on_change:
            self.on_change(self.visualization_state)
