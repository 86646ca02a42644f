"""Centralised settings for the graph playground.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
import secrets
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

_env_path = Path(__file__).resolve().parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Graph store
    # ------------------------------------------------------------------
    history_limit: int = field(
        default_factory=lambda: int(os.environ.get("GRAPH_HISTORY_LIMIT", "50"))
    )

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------
    animation_speed_ms: float = field(
        default_factory=lambda: float(os.environ.get("GRAPH_ANIMATION_SPEED_MS", "1000"))
    )
    min_animation_speed_ms: float = field(
        default_factory=lambda: float(os.environ.get("GRAPH_MIN_ANIMATION_SPEED_MS", "20"))
    )

    # ------------------------------------------------------------------
    # Canvas (random-graph generation)
    # ------------------------------------------------------------------
    canvas_width: float = field(
        default_factory=lambda: float(os.environ.get("GRAPH_CANVAS_WIDTH", "800"))
    )
    canvas_height: float = field(
        default_factory=lambda: float(os.environ.get("GRAPH_CANVAS_HEIGHT", "500"))
    )

    # ------------------------------------------------------------------
    # Web server
    # ------------------------------------------------------------------
    max_sessions: int = field(
        default_factory=lambda: int(os.environ.get("GRAPH_MAX_SESSIONS", "100"))
    )
    session_idle_seconds: float = field(
        default_factory=lambda: float(os.environ.get("GRAPH_SESSION_IDLE_SECONDS", "3600"))
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("GRAPH_LOG_LEVEL", "INFO").upper()
    )
    secret_key: str = field(
        default_factory=lambda: os.environ.get("GRAPH_SECRET_KEY") or secrets.token_hex(32)
    )


# Module-level singleton — import this everywhere:
#   from config import settings
settings = Settings()
