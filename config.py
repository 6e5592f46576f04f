from __future__ import annotations

import os
from typing import Optional

DEFAULT_THINK_DELAY = 0.6
DEFAULT_DIFFICULTY = "medium"


def think_delay() -> float:
    """Seconds the computer 'thinks' before its move is applied (web app only)."""
    raw = os.environ.get("HONEYCOMB_THINK_DELAY", "")
    if not raw:
        return DEFAULT_THINK_DELAY
    try:
        return max(0.0, float(raw))
    except ValueError:
        raise ValueError(f"HONEYCOMB_THINK_DELAY must be a number, got {raw!r}") from None


def default_difficulty() -> str:
    return os.environ.get("HONEYCOMB_DIFFICULTY", DEFAULT_DIFFICULTY).strip().lower() or DEFAULT_DIFFICULTY


def ai_seed() -> Optional[int]:
    raw = os.environ.get("HONEYCOMB_AI_SEED", "")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"HONEYCOMB_AI_SEED must be an integer, got {raw!r}") from None


DEFAULT_MAX_GAMES = 100


def max_games() -> int:
    """Games kept in memory by the web app; the oldest is dropped beyond this."""
    raw = os.environ.get("HONEYCOMB_MAX_GAMES", "")
    if not raw:
        return DEFAULT_MAX_GAMES
    try:
        return max(1, int(raw))
    except ValueError:
        raise ValueError(f"HONEYCOMB_MAX_GAMES must be an integer, got {raw!r}") from None
