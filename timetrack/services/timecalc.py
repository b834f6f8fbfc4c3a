from __future__ import annotations

import time
from typing import Any

from ..models.timer import Timer


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def elapsed_ms(start_ms: int, end_ms: int) -> int:
    """Return milliseconds between start and end (non-negative)."""
    return max(end_ms - start_ms, 0)


def timer_view(timer: Timer, now: int) -> dict[str, Any]:
    """
    Read-time figures for a timer:
      - active: end is "now", progress/duration run up to now
      - stopped: end is the recorded stop time (now for rows stopped
        before stop times were kept), progress/duration are frozen
    """
    start = timer.start_ms
    end = now if timer.is_active else (timer.end_ms or now)
    duration = elapsed_ms(start, end)
    return {
        "id": timer.id,
        "timer_id": timer.timer_id,
        "user_id": timer.user_id,
        "description": timer.description,
        "is_active": bool(timer.is_active),
        "start": start,
        "end": end,
        "progress": duration,
        "duration": duration,
    }
