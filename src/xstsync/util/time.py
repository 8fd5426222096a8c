from __future__ import annotations

import time
from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return current time as tz-aware UTC datetime."""
    return datetime.now(timezone.utc)


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds, for durations and dispatch spacing."""
    return time.monotonic() * 1000.0


def elapsed_ms(start_ms: float, end_ms: float | None = None) -> int:
    """Return whole milliseconds between start_ms and end_ms (default: now)."""
    end = monotonic_ms() if end_ms is None else end_ms
    return max(0, int(round(end - start_ms)))
