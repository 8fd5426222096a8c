"""Minimum spacing between dispatch start times."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from xstsync.util.time import monotonic_ms


class DispatchThrottle:
    """
    Enforces at least min_time_ms between two consecutive wait() returns.

    clock returns milliseconds; sleep takes seconds (time.sleep).
    """

    def __init__(
        self,
        min_time_ms: int = 0,
        *,
        clock: Callable[[], float] = monotonic_ms,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if min_time_ms < 0:
            raise ValueError("min_time_ms must be >= 0")
        self._min_time_ms = min_time_ms
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_ms: Optional[float] = None

    @property
    def min_time_ms(self) -> int:
        return self._min_time_ms

    def wait(self) -> None:
        """Block until the next dispatch may start, then record it."""
        with self._lock:
            now = self._clock()
            if self._min_time_ms > 0 and self._last_ms is not None:
                due = self._last_ms + self._min_time_ms
                if now < due:
                    self._sleep((due - now) / 1000.0)
                    now = max(self._clock(), due)
            self._last_ms = now
