"""Worker pool exports for xstsync."""

from __future__ import annotations

from .throttle import DispatchThrottle
from .worker_pool import WorkerPool

__all__ = ["DispatchThrottle", "WorkerPool"]
