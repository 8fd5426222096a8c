"""Public config exports for xstsync."""

from __future__ import annotations

from .connection_info import ConnectionInfo

__all__ = ["ConnectionInfo"]
