"""Run summary exports for xstsync."""

from __future__ import annotations

from .aggregator import (
    EXIT_ITEM_FAILURES,
    EXIT_NETWORK,
    EXIT_NOTHING_MATCHED,
    EXIT_OK,
    EXIT_PREFLIGHT,
    RunAggregator,
    exit_code,
    format_summary,
)

__all__ = [
    "RunAggregator",
    "exit_code",
    "format_summary",
    "EXIT_OK",
    "EXIT_ITEM_FAILURES",
    "EXIT_PREFLIGHT",
    "EXIT_NETWORK",
    "EXIT_NOTHING_MATCHED",
]
