"""Identifiers for transfer plans."""

from __future__ import annotations

import uuid

from .time import now_utc


def new_plan_id(direction: str) -> str:
    """
    Sortable plan id: ``<direction>-<UTC timestamp>-<random suffix>``.

    Example: ``up-20240102T030405-1a2b3c4d``.
    """
    stamp = now_utc().strftime("%Y%m%dT%H%M%S")
    return f"{direction}-{stamp}-{uuid.uuid4().hex[:8]}"
