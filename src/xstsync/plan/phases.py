"""Dispatch phases of a TransferPlan."""

from __future__ import annotations

from enum import IntEnum

from xstsync.models import Item


class Phase(IntEnum):
    """
    Phases in dispatch order. Every item of a phase completes before the
    next phase starts.
    """

    CONFIG_COLLECTIONS = 0
    CONFIG_RESOURCES = 1
    COLLECTIONS = 2
    RESOURCES = 3


def phase_of(item: Item) -> Phase:
    if item.is_config:
        return Phase.CONFIG_COLLECTIONS if item.is_collection else Phase.CONFIG_RESOURCES
    return Phase.COLLECTIONS if item.is_collection else Phase.RESOURCES
