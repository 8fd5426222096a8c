"""TransferPlan model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from xstsync.models import Direction, Item

from .ordering import group_by_phase
from .phases import Phase


@dataclass(slots=True)
class TransferPlan:
    """
    Ordered items for one transfer run.

    source_root and target_root are the local directory and remote
    collection (or the reverse for downloads) that item paths are relative
    to. config_root is the remote collection mirroring target_root under the
    system configuration root; only set for uploads with config items.
    resource_types maps relative resource paths to the remote resource type
    seen while planning a download.
    """

    plan_id: str
    direction: Direction
    source_root: str
    target_root: str
    created_at: datetime
    items: list[Item]
    config_root: Optional[str] = None
    resource_types: dict[str, str] = field(default_factory=dict)

    def phases(self) -> list[tuple[Phase, list[Item]]]:
        return group_by_phase(self.items)

    @property
    def matched_count(self) -> int:
        """Number of items that matched, not counting the implicit root collection."""
        return sum(1 for item in self.items if not _is_implicit_root(item))

    @property
    def is_empty(self) -> bool:
        return self.matched_count == 0

    def items_in(self, phase: Phase) -> list[Item]:
        for group_phase, items in self.phases():
            if group_phase == phase:
                return items
        return []


def _is_implicit_root(item: Item) -> bool:
    return item.is_collection and item.is_root and not item.is_config
