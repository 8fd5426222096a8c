"""Result models for transfer runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .item import Item


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    """Classified error for one item."""

    message: str
    is_network_error: bool = False
    error_type: Optional[str] = None
    code: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Outcome:
    """Result of executing one Item. Produced exactly once per Item."""

    item: Item
    success: bool
    created: Optional[bool] = None
    exists: Optional[bool] = None
    error: Optional[ErrorInfo] = None

    @property
    def is_fatal(self) -> bool:
        return self.error is not None and self.error.is_network_error


@dataclass(slots=True)
class RunSummary:
    """Aggregate counts for one run. Mutated only by RunAggregator."""

    started_at: datetime
    total_items: int = 0
    collections_created: int = 0
    collections_existing: int = 0
    collections_failed: int = 0
    resources_transferred: int = 0
    resources_failed: int = 0
    elapsed_ms: int = 0
    finalized: bool = False
    failures: list[Outcome] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return self.collections_failed + self.resources_failed

    @property
    def nothing_matched(self) -> bool:
        return self.total_items == 0
