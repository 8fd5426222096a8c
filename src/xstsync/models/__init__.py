"""Public model exports for xstsync."""

from __future__ import annotations

from .item import Direction, Item, ItemKind, collection_item, resource_item
from .options import TransferOptions, split_patterns
from .results import ErrorInfo, Outcome, RunSummary

__all__ = [
    "Direction",
    "Item",
    "ItemKind",
    "collection_item",
    "resource_item",
    "TransferOptions",
    "split_patterns",
    "ErrorInfo",
    "Outcome",
    "RunSummary",
]
