"""Planned transfer items."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ItemKind(str, Enum):
    """Kinds of planned items."""

    COLLECTION = "COLLECTION"
    RESOURCE = "RESOURCE"


class Direction(str, Enum):
    """Transfer directions."""

    UP = "UP"
    DOWN = "DOWN"


@dataclass(frozen=True, slots=True)
class Item:
    """
    A discovered unit to transfer.

    Notes:
        - relative_path is slash-separated and relative to the transfer root;
          the root itself is "".
        - is_config marks index configuration (``*.xconf``) items whose target
          is the system configuration mirror instead of the normal target.
        - target_name overrides the destination basename (single-item rename).
    """

    kind: ItemKind
    relative_path: str
    is_config: bool = False
    target_name: Optional[str] = None

    @property
    def identity(self) -> tuple[ItemKind, str, bool]:
        return (self.kind, self.relative_path, self.is_config)

    @property
    def is_collection(self) -> bool:
        return self.kind is ItemKind.COLLECTION

    @property
    def is_root(self) -> bool:
        return self.relative_path == ""

    @property
    def name(self) -> str:
        return posixpath.basename(self.relative_path)

    @property
    def depth(self) -> int:
        """Number of path segments; 0 for the root."""
        return 0 if self.is_root else self.relative_path.count("/") + 1

    @property
    def parent_path(self) -> str:
        """Relative path of the enclosing collection ("" for the root)."""
        return posixpath.dirname(self.relative_path)

    @property
    def display_path(self) -> str:
        return self.relative_path or "."


def collection_item(relative_path: str, *, is_config: bool = False) -> Item:
    return Item(ItemKind.COLLECTION, relative_path, is_config=is_config)


def resource_item(
    relative_path: str,
    *,
    is_config: bool = False,
    target_name: Optional[str] = None,
) -> Item:
    return Item(
        ItemKind.RESOURCE,
        relative_path,
        is_config=is_config,
        target_name=target_name,
    )
