"""Ordering rules for TransferPlan items."""

from __future__ import annotations

from xstsync.errors import InvalidStateError
from xstsync.models import Item, ItemKind

from .phases import Phase, phase_of


def sort_items(items: list[Item]) -> list[Item]:
    """
    Order items by phase. Within a phase the planned order is kept, so
    collections stay parent-before-child.
    """
    return sorted(items, key=phase_of)


def group_by_phase(items: list[Item]) -> list[tuple[Phase, list[Item]]]:
    """
    Split an ordered item list into contiguous phase groups.

    Raises:
        InvalidStateError: if items are not in phase order.
    """
    groups: list[tuple[Phase, list[Item]]] = []
    for item in items:
        phase = phase_of(item)
        if groups and groups[-1][0] == phase:
            groups[-1][1].append(item)
            continue
        if groups and groups[-1][0] > phase:
            raise InvalidStateError(
                "Plan items are not in phase order",
                details={"path": item.relative_path, "phase": phase.name},
            )
        groups.append((phase, [item]))
    return groups


def validate_order(items: list[Item]) -> None:
    """
    Check that every resource's enclosing collection is planned earlier.

    A group (content or config) without any collection items writes into a
    collection that was verified to exist before planning.

    Raises:
        InvalidStateError: on duplicate identities or a misplaced resource.
    """
    seen: set[tuple[ItemKind, str, bool]] = set()
    has_collections = {item.is_config for item in items if item.is_collection}

    for item in items:
        if item.identity in seen:
            raise InvalidStateError(
                "Duplicate item in plan",
                details={"path": item.relative_path, "kind": item.kind.value},
            )
        seen.add(item.identity)

        if item.is_collection or item.is_config not in has_collections:
            continue

        parent = (ItemKind.COLLECTION, item.parent_path, item.is_config)
        if parent not in seen:
            raise InvalidStateError(
                "Resource is planned before its collection",
                details={"path": item.relative_path, "collection": item.parent_path},
            )
