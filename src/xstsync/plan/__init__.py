"""Public plan exports for xstsync."""

from __future__ import annotations

from .ordering import group_by_phase, sort_items, validate_order
from .phases import Phase, phase_of
from .planner import CONFIG_ROOT, DBA_GROUP, PathPlanner, normalize_remote_path
from .transfer_plan import TransferPlan

__all__ = [
    "Phase",
    "phase_of",
    "TransferPlan",
    "PathPlanner",
    "CONFIG_ROOT",
    "DBA_GROUP",
    "normalize_remote_path",
    "group_by_phase",
    "sort_items",
    "validate_order",
]
