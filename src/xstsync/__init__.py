"""xstsync public API."""

from __future__ import annotations

from xstsync.client import CollectionListing, ExistXmlRpcClient, RemoteInfo, RemoteStore
from xstsync.config import ConnectionInfo
from xstsync.errors import (
    ApiError,
    AuthError,
    ConflictError,
    FatalTransferError,
    InvalidArgumentError,
    InvalidStateError,
    NetworkError,
    NotFoundError,
    PermissionError,
    PreflightError,
    XstSyncError,
    classify_error,
)
from xstsync.manager import TransferManager
from xstsync.models import (
    Direction,
    ErrorInfo,
    Item,
    ItemKind,
    Outcome,
    RunSummary,
    TransferOptions,
)
from xstsync.plan import PathPlanner, Phase, TransferPlan
from xstsync.pool import DispatchThrottle, WorkerPool
from xstsync.summary import RunAggregator, exit_code
from xstsync.transfer import TransferExecutor
from xstsync.util.glob import GlobMatcher, PathFilter, compile_patterns

__all__ = [
    # High-level
    "TransferManager",
    "ConnectionInfo",
    # Client
    "RemoteStore",
    "RemoteInfo",
    "CollectionListing",
    "ExistXmlRpcClient",
    # Core
    "GlobMatcher",
    "PathFilter",
    "compile_patterns",
    "PathPlanner",
    "WorkerPool",
    "DispatchThrottle",
    "TransferExecutor",
    "RunAggregator",
    "exit_code",
    # Plan / Models
    "Direction",
    "Item",
    "ItemKind",
    "Phase",
    "TransferPlan",
    "TransferOptions",
    "ErrorInfo",
    "Outcome",
    "RunSummary",
    # Errors
    "XstSyncError",
    "PreflightError",
    "InvalidStateError",
    "InvalidArgumentError",
    "AuthError",
    "PermissionError",
    "NotFoundError",
    "ConflictError",
    "ApiError",
    "NetworkError",
    "FatalTransferError",
    "classify_error",
]
