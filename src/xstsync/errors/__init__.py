"""Public error exports for xstsync."""

from __future__ import annotations

from .classify import classify_error
from .exceptions import (
    NETWORK_ERROR_CODES,
    ApiError,
    AuthError,
    ConflictError,
    FatalTransferError,
    FaultInfo,
    InvalidArgumentError,
    InvalidStateError,
    NetworkError,
    NotFoundError,
    PermissionError,
    PreflightError,
    XstSyncError,
    describe_fault,
    error_code_of,
    is_network_error,
    map_fault,
    map_http_status,
)

__all__ = [
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
    "FaultInfo",
    "NETWORK_ERROR_CODES",
    "describe_fault",
    "error_code_of",
    "is_network_error",
    "map_fault",
    "map_http_status",
    "classify_error",
]
