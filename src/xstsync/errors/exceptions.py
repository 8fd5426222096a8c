"""Exception hierarchy, fault mapping and network classification for xstsync."""

from __future__ import annotations

import errno
import socket
import ssl
from dataclasses import dataclass
from typing import Any, Optional


class XstSyncError(Exception):
    """
    Base exception for xstsync.

    Attributes:
        details: Optional structured information (e.g., path, fault code).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class PreflightError(XstSyncError):
    """Raised when source/target validation fails before any transfer starts."""


class InvalidStateError(XstSyncError):
    """Raised when a plan or the library is used in an invalid state."""


class InvalidArgumentError(XstSyncError):
    """Raised when arguments or options are invalid."""


class AuthError(XstSyncError):
    """Raised when the remote store rejects the credentials (HTTP 401)."""


class PermissionError(XstSyncError):
    """Raised when access to a collection or resource is denied."""


class NotFoundError(XstSyncError):
    """Raised when a collection or resource does not exist remotely."""


class ConflictError(XstSyncError):
    """Raised when a path exists with the wrong type (collection vs. resource)."""


class ApiError(XstSyncError):
    """Raised for unclassified remote faults."""


class NetworkError(XstSyncError):
    """Raised when the remote store cannot be reached. Fatal for a run."""

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause)
        self.code = code


class FatalTransferError(NetworkError):
    """Raised when a run is aborted by a network error.

    ``outcomes`` holds every outcome that resolved before the abort,
    including the one that reported the network error.
    """

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        outcomes: Optional[list[Any]] = None,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, code=code, details=details, cause=cause)
        self.outcomes = list(outcomes or [])


NETWORK_ERROR_CODES: frozenset[str] = frozenset(
    {
        "ECONNREFUSED",
        "ECONNRESET",
        "ECONNABORTED",
        "EPROTO",
        "ENOTFOUND",
        "EAI_AGAIN",
        "ETIMEDOUT",
        "EHOSTUNREACH",
        "ENETUNREACH",
        "EPIPE",
    }
)


def error_code_of(exc: BaseException) -> Optional[str]:
    """Return an errno-style code name for a low-level connection failure."""
    if isinstance(exc, NetworkError):
        return exc.code
    if isinstance(exc, socket.gaierror):
        if exc.errno == getattr(socket, "EAI_AGAIN", None):
            return "EAI_AGAIN"
        return "ENOTFOUND"
    if isinstance(exc, ssl.SSLError):
        return "EPROTO"
    if isinstance(exc, (TimeoutError, socket.timeout)):
        return "ETIMEDOUT"
    if isinstance(exc, OSError) and isinstance(exc.errno, int):
        return errno.errorcode.get(exc.errno)
    return None


def is_network_error(exc: BaseException) -> bool:
    if isinstance(exc, NetworkError):
        return True
    return error_code_of(exc) in NETWORK_ERROR_CODES


_XPATH_EXCEPTION_MARKER = "org.exist.xquery.XPathException:"

_PERMISSION_KEYWORDS: tuple[str, ...] = (
    "permissiondeniedexception",
    "permission denied",
    "permission to",
    "is not allowed",
)

_NOT_FOUND_KEYWORDS: tuple[str, ...] = (
    "not found",
    "does not exist",
    "no such",
)


def describe_fault(fault_string: str) -> str:
    """Trim the Java exception prefix the server puts in front of XPath errors."""
    start = fault_string.find(_XPATH_EXCEPTION_MARKER)
    if start > 0:
        return "XPathException:\n" + fault_string[start + len(_XPATH_EXCEPTION_MARKER):].strip()
    return fault_string


@dataclass(frozen=True)
class FaultInfo:
    """Lightweight fault information for mapping to xstsync exceptions."""

    fault_code: int
    fault_string: str
    path: str | None = None


def map_fault(
    info: FaultInfo,
    *,
    cause: Optional[BaseException] = None,
) -> XstSyncError:
    """
    Map a remote fault to an xstsync exception.

    Policy:
        - permission wording -> PermissionError
        - not-found wording -> NotFoundError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {"fault_code": info.fault_code}
    if info.path is not None:
        details["path"] = info.path

    message = describe_fault(info.fault_string) or f"Fault {info.fault_code}"
    lowered = info.fault_string.lower()

    if any(key in lowered for key in _PERMISSION_KEYWORDS):
        return PermissionError(message, details=details, cause=cause)
    if any(key in lowered for key in _NOT_FOUND_KEYWORDS):
        return NotFoundError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)


def map_http_status(
    status_code: int,
    message: str,
    *,
    cause: Optional[BaseException] = None,
) -> XstSyncError:
    """Map an HTTP status from the transport layer to an xstsync exception."""
    details: dict[str, Any] = {"status_code": status_code}
    if status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if status_code == 403:
        return PermissionError(message, details=details, cause=cause)
    if status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if status_code == 409:
        return ConflictError(message, details=details, cause=cause)
    return ApiError(message, details=details, cause=cause)
