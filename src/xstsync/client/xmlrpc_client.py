"""eXist-db XML-RPC client (internal use only)."""

from __future__ import annotations

import posixpath
import threading
import xmlrpc.client
from typing import Any, Callable, Mapping, Optional, TypeVar

from xstsync.config import ConnectionInfo
from xstsync.errors import (
    ApiError,
    FaultInfo,
    NetworkError,
    XstSyncError,
    error_code_of,
    map_fault,
    map_http_status,
)

from .protocol import CollectionListing, RemoteInfo

T = TypeVar("T")

UPLOAD_CHUNK_SIZE: int = 1024 * 1024


class ExistXmlRpcClient:
    """
    RemoteStore implementation over the eXist-db XML-RPC endpoint.

    Notes:
        - ServerProxy is not thread-safe; each worker thread gets its own proxy.
        - No retries: every fault or connection error is mapped once and raised.
    """

    def __init__(self, connection: ConnectionInfo) -> None:
        self._user = connection.user
        self._local = threading.local()
        self._shared_proxy: Any = None

        url = connection.xmlrpc_url

        def factory() -> Any:
            return xmlrpc.client.ServerProxy(url, allow_none=True, use_builtin_types=True)

        self._proxy_factory: Optional[Callable[[], Any]] = factory

    @classmethod
    def from_proxy(cls, proxy: Any, *, user: str = "admin") -> "ExistXmlRpcClient":
        """Create client from a pre-built proxy (useful for tests)."""
        obj = cls.__new__(cls)
        obj._user = user
        obj._local = threading.local()
        obj._shared_proxy = proxy
        obj._proxy_factory = None
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def describe(self, path: str) -> Optional[RemoteInfo]:
        if self.collection_exists(path):
            return RemoteInfo(path=_normalize(path), is_collection=True)

        data = self._execute(lambda p: p.describeResource(path), path)
        if not data:
            return None
        return _resource_dict_to_info(data, posixpath.dirname(_normalize(path)))

    def read_collection(self, path: str) -> CollectionListing:
        data = self._execute(lambda p: p.getCollectionDesc(path), path)
        base = _normalize(path)
        collections = [str(name) for name in data.get("collections", []) or []]
        resources = [
            _resource_dict_to_info(doc, base)
            for doc in data.get("documents", []) or []
            if isinstance(doc, dict)
        ]
        return CollectionListing(path=base, collections=collections, resources=resources)

    def collection_exists(self, path: str) -> bool:
        return bool(self._execute(lambda p: p.existsAndCanOpenCollection(path), path))

    def create_collection(self, path: str) -> None:
        self._execute(lambda p: p.createCollection(path), path)

    def write_resource(
        self,
        collection: str,
        name: str,
        data: bytes,
        mime_type: str,
    ) -> None:
        target = posixpath.join(_normalize(collection), name)
        handle = self._upload(data, target)
        self._execute(lambda p: p.parseLocal(handle, target, True, mime_type), target)

    def read_resource(self, path: str, options: Mapping[str, Any]) -> bytes:
        params = {str(k): str(v) for k, v in options.items()}
        data = self._execute(lambda p: p.getDocument(path, params), path)
        return _as_bytes(data)

    def read_binary(self, path: str) -> bytes:
        data = self._execute(lambda p: p.getBinaryResource(path), path)
        return _as_bytes(data)

    def user_groups(self) -> list[str]:
        data = self._execute(lambda p: p.getAccount(self._user), self._user)
        groups = data.get("groups", []) if isinstance(data, dict) else []
        return [str(g) for g in groups]

    # ----------------------------
    # Internals
    # ----------------------------
    def _proxy(self) -> Any:
        if self._proxy_factory is None:
            return self._shared_proxy
        proxy = getattr(self._local, "proxy", None)
        if proxy is None:
            proxy = self._proxy_factory()
            self._local.proxy = proxy
        return proxy

    def _upload(self, data: bytes, path: str) -> str:
        first = data[:UPLOAD_CHUNK_SIZE]
        handle = self._execute(lambda p: p.upload(first, len(first)), path)
        offset = len(first)
        while offset < len(data):
            chunk = data[offset:offset + UPLOAD_CHUNK_SIZE]
            handle = self._execute(lambda p: p.upload(handle, chunk, len(chunk)), path)
            offset += len(chunk)
        return str(handle)

    def _execute(self, func: Callable[[Any], T], path: Optional[str] = None) -> T:
        try:
            return func(self._proxy())
        except XstSyncError:
            raise
        except Exception as exc:
            raise _map_exception(exc, path) from exc


def _map_exception(exc: Exception, path: Optional[str]) -> XstSyncError:
    if isinstance(exc, xmlrpc.client.Fault):
        info = FaultInfo(
            fault_code=exc.faultCode if isinstance(exc.faultCode, int) else 0,
            fault_string=str(exc.faultString),
            path=path,
        )
        return map_fault(info, cause=exc)

    if isinstance(exc, xmlrpc.client.ProtocolError):
        return map_http_status(exc.errcode, f"HTTP error {exc.errcode}: {exc.errmsg}", cause=exc)

    if isinstance(exc, (OSError, TimeoutError)):
        code = error_code_of(exc)
        return NetworkError(
            f"Could not connect to DB! Reason: {code or exc}",
            code=code,
            details={"path": path},
            cause=exc,
        )

    return ApiError("XML-RPC error", details={"path": path}, cause=exc)


def _resource_dict_to_info(data: dict[str, Any], collection: str) -> RemoteInfo:
    name = str(data.get("name", ""))
    path = name if name.startswith("/") else posixpath.join(collection, name)

    size = data.get("content-length", data.get("size"))
    if isinstance(size, str) and size.isdigit():
        size = int(size)
    elif not isinstance(size, int):
        size = None

    mime = data.get("mime-type", data.get("mimeType"))
    return RemoteInfo(
        path=path,
        is_collection=False,
        resource_type=str(data.get("type")) if data.get("type") else None,
        mime_type=mime if isinstance(mime, str) else None,
        size=size,
    )


def _as_bytes(data: Any) -> bytes:
    if isinstance(data, xmlrpc.client.Binary):
        return data.data
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, str):
        return data.encode("utf-8")
    raise ApiError("Unexpected response payload type", details={"type": type(data).__name__})


def _normalize(path: str) -> str:
    if path != "/" and path.endswith("/"):
        return path.rstrip("/")
    return path
