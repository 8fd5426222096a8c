"""Interface the transfer core needs from a remote store client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol

from xstsync.util.mime import is_binary_resource


@dataclass(slots=True)
class RemoteInfo:
    """Description of one remote collection or resource."""

    path: str
    is_collection: bool
    resource_type: Optional[str] = None
    mime_type: Optional[str] = None
    size: Optional[int] = None

    @property
    def name(self) -> str:
        return self.path.rstrip("/").rsplit("/", 1)[-1]

    @property
    def is_binary(self) -> bool:
        return is_binary_resource(self.resource_type)


@dataclass(slots=True)
class CollectionListing:
    """Direct children of a remote collection."""

    path: str
    collections: list[str] = field(default_factory=list)
    resources: list[RemoteInfo] = field(default_factory=list)


class RemoteStore(Protocol):
    """
    Remote store operations used by planners and the executor.

    Every call may raise an xstsync error; connection failures surface as
    NetworkError carrying an errno-style code.
    """

    def describe(self, path: str) -> Optional[RemoteInfo]: ...

    def read_collection(self, path: str) -> CollectionListing: ...

    def collection_exists(self, path: str) -> bool: ...

    def create_collection(self, path: str) -> None: ...

    def write_resource(
        self,
        collection: str,
        name: str,
        data: bytes,
        mime_type: str,
    ) -> None: ...

    def read_resource(self, path: str, options: Mapping[str, Any]) -> bytes: ...

    def read_binary(self, path: str) -> bytes: ...

    def user_groups(self) -> list[str]: ...
