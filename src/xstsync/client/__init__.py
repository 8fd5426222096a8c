"""Remote store client exports for xstsync."""

from __future__ import annotations

from .protocol import CollectionListing, RemoteInfo, RemoteStore
from .xmlrpc_client import ExistXmlRpcClient

__all__ = ["CollectionListing", "RemoteInfo", "RemoteStore", "ExistXmlRpcClient"]
