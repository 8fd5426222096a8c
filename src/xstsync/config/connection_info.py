"""Connection settings for the remote store."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import quote, urlsplit

from xstsync.errors import InvalidArgumentError

DEFAULT_SERVER = "https://localhost:8443"
DEFAULT_USER = "admin"
XMLRPC_PATH = "/exist/xmlrpc"

ENV_SERVER = "EXISTDB_SERVER"
ENV_USER = "EXISTDB_USER"
ENV_PASS = "EXISTDB_PASS"


@dataclass(slots=True, frozen=True)
class ConnectionInfo:
    """
    Connection information.

    server must be an http(s) URL; user/password are sent as basic auth.
    """

    server: str = DEFAULT_SERVER
    user: str = DEFAULT_USER
    password: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.server, str) or not self.server.strip():
            raise InvalidArgumentError("ConnectionInfo.server must be a non-empty string")

        scheme = urlsplit(self.server).scheme
        if scheme not in ("http", "https"):
            raise InvalidArgumentError(
                f'Unknown protocol: "{scheme}:"!',
                details={"server": self.server},
            )

        if not isinstance(self.user, str) or not self.user.strip():
            raise InvalidArgumentError("ConnectionInfo.user must be a non-empty string")

    @property
    def secure(self) -> bool:
        return urlsplit(self.server).scheme == "https"

    @property
    def xmlrpc_url(self) -> str:
        """XML-RPC endpoint URL with credentials embedded for basic auth."""
        parts = urlsplit(self.server)
        auth = quote(self.user, safe="") + ":" + quote(self.password, safe="")
        return f"{parts.scheme}://{auth}@{parts.netloc}{XMLRPC_PATH}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ConnectionInfo":
        """
        Read EXISTDB_SERVER, EXISTDB_USER and EXISTDB_PASS.

        EXISTDB_USER only takes effect when EXISTDB_PASS is set.
        """
        env = os.environ if environ is None else environ
        return _compile(env.get(ENV_SERVER), env.get(ENV_USER), env.get(ENV_PASS))

    @classmethod
    def from_file(cls, path: str) -> "ConnectionInfo":
        """
        Read connection settings from a JSON file.

        Supports the ``.existdb.json`` layout (sync.server -> servers[name])
        and a flat ``{"server", "user", "password"}`` object.
        """
        if not os.path.exists(path):
            raise InvalidArgumentError(f'Configfile not found! "{path}"', details={"path": path})

        try:
            with open(path, "r", encoding="utf-8") as f:
                parsed = json.load(f)
        except (OSError, ValueError) as exc:
            raise InvalidArgumentError(
                f"{path} could not be read",
                details={"path": path},
                cause=exc,
            ) from exc

        if not isinstance(parsed, dict):
            raise InvalidArgumentError(f"{path} must contain a JSON object", details={"path": path})

        if path.endswith(".existdb.json"):
            return _from_existdb_json(parsed, path)

        return _compile(parsed.get("server"), parsed.get("user"), parsed.get("password"))


def _from_existdb_json(parsed: dict[str, Any], path: str) -> ConnectionInfo:
    try:
        server_name = parsed["sync"]["server"]
        entry = parsed["servers"][server_name]
    except (KeyError, TypeError) as exc:
        raise InvalidArgumentError(
            f"{path} has no sync server entry",
            details={"path": path},
            cause=exc,
        ) from exc
    return _compile(entry.get("server"), entry.get("user"), entry.get("password"))


def _compile(server: Optional[str], user: Optional[str], password: Optional[Any]) -> ConnectionInfo:
    kwargs: dict[str, str] = {}
    if server:
        kwargs["server"] = server
    if user and isinstance(password, str):
        kwargs["user"] = user
        kwargs["password"] = password
    return ConnectionInfo(**kwargs)
