"""Executes one planned item against the remote store or the local filesystem."""

from __future__ import annotations

import os
import posixpath

from xstsync.client import RemoteStore
from xstsync.errors import ConflictError, InvalidStateError, classify_error
from xstsync.models import Direction, Item, Outcome, TransferOptions
from xstsync.plan import TransferPlan
from xstsync.util.glob import compile_patterns
from xstsync.util.log import get_logger
from xstsync.util.mime import is_binary_resource, upload_mime_type

from .serialization import build_serialization_options

log = get_logger(__name__)


class TransferExecutor:
    """
    Performs one unit of work per Item and reports it as an Outcome.

    Item-level errors never propagate: every exception is classified once and
    returned inside the Outcome. Outcomes flagged as network errors are left to
    the caller (WorkerPool) to abort the run.
    """

    def __init__(
        self,
        store: RemoteStore,
        plan: TransferPlan,
        options: TransferOptions,
    ) -> None:
        self._store = store
        self._plan = plan
        self._options = options
        self._html = compile_patterns([options.html_glob])

    def execute(self, item: Item) -> Outcome:
        try:
            if self._plan.direction is Direction.UP:
                if item.is_collection:
                    return self._create_remote_collection(item)
                return self._upload_resource(item)

            if item.is_collection:
                return self._create_local_directory(item)
            return self._download_resource(item)
        except Exception as exc:
            error = classify_error(exc)
            log.error(
                "item.failed",
                kind=item.kind.value,
                path=self.describe_target(item),
                reason=error.message,
            )
            if item.is_collection:
                return Outcome(item=item, success=False, created=False, exists=False, error=error)
            return Outcome(item=item, success=False, error=error)

    def describe_target(self, item: Item) -> str:
        """Destination path of an item, for display."""
        if self._plan.direction is Direction.UP:
            if item.is_collection:
                return self.remote_collection_path(item)
            return self.remote_resource_path(item)
        return self.local_path(item)

    # ----------------------------
    # Paths
    # ----------------------------
    def remote_base(self, item: Item) -> str:
        if item.is_config:
            if not self._plan.config_root:
                raise InvalidStateError("Config item planned without a config root")
            return self._plan.config_root
        return self._plan.target_root

    def remote_collection_path(self, item: Item) -> str:
        return _join(self.remote_base(item), item.relative_path)

    def remote_resource_path(self, item: Item) -> str:
        collection = _join(self.remote_base(item), item.parent_path)
        return posixpath.join(collection, item.target_name or item.name)

    def local_path(self, item: Item) -> str:
        root = self._plan.target_root if self._plan.direction is Direction.DOWN else self._plan.source_root
        if item.is_root:
            return root
        parts = item.relative_path.split("/")
        if item.target_name and self._plan.direction is Direction.DOWN:
            parts[-1] = item.target_name
        return os.path.join(root, *parts)

    # ----------------------------
    # Upload
    # ----------------------------
    def _create_remote_collection(self, item: Item) -> Outcome:
        path = self.remote_collection_path(item)
        if self._store.collection_exists(path):
            log.debug("collection.exists", path=path)
            return Outcome(item=item, success=True, created=False, exists=True)

        self._store.create_collection(path)
        log.debug("collection.created", path=path)
        return Outcome(item=item, success=True, created=True, exists=False)

    def _upload_resource(self, item: Item) -> Outcome:
        local = self.local_path(item)
        with open(local, "rb") as f:
            data = f.read()

        name = item.target_name or item.name
        mime_type, fallback = upload_mime_type(name)
        if fallback:
            log.info("resource.mime_fallback", path=item.relative_path, mime_type=mime_type)

        collection = _join(self.remote_base(item), item.parent_path)
        self._store.write_resource(collection, name, data, mime_type)
        log.debug("resource.uploaded", path=posixpath.join(collection, name), size=len(data))
        return Outcome(item=item, success=True)

    # ----------------------------
    # Download
    # ----------------------------
    def _create_local_directory(self, item: Item) -> Outcome:
        path = self.local_path(item)
        if os.path.isdir(path):
            return Outcome(item=item, success=True, created=False, exists=True)
        if os.path.exists(path):
            raise ConflictError(
                f"{path} exists and is not a directory",
                details={"path": path},
            )

        os.makedirs(path, exist_ok=True)
        log.debug("directory.created", path=path)
        return Outcome(item=item, success=True, created=True, exists=False)

    def _download_resource(self, item: Item) -> Outcome:
        remote = _join(self._plan.source_root, item.relative_path)

        resource_type = self._plan.resource_types.get(item.relative_path)
        if resource_type is None:
            info = self._store.describe(remote)
            resource_type = info.resource_type if info is not None else None

        if is_binary_resource(resource_type):
            data = self._store.read_binary(remote)
        else:
            options = build_serialization_options(
                self._options.serialization,
                html=self._html.matches(item.name),
            )
            data = self._store.read_resource(remote, options)

        local = self.local_path(item)
        with open(local, "wb") as f:
            f.write(data)

        log.debug("resource.downloaded", path=local, size=len(data))
        return Outcome(item=item, success=True)


def _join(base: str, rel: str) -> str:
    if not rel:
        return base
    return posixpath.join(base, rel)
