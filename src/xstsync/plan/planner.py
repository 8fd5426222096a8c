"""Build TransferPlans from a local directory or a remote collection."""

from __future__ import annotations

import os
import posixpath
from typing import Optional

from xstsync.client import RemoteInfo, RemoteStore
from xstsync.errors import PreflightError
from xstsync.models import (
    Direction,
    Item,
    TransferOptions,
    collection_item,
    resource_item,
)
from xstsync.util.glob import PathFilter
from xstsync.util.ids import new_plan_id
from xstsync.util.log import get_logger
from xstsync.util.mime import is_config_name
from xstsync.util.time import now_utc

from .ordering import sort_items, validate_order
from .transfer_plan import TransferPlan

CONFIG_ROOT: str = "/db/system/config"
DBA_GROUP: str = "dba"

log = get_logger(__name__)


class PathPlanner:
    """
    Walks a transfer source and produces an ordered TransferPlan.

    Pre-flight validation happens here: a source or target combination that
    cannot work raises PreflightError before anything is planned.
    """

    def __init__(self, store: RemoteStore, options: TransferOptions) -> None:
        self._store = store
        self._options = options
        self._filter = PathFilter(options.include, options.exclude)
        # Downloads also match patterns against the bare resource or collection name.
        self._name_filter = PathFilter(options.include, options.exclude, match_name=True)

    # ----------------------------
    # Upload (local -> remote)
    # ----------------------------
    def plan_upload(self, source: str, target: str) -> TransferPlan:
        if not os.path.exists(source):
            raise PreflightError(f"{source} not found!", details={"source": source})

        target = normalize_remote_path(target)
        if os.path.isfile(source):
            return self._plan_upload_file(os.path.abspath(source), target)

        if self._options.apply_config:
            self._require_dba()

        info = self._store.describe(target)
        if info is not None and not info.is_collection:
            raise PreflightError(
                f"source {source} is a directory and target {target} is a resource",
                details={"source": source, "target": target},
            )

        root = os.path.abspath(source)
        dirs, files = self._walk_local(root)
        files = [f for f in files if self._filter.is_included(f)]

        config_files: list[str] = []
        if self._options.apply_config:
            config_files = [f for f in files if is_config_name(f)]
        config_set = set(config_files)
        content_files = [f for f in files if f not in config_set]

        needed = _ancestors(content_files)
        collections = [d for d in dirs if d in needed or self._filter.is_included(d)]

        items: list[Item] = []
        for rel_dir in _unique(posixpath.dirname(f) for f in config_files):
            items.append(collection_item(rel_dir, is_config=True))
        items.extend(resource_item(f, is_config=True) for f in config_files)
        items.append(collection_item(""))
        items.extend(collection_item(d) for d in collections)
        items.extend(resource_item(f) for f in content_files)

        config_root = None
        if config_files:
            config_root = posixpath.join(CONFIG_ROOT, target.lstrip("/"))

        return self._build(Direction.UP, root, target, items, config_root=config_root)

    def _plan_upload_file(self, source: str, target: str) -> TransferPlan:
        name = os.path.basename(source)
        info = self._store.describe(target)

        if info is not None and info.is_collection:
            # Into an existing collection, keeping the source name.
            return self._build(Direction.UP, os.path.dirname(source), target,
                               [resource_item(name)])

        parent = posixpath.dirname(target) or "/"
        if info is None and not self._store.collection_exists(parent):
            raise PreflightError(
                f'Target collection "{parent}" not found',
                details={"target": target},
            )

        # New (or overwritten) resource at the target path.
        item = resource_item(name, target_name=posixpath.basename(target))
        return self._build(Direction.UP, os.path.dirname(source), parent, [item])

    def _walk_local(self, root: str) -> tuple[list[str], list[str]]:
        """Return (directories, files) below root, parent before child."""
        dirs: list[str] = []
        files: list[str] = []

        for dirpath, dirnames, filenames in os.walk(root):
            rel_dir = _relative(root, dirpath)
            dirnames[:] = sorted(
                d for d in dirnames if self._keep_local(posixpath.join(rel_dir, d))
            )
            dirs.extend(posixpath.join(rel_dir, d) for d in dirnames)

            for filename in sorted(filenames):
                rel = posixpath.join(rel_dir, filename)
                if self._keep_local(rel) and os.path.isfile(os.path.join(dirpath, filename)):
                    files.append(rel)

        return dirs, files

    def _keep_local(self, rel: str) -> bool:
        if not self._options.dot_files and _is_dot_path(rel):
            return False
        return not self._filter.is_excluded(rel)

    def _require_dba(self) -> None:
        groups = self._store.user_groups()
        if DBA_GROUP not in groups:
            raise PreflightError(
                "To apply collection configurations you must be member of the dba group.",
                details={"groups": groups},
            )

    # ----------------------------
    # Download (remote -> local)
    # ----------------------------
    def plan_download(self, source: str, target: str) -> TransferPlan:
        source = normalize_remote_path(source)
        info = self._store.describe(source)
        if info is None:
            raise PreflightError(f'Source "{source}" could not be found', details={"source": source})

        root = os.path.abspath(target)
        parent = os.path.dirname(root)
        if not os.path.isdir(parent):
            raise PreflightError(f'Target "{parent}" not found', details={"target": target})

        if not info.is_collection:
            return self._plan_download_resource(info, root)

        if not os.path.exists(root):
            raise PreflightError(
                f"{source} is a collection but {root} cannot be found",
                details={"source": source, "target": root},
            )
        if not os.path.isdir(root):
            raise PreflightError(
                f"source {source} is a collection and target {target} is a file",
                details={"source": source, "target": root},
            )

        collections, resources, types = self._walk_remote(source)
        needed = _ancestors(resources)
        collections = [c for c in collections if c in needed or self._name_filter.is_included(c)]

        items: list[Item] = [collection_item("")]
        items.extend(collection_item(c) for c in collections)
        items.extend(resource_item(r) for r in resources)

        local_root = os.path.join(root, posixpath.basename(source))
        plan = self._build(Direction.DOWN, source, local_root, items)
        plan.resource_types.update(types)
        return plan

    def _plan_download_resource(self, info: RemoteInfo, root: str) -> TransferPlan:
        if os.path.isdir(root):
            local_dir, rename = root, None
        else:
            # Missing target or existing file: write to that exact path.
            local_dir, rename = os.path.dirname(root), os.path.basename(root)

        item = resource_item(info.name, target_name=rename)
        plan = self._build(Direction.DOWN, posixpath.dirname(info.path), local_dir, [item])
        if info.resource_type:
            plan.resource_types[item.relative_path] = info.resource_type
        return plan

    def _walk_remote(self, source: str) -> tuple[list[str], list[str], dict[str, str]]:
        """Return (collections, resources, resource types) below source, pre-order."""
        collections: list[str] = []
        resources: list[str] = []
        types: dict[str, str] = {}

        def visit(rel: str) -> None:
            path = posixpath.join(source, rel) if rel else source
            listing = self._store.read_collection(path)

            for res in listing.resources:
                rel_res = posixpath.join(rel, res.name)
                if self._name_filter.accepts(rel_res):
                    resources.append(rel_res)
                    if res.resource_type:
                        types[rel_res] = res.resource_type

            for name in listing.collections:
                rel_col = posixpath.join(rel, posixpath.basename(name.rstrip("/")))
                if self._name_filter.is_excluded(rel_col):
                    continue
                collections.append(rel_col)
                visit(rel_col)

        visit("")
        return collections, resources, types

    # ----------------------------
    # Internals
    # ----------------------------
    def _build(
        self,
        direction: Direction,
        source_root: str,
        target_root: str,
        items: list[Item],
        *,
        config_root: Optional[str] = None,
    ) -> TransferPlan:
        ordered = sort_items(items)
        validate_order(ordered)
        plan = TransferPlan(
            plan_id=new_plan_id(direction.value.lower()),
            direction=direction,
            source_root=source_root,
            target_root=target_root,
            created_at=now_utc(),
            items=ordered,
            config_root=config_root,
        )
        log.debug(
            "plan.built",
            direction=direction.value,
            source=source_root,
            target=target_root,
            items=len(ordered),
        )
        return plan


def normalize_remote_path(path: str) -> str:
    """Absolute, slash-separated remote path without a trailing slash."""
    path = "/" + path.strip().strip("/")
    return posixpath.normpath(path)


def _relative(root: str, path: str) -> str:
    rel = os.path.relpath(path, root)
    if rel == os.curdir:
        return ""
    return rel.replace(os.sep, "/")


def _is_dot_path(rel: str) -> bool:
    return any(part.startswith(".") for part in rel.split("/"))


def _ancestors(paths: list[str]) -> set[str]:
    found: set[str] = set()
    for path in paths:
        parent = posixpath.dirname(path)
        while parent and parent not in found:
            found.add(parent)
            parent = posixpath.dirname(parent)
    return found


def _unique(values) -> list[str]:
    seen: dict[str, None] = {}
    for value in values:
        seen.setdefault(value, None)
    return list(seen)
