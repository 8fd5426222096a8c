"""TransferManager: pre-flight, plan, and execute one sync run per direction."""

from __future__ import annotations

from typing import Optional

from xstsync.client import ExistXmlRpcClient, RemoteStore
from xstsync.config import ConnectionInfo
from xstsync.errors import FatalTransferError
from xstsync.models import RunSummary, TransferOptions
from xstsync.plan import PathPlanner, TransferPlan
from xstsync.pool import WorkerPool
from xstsync.summary import RunAggregator, format_summary
from xstsync.transfer import TransferExecutor
from xstsync.util.log import get_logger

log = get_logger(__name__)


class TransferManager:
    """High-level entry points: sync_up (local -> remote) and sync_down (remote -> local)."""

    def __init__(self, connection: ConnectionInfo) -> None:
        self._store: RemoteStore = ExistXmlRpcClient(connection)

    @classmethod
    def from_store(cls, store: RemoteStore) -> "TransferManager":
        """Create manager with an injected store (useful for tests)."""
        obj = cls.__new__(cls)
        obj._store = store
        return obj

    @property
    def store(self) -> RemoteStore:
        return self._store

    def plan_up(self, source: str, target: str, options: Optional[TransferOptions] = None) -> TransferPlan:
        """Validate and plan an upload of source (file or directory) into target."""
        return PathPlanner(self._store, options or TransferOptions()).plan_upload(source, target)

    def plan_down(self, source: str, target: str, options: Optional[TransferOptions] = None) -> TransferPlan:
        """Validate and plan a download of source (collection or resource) into target."""
        return PathPlanner(self._store, options or TransferOptions()).plan_download(source, target)

    def sync_up(self, source: str, target: str, options: Optional[TransferOptions] = None) -> RunSummary:
        """
        Upload source into the target collection.

        Raises:
            PreflightError: if source/target cannot work; nothing is transferred.
            FatalTransferError: if the remote store became unreachable.
        """
        opts = options or TransferOptions()
        log.info("upload.start", source=source, target=target,
                 include=list(opts.include), exclude=list(opts.exclude))
        plan = self.plan_up(source, target, opts)
        return self.execute_plan(plan, opts)

    def sync_down(self, source: str, target: str, options: Optional[TransferOptions] = None) -> RunSummary:
        """
        Download a collection or resource into a local target.

        Raises:
            PreflightError: if source/target cannot work; nothing is transferred.
            FatalTransferError: if the remote store became unreachable.
        """
        opts = options or TransferOptions()
        log.info("download.start", source=source, target=target,
                 max_concurrent=opts.max_concurrent)
        plan = self.plan_down(source, target, opts)
        return self.execute_plan(plan, opts)

    def execute_plan(self, plan: TransferPlan, options: TransferOptions) -> RunSummary:
        """
        Execute a plan through the worker pool and aggregate its outcomes.

        Policy:
            - Item-level failures are counted; the run continues.
            - A network failure stops dispatching and raises FatalTransferError.
            - Empty plans and dry runs execute nothing.
        """
        aggregator = RunAggregator(total_items=plan.matched_count)

        if plan.is_empty:
            log.warning("run.nothing_matched", source=plan.source_root)
            return aggregator.finalize()

        if options.dry_run:
            log.info("run.dry_run", items=len(plan.items))
            return aggregator.finalize()

        executor = TransferExecutor(self._store, plan, options)
        pool = WorkerPool(options.max_concurrent, options.min_time_ms)

        try:
            pool.run(plan, executor.execute, on_outcome=aggregator.record)
        except FatalTransferError as exc:
            aggregator.finalize()
            log.error("run.aborted", reason=str(exc), code=exc.code)
            raise

        summary = aggregator.finalize()
        log.info("run.finished", summary=format_summary(summary))
        return summary
