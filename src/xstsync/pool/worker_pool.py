"""Bounded, phased execution of TransferPlan items."""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, Optional

from xstsync.errors import FatalTransferError
from xstsync.models import Item, Outcome
from xstsync.plan import Phase, TransferPlan
from xstsync.util.log import get_logger

from .throttle import DispatchThrottle

log = get_logger(__name__)

ExecuteFn = Callable[[Item], Outcome]
OutcomeFn = Callable[[Outcome], None]


class WorkerPool:
    """
    Runs execute(item) for every plan item.

    Rules:
        - At most max_concurrent calls are in flight at any time.
        - At least min_time_ms separates two dispatch start times.
        - Phases run strictly one after another; within a phase, items run
          concurrently in any order. Collections run one depth level at a
          time so a parent exists before its children are created.
        - An outcome carrying a network error stops further dispatches. In-flight
          calls drain, then FatalTransferError is raised.
        - No automatic retries.
    """

    def __init__(
        self,
        max_concurrent: int = 4,
        min_time_ms: int = 0,
        *,
        throttle: Optional[DispatchThrottle] = None,
    ) -> None:
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be >= 1")
        self._max_concurrent = max_concurrent
        self._throttle = throttle or DispatchThrottle(min_time_ms)

    @property
    def max_concurrent(self) -> int:
        return self._max_concurrent

    def run(
        self,
        plan: TransferPlan,
        execute: ExecuteFn,
        on_outcome: Optional[OutcomeFn] = None,
    ) -> list[Outcome]:
        """Run every phase of plan. on_outcome is called once per resolved item."""
        outcomes: list[Outcome] = []
        with ThreadPoolExecutor(
            max_workers=self._max_concurrent,
            thread_name_prefix="xstsync",
        ) as executor:
            for phase, items in plan.phases():
                log.debug("pool.phase", phase=phase.name, items=len(items))
                self._run_phase(executor, phase, items, execute, on_outcome, outcomes)
        return outcomes

    def _run_phase(
        self,
        executor: ThreadPoolExecutor,
        phase: Phase,
        items: list[Item],
        execute: ExecuteFn,
        on_outcome: Optional[OutcomeFn],
        outcomes: list[Outcome],
    ) -> None:
        dispatched = 0
        for wave in _waves(items):
            results = self._run_wave(executor, wave, execute, on_outcome)
            dispatched += len(results)
            outcomes.extend(results)

            fatal = next((o for o in results if o.is_fatal), None)
            if fatal is None or fatal.error is None:
                continue

            log.error(
                "pool.aborted",
                phase=phase.name,
                path=fatal.item.display_path,
                reason=fatal.error.message,
                skipped=len(items) - dispatched,
            )
            raise FatalTransferError(
                fatal.error.message,
                code=fatal.error.code,
                outcomes=outcomes,
                details={"path": fatal.item.relative_path, "phase": phase.name},
            )

    def _run_wave(
        self,
        executor: ThreadPoolExecutor,
        items: list[Item],
        execute: ExecuteFn,
        on_outcome: Optional[OutcomeFn],
    ) -> list[Outcome]:
        """Dispatch items concurrently and wait for all of them to resolve."""
        slots = threading.Semaphore(self._max_concurrent)
        stop = threading.Event()
        futures: list[Future[Outcome]] = []

        def release(_: Future[Outcome]) -> None:
            slots.release()

        for item in items:
            slots.acquire()
            if stop.is_set():
                slots.release()
                break
            self._throttle.wait()
            future = executor.submit(_call, execute, on_outcome, item, stop)
            future.add_done_callback(release)
            futures.append(future)

        wait(futures)

        results: list[Outcome] = []
        error: Optional[BaseException] = None
        for future in futures:
            exc = future.exception()
            if exc is not None:
                error = error or exc
                continue
            results.append(future.result())

        if error is not None:
            raise error
        return results


def _waves(items: list[Item]) -> list[list[Item]]:
    """
    Split a phase into dispatch waves.

    Collections are grouped by depth so a parent is created before any of
    its children starts; resources form a single wave.
    """
    if not items or not items[0].is_collection:
        return [items] if items else []

    by_depth: dict[int, list[Item]] = {}
    for item in items:
        by_depth.setdefault(item.depth, []).append(item)
    return [by_depth[d] for d in sorted(by_depth)]


def _call(
    execute: ExecuteFn,
    on_outcome: Optional[OutcomeFn],
    item: Item,
    stop: threading.Event,
) -> Outcome:
    try:
        outcome = execute(item)
    except BaseException:
        stop.set()
        raise
    if outcome.is_fatal:
        stop.set()
    if on_outcome is not None:
        on_outcome(outcome)
    return outcome
