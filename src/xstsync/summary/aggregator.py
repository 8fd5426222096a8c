"""Collects outcomes into a RunSummary and derives the exit code."""

from __future__ import annotations

import threading
from typing import Iterable, Optional

from xstsync.errors import InvalidStateError
from xstsync.models import Outcome, RunSummary
from xstsync.util.time import elapsed_ms, monotonic_ms, now_utc

EXIT_OK = 0
EXIT_ITEM_FAILURES = 1
EXIT_PREFLIGHT = 2
EXIT_NETWORK = 3
EXIT_NOTHING_MATCHED = 9


class RunAggregator:
    """
    The only writer of a RunSummary.

    Lifecycle: created empty at run start, record() per outcome, finalize()
    once the plan is exhausted or the run was aborted.
    """

    def __init__(self, total_items: int = 0) -> None:
        self._lock = threading.Lock()
        self._start_ms = monotonic_ms()
        self._summary = RunSummary(started_at=now_utc(), total_items=total_items)

    @property
    def summary(self) -> RunSummary:
        return self._summary

    def record(self, outcome: Outcome) -> None:
        with self._lock:
            s = self._summary
            if s.finalized:
                raise InvalidStateError("RunSummary is already finalized")

            if outcome.item.is_collection:
                if not outcome.success:
                    s.collections_failed += 1
                elif outcome.created:
                    s.collections_created += 1
                else:
                    s.collections_existing += 1
            elif outcome.success:
                s.resources_transferred += 1
            else:
                s.resources_failed += 1

            if not outcome.success:
                s.failures.append(outcome)

    def finalize(self, outcomes: Optional[Iterable[Outcome]] = None) -> RunSummary:
        """Record any remaining outcomes and freeze the summary."""
        for outcome in outcomes or ():
            self.record(outcome)
        with self._lock:
            self._summary.elapsed_ms = elapsed_ms(self._start_ms)
            self._summary.finalized = True
        return self._summary


def exit_code(summary: RunSummary) -> int:
    """
    0 when everything succeeded, 9 when nothing matched, 1 when at least
    one item failed. Fatal network errors never reach this function.
    """
    if summary.nothing_matched:
        return EXIT_NOTHING_MATCHED
    if summary.failed:
        return EXIT_ITEM_FAILURES
    return EXIT_OK


def format_summary(summary: RunSummary) -> str:
    """One human-facing line with the run's counts."""
    text = (
        f"created {summary.collections_created} collections "
        f"({summary.collections_existing} existed) and transferred "
        f"{summary.resources_transferred} resources in {summary.elapsed_ms}ms"
    )
    if summary.failed:
        text += (
            f"; {summary.failed} failed "
            f"({summary.collections_failed} collections, {summary.resources_failed} resources)"
        )
    return text
