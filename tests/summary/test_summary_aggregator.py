import threading
import unittest

from xstsync.errors import InvalidStateError
from xstsync.models import ErrorInfo, Outcome, collection_item, resource_item
from xstsync.summary import (
    EXIT_ITEM_FAILURES,
    EXIT_NOTHING_MATCHED,
    EXIT_OK,
    RunAggregator,
    exit_code,
    format_summary,
)


class TestRunAggregator(unittest.TestCase):
    def test_counts_by_kind_and_result(self) -> None:
        agg = RunAggregator(total_items=6)
        agg.record(Outcome(collection_item(""), success=True, created=False, exists=True))
        agg.record(Outcome(collection_item("sub"), success=True, created=True, exists=False))
        agg.record(Outcome(collection_item("bad"), success=False, created=False, exists=False,
                           error=ErrorInfo("denied")))
        agg.record(Outcome(resource_item("a.xml"), success=True))
        agg.record(Outcome(resource_item("sub/b.xml"), success=True))
        agg.record(Outcome(resource_item("c.xml"), success=False, error=ErrorInfo("denied")))

        summary = agg.finalize()

        self.assertEqual(summary.collections_created, 1)
        self.assertEqual(summary.collections_existing, 1)
        self.assertEqual(summary.collections_failed, 1)
        self.assertEqual(summary.resources_transferred, 2)
        self.assertEqual(summary.resources_failed, 1)
        self.assertEqual(summary.failed, 2)
        self.assertEqual(len(summary.failures), 2)
        self.assertTrue(summary.finalized)
        self.assertGreaterEqual(summary.elapsed_ms, 0)

    def test_record_after_finalize_rejected(self) -> None:
        agg = RunAggregator(total_items=1)
        agg.finalize()
        with self.assertRaises(InvalidStateError):
            agg.record(Outcome(resource_item("a.xml"), success=True))

    def test_finalize_records_remaining_outcomes(self) -> None:
        agg = RunAggregator(total_items=1)
        summary = agg.finalize([Outcome(resource_item("a.xml"), success=True)])
        self.assertEqual(summary.resources_transferred, 1)

    def test_concurrent_records(self) -> None:
        agg = RunAggregator(total_items=200)

        def worker(n: int) -> None:
            for i in range(50):
                agg.record(Outcome(resource_item(f"{n}/{i}.xml"), success=True))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(agg.finalize().resources_transferred, 200)


class TestExitCode(unittest.TestCase):
    def test_success(self) -> None:
        agg = RunAggregator(total_items=1)
        agg.record(Outcome(resource_item("a.xml"), success=True))
        self.assertEqual(exit_code(agg.finalize()), EXIT_OK)

    def test_item_failures(self) -> None:
        agg = RunAggregator(total_items=1)
        agg.record(Outcome(resource_item("a.xml"), success=False, error=ErrorInfo("x")))
        self.assertEqual(exit_code(agg.finalize()), EXIT_ITEM_FAILURES)

    def test_nothing_matched(self) -> None:
        self.assertEqual(exit_code(RunAggregator(total_items=0).finalize()), EXIT_NOTHING_MATCHED)


class TestFormatSummary(unittest.TestCase):
    def test_line_without_failures(self) -> None:
        agg = RunAggregator(total_items=3)
        agg.record(Outcome(collection_item(""), success=True, created=True, exists=False))
        agg.record(Outcome(resource_item("a.xml"), success=True))
        summary = agg.finalize()
        summary.elapsed_ms = 12

        self.assertEqual(
            format_summary(summary),
            "created 1 collections (0 existed) and transferred 1 resources in 12ms",
        )

    def test_line_with_failures(self) -> None:
        agg = RunAggregator(total_items=1)
        agg.record(Outcome(resource_item("a.xml"), success=False, error=ErrorInfo("x")))
        text = format_summary(agg.finalize())
        self.assertIn("; 1 failed (0 collections, 1 resources)", text)


if __name__ == "__main__":
    unittest.main()
