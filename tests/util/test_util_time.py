import unittest
from datetime import timezone
from unittest.mock import patch

from xstsync.util import time as xtime


class TestUtilTime(unittest.TestCase):
    def test_now_utc_is_tz_aware(self) -> None:
        dt = xtime.now_utc()
        self.assertIsNotNone(dt.tzinfo)
        self.assertEqual(dt.tzinfo, timezone.utc)

    def test_elapsed_ms_rounds_and_clamps(self) -> None:
        self.assertEqual(xtime.elapsed_ms(100.0, 350.4), 250)
        self.assertEqual(xtime.elapsed_ms(100.0, 50.0), 0)

    def test_elapsed_ms_defaults_to_now(self) -> None:
        with patch.object(xtime, "monotonic_ms", return_value=1500.0):
            self.assertEqual(xtime.elapsed_ms(1000.0), 500)


if __name__ == "__main__":
    unittest.main()
