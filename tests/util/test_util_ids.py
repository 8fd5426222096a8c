import re
import unittest

from xstsync.util.ids import new_plan_id


class TestIds(unittest.TestCase):
    def test_plan_id_format(self) -> None:
        value = new_plan_id("up")
        self.assertRegex(value, r"^up-\d{8}T\d{6}-[0-9a-f]{8}$")

    def test_plan_ids_are_unique(self) -> None:
        values = {new_plan_id("down") for _ in range(20)}
        self.assertEqual(len(values), 20)

    def test_plan_ids_sort_by_time(self) -> None:
        stamp = re.compile(r"-(\d{8}T\d{6})-")
        a, b = new_plan_id("up"), new_plan_id("up")
        self.assertLessEqual(stamp.search(a).group(1), stamp.search(b).group(1))


if __name__ == "__main__":
    unittest.main()
