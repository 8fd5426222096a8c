import unittest

from xstsync.models import TransferOptions, split_patterns


class TestTransferOptions(unittest.TestCase):
    def test_defaults(self) -> None:
        opts = TransferOptions()
        self.assertEqual(opts.include, ("**",))
        self.assertEqual(opts.exclude, ())
        self.assertEqual(opts.max_concurrent, 4)
        self.assertEqual(opts.min_time_ms, 0)
        self.assertFalse(opts.apply_config)
        self.assertFalse(opts.dot_files)
        self.assertEqual(opts.html_glob, "*.html")

    def test_comma_separated_patterns_are_split(self) -> None:
        opts = TransferOptions(include=["*.xml, *.xq", "data/**"], exclude="**/*.tmp,")
        self.assertEqual(opts.include, ("*.xml", "*.xq", "data/**"))
        self.assertEqual(opts.exclude, ("**/*.tmp",))

    def test_split_patterns_keeps_false(self) -> None:
        self.assertEqual(split_patterns(["false"]), ("false",))
        self.assertEqual(split_patterns(None), ())

    def test_invalid_threads(self) -> None:
        with self.assertRaises(ValueError):
            TransferOptions(max_concurrent=0)
        with self.assertRaises(TypeError):
            TransferOptions(max_concurrent=True)

    def test_invalid_mintime(self) -> None:
        with self.assertRaises(ValueError):
            TransferOptions(min_time_ms=-1)

    def test_serialization_is_copied(self) -> None:
        toggles = {"omit-xml-declaration": "no"}
        opts = TransferOptions(serialization=toggles)
        toggles["omit-xml-declaration"] = "yes"
        self.assertEqual(opts.serialization["omit-xml-declaration"], "no")


if __name__ == "__main__":
    unittest.main()
