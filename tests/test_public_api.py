import unittest

import xstsync


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(xstsync, "TransferManager"))
        self.assertTrue(hasattr(xstsync, "ConnectionInfo"))
        self.assertTrue(hasattr(xstsync, "ExistXmlRpcClient"))

        self.assertTrue(hasattr(xstsync, "PathPlanner"))
        self.assertTrue(hasattr(xstsync, "WorkerPool"))
        self.assertTrue(hasattr(xstsync, "TransferPlan"))
        self.assertTrue(hasattr(xstsync, "RunSummary"))

        self.assertTrue(hasattr(xstsync, "XstSyncError"))
        self.assertTrue(hasattr(xstsync, "FatalTransferError"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(xstsync, "__all__"))
        self.assertIn("TransferManager", xstsync.__all__)
        self.assertIn("XstSyncError", xstsync.__all__)
        for name in xstsync.__all__:
            self.assertTrue(hasattr(xstsync, name), name)


if __name__ == "__main__":
    unittest.main()
