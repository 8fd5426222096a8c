import errno
import unittest
import xmlrpc.client
from unittest import mock

from xstsync.client import ExistXmlRpcClient
from xstsync.client.xmlrpc_client import UPLOAD_CHUNK_SIZE
from xstsync.errors import (
    ApiError,
    AuthError,
    NetworkError,
    NotFoundError,
    PermissionError,
)


def _client() -> tuple[ExistXmlRpcClient, mock.Mock]:
    proxy = mock.Mock()
    return ExistXmlRpcClient.from_proxy(proxy, user="admin"), proxy


class TestDescribe(unittest.TestCase):
    def test_collection(self) -> None:
        client, proxy = _client()
        proxy.existsAndCanOpenCollection.return_value = True

        info = client.describe("/db/apps/")

        self.assertTrue(info.is_collection)
        self.assertEqual(info.path, "/db/apps")
        proxy.describeResource.assert_not_called()

    def test_resource(self) -> None:
        client, proxy = _client()
        proxy.existsAndCanOpenCollection.return_value = False
        proxy.describeResource.return_value = {
            "name": "/db/apps/logo.png",
            "type": "BinaryResource",
            "mime-type": "image/png",
            "content-length": 42,
        }

        info = client.describe("/db/apps/logo.png")

        self.assertFalse(info.is_collection)
        self.assertTrue(info.is_binary)
        self.assertEqual(info.name, "logo.png")
        self.assertEqual(info.mime_type, "image/png")
        self.assertEqual(info.size, 42)

    def test_missing(self) -> None:
        client, proxy = _client()
        proxy.existsAndCanOpenCollection.return_value = False
        proxy.describeResource.return_value = {}

        self.assertIsNone(client.describe("/db/nope"))


class TestCollections(unittest.TestCase):
    def test_read_collection(self) -> None:
        client, proxy = _client()
        proxy.getCollectionDesc.return_value = {
            "collections": ["sub", "empty"],
            "documents": [
                {"name": "a.xml", "type": "XMLResource"},
                {"name": "logo.png", "type": "BinaryResource"},
            ],
        }

        listing = client.read_collection("/db/app")

        self.assertEqual(listing.collections, ["sub", "empty"])
        self.assertEqual([r.path for r in listing.resources], ["/db/app/a.xml", "/db/app/logo.png"])
        self.assertTrue(listing.resources[1].is_binary)

    def test_create_collection(self) -> None:
        client, proxy = _client()
        client.create_collection("/db/t/sub")
        proxy.createCollection.assert_called_once_with("/db/t/sub")


class TestResources(unittest.TestCase):
    def test_write_uploads_then_parses(self) -> None:
        client, proxy = _client()
        proxy.upload.return_value = "handle-1"

        client.write_resource("/db/t/", "a.xml", b"<a/>", "application/xml")

        proxy.upload.assert_called_once_with(b"<a/>", 4)
        proxy.parseLocal.assert_called_once_with("handle-1", "/db/t/a.xml", True, "application/xml")

    def test_write_large_payload_in_chunks(self) -> None:
        client, proxy = _client()
        proxy.upload.return_value = "h"
        data = b"x" * (UPLOAD_CHUNK_SIZE + 10)

        client.write_resource("/db/t", "big.bin", data, "application/octet-stream")

        self.assertEqual(proxy.upload.call_count, 2)
        self.assertEqual(proxy.upload.call_args_list[1], mock.call("h", b"x" * 10, 10))

    def test_read_resource_passes_string_params(self) -> None:
        client, proxy = _client()
        proxy.getDocument.return_value = b"<a/>"

        data = client.read_resource("/db/t/a.xml", {"expand-xincludes": "yes", "indent": 1})

        self.assertEqual(data, b"<a/>")
        proxy.getDocument.assert_called_once_with(
            "/db/t/a.xml", {"expand-xincludes": "yes", "indent": "1"}
        )

    def test_read_binary_unwraps_binary(self) -> None:
        client, proxy = _client()
        proxy.getBinaryResource.return_value = xmlrpc.client.Binary(b"\x00\x01")

        self.assertEqual(client.read_binary("/db/t/x.bin"), b"\x00\x01")

    def test_user_groups(self) -> None:
        client, proxy = _client()
        proxy.getAccount.return_value = {"name": "admin", "groups": ["dba", "users"]}

        self.assertEqual(client.user_groups(), ["dba", "users"])
        proxy.getAccount.assert_called_once_with("admin")


class TestErrorMapping(unittest.TestCase):
    def test_permission_fault(self) -> None:
        client, proxy = _client()
        proxy.createCollection.side_effect = xmlrpc.client.Fault(
            0, "org.exist.security.PermissionDeniedException: Permission denied"
        )

        with self.assertRaises(PermissionError) as ctx:
            client.create_collection("/db/locked")

        self.assertEqual(ctx.exception.details["path"], "/db/locked")

    def test_not_found_fault(self) -> None:
        client, proxy = _client()
        proxy.getDocument.side_effect = xmlrpc.client.Fault(0, "document /db/x.xml not found")

        with self.assertRaises(NotFoundError):
            client.read_resource("/db/x.xml", {})

    def test_xpath_fault_is_trimmed(self) -> None:
        client, proxy = _client()
        proxy.getDocument.side_effect = xmlrpc.client.Fault(
            0, "java.lang.Exception: org.exist.xquery.XPathException: err:XPST0003 bad"
        )

        with self.assertRaises(ApiError) as ctx:
            client.read_resource("/db/x.xq", {})

        self.assertEqual(str(ctx.exception), "XPathException:\nerr:XPST0003 bad")

    def test_http_401(self) -> None:
        client, proxy = _client()
        proxy.getAccount.side_effect = xmlrpc.client.ProtocolError("url", 401, "Unauthorized", {})

        with self.assertRaises(AuthError):
            client.user_groups()

    def test_connection_refused(self) -> None:
        client, proxy = _client()
        proxy.existsAndCanOpenCollection.side_effect = ConnectionRefusedError(
            errno.ECONNREFUSED, "Connection refused"
        )

        with self.assertRaises(NetworkError) as ctx:
            client.collection_exists("/db")

        self.assertEqual(ctx.exception.code, "ECONNREFUSED")
        self.assertEqual(str(ctx.exception), "Could not connect to DB! Reason: ECONNREFUSED")

    def test_unknown_error(self) -> None:
        client, proxy = _client()
        proxy.createCollection.side_effect = ValueError("bad payload")

        with self.assertRaises(ApiError):
            client.create_collection("/db/x")


if __name__ == "__main__":
    unittest.main()
