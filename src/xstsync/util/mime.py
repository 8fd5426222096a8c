from __future__ import annotations

import mimetypes
import posixpath
from typing import Optional

GENERIC_BINARY_MIME: str = "application/octet-stream"

BINARY_RESOURCE_TYPE: str = "BinaryResource"
XML_RESOURCE_TYPE: str = "XMLResource"

# Types the server knows but Python's mimetypes module does not.
_EXTRA_TYPES: dict[str, str] = {
    ".xml": "application/xml",
    ".xq": "application/xquery",
    ".xql": "application/xquery",
    ".xqm": "application/xquery",
    ".xquery": "application/xquery",
    ".xqy": "application/xquery",
    ".xconf": "application/xml",
    ".xsl": "application/xslt+xml",
    ".xslt": "application/xslt+xml",
    ".odd": "application/xml",
    ".tei": "application/xml",
    ".xpr": "application/xml",
    ".xhtml": "application/xhtml+xml",
    ".md": "text/markdown",
}


def get_mime_type(name: str) -> Optional[str]:
    """Return the content type for a resource name, or None if unknown."""
    ext = posixpath.splitext(name.lower())[1]
    if ext in _EXTRA_TYPES:
        return _EXTRA_TYPES[ext]
    mime, _ = mimetypes.guess_type(name, strict=False)
    return mime


def upload_mime_type(name: str) -> tuple[str, bool]:
    """
    Return (content type, is_fallback) for an upload.

    Unknown names fall back to the generic binary type so the server accepts them.
    """
    mime = get_mime_type(name)
    if mime is None:
        return GENERIC_BINARY_MIME, True
    return mime, False


def is_binary_resource(resource_type: Optional[str]) -> bool:
    return resource_type == BINARY_RESOURCE_TYPE


def is_config_name(name: str) -> bool:
    """Index configuration resources are named ``*.xconf``."""
    return name.lower().endswith(".xconf")
