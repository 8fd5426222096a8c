"""Transfer execution exports for xstsync."""

from __future__ import annotations

from .executor import TransferExecutor
from .serialization import (
    SERIALIZATION_DEFAULTS,
    SERIALIZATION_OPTION_NAMES,
    build_serialization_options,
    normalize_xml_boolean,
)

__all__ = [
    "TransferExecutor",
    "SERIALIZATION_DEFAULTS",
    "SERIALIZATION_OPTION_NAMES",
    "build_serialization_options",
    "normalize_xml_boolean",
]
