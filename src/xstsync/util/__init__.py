from .glob import GlobMatcher, PathFilter, compile_patterns, is_disabled, to_regex_pattern
from .ids import new_plan_id
from .log import configure_logging, get_logger
from .mime import (
    BINARY_RESOURCE_TYPE,
    GENERIC_BINARY_MIME,
    XML_RESOURCE_TYPE,
    get_mime_type,
    is_binary_resource,
    is_config_name,
    upload_mime_type,
)
from .time import elapsed_ms, monotonic_ms, now_utc

__all__ = [
    "GlobMatcher",
    "PathFilter",
    "compile_patterns",
    "is_disabled",
    "to_regex_pattern",
    "new_plan_id",
    "configure_logging",
    "get_logger",
    "BINARY_RESOURCE_TYPE",
    "GENERIC_BINARY_MIME",
    "XML_RESOURCE_TYPE",
    "get_mime_type",
    "is_binary_resource",
    "is_config_name",
    "upload_mime_type",
    "now_utc",
    "monotonic_ms",
    "elapsed_ms",
]
