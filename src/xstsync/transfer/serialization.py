"""Serialization parameters forwarded to structured remote reads."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from xstsync.errors import InvalidArgumentError

SERIALIZATION_DEFAULTS: dict[str, str] = {"expand-xincludes": "yes"}

SERIALIZATION_OPTION_NAMES: tuple[str, ...] = (
    "insert-final-newline",
    "omit-xml-declaration",
    "expand-xincludes",
)

HTML_METHOD: dict[str, str] = {"method": "html"}

_XML_BOOLEAN_VALUES: dict[str, str] = {
    "true": "yes",
    "yes": "yes",
    "1": "yes",
    "false": "no",
    "no": "no",
    "0": "no",
}


def normalize_xml_boolean(value: Optional[str]) -> Optional[str]:
    """Map true/yes/1 and false/no/0 to the server's yes/no."""
    if value is None:
        return None
    key = str(value).strip().lower()
    if key not in _XML_BOOLEAN_VALUES:
        raise InvalidArgumentError(
            f"Unsupported XML serialization option value: {value}",
            details={"value": value},
        )
    return _XML_BOOLEAN_VALUES[key]


def build_serialization_options(
    toggles: Mapping[str, Any],
    *,
    html: bool = False,
) -> dict[str, Any]:
    """Defaults, then caller toggles as given, then the html method if requested."""
    options: dict[str, Any] = dict(SERIALIZATION_DEFAULTS)
    options.update(toggles)
    if html:
        options.update(HTML_METHOD)
    return options
