"""Caller options for one transfer run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

DEFAULT_MAX_CONCURRENT = 4
DEFAULT_HTML_GLOB = "*.html"


def split_patterns(values: Optional[Iterable[str]]) -> tuple[str, ...]:
    """
    Flatten a multi-value option: every value may hold comma separated patterns.

    A sole value of "false" is kept as-is; it disables the option.
    """
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]

    patterns: list[str] = []
    for value in values:
        for part in value.split(","):
            part = part.strip()
            if part:
                patterns.append(part)
    return tuple(patterns)


@dataclass(frozen=True, slots=True)
class TransferOptions:
    """
    Options shared by upload and download runs.

    serialization is forwarded verbatim to structured remote reads; keys are
    the server's serialization parameter names (e.g. "omit-xml-declaration").
    """

    include: tuple[str, ...] = ("**",)
    exclude: tuple[str, ...] = ()
    max_concurrent: int = DEFAULT_MAX_CONCURRENT
    min_time_ms: int = 0
    apply_config: bool = False
    dot_files: bool = False
    dry_run: bool = False
    serialization: Mapping[str, Any] = field(default_factory=dict)
    html_glob: str = DEFAULT_HTML_GLOB

    def __post_init__(self) -> None:
        object.__setattr__(self, "include", split_patterns(self.include))
        object.__setattr__(self, "exclude", split_patterns(self.exclude))
        object.__setattr__(self, "serialization", dict(self.serialization))

        if isinstance(self.max_concurrent, bool) or not isinstance(self.max_concurrent, int):
            raise TypeError("TransferOptions.max_concurrent must be an int")
        if self.max_concurrent < 1:
            raise ValueError(
                'Invalid value for option "threads"; must be an integer greater than zero.'
            )

        if isinstance(self.min_time_ms, bool) or not isinstance(self.min_time_ms, int):
            raise TypeError("TransferOptions.min_time_ms must be an int")
        if self.min_time_ms < 0:
            raise ValueError(
                'Invalid value for option "mintime"; must be an integer equal or greater than zero.'
            )
