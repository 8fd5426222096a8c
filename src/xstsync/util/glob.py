"""Include/exclude glob matching over slash-separated names."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

DISABLED_PATTERN = "false"
MATCH_ALL_PATTERN = "**"


def to_regex_pattern(glob: str) -> str:
    """
    Translate a glob pattern into an anchored regular expression.

    - ``?`` matches exactly one character other than ``/``
    - ``*`` matches zero or more characters other than ``/``
    - ``**`` matches across separators; ``**/`` also matches zero segments
    - ``[...]`` is a character class, ``[!...]`` its negation
    """
    out: list[str] = []
    i = 0
    n = len(glob)
    while i < n:
        c = glob[i]
        if c == "*":
            if glob.startswith("**", i):
                i += 2
                if i < n and glob[i] == "/":
                    out.append("(?:.*/)?")
                    i += 1
                else:
                    out.append(".*")
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            end = glob.find("]", i + 2 if glob.startswith("[!", i) else i + 1)
            if end == -1:
                out.append(re.escape(c))
            else:
                body = glob[i + 1:end]
                if body.startswith("!"):
                    body = "^" + body[1:]
                out.append("[" + body.replace("\\", "\\\\") + "]")
                i = end
        else:
            out.append(re.escape(c))
        i += 1
    return "^" + "".join(out) + "$"


class GlobMatcher:
    """Membership predicate for a compiled pattern set. Case-insensitive."""

    def __init__(self, patterns: Sequence[str]) -> None:
        self.patterns: tuple[str, ...] = tuple(patterns)
        self._disabled = is_disabled(self.patterns)
        self._match_all = not self._disabled and MATCH_ALL_PATTERN in self.patterns
        self._regexes: list[re.Pattern[str]] = []
        if not self._disabled and not self._match_all:
            self._regexes = [
                re.compile(to_regex_pattern(_normalize(p)), re.IGNORECASE)
                for p in self.patterns
            ]

    @property
    def matches_nothing(self) -> bool:
        return self._disabled or not self.patterns

    def matches(self, name: str) -> bool:
        if self._disabled:
            return False
        if self._match_all:
            return True
        candidate = _normalize(name)
        return any(rx.match(candidate) for rx in self._regexes)

    def __repr__(self) -> str:
        return f"GlobMatcher({list(self.patterns)!r})"


def is_disabled(patterns: Sequence[str]) -> bool:
    """A sole pattern equal to "false" means "match nothing"."""
    return len(patterns) == 1 and patterns[0].strip().lower() == DISABLED_PATTERN


def compile_patterns(patterns: Iterable[str]) -> GlobMatcher:
    return GlobMatcher(list(patterns))


class PathFilter:
    """
    Include/exclude filter for planned paths.

    Exclude patterns are checked first. A path is also excluded when any of
    its ancestor paths is excluded.

    With match_name set, a pattern also matches when it matches the last
    segment alone, so "*.xml" selects XML resources at any depth.
    """

    def __init__(
        self,
        include: Optional[Sequence[str]] = None,
        exclude: Optional[Sequence[str]] = None,
        *,
        match_name: bool = False,
    ) -> None:
        self.include = compile_patterns(include if include is not None else [MATCH_ALL_PATTERN])
        self.exclude = compile_patterns(exclude or [])
        self.match_name = match_name

    def is_excluded(self, path: str) -> bool:
        if self.exclude.matches_nothing:
            return False
        parts = _normalize(path).split("/")
        for depth in range(1, len(parts) + 1):
            if self._matches(self.exclude, "/".join(parts[:depth])):
                return True
        return False

    def is_included(self, path: str) -> bool:
        return self._matches(self.include, path)

    def _matches(self, matcher: GlobMatcher, path: str) -> bool:
        if matcher.matches(path):
            return True
        return self.match_name and matcher.matches(_normalize(path).rsplit("/", 1)[-1])

    def accepts(self, path: str) -> bool:
        if self.is_excluded(path):
            return False
        return self.is_included(path)


def _normalize(path: str) -> str:
    return path.replace("\\", "/").strip("/")
