"""Ant-style path patterns for routes that need no credential."""

import re
from typing import Iterable, List, Pattern


def compile_pattern(pattern: str) -> Pattern[str]:
    """
    Compile an ant-style pattern.

    `**` matches any number of path segments, `*` matches within one
    segment and `?` matches one character. A trailing `/**` also matches
    the bare prefix, so `/public/**` covers `/public`.
    """
    regex = ""
    i = 0
    while i < len(pattern):
        if pattern.startswith("/**", i) and i + 3 == len(pattern):
            regex += "(?:/.*)?"
            i += 3
        elif pattern.startswith("**", i):
            regex += ".*"
            i += 2
        elif pattern[i] == "*":
            regex += "[^/]*"
            i += 1
        elif pattern[i] == "?":
            regex += "[^/]"
            i += 1
        else:
            regex += re.escape(pattern[i])
            i += 1
    return re.compile(f"^{regex}$")


class PublicRouteMatcher:
    """Decides whether a request path is public."""

    def __init__(self, patterns: Iterable[str]):
        self.patterns: List[str] = list(patterns)
        self._compiled = [compile_pattern(p) for p in self.patterns]

    def is_public(self, path: str, method: str = "GET") -> bool:
        # CORS preflight never carries credentials
        if method.upper() == "OPTIONS":
            return True
        return any(p.match(path) for p in self._compiled)
