"""Path pattern matching for cleanup policy.

Patterns come in two flavours:

- Regex patterns, written between identical delimiters (``#...#``,
  ``/.../`` or ``~...~``). The body is searched anywhere in the path.
- Literal-prefix patterns. ``/var/log`` matches ``/var/log`` and
  ``/var/log/x`` but not ``/var/log2``.
"""

import logging
import os
import re
from collections.abc import Iterable

logger = logging.getLogger(__name__)

REGEX_DELIMITERS: frozenset[str] = frozenset({"#", "/", "~"})

_SEP = os.sep


def is_regex_pattern(pattern: str) -> bool:
    """Check whether a pattern is delimited as a regular expression.

    Args:
        pattern: Raw pattern from configuration.

    Returns:
        True if the pattern has at least 3 characters and starts and ends
        with the same delimiter from REGEX_DELIMITERS.
    """
    if len(pattern) < 3:
        return False
    return pattern[0] == pattern[-1] and pattern[0] in REGEX_DELIMITERS


def regex_body(pattern: str) -> str:
    """Strip the delimiters from a regex pattern."""
    return pattern[1:-1]


def is_literal_root(pattern: str) -> bool:
    """Check whether a pattern can be used as a scan root.

    Scan roots must be absolute, literal paths: no regex delimiters and
    no glob wildcards.

    Args:
        pattern: Raw pattern from configuration.

    Returns:
        True if the pattern is usable as a filesystem root.
    """
    if not pattern or is_regex_pattern(pattern):
        return False
    return pattern.startswith(_SEP) and "*" not in pattern


class PathMatcher:
    """Classifies paths against allowed and excluded pattern sets.

    A path is a cleanup candidate only when it is allowed and not
    excluded. Callers check ``is_excluded`` first.

    Regex patterns that fail to compile never match. Configuration
    validation rejects them earlier; this is the last line.

    Example:
        >>> matcher = PathMatcher(["/tmp"], ["/tmp/keep"])
        >>> matcher.is_allowed("/tmp/a.log")
        True
        >>> matcher.is_excluded("/tmp/keep/b.log")
        True
    """

    def __init__(self, allowed: Iterable[str], excluded: Iterable[str]) -> None:
        self._allowed = tuple(allowed)
        self._excluded = tuple(excluded)
        self._compiled: dict[str, re.Pattern[str] | None] = {}

    @property
    def allowed(self) -> tuple[str, ...]:
        return self._allowed

    @property
    def excluded(self) -> tuple[str, ...]:
        return self._excluded

    def is_allowed(self, path: str) -> bool:
        """Check whether the path matches any allowed pattern."""
        return self._matches_any(path, self._allowed)

    def is_excluded(self, path: str) -> bool:
        """Check whether the path matches any excluded pattern."""
        return self._matches_any(path, self._excluded)

    def is_candidate(self, path: str) -> bool:
        """Check whether the path may be considered for cleanup at all."""
        if self.is_excluded(path):
            return False
        return self.is_allowed(path)

    def _matches_any(self, path: str, patterns: tuple[str, ...]) -> bool:
        for pattern in patterns:
            if is_regex_pattern(pattern):
                regex = self._compile(pattern)
                if regex is not None and regex.search(path):
                    return True
                continue

            normalized = pattern.rstrip(_SEP)
            if not normalized:
                continue

            if path == normalized or path.startswith(normalized + _SEP):
                return True

        return False

    def _compile(self, pattern: str) -> re.Pattern[str] | None:
        if pattern in self._compiled:
            return self._compiled[pattern]

        try:
            regex: re.Pattern[str] | None = re.compile(regex_body(pattern))
        except re.error as e:
            logger.warning("Ignoring invalid regex pattern %s: %s", pattern, e)
            regex = None

        self._compiled[pattern] = regex
        return regex
