"""Default glob collaborator.

Shell wildcard patterns are translated into Python regular expressions
and matched against whole strings or slices of them. Supports '*', '?',
bracket expressions with '!' or '^' negation and POSIX character classes,
and backslash escapes. Extended globs are not recognised.
"""

from __future__ import annotations

import re
from typing import Optional

from .errors import GlobPatternError

POSIX_CLASSES = {
    "alpha": "a-zA-Z",
    "digit": "0-9",
    "alnum": "a-zA-Z0-9",
    "upper": "A-Z",
    "lower": "a-z",
    "space": " \\t\\n\\r\\f\\v",
    "blank": " \\t",
    "punct": r"!\"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~",
    "graph": "!-~",
    "print": " -~",
    "cntrl": "\\x00-\\x1f\\x7f",
    "xdigit": "0-9a-fA-F",
    "word": "a-zA-Z0-9_",
}


def glob_to_regex(pattern: str) -> str:
    """Convert a glob pattern to an (unanchored) regex pattern.

    Raises:
        GlobPatternError: the pattern has an unterminated bracket
            expression or names an unknown character class.
    """
    result = []
    i = 0
    while i < len(pattern):
        c = pattern[i]
        if c == "*":
            result.append(".*")
        elif c == "?":
            result.append(".")
        elif c == "[":
            converted, i = _convert_bracket(pattern, i)
            result.append(converted)
            continue
        elif c == "\\":
            # Backslash escape in glob pattern - next char is literal
            if i + 1 < len(pattern):
                i += 1
                result.append(re.escape(pattern[i]))
            else:
                result.append("\\\\")
        else:
            result.append(re.escape(c))
        i += 1
    return "".join(result)


def _convert_bracket(pattern: str, start: int) -> tuple[str, int]:
    """Convert the bracket expression at ``start``.

    Returns the regex character class and the offset just past the
    closing ']'.
    """
    result = ["["]
    j = start + 1
    if j < len(pattern) and pattern[j] in "!^":
        result.append("^")
        j += 1
    # ']' as the first member is literal: []] or [!]]
    if j < len(pattern) and pattern[j] == "]":
        result.append("\\]")
        j += 1

    while j < len(pattern):
        c = pattern[j]
        if c == "]":
            result.append("]")
            return "".join(result), j + 1
        if c == "[" and pattern.startswith("[:", j):
            end = pattern.find(":]", j + 2)
            if end != -1:
                name = pattern[j + 2:end]
                if name not in POSIX_CLASSES:
                    raise GlobPatternError(pattern, f"unknown character class '{name}'")
                result.append(POSIX_CLASSES[name])
                j = end + 2
                continue
        if c == "\\" and j + 1 < len(pattern):
            j += 1
            result.append(re.escape(pattern[j]))
        elif c in "[\\^&~|":
            result.append("\\" + c)
        else:
            result.append(c)
        j += 1

    raise GlobPatternError(pattern, "missing closing ']'")


class GlobPattern:
    """A compiled shell glob pattern.

    The prefix and suffix helpers return the offset that splits the match
    from the rest of the value, or None when nothing matches.
    """

    def __init__(self, pattern: str):
        self.pattern = pattern
        try:
            self._regex = re.compile(glob_to_regex(pattern), re.DOTALL)
        except re.error as e:
            raise GlobPatternError(pattern, str(e)) from e

    def __repr__(self) -> str:
        return f"GlobPattern({self.pattern!r})"

    def _matches(self, value: str, start: int, end: int) -> bool:
        return self._regex.fullmatch(value, start, end) is not None

    def match(self, value: str) -> bool:
        """True if the pattern matches the whole of ``value``."""
        return self._matches(value, 0, len(value))

    def shortest_prefix(self, value: str) -> Optional[int]:
        """End offset of the shortest matching prefix."""
        for end in range(len(value) + 1):
            if self._matches(value, 0, end):
                return end
        return None

    def longest_prefix(self, value: str) -> Optional[int]:
        """End offset of the longest matching prefix."""
        for end in range(len(value), -1, -1):
            if self._matches(value, 0, end):
                return end
        return None

    def shortest_suffix(self, value: str) -> Optional[int]:
        """Start offset of the shortest matching suffix."""
        for start in range(len(value), -1, -1):
            if self._matches(value, start, len(value)):
                return start
        return None

    def longest_suffix(self, value: str) -> Optional[int]:
        """Start offset of the longest matching suffix."""
        for start in range(len(value) + 1):
            if self._matches(value, start, len(value)):
                return start
        return None

    def search(self, value: str, start: int = 0) -> Optional[tuple[int, int]]:
        """Find the leftmost, then longest, match at or after ``start``."""
        for begin in range(start, len(value) + 1):
            for end in range(len(value), begin - 1, -1):
                if self._matches(value, begin, end):
                    return begin, end
        return None


def compile_glob(pattern: str) -> GlobPattern:
    """Compile a glob pattern, raising GlobPatternError if it is malformed."""
    return GlobPattern(pattern)
