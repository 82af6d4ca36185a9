"""Parsed forms produced by the shellexpand scanners and parsers.

Every type here is immutable and short-lived: it is built while one input
string is being expanded and thrown away as soon as that expansion is done.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


@dataclass(frozen=True)
class BracePair:
    """Location of one matched pair of braces."""

    start: int
    """Offset of the opening '{'."""

    end: int
    """Offset of the matching '}'."""


@dataclass(frozen=True)
class BraceSequence:
    """A {lo..hi[..incr]} range.

    The sign of ``increment`` always follows the direction from ``start``
    to ``end``, whatever sign was written in the input.
    """

    is_alphabetic: bool
    """True for {a..z} ranges, rendered as characters."""

    start: int
    """First value (a code point for alphabetic ranges)."""

    end: int
    """Last value (inclusive, if the increment lands on it)."""

    increment: int
    """Step between values; negative for descending ranges."""

    width: int = 0
    """Zero-pad numeric values to this many characters (0 = no padding)."""

    def render(self, value: int) -> str:
        """Render one value of the range."""
        if self.is_alphabetic:
            return chr(value)
        if self.width:
            return f"{value:0{self.width}d}"
        return str(value)

    def values(self) -> Iterator[str]:
        """Yield every rendered value of the range in order."""
        current = self.start
        if self.increment > 0:
            while current <= self.end:
                yield self.render(current)
                current += self.increment
        else:
            while current >= self.end:
                yield self.render(current)
                current += self.increment


class ParamType(Enum):
    """What kind of parameter name was matched."""

    NAME = "name"
    POSITIONAL = "positional"
    SPECIAL = "special"


class ParamOp(Enum):
    """Operators that may follow a parameter name inside ${...}.

    Each value is the operator's exact spelling.
    """

    USE_DEFAULT = ":-"
    ASSIGN_DEFAULT = ":="
    WRITE_ERROR = ":?"
    USE_ALTERNATIVE = ":+"
    SUBSTRING = ":"
    UNSET_USE_DEFAULT = "-"
    UNSET_ASSIGN_DEFAULT = "="
    UNSET_WRITE_ERROR = "?"
    UNSET_USE_ALTERNATIVE = "+"
    REMOVE_LONGEST_PREFIX = "##"
    REMOVE_SHORTEST_PREFIX = "#"
    REMOVE_LONGEST_SUFFIX = "%%"
    REMOVE_SHORTEST_SUFFIX = "%"
    SEARCH_REPLACE = "/"
    UPPERCASE_ALL = "^^"
    UPPERCASE_FIRST = "^"
    LOWERCASE_ALL = ",,"
    LOWERCASE_FIRST = ","
    TRANSFORM = "@"


class ParamKind(Enum):
    """Which expansion algorithm a ${...} form selects."""

    VALUE = "value"
    """$var, ${var}"""
    WITH_DEFAULT = "with-default"
    """${var:-word}"""
    SET_DEFAULT = "set-default"
    """${var:=word}"""
    WRITE_ERROR = "write-error"
    """${var:?word}"""
    ALTERNATIVE = "alternative"
    """${var:+word}"""
    SUBSTRING = "substring"
    """${var:offset}"""
    SUBSTRING_LENGTH = "substring-length"
    """${var:offset:length}"""
    PREFIX_NAMES = "prefix-names"
    """${!prefix*}"""
    PREFIX_NAMES_QUOTED = "prefix-names-quoted"
    """${!prefix@}"""
    LENGTH = "length"
    """${#var}, and ${#*} / ${#@} for the positional parameter count"""
    REMOVE_PREFIX_SHORTEST = "remove-prefix-shortest"
    """${var#pattern}"""
    REMOVE_PREFIX_LONGEST = "remove-prefix-longest"
    """${var##pattern}"""
    REMOVE_SUFFIX_SHORTEST = "remove-suffix-shortest"
    """${var%pattern}"""
    REMOVE_SUFFIX_LONGEST = "remove-suffix-longest"
    """${var%%pattern}"""
    REPLACE_FIRST = "replace-first"
    """${var/pattern/string}"""
    REPLACE_ALL = "replace-all"
    """${var//pattern/string}"""
    REPLACE_PREFIX = "replace-prefix"
    """${var/#pattern/string}"""
    REPLACE_SUFFIX = "replace-suffix"
    """${var/%pattern/string}"""
    UPPERCASE_FIRST = "uppercase-first"
    """${var^pattern}"""
    UPPERCASE_ALL = "uppercase-all"
    """${var^^pattern}"""
    LOWERCASE_FIRST = "lowercase-first"
    """${var,pattern}"""
    LOWERCASE_ALL = "lowercase-all"
    """${var,,pattern}"""
    DESCRIBE_FLAGS = "describe-flags"
    """${var@a}"""
    DECLARE = "declare"
    """${var@A}"""
    ESCAPE = "escape"
    """${var@E}"""
    PROMPT = "prompt"
    """${var@P}"""
    QUOTE = "quote"
    """${var@Q}"""


@dataclass(frozen=True)
class ParameterDescriptor:
    """A parsed ${...} or $name form.

    ``operands[0]`` is always the parameter name. Ordinary names are
    stored bare ("HOME"); positional and special parameters keep their
    leading '$' ("$1", "$*") so they can be told apart without going
    back to the source text.
    """

    kind: ParamKind
    """Expansion algorithm to apply."""

    operands: tuple[str, ...]
    """Parameter name followed by the operator's operands, in order."""

    indirect: bool = False
    """True for ${!name...}: the value of name is the parameter to expand."""

    check_empty: bool = True
    """For the default family: False for the unset-only forms (${var-word})."""

    @property
    def name(self) -> str:
        return self.operands[0]


class TildeKind(Enum):
    """What a ~prefix refers to."""

    HOME = "home"
    PWD = "pwd"
    OLDPWD = "oldpwd"
    USERNAME = "username"


@dataclass(frozen=True)
class TildePrefix:
    """A parsed ~, ~+, ~- or ~user prefix."""

    kind: TildeKind
    username: str = ""
    """Only set when kind is USERNAME."""
