"""Character predicates and cursor scanners.

Scanners take the text and a start offset and return the offset one past
the end of whatever they matched, or None when there is no match. They
never modify the text; rewriting is left to the expansion stages.
"""

from typing import Optional

from ..errors import MismatchedBraceError, MismatchedClosingBraceError
from .types import BracePair, ParamOp, ParamType

SHELL_SPECIAL_CHARS = "#*?!$-@0"

# Longest spelling first, so ':-' wins over ':' and '##' over '#'
_PARAM_OPS = sorted(ParamOp, key=lambda op: len(op.value), reverse=True)


def is_alpha_char(char: str) -> bool:
    return "a" <= char <= "z" or "A" <= char <= "Z"


def is_numeric_char(char: str) -> bool:
    return "0" <= char <= "9"


def is_alphanumeric_char(char: str) -> bool:
    return is_alpha_char(char) or is_numeric_char(char)


def is_numeric_start_char(char: str) -> bool:
    return "1" <= char <= "9"


def is_name_start_char(char: str) -> bool:
    return is_alpha_char(char) or char == "_"


def is_name_body_char(char: str) -> bool:
    return is_alphanumeric_char(char) or char == "_"


def is_shell_special_char(char: str) -> bool:
    return len(char) == 1 and char in SHELL_SPECIAL_CHARS


def is_numeric_string(text: str) -> bool:
    return all(is_numeric_char(c) for c in text)


def is_numeric_string_without_leading_zero(text: str) -> bool:
    """True for "1", "23", "1576"; False for "", "0", "0123"."""
    if not text or not is_numeric_start_char(text[0]):
        return False
    return is_numeric_string(text[1:])


def is_signed_numeric_string(text: str) -> bool:
    """True for "0", "12", "-3"; False for "", "-", "0123", "12a"."""
    if text.startswith("-"):
        text = text[1:]
    if text == "0":
        return True
    return is_numeric_string_without_leading_zero(text)


def is_shell_special_string(text: str) -> bool:
    """True for the names of special and positional parameters ("#", "2", "12")."""
    if len(text) == 1:
        return is_shell_special_char(text) or is_numeric_start_char(text)
    return is_numeric_string_without_leading_zero(text)


def match_name(text: str, start: int) -> Optional[int]:
    """Match a variable name: [A-Za-z_][A-Za-z0-9_]*."""
    if start >= len(text) or not is_name_start_char(text[start]):
        return None
    i = start + 1
    while i < len(text) and is_name_body_char(text[i]):
        i += 1
    return i


def match_positional_param(text: str, start: int) -> Optional[int]:
    """Match a positional parameter number (no leading zero)."""
    if start >= len(text) or not is_numeric_start_char(text[start]):
        return None
    i = start + 1
    while i < len(text) and is_numeric_char(text[i]):
        i += 1
    return i


def match_special_param(text: str, start: int) -> Optional[int]:
    """Match a single-character special parameter ($#, $*, $?, ...)."""
    if start >= len(text) or not is_shell_special_char(text[start]):
        return None
    return start + 1


def match_param(text: str, start: int) -> Optional[tuple[ParamType, int]]:
    """Match any parameter name starting at ``start``.

    ``start`` points at the first character of the name, after any '$'
    and '{'. Returns the kind of name and the offset one past its end.
    """
    end = match_name(text, start)
    if end is not None:
        return ParamType.NAME, end
    end = match_positional_param(text, start)
    if end is not None:
        return ParamType.POSITIONAL, end
    end = match_special_param(text, start)
    if end is not None:
        return ParamType.SPECIAL, end
    return None


def match_param_op(text: str, start: int) -> Optional[ParamOp]:
    """Match the operator that follows a parameter name inside ${...}."""
    for op in _PARAM_OPS:
        if text.startswith(op.value, start):
            return op
    return None


def match_var(text: str, start: int = 0) -> Optional[int]:
    """Match a whole variable token ($name, $1, $#, ${...}) at ``start``.

    Unbraced positional parameters are a single digit: "$10" matches
    "$1" only, as in bash. Braced tokens may contain nested balanced
    braces and backslash escapes; an unterminated "${" is no match.
    """
    if start >= len(text) - 1 or text[start] != "$":
        return None
    i = start + 1
    if text[i] != "{":
        if is_numeric_char(text[i]):
            return i + 1
        found = match_param(text, i)
        if found is None:
            return None
        return found[1]

    depth = 1
    i += 1
    while i < len(text):
        c = text[i]
        if c == "\\":
            i += 2
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return None


def match_brace_pattern(text: str, start: int) -> Optional[int]:
    """Match a {...} span starting at ``start``, honouring nesting.

    Backslash-escaped characters are skipped, and variable tokens are
    skipped whole so that the braces of ${x} are never counted.
    """
    if start >= len(text) or text[start] != "{":
        return None
    depth = 0
    i = start
    while i < len(text):
        c = text[i]
        if c == "\\":
            i += 2
            continue
        if c == "$":
            end = match_var(text, i)
            if end is not None:
                i = end
                continue
        elif c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return None


def match_braces(text: str) -> list[BracePair]:
    """Find every matched pair of braces in ``text``.

    Pairs are listed in the order they close, so nested pairs come before
    the pairs that contain them. Escaped braces are ignored.

    Raises:
        MismatchedClosingBraceError: a '}' has no opening brace.
        MismatchedBraceError: a '{' is never closed.
    """
    pairs: list[BracePair] = []
    stack: list[int] = []
    i = 0
    while i < len(text):
        c = text[i]
        if c == "\\":
            i += 2
            continue
        if c == "{":
            stack.append(i)
        elif c == "}":
            if not stack:
                raise MismatchedClosingBraceError(i)
            pairs.append(BracePair(stack.pop(), i))
        i += 1
    if stack:
        raise MismatchedBraceError(stack[0])
    return pairs


def match_tilde_prefix(text: str, start: int = 0) -> Optional[int]:
    """Match a ~prefix, which runs to the first unescaped '/' or space."""
    if start >= len(text) or text[start] != "~":
        return None
    i = start + 1
    while i < len(text):
        c = text[i]
        if c == "\\":
            i += 2
            continue
        if c in "/ ":
            return i
        i += 1
    return len(text)
