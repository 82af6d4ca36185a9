"""Parsers that turn matched tokens into descriptors.

Each parser takes the exact text a scanner matched and returns a parsed
form, or None when the text is not a valid expansion. None is never an
error: callers leave such text in the output untouched.
"""

from __future__ import annotations

import re
from typing import Optional

from .lexer import (
    is_alpha_char,
    is_numeric_char,
    is_numeric_string_without_leading_zero,
    is_signed_numeric_string,
    match_brace_pattern,
    match_name,
    match_param,
    match_param_op,
    match_var,
)
from .types import (
    BraceSequence,
    ParamKind,
    ParamOp,
    ParamType,
    ParameterDescriptor,
    TildeKind,
    TildePrefix,
)

_SEQUENCE_NUMBER_RE = re.compile(r"-?[0-9]+")

# op -> (kind, check_empty)
_DEFAULT_OPS = {
    ParamOp.USE_DEFAULT: (ParamKind.WITH_DEFAULT, True),
    ParamOp.ASSIGN_DEFAULT: (ParamKind.SET_DEFAULT, True),
    ParamOp.WRITE_ERROR: (ParamKind.WRITE_ERROR, True),
    ParamOp.USE_ALTERNATIVE: (ParamKind.ALTERNATIVE, True),
    ParamOp.UNSET_USE_DEFAULT: (ParamKind.WITH_DEFAULT, False),
    ParamOp.UNSET_ASSIGN_DEFAULT: (ParamKind.SET_DEFAULT, False),
    ParamOp.UNSET_WRITE_ERROR: (ParamKind.WRITE_ERROR, False),
    ParamOp.UNSET_USE_ALTERNATIVE: (ParamKind.ALTERNATIVE, False),
}

_REMOVE_OPS = {
    ParamOp.REMOVE_SHORTEST_PREFIX: ParamKind.REMOVE_PREFIX_SHORTEST,
    ParamOp.REMOVE_LONGEST_PREFIX: ParamKind.REMOVE_PREFIX_LONGEST,
    ParamOp.REMOVE_SHORTEST_SUFFIX: ParamKind.REMOVE_SUFFIX_SHORTEST,
    ParamOp.REMOVE_LONGEST_SUFFIX: ParamKind.REMOVE_SUFFIX_LONGEST,
}

_CASE_OPS = {
    ParamOp.UPPERCASE_FIRST: ParamKind.UPPERCASE_FIRST,
    ParamOp.UPPERCASE_ALL: ParamKind.UPPERCASE_ALL,
    ParamOp.LOWERCASE_FIRST: ParamKind.LOWERCASE_FIRST,
    ParamOp.LOWERCASE_ALL: ParamKind.LOWERCASE_ALL,
}

_REPLACE_ANCHORS = {
    "/": ParamKind.REPLACE_ALL,
    "#": ParamKind.REPLACE_PREFIX,
    "%": ParamKind.REPLACE_SUFFIX,
}

_TRANSFORMS = {
    "a": ParamKind.DESCRIBE_FLAGS,
    "A": ParamKind.DECLARE,
    "E": ParamKind.ESCAPE,
    "P": ParamKind.PROMPT,
    "Q": ParamKind.QUOTE,
}


def _param_operand(param_type: ParamType, name: str) -> str:
    if param_type == ParamType.NAME:
        return name
    return "$" + name


def parse_parameter(token: str) -> Optional[ParameterDescriptor]:
    """Parse a token matched by match_var() into a ParameterDescriptor.

    Returns None for forms that are not valid expansions, such as
    ${!!name}, ${#name:-x} or ${name:1:2:3}.
    """
    if len(token) < 2 or token[0] != "$":
        return None

    if token[1] != "{":
        found = match_param(token, 1)
        if found is None:
            return None
        param_type, end = found
        # "$10" is "$1" plus a literal; the caller hands us "$1" only
        if param_type == ParamType.POSITIONAL and end > 2:
            end = 2
        if end != len(token):
            return None
        return ParameterDescriptor(ParamKind.VALUE, (_param_operand(param_type, token[1:]),))

    if len(token) < 4 or token[-1] != "}":
        return None
    return _parse_braced(token[2:-1])


def _parse_braced(body: str) -> Optional[ParameterDescriptor]:
    # ${x}, ${1}, ${#}
    if len(body) == 1:
        found = match_param(body, 0)
        if found is None:
            return None
        return ParameterDescriptor(ParamKind.VALUE, (_param_operand(found[0], body),))

    # ${10}
    if is_numeric_string_without_leading_zero(body):
        return ParameterDescriptor(ParamKind.VALUE, ("$" + body,))

    # ${!prefix*}, ${!prefix@}
    if body[0] == "!" and body[-1] in "*@" and match_name(body, 1) == len(body) - 1:
        kind = ParamKind.PREFIX_NAMES if body[-1] == "*" else ParamKind.PREFIX_NAMES_QUOTED
        return ParameterDescriptor(kind, (body[1:-1],))

    # ${#name}, ${#*}
    if body[0] == "#":
        found = match_param(body, 1)
        if found is None or found[1] != len(body):
            return None
        return ParameterDescriptor(ParamKind.LENGTH, (_param_operand(found[0], body[1:]),))

    return _parse_operator_form(body)


def _parse_operator_form(body: str) -> Optional[ParameterDescriptor]:
    start = 0
    indirect = body[0] == "!"
    if indirect:
        if body[1:2] == "!":
            return None
        start = 1

    found = match_param(body, start)
    if found is None:
        return None
    param_type, end = found
    name = _param_operand(param_type, body[start:end])

    if end == len(body):
        return ParameterDescriptor(ParamKind.VALUE, (name,), indirect=indirect)

    op = match_param_op(body, end)
    if op is None:
        return None
    rest = body[end + len(op.value):]

    def value_of() -> ParameterDescriptor:
        return ParameterDescriptor(ParamKind.VALUE, (name,), indirect=indirect)

    if op in _DEFAULT_OPS:
        kind, check_empty = _DEFAULT_OPS[op]
        if not rest and kind in (ParamKind.WITH_DEFAULT, ParamKind.SET_DEFAULT):
            return value_of()
        return ParameterDescriptor(kind, (name, rest), indirect=indirect, check_empty=check_empty)

    if op == ParamOp.SUBSTRING:
        if not rest:
            return value_of()
        fields = [field.strip() for field in rest.split(":")]
        if len(fields) > 2 or not all(is_signed_numeric_string(f) for f in fields):
            return None
        kind = ParamKind.SUBSTRING if len(fields) == 1 else ParamKind.SUBSTRING_LENGTH
        return ParameterDescriptor(kind, (name, *fields), indirect=indirect)

    if op in _REMOVE_OPS:
        if not rest:
            return value_of()
        return ParameterDescriptor(_REMOVE_OPS[op], (name, rest), indirect=indirect)

    if op == ParamOp.SEARCH_REPLACE:
        if not rest:
            return value_of()
        kind = _REPLACE_ANCHORS.get(rest[0])
        if kind is None:
            kind = ParamKind.REPLACE_FIRST
        else:
            rest = rest[1:]
        if not rest:
            return value_of()
        pattern, replacement = _split_replacement(rest)
        return ParameterDescriptor(kind, (name, pattern, replacement), indirect=indirect)

    if op in _CASE_OPS:
        return ParameterDescriptor(_CASE_OPS[op], (name, rest), indirect=indirect)

    if op == ParamOp.TRANSFORM:
        if not rest:
            return value_of()
        if len(rest) != 1 or rest not in _TRANSFORMS:
            return None
        return ParameterDescriptor(_TRANSFORMS[rest], (name,), indirect=indirect)

    return None


def _split_replacement(text: str) -> tuple[str, str]:
    """Split "pattern/string" at the first unescaped '/' outside $ tokens."""
    i = 0
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
        elif c == "/":
            return text[:i], text[i + 1:]
        i += 1
    return text, ""


def parse_brace_sequence(text: str) -> Optional[BraceSequence]:
    """Parse "{lo..hi}" or "{lo..hi..incr}" into a BraceSequence.

    Endpoints are both integers or both single letters. The increment is
    an integer whose sign is ignored; a zero increment counts as 1.
    """
    if len(text) < 2 or text[0] != "{" or text[-1] != "}":
        return None
    body = text[1:-1]
    for c in body:
        if not (is_alpha_char(c) or is_numeric_char(c) or c in ".-"):
            return None

    fields = body.split("..")
    if len(fields) not in (2, 3):
        return None

    increment = 1
    if len(fields) == 3:
        if not _SEQUENCE_NUMBER_RE.fullmatch(fields[2]):
            return None
        increment = abs(int(fields[2])) or 1

    lo, hi = fields[0], fields[1]
    if _SEQUENCE_NUMBER_RE.fullmatch(lo) and _SEQUENCE_NUMBER_RE.fullmatch(hi):
        start, end = int(lo), int(hi)
        width = 0
        if _has_leading_zero(lo) or _has_leading_zero(hi):
            width = max(len(lo), len(hi))
        is_alphabetic = False
    elif len(lo) == 1 and len(hi) == 1 and is_alpha_char(lo) and is_alpha_char(hi):
        start, end = ord(lo), ord(hi)
        width = 0
        is_alphabetic = True
    else:
        return None

    if start > end:
        increment = -increment
    return BraceSequence(is_alphabetic, start, end, increment, width)


def _has_leading_zero(number: str) -> bool:
    digits = number.lstrip("-")
    return len(digits) > 1 and digits[0] == "0"


def parse_brace_pattern(text: str) -> Optional[list[str]]:
    """Split "{a,b,c}" into its comma-separated parts.

    Only commas at the top nesting level split. Escapes, nested braces and
    $ tokens are kept inside their part. Parts may be empty ("{,.bak}"),
    but at least two parts are needed.
    """
    if match_brace_pattern(text, 0) != len(text):
        return None

    parts: list[str] = []
    depth = 0
    part_start = 1
    i = 1
    end = len(text) - 1
    while i < end:
        c = text[i]
        if c == "\\":
            i += 2
            continue
        if c == "$":
            var_end = match_var(text, i)
            if var_end is not None:
                i = var_end
                continue
        elif c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
        elif c == "," and depth == 0:
            parts.append(text[part_start:i])
            part_start = i + 1
        i += 1
    parts.append(text[part_start:end])

    if len(parts) < 2:
        return None
    return parts


def parse_tilde_prefix(text: str) -> Optional[TildePrefix]:
    """Classify a prefix matched by match_tilde_prefix().

    ~+N and ~-N (directory stack entries) and prefixes holding escapes
    are not supported and give None.
    """
    if not text or text[0] != "~":
        return None
    if text == "~":
        return TildePrefix(TildeKind.HOME)
    if text == "~+":
        return TildePrefix(TildeKind.PWD)
    if text == "~-":
        return TildePrefix(TildeKind.OLDPWD)
    username = text[1:]
    if username[0] in "+-" or "\\" in username:
        return None
    return TildePrefix(TildeKind.USERNAME, username)
