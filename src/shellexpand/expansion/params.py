"""Parameter expansion: $name and the ${...} operator forms.

Expansion is a single left-to-right pass. Every $ token is parsed into a
ParameterDescriptor and replaced by the dispatcher's result; text that is
not a valid expansion is copied through untouched. Replacement text is
never rescanned.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterator, Optional

from ..errors import ParameterAssignmentError, ShellExpandError
from ..parser.lexer import is_shell_special_string, match_name, match_var
from ..parser.parser import parse_parameter
from ..parser.types import ParamKind, ParameterDescriptor
from .tilde import expand_tilde

if TYPE_CHECKING:
    from ..types import ExpansionCallbacks

logger = logging.getLogger(__name__)

DEFAULT_WRITE_ERROR = "parameter null or not set"

POSITIONAL_LISTS = ("$*", "$@")

UNEVALUATED_KINDS = (
    ParamKind.DESCRIBE_FLAGS,
    ParamKind.DECLARE,
    ParamKind.ESCAPE,
    ParamKind.PROMPT,
    ParamKind.QUOTE,
)


class PositionalParams:
    """Lazy, restartable view of the positional parameters $1..$N.

    N comes from looking up "$#" each time the view is iterated.
    """

    def __init__(self, callbacks: ExpansionCallbacks):
        self._callbacks = callbacks

    def __len__(self) -> int:
        count, found = self._callbacks.lookup_var("$#")
        if found and count.isdigit():
            return int(count)
        return 0

    def __iter__(self) -> Iterator[str]:
        for index in range(1, len(self) + 1):
            value, _ = self._callbacks.lookup_var(f"${index}")
            yield value


def expand_params(text: str, callbacks: ExpansionCallbacks) -> str:
    """Replace every $name and ${...} in ``text``."""
    buf = []
    i = 0
    while i < len(text):
        c = text[i]
        if c == "\\":
            buf.append(text[i:i + 2])
            i += 2
            continue
        if c == "$":
            end = match_var(text, i)
            if end is not None:
                token = text[i:end]
                replacement = _expand_token(token, callbacks)
                buf.append(token if replacement is None else replacement)
                i = end
                continue
        buf.append(c)
        i += 1
    return "".join(buf)


def expand_word(text: str, callbacks: ExpansionCallbacks) -> str:
    """Expand an operator's operand: tilde, then parameters. No braces."""
    return expand_params(expand_tilde(text, callbacks), callbacks)


def _expand_token(token: str, callbacks: ExpansionCallbacks) -> Optional[str]:
    descriptor = parse_parameter(token)
    if descriptor is None:
        logger.debug("leaving %r untouched: not a valid parameter expansion", token)
        return None
    result = expand_parameter(descriptor, callbacks)
    if result is None:
        logger.debug("leaving %r untouched: %s is not evaluated", token, descriptor.kind.value)
    return result


def expand_parameter(
    descriptor: ParameterDescriptor, callbacks: ExpansionCallbacks
) -> Optional[str]:
    """Evaluate one parsed parameter expansion.

    Returns the replacement text, or None for the ${var@op} transforms,
    which are recognised but not evaluated.

    Raises:
        ParameterAssignmentError: ${var:=word} could not assign.
        GlobPatternError: a pattern operand is not a valid glob.
    """
    kind = descriptor.kind
    operands = descriptor.operands

    if kind in UNEVALUATED_KINDS:
        return None

    if kind in (ParamKind.PREFIX_NAMES, ParamKind.PREFIX_NAMES_QUOTED):
        return " ".join(sorted(callbacks.var_names(operands[0])))

    name = descriptor.name
    if descriptor.indirect:
        name = _resolve_indirect(name, callbacks)

    if kind == ParamKind.VALUE:
        return _apply(name, callbacks, lambda value: value)

    elif kind == ParamKind.LENGTH:
        if name in POSITIONAL_LISTS:
            return str(len(PositionalParams(callbacks)))
        value, _ = _lookup(name, callbacks)
        return str(len(value))

    elif kind in (
        ParamKind.WITH_DEFAULT,
        ParamKind.SET_DEFAULT,
        ParamKind.WRITE_ERROR,
        ParamKind.ALTERNATIVE,
    ):
        return _expand_default(descriptor, name, callbacks)

    elif kind in (ParamKind.SUBSTRING, ParamKind.SUBSTRING_LENGTH):
        offset = int(operands[1])
        length = int(operands[2]) if kind == ParamKind.SUBSTRING_LENGTH else None
        if name in POSITIONAL_LISTS:
            zero, _ = callbacks.lookup_var("$0")
            items = [zero, *PositionalParams(callbacks)]
            bounds = _substring_bounds(len(items), offset, length)
            if bounds is None:
                return ""
            return _join(items[bounds[0]:bounds[1]])
        value, _ = _lookup(name, callbacks)
        bounds = _substring_bounds(len(value), offset, length)
        if bounds is None:
            return ""
        return value[bounds[0]:bounds[1]]

    elif kind == ParamKind.REMOVE_PREFIX_SHORTEST:
        glob = callbacks.compile_glob(expand_word(operands[1], callbacks))
        return _apply(name, callbacks, lambda value: _cut_prefix(value, glob.shortest_prefix(value)))

    elif kind == ParamKind.REMOVE_PREFIX_LONGEST:
        glob = callbacks.compile_glob(expand_word(operands[1], callbacks))
        return _apply(name, callbacks, lambda value: _cut_prefix(value, glob.longest_prefix(value)))

    elif kind == ParamKind.REMOVE_SUFFIX_SHORTEST:
        glob = callbacks.compile_glob(expand_word(operands[1], callbacks))
        return _apply(name, callbacks, lambda value: _cut_suffix(value, glob.shortest_suffix(value)))

    elif kind == ParamKind.REMOVE_SUFFIX_LONGEST:
        glob = callbacks.compile_glob(expand_word(operands[1], callbacks))
        return _apply(name, callbacks, lambda value: _cut_suffix(value, glob.longest_suffix(value)))

    elif kind in (
        ParamKind.REPLACE_FIRST,
        ParamKind.REPLACE_ALL,
        ParamKind.REPLACE_PREFIX,
        ParamKind.REPLACE_SUFFIX,
    ):
        pattern = expand_word(operands[1], callbacks)
        replacement = expand_word(operands[2], callbacks)
        if not pattern:
            return _apply(name, callbacks, lambda value: value)
        glob = callbacks.compile_glob(pattern)
        return _apply(name, callbacks, lambda value: _replace(kind, value, glob, replacement))

    elif kind in (
        ParamKind.UPPERCASE_FIRST,
        ParamKind.UPPERCASE_ALL,
        ParamKind.LOWERCASE_FIRST,
        ParamKind.LOWERCASE_ALL,
    ):
        pattern = expand_word(operands[1], callbacks)
        glob = callbacks.compile_glob(pattern) if pattern else None
        if kind in (ParamKind.UPPERCASE_FIRST, ParamKind.UPPERCASE_ALL):
            convert = str.upper
        else:
            convert = str.lower
        first_only = kind in (ParamKind.UPPERCASE_FIRST, ParamKind.LOWERCASE_FIRST)

        def convert_case(value: str) -> str:
            chars = list(value)
            for index, char in enumerate(chars):
                if glob is None or glob.match(char):
                    chars[index] = convert(char)
                if first_only:
                    break
            return "".join(chars)

        return _apply(name, callbacks, convert_case)

    raise ShellExpandError(f"unsupported parameter expansion: {kind.value}")


def _resolve_indirect(name: str, callbacks: ExpansionCallbacks) -> Optional[str]:
    """Follow ${!name}: the value of name is the parameter to expand.

    Returns None if the value is empty or not a parameter name.
    """
    target, found = _lookup(name, callbacks)
    if not found or not target:
        return None
    if is_shell_special_string(target):
        return "$" + target
    if match_name(target, 0) == len(target):
        return target
    logger.debug("indirect expansion of %s: %r is not a parameter name", name, target)
    return None


def _lookup(name: Optional[str], callbacks: ExpansionCallbacks) -> tuple[str, bool]:
    if name is None:
        return "", False
    if name in POSITIONAL_LISTS:
        params = PositionalParams(callbacks)
        return _join(params), len(params) > 0
    return callbacks.lookup_var(name)


def _join(values) -> str:
    return " ".join(value for value in values if value)


def _apply(name: Optional[str], callbacks: ExpansionCallbacks, operation: Callable[[str], str]) -> str:
    """Apply an operation to a value, or to each positional parameter.

    For $* and $@ the per-element results are joined with single spaces.
    Empty results are dropped, as unquoted word splitting would drop them.
    """
    if name in POSITIONAL_LISTS:
        return _join(operation(value) for value in PositionalParams(callbacks))
    value, _ = _lookup(name, callbacks)
    return operation(value)


def _expand_default(
    descriptor: ParameterDescriptor, name: Optional[str], callbacks: ExpansionCallbacks
) -> str:
    kind = descriptor.kind
    value, found = _lookup(name, callbacks)
    use_word = not found or (descriptor.check_empty and value == "")
    word = descriptor.operands[1]

    if kind == ParamKind.WITH_DEFAULT:
        return expand_word(word, callbacks) if use_word else value

    if kind == ParamKind.ALTERNATIVE:
        return "" if use_word else expand_word(word, callbacks)

    if kind == ParamKind.WRITE_ERROR:
        if not use_word:
            return value
        message = expand_word(word, callbacks) or DEFAULT_WRITE_ERROR
        label = name if name is not None else descriptor.name
        logger.debug("%s: substituting error message", label)
        if label.startswith("$"):
            label = label[1:]
        return f"{label}: {message}"

    # SET_DEFAULT
    if not use_word:
        return value
    if name is None:
        raise ParameterAssignmentError(descriptor.name, "invalid indirect expansion")
    word = expand_word(word, callbacks)
    logger.debug("assigning default value to %s", name)
    callbacks.assign(name, word)
    value, _ = _lookup(name, callbacks)
    return value


def _substring_bounds(size: int, offset: int, length: Optional[int]) -> Optional[tuple[int, int]]:
    """Clamp ${var:offset[:length]} to [start, end) within ``size``.

    Negative offsets count back from the end, and a negative length
    stops that many characters short of the end. Returns None when the
    range is empty or lies outside the value.
    """
    if offset < 0:
        offset += size
        if offset < 0:
            return None
    if offset > size:
        return None
    if length is None:
        end = size
    elif length < 0:
        end = size + length
        if end < offset:
            return None
    else:
        end = min(size, offset + length)
    return offset, end


def _cut_prefix(value: str, end: Optional[int]) -> str:
    if end is None:
        return value
    return value[end:]


def _cut_suffix(value: str, start: Optional[int]) -> str:
    if start is None:
        return value
    return value[:start]


def _replace(kind: ParamKind, value: str, glob, replacement: str) -> str:
    if kind == ParamKind.REPLACE_PREFIX:
        end = glob.longest_prefix(value)
        if end is None:
            return value
        return replacement + value[end:]

    if kind == ParamKind.REPLACE_SUFFIX:
        start = glob.longest_suffix(value)
        if start is None:
            return value
        return value[:start] + replacement

    if kind == ParamKind.REPLACE_FIRST:
        found = glob.search(value)
        if found is None:
            return value
        start, end = found
        return value[:start] + replacement + value[end:]

    # REPLACE_ALL: non-overlapping, left to right; empty matches are skipped
    parts = []
    pos = 0
    while pos < len(value):
        found = glob.search(value, pos)
        if found is None:
            break
        start, end = found
        if end == start:
            parts.append(value[pos:start + 1])
            pos = start + 1
            continue
        parts.append(value[pos:start])
        parts.append(replacement)
        pos = end
    parts.append(value[pos:])
    return "".join(parts)
