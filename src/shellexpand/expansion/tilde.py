"""Tilde expansion: ~, ~+, ~- and ~user at the start of a word."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..parser.lexer import match_tilde_prefix, match_var
from ..parser.parser import parse_tilde_prefix
from ..parser.types import TildeKind

if TYPE_CHECKING:
    from ..types import ExpansionCallbacks

_PREFIX_VARS = {
    TildeKind.HOME: "HOME",
    TildeKind.PWD: "PWD",
    TildeKind.OLDPWD: "OLDPWD",
}


def expand_tilde(text: str, callbacks: ExpansionCallbacks) -> str:
    """Expand a leading ~prefix in each space-separated word of ``text``.

    If the prefix refers to an unset variable or an unknown user, the
    word is left untouched.
    """
    buf = []
    at_word_start = True
    i = 0
    while i < len(text):
        c = text[i]
        if c == "~" and at_word_start:
            end = match_tilde_prefix(text, i)
            replacement = _lookup_prefix(text[i:end], callbacks)
            if replacement is not None:
                buf.append(replacement)
                i = end
                at_word_start = False
                continue
        if c == "\\":
            buf.append(text[i:i + 2])
            i += 2
            at_word_start = False
            continue
        if c == "$":
            end = match_var(text, i)
            if end is not None:
                buf.append(text[i:end])
                i = end
                at_word_start = False
                continue
        buf.append(c)
        at_word_start = c == " "
        i += 1
    return "".join(buf)


def _lookup_prefix(prefix: str, callbacks: ExpansionCallbacks) -> Optional[str]:
    tilde = parse_tilde_prefix(prefix)
    if tilde is None:
        return None
    if tilde.kind == TildeKind.USERNAME:
        path, found = callbacks.home_dir(tilde.username)
    else:
        path, found = callbacks.lookup_var(_PREFIX_VARS[tilde.kind])
    if not found:
        return None
    return path
