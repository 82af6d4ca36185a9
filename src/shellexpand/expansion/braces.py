"""Brace expansion: a{b,c}d and {lo..hi[..incr]}."""

from __future__ import annotations

import logging
from typing import Optional

from ..parser.lexer import match_brace_pattern, match_var
from ..parser.parser import parse_brace_pattern, parse_brace_sequence

logger = logging.getLogger(__name__)


def expand_braces(text: str) -> str:
    """Expand every brace pattern and sequence in ``text``.

    Each expansion replaces the whole word holding the braces (from the
    previous space to the next one) with one space-separated word per
    alternative:

        "a{b,c,d}e"    -> "abe ace ade"
        "x{1..3}"      -> "x1 x2 x3"
        "a{b,c}{1,2}"  -> "ab1 ab2 ac1 ac2"

    Escaped braces, braces inside $ tokens and malformed or single-part
    patterns are left as they are.
    """
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
        elif c == "{":
            end = match_brace_pattern(text, i)
            if end is not None:
                alternatives = _expand_brace(text[i:end])
                if alternatives is not None:
                    word_start = text.rfind(" ", 0, i) + 1
                    word_end = text.find(" ", end)
                    if word_end == -1:
                        word_end = len(text)
                    preamble = text[word_start:i]
                    postscript = text[end:word_end]
                    logger.debug("brace %r expands to %d words", text[i:end], len(alternatives))
                    words = " ".join(preamble + alt + postscript for alt in alternatives)
                    text = text[:word_start] + words + text[word_end:]
                    # carry on from the first alternative, so braces left in the
                    # new words are expanded too
                    i = word_start + len(preamble)
                    continue
        i += 1
    return text


def _expand_brace(brace: str) -> Optional[list[str]]:
    sequence = parse_brace_sequence(brace)
    if sequence is not None:
        return list(sequence.values())
    return parse_brace_pattern(brace)
