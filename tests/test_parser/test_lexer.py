"""Tests for the character predicates and cursor scanners."""

import pytest

from shellexpand.errors import MismatchedBraceError, MismatchedClosingBraceError
from shellexpand.parser.lexer import (
    is_numeric_string_without_leading_zero,
    is_shell_special_string,
    is_signed_numeric_string,
    match_brace_pattern,
    match_braces,
    match_param,
    match_param_op,
    match_tilde_prefix,
    match_var,
)
from shellexpand.parser.types import BracePair, ParamOp, ParamType


class TestNumericPredicates:
    """Numeric string checks used by the descriptor parser."""

    @pytest.mark.parametrize("text", ["0", "1", "123", "-1", "-0", "-123"])
    def test_signed_numeric_accepts(self, text):
        assert is_signed_numeric_string(text)

    @pytest.mark.parametrize("text", ["", "-", "0123", "123abc", "abc", "1-2", "--1"])
    def test_signed_numeric_rejects(self, text):
        assert not is_signed_numeric_string(text)

    def test_without_leading_zero(self):
        assert is_numeric_string_without_leading_zero("10")
        assert not is_numeric_string_without_leading_zero("0")
        assert not is_numeric_string_without_leading_zero("01")
        assert not is_numeric_string_without_leading_zero("")

    def test_shell_special_string(self):
        for name in ["#", "*", "@", "?", "$", "!", "-", "0", "1", "9", "12"]:
            assert is_shell_special_string(name), name
        assert not is_shell_special_string("HOME")
        assert not is_shell_special_string("012")


class TestMatchVar:
    """match_var returns the exclusive end of a $ token."""

    def test_braced_name(self):
        assert match_var("${this} is a test") == 7

    def test_nested_braces(self):
        assert match_var("${HOME:${TMPDIR:-/var/tmp}} a test") == 27

    def test_unbraced_name(self):
        assert match_var("$HOME a test") == 5

    def test_escaped_closing_brace(self):
        """An escaped '}' does not close the token."""
        assert match_var("${HOME\\}}") == 9

    def test_unterminated_brace(self):
        assert match_var("${HOME") is None

    def test_single_digit_positional(self):
        """$10 is $1 followed by a literal 0."""
        assert match_var("$10") == 2

    def test_special_params(self):
        for token in ["$#", "$*", "$@", "$?", "$$", "$!", "$-", "$0"]:
            assert match_var(token) == 2, token

    def test_start_offset(self):
        assert match_var("abc $HOME/x", 4) == 9

    @pytest.mark.parametrize("text", ["$", "$(ls)", "$'x'", "$ x", "HOME"])
    def test_no_match(self, text):
        assert match_var(text) is None


class TestMatchParam:
    def test_name(self):
        assert match_param("foo_1:-x", 0) == (ParamType.NAME, 5)

    def test_positional(self):
        assert match_param("10:-x", 0) == (ParamType.POSITIONAL, 2)

    def test_special(self):
        assert match_param("#", 0) == (ParamType.SPECIAL, 1)

    def test_no_match(self):
        assert match_param("%x", 0) is None


class TestMatchParamOp:
    """Operators are matched longest spelling first."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            (":-x", ParamOp.USE_DEFAULT),
            (":=x", ParamOp.ASSIGN_DEFAULT),
            (":?x", ParamOp.WRITE_ERROR),
            (":+x", ParamOp.USE_ALTERNATIVE),
            (":3", ParamOp.SUBSTRING),
            ("-x", ParamOp.UNSET_USE_DEFAULT),
            ("##x", ParamOp.REMOVE_LONGEST_PREFIX),
            ("#x", ParamOp.REMOVE_SHORTEST_PREFIX),
            ("%%x", ParamOp.REMOVE_LONGEST_SUFFIX),
            ("%x", ParamOp.REMOVE_SHORTEST_SUFFIX),
            ("/a/b", ParamOp.SEARCH_REPLACE),
            ("^^", ParamOp.UPPERCASE_ALL),
            ("^", ParamOp.UPPERCASE_FIRST),
            (",,", ParamOp.LOWERCASE_ALL),
            (",", ParamOp.LOWERCASE_FIRST),
            ("@Q", ParamOp.TRANSFORM),
        ],
    )
    def test_operators(self, text, expected):
        assert match_param_op(text, 0) == expected

    def test_unknown_operator(self):
        assert match_param_op("&x", 0) is None


class TestMatchBracePattern:
    def test_simple(self):
        assert match_brace_pattern("{a,b}c", 0) == 5

    def test_nested(self):
        assert match_brace_pattern("{a,{b,c}}d", 0) == 9

    def test_escaped_brace(self):
        assert match_brace_pattern("{\\{b,c,d\\}}", 0) == 11

    def test_skips_variable_tokens(self):
        """The braces of ${x} are not counted."""
        assert match_brace_pattern("{a,${x}}", 0) == 8
        assert match_brace_pattern("{a,${x}", 0) is None

    def test_unterminated(self):
        assert match_brace_pattern("ab{c,d,efg", 2) is None

    def test_not_a_brace(self):
        assert match_brace_pattern("abc", 0) is None


class TestMatchBraces:
    """The standalone matcher lists every pair or raises."""

    def test_inner_pairs_first(self):
        assert match_braces("{a,{b,c}}") == [BracePair(3, 7), BracePair(0, 8)]

    def test_adjacent_pairs(self):
        assert match_braces("{a}{b}") == [BracePair(0, 2), BracePair(3, 5)]

    def test_no_braces(self):
        assert match_braces("plain text") == []

    def test_escaped_braces_ignored(self):
        assert match_braces("\\{a\\}") == []

    def test_unclosed_brace(self):
        with pytest.raises(MismatchedBraceError) as exc_info:
            match_braces("ab{c{d}")
        assert exc_info.value.offset == 2

    def test_unopened_brace(self):
        with pytest.raises(MismatchedClosingBraceError) as exc_info:
            match_braces("ab}c")
        assert exc_info.value.offset == 2


class TestMatchTildePrefix:
    def test_home(self):
        assert match_tilde_prefix("~/path/to/folder") == 1

    def test_username(self):
        assert match_tilde_prefix("~stuart/path") == 7

    def test_whole_string(self):
        assert match_tilde_prefix("~stuart") == 7

    def test_ends_at_space(self):
        assert match_tilde_prefix("~+ rest") == 2

    def test_escaped_slash(self):
        """An escaped '/' does not end the prefix."""
        assert match_tilde_prefix("~\\/path/to/folder") == 7

    def test_not_a_tilde(self):
        assert match_tilde_prefix("/path") is None
