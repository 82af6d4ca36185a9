"""Tests for brace expansion.

Key areas: comma lists, sequences {1..10}, {a..z}, step sequences
{1..10..2}, nested and adjacent braces, escapes and malformed input.
"""

import pytest

from shellexpand.expansion import expand_braces


class TestBraceExpansionBasic:
    """Basic brace expansion with comma-separated values."""

    def test_simple_list(self):
        assert expand_braces("{a,b,c}") == "a b c"

    def test_with_prefix_and_suffix(self):
        assert expand_braces("a{b,c,d}e") == "abe ace ade"

    def test_file_extension(self):
        assert expand_braces("file.{txt,log,csv}") == "file.txt file.log file.csv"

    def test_empty_part(self):
        """{,.bak} keeps the bare word as the first alternative."""
        assert expand_braces("file{,.bak}") == "file file.bak"

    def test_only_the_word_is_repeated(self):
        assert expand_braces("cp x{a,b}y z") == "cp xay xby z"


class TestBraceExpansionSequences:
    """Numeric and alphabetic sequences."""

    def test_numeric_sequence(self):
        assert expand_braces("{1..5}") == "1 2 3 4 5"

    def test_reverse_numeric(self):
        assert expand_braces("{5..1}") == "5 4 3 2 1"

    def test_alpha_sequence(self):
        assert expand_braces("{a..e}") == "a b c d e"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("ab{a..g..2}de", "abade abcde abede abgde"),
            ("ab{g..a}de", "abgde abfde abede abdde abcde abbde abade"),
            ("ab{1..11..3}de", "ab1de ab4de ab7de ab10de"),
            ("ab{1..11..-3}de", "ab1de ab4de ab7de ab10de"),
        ],
    )
    def test_sequences_with_preamble(self, text, expected):
        assert expand_braces(text) == expected

    def test_descending_with_step(self):
        assert expand_braces("{99..90..2}") == "99 97 95 93 91"

    def test_zero_padded(self):
        assert expand_braces("{08..11}") == "08 09 10 11"

    def test_negative_range(self):
        assert expand_braces("{-2..2}") == "-2 -1 0 1 2"


class TestBraceExpansionNesting:
    """Nested and adjacent braces."""

    def test_cross_product(self):
        assert expand_braces("this is a te{st,ab}{1..3}ing") == (
            "this is a test1ing test2ing test3ing teab1ing teab2ing teab3ing"
        )

    def test_nested_paths(self):
        assert expand_braces("/usr/{ucb/{ex,edit}/tmp1,lib/{ex?.?*,how_ex}/tmp2}") == (
            "/usr/ucb/ex/tmp1 /usr/ucb/edit/tmp1 /usr/lib/ex?.?*/tmp2 /usr/lib/how_ex/tmp2"
        )

    def test_nested_list(self):
        assert expand_braces("{a,{b,c}}") == "a b c"

    def test_several_words(self):
        assert expand_braces("{a,b} {1,2}") == "a b 1 2"


class TestBraceExpansionLiterals:
    """Input that is left as it is."""

    @pytest.mark.parametrize(
        "text",
        [
            "ab{c,d,efg",
            "ab{c}de",
            "{}",
            "\\{PARAM1\\}",
            "\\{a,b\\}",
            "{a..1}",
            "a{..z}",
            "no braces here",
            "",
        ],
    )
    def test_unchanged(self, text):
        assert expand_braces(text) == text

    def test_variable_tokens_are_skipped(self):
        assert expand_braces("${PARAM1:-a,b}") == "${PARAM1:-a,b}"

    def test_variable_token_inside_pattern(self):
        assert expand_braces("{${x},y}") == "${x} y"

    def test_escaped_comma_is_not_a_separator(self):
        assert expand_braces("{a\\,b,c}") == "a\\,b c"
