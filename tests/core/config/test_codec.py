"""Tests for the scalar value codec.

Covers:
- Encoding of every scalar kind and inline lists
- Decoding rules (quotes, comments, literals, numbers, lists, bare words)
- Strings containing structure characters survive encode/decode
- Tolerant decoding of malformed tokens
"""

import math

import pytest

from contextlingo.core.config.codec import (
    decode_scalar,
    encode_scalar,
    split_top_level,
    strip_comment,
    unescape,
)
from contextlingo.core.config.constants import MAX_NESTING_DEPTH

# =============================================================================
# encode_scalar
# =============================================================================


class TestEncodeScalar:
    """Tests for encode_scalar."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "null"),
            (True, "true"),
            (False, "false"),
            (0, "0"),
            (-42, "-42"),
            (1.5, "1.5"),
            (100.0, "100.0"),
            ("plain", '"plain"'),
            ("", '""'),
            ([], "[]"),
            ({}, "{}"),
        ],
    )
    def test_scalars(self, value: object, expected: str) -> None:
        """Each scalar kind has a single canonical token."""
        assert encode_scalar(value) == expected

    def test_string_is_escaped_double_quoted(self) -> None:
        """Quotes and newlines are escaped inside the token."""
        assert encode_scalar('say "hi"\nbye') == '"say \\"hi\\"\\nbye"'

    def test_non_ascii_kept_readable(self) -> None:
        """Non-ASCII text is written as-is, not as \\u escapes."""
        assert encode_scalar("单词") == '"单词"'

    def test_inline_list(self) -> None:
        """Lists of scalars are written on one line."""
        assert encode_scalar(["want", "learning", 3, True]) == '["want", "learning", 3, true]'

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite_float_is_null(self, value: float) -> None:
        """inf and nan have no token of their own."""
        assert encode_scalar(value) == "null"

    def test_nested_list_needs_block(self) -> None:
        """Lists containing containers cannot be inline."""
        with pytest.raises(TypeError):
            encode_scalar([{"id": "a"}])

    def test_mapping_needs_block(self) -> None:
        """Non-empty mappings cannot be inline."""
        with pytest.raises(TypeError):
            encode_scalar({"a": 1})

    def test_unicode_line_breaks_are_escaped(self) -> None:
        """Characters that splitlines treats as line ends never appear raw."""
        token = encode_scalar("a\u2028b\u2029c\x85d")
        assert token == '"a\\u2028b\\u2029c\\u0085d"'
        assert len(token.splitlines()) == 1


# =============================================================================
# decode_scalar
# =============================================================================


class TestDecodeScalar:
    """Tests for decode_scalar."""

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("true", True),
            ("false", False),
            ("null", None),
            ("[]", []),
            ("{}", {}),
            ("7", 7),
            ("-3", -3),
            ("0.25", 0.25),
            ("1e3", 1000.0),
            ('"text"', "text"),
            ("'text'", "text"),
            ("bare words", "bare words"),
        ],
    )
    def test_rules(self, token: str, expected: object) -> None:
        """Literals, numbers and strings decode to their values."""
        assert decode_scalar(token) == expected

    def test_literals_are_case_sensitive(self) -> None:
        """Only lowercase literals are recognised."""
        assert decode_scalar("True") == "True"
        assert decode_scalar("NULL") == "NULL"

    def test_int_and_float_are_distinguished(self) -> None:
        """Integers stay ints, decimals become floats."""
        assert isinstance(decode_scalar("90"), int)
        assert isinstance(decode_scalar("1.0"), float)

    def test_surrounding_whitespace_ignored(self) -> None:
        """Tokens are stripped before decoding."""
        assert decode_scalar("   true  ") is True

    def test_trailing_comment_stripped(self) -> None:
        """An unquoted # starts a comment."""
        assert decode_scalar("300 # milliseconds") == 300
        assert decode_scalar('"bottom"  # where it shows') == "bottom"

    def test_hash_inside_quotes_kept(self) -> None:
        """Hex colors are not truncated as comments."""
        assert decode_scalar('"#FFAA00"') == "#FFAA00"
        assert decode_scalar("'#FFAA00'") == "#FFAA00"

    def test_inline_list(self) -> None:
        """Bracketed lists decode element by element."""
        assert decode_scalar('["want", learning, 3, "a, b"]') == ["want", "learning", 3, "a, b"]

    def test_inline_list_drops_empty_elements(self) -> None:
        """Empty elements from doubled or trailing commas disappear."""
        assert decode_scalar("[a,, b,]") == ["a", "b"]

    def test_single_quoted_escapes(self) -> None:
        """Single-quoted strings accept the same backslash escapes."""
        assert decode_scalar("'it\\'s'") == "it's"

    def test_unicode_escapes(self) -> None:
        """\\u escapes, including surrogate pairs, are resolved."""
        assert decode_scalar('"caf\\u00e9"') == "café"
        assert decode_scalar("'\\ud83d\\ude00'") == "\U0001f600"

    def test_apostrophe_in_bare_word(self) -> None:
        """An apostrophe inside a word does not open a quote."""
        assert decode_scalar("don't # comment") == "don't"

    def test_unterminated_quote_kept_raw(self) -> None:
        """Malformed tokens come back as their raw text."""
        assert decode_scalar('"unterminated') == '"unterminated'

    def test_url_is_a_string(self) -> None:
        """Colons without a following space are plain characters."""
        assert decode_scalar("http://127.0.0.1:8765") == "http://127.0.0.1:8765"

    def test_deeply_nested_list_stops_at_limit(self) -> None:
        """Nesting past the limit is kept as raw text instead of recursing."""
        levels = 3000
        value = decode_scalar("[" * levels + "]" * levels)
        for _ in range(MAX_NESTING_DEPTH):
            assert isinstance(value, list)
            assert len(value) == 1
            value = value[0]
        rest = levels - MAX_NESTING_DEPTH
        assert value == "[" * rest + "]" * rest


# =============================================================================
# String safety
# =============================================================================


class TestStringSafety:
    """Strings with structure characters survive encode then decode."""

    @pytest.mark.parametrize(
        "text",
        [
            'He said "hi" # not a comment\nline2',
            "key: value",
            "'single' and \"double\"",
            "back\\slash",
            "tab\there",
            "#",
            "- dash",
            "[not, a, list]",
            "trailing space ",
            "line\u2028separator",
            "next\x85line",
            "para\u2029graph",
        ],
    )
    def test_decode_inverts_encode(self, text: str) -> None:
        """decode_scalar(encode_scalar(s)) == s."""
        assert decode_scalar(encode_scalar(text)) == text


# =============================================================================
# Helpers
# =============================================================================


class TestHelpers:
    """Tests for strip_comment, split_top_level and unescape."""

    def test_strip_comment_outside_quotes(self) -> None:
        """The first unquoted # ends the token."""
        assert strip_comment('"a # b" # c') == '"a # b"'

    def test_strip_comment_without_comment(self) -> None:
        """Text without a comment is returned unchanged."""
        assert strip_comment("plain") == "plain"

    def test_strip_comment_unterminated_quote(self) -> None:
        """An unterminated quote swallows the rest of the text."""
        assert strip_comment('"open # still quoted') == '"open # still quoted'

    def test_split_top_level_respects_nesting(self) -> None:
        """Commas inside quotes or brackets do not split."""
        assert split_top_level('a, "b, c", [d, e]') == ["a", '"b, c"', "[d, e]"]

    def test_unescape_keeps_unknown_escapes(self) -> None:
        """Unknown escapes stay verbatim."""
        assert unescape("a\\qb") == "a\\qb"
        assert unescape("line\\nnext") == "line\nnext"
