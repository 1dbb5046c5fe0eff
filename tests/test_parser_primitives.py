"""Tests for syntax.parser.primitives: escapes, hex values, characters."""

from __future__ import annotations

import pytest

from templit.constants import QUOTED_TERMINATORS, UNQUOTED_TERMINATORS
from templit.diagnostics import ErrorKind
from templit.syntax.ast import Position
from templit.syntax.cursor import Cursor, ParseFailure, ParseResult
from templit.syntax.parser.primitives import (
    decode_raw_text,
    is_key_char,
    is_unicode_scalar,
    parse_any_char,
    parse_escape_char,
    parse_hex_digit,
    parse_hex_value,
)

# ============================================================================
# HEX DIGITS
# ============================================================================


class TestHex:
    """Test hex digit and hex value parsing."""

    @pytest.mark.parametrize(
        ("source", "value"), [("0", 0), ("9", 9), ("a", 10), ("F", 15)]
    )
    def test_hex_digit(self, source: str, value: int) -> None:
        """ASCII hex digits in either case are accepted."""
        result = parse_hex_digit(Cursor(source))

        assert isinstance(result, ParseResult)
        assert result.value == value

    @pytest.mark.parametrize("source", ["g", "", "٣"])
    def test_hex_digit_rejects(self, source: str) -> None:
        """Non-ASCII digits and EOF fail recoverably."""
        result = parse_hex_digit(Cursor(source))

        assert isinstance(result, ParseFailure)
        assert result.recoverable
        assert result.kind is ErrorKind.INVALID_HEX_DIGIT

    @pytest.mark.parametrize(
        ("source", "value", "consumed"),
        [("20", 32, 2), ("E9}", 233, 2), ("ffff", 65535, 4), ("0041", 65, 4)],
    )
    def test_hex_value(self, source: str, value: int, consumed: int) -> None:
        """Digits are folded most significant first."""
        result = parse_hex_value(Cursor(source))

        assert isinstance(result, ParseResult)
        assert result.value == value
        assert result.cursor.pos == consumed

    def test_hex_value_needs_a_digit(self) -> None:
        """Zero digits is a fatal failure."""
        result = parse_hex_value(Cursor("}"))

        assert isinstance(result, ParseFailure)
        assert not result.recoverable
        assert result.kind is ErrorKind.INVALID_HEX_DIGIT


class TestUnicodeScalar:
    """Test scalar value classification."""

    @pytest.mark.parametrize("code_point", [0, 0x41, 0xD7FF, 0xE000, 0xFFFF, 0x10FFFF])
    def test_scalars(self, code_point: int) -> None:
        """Non-surrogate code points up to 10FFFF are scalars."""
        assert is_unicode_scalar(code_point)

    @pytest.mark.parametrize("code_point", [-1, 0xD800, 0xDBFF, 0xDC00, 0xDFFF, 0x110000])
    def test_non_scalars(self, code_point: int) -> None:
        """Surrogates and out-of-range values are rejected."""
        assert not is_unicode_scalar(code_point)


# ============================================================================
# ESCAPE SEQUENCES
# ============================================================================


class TestEscapeChar:
    """Test backslash escape decoding."""

    @pytest.mark.parametrize(
        ("source", "decoded"),
        [
            ('\\"', '"'),
            ("\\\\", "\\"),
            ("\\/", "/"),
            ("\\b", "\x08"),
            ("\\f", "\x0c"),
            ("\\n", "\n"),
            ("\\r", "\r"),
            ("\\t", "\t"),
        ],
    )
    def test_simple_escapes(self, source: str, decoded: str) -> None:
        """Every simple escape decodes to its character."""
        result = parse_escape_char(Cursor(source + "x"))

        assert isinstance(result, ParseResult)
        assert result.value == decoded
        assert result.cursor.pos == 2

    @pytest.mark.parametrize(
        ("source", "decoded"),
        [
            ("\\u{20}", " "),
            ("\\u{e9}", "é"),
            ("\\u{E9}", "é"),
            ("\\u{0041}", "A"),
            ("\\u{1F600}", "\U0001f600"),
            ("\\u{10FFFF}", "\U0010ffff"),
            ("\\u{0}", "\x00"),
        ],
    )
    def test_unicode_escapes(self, source: str, decoded: str) -> None:
        """\\u{HEX} decodes any Unicode scalar value."""
        result = parse_escape_char(Cursor(source))

        assert isinstance(result, ParseResult)
        assert result.value == decoded
        assert result.cursor.pos == len(source)

    def test_not_a_backslash(self) -> None:
        """Anything but a backslash is a recoverable failure."""
        result = parse_escape_char(Cursor("n"))

        assert isinstance(result, ParseFailure)
        assert result.recoverable
        assert result.kind is ErrorKind.EXPECTING_BACKSLASH
        assert result.position == Position(1, 1)

    @pytest.mark.parametrize("source", ["\\l", "\\x41", "\\'", "\\U{41}", "\\"])
    def test_invalid_escape(self, source: str) -> None:
        """Unknown escapes and a trailing backslash fail after the backslash."""
        result = parse_escape_char(Cursor(source))

        assert isinstance(result, ParseFailure)
        assert not result.recoverable
        assert result.kind is ErrorKind.INVALID_ESCAPE
        assert result.position == Position(1, 2)

    @pytest.mark.parametrize(
        ("source", "kind", "column"),
        [
            ("\\u20", ErrorKind.EXPECTING_LITERAL, 3),
            ("\\u", ErrorKind.EXPECTING_LITERAL, 3),
            ("\\u{}", ErrorKind.INVALID_HEX_DIGIT, 4),
            ("\\u{xy}", ErrorKind.INVALID_HEX_DIGIT, 4),
            ("\\u{20", ErrorKind.EXPECTING_LITERAL, 6),
            ("\\u{2G}", ErrorKind.EXPECTING_LITERAL, 5),
            ("\\u{D800}", ErrorKind.INVALID_UNICODE_SCALAR, 8),
            ("\\u{DFFF}", ErrorKind.INVALID_UNICODE_SCALAR, 8),
            ("\\u{110000}", ErrorKind.INVALID_UNICODE_SCALAR, 10),
        ],
    )
    def test_malformed_unicode_escape(self, source: str, kind: ErrorKind, column: int) -> None:
        """Malformed \\u escapes are fatal at the offending position."""
        result = parse_escape_char(Cursor(source))

        assert isinstance(result, ParseFailure)
        assert not result.recoverable
        assert result.kind is kind
        assert result.position == Position(1, column)

    def test_missing_brace_reports_expected_token(self) -> None:
        """The missing brace is named in the failure."""
        result = parse_escape_char(Cursor("\\u{20"))

        assert isinstance(result, ParseFailure)
        assert result.expected == ("}",)


# ============================================================================
# SINGLE CHARACTERS
# ============================================================================


class TestAnyChar:
    """Test the context-dependent character classifier."""

    def test_raw_char(self) -> None:
        """A plain character is its own raw text."""
        result = parse_any_char(UNQUOTED_TERMINATORS, Cursor("ab"))

        assert isinstance(result, ParseResult)
        assert result.value == ("a", "a")
        assert result.cursor.pos == 1

    def test_escape_keeps_raw_text(self) -> None:
        """An escape yields its decoded char and its source text."""
        result = parse_any_char(UNQUOTED_TERMINATORS, Cursor("\\u{23}x"))

        assert isinstance(result, ParseResult)
        assert result.value == ("#", "\\u{23}")
        assert result.cursor.pos == 6

    def test_terminator_rejected(self) -> None:
        """A raw terminator is a recoverable failure."""
        result = parse_any_char(UNQUOTED_TERMINATORS, Cursor("#"))

        assert isinstance(result, ParseFailure)
        assert result.recoverable
        assert result.kind is ErrorKind.EXPECTING_CHAR

    def test_terminators_depend_on_context(self) -> None:
        """'#' is only a terminator unquoted, '"' only quoted."""
        assert isinstance(parse_any_char(QUOTED_TERMINATORS, Cursor("#")), ParseResult)
        assert isinstance(parse_any_char(UNQUOTED_TERMINATORS, Cursor('"')), ParseResult)
        assert isinstance(parse_any_char(QUOTED_TERMINATORS, Cursor('"')), ParseFailure)

    @pytest.mark.parametrize("ch", ["\x08", "\n", "\x0c", "\r", "\t"])
    def test_control_chars_must_be_escaped(self, ch: str) -> None:
        """Control characters are never accepted raw."""
        result = parse_any_char(frozenset(), Cursor(ch))

        assert isinstance(result, ParseFailure)
        assert result.recoverable

    def test_eof(self) -> None:
        """EOF is a recoverable failure."""
        result = parse_any_char(frozenset(), Cursor(""))

        assert isinstance(result, ParseFailure)
        assert result.recoverable

    def test_bad_escape_is_fatal(self) -> None:
        """Escape errors are passed through as fatal."""
        result = parse_any_char(frozenset(), Cursor("\\q"))

        assert isinstance(result, ParseFailure)
        assert not result.recoverable
        assert result.kind is ErrorKind.INVALID_ESCAPE


class TestKeyChar:
    """Test the unquoted key character class."""

    @pytest.mark.parametrize("ch", ["a", "Z", "0", "_", "-", ".", "é", "日"])
    def test_accepted(self, ch: str) -> None:
        """Alphanumerics and '_', '-', '.' are key characters."""
        assert is_key_char(ch)

    @pytest.mark.parametrize("ch", [" ", ":", "#", '"', "{", "\\", "/"])
    def test_rejected(self, ch: str) -> None:
        """Separators and punctuation end an unquoted key."""
        assert not is_key_char(ch)


class TestDecodeRawText:
    """Test decoding of stored raw text."""

    def test_decode(self) -> None:
        """Escapes are decoded, other characters kept."""
        assert decode_raw_text("a\\u{20}b\\t#\"") == "a b\t#\""

    def test_empty(self) -> None:
        """Empty raw text decodes to empty text."""
        assert decode_raw_text("") == ""

    @pytest.mark.parametrize("raw", ["\\q", "a\tb", "\\u{D800}", "x\\"])
    def test_invalid(self, raw: str) -> None:
        """Invalid raw text raises ValueError."""
        with pytest.raises(ValueError):  # noqa: PT011
            decode_raw_text(raw)
