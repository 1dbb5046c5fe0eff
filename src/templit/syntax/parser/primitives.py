"""Primitive parsing utilities for literal parsing.

This module provides low-level parsers for hex digits, backslash escape
sequences (including \\u{HEX} code point escapes) and single literal
characters.

Supported escape sequences:
    \\" → "
    \\\\ → \\
    \\/ → /
    \\b → U+0008 (backspace)
    \\f → U+000C (form feed)
    \\n → newline
    \\r → carriage return
    \\t → tab
    \\u{HEX} → Unicode scalar value (1 or more hex digits)

Error Context:
    Functions return a ParseFailure instead of raising. Failures before the
    backslash are recoverable ("not an escape"); once the backslash has been
    consumed every failure is fatal.
"""

from collections.abc import Set

from templit.constants import (
    HEX_DIGITS,
    KEY_PUNCTUATION,
    MAX_UNICODE_CODE_POINT,
    RAW_FORBIDDEN_CHARS,
    SIMPLE_ESCAPES,
    SURROGATE_RANGE_END,
    SURROGATE_RANGE_START,
)
from templit.diagnostics import ErrorKind
from templit.syntax.cursor import Cursor, ParseFailure, ParseResult
from templit.syntax.parser.combinators import literal, one_or_more

__all__ = [
    "decode_raw_text",
    "is_key_char",
    "is_unicode_scalar",
    "parse_any_char",
    "parse_escape_char",
    "parse_hex_digit",
    "parse_hex_value",
    "parse_unicode_escape",
]


def is_key_char(ch: str) -> bool:
    """Check if character may appear unescaped in an unquoted key.

    Keys accept alphanumerics (Unicode-aware) plus '_', '-' and '.'.
    """
    return ch.isalnum() or ch in KEY_PUNCTUATION


def is_unicode_scalar(code_point: int) -> bool:
    """Check if code point is a Unicode scalar value (not a surrogate)."""
    if code_point < 0 or code_point > MAX_UNICODE_CODE_POINT:
        return False
    return not SURROGATE_RANGE_START <= code_point <= SURROGATE_RANGE_END


def parse_hex_digit(cursor: Cursor) -> ParseResult[int] | ParseFailure:
    """Parse a single ASCII hex digit and return its value."""
    if cursor.is_eof or cursor.current not in HEX_DIGITS:
        return ParseFailure(ErrorKind.INVALID_HEX_DIGIT, cursor.position, recoverable=True)
    return ParseResult(int(cursor.current, 16), cursor.advance())


def parse_hex_value(cursor: Cursor) -> ParseResult[int] | ParseFailure:
    """Parse one or more hex digits, most significant first.

    Examples:
        20  → 32
        E9  → 233
        x   → fatal INVALID_HEX_DIGIT
    """
    result = one_or_more(parse_hex_digit, cursor)
    if isinstance(result, ParseFailure):
        return result

    value = 0
    for digit in result.value:
        value = value * 16 + digit
    return ParseResult(value, result.cursor)


def parse_unicode_escape(cursor: Cursor) -> ParseResult[str] | ParseFailure:
    """Parse the {HEX} part of a \\u{HEX} escape.

    The backslash and 'u' have already been consumed, so every failure
    here is fatal.

    Args:
        cursor: Position right after "\\u"

    Returns:
        ParseResult with the decoded character
    """
    opening = literal("{", cursor)
    if isinstance(opening, ParseFailure):
        return opening

    hex_result = parse_hex_value(opening.cursor)
    if isinstance(hex_result, ParseFailure):
        return hex_result

    cursor = hex_result.cursor
    if not is_unicode_scalar(hex_result.value):
        return ParseFailure(ErrorKind.INVALID_UNICODE_SCALAR, cursor.position)

    closing = literal("}", cursor)
    if isinstance(closing, ParseFailure):
        return closing
    return ParseResult(chr(hex_result.value), closing.cursor)


def parse_escape_char(cursor: Cursor) -> ParseResult[str] | ParseFailure:
    """Parse a backslash escape sequence and return the decoded character.

    Args:
        cursor: Current position in source

    Returns:
        ParseResult with the decoded character on success.
        Recoverable EXPECTING_BACKSLASH if cursor is not at a backslash.
        Fatal INVALID_ESCAPE (at the character after the backslash) for an
        unknown escape or EOF after the backslash.
    """
    after_backslash = cursor.expect("\\")
    if after_backslash is None:
        return ParseFailure(ErrorKind.EXPECTING_BACKSLASH, cursor.position, recoverable=True)

    if after_backslash.is_eof:
        return ParseFailure(ErrorKind.INVALID_ESCAPE, after_backslash.position)

    escape_ch = after_backslash.current
    if escape_ch in SIMPLE_ESCAPES:
        return ParseResult(SIMPLE_ESCAPES[escape_ch], after_backslash.advance())
    if escape_ch == "u":
        return parse_unicode_escape(after_backslash.advance())

    return ParseFailure(ErrorKind.INVALID_ESCAPE, after_backslash.position)


def parse_any_char(
    terminators: Set[str], cursor: Cursor
) -> ParseResult[tuple[str, str]] | ParseFailure:
    """Parse one literal character, escaped or raw.

    Escape sequences are always accepted, even when they decode to a
    terminator ("\\u{23}" yields '#' in an unquoted value). Raw characters
    are rejected when they are in terminators or must always be escaped
    (backslash, backspace, newline, form feed, carriage return, tab).

    Args:
        terminators: Characters that end the literal in this context
        cursor: Current position in source

    Returns:
        ParseResult with (decoded character, raw source text) on success.
        Recoverable EXPECTING_CHAR if no character is acceptable here.
        Fatal failures from the escape decoder are returned unchanged.
    """
    escape_result = parse_escape_char(cursor)
    if not isinstance(escape_result, ParseFailure):
        raw = cursor.slice_to(escape_result.cursor.pos)
        return ParseResult((escape_result.value, raw), escape_result.cursor)
    if not escape_result.recoverable:
        return escape_result

    if cursor.is_eof:
        return ParseFailure(ErrorKind.EXPECTING_CHAR, cursor.position, recoverable=True)

    ch = cursor.current
    if ch in terminators or ch in RAW_FORBIDDEN_CHARS:
        return ParseFailure(ErrorKind.EXPECTING_CHAR, cursor.position, recoverable=True)
    return ParseResult((ch, ch), cursor.advance())


def decode_raw_text(raw: str) -> str:
    """Decode the raw source text of a literal run.

    Every character is read with the same rules as parse_any_char (no
    terminators), so for any TextElement produced by the parser,
    decode_raw_text(element.raw) == element.decoded.

    Raises:
        ValueError: If raw contains an invalid escape or a character that
            must be escaped
    """
    cursor = Cursor(raw)
    chars: list[str] = []
    while not cursor.is_eof:
        result = parse_any_char(frozenset(), cursor)
        if isinstance(result, ParseFailure):
            raise ValueError(result.format_error())
        chars.append(result.value[0])
        cursor = result.cursor
    return "".join(chars)
