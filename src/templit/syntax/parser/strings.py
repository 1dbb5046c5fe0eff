"""Grammar rules for string literals, templates and keys.

This module provides the parsing rules for:
- Unquoted templates (bare values up to a comment, line end or EOF)
- Quoted templates ("..." values)
- Unquoted and quoted keys (mapping keys, no interpolation)
- Plain quoted strings (no escape decoding)

Templates are sequences of text elements and {{ name }} interpolations.
Text elements keep both the decoded text and the raw source text.

Brace Handling:
    A single '{' is literal text ("{0}" is text). Two consecutive raw '{'
    open an interpolation. The text scanner holds back a '{' until it sees
    the next character, and stops in front of a second '{' so the
    interpolation parser can take over. An escaped brace (\\u{7b}) is
    never part of an opener.

Trailing Whitespace:
    An unquoted value followed by " # comment" must not include the
    separating spaces. The text scanner has no lookahead for a comment
    marker, so trailing spaces are given back after the fact.
"""

from collections.abc import Set
from functools import partial

from templit.constants import (
    EMPTY_UNQUOTED_STARTS,
    INLINE_WHITESPACE,
    QUOTED_TERMINATORS,
    UNQUOTED_TERMINATORS,
)
from templit.diagnostics import ErrorKind
from templit.syntax.ast import (
    EncodedString,
    SourceSpan,
    Template,
    TemplateElement,
    TextElement,
)
from templit.syntax.cursor import Cursor, ParseFailure, ParseResult
from templit.syntax.parser.combinators import choice, try_literal, zero_or_more
from templit.syntax.parser.expression import parse_expression
from templit.syntax.parser.primitives import is_key_char, parse_any_char, parse_escape_char

__all__ = [
    "parse_key",
    "parse_quoted_key",
    "parse_quoted_string",
    "parse_quoted_template",
    "parse_template_element",
    "parse_template_text",
    "parse_unquoted_key",
    "parse_unquoted_template",
]

_TRAILING_WHITESPACE: str = "".join(sorted(INLINE_WHITESPACE))


# =============================================================================
# Template Elements
# =============================================================================


def parse_template_text(
    terminators: Set[str], cursor: Cursor
) -> ParseResult[TextElement] | ParseFailure:
    """Parse the longest run of literal characters as a TextElement.

    Examples (no terminators):
        name\\u{23}\\u{20}{{   → TextElement("name# ", "name\\u{23}\\u{20}"), stops at "{{"
        {0}                  → TextElement("{0}", "{0}")
        a{                   → TextElement("a", "a"), the lone "{" stays unconsumed

    Args:
        terminators: Raw characters that end the text in this context
        cursor: Current position in source

    Returns:
        ParseResult(TextElement, cursor after the last emitted character).
        Recoverable EXPECTING_STRING if no character was emitted.
    """
    start = cursor
    end = cursor
    decoded: list[str] = []
    raw: list[str] = []
    bracket_pending = False

    while True:
        result = parse_any_char(terminators, cursor)
        if isinstance(result, ParseFailure):
            if result.recoverable:
                break
            return result

        ch, text = result.value
        cursor = result.cursor

        if text == "{":
            if bracket_pending:
                break  # "{{": leave the second brace for the interpolation
            bracket_pending = True
            continue

        if bracket_pending:
            decoded.append("{")
            raw.append("{")
            bracket_pending = False
        decoded.append(ch)
        raw.append(text)
        end = cursor

    if not decoded:
        return ParseFailure(ErrorKind.EXPECTING_STRING, start.position, recoverable=True)
    return ParseResult(TextElement(decoded="".join(decoded), raw="".join(raw)), end)


def parse_template_element(
    terminators: Set[str], cursor: Cursor
) -> ParseResult[TemplateElement] | ParseFailure:
    """Parse an interpolation, or else a run of literal text.

    A fatal failure of the interpolation (e.g. "{{ }}") is returned as is:
    text parsing is only tried when the source does not start with "{{".
    """
    expression_result = parse_expression(cursor)
    if isinstance(expression_result, ParseFailure) and expression_result.recoverable:
        return parse_template_text(terminators, cursor)
    return expression_result


def _trim_trailing_whitespace(
    elements: list[TemplateElement], cursor: Cursor
) -> tuple[list[TemplateElement], Cursor]:
    """Give back trailing spaces of the last text element.

    Trailing raw whitespace is always unescaped, so the same number of
    characters is removed from raw and decoded text, and the cursor moves
    back by that many columns on the current line.

    Returns:
        (elements, cursor) with the whitespace removed; a text element that
        was only whitespace is dropped
    """
    if not elements:
        return elements, cursor
    last = elements[-1]
    if not TextElement.guard(last):
        return elements, cursor

    trailing = len(last.raw) - len(last.raw.rstrip(_TRAILING_WHITESPACE))
    if trailing == 0:
        return elements, cursor

    cursor = cursor.rewind_inline(trailing)
    decoded = last.decoded[:-trailing]
    if not decoded:
        return elements[:-1], cursor
    trimmed = TextElement(decoded=decoded, raw=last.raw[:-trailing])
    return [*elements[:-1], trimmed], cursor


# =============================================================================
# Templates
# =============================================================================


def parse_unquoted_template(cursor: Cursor) -> ParseResult[Template] | ParseFailure:
    """Parse unquoted template: a bare value up to '#', a line end or EOF.

    Examples:
        hello # comment        → [Text("hello")], cursor before " # comment"
        hello\\u{20}{{name}}!   → [Text("hello "), Interpolation(name), Text("!")]
        " hi" / "" / "# x"     → empty template, nothing consumed

    Args:
        cursor: Current position in source

    Returns:
        ParseResult(Template, new_cursor) on success, or a fatal failure.
        Never fails recoverably: an unquoted value may be empty.
    """
    start = cursor.position

    if cursor.is_eof or cursor.current in EMPTY_UNQUOTED_STARTS:
        empty = Template(quoted=False, elements=(), span=SourceSpan(start=start, end=start))
        return ParseResult(empty, cursor)

    result = zero_or_more(partial(parse_template_element, UNQUOTED_TERMINATORS), cursor)
    if isinstance(result, ParseFailure):
        return result

    elements, cursor = _trim_trailing_whitespace(result.value, result.cursor)
    template = Template(
        quoted=False,
        elements=tuple(elements),
        span=SourceSpan(start=start, end=cursor.position),
    )
    return ParseResult(template, cursor)


def parse_quoted_template(cursor: Cursor) -> ParseResult[Template] | ParseFailure:
    """Parse quoted template: "text {{ name }} text"

    Everything between the quotes is significant, including '#' and
    trailing spaces.

    Examples:
        ""        → empty quoted template spanning both quotes
        "a#"      → [Text("a#")]
        "{0}"     → [Text("{0}")]
        "abc      → fatal UNTERMINATED_QUOTED_LITERAL at EOF

    Args:
        cursor: Current position in source

    Returns:
        ParseResult(Template, new_cursor) on success.
        Recoverable EXPECTING_LITERAL if the source does not start with '"'.
    """
    start = cursor.position

    opening = try_literal('"', cursor)
    if isinstance(opening, ParseFailure):
        return opening
    cursor = opening.cursor

    closing = cursor.expect('"')
    if closing is not None:
        empty = Template(quoted=True, elements=(), span=SourceSpan(start, closing.position))
        return ParseResult(empty, closing)

    result = zero_or_more(partial(parse_template_element, QUOTED_TERMINATORS), cursor)
    if isinstance(result, ParseFailure):
        return result
    cursor = result.cursor

    closing = cursor.expect('"')
    if closing is None:
        return ParseFailure(ErrorKind.UNTERMINATED_QUOTED_LITERAL, cursor.position)

    template = Template(
        quoted=True,
        elements=tuple(result.value),
        span=SourceSpan(start=start, end=closing.position),
    )
    return ParseResult(template, closing)


# =============================================================================
# Keys
# =============================================================================


def parse_unquoted_key(cursor: Cursor) -> ParseResult[EncodedString] | ParseFailure:
    """Parse unquoted key: (escape | alphanumeric | '_' | '-' | '.')+

    Examples:
        key                    → EncodedString("key")
        key\\u{20}\\u{3a} :      → EncodedString("key :"), stops before " :"
        ""                     → recoverable EXPECTING_KEY_STRING
        \\l                     → fatal INVALID_ESCAPE

    Args:
        cursor: Current position in source

    Returns:
        ParseResult(EncodedString, new_cursor) on success.
        Recoverable EXPECTING_KEY_STRING if no character was accepted, so
        the caller may try a quoted key instead.
    """
    start = cursor
    decoded: list[str] = []

    while True:
        escape_result = parse_escape_char(cursor)
        if not isinstance(escape_result, ParseFailure):
            decoded.append(escape_result.value)
            cursor = escape_result.cursor
            continue
        if not escape_result.recoverable:
            return escape_result

        if cursor.is_eof or not is_key_char(cursor.current):
            break
        decoded.append(cursor.current)
        cursor = cursor.advance()

    if not decoded:
        return ParseFailure(ErrorKind.EXPECTING_KEY_STRING, start.position, recoverable=True)

    key = EncodedString(
        quoted=False,
        decoded="".join(decoded),
        raw=start.slice_to(cursor.pos),
        span=SourceSpan(start=start.position, end=cursor.position),
    )
    return ParseResult(key, cursor)


def parse_quoted_key(cursor: Cursor) -> ParseResult[EncodedString] | ParseFailure:
    """Parse quoted key: "text"

    Escapes are decoded; '{{' has no special meaning since keys never
    interpolate. The raw text excludes the quotes.

    Returns:
        ParseResult(EncodedString, new_cursor) on success.
        Recoverable EXPECTING_LITERAL if the source does not start with '"'.
        Fatal UNTERMINATED_QUOTED_LITERAL if the closing quote is missing.
    """
    start = cursor.position

    opening = try_literal('"', cursor)
    if isinstance(opening, ParseFailure):
        return opening
    content_start = cursor = opening.cursor

    decoded: list[str] = []
    while True:
        result = parse_any_char(QUOTED_TERMINATORS, cursor)
        if isinstance(result, ParseFailure):
            if result.recoverable:
                break
            return result
        decoded.append(result.value[0])
        cursor = result.cursor

    closing = cursor.expect('"')
    if closing is None:
        return ParseFailure(ErrorKind.UNTERMINATED_QUOTED_LITERAL, cursor.position)

    key = EncodedString(
        quoted=True,
        decoded="".join(decoded),
        raw=content_start.slice_to(cursor.pos),
        span=SourceSpan(start=start, end=closing.position),
    )
    return ParseResult(key, closing)


def parse_key(cursor: Cursor) -> ParseResult[EncodedString] | ParseFailure:
    """Parse a mapping key, unquoted or quoted.

    Returns:
        ParseResult(EncodedString, new_cursor) on success.
        Recoverable EXPECTING_KEY_STRING if neither form applies.
    """
    result = choice([parse_unquoted_key, parse_quoted_key], cursor)
    if isinstance(result, ParseFailure) and result.recoverable:
        return ParseFailure(ErrorKind.EXPECTING_KEY_STRING, cursor.position, recoverable=True)
    return result


# =============================================================================
# Plain Strings
# =============================================================================


def parse_quoted_string(cursor: Cursor) -> ParseResult[str] | ParseFailure:
    """Parse plain quoted string: "text", WITHOUT escape decoding.

    Unlike parse_quoted_template and parse_quoted_key, backslashes are kept
    as is and the string ends at the first '"', escaped or not. Existing
    inputs depend on this, so it stays different from the decoding parsers.

    Examples:
        ""         → ""
        "Hello"    → "Hello"
        "a\\nb"     → "a\\\\nb" (backslash and 'n' kept)

    Returns:
        ParseResult(str, new_cursor) on success.
        Recoverable EXPECTING_LITERAL if the source does not start with '"'.
        Fatal UNTERMINATED_QUOTED_LITERAL if the closing quote is missing.
    """
    opening = try_literal('"', cursor)
    if isinstance(opening, ParseFailure):
        return opening

    value, cursor = opening.cursor.read_while(lambda ch: ch != '"')
    closing = cursor.expect('"')
    if closing is None:
        return ParseFailure(ErrorKind.UNTERMINATED_QUOTED_LITERAL, cursor.position)
    return ParseResult(value, closing)
