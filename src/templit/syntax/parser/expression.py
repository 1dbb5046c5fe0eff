"""Interpolation expression parsing.

Grammar:
    interpolation ::= "{{" blank_inline? variable_name blank_inline? "}}"
    blank_inline  ::= [ \\t]+
    variable_name ::= (alphanumeric | "_" | "-")+

Once "{{" has been read the interpolation is committed: a missing variable
name or closing "}}" is fatal, and the template parsers never fall back to
reading "{{" as literal text.
"""

from templit.constants import INLINE_WHITESPACE
from templit.diagnostics import ErrorKind
from templit.syntax.ast import Expression, Interpolation, SourceSpan, Variable, Whitespace
from templit.syntax.cursor import Cursor, ParseFailure, ParseResult
from templit.syntax.parser.combinators import literal, try_literal

__all__ = ["is_variable_char", "parse_expression", "parse_variable", "parse_whitespace"]


def is_variable_char(ch: str) -> bool:
    """Check if character may appear in a variable name."""
    return ch.isalnum() or ch in ("_", "-")


def parse_whitespace(cursor: Cursor) -> ParseResult[Whitespace]:
    """Parse optional inline whitespace (spaces and tabs). Never fails."""
    value, new_cursor = cursor.read_while(lambda ch: ch in INLINE_WHITESPACE)
    span = SourceSpan(start=cursor.position, end=new_cursor.position)
    return ParseResult(Whitespace(value=value, span=span), new_cursor)


def parse_variable(cursor: Cursor) -> ParseResult[Variable] | ParseFailure:
    """Parse variable name.

    Returns:
        ParseResult(Variable) on success, fatal INVALID_VARIABLE if empty
    """
    name, new_cursor = cursor.read_while(is_variable_char)
    if not name:
        return ParseFailure(ErrorKind.INVALID_VARIABLE, cursor.position)
    span = SourceSpan(start=cursor.position, end=new_cursor.position)
    return ParseResult(Variable(name=name, span=span), new_cursor)


def parse_expression(cursor: Cursor) -> ParseResult[Interpolation] | ParseFailure:
    """Parse interpolation: {{ name }}

    Examples:
        {{name}}      → Interpolation(Expression("", name, ""))
        {{ name }}    → Interpolation(Expression(" ", name, " "))
        {0}           → recoverable failure (not an interpolation)
        {{ 1 + 2 }}   → fatal EXPECTING_LITERAL '}}' at '+'

    Args:
        cursor: Current position in source

    Returns:
        ParseResult(Interpolation, new_cursor) on success.
        Recoverable EXPECTING_LITERAL if the source does not start with "{{".
    """
    opening = try_literal("{{", cursor)
    if isinstance(opening, ParseFailure):
        return opening

    space0 = parse_whitespace(opening.cursor)
    variable = parse_variable(space0.cursor)
    if isinstance(variable, ParseFailure):
        return variable
    space1 = parse_whitespace(variable.cursor)

    closing = literal("}}", space1.cursor)
    if isinstance(closing, ParseFailure):
        return closing

    expression = Expression(space0=space0.value, variable=variable.value, space1=space1.value)
    return ParseResult(Interpolation(expression=expression), closing.cursor)
