"""Generic parser combinators.

Higher-order helpers shared by every grammar rule. A rule is any function
``(Cursor) -> ParseResult[T] | ParseFailure``.

Backtracking:
    Cursors are immutable, so "snapshot before an attempt" is simply the
    cursor held by the caller. On a recoverable failure the combinators
    continue from that cursor; a fatal failure is returned unchanged and
    nothing after it is attempted.
"""

from collections.abc import Callable, Sequence

from templit.diagnostics import ErrorKind
from templit.syntax.cursor import Cursor, ParseFailure, ParseResult

__all__ = [
    "Rule",
    "choice",
    "literal",
    "one_or_more",
    "try_literal",
    "zero_or_more",
]

type Rule[T] = Callable[[Cursor], ParseResult[T] | ParseFailure]


def literal(text: str, cursor: Cursor) -> ParseResult[None] | ParseFailure:
    """Consume text or fail fatally.

    Use where the grammar is already committed and the token is mandatory.
    """
    new_cursor = cursor.expect_literal(text)
    if new_cursor is None:
        return ParseFailure(ErrorKind.EXPECTING_LITERAL, cursor.position, expected=(text,))
    return ParseResult(None, new_cursor)


def try_literal(text: str, cursor: Cursor) -> ParseResult[None] | ParseFailure:
    """Consume text or fail recoverably, consuming nothing."""
    new_cursor = cursor.expect_literal(text)
    if new_cursor is None:
        return ParseFailure(
            ErrorKind.EXPECTING_LITERAL, cursor.position, recoverable=True, expected=(text,)
        )
    return ParseResult(None, new_cursor)


def zero_or_more[T](rule: Rule[T], cursor: Cursor) -> ParseResult[list[T]] | ParseFailure:
    """Apply rule until it fails recoverably.

    Returns:
        All values, with the cursor from before the failed attempt, or
        the first fatal failure
    """
    values: list[T] = []
    while True:
        result = rule(cursor)
        if isinstance(result, ParseFailure):
            if result.recoverable:
                return ParseResult(values, cursor)
            return result
        values.append(result.value)
        cursor = result.cursor


def one_or_more[T](rule: Rule[T], cursor: Cursor) -> ParseResult[list[T]] | ParseFailure:
    """Apply rule at least once, then until it fails recoverably.

    A failure of the first attempt is fatal: callers use one_or_more where
    the grammar has committed to the repetition.
    """
    first = rule(cursor)
    if isinstance(first, ParseFailure):
        return first.fatal()

    rest = zero_or_more(rule, first.cursor)
    if isinstance(rest, ParseFailure):
        return rest
    return ParseResult([first.value, *rest.value], rest.cursor)


def choice[T](rules: Sequence[Rule[T]], cursor: Cursor) -> ParseResult[T] | ParseFailure:
    """Return the result of the first rule that does not fail recoverably.

    Every rule starts from the same cursor. If all of them fail recoverably
    the last failure is returned.
    """
    if not rules:
        msg = "choice() requires at least one rule"
        raise ValueError(msg)

    result = rules[0](cursor)
    for rule in rules[1:]:
        if not isinstance(result, ParseFailure) or not result.recoverable:
            return result
        result = rule(cursor)
    return result
