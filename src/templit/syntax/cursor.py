"""Immutable cursor infrastructure for type-safe parsing.

Implements the immutable cursor pattern for backtracking parsers.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Line:column tracked incrementally, so every position is O(1)
    - Backtracking is keeping the old cursor: no save/restore discipline

Line Ending Support:
    - LF (\\n) is the only line delimiter. Inside literals CR must be escaped,
      so a raw CR only ever shows up as an ordinary column.

Pattern Reference:
    - Rust nom parser combinator library
    - Haskell Parsec
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from templit.diagnostics import Diagnostic, ErrorKind, ErrorTemplate
from templit.syntax.ast import Position

__all__ = ["Cursor", "ParseFailure", "ParseResult"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Key Design Decisions:
        1. Frozen dataclass - Immutability enforced by Python
        2. Slots - Memory efficiency (a cursor is created per character)
        3. Offset plus line/column - Positions never need a rescan
        4. EOF is a property - Not a return value
        5. current raises - No None handling needed!

    Example:
        >>> cursor = Cursor("hi\\nyou")
        >>> cursor.current
        'h'
        >>> cursor.advance(3).position
        Position(line=2, column=1)
        >>> cursor.pos  # Original unchanged (immutability)
        0
    """

    source: str
    pos: int = 0
    line: int = 1
    column: int = 1

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof(self.pos)
            raise EOFError(diagnostic.message)
        return self.source[self.pos]

    @property
    def position(self) -> Position:
        """Current line and column."""
        return Position(self.line, self.column)

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count characters.

        A newline moves to column 1 of the next line; any other character
        moves one column right. Advancing past EOF stops at EOF.

        Example:
            >>> cursor = Cursor("a\\nb")
            >>> cursor.advance(2)
            Cursor(source='a\\nb', pos=2, line=2, column=1)
        """
        end = min(self.pos + count, len(self.source))
        line, column = self.line, self.column
        for i in range(self.pos, end):
            if self.source[i] == "\n":
                line += 1
                column = 1
            else:
                column += 1
        return Cursor(self.source, end, line, column)

    def rewind_inline(self, count: int) -> "Cursor":
        """Return new cursor moved back by count characters on the same line.

        Used to give back trailing characters a parser consumed but does
        not want to keep. Only valid when no newline lies in between.

        Raises:
            ValueError: If the move crosses a newline or the start of input
        """
        start = self.pos - count
        if count < 0 or start < 0:
            msg = f"Cannot rewind {count} characters from position {self.pos}"
            raise ValueError(msg)
        if "\n" in self.source[start : self.pos]:
            msg = f"Cannot rewind across a line break (from position {self.pos})"
            raise ValueError(msg)
        return Cursor(self.source, start, self.line, self.column - count)

    def read_while(self, predicate: Callable[[str], bool]) -> tuple[str, "Cursor"]:
        """Consume the longest run of characters satisfying predicate.

        Returns:
            (consumed text, cursor after the run)

        Example:
            >>> text, cursor = Cursor("  x").read_while(lambda c: c == " ")
            >>> text, cursor.pos
            ('  ', 2)
        """
        end = self.pos
        while end < len(self.source) and predicate(self.source[end]):
            end += 1
        return self.source[self.pos : end], self.advance(end - self.pos)

    def expect(self, char: str) -> "Cursor | None":
        """Consume character if it matches expected, return None otherwise.

        Example:
            >>> Cursor("hello").expect("h").pos
            1
            >>> Cursor("hello").expect("x") is None
            True
        """
        if not self.is_eof and self.current == char:
            return self.advance()
        return None

    def expect_literal(self, text: str) -> "Cursor | None":
        """Consume text if the source continues with it, return None otherwise.

        Never consumes a partial match.

        Example:
            >>> Cursor("{{x}}").expect_literal("{{").pos
            2
            >>> Cursor("{x}").expect_literal("{{") is None
            True
        """
        if self.source.startswith(text, self.pos):
            return self.advance(len(text))
        return None

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos.

        Keep the cursor from before a parse and slice to the cursor after it
        to get the raw text the parse consumed:

            >>> start = Cursor("a\\\\tb")
            >>> end = start.advance(3)
            >>> start.slice_to(end.pos)
            'a\\\\t'
        """
        return self.source[self.pos : end_pos]


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and new cursor position.

    Type Parameters:
        T: The type of the parsed value

    Pattern:
        Every parser has signature:
            def parse_foo(cursor: Cursor) -> ParseResult[Foo] | ParseFailure:
                ...
                return ParseResult(parsed_value, new_cursor)

    Example:
        >>> cursor = Cursor("hello")
        >>> result = ParseResult("h", cursor.advance())
        >>> result.value
        'h'
        >>> result.cursor.current
        'e'
    """

    value: T
    cursor: Cursor


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """Failed parse attempt.

    Design:
        - recoverable=True: "this alternative does not apply". Callers go on
          with the cursor they held before the attempt (try the next
          alternative, or end a repetition). Never shown to users.
        - recoverable=False: an unambiguous grammar violation. Callers
          return it unchanged so it reaches the top of the parse.

    Example:
        >>> failure = ParseFailure(ErrorKind.INVALID_ESCAPE, Position(1, 2))
        >>> failure.format_error()
        '1:2: Invalid escape sequence'
    """

    kind: ErrorKind
    position: Position
    recoverable: bool = False
    expected: tuple[str, ...] = field(default_factory=tuple)

    def fatal(self) -> "ParseFailure":
        """Same failure, no longer recoverable."""
        return ParseFailure(self.kind, self.position, False, self.expected)

    def format_error(self) -> str:
        """Format error with line:column.

        Example:
            >>> ParseFailure(
            ...     ErrorKind.EXPECTING_LITERAL, Position(2, 4), expected=("}}",)
            ... ).format_error()
            "2:4: Expected '}}'"
        """
        diagnostic = self.to_diagnostic()
        return f"{self.position}: {diagnostic.message}"

    def to_diagnostic(self) -> Diagnostic:
        """Build the user-facing Diagnostic for this failure."""
        return ErrorTemplate.parse_failure(
            self.kind, self.position.line, self.position.column, self.expected
        )
