"""Error kinds and diagnostic data structures.

Defines the error kinds produced by the literal parsers and the
diagnostic record handed to callers.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "ErrorKind",
]


class ErrorKind(Enum):
    """Error kinds with unique identifiers.

    Organized by category:
        1000-1999: Escape sequence errors
        2000-2999: Literal text errors
        3000-3999: Structural errors (tokens, interpolations, input bounds)
    """

    # Escape sequence errors (1000-1999)
    EXPECTING_BACKSLASH = 1001
    INVALID_ESCAPE = 1002
    INVALID_UNICODE_SCALAR = 1003
    INVALID_HEX_DIGIT = 1004

    # Literal text errors (2000-2999)
    EXPECTING_CHAR = 2001
    EXPECTING_STRING = 2002
    EXPECTING_KEY_STRING = 2003
    UNTERMINATED_QUOTED_LITERAL = 2004

    # Structural errors (3000-3999)
    UNEXPECTED_EOF = 3001
    EXPECTING_LITERAL = 3002
    INVALID_VARIABLE = 3003


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    One diagnostic is produced per failed parse. It is meant for both
    humans (format_error) and tools (the plain attributes).

    Attributes:
        code: Error kind
        message: Human-readable error description
        line: Line number (1-indexed), None when not tied to a location
        column: Column number (1-indexed, counted in code points)
        hint: Suggestion for fixing the error
        expected: Tokens the parser expected at this location
    """

    code: ErrorKind
    message: str
    line: int | None = None
    column: int | None = None
    hint: str | None = None
    expected: tuple[str, ...] = ()

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[INVALID_ESCAPE]: Invalid escape sequence
              --> line 1, column 2
              = expected: '"', '\\', '/', 'b', 'f', 'n', 'r', 't', 'u'
              = help: Escape a literal backslash as '\\\\'

        Returns:
            Formatted error message
        """
        parts = [f"error[{self.code.name}]: {self.message}"]

        if self.line is not None and self.column is not None:
            parts.append(f"  --> line {self.line}, column {self.column}")

        if self.expected:
            expected_str = ", ".join(f"'{e}'" for e in self.expected)
            parts.append(f"  = expected: {expected_str}")

        if self.hint:
            parts.append(f"  = help: {self.hint}")

        return "\n".join(parts)
