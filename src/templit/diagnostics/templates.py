"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, ErrorKind

# Characters accepted after a backslash, in table order.
_ESCAPE_CHARS: tuple[str, ...] = ('"', "\\", "/", "b", "f", "n", "r", "t", "u")


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Parsers only record an ErrorKind and a position; the wording lives here so
    that it is testable and consistent.
    """

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Unexpected end of input.

        Args:
            position: The offset where EOF was encountered

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected EOF at position {position}"
        return Diagnostic(
            code=ErrorKind.UNEXPECTED_EOF,
            message=msg,
            hint="Check for an unclosed quote or interpolation",
        )

    @staticmethod
    def source_too_large(size: int, limit: int) -> str:
        """Message for sources rejected before parsing."""
        return (
            f"Source size ({size:,} characters) exceeds maximum "
            f"({limit:,} characters). "
            "Configure max_source_size in TemplateParser constructor to increase limit."
        )

    @staticmethod
    def parse_failure(  # noqa: PLR0911
        kind: ErrorKind,
        line: int,
        column: int,
        expected: tuple[str, ...] = (),
    ) -> Diagnostic:
        """Diagnostic for a parse failure of the given kind.

        Args:
            kind: Error kind recorded by the failing parser
            line: Line of the failure (1-indexed)
            column: Column of the failure (1-indexed)
            expected: Tokens the parser expected (optional)

        Returns:
            Diagnostic with message and hint for kind
        """
        match kind:
            case ErrorKind.EXPECTING_BACKSLASH:
                return Diagnostic(kind, "Expected '\\'", line, column, expected=("\\",))
            case ErrorKind.INVALID_ESCAPE:
                return Diagnostic(
                    kind,
                    "Invalid escape sequence",
                    line,
                    column,
                    hint="Escape a literal backslash as '\\\\'",
                    expected=_ESCAPE_CHARS,
                )
            case ErrorKind.INVALID_UNICODE_SCALAR:
                return Diagnostic(
                    kind,
                    "Invalid Unicode scalar value in '\\u{...}' escape",
                    line,
                    column,
                    hint="Use a code point up to 10FFFF outside the surrogate range D800-DFFF",
                )
            case ErrorKind.INVALID_HEX_DIGIT:
                return Diagnostic(
                    kind,
                    "Expected hexadecimal digit",
                    line,
                    column,
                    expected=("0-9", "a-f", "A-F"),
                )
            case ErrorKind.EXPECTING_CHAR:
                return Diagnostic(kind, "Expected a literal character", line, column)
            case ErrorKind.EXPECTING_STRING:
                return Diagnostic(kind, "Expected a string", line, column)
            case ErrorKind.EXPECTING_KEY_STRING:
                return Diagnostic(
                    kind,
                    "Expected a key string",
                    line,
                    column,
                    hint="Unquoted keys accept letters, digits, '_', '-', '.' and escapes",
                )
            case ErrorKind.UNTERMINATED_QUOTED_LITERAL:
                return Diagnostic(
                    kind,
                    "Unterminated quoted literal",
                    line,
                    column,
                    hint="Close the literal with '\"' on the same line",
                    expected=('"',),
                )
            case ErrorKind.INVALID_VARIABLE:
                return Diagnostic(
                    kind,
                    "Expected a variable name in interpolation",
                    line,
                    column,
                    hint="Write interpolations as '{{ name }}'",
                )
            case ErrorKind.EXPECTING_LITERAL:
                token = " or ".join(f"'{e}'" for e in expected) or "token"
                return Diagnostic(kind, f"Expected {token}", line, column, expected=expected)
            case ErrorKind.UNEXPECTED_EOF:
                return Diagnostic(kind, "Unexpected end of input", line, column)
