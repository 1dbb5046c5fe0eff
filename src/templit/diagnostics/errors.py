"""templit exception hierarchy with structured diagnostics.

All exceptions may carry a Diagnostic object for rich error information.

Python 3.13+. Zero external dependencies.
"""

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from templit.syntax.cursor import ParseFailure


class TemplitError(Exception):
    """Base exception for all templit errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize TemplitError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class TemplateSyntaxError(TemplitError):
    """Literal or template syntax error.

    Raised once per failed parse. There is no error recovery: the first
    fatal failure (or a top-level recoverable one) aborts the parse.

    Attributes:
        failure: The ParseFailure that aborted the parse
        source: The complete source text that was being parsed
    """

    def __init__(
        self,
        diagnostic: Diagnostic,
        *,
        failure: "ParseFailure",
        source: str,
    ) -> None:
        super().__init__(diagnostic)
        self.failure = failure
        self.source = source

    def format_with_context(self, context_lines: int = 2) -> str:
        """Format error with source context and pointer.

        Example:
            >>> try:
            ...     TemplateParser().parse_quoted_template('"abc')
            ... except TemplateSyntaxError as e:
            ...     print(e.format_with_context())
            1:5: Unterminated quoted literal
            <BLANKLINE>
               1 | "abc
                 |     ^
        """
        line = self.failure.position.line
        col = self.failure.position.column
        lines = self.source.split("\n")

        result_lines = [self.failure.format_error(), ""]

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1])

            if i == line:
                pointer = " " * (len(line_num_str) - 2) + "| " + " " * (col - 1) + "^"
                result_lines.append(pointer)

        return "\n".join(result_lines)
