"""Core literal parser implementation.

This module provides the TemplateParser class, the public entry point for
parsing single literals (values and keys) into AST structures defined in
:mod:`templit.syntax.ast`.

Architecture:
    The parser uses an immutable cursor pattern (:class:`~templit.syntax.cursor.Cursor`)
    to traverse source text. Each grammar rule (in :mod:`~templit.syntax.parser.strings`,
    :mod:`~templit.syntax.parser.primitives`, etc.) returns either a
    :class:`~templit.syntax.cursor.ParseResult` containing the parsed node and
    updated cursor, or a :class:`~templit.syntax.cursor.ParseFailure`.

    TemplateParser turns the single failure of a parse into a raised
    :class:`~templit.diagnostics.TemplateSyntaxError`. Parsing stops where the
    grammar stops; the span of the result tells the caller how much of the
    source was consumed.

Security:
    Includes configurable input size limit to prevent DoS attacks via
    unbounded memory allocation from extremely large inputs.

See Also:
    - :mod:`templit.syntax.ast` - All AST node type definitions
    - :mod:`templit.syntax.parser.strings` - Grammar rules for literals and keys
"""

import logging

from templit.constants import MAX_SOURCE_SIZE
from templit.diagnostics import ErrorTemplate, TemplateSyntaxError
from templit.syntax.ast import EncodedString, Template
from templit.syntax.cursor import Cursor, ParseFailure, ParseResult
from templit.syntax.parser.combinators import Rule, choice
from templit.syntax.parser.strings import (
    parse_key,
    parse_quoted_string,
    parse_quoted_template,
    parse_unquoted_key,
    parse_unquoted_template,
)

__all__ = ["TemplateParser"]

logger = logging.getLogger(__name__)


def _parse_any_template(cursor: Cursor) -> ParseResult[Template] | ParseFailure:
    return choice([parse_quoted_template, parse_unquoted_template], cursor)


class TemplateParser:
    """Literal parser using immutable cursor pattern.

    Design:
    - Immutable cursor makes backtracking free (keep the old cursor)
    - Recoverable failures steer between grammar alternatives
    - The first fatal failure aborts the parse with exactly one error

    Security:
    - Configurable max_source_size prevents DoS via large inputs
    - Default limit: 1 MB

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 1 MB)
    """

    __slots__ = ("_max_source_size",)

    def __init__(self, *, max_source_size: int | None = None) -> None:
        """Initialize parser with optional size limit.

        Args:
            max_source_size: Maximum source size in characters (default: 1 MB).
                            Set to 0 to disable size limit (not recommended).
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    def parse_template(self, source: str) -> Template:
        """Parse a value: quoted if it starts with '"', unquoted otherwise.

        Example:
            >>> TemplateParser().parse_template('"a # b"').elements[0].decoded
            'a # b'
            >>> TemplateParser().parse_template("a # b").elements[0].decoded
            'a'
        """
        return self._run(_parse_any_template, source, "template")

    def parse_unquoted_template(self, source: str) -> Template:
        """Parse an unquoted value up to a comment, line end or EOF.

        Raises:
            ValueError: If source exceeds max_source_size
            TemplateSyntaxError: On an invalid escape or interpolation
        """
        return self._run(parse_unquoted_template, source, "unquoted template")

    def parse_quoted_template(self, source: str) -> Template:
        """Parse a double-quoted value.

        Raises:
            ValueError: If source exceeds max_source_size
            TemplateSyntaxError: If source is not a valid quoted value
        """
        return self._run(parse_quoted_template, source, "quoted template")

    def parse_key(self, source: str) -> EncodedString:
        """Parse a mapping key, unquoted or quoted.

        Raises:
            ValueError: If source exceeds max_source_size
            TemplateSyntaxError: If source does not start with a valid key
        """
        return self._run(parse_key, source, "key")

    def parse_unquoted_key(self, source: str) -> EncodedString:
        """Parse an unquoted mapping key.

        Raises:
            ValueError: If source exceeds max_source_size
            TemplateSyntaxError: If source does not start with a valid key
        """
        return self._run(parse_unquoted_key, source, "unquoted key")

    def parse_quoted_string(self, source: str) -> str:
        """Parse a plain quoted string. Escapes are NOT decoded.

        Raises:
            ValueError: If source exceeds max_source_size
            TemplateSyntaxError: If source is not a quoted string
        """
        return self._run(parse_quoted_string, source, "quoted string")

    def _run[T](self, rule: Rule[T], source: str, what: str) -> T:
        """Run a grammar rule on source and unwrap its outcome.

        Raises:
            ValueError: If source exceeds max_source_size (DoS prevention)
            TemplateSyntaxError: If the rule fails, fatally or not
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            logger.warning(
                "Rejected %s source of %d characters (limit %d)",
                what,
                len(source),
                self._max_source_size,
            )
            raise ValueError(ErrorTemplate.source_too_large(len(source), self._max_source_size))

        logger.debug("Parsing %s (%d characters)", what, len(source))
        result = rule(Cursor(source))

        if isinstance(result, ParseFailure):
            logger.debug("Failed to parse %s: %s", what, result.format_error())
            raise TemplateSyntaxError(result.to_diagnostic(), failure=result, source=source)

        logger.debug(
            "Parsed %s: consumed %d of %d characters", what, result.cursor.pos, len(source)
        )
        return result.value
