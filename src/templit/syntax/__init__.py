"""Literal syntax parsing package.

Provides the parser, AST definitions and serialization for string and
template literals.

Python 3.13+.
"""

from .ast import (
    ASTNode,
    EncodedString,
    Expression,
    Interpolation,
    Position,
    SourceSpan,
    Template,
    TemplateElement,
    TextElement,
    Variable,
    Whitespace,
)
from .cursor import Cursor, ParseFailure, ParseResult
from .parser import TemplateParser
from .serializer import SerializationValidationError, TemplateSerializer, serialize

__all__ = [
    "ASTNode",
    "Cursor",
    "EncodedString",
    "Expression",
    "Interpolation",
    "ParseFailure",
    "ParseResult",
    "Position",
    "SerializationValidationError",
    "SourceSpan",
    "Template",
    "TemplateElement",
    "TemplateParser",
    "TemplateSerializer",
    "TextElement",
    "Variable",
    "Whitespace",
    "parse_key",
    "parse_template",
    "serialize",
]


def parse_template(source: str) -> Template:
    """Parse a quoted or unquoted value into a Template.

    Convenience function for TemplateParser.parse_template().

    Example:
        >>> from templit.syntax import parse_template
        >>> template = parse_template("hello {{name}} # greeting")
        >>> template.variables
        ('name',)
    """
    parser = TemplateParser()
    return parser.parse_template(source)


def parse_key(source: str) -> EncodedString:
    """Parse a quoted or unquoted mapping key into an EncodedString.

    Convenience function for TemplateParser.parse_key().

    Example:
        >>> from templit.syntax import parse_key
        >>> parse_key("user\\\\u{2d}id").decoded
        'user-id'
    """
    parser = TemplateParser()
    return parser.parse_key(source)
