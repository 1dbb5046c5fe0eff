"""Literal AST (Abstract Syntax Tree) node definitions.

Nodes for templates, their elements, interpolated expressions and encoded
key strings. Every node produced by a successful parse carries the source
span it was parsed from.

Includes type guards as static methods (eliminates circular imports).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Position",
    "SourceSpan",
    # Expressions
    "Whitespace",
    "Variable",
    "Expression",
    # Template structure
    "Template",
    "TextElement",
    "Interpolation",
    "EncodedString",
    # Type aliases
    "TemplateElement",
    "ASTNode",
]

# ============================================================================
# BASE TYPES
# ============================================================================


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Line and column in source text.

    Both are 1-based. Columns count Unicode code points, not bytes.
    Positions compare lexicographically: line first, then column.
    """

    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate position invariants."""
        if self.line < 1:
            msg = f"Position line must be >= 1, got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"Position column must be >= 1, got {self.column}"
            raise ValueError(msg)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source span between two positions.

    Attributes:
        start: Position of the first character (inclusive)
        end: Position after the last character (exclusive)

    Example:
        Source: "hello"
        Template span: SourceSpan(Position(1, 1), Position(1, 6))
    """

    start: Position
    end: Position

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.end < self.start:
            msg = f"SourceSpan end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)

    @property
    def is_empty(self) -> bool:
        """True for a zero-width span."""
        return self.start == self.end


# ============================================================================
# EXPRESSIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Whitespace:
    """Inline whitespace (spaces and tabs) kept for round-tripping."""

    value: str
    span: SourceSpan


@dataclass(frozen=True, slots=True)
class Variable:
    """Variable name: one or more alphanumeric, "_" or "-" characters."""

    name: str
    span: SourceSpan


@dataclass(frozen=True, slots=True)
class Expression:
    """Interpolated expression between '{{' and '}}'.

    Example:
        {{ name }}
        space0=Whitespace(" "), variable=Variable("name"), space1=Whitespace(" ")
    """

    space0: Whitespace
    variable: Variable
    space1: Whitespace


# ============================================================================
# TEMPLATE STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class TextElement:
    """Run of literal text inside a template.

    Attributes:
        decoded: Text with escape sequences decoded (never empty)
        raw: Exact source text the element was parsed from

    Example:
        Source: hello\\u{20}
        TextElement(decoded="hello ", raw="hello\\\\u{20}")
    """

    decoded: str
    raw: str

    def __post_init__(self) -> None:
        """Validate element invariants."""
        if not self.decoded:
            msg = "TextElement decoded text must not be empty"
            raise ValueError(msg)

    @staticmethod
    def guard(element: object) -> TypeIs["TextElement"]:
        """Type guard for TextElement (used in element filtering)."""
        return isinstance(element, TextElement)


@dataclass(frozen=True, slots=True)
class Interpolation:
    """Interpolation of an expression: {{ name }}"""

    expression: Expression

    @staticmethod
    def guard(element: object) -> TypeIs["Interpolation"]:
        """Type guard for Interpolation (used in element filtering)."""
        return isinstance(element, Interpolation)


type TemplateElement = TextElement | Interpolation


@dataclass(frozen=True, slots=True)
class Template:
    """Value mixing literal text with interpolations.

    Examples:
        hello {{name}}          (unquoted, 2 elements)
        "hello {{name}} # x"    (quoted, 3 elements)
        ""                      (quoted, no elements)
    """

    quoted: bool
    elements: tuple[TemplateElement, ...]
    span: SourceSpan

    @property
    def decoded(self) -> str | None:
        """Decoded text of a template without interpolations.

        Returns:
            Concatenated decoded text, or None if the template interpolates
        """
        parts: list[str] = []
        for element in self.elements:
            if not TextElement.guard(element):
                return None
            parts.append(element.decoded)
        return "".join(parts)

    @property
    def variables(self) -> tuple[str, ...]:
        """Names of interpolated variables, in source order."""
        return tuple(
            element.expression.variable.name
            for element in self.elements
            if Interpolation.guard(element)
        )


@dataclass(frozen=True, slots=True)
class EncodedString:
    """Key string with decoded value and raw source text.

    Attributes:
        quoted: True if the key was written between double quotes
        decoded: Text with escape sequences decoded
        raw: Exact source text (without the surrounding quotes)
        span: Source span, including the quotes when quoted
    """

    quoted: bool
    decoded: str
    raw: str
    span: SourceSpan


type ASTNode = (
    Position
    | SourceSpan
    | Whitespace
    | Variable
    | Expression
    | TextElement
    | Interpolation
    | Template
    | EncodedString
)
