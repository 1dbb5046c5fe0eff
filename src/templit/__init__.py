"""templit - string and template literal parser.

Parses the literals of a small request-description language: quoted and
unquoted values with {{ name }} interpolations, mapping keys and plain
quoted strings, on top of a JSON-style backslash escape grammar with
\\u{HEX} code point escapes. Every result keeps both decoded text and
the exact raw source text, with line/column spans.

Public API:
    TemplateParser - Configurable parser (size limit)
    parse_template - Parse a quoted or unquoted value to a Template
    parse_key - Parse a quoted or unquoted key to an EncodedString
    serialize - Serialize a Template or EncodedString back to source

Exceptions:
    TemplitError - Base exception class
    TemplateSyntaxError - Parse errors (one per failed parse)

Submodules:
    templit.syntax.ast - AST node types (Template, TextElement, Interpolation, ...)
    templit.syntax.parser - Grammar rules working on immutable cursors
    templit.diagnostics - Error kinds, diagnostics and message templates
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import ErrorKind, TemplateSyntaxError, TemplitError
from .syntax import TemplateParser, parse_key, parse_template, serialize

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError  # noqa: E402
from importlib.metadata import version as _get_version  # noqa: E402

try:
    __version__ = _get_version("templit")
except PackageNotFoundError:
    # Development mode: package not installed yet
    # Run: uv sync
    __version__ = "0.0.0+dev"

__all__ = [
    "ErrorKind",
    "TemplateParser",
    "TemplateSyntaxError",
    "TemplitError",
    "__version__",
    "parse_key",
    "parse_template",
    "serialize",
]
