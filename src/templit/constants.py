"""Shared constants for templit.

This module provides centralized configuration constants used across
the syntax and diagnostics packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Input limits: DoS prevention via size constraints
- Character tables: Fixed character classes of the literal grammar

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Input limits
    "MAX_SOURCE_SIZE",
    # Character tables
    "SIMPLE_ESCAPES",
    "RAW_FORBIDDEN_CHARS",
    "UNQUOTED_TERMINATORS",
    "QUOTED_TERMINATORS",
    "EMPTY_UNQUOTED_STARTS",
    "KEY_PUNCTUATION",
    "INLINE_WHITESPACE",
    "HEX_DIGITS",
    # Unicode limits
    "MAX_UNICODE_CODE_POINT",
    "SURROGATE_RANGE_START",
    "SURROGATE_RANGE_END",
]

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (1 MB).
# A single literal is one line of a request file; anything near this size is
# almost certainly malformed or adversarial input.
MAX_SOURCE_SIZE: int = 1024 * 1024

# ============================================================================
# CHARACTER TABLES
# ============================================================================

# Character following a backslash -> decoded character.
# \u is not in this table: it introduces a \u{HEX} code point escape.
SIMPLE_ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\x08",
    "n": "\n",
    "f": "\x0c",
    "r": "\r",
    "t": "\t",
}

# Characters that must always be escaped to appear in a literal.
RAW_FORBIDDEN_CHARS: frozenset[str] = frozenset({"\\", "\x08", "\n", "\x0c", "\r", "\t"})

# Context-specific terminators for the character classifier.
UNQUOTED_TERMINATORS: frozenset[str] = frozenset({"#"})
QUOTED_TERMINATORS: frozenset[str] = frozenset({'"'})

# An unquoted value starting with one of these is empty.
EMPTY_UNQUOTED_STARTS: frozenset[str] = frozenset({" ", "\t", "\n", "#"})

# Non-alphanumeric characters allowed raw in an unquoted key.
KEY_PUNCTUATION: frozenset[str] = frozenset({"_", "-", "."})

# Whitespace allowed around an interpolated variable name and trimmed from
# the end of unquoted values.
INLINE_WHITESPACE: frozenset[str] = frozenset({" ", "\t"})

# ASCII hex digits only. str.isdigit() and friends accept other scripts.
HEX_DIGITS: str = "0123456789abcdefABCDEF"

# ============================================================================
# UNICODE LIMITS
# ============================================================================

# Maximum valid Unicode code point per Unicode Standard.
MAX_UNICODE_CODE_POINT: int = 0x10FFFF

# UTF-16 surrogate code point range (D800-DFFF), not scalar values.
SURROGATE_RANGE_START: int = 0xD800
SURROGATE_RANGE_END: int = 0xDFFF
