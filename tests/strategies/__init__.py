"""Hypothesis strategies for templit property-based testing.

Usage:
    from tests.strategies import literal_pieces, quoted_sources, variable_names

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - literal_pieces, literal_chaos_source
"""

from .literals import (
    CHAOS_ALPHABET,
    SAFE_TEXT_CHARS,
    escape_sequences,
    literal_chaos_source,
    literal_pieces,
    literal_text,
    quoted_sources,
    unicode_scalars,
    variable_names,
)

__all__ = [
    "CHAOS_ALPHABET",
    "SAFE_TEXT_CHARS",
    "escape_sequences",
    "literal_chaos_source",
    "literal_pieces",
    "literal_text",
    "quoted_sources",
    "unicode_scalars",
    "variable_names",
]
