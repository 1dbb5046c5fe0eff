"""Literal parser module.

This module provides the main TemplateParser class and the grammar rules
it is built from, organized into focused submodules.

Module Organization:
- core.py: TemplateParser facade (size limit, logging, error raising)
- combinators.py: Generic rules (literal, try_literal, zero_or_more, one_or_more, choice)
- primitives.py: Hex digits, escape sequences, single literal characters
- expression.py: {{ name }} interpolations
- strings.py: Templates, keys and plain quoted strings

Public API:
    TemplateParser: Main parser class
"""

from templit.syntax.parser.core import TemplateParser

__all__ = ["TemplateParser"]
