"""Diagnostic system for templit errors.

Provides error kinds, structured diagnostics, message templates and the
exception hierarchy.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, ErrorKind
from .errors import TemplateSyntaxError, TemplitError
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "ErrorKind",
    "ErrorTemplate",
    "TemplateSyntaxError",
    "TemplitError",
]
