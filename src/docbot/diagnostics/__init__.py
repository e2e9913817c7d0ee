"""Diagnostic system for DocBot errors.

Provides structured error diagnostics with codes and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ConfigError,
    DocbotError,
    DomainError,
    GrammarError,
    ParseFailureError,
)
from .templates import ErrorTemplate

__all__ = [
    "ConfigError",
    "Diagnostic",
    "DiagnosticCode",
    "DocbotError",
    "DomainError",
    "ErrorTemplate",
    "GrammarError",
    "ParseFailureError",
]
