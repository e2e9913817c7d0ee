"""DocBot exception hierarchy with structured diagnostics.

All exceptions can carry Diagnostic objects for rich error information.
Parse failures are plain values (see docbot.syntax.cursor.ParseFailure);
ParseFailureError only exists for callers that prefer exceptions.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from docbot.syntax.cursor import ParseFailure


class DocbotError(Exception):
    """Base exception for all DocBot errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize DocbotError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class GrammarError(DocbotError):
    """A grammar was built incorrectly.

    Raised while rules are being composed (wrong number of field names,
    an empty alternation, inverted repetition bounds). Never raised for
    user input: a bad command string produces a ParseFailure instead.
    """


class ParseFailureError(DocbotError):
    """A rule did not match its input.

    Wraps the ParseFailure value returned by the engine so it can travel
    through code that works with exceptions.

    Attributes:
        failure: The ParseFailure describing where and what was expected
    """

    def __init__(self, failure: ParseFailure) -> None:
        super().__init__(failure.message)
        self.failure = failure


class DomainError(DocbotError):
    """Business-rule violation raised by a command handler.

    Examples:
    - Registering a document name twice
    - Subtracting more grist than a character owns
    - A sheet cell holding a value that is not a number

    The parsing engine never raises or catches this error.
    """


class ConfigError(DocbotError):
    """Configuration file is missing or malformed."""
