"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Grammar construction errors (programming mistakes)
        2000-2999: Parse failures (user input did not match a grammar)
        3000-3999: Dispatch errors (command routing)
        4000-4999: Domain errors (documents, sheets, dice)
        5000-5999: Configuration errors
    """

    # Grammar construction errors (1000-1999)
    FIELD_COUNT_MISMATCH = 1001
    DUPLICATE_FIELD_NAME = 1002
    NAMED_TARGET_NOT_SEQUENCE = 1003
    EMPTY_ALTERNATION = 1004
    INVALID_REPETITION_BOUNDS = 1005
    NOT_A_RULE = 1006

    # Parse failures (2000-2999)
    PARSE_FAILED = 2001

    # Dispatch errors (3000-3999)
    UNKNOWN_COMMAND = 3001

    # Domain errors (4000-4999)
    DOCUMENT_EXISTS = 4001
    DOCUMENT_MISSING = 4002
    UNKNOWN_FIELD = 4003
    UNKNOWN_SUBSHEET = 4004
    UNKNOWN_TRAIT = 4005
    INVALID_GRIST_TYPE = 4006
    REPEATED_GRIST_TYPE = 4007
    INSUFFICIENT_GRIST = 4008
    INVALID_CELL_VALUE = 4009
    TOO_MANY_DICE = 4010

    # Configuration errors (5000-5999)
    CONFIG_MISSING = 5001
    CONFIG_INVALID = 5002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler message.

        Example output:
            error[FIELD_COUNT_MISMATCH]: 2 field names for 3 values
              = help: Pass one name per visible sequence member

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
