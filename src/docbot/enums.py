"""Enumerations for DocBot type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so parsed values compare equal to
the words the user typed.

Python 3.13+.
"""

from enum import StrEnum


class Operation(StrEnum):
    """Arithmetic applied to a sheet value by the change command.

    StrEnum provides automatic string conversion: Operation.ADD == "add"
    """

    ADD = "add"
    """Increase by the amount: change Name xp add 5"""

    SUB = "sub"
    """Decrease by the amount: change Name xp sub 5"""

    SET = "set"
    """Replace with the amount: change Name xp set 5"""

    def apply(self, current: int, amount: int) -> int:
        match self:
            case Operation.ADD:
                return current + amount
            case Operation.SUB:
                return current - amount
            case Operation.SET:
                return amount


class OutcomeKind(StrEnum):
    """How the dispatcher finished with one command string."""

    HANDLED = "handled"
    """A handler ran and produced a reply."""

    PARSE_FAILED = "parse_failed"
    """A prefix matched but the arguments did not."""

    DOMAIN_ERROR = "domain_error"
    """The handler rejected the request (DomainError)."""

    UNKNOWN_COMMAND = "unknown_command"
    """No command prefix matched."""


__all__ = [
    "Operation",
    "OutcomeKind",
]
