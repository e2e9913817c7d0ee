"""Dispatcher - routes raw command strings to command handlers.

Each command is a CommandBinding: a prefix rule ("roll", "add document"),
an argument rule and a handler. The dispatcher tries bindings in the order
they were given:

- prefix fails: not this command, try the next binding
- prefix matches: the input is committed to this command; an argument
  failure is reported and no further bindings are tried
- arguments match: the handler runs; a DomainError it raises becomes the
  reply, anything else propagates to the caller

Python 3.13+.
"""

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from docbot.constants import ADDRESS_PATTERN
from docbot.diagnostics import DomainError, ErrorTemplate
from docbot.enums import OutcomeKind
from docbot.syntax import Cursor, GrammarRule, ParseFailure, ParseResult, parse
from docbot.syntax.parser.whitespace import skip_blank

__all__ = ["CommandBinding", "DispatchOutcome", "Dispatcher", "Handler"]

logger = logging.getLogger(__name__)

# Log lines quote at most this much of the user's input.
_LOG_TRUNCATE: int = 80

type Handler = Callable[[Any, Any], str]


@dataclass(frozen=True, slots=True)
class CommandBinding:
    """One command: prefix rule, argument rule, handler.

    Attributes:
        name: Short name used in logs and outcomes
        prefix: Rule for the command words; its success commits the input
        arguments: Rule for everything after the prefix
        handler: Called as handler(arguments value, context); returns the reply
        help: Usage text shown by the help command
    """

    name: str
    prefix: GrammarRule
    arguments: GrammarRule
    handler: Handler
    help: str = ""


@dataclass(frozen=True, slots=True)
class DispatchOutcome:
    """Result of dispatching one command string.

    Attributes:
        kind: How dispatch finished
        reply: Text to send back to the user
        command: Name of the binding whose prefix matched (None if none did)
        failure: Argument parse failure (PARSE_FAILED only)
        error: Handler's domain error (DOMAIN_ERROR only)
    """

    kind: OutcomeKind
    reply: str
    command: str | None = None
    failure: ParseFailure | None = None
    error: DomainError | None = None


class Dispatcher:
    """Ordered command table plus the context handed to every handler.

    Thread Safety:
        Bindings and rules are immutable and parse state is local to each
        dispatch() call. Whether concurrent dispatches are safe depends only
        on the handlers and the context they share.

    Example:
        >>> from docbot.syntax import literal, sequence
        >>> ping = CommandBinding("ping", literal("ping"), sequence(), lambda _, __: "pong")
        >>> Dispatcher([ping], context=None).dispatch("ping").reply
        'pong'
    """

    __slots__ = ("_address", "_bindings", "_context", "_require_complete")

    def __init__(
        self,
        bindings: Sequence[CommandBinding],
        context: Any,
        *,
        address: re.Pattern[str] | None = ADDRESS_PATTERN,
        require_complete: bool = True,
    ) -> None:
        """Initialize dispatcher.

        Args:
            bindings: Commands in matching order
            context: Passed unchanged as the second handler argument
            address: Leading addressing token to strip (None to keep input as-is)
            require_complete: Report leftover text after the arguments as a
                parse failure expecting end of input
        """
        self._bindings = tuple(bindings)
        self._context = context
        self._address = address
        self._require_complete = require_complete
        logger.info(
            "Dispatcher initialized with %d commands: %s",
            len(self._bindings),
            ", ".join(binding.name for binding in self._bindings),
        )

    @property
    def bindings(self) -> tuple[CommandBinding, ...]:
        return self._bindings

    @property
    def context(self) -> Any:
        return self._context

    def strip_address(self, text: str) -> str:
        """Remove a leading addressing token such as a chat mention."""
        if self._address is None:
            return text
        found = self._address.match(text)
        return text[found.end() :] if found else text

    def match(self, text: str) -> tuple[CommandBinding, ParseResult[Any] | ParseFailure] | None:
        """Find the command for `text` and parse its arguments.

        Returns:
            (binding, argument outcome) for the first binding whose prefix
            matched, or None when no prefix matched
        """
        cursor = Cursor(self.strip_address(text))
        for binding in self._bindings:
            prefix = parse(binding.prefix, cursor)
            if isinstance(prefix, ParseFailure):
                continue

            logger.debug("Prefix matched: %s", binding.name)
            arguments = parse(binding.arguments, prefix.cursor)
            if self._require_complete and isinstance(arguments, ParseResult):
                arguments = _require_end(arguments)
            return binding, arguments
        return None

    def dispatch(self, text: str) -> DispatchOutcome:
        """Route one raw command string.

        Returns:
            DispatchOutcome describing what happened and what to reply

        Raises:
            Exception: Anything a handler raises other than DomainError
        """
        found = self.match(text)
        if found is None:
            logger.debug("Unknown command: %s", text[:_LOG_TRUNCATE])
            return DispatchOutcome(
                OutcomeKind.UNKNOWN_COMMAND, ErrorTemplate.unknown_command().message
            )

        binding, arguments = found
        if isinstance(arguments, ParseFailure):
            logger.warning(
                "Arguments for '%s' did not parse: %s", binding.name, arguments.message
            )
            return DispatchOutcome(
                OutcomeKind.PARSE_FAILED,
                f"Error: {arguments.message}",
                command=binding.name,
                failure=arguments,
            )

        try:
            reply = binding.handler(arguments.value, self._context)
        except DomainError as e:
            logger.warning("Command '%s' rejected: %s", binding.name, e)
            return DispatchOutcome(
                OutcomeKind.DOMAIN_ERROR, f"Error: {e}", command=binding.name, error=e
            )

        logger.debug("Command '%s' handled", binding.name)
        return DispatchOutcome(OutcomeKind.HANDLED, reply, command=binding.name)


def _require_end(result: ParseResult[Any]) -> ParseResult[Any] | ParseFailure:
    """Reject text left over after the arguments (trailing whitespace is fine)."""
    rest = skip_blank(result.cursor)
    if not rest.is_eof:
        return ParseFailure(rest, "end of input")
    return ParseResult(result.value, rest)
