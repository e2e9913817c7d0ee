"""Public entry points of the parsing engine.

Architecture:
    Rules are immutable values built with :mod:`docbot.syntax.grammar`.
    :func:`parse` runs one against a :class:`~docbot.syntax.cursor.Cursor`
    and returns a :class:`~docbot.syntax.cursor.ParseResult` (value and
    remainder) or a :class:`~docbot.syntax.cursor.ParseFailure`.

    Parsing is synchronous and holds no state between calls, so one grammar
    can serve any number of threads or tasks at once.

See Also:
    - :mod:`docbot.syntax.parser.rules` - dispatch and combinators
    - :mod:`docbot.syntax.parser.primitives` - literal, pattern, predicate
"""

from typing import Any

from docbot.diagnostics import ParseFailureError
from docbot.syntax.cursor import Cursor, ParseFailure, ParseOutcome
from docbot.syntax.grammar import to_rule
from docbot.syntax.parser.rules import parse_rule

__all__ = ["parse", "parse_or_raise", "parse_text"]


def parse(rule: object, cursor: Cursor) -> ParseOutcome[Any]:
    """Run a rule against a cursor.

    Args:
        rule: A grammar rule (strings and compiled patterns are coerced)
        cursor: Input position to start from

    Returns:
        ParseResult(value, remainder) on success, ParseFailure otherwise

    Example:
        >>> from docbot.syntax.grammar import literal
        >>> parse(literal("help"), Cursor("halp")).message
        "at 0 expected 'help' got h"
    """
    return parse_rule(to_rule(rule), cursor)


def parse_text(rule: object, text: str) -> ParseOutcome[Any]:
    """Run a rule against the start of `text`."""
    return parse(rule, Cursor(text))


def parse_or_raise(rule: object, text: str) -> Any:
    """Run a rule and return only the value.

    The remainder is ignored; compose with end_of_input() to require that
    the whole text matches.

    Raises:
        ParseFailureError: If the rule does not match
    """
    outcome = parse_text(rule, text)
    if isinstance(outcome, ParseFailure):
        raise ParseFailureError(outcome)
    return outcome.value
