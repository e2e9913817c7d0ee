"""Rule dispatch and the combinator algorithms.

parse_rule() is the single entry point every rule goes through: one match
statement over the closed GrammarRule union. Sequence, repetition,
alternation and transform live here too because they call back into
parse_rule(); keeping them in one module avoids circular imports.

Backtracking never uses exceptions. A failed candidate is a ParseFailure
value; "catch and retry" is "look at the value and try the next one".
Because cursors are immutable, a failed candidate cannot have moved the
input for the next one.
"""

from typing import Any, assert_never

from docbot.diagnostics import ErrorTemplate, GrammarError
from docbot.syntax.cursor import Cursor, ParseFailure, ParseOutcome, ParseResult
from docbot.syntax.grammar import (
    Alternation,
    EndOfInput,
    GrammarRule,
    Literal,
    Pattern,
    Predicate,
    Repetition,
    Sequence,
    Spaces,
    Transform,
    describe,
)
from docbot.syntax.parser.primitives import (
    parse_end_of_input,
    parse_literal,
    parse_pattern,
    parse_predicate,
)
from docbot.syntax.parser.whitespace import parse_spaces

__all__ = [
    "parse_alternation",
    "parse_repetition",
    "parse_rule",
    "parse_sequence",
    "parse_transform",
]


def parse_rule(rule: GrammarRule, cursor: Cursor) -> ParseOutcome[Any]:
    """Run any rule against the cursor."""
    match rule:
        case Literal():
            return parse_literal(rule, cursor)
        case Pattern():
            return parse_pattern(rule, cursor)
        case Predicate():
            return parse_predicate(rule, cursor)
        case EndOfInput():
            return parse_end_of_input(rule, cursor)
        case Spaces():
            return parse_spaces(rule, cursor)
        case Sequence():
            return parse_sequence(rule, cursor)
        case Repetition():
            return parse_repetition(rule, cursor)
        case Alternation():
            return parse_alternation(rule, cursor)
        case Transform():
            return parse_transform(rule, cursor)
        case _:
            assert_never(rule)


def parse_sequence(rule: Sequence, cursor: Cursor) -> ParseOutcome[list[Any]]:
    """Match every member in order.

    The first failing member aborts the whole sequence and its failure is
    returned unchanged. Hidden members must match and advance the cursor,
    but only visible members contribute to the result list.
    """
    values: list[Any] = []
    current = cursor
    for member in rule.members:
        outcome = parse_rule(member, current)
        if isinstance(outcome, ParseFailure):
            return outcome
        if not member.hidden:
            values.append(outcome.value)
        current = outcome.cursor
    return ParseResult(values, current)


def parse_repetition(rule: Repetition, cursor: Cursor) -> ParseOutcome[list[Any]]:
    """Match the sub-rule repeatedly, collecting values.

    Stops when the sub-rule fails (that failure is recovered, not returned),
    when the maximum is reached, or when a match consumed nothing. The last
    condition guarantees termination for sub-rules that can match empty.

    Below the minimum, fails at the furthest cursor reached. The repetition's
    own expectation is used when one was set explicitly, otherwise the
    sub-rule's.
    """
    values: list[Any] = []
    current = cursor
    recovered: tuple[ParseFailure, ...] = ()

    while rule.maximum is None or len(values) < rule.maximum:
        outcome = parse_rule(rule.rule, current)
        if isinstance(outcome, ParseFailure):
            recovered = (outcome,)
            break
        values.append(outcome.value)
        consumed = outcome.cursor.offset != current.offset
        current = outcome.cursor
        if not consumed:
            break

    if len(values) < rule.minimum:
        expected = rule.expectation if rule.expectation is not None else describe(rule.rule)
        return ParseFailure(current, expected, recovered)

    return ParseResult(values, current)


def parse_alternation(rule: Alternation, cursor: Cursor) -> ParseOutcome[Any]:
    """Try candidates in order against the same cursor; first match wins.

    When every candidate fails, the failure sits at the original cursor and
    describes the alternation as a whole. The candidates' own failures are
    kept in `causes` (see ParseFailure.furthest()).

    Raises:
        GrammarError: If the alternation has no candidates
    """
    if not rule.candidates:
        raise GrammarError(ErrorTemplate.empty_alternation())

    failures: list[ParseFailure] = []
    for candidate in rule.candidates:
        outcome = parse_rule(candidate, cursor)
        if not isinstance(outcome, ParseFailure):
            return outcome
        failures.append(outcome)

    return ParseFailure(cursor, describe(rule), tuple(failures))


def parse_transform(rule: Transform, cursor: Cursor) -> ParseOutcome[Any]:
    """Apply rule.func to the sub-rule's value. Failures pass through unchanged."""
    outcome = parse_rule(rule.rule, cursor)
    if isinstance(outcome, ParseFailure):
        return outcome
    return ParseResult(rule.func(outcome.value), outcome.cursor)
