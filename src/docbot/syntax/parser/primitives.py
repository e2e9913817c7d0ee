"""Primitive rule parsers: literal, pattern, predicate, end of input.

Each function takes the rule and the current cursor and returns either a
ParseResult with the advanced cursor or a ParseFailure at the cursor it was
given. Primitives never look past their own match.
"""

from docbot.syntax.cursor import Cursor, ParseFailure, ParseOutcome, ParseResult
from docbot.syntax.grammar import EndOfInput, Literal, Pattern, Predicate, describe

__all__ = [
    "parse_end_of_input",
    "parse_literal",
    "parse_pattern",
    "parse_predicate",
]


def parse_literal(rule: Literal, cursor: Cursor) -> ParseOutcome[str]:
    """Match rule.word at the start of the buffer.

    Consumes exactly len(word) characters and yields the text as it appears
    in the input (so a case-insensitive match keeps the user's casing).

    Examples:
        'help' on "help me" -> "help", remainder " me"
        'Help' (ignore_case) on "HELP" -> "HELP"
    """
    size = len(rule.word)
    if rule.ignore_case:
        matches = cursor.buffer[:size].lower() == rule.word.lower()
    else:
        matches = cursor.buffer.startswith(rule.word)

    if not matches:
        return ParseFailure(cursor, describe(rule))

    matched, rest = cursor.split(size)
    return ParseResult(matched.buffer, rest)


def parse_pattern(rule: Pattern, cursor: Cursor) -> ParseOutcome[tuple[str | None, ...]]:
    """Match rule.regex anchored at the cursor.

    re.Pattern.match only tries position 0 of the remaining buffer, so a
    pattern without a leading ^ can never match further along the input.

    Returns:
        ParseResult((full match, *groups), cursor advanced by the match length);
        groups that did not take part in the match are None
    """
    found = rule.regex.match(cursor.buffer)
    if found is None:
        return ParseFailure(cursor, describe(rule))

    groups: tuple[str | None, ...] = (found.group(0), *found.groups())
    return ParseResult(groups, cursor.advance(found.end()))


def parse_predicate(rule: Predicate, cursor: Cursor) -> ParseOutcome[str]:
    """Consume one character accepted by rule.test. Fails at end of input."""
    if cursor.is_eof or not rule.test(cursor.current):
        return ParseFailure(cursor, describe(rule))
    return ParseResult(cursor.current, cursor.advance())


def parse_end_of_input(rule: EndOfInput, cursor: Cursor) -> ParseOutcome[None]:
    """Succeed, consuming nothing, only when the buffer is empty."""
    if not cursor.is_eof:
        return ParseFailure(cursor, describe(rule))
    return ParseResult(None, cursor)
