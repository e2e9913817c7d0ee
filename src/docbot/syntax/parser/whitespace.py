"""Whitespace handling for command grammars.

Two flavors, mirroring how commands are written by hand:

- blank: any whitespace, newlines included (str.isspace)
- blank_inline: spaces and tabs only, so a newline can act as a separator
"""

from docbot.syntax.cursor import Cursor, ParseOutcome, ParseResult
from docbot.syntax.grammar import Spaces

_INLINE_BLANKS: str = " \t"


def skip_blank(cursor: Cursor) -> Cursor:
    """Skip all leading whitespace, newlines included."""
    buffer = cursor.buffer
    count = len(buffer) - len(buffer.lstrip())
    return cursor.advance(count)


def skip_blank_inline(cursor: Cursor) -> Cursor:
    """Skip leading spaces and tabs only."""
    buffer = cursor.buffer
    count = len(buffer) - len(buffer.lstrip(_INLINE_BLANKS))
    return cursor.advance(count)


def parse_spaces(rule: Spaces, cursor: Cursor) -> ParseOutcome[str]:
    """Consume leading whitespace. Always succeeds, possibly consuming nothing.

    Yields the skipped text; Spaces rules are hidden, so sequences drop it.
    """
    rest = skip_blank_inline(cursor) if rule.inline else skip_blank(cursor)
    skipped = cursor.buffer[: rest.offset - cursor.offset]
    return ParseResult(skipped, rest)
