"""Immutable cursor infrastructure for type-safe parsing.

Implements the immutable cursor pattern: every rule receives a Cursor and
returns either a ParseResult (value plus remainder cursor) or a ParseFailure.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - The buffer holds only the unconsumed text; offset is its position
      in the original input
    - split() is the single primitive for consumption; advance() is sugar
    - Failures are values, not exceptions, so backtracking is a plain
      "try the next candidate" loop

Pattern Reference:
    - Rust nom parser combinator library
    - Haskell Parsec
"""

from dataclasses import dataclass, field

from docbot.diagnostics import ErrorTemplate

__all__ = ["Cursor", "ParseFailure", "ParseOutcome", "ParseResult"]

END_OF_INPUT: str = "end of input"


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable view of the unconsumed input.

    Example:
        >>> cursor = Cursor("roll 2d8")
        >>> left, right = cursor.split(4)
        >>> left.buffer, right.buffer, right.offset
        ('roll', ' 2d8', 4)
        >>> cursor.buffer  # Original unchanged (immutability)
        'roll 2d8'
    """

    buffer: str
    offset: int = 0

    def __post_init__(self) -> None:
        if self.offset < 0:
            msg = f"Cursor.offset must be >= 0, got {self.offset}"
            raise ValueError(msg)

    @property
    def is_eof(self) -> bool:
        """True when no characters remain."""
        return not self.buffer

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected end of input at offset {self.offset}"
            raise EOFError(msg)
        return self.buffer[0]

    def peek(self, offset: int = 0) -> str | None:
        """Character at offset from the current position, or None past the end."""
        if offset >= len(self.buffer):
            return None
        return self.buffer[offset]

    def split(self, at: int) -> tuple["Cursor", "Cursor"]:
        """Split into the first `at` characters and the rest.

        Args:
            at: Number of characters for the left part (0 <= at <= len(buffer))

        Returns:
            (left, right): left covers [0, at) at this offset,
            right covers [at, end) at offset + at

        Raises:
            ValueError: If `at` is negative or beyond the remaining buffer

        Example:
            >>> left, right = Cursor("help", 10).split(0)
            >>> left.buffer, right.offset
            ('', 10)
        """
        if at < 0 or at > len(self.buffer):
            msg = f"Cannot split {len(self.buffer)} remaining characters at {at}"
            raise ValueError(msg)
        left = Cursor(self.buffer[:at], self.offset)
        right = Cursor(self.buffer[at:], self.offset + at)
        return left, right

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor past the next `count` characters."""
        return self.split(count)[1]


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and the remainder cursor.

    Type Parameters:
        T: The type of the parsed value

    Example:
        >>> cursor = Cursor("42 apples")
        >>> result = ParseResult("42", cursor.advance(2))
        >>> result.value
        '42'
        >>> result.cursor.offset
        2
    """

    value: T
    cursor: Cursor


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """A rule did not match.

    Design:
        - Stores the cursor at the failure point (offset and next character)
        - `expected` is the human-readable expectation of the failing rule
        - `causes` keeps the failures an alternation or repetition recovered
          from, so tooling can dig for the most specific one

    Example:
        >>> failure = ParseFailure(Cursor("halp"), "'help'")
        >>> failure.message
        "at 0 expected 'help' got h"
    """

    cursor: Cursor
    expected: str
    causes: tuple["ParseFailure", ...] = field(default_factory=tuple)

    @property
    def offset(self) -> int:
        """Offset of the failure in the original input."""
        return self.cursor.offset

    @property
    def got(self) -> str:
        """Next character at the failure point, or "end of input"."""
        return self.cursor.buffer[0] if self.cursor.buffer else END_OF_INPUT

    @property
    def message(self) -> str:
        """User-facing text: ``at <offset> expected <expectation> got <char>``."""
        return ErrorTemplate.parse_failed(self.offset, self.expected, self.got).message

    def furthest(self) -> "ParseFailure":
        """Return the failure that got furthest into the input.

        Walks the recovered causes depth-first. Ties keep the outer failure,
        so a failure without causes returns itself.

        Example:
            >>> inner = ParseFailure(Cursor("x", 5), "'y'")
            >>> outer = ParseFailure(Cursor("abcdx", 1), "a sentence", (inner,))
            >>> outer.furthest() is inner
            True
        """
        best = self
        for cause in self.causes:
            candidate = cause.furthest()
            if candidate.offset > best.offset:
                best = candidate
        return best

    def __str__(self) -> str:
        return self.message


type ParseOutcome[T] = ParseResult[T] | ParseFailure
