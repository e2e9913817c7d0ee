"""Tests for cursor infrastructure.

Validates the immutable cursor pattern and failure values.
"""

from __future__ import annotations

import pytest

from docbot.syntax.cursor import Cursor, ParseFailure, ParseResult

# ============================================================================
# CURSOR BASIC TESTS
# ============================================================================


class TestCursorBasic:
    """Test basic cursor functionality."""

    def test_create_cursor(self) -> None:
        """Create cursor at offset 0."""
        cursor = Cursor("hello")

        assert cursor.buffer == "hello"
        assert cursor.offset == 0
        assert not cursor.is_eof

    def test_cursor_immutability(self) -> None:
        """Cursor is immutable (frozen dataclass)."""
        cursor = Cursor("hello")

        with pytest.raises(AttributeError):
            cursor.offset = 5  # type: ignore[misc]

    def test_negative_offset_rejected(self) -> None:
        with pytest.raises(ValueError, match="offset"):
            Cursor("hello", -1)

    def test_empty_buffer_is_eof(self) -> None:
        assert Cursor("", 7).is_eof

    def test_current_raises_at_eof(self) -> None:
        with pytest.raises(EOFError):
            _ = Cursor("", 3).current

    def test_peek(self) -> None:
        cursor = Cursor("abc")

        assert cursor.peek() == "a"
        assert cursor.peek(2) == "c"
        assert cursor.peek(3) is None


# ============================================================================
# SPLIT AND ADVANCE
# ============================================================================


class TestCursorSplit:
    """split() is the single consumption primitive."""

    def test_split_keeps_offsets(self) -> None:
        left, right = Cursor("roll 2d8", 10).split(4)

        assert (left.buffer, left.offset) == ("roll", 10)
        assert (right.buffer, right.offset) == (" 2d8", 14)

    def test_split_at_zero(self) -> None:
        left, right = Cursor("help").split(0)

        assert left.buffer == ""
        assert right.buffer == "help"
        assert right.offset == 0

    def test_split_at_end(self) -> None:
        left, right = Cursor("help").split(4)

        assert left.buffer == "help"
        assert right.is_eof
        assert right.offset == 4

    @pytest.mark.parametrize("at", [-1, 5])
    def test_split_out_of_range(self, at: int) -> None:
        with pytest.raises(ValueError, match="Cannot split"):
            Cursor("help").split(at)

    def test_original_unchanged(self) -> None:
        cursor = Cursor("hello")
        moved = cursor.advance(2)

        assert cursor.buffer == "hello"
        assert moved.buffer == "llo"
        assert moved.offset == 2


# ============================================================================
# RESULTS AND FAILURES
# ============================================================================


class TestParseResult:
    def test_holds_value_and_cursor(self) -> None:
        cursor = Cursor("42 apples")
        result = ParseResult("42", cursor.advance(2))

        assert result.value == "42"
        assert result.cursor.buffer == " apples"


class TestParseFailure:
    """Failure values and their messages."""

    def test_message_names_next_character(self) -> None:
        failure = ParseFailure(Cursor("halp"), "'help'")

        assert failure.message == "at 0 expected 'help' got h"
        assert str(failure) == failure.message

    def test_message_at_end_of_input(self) -> None:
        failure = ParseFailure(Cursor("", 12), "an integer")

        assert failure.got == "end of input"
        assert failure.message == "at 12 expected an integer got end of input"

    def test_furthest_without_causes_is_self(self) -> None:
        failure = ParseFailure(Cursor("x", 3), "'y'")

        assert failure.furthest() is failure

    def test_furthest_picks_deepest_cause(self) -> None:
        shallow = ParseFailure(Cursor("bc", 1), "'x'")
        deep = ParseFailure(Cursor("c", 2), "'z'")
        middle = ParseFailure(Cursor("bc", 1), "group", (deep,))
        outer = ParseFailure(Cursor("abc", 0), "anything", (shallow, middle))

        assert outer.furthest() is deep

    def test_furthest_tie_keeps_outer(self) -> None:
        inner = ParseFailure(Cursor("abc", 0), "'x'")
        outer = ParseFailure(Cursor("abc", 0), "one of ('x')", (inner,))

        assert outer.furthest() is outer
