"""Tests for Sequence: ordering, hidden members, interleaved whitespace."""

from __future__ import annotations

from docbot.syntax import (
    ParseFailure,
    ParseResult,
    Spaces,
    literal,
    parse_text,
    regex,
    sequence,
)


class TestSequenceMatching:
    def test_values_in_order(self) -> None:
        rule = sequence("a", "b", "c")
        outcome = parse_text(rule, "abc")

        assert isinstance(outcome, ParseResult)
        assert outcome.value == ["a", "b", "c"]

    def test_empty_sequence_matches_nothing(self) -> None:
        outcome = parse_text(sequence(), "anything")

        assert isinstance(outcome, ParseResult)
        assert outcome.value == []
        assert outcome.cursor.offset == 0

    def test_hidden_literal_then_visible_pattern(self) -> None:
        rule = sequence().add_hidden(literal("x")).add(regex(r"\d+"))
        outcome = parse_text(rule, "x42")

        assert isinstance(outcome, ParseResult)
        assert outcome.value == ["42"]
        assert outcome.cursor.is_eof

    def test_first_failure_is_returned_unchanged(self) -> None:
        rule = sequence("add", " ", "document")
        outcome = parse_text(rule, "add documnet")

        assert isinstance(outcome, ParseFailure)
        assert outcome.offset == 4
        assert outcome.expected == "'document'"
        assert outcome.causes == ()


class TestInterleavedSpaces:
    """interleave_spaces() / no_interleave_spaces()."""

    def test_skips_whitespace_between_members(self) -> None:
        rule = sequence().interleave_spaces().add("add").add("document")
        outcome = parse_text(rule, "  add \n document  ")

        assert isinstance(outcome, ParseResult)
        assert outcome.value == ["add", "document"]
        assert outcome.cursor.is_eof

    def test_interleave_appends_one_spaces_rule(self) -> None:
        rule = sequence().interleave_spaces().add("a")

        assert [type(member) for member in rule.members] == [Spaces, type(literal("a")), Spaces]

    def test_interleave_after_spaces_does_not_duplicate(self) -> None:
        rule = sequence().add_spaces().interleave_spaces()

        assert len(rule.members) == 1

    def test_no_interleave_drops_trailing_spaces(self) -> None:
        rule = sequence().interleave_spaces().add("a").no_interleave_spaces().add("b")
        outcome = parse_text(rule, "a b")

        assert isinstance(outcome, ParseFailure)
        assert outcome.offset == 1

    def test_inline_interleave_leaves_newline(self) -> None:
        rule = sequence().interleave_spaces(inline=True).add("a")
        outcome = parse_text(rule, "a \nb")

        assert isinstance(outcome, ParseResult)
        assert outcome.cursor.buffer == "\nb"

    def test_builders_do_not_mutate(self) -> None:
        base = sequence().interleave_spaces()
        extended = base.add("a")

        assert len(base.members) == 1
        assert len(extended.members) == 3


class TestSequenceExpectation:
    def test_lists_visible_members_only(self) -> None:
        rule = sequence().interleave_spaces().add("a").add_hidden("b").add(regex(r"\d"))

        assert rule.expects() == "chain ['a', pattern \\d]"

    def test_override(self) -> None:
        rule = sequence("a", "b").expecting("dice description (XdY)")

        assert rule.expects() == "dice description (XdY)"
