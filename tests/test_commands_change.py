"""Tests for the change command: vitality, experience and grist."""

from __future__ import annotations

import pytest

from docbot.commands.change import GRIST_CHANGES
from docbot.enums import Operation, OutcomeKind
from docbot.runtime import Dispatcher
from docbot.sheets import InMemorySheets
from docbot.syntax import ParseFailure, ParseResult, parse_text

from tests.sheet_data import DOC_ID

# ============================================================================
# GRIST GRAMMAR
# ============================================================================


class TestGristChanges:
    def test_semicolon_separated(self) -> None:
        outcome = parse_text(GRIST_CHANGES, "build add 5; shale sub 5")

        assert isinstance(outcome, ParseResult)
        assert outcome.value == [
            {"type": "build", "op": "add", "amount": 5},
            {"type": "shale", "op": "sub", "amount": 5},
        ]
        assert outcome.value[0]["op"] is Operation.ADD

    def test_newline_separated(self) -> None:
        outcome = parse_text(GRIST_CHANGES, "build add 5\nshale sub 5\nartifact set 5\n")

        assert isinstance(outcome, ParseResult)
        assert [entry["type"] for entry in outcome.value] == ["build", "shale", "artifact"]

    def test_semicolon_then_newline(self) -> None:
        outcome = parse_text(GRIST_CHANGES, "build add 5;\n  shale sub 5")

        assert isinstance(outcome, ParseResult)
        assert len(outcome.value) == 2

    def test_types_are_lower_cased(self) -> None:
        outcome = parse_text(GRIST_CHANGES, "BUILD set 1")

        assert isinstance(outcome, ParseResult)
        assert outcome.value == [{"type": "build", "op": "set", "amount": 1}]

    def test_missing_separator(self) -> None:
        outcome = parse_text(GRIST_CHANGES, "build add 5 shale sub 5")

        assert isinstance(outcome, ParseFailure)
        assert outcome.offset == 0
        deepest = outcome.furthest()
        assert deepest.offset == 12
        assert deepest.expected == "a separator (a semicolon or a new line)"

    def test_empty_list_rejected(self) -> None:
        assert isinstance(parse_text(GRIST_CHANGES, ""), ParseFailure)


# ============================================================================
# EXPERIENCE
# ============================================================================


class TestChangeExperience:
    @pytest.mark.parametrize("word", ["xp", "exp", "experience"])
    def test_synonyms(self, dispatcher: Dispatcher, word: str) -> None:
        outcome = dispatcher.dispatch(f"change Karkat {word} add 3")

        assert outcome.kind is OutcomeKind.HANDLED
        assert outcome.reply == "Xp changes for Karkat: was 5, became 8"

    def test_floors_at_zero(self, dispatcher: Dispatcher, backend: InMemorySheets) -> None:
        reply = dispatcher.dispatch("change Karkat xp sub 10").reply

        assert reply == (
            "Xp changes for Karkat: was 5, became 0\n"
            "Tried to subtract more xp than you have. Value set to 0"
        )
        assert backend.batch_get(DOC_ID, ["CHARACTER SHEET!C7"]) == ["0"]


# ============================================================================
# VITALITY
# ============================================================================


class TestChangeVitality:
    def test_capped_at_viscosity(self, dispatcher: Dispatcher) -> None:
        reply = dispatcher.dispatch("change Karkat hp add 5").reply

        assert reply == (
            "Vitality changes for Karkat: was 8, became 10\n"
            "Tried to make vitality higher than maximum value. Value set to 10"
        )

    def test_set_max(self, dispatcher: Dispatcher) -> None:
        reply = dispatcher.dispatch("change Karkat health set max").reply

        assert reply == "Vitality changes for Karkat: was 8, became 10"

    def test_moon_subsheet_below_zero(self, dispatcher: Dispatcher) -> None:
        reply = dispatcher.dispatch("change Karkat prospit vitality sub 9").reply

        assert reply == (
            "Vitality changes for Karkat: was 6, became -3\n"
            "Your vitality is below zero. Good luck."
        )

    def test_invalid_viscosity(self, dispatcher: Dispatcher, backend: InMemorySheets) -> None:
        backend.batch_set(DOC_ID, [("CHARACTER SHEET!C6", "lots")])

        outcome = dispatcher.dispatch("change Karkat hp add 1")

        assert outcome.kind is OutcomeKind.DOMAIN_ERROR
        assert outcome.reply == "Error: The sheet has invalid *gel viscosity* value: lots"

    def test_bad_amount(self, dispatcher: Dispatcher) -> None:
        outcome = dispatcher.dispatch("change Karkat hp add lots")

        assert outcome.kind is OutcomeKind.PARSE_FAILED
        assert outcome.failure is not None
        assert outcome.failure.offset == 14


# ============================================================================
# GRIST
# ============================================================================


class TestChangeGrist:
    def test_changes_and_formats_numbers(self, dispatcher: Dispatcher) -> None:
        reply = dispatcher.dispatch("change Karkat grist build add 5; shale sub 5").reply

        assert reply == (
            "Grist changes for Karkat:\n"
            "```build: was 1,250 became 1,255\n"
            "shale: was 10 became 5```"
        )

    def test_multiline_command(self, dispatcher: Dispatcher) -> None:
        reply = dispatcher.dispatch("change Karkat grist\nbuild add 5\ntar set 3").reply

        assert reply == (
            "Grist changes for Karkat:\n"
            "```build: was 1,250 became 1,255\n"
            "tar: was 0 became 3```"
        )

    @pytest.mark.parametrize(
        ("command", "reply"),
        [
            (
                "change Karkat grist build add 1; build sub 1",
                "Error: You can change each grist type only once: build",
            ),
            (
                "change Karkat grist shale sub 12",
                "Error: Tried to subtract more grist than you have:\n"
                "```shale: current 10, tried to subtract 12```",
            ),
            ("change Karkat grist zinc add 1", "Error: invalid grist types: zinc"),
            ("change Gamzee grist build add 1", "Error: Document with name Gamzee does not exist"),
        ],
    )
    def test_rejections(self, dispatcher: Dispatcher, command: str, reply: str) -> None:
        outcome = dispatcher.dispatch(command)

        assert outcome.kind is OutcomeKind.DOMAIN_ERROR
        assert outcome.reply == reply

    def test_rejected_change_writes_nothing(
        self, dispatcher: Dispatcher, backend: InMemorySheets
    ) -> None:
        dispatcher.dispatch("change Karkat grist build add 5; shale sub 12")

        assert backend.batch_get(DOC_ID, ["SYLLADEX!B2", "SYLLADEX!B3"]) == ["1250", "10"]


class TestChangeParsing:
    def test_unknown_change_kind(self, dispatcher: Dispatcher) -> None:
        outcome = dispatcher.dispatch("change Karkat mp add 1")

        assert outcome.kind is OutcomeKind.PARSE_FAILED
        assert outcome.reply == (
            "Error: at 14 expected one of "
            "(vitality change | experience change | grist change) got m"
        )
