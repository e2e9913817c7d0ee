"""Tests for sheet access: backend, named requests and the document registry."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docbot.constants import FIELD_ALIASES, MISSING_CELL
from docbot.diagnostics import ConfigError, DiagnosticCode, DomainError
from docbot.sheets import DocumentStore, InMemorySheets, SheetBackend, SheetRequests

from tests.sheet_data import CELLS, DOC_ID, DOCMAP


@pytest.fixture
def requests(backend: InMemorySheets) -> SheetRequests:
    return SheetRequests(backend, DOCMAP, FIELD_ALIASES)


# ============================================================================
# BACKEND
# ============================================================================


class TestInMemorySheets:
    def test_is_a_sheet_backend(self, backend: InMemorySheets) -> None:
        assert isinstance(backend, SheetBackend)

    def test_missing_cells_and_documents(self, backend: InMemorySheets) -> None:
        assert backend.batch_get(DOC_ID, ["SYLLADEX!Z9"]) == [MISSING_CELL]
        assert backend.batch_get("unknown", ["SYLLADEX!B2"]) == [MISSING_CELL]

    def test_set_reports_old_and_new(self, backend: InMemorySheets) -> None:
        changes = backend.batch_set(DOC_ID, [("SYLLADEX!B2", 1300), ("SYLLADEX!E7", "1")])

        assert changes == [("1250", "1300"), (MISSING_CELL, "1")]
        assert backend.batch_get(DOC_ID, ["SYLLADEX!B2"]) == ["1300"]

    def test_seed_is_copied(self) -> None:
        InMemorySheets(CELLS).batch_set(DOC_ID, [("SYLLADEX!B2", 0)])

        assert CELLS[DOC_ID]["SYLLADEX!B2"] == "1250"


# ============================================================================
# FIELDS
# ============================================================================


class TestResolveField:
    @pytest.mark.parametrize(
        ("field", "expected"),
        [
            ("xp", "xp"),
            ("XP", "xp"),
            ("experience", "xp"),
            ("Luck", "lp"),
            ("handle", "chumhandle"),
        ],
    )
    def test_names_and_aliases(self, requests: SheetRequests, field: str, expected: str) -> None:
        assert requests.resolve_field("CHARACTER SHEET", field) == expected

    @pytest.mark.parametrize("field", ["mana", "traits", "magic"])
    def test_unknown(self, requests: SheetRequests, field: str) -> None:
        with pytest.raises(DomainError) as exc_info:
            requests.resolve_field("CHARACTER SHEET", field)

        assert str(exc_info.value) == f"Unknown field: {field}"

    def test_unknown_subsheet(self, requests: SheetRequests) -> None:
        with pytest.raises(DomainError) as exc_info:
            requests.resolve_field("DERSE", "vitality")

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.UNKNOWN_SUBSHEET


class TestFieldData:
    def test_get_data_keeps_names_as_given(self, requests: SheetRequests) -> None:
        assert requests.get_data(DOC_ID, "CHARACTER SHEET", ["Experience", "gv"]) == [
            ("Experience", "5"),
            ("gv", "10"),
        ]

    def test_get_cell(self, requests: SheetRequests) -> None:
        assert requests.get_cell(DOC_ID, "PROSPIT", "vitality") == "6"

    def test_set_data_returns_canonical_names(
        self, requests: SheetRequests, backend: InMemorySheets
    ) -> None:
        changes = requests.set_data(DOC_ID, "CHARACTER SHEET", [("luck", 4)])

        assert changes == [("lp", "3", "4")]
        assert backend.batch_get(DOC_ID, ["CHARACTER SHEET!C8"]) == ["4"]


# ============================================================================
# TRAITS
# ============================================================================


class TestTraits:
    @pytest.mark.parametrize(
        ("trait", "expected"),
        [("str", "STR"), ("Strength", "STR"), ("intelligence", "INT"), ("CHR", "CHR")],
    )
    def test_resolve(self, requests: SheetRequests, trait: str, expected: str) -> None:
        assert requests.resolve_trait("CHARACTER SHEET", trait) == expected

    def test_field_alias_is_not_a_trait(self, requests: SheetRequests) -> None:
        with pytest.raises(DomainError, match="Unknown trait: luck"):
            requests.resolve_trait("CHARACTER SHEET", "luck")

    def test_subsheet_without_traits(self, requests: SheetRequests) -> None:
        with pytest.raises(DomainError, match="Unknown field: traits"):
            requests.get_traits(DOC_ID, "SYLLADEX")

    def test_get_traits(self, requests: SheetRequests) -> None:
        traits = requests.get_traits(DOC_ID, "CHARACTER SHEET")

        assert traits[:2] == [("STR", "4", "2"), ("FOR", "3", "-1")]
        assert [trait for trait, _, _ in traits] == ["STR", "FOR", "AGL", "INT", "IMG", "CHR"]

    def test_get_trait_modifier_on_moon(self, requests: SheetRequests) -> None:
        assert requests.get_trait_modifier(DOC_ID, "PROSPIT", "strength") == "5"


# ============================================================================
# GRIST
# ============================================================================


class TestGrist:
    def test_default_types_in_canonical_order(self, requests: SheetRequests) -> None:
        grist = requests.get_grist(DOC_ID)

        assert [kind for kind, _ in grist][:3] == ["build", "shale", "tar"]
        assert len(grist) == 12
        assert grist[0] == ("build", "1250")

    def test_only_mapped_types_by_default(self, backend: InMemorySheets) -> None:
        docmap = {"SYLLADEX": {"grist": {"tar": "B4", "build": "B2"}}}

        assert SheetRequests(backend, docmap).grist_types() == ("build", "tar")

    def test_invalid_types(self, requests: SheetRequests) -> None:
        with pytest.raises(DomainError, match="invalid grist types: zinc tin"):
            requests.get_grist(DOC_ID, ["build", "zinc", "tin"])

    def test_unmapped_type(self, backend: InMemorySheets) -> None:
        requests = SheetRequests(backend, {"SYLLADEX": {"grist": {"build": "B2"}}})

        with pytest.raises(DomainError, match="Unknown field: grist ruby"):
            requests.get_grist(DOC_ID, ["ruby"])

    def test_set_grist(self, requests: SheetRequests, backend: InMemorySheets) -> None:
        changes = requests.set_grist(DOC_ID, [("shale", 5), ("tar", 3)])

        assert changes == [("shale", "10", "5"), ("tar", "0", "3")]
        assert backend.batch_get(DOC_ID, ["SYLLADEX!B3", "SYLLADEX!B4"]) == ["5", "3"]


# ============================================================================
# DOCUMENT REGISTRY
# ============================================================================


class TestDocumentStore:
    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert DocumentStore(tmp_path / "absent.json").read() == {}

    def test_lookup_is_case_insensitive(self, documents_path: Path) -> None:
        assert DocumentStore(documents_path).lookup("KarKat") == DOC_ID

    def test_add_creates_file(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "documents.json"
        store = DocumentStore(path)

        store.add("Terezi", "2TzP")

        assert json.loads(path.read_text(encoding="utf-8")) == {"terezi": "2TzP"}

    def test_failed_edit_writes_nothing(self, documents_path: Path) -> None:
        store = DocumentStore(documents_path)

        with pytest.raises(RuntimeError), store.edit() as documents:
            documents["terezi"] = "2TzP"
            raise RuntimeError("abort")

        assert store.read() == {"karkat": DOC_ID}

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
    def test_malformed_registry(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "documents.json"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigError):
            DocumentStore(path).read()
