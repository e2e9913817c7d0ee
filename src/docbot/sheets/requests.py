"""Named reads and writes against a character sheet.

SheetRequests turns field names, traits and grist types into A1 ranges using
the configured document map, then talks to a SheetBackend in batches.

Field lookup is case-insensitive: the lower-cased name is tried against the
subsheet's map first, then through the alias table. Traits are looked up by
upper-cased abbreviation first, then through the alias table.

Python 3.13+.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from docbot.constants import GRIST_SUBSHEET, GRIST_TYPES, TRAITS
from docbot.diagnostics import DomainError, ErrorTemplate

from .backend import SheetBackend

__all__ = ["SheetRequests"]

logger = logging.getLogger(__name__)

# Subsheet keys that hold tables rather than cell addresses.
_TABLE_KEYS: frozenset[str] = frozenset({"traits", "grist"})


class SheetRequests:
    """Document-map aware access to one SheetBackend.

    Example:
        >>> from docbot.sheets import InMemorySheets
        >>> docmap = {"CHARACTER SHEET": {"xp": "C7"}}
        >>> requests = SheetRequests(InMemorySheets({"doc": {"CHARACTER SHEET!C7": 3}}), docmap)
        >>> requests.get_data("doc", "CHARACTER SHEET", ["experience"])
        [('experience', '3')]
    """

    __slots__ = ("_aliases", "_backend", "_docmap")

    def __init__(
        self,
        backend: SheetBackend,
        docmap: Mapping[str, Mapping[str, Any]],
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        self._backend = backend
        self._docmap = docmap
        self._aliases = aliases if aliases is not None else {}

    @property
    def backend(self) -> SheetBackend:
        return self._backend

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def subsheet(self, name: str) -> Mapping[str, Any]:
        """Field map of a subsheet.

        Raises:
            DomainError: If the subsheet is not in the document map
        """
        try:
            return self._docmap[name]
        except KeyError:
            raise DomainError(ErrorTemplate.unknown_subsheet(name)) from None

    def resolve_field(self, subsheet: str, field: str) -> str:
        """Canonical map key for a field name.

        Raises:
            DomainError: If neither the name nor its alias is mapped
        """
        fields = self.subsheet(subsheet)
        lowered = field.lower()
        for candidate in (lowered, self._aliases.get(lowered)):
            if candidate is not None and candidate not in _TABLE_KEYS and candidate in fields:
                return candidate
        raise DomainError(ErrorTemplate.unknown_field(field))

    def resolve_trait(self, subsheet: str, trait: str) -> str:
        """Canonical abbreviation for a trait ("strength" -> "STR").

        Raises:
            DomainError: If the trait is unknown or the subsheet has no traits
        """
        traits = self._traits(subsheet)
        for candidate in (trait.upper(), self._aliases.get(trait.lower())):
            if candidate in TRAITS and candidate in traits:
                return candidate
        raise DomainError(ErrorTemplate.unknown_trait(trait))

    def _traits(self, subsheet: str) -> Mapping[str, Any]:
        traits = self.subsheet(subsheet).get("traits")
        if traits is None:
            raise DomainError(ErrorTemplate.unknown_field("traits"))
        return traits

    def _grist_cells(self, types: Sequence[str]) -> list[str]:
        invalid = [kind for kind in types if kind.lower() not in GRIST_TYPES]
        if invalid:
            raise DomainError(ErrorTemplate.invalid_grist_types(invalid))

        gristmap = self.subsheet(GRIST_SUBSHEET).get("grist", {})
        cells = []
        for kind in types:
            cell = gristmap.get(kind.lower())
            if cell is None:
                raise DomainError(ErrorTemplate.unknown_field(f"grist {kind}"))
            cells.append(f"{GRIST_SUBSHEET}!{cell}")
        return cells

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def get_data(
        self, doc_id: str, subsheet: str, fields: Sequence[str]
    ) -> list[tuple[str, str]]:
        """Read fields. Returns (field as given, value) pairs."""
        fields_map = self.subsheet(subsheet)
        ranges = [
            f"{subsheet}!{fields_map[self.resolve_field(subsheet, field)]}" for field in fields
        ]
        values = self._backend.batch_get(doc_id, ranges)
        logger.debug("Read %d fields from %s", len(ranges), subsheet)
        return list(zip(fields, values, strict=True))

    def get_cell(self, doc_id: str, subsheet: str, field: str) -> str:
        """Read one field."""
        [(_, value)] = self.get_data(doc_id, subsheet, [field])
        return value

    def set_data(
        self, doc_id: str, subsheet: str, pairs: Iterable[tuple[str, object]]
    ) -> list[tuple[str, str, str]]:
        """Write fields. Returns (canonical field, old value, new value) triples."""
        fields_map = self.subsheet(subsheet)
        resolved = [(self.resolve_field(subsheet, field), value) for field, value in pairs]
        changes = self._backend.batch_set(
            doc_id, [(f"{subsheet}!{fields_map[field]}", value) for field, value in resolved]
        )
        logger.debug("Wrote %d fields to %s", len(resolved), subsheet)
        return [
            (field, old, new) for (field, _), (old, new) in zip(resolved, changes, strict=True)
        ]

    # ------------------------------------------------------------------
    # Traits
    # ------------------------------------------------------------------

    def get_traits(self, doc_id: str, subsheet: str) -> list[tuple[str, str, str]]:
        """Read every trait. Returns (trait, rating, modifier) triples."""
        traits = self._traits(subsheet)
        ratings = [f"{subsheet}!{traits['rating']}{traits[trait]}" for trait in TRAITS]
        mods = [f"{subsheet}!{traits['mod']}{traits[trait]}" for trait in TRAITS]
        values = self._backend.batch_get(doc_id, ratings + mods)
        return list(zip(TRAITS, values[: len(TRAITS)], values[len(TRAITS) :], strict=True))

    def get_trait_modifier(self, doc_id: str, subsheet: str, trait: str) -> str:
        """Read the modifier of one trait."""
        traits = self._traits(subsheet)
        row = traits[self.resolve_trait(subsheet, trait)]
        [value] = self._backend.batch_get(doc_id, [f"{subsheet}!{traits['mod']}{row}"])
        return value

    # ------------------------------------------------------------------
    # Grist
    # ------------------------------------------------------------------

    def grist_types(self) -> tuple[str, ...]:
        """Known grist types that have a cell in the document map."""
        gristmap = self._docmap.get(GRIST_SUBSHEET, {}).get("grist", {})
        return tuple(kind for kind in GRIST_TYPES if kind in gristmap)

    def get_grist(
        self, doc_id: str, types: Sequence[str] | None = None
    ) -> list[tuple[str, str]]:
        """Read grist balances. Defaults to every mapped grist type.

        Raises:
            DomainError: If a type is not a known grist type
        """
        if types is None:
            types = self.grist_types()
        values = self._backend.batch_get(doc_id, self._grist_cells(types))
        return list(zip(types, values, strict=True))

    def set_grist(
        self, doc_id: str, pairs: Sequence[tuple[str, object]]
    ) -> list[tuple[str, str, str]]:
        """Write grist balances. Returns (type, old value, new value) triples."""
        cells = self._grist_cells([kind for kind, _ in pairs])
        changes = self._backend.batch_set(
            doc_id, [(cell, value) for cell, (_, value) in zip(cells, pairs, strict=True)]
        )
        logger.debug("Wrote %d grist balances", len(changes))
        return [
            (kind, old, new) for (kind, _), (old, new) in zip(pairs, changes, strict=True)
        ]
