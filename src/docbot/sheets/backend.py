"""Cell storage behind the character sheets.

SheetBackend is the narrow interface the commands need from a spreadsheet
service: read a batch of cells, write a batch of cells. Ranges use A1
notation with the subsheet name, e.g. "CHARACTER SHEET!C12".

InMemorySheets implements it with dictionaries; it backs the console and
the test suite.
"""

from collections.abc import Iterable, Mapping
from typing import Protocol, runtime_checkable

from docbot.constants import MISSING_CELL

__all__ = ["InMemorySheets", "SheetBackend"]


@runtime_checkable
class SheetBackend(Protocol):
    """Batch cell access for one spreadsheet service."""

    def batch_get(self, doc_id: str, ranges: Iterable[str]) -> list[str]:
        """Read cells. Empty cells read as MISSING_CELL."""
        ...

    def batch_set(
        self, doc_id: str, pairs: Iterable[tuple[str, object]]
    ) -> list[tuple[str, str]]:
        """Write cells. Returns (old value, new value) per pair, in order."""
        ...


class InMemorySheets:
    """Dictionary-backed SheetBackend.

    Example:
        >>> sheets = InMemorySheets({"doc": {"SYLLADEX!B2": "10"}})
        >>> sheets.batch_get("doc", ["SYLLADEX!B2", "SYLLADEX!B3"])
        ['10', '????']
        >>> sheets.batch_set("doc", [("SYLLADEX!B2", 15)])
        [('10', '15')]
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Mapping[str, Mapping[str, object]] | None = None) -> None:
        self._cells: dict[str, dict[str, str]] = {
            doc_id: {cell: str(value) for cell, value in values.items()}
            for doc_id, values in (cells or {}).items()
        }

    def batch_get(self, doc_id: str, ranges: Iterable[str]) -> list[str]:
        document = self._cells.get(doc_id, {})
        return [document.get(cell, MISSING_CELL) for cell in ranges]

    def batch_set(
        self, doc_id: str, pairs: Iterable[tuple[str, object]]
    ) -> list[tuple[str, str]]:
        document = self._cells.setdefault(doc_id, {})
        changes = []
        for cell, value in pairs:
            old = document.get(cell, MISSING_CELL)
            document[cell] = str(value)
            changes.append((old, document[cell]))
        return changes
