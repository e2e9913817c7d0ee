"""Character sheet access.

Exports:
    SheetBackend: Protocol for batch cell reads and writes
    InMemorySheets: Dictionary-backed SheetBackend
    SheetRequests: Field, trait and grist access through the document map
    DocumentStore: JSON registry of character names to document ids
"""

from .backend import InMemorySheets, SheetBackend
from .documents import DocumentStore
from .requests import SheetRequests

__all__ = ["DocumentStore", "InMemorySheets", "SheetBackend", "SheetRequests"]
