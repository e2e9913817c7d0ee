"""Document registry: character names mapped to spreadsheet ids.

The registry is a JSON object stored in one file. Names are stored
lower-cased, so lookups are case-insensitive. A missing file reads as an
empty registry.

Python 3.13+.
"""

import json
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from docbot.diagnostics import ConfigError, DomainError, ErrorTemplate

__all__ = ["DocumentStore"]

logger = logging.getLogger(__name__)


class DocumentStore:
    """JSON file of name -> document id.

    Thread Safety:
        edit() holds a lock for the whole read-modify-write cycle.
        Other processes writing the same file are not coordinated with.

    Example:
        >>> store = DocumentStore(tmp_path / "documents.json")  # doctest: +SKIP
        >>> store.add("Karkat", "1AbC")  # doctest: +SKIP
        >>> store.lookup("karkat")  # doctest: +SKIP
        '1AbC'
    """

    __slots__ = ("_lock", "_path")

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> dict[str, str]:
        """Current registry contents."""
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(ErrorTemplate.config_invalid(str(self._path), str(e))) from e
        if not isinstance(data, dict):
            raise ConfigError(ErrorTemplate.config_invalid(str(self._path), "not a JSON object"))
        return data

    @contextmanager
    def edit(self) -> Iterator[dict[str, str]]:
        """Yield the registry for modification.

        Changes are written back only when the block exits normally.
        """
        with self._lock:
            documents = self.read()
            yield documents
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(documents, indent=4), encoding="utf-8")
            logger.debug("Saved %d documents to %s", len(documents), self._path)

    def add(self, name: str, doc_id: str) -> None:
        """Register a document.

        Raises:
            DomainError: If the name is already registered
        """
        with self.edit() as documents:
            key = name.lower()
            if key in documents:
                raise DomainError(ErrorTemplate.document_exists(name))
            documents[key] = doc_id
        logger.info("Registered document %s", key)

    def remove(self, name: str) -> None:
        """Unregister a document.

        Raises:
            DomainError: If the name is not registered
        """
        with self.edit() as documents:
            key = name.lower()
            if key not in documents:
                raise DomainError(ErrorTemplate.document_missing(name))
            del documents[key]
        logger.info("Removed document %s", key)

    def lookup(self, name: str) -> str:
        """Document id registered under a name.

        Raises:
            DomainError: If the name is not registered
        """
        try:
            return self.read()[name.lower()]
        except KeyError:
            raise DomainError(ErrorTemplate.document_missing(name)) from None
