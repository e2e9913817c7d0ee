"""Pieces shared by every command: the handler context and grammar helpers.

Grammar helpers are built once at import time; rules are immutable, so the
same helper can appear in any number of command grammars.

Python 3.13+.
"""

import random
from dataclasses import dataclass, field

from docbot.config import BotConfig
from docbot.constants import DEFAULT_SUBSHEET
from docbot.diagnostics import DomainError, ErrorTemplate
from docbot.enums import Operation
from docbot.locale_utils import format_amount
from docbot.sheets import DocumentStore, InMemorySheets, SheetBackend, SheetRequests
from docbot.syntax import Sequence, either, regex, sequence

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Context
    "CommandContext",
    # Grammar helpers
    "NAME",
    "DOC_ID",
    "MOON",
    "OPERATION",
    "INTEGER",
    "arguments",
    "command_prefix",
    # Value helpers
    "subsheet_for",
    "to_number",
    "require_int",
]


# ============================================================================
# CONTEXT
# ============================================================================


@dataclass(slots=True)
class CommandContext:
    """Everything a handler needs besides its parsed arguments.

    Attributes:
        config: Bot configuration
        documents: Registry of character names to document ids
        sheets: Sheet access through the configured document map
        rng: Random source for dice; seed it for reproducible rolls
    """

    config: BotConfig
    documents: DocumentStore
    sheets: SheetRequests
    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def from_config(
        cls,
        config: BotConfig,
        backend: SheetBackend | None = None,
        rng: random.Random | None = None,
    ) -> "CommandContext":
        """Build a context; without a backend, cells live in memory seeded from config."""
        if backend is None:
            backend = InMemorySheets(config.sheets)
        return cls(
            config=config,
            documents=DocumentStore(config.documents),
            sheets=SheetRequests(backend, config.docmap, config.aliases),
            rng=rng if rng is not None else random.Random(),
        )

    def show(self, value: int | str) -> str:
        """Format a sheet value for a reply using the configured locale."""
        return format_amount(value, self.config.locale)


# ============================================================================
# GRAMMAR HELPERS
# ============================================================================

NAME = regex(r"[a-zA-Z]\w*").expecting("name")

DOC_ID = regex(r"[0-9a-zA-Z_\-]+").expecting("document id")

# Optional dream moon; yields "PROSPIT", "DERSE" or None.
MOON = either(regex(r"[Pp]rospit\b"), regex(r"[Dd]erse\b")).map(str.upper).opt()

OPERATION = either("add", "sub", "set").map(Operation).expecting("an operation (add|sub|set)")

INTEGER = regex(r"[0-9]+").map(int).expecting("an integer")


def arguments() -> Sequence:
    """Empty argument chain that skips whitespace around every member."""
    return sequence().interleave_spaces()


def command_prefix(*words: str) -> Sequence:
    """Command words separated by whitespace, e.g. command_prefix("add", "document")."""
    prefix = arguments()
    for word in words:
        prefix = prefix.add(word)
    return prefix


# ============================================================================
# VALUE HELPERS
# ============================================================================


def subsheet_for(moon: str | None) -> str:
    return moon or DEFAULT_SUBSHEET


def to_number(value: str) -> int:
    """Sheet cell as an integer; blank or non-numeric cells count as 0."""
    try:
        return int(value.strip())
    except ValueError:
        return 0


def require_int(value: str, label: str) -> int:
    """Sheet cell as an integer.

    Raises:
        DomainError: If the cell does not hold an integer
    """
    try:
        return int(value.strip())
    except ValueError:
        raise DomainError(ErrorTemplate.invalid_cell_value(label, value)) from None
