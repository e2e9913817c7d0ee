"""DocBot commands.

ALL_COMMANDS is the command table in matching order. build_dispatcher()
wires it to a handler context.

Exports:
    ALL_COMMANDS: Every CommandBinding, in matching order
    CommandContext: Collaborators handed to every handler
    build_dispatcher: Dispatcher over ALL_COMMANDS
"""

from typing import Any

from docbot.runtime import CommandBinding, Dispatcher

from .change import CHANGE
from .common import CommandContext
from .documents import ADD_DOCUMENT, LIST_DOCUMENTS, REMOVE_DOCUMENT
from .help import HELP
from .roll import ROLL
from .show import SHOW

__all__ = ["ALL_COMMANDS", "CommandContext", "build_dispatcher"]

ALL_COMMANDS: tuple[CommandBinding, ...] = (
    HELP,
    ADD_DOCUMENT,
    REMOVE_DOCUMENT,
    LIST_DOCUMENTS,
    SHOW,
    CHANGE,
    ROLL,
)


def build_dispatcher(context: CommandContext, **options: Any) -> Dispatcher:
    """Dispatcher over ALL_COMMANDS; options are passed to Dispatcher."""
    return Dispatcher(ALL_COMMANDS, context, **options)
