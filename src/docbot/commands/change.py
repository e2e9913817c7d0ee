"""The change command: adjust vitality, experience or grist.

    change <NAME> [prospit|derse] vitality|hp|health <OPERATION> <AMOUNT>|max
    change <NAME> experience|xp|exp <OPERATION> <AMOUNT>
    change <NAME> grist {<GRIST-TYPE> <OPERATION> <AMOUNT>;}

Grist changes are separated by semicolons or newlines. Entries only skip
spaces and tabs between their words, so a newline after an amount is seen by
the separator instead of being swallowed as whitespace.
"""

import logging
import operator
from collections import Counter
from typing import Any

from docbot.constants import DEFAULT_SUBSHEET
from docbot.diagnostics import DomainError, ErrorTemplate
from docbot.enums import Operation
from docbot.runtime import CommandBinding
from docbot.syntax import Branch, either, end_of_input, literal, many, regex, sequence

from .common import (
    INTEGER,
    MOON,
    NAME,
    OPERATION,
    CommandContext,
    arguments,
    command_prefix,
    require_int,
    subsheet_for,
    to_number,
)

__all__ = ["CHANGE", "CHANGE_ARGUMENTS", "GRIST_CHANGES"]

logger = logging.getLogger(__name__)

# ============================================================================
# GRAMMAR
# ============================================================================

_VITALITY = (
    arguments()
    .add(MOON)
    .add_hidden(either("hp", "health", "vitality"))
    .add(OPERATION)
    .add(either(INTEGER, literal("max")).expecting("an integer or 'max'"))
    .named("moon", "op", "amount")
    .branch("hp")
    .expecting("vitality change")
)

_EXPERIENCE = (
    arguments()
    .add_hidden(either("xp", "experience", "exp"))
    .add(OPERATION)
    .add(INTEGER)
    .named("op", "amount")
    .branch("xp")
    .expecting("experience change")
)

_GRIST_ENTRY = (
    sequence()
    .add_spaces()
    .interleave_spaces(inline=True)
    .add(regex(r"\w+").map(str.lower).expecting("grist type"))
    .add(OPERATION)
    .add(INTEGER)
    .add_hidden(
        either(";", "\n", end_of_input()).expecting("a separator (a semicolon or a new line)")
    )
    .named("type", "op", "amount")
)

# One or more {type, op, amount} entries.
GRIST_CHANGES = many(_GRIST_ENTRY, minimum=1)

_GRIST = (
    arguments()
    .add_hidden("grist")
    .add(GRIST_CHANGES)
    .map(operator.itemgetter(0))
    .branch("grist")
    .expecting("grist change")
)

CHANGE_ARGUMENTS = (
    arguments().add(NAME).add(either(_VITALITY, _EXPERIENCE, _GRIST)).named("name", "args")
)

# ============================================================================
# HANDLERS
# ============================================================================


def change(args: dict[str, Any], context: CommandContext) -> str:
    name = args["name"]
    match args["args"]:
        case Branch("hp", fields):
            return change_vitality(context, name, **fields)
        case Branch("xp", fields):
            return change_experience(context, name, **fields)
        case Branch("grist", changes):
            return change_grist(context, name, changes)
        case other:
            raise AssertionError(f"unexpected change arguments: {other!r}")


def change_vitality(
    context: CommandContext,
    name: str,
    moon: str | None,
    op: Operation,
    amount: int | str,
) -> str:
    """Change vitality, capped at the sheet's gel viscosity."""
    subsheet = subsheet_for(moon)
    doc_id = context.documents.lookup(name)
    viscosity = require_int(context.sheets.get_cell(doc_id, subsheet, "viscosity"), "gel viscosity")
    if amount == "max":
        amount = viscosity

    current = to_number(context.sheets.get_cell(doc_id, subsheet, "vitality"))
    value = op.apply(current, int(amount))
    overflow = value > viscosity
    if overflow:
        value = viscosity

    [(_, old, new)] = context.sheets.set_data(doc_id, subsheet, [("vitality", value)])
    lines = [f"Vitality changes for {name}: was {context.show(old)}, became {context.show(new)}"]
    if overflow:
        lines.append(
            "Tried to make vitality higher than maximum value. "
            f"Value set to {context.show(viscosity)}"
        )
    if value < 0:
        lines.append("Your vitality is below zero. Good luck.")
    return "\n".join(lines)


def change_experience(context: CommandContext, name: str, op: Operation, amount: int) -> str:
    """Change experience, floored at zero."""
    doc_id = context.documents.lookup(name)
    current = to_number(context.sheets.get_cell(doc_id, DEFAULT_SUBSHEET, "xp"))
    value = op.apply(current, amount)
    underflow = value < 0
    if underflow:
        value = 0

    [(_, old, new)] = context.sheets.set_data(doc_id, DEFAULT_SUBSHEET, [("xp", value)])
    reply = f"Xp changes for {name}: was {context.show(old)}, became {context.show(new)}"
    if underflow:
        reply += "\nTried to subtract more xp than you have. Value set to 0"
    return reply


def change_grist(context: CommandContext, name: str, changes: list[dict[str, Any]]) -> str:
    """Apply several grist changes at once; nothing is written if any is rejected.

    Raises:
        DomainError: If a type repeats, is unknown, or a subtraction exceeds
            the current balance
    """
    counts = Counter(entry["type"] for entry in changes)
    repeated = [kind for kind, count in counts.items() if count > 1]
    if repeated:
        raise DomainError(ErrorTemplate.repeated_grist_type(repeated))

    doc_id = context.documents.lookup(name)
    balances = context.sheets.get_grist(doc_id, [entry["type"] for entry in changes])

    shortfalls = [
        (entry["type"], current, entry["amount"])
        for entry, (_, current) in zip(changes, balances, strict=True)
        if entry["op"] is Operation.SUB and entry["amount"] > to_number(current)
    ]
    if shortfalls:
        raise DomainError(ErrorTemplate.insufficient_grist(shortfalls))

    updates = [
        (entry["type"], entry["op"].apply(to_number(current), entry["amount"]))
        for entry, (_, current) in zip(changes, balances, strict=True)
    ]
    written = context.sheets.set_grist(doc_id, updates)
    logger.debug("Changed %d grist balances for %s", len(written), name)

    body = "\n".join(
        f"{kind}: was {context.show(old)} became {context.show(new)}" for kind, old, new in written
    )
    return f"Grist changes for {name}:\n```{body}```"


CHANGE = CommandBinding(
    name="change",
    prefix=command_prefix("change"),
    arguments=CHANGE_ARGUMENTS,
    handler=change,
    help="""change <NAME> grist {<GRIST-TYPE> <OPERATION> <AMOUNT>;}
    change grist values
    allowed operations: add, sub, set
    the list is separated either by semicolons or by newlines
    example:
        change Name grist build add 5; shale sub 5; artifact set 5
        OR
        change Name grist
        build add 5
        shale sub 5
        artifact set 5

change <NAME> experience|xp|exp <OPERATION> <AMOUNT>:
    pretty much the same as above but for xp
    allowed operations: add, sub, set

change <NAME> [prospit|derse] vitality|hp|health <OPERATION> <AMOUNT>|max:
    change health""",
)
