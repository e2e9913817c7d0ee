"""The roll command: dice expressions and trait checks.

    roll <NUM>d<SIZE> {+|- <MODIFIER>}
    roll <NAME> [prospit|derse] <TRAIT>
"""

from typing import Any

from docbot.constants import MAX_DICE, ROLLS_PER_ROW, TRAIT_DIE
from docbot.diagnostics import DomainError, ErrorTemplate
from docbot.runtime import CommandBinding
from docbot.syntax import Branch, either, many, regex, sequence

from .common import MOON, NAME, CommandContext, arguments, command_prefix, require_int, subsheet_for

__all__ = ["DICE_EXPRESSION", "ROLL", "ROLL_ARGUMENTS", "describe_roll"]

# ============================================================================
# GRAMMAR
# ============================================================================

_POSITIVE = regex(r"[1-9][0-9]*").map(int)

_DICE = (
    sequence()
    .add_spaces()
    .add(_POSITIVE)
    .add_hidden("d")
    .add(_POSITIVE)
    .add_spaces()
    .expecting("dice description (XdY)")
)

_MODIFIER = (
    arguments()
    .add(either("+", "-").expecting("an operation (+|-)"))
    .add(_POSITIVE.expecting("an integer (dice modifier)"))
    .named("op", "mod")
)


def _dice_fields(values: list[Any]) -> dict[str, Any]:
    (num, size), mods = values
    return {"num": num, "size": size, "mods": mods}


# "2d8 - 1" -> {"num": 2, "size": 8, "mods": [{"op": "-", "mod": 1}]}
DICE_EXPRESSION = sequence().add(_DICE).add(many(_MODIFIER)).map(_dice_fields)

_TRAIT_ROLL = (
    arguments()
    .add(NAME)
    .add(MOON)
    .add(regex(r"\w+").expecting("a trait"))
    .named("name", "moon", "trait")
    .branch("trait")
)

ROLL_ARGUMENTS = either(_TRAIT_ROLL, DICE_EXPRESSION.branch("custom")).expecting(
    "roll description"
)

# ============================================================================
# HANDLERS
# ============================================================================


def describe_roll(num: int, size: int, mods: list[dict[str, Any]]) -> str:
    """Canonical text of a dice expression.

    Example:
        >>> describe_roll(2, 8, [{"op": "-", "mod": 1}])
        '2d8 - 1'
    """
    return f"{num}d{size}{_modifier_text(mods)}"


def _modifier_text(mods: list[dict[str, Any]]) -> str:
    return "".join(f" {mod['op']} {mod['mod']}" for mod in mods)


def _modifier_total(mods: list[dict[str, Any]]) -> int:
    return sum(mod["mod"] if mod["op"] == "+" else -mod["mod"] for mod in mods)


def _decorate(result: int, size: int) -> str:
    """Bold the natural 1 and the natural 20 of a d20."""
    if size == TRAIT_DIE and result in (1, TRAIT_DIE):
        return f"**{result}**"
    return str(result)


def roll(args: Branch[Any], context: CommandContext) -> str:
    match args:
        case Branch("trait", fields):
            return roll_trait(context, **fields)
        case Branch("custom", fields):
            return roll_custom(context, **fields)
        case other:
            raise AssertionError(f"unexpected roll arguments: {other!r}")


def roll_trait(context: CommandContext, name: str, moon: str | None, trait: str) -> str:
    """Roll 1d20 plus the modifier of a character's trait."""
    subsheet = subsheet_for(moon)
    context.sheets.resolve_trait(subsheet, trait)
    doc_id = context.documents.lookup(name)
    modifier = require_int(
        context.sheets.get_trait_modifier(doc_id, subsheet, trait), f"{trait} modifier"
    )

    result = context.rng.randint(1, TRAIT_DIE)
    sign = "-" if modifier < 0 else "+"
    return (
        f"roll (1d{TRAIT_DIE} + {trait}): {_decorate(result, TRAIT_DIE)} "
        f"{sign} {abs(modifier)} = __{result + modifier}__"
    )


def roll_custom(context: CommandContext, num: int, size: int, mods: list[dict[str, Any]]) -> str:
    """Roll NUMdSIZE and add the modifiers.

    One die prints its result, up to ROLLS_PER_ROW dice print inline, and
    anything larger prints as a padded grid.

    Raises:
        DomainError: If more than MAX_DICE dice are requested
    """
    if num > MAX_DICE:
        raise DomainError(ErrorTemplate.too_many_dice(num, MAX_DICE))

    modifiers = _modifier_text(mods)
    header = f"roll ({describe_roll(num, size, mods)}):"
    rolls = [context.rng.randint(1, size) for _ in range(num)]
    total = sum(rolls) + _modifier_total(mods)

    if num == 1:
        return f"{header} {_decorate(rolls[0], size)}{modifiers} = __{total}__"
    if num <= ROLLS_PER_ROW:
        return f"{header} `[{' + '.join(map(str, rolls))}]`{modifiers} = __{total}__"

    width = max(len(str(result)) for result in rolls)
    rows = (
        "    " + " + ".join(str(result).ljust(width) for result in rolls[i : i + ROLLS_PER_ROW])
        for i in range(0, num, ROLLS_PER_ROW)
    )
    return f"{header}```[\n" + "\n".join(rows) + f"\n]```{modifiers} = __{total}__"


ROLL = CommandBinding(
    name="roll",
    prefix=command_prefix("roll"),
    arguments=ROLL_ARGUMENTS,
    handler=roll,
    help="""roll <NUM>d<SIZE> {+|- <MODIFIER>}:
    rolls dice
    example:
        roll 1d20
        roll 10d4 + 5 - 1
        roll 2d8 - 1

roll <NAME> [prospit|derse] <TRAIT>:
    rolls 1d20 using specified trait as a modifier
    example:
        roll Name str""",
)
