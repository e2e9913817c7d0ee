"""The show command: read grist, traits or arbitrary stats from a sheet.

    show <NAME> grist
    show <NAME> [prospit|derse] traits
    show <NAME> [prospit|derse] {<STAT>}
"""

import operator
from itertools import zip_longest
from typing import Any

from docbot.runtime import CommandBinding
from docbot.syntax import Branch, either, many, regex, sequence

from .common import MOON, NAME, CommandContext, arguments, command_prefix, subsheet_for

__all__ = ["SHOW", "SHOW_ARGUMENTS"]

# Grist is printed in two columns of this many rows.
_GRIST_ROWS = 6
_COLUMN_GAP = 5

_STATS = (
    many(sequence().add_spaces().add(regex(r"\w+")).map(operator.itemgetter(0)), minimum=1)
    .expecting("a space-separated list of stats")
    .branch("other-stats")
)


def _lift_stats_branch(args: Branch[Any]) -> Branch[Any]:
    """Branch("stats", {moon, stats: Branch(tag, v)}) -> Branch(tag, {moon, stats: v})."""
    if args.tag != "stats":
        return args
    inner: Branch[Any] = args.value["stats"]
    return Branch(inner.tag, {"moon": args.value["moon"], "stats": inner.value})


SHOW_ARGUMENTS = (
    arguments()
    .add(NAME)
    .add(
        either(
            regex(r"grist\b").expecting("'grist'").branch("grist"),
            arguments()
            .add(MOON)
            .add(either(regex(r"traits\b").expecting("'traits'").branch("traits"), _STATS))
            .named("moon", "stats")
            .branch("stats"),
        ).map(_lift_stats_branch)
    )
    .named("name", "args")
)


def show(args: dict[str, Any], context: CommandContext) -> str:
    name = args["name"]
    doc_id = context.documents.lookup(name)

    match args["args"]:
        case Branch("grist", _):
            return _show_grist(name, doc_id, context)
        case Branch("traits", {"moon": moon}):
            subsheet = subsheet_for(moon)
            traits = context.sheets.get_traits(doc_id, subsheet)
            body = "\n".join(
                f"{trait}: {context.show(rating)} ({context.show(mod)})"
                for trait, rating, mod in traits
            )
            return f"\n{_title(moon, name)} traits:\n```{body}```"
        case Branch("other-stats", {"moon": moon, "stats": stats}):
            subsheet = subsheet_for(moon)
            data = context.sheets.get_data(doc_id, subsheet, stats)
            body = "\n".join(f"{stat}: {context.show(value)}" for stat, value in data)
            return f"\n{_title(moon, name)}:\n```{body}```"
        case other:
            raise AssertionError(f"unexpected show arguments: {other!r}")


def _title(moon: str | None, name: str) -> str:
    return f"{moon} {name}" if moon else name


def _pad_column(pairs: list[tuple[str, str]]) -> list[str]:
    if not pairs:
        return []
    width = max(len(kind) for kind, _ in pairs)
    return [f"{kind}:" + " " * (width - len(kind) + 1) + value for kind, value in pairs]


def _show_grist(name: str, doc_id: str, context: CommandContext) -> str:
    grist = [(kind, context.show(value)) for kind, value in context.sheets.get_grist(doc_id)]
    first = _pad_column(grist[:_GRIST_ROWS])
    second = _pad_column(grist[_GRIST_ROWS:])

    width = max((len(line) for line in first), default=0) + _COLUMN_GAP
    rows = zip_longest(first, second, fillvalue="")
    body = "\n".join((left.ljust(width) + right).rstrip() for left, right in rows)
    return f"\n{name} grist:\n```{body}```"


SHOW = CommandBinding(
    name="show",
    prefix=command_prefix("show"),
    arguments=SHOW_ARGUMENTS,
    handler=show,
    help="""show <NAME> grist
show <NAME> [prospit|derse] traits
show <NAME> [prospit|derse] {<STAT>}:
    show specified stats
    the list is space-separated
    example:
        show Name vitality luck""",
)
