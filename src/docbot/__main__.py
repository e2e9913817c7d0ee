"""Console for DocBot: `python -m docbot`.

Reads commands from stdin, one per line, and prints each reply. A line
ending with a backslash continues on the next line, so multi-line commands
(grist changes separated by newlines) can be typed too.

With --parse, prints which command a string matches and the parsed
arguments, without running any handler or reading configuration.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable, Iterator

from docbot.commands import ALL_COMMANDS, CommandContext, build_dispatcher
from docbot.config import load_config
from docbot.diagnostics import ConfigError
from docbot.runtime import Dispatcher
from docbot.syntax import ParseFailure

logger = logging.getLogger("docbot")

_CONTINUATION = "\\"


def _parse_cmd(text: str) -> None:
    """Print how `text` parses, in `> input / command / value` form."""
    dispatcher = Dispatcher(ALL_COMMANDS, context=None)
    print(f"> {text}")

    found = dispatcher.match(text)
    if found is None:
        print("command: none")
        return

    binding, outcome = found
    print(f"command: {binding.name}")
    if isinstance(outcome, ParseFailure):
        print(f"error: {outcome.message}")
    else:
        print(f"value: {outcome.value!r}")


def _commands(lines: Iterable[str]) -> Iterator[str]:
    """Join backslash-continued lines into single commands."""
    pending: list[str] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if line.endswith(_CONTINUATION):
            pending.append(line[: -len(_CONTINUATION)])
            continue
        pending.append(line)
        yield "\n".join(pending)
        pending = []
    if pending:
        yield "\n".join(pending)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="docbot",
        description="Run DocBot commands against character sheets.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive console, config from $CONFIG:
  python -m docbot

  # Show how a command parses:
  python -m docbot --parse "roll 2d8 - 1"
""",
    )
    parser.add_argument("--config", "-c", help="Configuration file (default: $CONFIG)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug messages")
    parser.add_argument("--parse", metavar="TEXT", help="Parse TEXT and print the result")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.parse is not None:
        _parse_cmd(args.parse)
        return 0

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(e.diagnostic.format_error() if e.diagnostic else str(e), file=sys.stderr)
        return 2

    dispatcher = build_dispatcher(CommandContext.from_config(config))
    logger.info("Reading commands from stdin")
    for command in _commands(sys.stdin):
        if not command.strip():
            continue
        try:
            reply = dispatcher.dispatch(command).reply
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.exception("Command failed: %s", command[:80])
            reply = f"Error: {e}"
        print(reply)
    return 0


if __name__ == "__main__":
    sys.exit(main())
