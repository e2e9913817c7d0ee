"""The help command: usage of every registered command."""

from docbot.runtime import CommandBinding

from .common import CommandContext, arguments, command_prefix

__all__ = ["HELP"]

HELP_HEADER = """DocBot help
all-capital words in triangle brackets are placeholders
square brackets mean optional parameters
curly braces mean multiple arguments
`|` means `or`

commands:
```
"""


def show_help(_args: object, _context: CommandContext) -> str:
    # Lazy import: the command table imports this module
    from docbot.commands import ALL_COMMANDS  # noqa: PLC0415

    return HELP_HEADER + "\n".join(binding.help for binding in ALL_COMMANDS) + "```"


HELP = CommandBinding(
    name="help",
    prefix=command_prefix("help"),
    arguments=arguments(),
    handler=show_help,
    help="help: show this message",
)
