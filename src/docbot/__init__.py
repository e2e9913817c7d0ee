"""DocBot - chat command bot for spreadsheet character sheets.

Commands are parsed by a small parser-combinator engine: grammars are trees
of immutable rules, parse failures are values carrying an offset and a
human-readable expectation, and backtracking never uses exceptions.

Public API:
    Dispatcher - Routes command strings to handlers
    CommandBinding - One command's prefix, arguments and handler
    parse_text - Run a rule against a string
    parse_or_raise - Run a rule, raising ParseFailureError on failure
    literal, regex, pattern, sequence, many, either, ... - Grammar builders
    build_dispatcher - Dispatcher over the built-in commands
    load_config - Read BotConfig from JSON

Exceptions:
    DocbotError - Base exception class
    GrammarError - Malformed grammar
    ParseFailureError - Parse failure raised by parse_or_raise
    DomainError - Request rejected by a command
    ConfigError - Invalid configuration

Submodules:
    docbot.syntax - Cursor, rules and the parsing engine
    docbot.runtime - Dispatcher
    docbot.commands - Built-in commands
    docbot.sheets - Sheet backend, requests and document registry
    docbot.diagnostics - Error types and message templates
"""

from .commands import ALL_COMMANDS, CommandContext, build_dispatcher
from .config import BotConfig, load_config
from .diagnostics import (
    ConfigError,
    DocbotError,
    DomainError,
    GrammarError,
    ParseFailureError,
)
from .runtime import CommandBinding, DispatchOutcome, Dispatcher
from .syntax import (
    Branch,
    Cursor,
    ParseFailure,
    ParseResult,
    either,
    end_of_input,
    literal,
    many,
    parse,
    parse_or_raise,
    parse_text,
    pattern,
    predicate,
    regex,
    sequence,
    spaces,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("docbot")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ALL_COMMANDS",
    "BotConfig",
    "Branch",
    "CommandBinding",
    "CommandContext",
    "ConfigError",
    "Cursor",
    "DispatchOutcome",
    "Dispatcher",
    "DocbotError",
    "DomainError",
    "GrammarError",
    "ParseFailure",
    "ParseFailureError",
    "ParseResult",
    "__version__",
    "build_dispatcher",
    "either",
    "end_of_input",
    "literal",
    "load_config",
    "many",
    "parse",
    "parse_or_raise",
    "parse_text",
    "pattern",
    "predicate",
    "regex",
    "sequence",
    "spaces",
]
