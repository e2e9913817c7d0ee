"""Command syntax package.

Provides the cursor model, grammar rule definitions and the parsing engine.
Separate from runtime so grammars can be built and tested without any
dispatcher, handler or spreadsheet in the picture.

Python 3.13+.
"""

from .cursor import Cursor, ParseFailure, ParseOutcome, ParseResult
from .grammar import (
    Alternation,
    Branch,
    EndOfInput,
    GrammarRule,
    Literal,
    Pattern,
    Predicate,
    Repetition,
    Rule,
    Sequence,
    Spaces,
    Transform,
    describe,
    either,
    end_of_input,
    literal,
    many,
    pattern,
    predicate,
    regex,
    sequence,
    spaces,
    to_rule,
)
from .parser import parse, parse_or_raise, parse_text

__all__ = [
    "Alternation",
    "Branch",
    "Cursor",
    "EndOfInput",
    "GrammarRule",
    "Literal",
    "ParseFailure",
    "ParseOutcome",
    "ParseResult",
    "Pattern",
    "Predicate",
    "Repetition",
    "Rule",
    "Sequence",
    "Spaces",
    "Transform",
    "describe",
    "either",
    "end_of_input",
    "literal",
    "many",
    "parse",
    "parse_or_raise",
    "parse_text",
    "pattern",
    "predicate",
    "regex",
    "sequence",
    "spaces",
    "to_rule",
]
