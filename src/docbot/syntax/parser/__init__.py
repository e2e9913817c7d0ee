"""Parser-combinator engine.

Module Organization:
- core.py: parse(), parse_text(), parse_or_raise() entry points
- rules.py: rule dispatch plus sequence, repetition, alternation, transform
- primitives.py: literal, pattern, predicate, end of input
- whitespace.py: whitespace skipping

Public API:
    parse: Run a rule against a Cursor
    parse_text: Run a rule against a string
    parse_or_raise: Run a rule, returning the value or raising ParseFailureError
"""

from docbot.syntax.parser.core import parse, parse_or_raise, parse_text

__all__ = ["parse", "parse_or_raise", "parse_text"]
