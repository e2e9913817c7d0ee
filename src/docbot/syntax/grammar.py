"""Grammar rule definitions and the fluent build API.

A grammar is a tree of immutable rule values. The set of rule kinds is
closed (see GrammarRule at the end of this module); the engine in
docbot.syntax.parser dispatches over it with a single match statement.

Every builder method returns a NEW rule. Nothing is ever mutated in place,
so a grammar built once at import time can be shared by any number of
concurrent parses.

Example:
    >>> dice = (
    ...     sequence()
    ...     .add(regex(r"[1-9][0-9]*").map(int))
    ...     .add_hidden("d")
    ...     .add(regex(r"[1-9][0-9]*").map(int))
    ...     .named("num", "size")
    ... )

Python 3.13+. Zero external dependencies.
"""

import operator
import re
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from functools import partial
from typing import Any, Self, assert_never

from docbot.diagnostics import ErrorTemplate, GrammarError

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Values produced by transforms
    "Branch",
    # Rule kinds
    "Rule",
    "Literal",
    "Pattern",
    "Predicate",
    "EndOfInput",
    "Spaces",
    "Sequence",
    "Repetition",
    "Alternation",
    "Transform",
    "GrammarRule",
    # Factories
    "literal",
    "pattern",
    "regex",
    "predicate",
    "end_of_input",
    "spaces",
    "sequence",
    "many",
    "either",
    "to_rule",
    "describe",
]


# ============================================================================
# TRANSFORM VALUES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Branch[T]:
    """Tagged value produced by Rule.branch().

    Lets handlers switch on which alternative of an Alternation matched:

        match args:
            case Branch("grist", changes): ...
            case Branch("xp", change): ...
    """

    tag: str
    value: T


@dataclass(frozen=True, slots=True)
class _FieldBinder:
    """Zip a sequence's visible values with field names."""

    names: tuple[str, ...]

    def __call__(self, values: list[Any]) -> dict[str, Any]:
        return dict(zip(self.names, values, strict=True))


def _first_or_none(values: list[Any]) -> Any:
    return values[0] if values else None


# ============================================================================
# RULE KINDS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Rule:
    """Base class holding the attributes every rule kind shares.

    Attributes:
        expectation: Override for the human-readable description used in
            error messages (None means the kind's default description)
        hidden: Hidden rules must still match, but their value is dropped
            from a parent Sequence and their description is left out of
            composed expectations
    """

    expectation: str | None = field(default=None, kw_only=True)
    hidden: bool = field(default=False, kw_only=True)

    def expects(self) -> str:
        """Human-readable description of what this rule matches."""
        return describe(self)  # type: ignore[arg-type]

    def hide(self) -> Self:
        return replace(self, hidden=True)

    def expecting(self, text: str) -> Self:
        """Override the description used in error messages."""
        return replace(self, expectation=text)

    def map(self, func: Callable[[Any], Any]) -> "Transform":
        """Apply a pure function to the value on success."""
        return Transform(self, func)  # type: ignore[arg-type]

    def branch(self, tag: str) -> "Transform":
        """Wrap the value on success as Branch(tag, value)."""
        return Transform(self, partial(Branch, tag))  # type: ignore[arg-type]

    def opt(self) -> "Transform":
        """Match zero or one time; yields None or the single value."""
        return Repetition(self, maximum=1).map(_first_or_none)  # type: ignore[arg-type]

    def named(self, *names: str) -> "Transform":
        """Bind a Sequence's visible values to field names, yielding a dict.

        Raises:
            GrammarError: If this rule is not a Sequence, a name repeats, or
                the number of names differs from the number of visible members
        """
        if not isinstance(self, Sequence):
            raise GrammarError(ErrorTemplate.named_target_not_sequence(type(self).__name__))
        seen: set[str] = set()
        for name in names:
            if name in seen:
                raise GrammarError(ErrorTemplate.duplicate_field_name(name))
            seen.add(name)
        visible = len(self.visible_members())
        if len(names) != visible:
            raise GrammarError(ErrorTemplate.field_count_mismatch(names, visible))
        return Transform(self, _FieldBinder(names))


@dataclass(frozen=True, slots=True)
class Literal(Rule):
    """Exact word, consumed as-is. Yields the matched input text."""

    word: str
    ignore_case: bool = False

    def case_insensitive(self) -> "Literal":
        return replace(self, ignore_case=True)


@dataclass(frozen=True, slots=True)
class Pattern(Rule):
    """Regular expression anchored at the cursor.

    Yields (full match, *groups). Use regex() for the full-match string only.
    """

    regex: re.Pattern[str]


@dataclass(frozen=True, slots=True)
class Predicate(Rule):
    """Single character accepted by `test`."""

    test: Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class EndOfInput(Rule):
    """Matches only when nothing is left. Consumes nothing, yields None."""


@dataclass(frozen=True, slots=True)
class Spaces(Rule):
    """Zero or more whitespace characters. Always succeeds, always hidden.

    With inline=True only spaces and tabs are skipped, leaving newlines for
    grammars that use them as separators.
    """

    inline: bool = False
    hidden: bool = field(default=True, kw_only=True)


@dataclass(frozen=True, slots=True)
class Sequence(Rule):
    """Members matched one after another; yields a list of visible values.

    Attributes:
        members: Rules in match order
        interleave: When set, add()/add_hidden() append a hidden Spaces rule
            after the new member
        inline_spaces: Flavor of the interleaved Spaces rules
    """

    members: tuple["GrammarRule", ...] = ()
    interleave: bool = False
    inline_spaces: bool = False

    def visible_members(self) -> tuple["GrammarRule", ...]:
        return tuple(member for member in self.members if not member.hidden)

    def _append(self, rule: "GrammarRule") -> "Sequence":
        seq = replace(self, members=(*self.members, rule))
        if seq.interleave:
            seq = seq.add_spaces(inline=seq.inline_spaces)
        return seq

    def add(self, rule: object) -> "Sequence":
        return self._append(to_rule(rule))

    def add_hidden(self, rule: object) -> "Sequence":
        """Append a member that must match but contributes no value."""
        return self._append(to_rule(rule).hide())

    def add_spaces(self, *, inline: bool = False) -> "Sequence":
        return replace(self, members=(*self.members, Spaces(inline)))

    def interleave_spaces(self, *, inline: bool = False) -> "Sequence":
        """Skip whitespace now and after every member appended from here on."""
        seq = replace(self, interleave=True, inline_spaces=inline)
        if not seq.members or not isinstance(seq.members[-1], Spaces):
            seq = seq.add_spaces(inline=inline)
        return seq

    def no_interleave_spaces(self) -> "Sequence":
        """Stop interleaving, dropping a trailing whitespace rule."""
        seq = replace(self, interleave=False)
        if seq.members and isinstance(seq.members[-1], Spaces):
            seq = replace(seq, members=seq.members[:-1])
        return seq


@dataclass(frozen=True, slots=True)
class Repetition(Rule):
    """Sub-rule matched between `minimum` and `maximum` times; yields a list.

    Raises:
        GrammarError: On negative counts or maximum below minimum
    """

    rule: "GrammarRule"
    minimum: int = 0
    maximum: int | None = None

    def __post_init__(self) -> None:
        if self.minimum < 0 or (
            self.maximum is not None and (self.maximum < 0 or self.maximum < self.minimum)
        ):
            raise GrammarError(
                ErrorTemplate.invalid_repetition_bounds(self.minimum, self.maximum)
            )

    def at_least(self, count: int) -> "Repetition":
        return replace(self, minimum=count)

    def at_most(self, count: int | None) -> "Repetition":
        return replace(self, maximum=count)


@dataclass(frozen=True, slots=True)
class Alternation(Rule):
    """Ordered choice: the first candidate that matches wins."""

    candidates: tuple["GrammarRule", ...] = ()

    def add(self, rule: object) -> "Alternation":
        return replace(self, candidates=(*self.candidates, to_rule(rule)))

    def add_hidden(self, rule: object) -> "Alternation":
        """Append a candidate left out of the composed error text (synonyms)."""
        return replace(self, candidates=(*self.candidates, to_rule(rule).hide()))


@dataclass(frozen=True, slots=True)
class Transform(Rule):
    """Sub-rule whose value is passed through `func` on success."""

    rule: "GrammarRule"
    func: Callable[[Any], Any]


# ============================================================================
# FACTORIES
# ============================================================================


def literal(word: str, *, ignore_case: bool = False) -> Literal:
    return Literal(word, ignore_case)


def pattern(source: str | re.Pattern[str], flags: int = 0) -> Pattern:
    """Pattern rule yielding (full match, *groups)."""
    compiled = source if isinstance(source, re.Pattern) else re.compile(source, flags)
    return Pattern(compiled)


def regex(source: str | re.Pattern[str], flags: int = 0) -> Transform:
    """Pattern rule yielding only the full matched text."""
    return pattern(source, flags).map(operator.itemgetter(0))


def predicate(test: Callable[[str], bool], expectation: str | None = None) -> Predicate:
    return Predicate(test, expectation=expectation)


def end_of_input() -> EndOfInput:
    return EndOfInput()


def spaces(*, inline: bool = False) -> Spaces:
    return Spaces(inline)


def sequence(*members: object) -> Sequence:
    seq = Sequence()
    for member in members:
        seq = seq.add(member)
    return seq


def many(rule: object, minimum: int = 0, maximum: int | None = None) -> Repetition:
    return Repetition(to_rule(rule), minimum, maximum)


def either(*candidates: object) -> Alternation:
    return Alternation(tuple(to_rule(candidate) for candidate in candidates))


def to_rule(value: object) -> "GrammarRule":
    """Coerce a builder argument to a rule.

    Strings become literals, compiled regular expressions become regex()
    rules, and rules pass through unchanged.

    Raises:
        GrammarError: For anything else
    """
    if isinstance(value, Rule):
        return value  # type: ignore[return-value]
    if isinstance(value, str):
        return Literal(value)
    if isinstance(value, re.Pattern):
        return regex(value)
    raise GrammarError(ErrorTemplate.not_a_rule(value))


# ============================================================================
# EXPECTATIONS
# ============================================================================


def describe(rule: "GrammarRule") -> str:
    """Build the human-readable expectation of a rule.

    An explicit expectation wins; otherwise each kind has a default, and
    composite kinds combine the descriptions of their visible children.
    """
    if rule.expectation is not None:
        return rule.expectation

    match rule:
        case Literal(word=word):
            return f"'{word}'"
        case Pattern(regex=compiled):
            return f"pattern {compiled.pattern}"
        case Predicate():
            return "character matching a predicate"
        case EndOfInput():
            return "end of input"
        case Spaces():
            return "spaces"
        case Sequence():
            return "chain [" + ", ".join(describe(m) for m in rule.visible_members()) + "]"
        case Repetition(rule=inner, minimum=minimum, maximum=maximum):
            if inner.hidden:
                return ""
            at_most = "" if maximum is None else f"and at most {maximum} "
            return f"at least {minimum} {at_most}{describe(inner)}"
        case Alternation(candidates=candidates):
            visible = (describe(c) for c in candidates if not c.hidden)
            return "one of (" + " | ".join(visible) + ")"
        case Transform(rule=inner):
            return describe(inner)
        case _:
            assert_never(rule)


# ============================================================================
# TYPE ALIASES
# ============================================================================

type GrammarRule = (
    Literal
    | Pattern
    | Predicate
    | EndOfInput
    | Spaces
    | Sequence
    | Repetition
    | Alternation
    | Transform
)
