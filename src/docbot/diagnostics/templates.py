"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps user-facing text in one place, where tests can pin it.
    """

    # =========================================================================
    # GRAMMAR CONSTRUCTION ERRORS (1000-1999)
    # =========================================================================

    @staticmethod
    def field_count_mismatch(names: tuple[str, ...], visible: int) -> Diagnostic:
        """Named binding got a different number of names than values.

        Args:
            names: The field names passed to named()
            visible: Number of visible members in the sequence

        Returns:
            Diagnostic for FIELD_COUNT_MISMATCH
        """
        msg = f"{len(names)} field names {names!r} for a sequence with {visible} visible members"
        return Diagnostic(
            code=DiagnosticCode.FIELD_COUNT_MISMATCH,
            message=msg,
            hint="Pass one name per visible sequence member; hidden members take no name",
        )

    @staticmethod
    def duplicate_field_name(name: str) -> Diagnostic:
        """Named binding got the same name twice.

        Args:
            name: The repeated field name

        Returns:
            Diagnostic for DUPLICATE_FIELD_NAME
        """
        msg = f"Field name '{name}' is used more than once"
        return Diagnostic(code=DiagnosticCode.DUPLICATE_FIELD_NAME, message=msg)

    @staticmethod
    def named_target_not_sequence(kind: str) -> Diagnostic:
        """named() was called on something other than a sequence.

        Args:
            kind: Class name of the rule named() was called on

        Returns:
            Diagnostic for NAMED_TARGET_NOT_SEQUENCE
        """
        msg = f"Only a Sequence can bind field names, not {kind}"
        return Diagnostic(
            code=DiagnosticCode.NAMED_TARGET_NOT_SEQUENCE,
            message=msg,
            hint="Wrap the rule in a sequence before calling named()",
        )

    @staticmethod
    def empty_alternation() -> Diagnostic:
        """An alternation without candidates was parsed.

        Returns:
            Diagnostic for EMPTY_ALTERNATION
        """
        return Diagnostic(
            code=DiagnosticCode.EMPTY_ALTERNATION,
            message="Alternation rule must have at least one candidate",
        )

    @staticmethod
    def invalid_repetition_bounds(minimum: int, maximum: int | None) -> Diagnostic:
        """Repetition bounds are negative or inverted.

        Args:
            minimum: Requested minimum count
            maximum: Requested maximum count (None for unbounded)

        Returns:
            Diagnostic for INVALID_REPETITION_BOUNDS
        """
        msg = f"Invalid repetition bounds: at least {minimum}, at most {maximum}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_REPETITION_BOUNDS,
            message=msg,
            hint="Counts must be >= 0 and the maximum must not be below the minimum",
        )

    @staticmethod
    def not_a_rule(value: object) -> Diagnostic:
        """A value could not be turned into a rule.

        Args:
            value: The offending value

        Returns:
            Diagnostic for NOT_A_RULE
        """
        msg = f"Not a rule: {value!r}"
        return Diagnostic(
            code=DiagnosticCode.NOT_A_RULE,
            message=msg,
            hint="Use a rule, a string (literal) or a compiled regular expression",
        )

    # =========================================================================
    # PARSE AND DISPATCH (2000-3999)
    # =========================================================================

    @staticmethod
    def parse_failed(offset: int, expected: str, got: str) -> Diagnostic:
        """User input did not match a grammar.

        Args:
            offset: Offset of the failure in the original input
            expected: Human-readable expectation
            got: Next character, or "end of input"

        Returns:
            Diagnostic for PARSE_FAILED
        """
        msg = f"at {offset} expected {expected} got {got}"
        return Diagnostic(code=DiagnosticCode.PARSE_FAILED, message=msg)

    @staticmethod
    def unknown_command() -> Diagnostic:
        """No command prefix matched the input.

        Returns:
            Diagnostic for UNKNOWN_COMMAND
        """
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_COMMAND,
            message="Unknown command",
            hint="Send 'help' to list the available commands",
            severity="warning",
        )

    # =========================================================================
    # DOMAIN ERRORS (4000-4999)
    # =========================================================================

    @staticmethod
    def document_exists(name: str) -> Diagnostic:
        """Document name is already registered."""
        msg = f"Document with name {name} already exists"
        return Diagnostic(code=DiagnosticCode.DOCUMENT_EXISTS, message=msg)

    @staticmethod
    def document_missing(name: str) -> Diagnostic:
        """Document name is not registered."""
        msg = f"Document with name {name} does not exist"
        return Diagnostic(
            code=DiagnosticCode.DOCUMENT_MISSING,
            message=msg,
            hint="Register it with 'add document <NAME> <DOCUMENT-ID>'",
        )

    @staticmethod
    def unknown_field(field: str) -> Diagnostic:
        """Sheet field is neither mapped nor an alias."""
        msg = f"Unknown field: {field}"
        return Diagnostic(code=DiagnosticCode.UNKNOWN_FIELD, message=msg)

    @staticmethod
    def unknown_subsheet(subsheet: str) -> Diagnostic:
        """Subsheet has no entry in the document map."""
        msg = f"Unknown subsheet: {subsheet}"
        return Diagnostic(code=DiagnosticCode.UNKNOWN_SUBSHEET, message=msg)

    @staticmethod
    def unknown_trait(trait: str) -> Diagnostic:
        """Trait is neither mapped nor an alias."""
        msg = f"Unknown trait: {trait}"
        return Diagnostic(code=DiagnosticCode.UNKNOWN_TRAIT, message=msg)

    @staticmethod
    def invalid_grist_types(types: list[str]) -> Diagnostic:
        """Grist types outside the known set."""
        msg = "invalid grist types: " + " ".join(types)
        return Diagnostic(code=DiagnosticCode.INVALID_GRIST_TYPE, message=msg)

    @staticmethod
    def repeated_grist_type(types: list[str]) -> Diagnostic:
        """The same grist type appears twice in one change."""
        msg = "You can change each grist type only once: " + " ".join(types)
        return Diagnostic(code=DiagnosticCode.REPEATED_GRIST_TYPE, message=msg)

    @staticmethod
    def insufficient_grist(shortfalls: list[tuple[str, str, int]]) -> Diagnostic:
        """Subtractions larger than the current balance.

        Args:
            shortfalls: (grist type, current value, requested amount) triples
        """
        lines = "\n".join(
            f"{kind}: current {current}, tried to subtract {delta}"
            for kind, current, delta in shortfalls
        )
        msg = "Tried to subtract more grist than you have:\n```" + lines + "```"
        return Diagnostic(code=DiagnosticCode.INSUFFICIENT_GRIST, message=msg)

    @staticmethod
    def invalid_cell_value(label: str, value: str) -> Diagnostic:
        """A sheet cell holds something that is not a number."""
        msg = f"The sheet has invalid *{label}* value: {value}"
        return Diagnostic(code=DiagnosticCode.INVALID_CELL_VALUE, message=msg)

    @staticmethod
    def too_many_dice(count: int, limit: int) -> Diagnostic:
        """Dice count above the configured limit."""
        return Diagnostic(
            code=DiagnosticCode.TOO_MANY_DICE,
            message="That's a lot of dice. Are you trying to kill me?",
            hint=f"Roll at most {limit} dice at once (asked for {count})",
        )

    # =========================================================================
    # CONFIGURATION ERRORS (5000-5999)
    # =========================================================================

    @staticmethod
    def config_missing(env_var: str) -> Diagnostic:
        """No configuration path given and the env var is unset."""
        msg = f"No configuration file given and ${env_var} is not set"
        return Diagnostic(
            code=DiagnosticCode.CONFIG_MISSING,
            message=msg,
            hint="Pass --config PATH or export the environment variable",
        )

    @staticmethod
    def config_invalid(source: str, reason: str) -> Diagnostic:
        """Configuration could not be read or has the wrong shape."""
        msg = f"Invalid configuration {source}: {reason}"
        return Diagnostic(code=DiagnosticCode.CONFIG_INVALID, message=msg)
