"""Locale utilities for displaying sheet numbers.

Sheet values are stored as plain strings; replies show numeric values with
the configured locale's grouping ("1,250" in en_US, "1.250" in de_DE).
Values that are not integers are shown unchanged.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "format_amount",
    "get_babel_locale",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 locale code to the POSIX form Babel expects.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=32)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a cached Babel Locale.

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def format_amount(value: int | str, locale_code: str) -> str:
    """Format a sheet value for display.

    Only text that is exactly an integer's canonical spelling is regrouped;
    anything else ("+2", "007", "1.5") is shown as the sheet has it.

    Example:
        >>> format_amount(1250, "en_US")
        '1,250'
        >>> format_amount("????", "en_US")
        '????'
        >>> format_amount("+2", "en_US")
        '+2'
    """
    from babel.numbers import format_decimal  # noqa: PLC0415

    if isinstance(value, str):
        text = value.strip()
        try:
            number = int(text)
        except ValueError:
            return value
        if str(number) != text:
            return value
        value = number
    return format_decimal(value, locale=get_babel_locale(locale_code))
