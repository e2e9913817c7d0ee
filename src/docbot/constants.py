"""Shared constants for DocBot.

Constants are grouped by domain:
- Dispatch: addressing and input limits
- Sheets: layout names and placeholder values
- Dice: roll limits and layout
- Configuration: environment and defaults

Python 3.13+. Zero external dependencies.
"""

import re

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Dispatch
    "ADDRESS_PATTERN",
    # Sheets
    "DEFAULT_SUBSHEET",
    "GRIST_SUBSHEET",
    "MISSING_CELL",
    "TRAITS",
    "GRIST_TYPES",
    "FIELD_ALIASES",
    # Dice
    "MAX_DICE",
    "ROLLS_PER_ROW",
    "TRAIT_DIE",
    # Configuration
    "CONFIG_ENV_VAR",
    "DEFAULT_LOCALE",
]

# ============================================================================
# DISPATCH
# ============================================================================

# Leading chat mention, e.g. "<@1234>" or "<@!1234>", plus trailing blanks.
ADDRESS_PATTERN: re.Pattern[str] = re.compile(r"\s*<@!?\d+>\s*")

# ============================================================================
# SHEETS
# ============================================================================

DEFAULT_SUBSHEET: str = "CHARACTER SHEET"
GRIST_SUBSHEET: str = "SYLLADEX"

# What an empty cell reads as.
MISSING_CELL: str = "????"

TRAITS: tuple[str, ...] = ("STR", "FOR", "AGL", "INT", "IMG", "CHR")

GRIST_TYPES: tuple[str, ...] = (
    "build", "shale", "tar", "chalk", "iodine", "marble",
    "mercury", "ruby", "gold", "uranium", "diamond", "artifact",
)  # fmt: skip

# Alternate spellings of sheet fields and traits. Lower-case keys.
FIELD_ALIASES: dict[str, str] = {
    "strength": "STR",
    "fortitude": "FOR",
    "agility": "AGL",
    "intellect": "INT",
    "intelligence": "INT",
    "imagination": "IMG",
    "charm": "CHR",
    "charisma": "CHR",
    "gel_viscosity": "gv",
    "viscosity": "gv",
    "luck_points": "lp",
    "luck": "lp",
    "magic_bullshit": "mb",
    "magic": "mb",
    "def": "defence",
    "experience": "xp",
    "handle": "chumhandle",
}

# ============================================================================
# DICE
# ============================================================================

MAX_DICE: int = 200

# Rolls of more than this many dice are printed as a padded grid.
ROLLS_PER_ROW: int = 10

TRAIT_DIE: int = 20

# ============================================================================
# CONFIGURATION
# ============================================================================

CONFIG_ENV_VAR: str = "CONFIG"

DEFAULT_LOCALE: str = "en_US"
