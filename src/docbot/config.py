"""Bot configuration.

BotConfig is immutable and validated when constructed. load_config reads it
from a JSON file:

    {
        "documents": "documents.json",
        "locale": "en_US",
        "docmap": {
            "CHARACTER SHEET": {
                "vitality": "C5", "gv": "C6", "xp": "C7",
                "traits": {"rating": "C", "mod": "D",
                           "STR": 12, "FOR": 13, "AGL": 14,
                           "INT": 15, "IMG": 16, "CHR": 17}
            },
            "SYLLADEX": {"grist": {"build": "B2", "shale": "B3"}}
        },
        "sheets": {"<document id>": {"SYLLADEX!B2": "10"}}
    }

Relative "documents" paths resolve against the config file's directory.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from babel.core import UnknownLocaleError

from docbot.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_LOCALE,
    FIELD_ALIASES,
    GRIST_SUBSHEET,
    TRAITS,
)
from docbot.diagnostics import ConfigError, ErrorTemplate
from docbot.locale_utils import get_babel_locale

__all__ = ["BotConfig", "load_config"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BotConfig:
    """Immutable bot configuration.

    Attributes:
        documents: Path of the JSON document registry (name -> document id)
        docmap: Subsheet name -> field name -> cell address. A subsheet's
            "traits" entry holds the rating and modifier columns plus one
            row number per trait. The SYLLADEX subsheet's "grist" entry maps
            grist types to cells.
        aliases: Alternate field names (lower-case) -> canonical field name
        locale: Babel locale used to display numbers
        sheets: Seed cells for the in-memory sheet backend, per document id
    """

    documents: Path
    docmap: Mapping[str, Mapping[str, Any]]
    aliases: Mapping[str, str] = field(default_factory=lambda: MappingProxyType(FIELD_ALIASES))
    locale: str = DEFAULT_LOCALE
    sheets: Mapping[str, Mapping[str, object]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ConfigError: If the docmap is malformed or the locale is unknown
        """
        for subsheet, fields in self.docmap.items():
            if not isinstance(fields, Mapping):
                raise ConfigError(
                    ErrorTemplate.config_invalid("docmap", f"subsheet {subsheet} is not a table")
                )
            traits = fields.get("traits")
            if traits is not None:
                missing = [key for key in ("rating", "mod", *TRAITS) if key not in traits]
                if missing:
                    raise ConfigError(
                        ErrorTemplate.config_invalid(
                            "docmap",
                            f"traits of {subsheet} lack {', '.join(missing)}",
                        )
                    )

        grist = self.docmap.get(GRIST_SUBSHEET, {}).get("grist")
        if grist is not None and not isinstance(grist, Mapping):
            raise ConfigError(
                ErrorTemplate.config_invalid("docmap", f"{GRIST_SUBSHEET} grist is not a table")
            )

        try:
            get_babel_locale(self.locale)
        except (UnknownLocaleError, ValueError) as e:
            raise ConfigError(ErrorTemplate.config_invalid("locale", str(e))) from e

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: Path | None = None) -> BotConfig:
        """Build a config from parsed JSON.

        Args:
            data: Parsed configuration document
            base: Directory that relative paths resolve against

        Raises:
            ConfigError: If required keys are missing or values are invalid
        """
        try:
            documents = Path(data["documents"])
            docmap = data["docmap"]
        except KeyError as e:
            raise ConfigError(ErrorTemplate.config_invalid("config", f"missing key {e}")) from e
        if not isinstance(docmap, Mapping):
            raise ConfigError(ErrorTemplate.config_invalid("docmap", "not a table"))

        if base is not None and not documents.is_absolute():
            documents = base / documents

        aliases = dict(FIELD_ALIASES)
        aliases.update({key.lower(): value for key, value in data.get("aliases", {}).items()})

        return cls(
            documents=documents,
            docmap=docmap,
            aliases=MappingProxyType(aliases),
            locale=data.get("locale", DEFAULT_LOCALE),
            sheets=data.get("sheets", {}),
        )


def load_config(path: str | os.PathLike[str] | None = None) -> BotConfig:
    """Load configuration from a JSON file.

    Args:
        path: Config file; defaults to the file named by $CONFIG

    Raises:
        ConfigError: If no path is given and $CONFIG is unset, or the file
            cannot be read or is invalid
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
        if not path:
            raise ConfigError(ErrorTemplate.config_missing(CONFIG_ENV_VAR))

    source = Path(path)
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(ErrorTemplate.config_invalid(str(source), e.strerror or str(e))) from e
    except json.JSONDecodeError as e:
        raise ConfigError(ErrorTemplate.config_invalid(str(source), str(e))) from e

    if not isinstance(data, Mapping):
        raise ConfigError(ErrorTemplate.config_invalid(str(source), "not a JSON object"))

    config = BotConfig.from_mapping(data, base=source.parent)
    logger.info(
        "Loaded config from %s: %d subsheets, locale %s",
        source,
        len(config.docmap),
        config.locale,
    )
    return config
