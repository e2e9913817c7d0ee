"""Shared pytest setup for DocBot.

Hypothesis profiles (pick one with HYPOTHESIS_PROFILE, otherwise CI=true
selects "ci" and everything else runs "dev"):

    dev      500 examples per property
    ci       50 derandomized examples, failing blobs printed
    verbose  100 examples with Hypothesis progress output

Tests marked @pytest.mark.fuzz hammer the grammars with generated command
strings. They are skipped unless selected with `pytest -m fuzz`.

Fixtures build one registered character ("karkat") whose sheet lives in
memory, so command tests never need a spreadsheet service.
"""

import json
import os
import random
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from docbot.commands import CommandContext, build_dispatcher
from docbot.config import BotConfig
from docbot.runtime import Dispatcher
from docbot.sheets import InMemorySheets
from tests.sheet_data import CELLS, DOC_ID, DOCMAP

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

_ALL_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]

_PROFILES: dict[str, dict[str, object]] = {
    "dev": {"max_examples": 500},
    "ci": {"max_examples": 50, "derandomize": True, "print_blob": True},
    "verbose": {"max_examples": 100, "verbosity": Verbosity.verbose},
}

for _name, _options in _PROFILES.items():
    settings.register_profile(_name, phases=_ALL_PHASES, **_options)  # type: ignore[arg-type]


def _detect_profile() -> str:
    """HYPOTHESIS_PROFILE if it names a profile, else "ci" under CI, else "dev"."""
    requested = os.environ.get("HYPOTHESIS_PROFILE", "")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZ MARKER
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "fuzz: generated-input grammar tests (run with: pytest -m fuzz)",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip fuzz tests unless the -m expression asks for them."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return

    skip = pytest.mark.skip(reason="fuzz test; run with: pytest -m fuzz")
    for item in items:
        if item.get_closest_marker("fuzz") is not None:
            item.add_marker(skip)


# =============================================================================
# CHARACTER SHEET FIXTURES
# =============================================================================


@pytest.fixture
def documents_path(tmp_path: Path) -> Path:
    """Registry file with one character already registered."""
    path = tmp_path / "documents.json"
    path.write_text(json.dumps({"karkat": DOC_ID}), encoding="utf-8")
    return path


@pytest.fixture
def config(documents_path: Path) -> BotConfig:
    return BotConfig(documents=documents_path, docmap=DOCMAP, sheets=CELLS)


@pytest.fixture
def backend() -> InMemorySheets:
    return InMemorySheets(CELLS)


@pytest.fixture
def context(config: BotConfig, backend: InMemorySheets) -> CommandContext:
    return CommandContext.from_config(config, backend=backend, rng=random.Random(1413))


@pytest.fixture
def dispatcher(context: CommandContext) -> Dispatcher:
    return build_dispatcher(context)
