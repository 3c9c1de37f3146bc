"""Pytest configuration and shared fixtures.

Common fixtures for the dnd-party test suite: settings isolation, a
scripted random source for replaying dice, and sample character payloads.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator


class ScriptedRandom:
    """Random source that returns pre-arranged die results in order.

    Asserts every result fits the requested range so a script written for
    d6 rolls cannot silently feed a d20.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        if not self._values:
            raise AssertionError("ScriptedRandom ran out of values")
        value = self._values.pop(0)
        assert a <= value <= b, f"scripted value {value} outside [{a}, {b}]"
        return value

    @property
    def remaining(self) -> int:
        return len(self._values)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from dnd_party.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "DND_PARTY_DEBUG": "true",
        "DND_PARTY_LOG_LEVEL": "DEBUG",
        "DND_PARTY_BACKEND": "memory",
        "DND_PARTY_PORTRAIT_API_KEY": "test-portrait-key",
        "DND_PARTY_PORTRAIT_MODEL": "dall-e-2",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Dice Fixtures
# =============================================================================


@pytest.fixture
def scripted_random() -> type[ScriptedRandom]:
    """Provide the ScriptedRandom class for building replayable rollers."""
    return ScriptedRandom


@pytest.fixture
def dice_roller() -> Any:
    """Create a DiceRoller with a fixed seed for reproducible tests."""
    from dnd_party.engine.dice import DiceRoller

    return DiceRoller(seed=42)


@pytest.fixture
def fixed_roller() -> Any:
    """A roller whose ability rolls come out STR 18, DEX 14, CON 13, INT 8, WIS 10, CHA 3.

    Each ability consumes four d6 results; the lowest is dropped.
    """
    from dnd_party.engine.dice import DiceRoller

    script = [
        6, 6, 6, 1,  # STR 18
        5, 4, 5, 1,  # DEX 14
        4, 4, 5, 2,  # CON 13
        3, 3, 2, 2,  # INT 8
        3, 3, 4, 1,  # WIS 10
        1, 1, 1, 1,  # CHA 3
    ]
    return DiceRoller(ScriptedRandom(script))


# =============================================================================
# Character Fixtures
# =============================================================================


@pytest.fixture
def sample_stats() -> dict[str, dict[str, int]]:
    """Provide a complete, consistent ability set in wire form."""
    return {
        "STR": {"raw": 16, "bonus": 3},
        "DEX": {"raw": 14, "bonus": 2},
        "CON": {"raw": 15, "bonus": 2},
        "INT": {"raw": 10, "bonus": 0},
        "WIS": {"raw": 12, "bonus": 1},
        "CHA": {"raw": 8, "bonus": -1},
    }


@pytest.fixture
def sample_character_data(sample_stats: dict[str, dict[str, int]]) -> dict[str, Any]:
    """Provide a creation payload with explicit ability scores."""
    return {
        "name": "Test Fighter",
        "alignment": "Lawful Neutral",
        "backStory": "A veteran of the border wars.",
        "abilities": {
            "Second Wind": {
                "name": "Second Wind",
                "description": "Regain hit points as a bonus action",
                "usesLeft": 1,
                "effect": "1d10 + level healing",
            },
        },
        "hitPoints": 12,
        "movementSpeed": 30,
        "physicalDescription": "Scarred, grey-bearded, wears battered plate",
        "race": "Dwarf",
        "proficiencyBonus": 2,
        "stats": sample_stats,
        "skillProficiencies": ["ATHLETICS", "PERCEPTION"],
    }


@pytest.fixture
def sample_character(sample_character_data: dict[str, Any]) -> Any:
    """Create an initialized Character from the sample payload."""
    from dnd_party.engine.sheet import Character

    return Character().initialize(sample_character_data)


@pytest.fixture
def fireball() -> dict[str, Any]:
    """Provide a special ability record."""
    return {
        "name": "Fireball",
        "description": "A bright streak flashes to a point you choose",
        "usesLeft": 3,
        "effect": "8d6 fire damage",
    }


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Undo global logging configuration made by the test."""
    import logging

    import structlog

    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    root.setLevel(logging.WARNING)
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
