"""dnd-party - D&D 5E character sheet backend.

Character creation, ability score rolling, skill derivation, damage and
healing, with characters persisted by name and portraits generated on
request.

Example:
    >>> from dnd_party import CharacterService, InMemoryCharacterRepository
    >>> service = CharacterService(InMemoryCharacterRepository())
    >>> sheet = service.create(
    ...     {"name": "Kaelin", "alignment": "Lawful Good", "backStory": "Orphan",
    ...      "hitPoints": 12, "movementSpeed": 30, "skillProficiencies": ["STEALTH"]}
    ... )
    >>> sheet["skills"]["STEALTH"]["proficient"]
    True

Modules:
    core: Configuration, logging, and base exceptions.
    models: Enumerations and pydantic value records.
    engine: Dice rolling and the Character sheet engine.
    storage: Character repositories (in-memory, SQLite).
    service: CharacterService and portrait generation.
"""

from __future__ import annotations

# Core
from dnd_party.core.config import Settings, get_settings
from dnd_party.core.exceptions import DndPartyError
from dnd_party.core.logging import configure_logging, get_logger

# Models
from dnd_party.models import (
    Ability,
    AbilityScore,
    CharacterInit,
    ExtraAbility,
    Race,
    Skill,
    SkillValue,
)

# Engine
from dnd_party.engine import Character, DiceRoller

# Storage
from dnd_party.storage import (
    CharacterDatabase,
    CharacterRepository,
    InMemoryCharacterRepository,
    create_repository,
)

# Service
from dnd_party.service import (
    CharacterService,
    create_service,
    OpenAIPortraitGenerator,
    PortraitGenerator,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "DndPartyError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Ability",
    "Skill",
    "Race",
    "AbilityScore",
    "SkillValue",
    "ExtraAbility",
    "CharacterInit",
    # Engine
    "Character",
    "DiceRoller",
    # Storage
    "CharacterRepository",
    "InMemoryCharacterRepository",
    "CharacterDatabase",
    "create_repository",
    # Service
    "CharacterService",
    "create_service",
    "PortraitGenerator",
    "OpenAIPortraitGenerator",
]
