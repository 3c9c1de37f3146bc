"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        DndPartyError: Base exception for all application errors.
        GameEngineError: Character sheet engine errors.
        StorageError: Character store errors.
        PortraitError: Portrait generation errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        character_context: Bind a character name to log entries in a block.
"""

from __future__ import annotations

from dnd_party.core.config import (
    PortraitSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from dnd_party.core.exceptions import (
    CharacterNotFoundError,
    ConfigurationError,
    DiceRollError,
    DndPartyError,
    GameEngineError,
    MissingAbilityDataError,
    PortraitConnectionError,
    PortraitError,
    PortraitRateLimitError,
    PortraitResponseError,
    RandomSourceError,
    StorageError,
    ValidationError,
)
from dnd_party.core.logging import (
    character_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "DndPartyError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Game engine exceptions
    "GameEngineError",
    "MissingAbilityDataError",
    "DiceRollError",
    "RandomSourceError",
    "CharacterNotFoundError",
    # Storage exceptions
    "StorageError",
    # Portrait exceptions
    "PortraitError",
    "PortraitConnectionError",
    "PortraitResponseError",
    "PortraitRateLimitError",
    # Configuration
    "Settings",
    "StorageSettings",
    "PortraitSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "character_context",
]
