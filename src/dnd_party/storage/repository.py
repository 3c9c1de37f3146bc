"""Character repository abstraction.

The engine never touches storage. Whatever hosts it (the character
service, a durable-actor runtime, a key-value store) provides something
satisfying CharacterRepository: load a character by name, save it back.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from dnd_party.core.logging import get_logger
from dnd_party.engine.sheet import Character


if TYPE_CHECKING:
    from dnd_party.core.config import StorageSettings

logger = get_logger(__name__)


@runtime_checkable
class CharacterRepository(Protocol):
    """Storage capability keyed by character name."""

    def load(self, name: str) -> Character | None:
        """Return the stored character, or None if there is none."""
        ...

    def save(self, character: Character) -> None:
        """Store the character under its name, replacing any prior state."""
        ...

    def delete(self, name: str) -> bool:
        """Remove a character; False if it was not stored."""
        ...

    def list_names(self) -> list[str]:
        """Return the names of all stored characters."""
        ...


class InMemoryCharacterRepository:
    """Process-local repository.

    Stores serialized snapshots rather than live objects, so a loaded
    character is an independent copy just as it would be from a real store.
    """

    def __init__(self) -> None:
        self._snapshots: dict[str, str] = {}

    def load(self, name: str) -> Character | None:
        snapshot = self._snapshots.get(name)
        if snapshot is None:
            return None
        return Character.model_validate(json.loads(snapshot))

    def save(self, character: Character) -> None:
        self._snapshots[character.name] = json.dumps(character.serialize())

    def delete(self, name: str) -> bool:
        return self._snapshots.pop(name, None) is not None

    def list_names(self) -> list[str]:
        return list(self._snapshots)


def create_repository(settings: StorageSettings | None = None) -> CharacterRepository:
    """Build the repository selected by configuration.

    Args:
        settings: Storage settings; defaults to the application settings.

    Returns:
        An in-memory or SQLite repository.
    """
    if settings is None:
        from dnd_party.core.config import get_settings

        settings = get_settings().storage

    if settings.backend == "memory":
        logger.info("Using in-memory character store")
        return InMemoryCharacterRepository()

    from dnd_party.storage.database import CharacterDatabase

    return CharacterDatabase(settings.database_path)


__all__ = [
    "CharacterRepository",
    "InMemoryCharacterRepository",
    "create_repository",
]
