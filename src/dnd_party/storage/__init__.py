"""Storage module for dnd-party persistence.

Provides the CharacterRepository protocol and two implementations:
- InMemoryCharacterRepository for tests and throwaway sessions
- CharacterDatabase, SQLite-backed, one JSON snapshot per character
"""

from dnd_party.storage.database import CharacterDatabase
from dnd_party.storage.repository import (
    CharacterRepository,
    InMemoryCharacterRepository,
    create_repository,
)

__all__ = [
    "CharacterRepository",
    "InMemoryCharacterRepository",
    "CharacterDatabase",
    "create_repository",
]
