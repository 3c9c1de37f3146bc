"""Service layer for dnd-party.

Submodules:
    characters: CharacterService, the create/query/damage/heal contract
        that request handlers call.
    portrait: Portrait prompt building and image generation.
"""

from __future__ import annotations

from dnd_party.service.characters import CharacterService, create_service
from dnd_party.service.portrait import (
    OpenAIPortraitGenerator,
    PortraitGenerator,
    build_portrait_prompt,
)


__all__ = [
    "CharacterService",
    "create_service",
    "PortraitGenerator",
    "OpenAIPortraitGenerator",
    "build_portrait_prompt",
]
