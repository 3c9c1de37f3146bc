"""Character service: the request-facing contract over the sheet engine.

Each call loads the character named in the request from the repository,
runs one engine operation, saves the result and returns the snapshot.
Calls for the same name are expected to be serialized by whatever hosts
the service; the service itself does not lock.

Example:
    >>> from dnd_party.storage import InMemoryCharacterRepository
    >>> service = CharacterService(InMemoryCharacterRepository())
    >>> snapshot = service.create(
    ...     {"name": "Kaelin", "alignment": "Lawful Good", "backStory": "",
    ...      "hitPoints": 12, "movementSpeed": 30}
    ... )
    >>> service.damage("Kaelin", 15)["hitPoints"]
    -3
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import pydantic

from dnd_party.core.exceptions import (
    CharacterNotFoundError,
    ConfigurationError,
    ValidationError,
)
from dnd_party.core.logging import character_context, configure_logging, get_logger
from dnd_party.engine.dice import DiceRoller
from dnd_party.engine.sheet import Character
from dnd_party.models.character import CharacterInit, ExtraAbility
from dnd_party.service.portrait import (
    OpenAIPortraitGenerator,
    PortraitGenerator,
    build_portrait_prompt,
)
from dnd_party.storage.repository import CharacterRepository, create_repository


if TYPE_CHECKING:
    from dnd_party.core.config import Settings


logger = get_logger(__name__)


def _validation_error(exc: pydantic.ValidationError, model: str) -> ValidationError:
    first = exc.errors()[0] if exc.errors() else {}
    field_name = ".".join(str(part) for part in first.get("loc", ())) or None
    return ValidationError(
        f"Invalid {model}: {first.get('msg', str(exc))}",
        field_name=field_name,
        details={"error_count": exc.error_count()},
    )


class CharacterService:
    """Create, query and mutate characters stored in a repository.

    Attributes:
        repository: Where characters are loaded from and saved to.
        roller: Dice roller used when ability scores are rolled.
        portrait_generator: Optional image collaborator for portraits.
    """

    def __init__(
        self,
        repository: CharacterRepository,
        *,
        roller: DiceRoller | None = None,
        portrait_generator: PortraitGenerator | None = None,
    ) -> None:
        self.repository = repository
        self.roller = roller or DiceRoller()
        self.portrait_generator = portrait_generator

    # =========================================================================
    # Lookup
    # =========================================================================

    def _load(self, name: str) -> Character:
        character = self.repository.load(name)
        if character is None:
            raise CharacterNotFoundError(
                f"No character named {name!r}",
                character_name=name,
            )
        return character

    def _mutate(self, name: str, action: str, **fields: Any) -> Character:
        """Load ``name``, apply the named engine method, save, return it."""
        with character_context(name, action=action):
            character = self._load(name)
            getattr(character, action)(*fields.values())
            self.repository.save(character)
            logger.info("Character updated", **fields)
            return character

    # =========================================================================
    # Operations
    # =========================================================================

    def create(self, data: CharacterInit | Mapping[str, Any]) -> dict[str, Any]:
        """Create or re-initialize the character named in ``data``.

        Args:
            data: Creation payload (wire or snake_case keys).

        Returns:
            The character snapshot.

        Raises:
            ValidationError: If the payload is malformed or missing fields.
        """
        if isinstance(data, CharacterInit):
            init = data
        else:
            try:
                init = CharacterInit.model_validate(data)
            except pydantic.ValidationError as exc:
                raise _validation_error(exc, "character") from exc

        with character_context(init.name, action="create"):
            character = self.repository.load(init.name)
            if character is None:
                character = Character()
            character.initialize(init, roller=self.roller)
            self.repository.save(character)
            logger.info("Character created")
            return character.serialize()

    def query(self, name: str) -> dict[str, Any]:
        """Return the snapshot of a stored character.

        Raises:
            CharacterNotFoundError: If no character has this name.
        """
        return self._load(name).serialize()

    def damage(self, name: str, amount: int) -> dict[str, Any]:
        """Apply damage to a character and return its snapshot."""
        return self._mutate(name, "take_damage", amount=amount).serialize()

    def heal(self, name: str, amount: int) -> dict[str, Any]:
        """Heal a character and return its snapshot."""
        return self._mutate(name, "heal", amount=amount).serialize()

    def add_ability(self, name: str, ability: ExtraAbility | Mapping[str, Any]) -> dict[str, Any]:
        """Add a special ability to a character.

        Raises:
            ValidationError: If the ability record is malformed.
        """
        if not isinstance(ability, ExtraAbility):
            try:
                ability = ExtraAbility.model_validate(ability)
            except pydantic.ValidationError as exc:
                raise _validation_error(exc, "ability") from exc
        return self._mutate(name, "add_ability", ability=ability).serialize()

    def remove_ability(self, name: str, ability_name: str) -> dict[str, Any]:
        """Remove a special ability from a character; absent names are ignored."""
        return self._mutate(name, "remove_ability", ability_name=ability_name).serialize()

    def reroll(self, name: str) -> dict[str, Any]:
        """Re-roll a character's ability scores, keeping its proficiencies."""
        with character_context(name, action="reroll"):
            character = self._load(name)
            character.randomize_stats(character.skill_proficiencies, roller=self.roller)
            self.repository.save(character)
            return character.serialize()

    def request_portrait(self, name: str) -> bytes:
        """Generate a portrait image for a stored character.

        Returns:
            Image bytes from the portrait generator.

        Raises:
            CharacterNotFoundError: If no character has this name.
            ConfigurationError: If no portrait generator is configured.
        """
        character = self._load(name)
        if self.portrait_generator is None:
            raise ConfigurationError(
                "No portrait generator configured",
                config_key="portrait",
            )
        prompt = build_portrait_prompt(character)
        logger.info("Portrait requested", character=name)
        return self.portrait_generator.generate(prompt)


def create_service(
    settings: Settings | None = None,
    *,
    roller: DiceRoller | None = None,
) -> CharacterService:
    """Assemble a CharacterService from application settings.

    Configures logging, opens the configured character store, and attaches
    the OpenAI portrait generator when a portrait API key is set.

    Args:
        settings: Application settings; defaults to get_settings().
        roller: Dice roller for ability rolls; defaults to a fresh one.

    Returns:
        A ready CharacterService.
    """
    if settings is None:
        from dnd_party.core.config import get_settings

        settings = get_settings()

    configure_logging(settings)

    portrait_generator = None
    if settings.portrait.api_key:
        portrait_generator = OpenAIPortraitGenerator(settings.portrait)
    else:
        logger.info("Portrait generation disabled, no API key configured")

    return CharacterService(
        create_repository(settings.storage),
        roller=roller,
        portrait_generator=portrait_generator,
    )


__all__ = [
    "CharacterService",
    "create_service",
]
