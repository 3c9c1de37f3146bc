"""Character sheet engine.

The Character aggregate owns a character's identity, ability scores and
derived skills. Skills are never set directly: every change to ability
scores or proficiencies goes through a full recompute from the static
skill to ability table, so the skill set can never hold stale or partial
entries.

The engine holds no references to storage, image services or ambient
randomness. Dice come from a DiceRoller passed in by the caller, and the
hosting service is responsible for loading and saving characters and for
serializing calls per character.

Example:
    >>> from dnd_party.engine.dice import DiceRoller
    >>> hero = Character().initialize(
    ...     {
    ...         "name": "Kaelin",
    ...         "alignment": "Lawful Good",
    ...         "backStory": "Raised by wolves",
    ...         "hitPoints": 12,
    ...         "movementSpeed": 30,
    ...         "skillProficiencies": ["STEALTH"],
    ...     },
    ...     roller=DiceRoller(seed=7),
    ... )
    >>> hero.skills[Skill.STEALTH].proficient
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import Field

from dnd_party.core.constants import DEFAULT_PROFICIENCY_BONUS, PASSIVE_SKILL_BASE
from dnd_party.core.exceptions import MissingAbilityDataError
from dnd_party.core.logging import get_logger
from dnd_party.engine.dice import DiceRoller
from dnd_party.models.character import (
    AbilityScore,
    AbilitySet,
    CharacterInit,
    ExtraAbility,
    ExtraAbilitySet,
    ProficiencySet,
    SheetModel,
    SkillSet,
    SkillValue,
    calculate_modifier,
)
from dnd_party.models.enums import DEFAULT_RACE, SKILL_ABILITY_MAP, Ability, Race, Skill


logger = get_logger(__name__)


# =============================================================================
# Derivation
# =============================================================================


def ability_modifier(raw: int) -> int:
    """Return the modifier for a raw ability score, (raw - 10) // 2."""
    return calculate_modifier(raw)


def derive_skills(
    ability_scores: Mapping[Ability, AbilityScore],
    proficiency_bonus: int,
    proficiencies: Iterable[Skill] | None = None,
) -> SkillSet:
    """Compute all eighteen skills from ability scores.

    Args:
        ability_scores: Ability set; must contain every driving ability.
        proficiency_bonus: Added to the value of proficient skills.
        proficiencies: Skills the character is proficient in. None means none.

    Returns:
        A fresh skill set with one entry per canonical skill.

    Raises:
        MissingAbilityDataError: If a driving ability has no score.
    """
    proficient_in = frozenset(proficiencies or ())
    skills: SkillSet = {}
    for skill, ability in SKILL_ABILITY_MAP.items():
        score = ability_scores.get(ability)
        if score is None:
            raise MissingAbilityDataError(
                f"missing ability score for {ability.value}",
                ability=ability.value,
                details={"skill": skill.value},
            )
        proficient = skill in proficient_in
        value = score.bonus + proficiency_bonus if proficient else score.bonus
        skills[skill] = SkillValue(
            driving_ability=ability,
            proficient=proficient,
            value=value,
            passive_value=value + PASSIVE_SKILL_BASE,
        )
    return skills


def roll_ability_scores(roller: DiceRoller) -> AbilitySet:
    """Roll a complete ability set, 4d6 drop lowest per ability."""
    return {ability: AbilityScore.from_raw(roller.roll_ability_score()) for ability in Ability}


# =============================================================================
# Character Aggregate
# =============================================================================


class Character(SheetModel):
    """A player character's sheet.

    A Character starts out empty (all defaults) and is populated once via
    initialize(). Hit points and movement speed are never clamped.

    Attributes:
        name: Character name; the external lookup key. Not normalized.
        alignment: Free-text alignment.
        back_story: Character history.
        physical_description: Appearance, used for portrait prompts.
        race: Race, defaults to Human.
        hit_points: Current hit points; may go negative.
        movement_speed: Movement speed in units.
        proficiency_bonus: Bonus added to proficient skills.
        ability_scores: The six ability scores (wire name ``stats``).
        skills: Derived skill values; never set by callers.
        extra_abilities: Special abilities keyed by name (wire name ``abilities``).
        skill_proficiencies: Skills the current skill set was derived with.
    """

    name: str = ""
    alignment: str = ""
    back_story: str = ""
    physical_description: str = ""
    race: Race = DEFAULT_RACE
    hit_points: int = 0
    movement_speed: int = 0
    proficiency_bonus: int = DEFAULT_PROFICIENCY_BONUS
    ability_scores: AbilitySet = Field(default_factory=dict, alias="stats")
    skills: SkillSet = Field(default_factory=dict)
    extra_abilities: ExtraAbilitySet = Field(default_factory=dict, alias="abilities")
    skill_proficiencies: ProficiencySet = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def initialize(
        self,
        data: CharacterInit | Mapping[str, Any],
        *,
        roller: DiceRoller | None = None,
    ) -> Character:
        """Populate the character from a creation payload.

        Descriptive and combat fields are overwritten verbatim. A falsy
        proficiency bonus, including an explicit 0, becomes the default of
        2. An empty ability set is rolled 4d6 drop lowest, as in
        randomize_stats(); the rolled or supplied scores are then merged
        through update_stats_and_skills().

        Scores are rolled and the merged set is checked before any field
        is assigned, so a failed initialize leaves the character unchanged.

        Args:
            data: Creation payload, validated into CharacterInit if needed.
            roller: Dice roller used when the ability set is empty.

        Returns:
            self, for chaining.

        Raises:
            MissingAbilityDataError: If supplied scores, merged with the
                stored ones, lack a driving ability.
            RandomSourceError: If rolling fails.
        """
        init = data if isinstance(data, CharacterInit) else CharacterInit.model_validate(data)
        proficiency_bonus = init.proficiency_bonus or DEFAULT_PROFICIENCY_BONUS

        if init.stats:
            scores = init.stats
            derive_skills(
                {**self.ability_scores, **scores}, proficiency_bonus, init.skill_proficiencies
            )
        else:
            scores = roll_ability_scores(roller or DiceRoller())

        self.name = init.name
        self.alignment = init.alignment
        self.back_story = init.back_story
        self.extra_abilities = dict(init.extra_abilities)
        self.hit_points = init.hit_points
        self.movement_speed = init.movement_speed
        self.physical_description = init.physical_description or ""
        self.proficiency_bonus = proficiency_bonus
        self.update_stats_and_skills(scores, init.skill_proficiencies)
        self.race = init.race or DEFAULT_RACE

        logger.info(
            "Character initialized",
            character=self.name,
            race=self.race,
            hit_points=self.hit_points,
            rolled=not init.stats,
        )
        return self

    def serialize(self) -> dict[str, Any]:
        """Return a flat, JSON-ready snapshot using wire (camelCase) keys.

        Character.model_validate(snapshot) rebuilds an equal character.
        """
        return self.model_dump(mode="json", by_alias=True)

    # -------------------------------------------------------------------------
    # Ability Scores and Skills
    # -------------------------------------------------------------------------

    def update_stats_and_skills(
        self,
        new_scores: Mapping[Ability | str, AbilityScore | Mapping[str, int] | int],
        proficiencies: Iterable[Skill | str] | None = None,
    ) -> SkillSet:
        """Merge ability scores and recompute every skill.

        Abilities present in ``new_scores`` replace the stored ones; others
        are kept. Supplied bonuses are taken as given. On failure the
        character is left unchanged.

        Args:
            new_scores: Scores to merge, keyed by ability.
            proficiencies: Skills to mark proficient. None means none.

        Returns:
            The recomputed skill set.

        Raises:
            MissingAbilityDataError: If the merged set lacks a driving ability.
        """
        incoming = _validate_scores(new_scores)
        merged: AbilitySet = {**self.ability_scores, **incoming}
        proficient_in = _validate_proficiencies(proficiencies)

        skills = derive_skills(merged, self.proficiency_bonus, proficient_in)

        self.ability_scores = merged
        self.skills = skills
        self.skill_proficiencies = proficient_in
        logger.debug(
            "Skills recomputed",
            character=self.name,
            updated=sorted(ability.value for ability in incoming),
            proficient=len(proficient_in or ()),
        )
        return skills

    def randomize_stats(
        self,
        proficiencies: Iterable[Skill | str] | None = None,
        *,
        roller: DiceRoller | None = None,
    ) -> AbilitySet:
        """Roll all six ability scores and recompute skills.

        Args:
            proficiencies: Skills to mark proficient. None means none.
            roller: Dice roller to draw from. Defaults to a fresh one.

        Returns:
            The rolled ability set.

        Raises:
            RandomSourceError: If the roller's random source fails.
        """
        rolled = roll_ability_scores(roller or DiceRoller())
        logger.info(
            "Ability scores rolled",
            character=self.name,
            scores={ability.value: score.raw for ability, score in rolled.items()},
        )
        self.update_stats_and_skills(rolled, proficiencies)
        return rolled

    def update_proficiency_bonus(self, bonus: int, *, recompute: bool = False) -> None:
        """Set the proficiency bonus.

        Skills are not recomputed unless ``recompute`` is set, so by default
        skill values keep the old bonus until the next
        update_stats_and_skills() call.

        Raises:
            MissingAbilityDataError: If ``recompute`` is set and the ability
                set is incomplete. Neither the bonus nor the skills change.
        """
        if recompute:
            skills = derive_skills(self.ability_scores, bonus, self.skill_proficiencies)
            self.proficiency_bonus = bonus
            self.skills = skills
        else:
            self.proficiency_bonus = bonus

    # -------------------------------------------------------------------------
    # Combat
    # -------------------------------------------------------------------------

    def take_damage(self, amount: int) -> int:
        """Subtract ``amount`` from hit points and return the new total."""
        self.hit_points -= amount
        logger.debug("Damage taken", character=self.name, amount=amount, hit_points=self.hit_points)
        return self.hit_points

    def heal(self, amount: int) -> int:
        """Add ``amount`` to hit points and return the new total."""
        self.hit_points += amount
        logger.debug("Healed", character=self.name, amount=amount, hit_points=self.hit_points)
        return self.hit_points

    def move(self, distance: int) -> str:
        """Report an intended move. Position is not tracked yet."""
        message = f"{self.name} moves {distance} units at a speed of {self.movement_speed}."
        logger.info("Character moved", character=self.name, distance=distance)
        return message

    # -------------------------------------------------------------------------
    # Special Abilities
    # -------------------------------------------------------------------------

    def add_ability(self, ability: ExtraAbility | Mapping[str, Any]) -> None:
        """Add or replace a special ability, keyed by its name."""
        record = ability if isinstance(ability, ExtraAbility) else ExtraAbility.model_validate(ability)
        self.extra_abilities = {**self.extra_abilities, record.name: record}

    def remove_ability(self, name: str) -> None:
        """Remove a special ability. Unknown names are ignored."""
        if name in self.extra_abilities:
            self.extra_abilities = {
                key: value for key, value in self.extra_abilities.items() if key != name
            }


def _validate_scores(
    scores: Mapping[Ability | str, AbilityScore | Mapping[str, int] | int],
) -> AbilitySet:
    return {
        Ability(key): value if isinstance(value, AbilityScore) else AbilityScore.model_validate(value)
        for key, value in scores.items()
    }


def _validate_proficiencies(
    proficiencies: Iterable[Skill | str] | None,
) -> frozenset[Skill] | None:
    if proficiencies is None:
        return None
    return frozenset(Skill(str(name).strip().upper().replace(" ", "_")) for name in proficiencies)


__all__ = [
    "Character",
    "ability_modifier",
    "derive_skills",
    "roll_ability_scores",
]
