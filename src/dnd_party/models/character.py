"""Pydantic V2 schemas for character sheet data.

These are the value records the character sheet engine reads and writes:
ability scores, derived skill values, special abilities, and the
initialization payload accepted when a character is created.

All records serialize with camelCase keys (``hitPoints``, ``passiveValue``)
and accept either the camelCase or the snake_case spelling on input.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from dnd_party.core.constants import ABILITY_SCORE_BASELINE
from dnd_party.models.enums import Ability, Race, Skill


def calculate_modifier(score: int) -> int:
    """Calculate the ability modifier from an ability score.

    Floor division rounds toward negative infinity, so low scores get the
    larger penalty.

    Example:
        >>> calculate_modifier(10)
        0
        >>> calculate_modifier(3)
        -4
        >>> calculate_modifier(18)
        4
    """
    return (score - ABILITY_SCORE_BASELINE) // 2


def _coerce_proficiencies(value: Any) -> Any:
    """Accept a list of skill names or a mapping keyed by skill name."""
    if value is None:
        return None
    if isinstance(value, str):
        value = [value]
    elif isinstance(value, Mapping):
        value = list(value.keys())
    if isinstance(value, Iterable):
        return [
            item if isinstance(item, Skill) else str(item).strip().upper().replace(" ", "_")
            for item in value
        ]
    return value


def _serialize_proficiencies(value: frozenset[Skill] | None) -> list[str] | None:
    if value is None:
        return None
    return sorted(skill.value for skill in value)


ProficiencySet = Annotated[
    frozenset[Skill] | None,
    BeforeValidator(_coerce_proficiencies),
    PlainSerializer(_serialize_proficiencies, return_type=list[str] | None, when_used="json"),
]
"""Skills a character is proficient in; None means no proficiencies."""


class SheetModel(BaseModel):
    """Base class for character sheet records.

    Records are mutable and validated on assignment; the engine replaces
    them wholesale rather than patching individual fields.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )


# =============================================================================
# Ability Scores
# =============================================================================


class AbilityScore(SheetModel):
    """A single ability score and its modifier.

    Supplying only ``raw`` computes the bonus. Supplying both accepts them
    as given; keeping them consistent is the caller's job.

    Attributes:
        raw: The rolled or assigned score. Any integer is accepted.
        bonus: The modifier, (raw - 10) // 2.
    """

    raw: int = Field(description="Rolled or assigned score")
    bonus: int = Field(description="Ability modifier")

    @model_validator(mode="before")
    @classmethod
    def fill_bonus(cls, data: Any) -> Any:
        """Accept a bare integer and compute a missing bonus from raw."""
        if isinstance(data, bool):
            return data
        if isinstance(data, int):
            return {"raw": data, "bonus": calculate_modifier(data)}
        if isinstance(data, Mapping) and "bonus" not in data and "raw" in data:
            raw = data["raw"]
            if isinstance(raw, int) and not isinstance(raw, bool):
                return {**data, "bonus": calculate_modifier(raw)}
        return data

    @classmethod
    def from_raw(cls, raw: int) -> AbilityScore:
        """Build a consistent score from a raw value."""
        return cls(raw=raw, bonus=calculate_modifier(raw))


AbilitySet = dict[Ability, AbilityScore]


# =============================================================================
# Skills
# =============================================================================


class SkillValue(SheetModel):
    """A derived skill value.

    Attributes:
        driving_ability: The ability the skill is computed from.
        proficient: Whether the character is proficient in the skill.
        value: Driving ability bonus plus proficiency bonus when proficient.
        passive_value: value + 10.
    """

    driving_ability: Ability
    proficient: bool = False
    value: int
    passive_value: int


SkillSet = dict[Skill, SkillValue]


# =============================================================================
# Special Abilities
# =============================================================================


class ExtraAbility(SheetModel):
    """A combat or special ability (spell, class feature, racial trait)."""

    name: str = Field(min_length=1, description="Ability name, used as its key")
    description: str = Field(default="", description="What the ability does")
    uses_left: int = Field(default=0, description="Remaining uses")
    effect: str = Field(default="", description="Mechanical effect")


def _coerce_extra_abilities(value: Any) -> Any:
    """Accept a list of ability records and key them by name."""
    if isinstance(value, list):
        keyed: dict[str, Any] = {}
        for item in value:
            name = item.name if isinstance(item, ExtraAbility) else item.get("name")
            keyed[name] = item
        return keyed
    return value


ExtraAbilitySet = Annotated[dict[str, ExtraAbility], BeforeValidator(_coerce_extra_abilities)]


# =============================================================================
# Initialization Payload
# =============================================================================


class CharacterInit(SheetModel):
    """Payload accepted when a character is created or re-initialized.

    Required: name, alignment, back story, hit points and movement speed.
    Everything else is optional and defaulted by the engine, not here, so
    the engine can tell "not supplied" apart from a supplied value.

    Attributes:
        name: Character name; the lookup key for the character.
        alignment: Free-text alignment (e.g., 'Lawful Good').
        back_story: Character history.
        hit_points: Starting hit points (no sign check).
        movement_speed: Movement speed in units (no sign check).
        extra_abilities: Special abilities keyed by name.
        stats: Ability scores; empty means roll them.
        physical_description: Appearance, used for portraits.
        race: Race; None means the default race.
        proficiency_bonus: Proficiency bonus; falsy means the default.
        skill_proficiencies: Skills the character is proficient in.
    """

    name: str = Field(min_length=1, description="Character name")
    alignment: str = Field(description="Alignment")
    back_story: str = Field(description="Back story")
    hit_points: int = Field(description="Hit points")
    movement_speed: int = Field(description="Movement speed")
    extra_abilities: ExtraAbilitySet = Field(
        default_factory=dict,
        validation_alias=AliasChoices("abilities", "extra_abilities", "extraAbilities"),
        serialization_alias="abilities",
    )
    stats: AbilitySet = Field(
        default_factory=dict,
        validation_alias=AliasChoices("stats", "ability_scores", "abilityScores"),
        serialization_alias="stats",
    )
    physical_description: str | None = None
    race: Race | None = None
    proficiency_bonus: int | None = None
    skill_proficiencies: ProficiencySet = Field(
        default=None,
        validation_alias=AliasChoices(
            "skillProficiencies", "skill_proficiencies", "proficiencies"
        ),
        serialization_alias="skillProficiencies",
    )

    @field_validator("stats", mode="before")
    @classmethod
    def none_stats_as_empty(cls, value: Any) -> Any:
        """Treat a null ability set as empty so it triggers a roll."""
        return {} if value is None else value


__all__ = [
    "calculate_modifier",
    "AbilityScore",
    "AbilitySet",
    "SkillValue",
    "SkillSet",
    "ExtraAbility",
    "ExtraAbilitySet",
    "ProficiencySet",
    "SheetModel",
    "CharacterInit",
]
