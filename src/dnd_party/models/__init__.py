"""Pydantic V2 schemas for dnd-party.

Submodules:
    enums: Closed identifier sets (Ability, Skill, Race) and the static
        skill to ability table.
    character: Value records (AbilityScore, SkillValue, ExtraAbility) and
        the CharacterInit creation payload.

Example:
    >>> from dnd_party.models import AbilityScore, Skill
    >>> AbilityScore(raw=15).bonus
    2
    >>> Skill.STEALTH.ability
    <Ability.DEX: 'DEX'>
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from dnd_party.models.enums import (
    DEFAULT_RACE,
    SKILL_ABILITY_MAP,
    Ability,
    Race,
    Skill,
)

# =============================================================================
# Records
# =============================================================================
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


__all__ = [
    # === Enumerations ===
    "Ability",
    "Skill",
    "Race",
    "SKILL_ABILITY_MAP",
    "DEFAULT_RACE",
    # === Records ===
    "calculate_modifier",
    "SheetModel",
    "AbilityScore",
    "AbilitySet",
    "SkillValue",
    "SkillSet",
    "ExtraAbility",
    "ExtraAbilitySet",
    "ProficiencySet",
    "CharacterInit",
]
