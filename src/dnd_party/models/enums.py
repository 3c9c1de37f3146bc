"""Enumeration types for dnd-party.

Defines the closed identifier sets used by the character sheet: the six
abilities, the eighteen skills, and the playable races, plus the static
table that ties every skill to the ability that drives it.
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import Mapping


class Ability(StrEnum):
    """D&D 5E ability scores.

    Values are the three-letter abbreviations used as keys in the
    serialized ability set.
    """

    STR = "STR"
    DEX = "DEX"
    CON = "CON"
    INT = "INT"
    WIS = "WIS"
    CHA = "CHA"

    @property
    def full_name(self) -> str:
        """Get the full name of the ability.

        Returns:
            Full ability name (e.g., 'Strength' for STR).
        """
        return _ABILITY_NAMES[self]


_ABILITY_NAMES: Mapping[Ability, str] = MappingProxyType(
    {
        Ability.STR: "Strength",
        Ability.DEX: "Dexterity",
        Ability.CON: "Constitution",
        Ability.INT: "Intelligence",
        Ability.WIS: "Wisdom",
        Ability.CHA: "Charisma",
    }
)


class Skill(StrEnum):
    """D&D 5E skills, keyed by their upper-case wire names."""

    ACROBATICS = "ACROBATICS"
    ANIMAL_HANDLING = "ANIMAL_HANDLING"
    ARCANA = "ARCANA"
    ATHLETICS = "ATHLETICS"
    DECEPTION = "DECEPTION"
    HISTORY = "HISTORY"
    INSIGHT = "INSIGHT"
    INTIMIDATION = "INTIMIDATION"
    INVESTIGATION = "INVESTIGATION"
    MEDICINE = "MEDICINE"
    NATURE = "NATURE"
    PERCEPTION = "PERCEPTION"
    PERFORMANCE = "PERFORMANCE"
    PERSUASION = "PERSUASION"
    RELIGION = "RELIGION"
    SLEIGHT_OF_HAND = "SLEIGHT_OF_HAND"
    STEALTH = "STEALTH"
    SURVIVAL = "SURVIVAL"

    @property
    def ability(self) -> Ability:
        """Get the ability that drives this skill.

        Returns:
            The Ability enum value associated with this skill.
        """
        return SKILL_ABILITY_MAP[self]

    @property
    def display_name(self) -> str:
        """Get human-readable skill name (e.g., 'Sleight Of Hand')."""
        return self.value.replace("_", " ").title()


SKILL_ABILITY_MAP: Mapping[Skill, Ability] = MappingProxyType(
    {
        # Strength
        Skill.ATHLETICS: Ability.STR,
        # Dexterity
        Skill.ACROBATICS: Ability.DEX,
        Skill.SLEIGHT_OF_HAND: Ability.DEX,
        Skill.STEALTH: Ability.DEX,
        # Intelligence
        Skill.ARCANA: Ability.INT,
        Skill.HISTORY: Ability.INT,
        Skill.INVESTIGATION: Ability.INT,
        Skill.NATURE: Ability.INT,
        Skill.RELIGION: Ability.INT,
        # Wisdom
        Skill.ANIMAL_HANDLING: Ability.WIS,
        Skill.INSIGHT: Ability.WIS,
        Skill.MEDICINE: Ability.WIS,
        Skill.PERCEPTION: Ability.WIS,
        Skill.SURVIVAL: Ability.WIS,
        # Charisma
        Skill.DECEPTION: Ability.CHA,
        Skill.INTIMIDATION: Ability.CHA,
        Skill.PERFORMANCE: Ability.CHA,
        Skill.PERSUASION: Ability.CHA,
    }
)
"""Static skill to driving ability table. Not per-character state."""


class Race(StrEnum):
    """Playable races. Values are the display names used on the wire."""

    DRAGONBORN = "Dragonborn"
    DWARF = "Dwarf"
    ELF = "Elf"
    GNOME = "Gnome"
    HALF_ELF = "Half-Elf"
    HALFLING = "Halfling"
    HALF_ORC = "Half-Orc"
    HUMAN = "Human"
    TIEFLING = "Tiefling"
    AARAKOCRA = "Aarakocra"
    GENASI = "Genasi"
    GOLIATH = "Goliath"
    AASIMAR = "Aasimar"
    FIRBOLG = "Firbolg"
    KENKU = "Kenku"
    LIZARDFOLK = "Lizardfolk"
    TABAXI = "Tabaxi"
    TRITON = "Triton"
    BUGBEAR = "Bugbear"
    GOBLIN = "Goblin"
    HOBGOBLIN = "Hobgoblin"
    KOBOLD = "Kobold"
    ORC = "Orc"
    YUAN_TI_PUREBLOOD = "Yuan-ti Pureblood"
    TORTLE = "Tortle"
    GITH = "Gith"
    CHANGELING = "Changeling"
    KALASHTAR = "Kalashtar"
    SHIFTER = "Shifter"
    WARFORGED = "Warforged"
    CENTAUR = "Centaur"
    LOXODON = "Loxodon"
    MINOTAUR = "Minotaur"
    SIMIC_HYBRID = "Simic Hybrid"
    VEDALKEN = "Vedalken"
    VERDAN = "Verdan"
    LOCATHAH = "Locathah"
    GRUNG = "Grung"


DEFAULT_RACE = Race.HUMAN


__all__ = [
    "Ability",
    "Skill",
    "Race",
    "SKILL_ABILITY_MAP",
    "DEFAULT_RACE",
]
