"""Application-wide constants for dnd-party.

D&D 5E rules constants used by the character sheet engine.
"""

from __future__ import annotations

# =============================================================================
# Ability Scores
# =============================================================================

ABILITY_SCORE_BASELINE = 10
"""Score whose modifier is zero; modifiers are (score - 10) // 2."""

ABILITY_ROLL_DICE = 4
"""Dice rolled per ability score when randomizing (4d6 drop lowest)."""

ABILITY_ROLL_SIDES = 6
"""Sides on each ability score die."""

ABILITY_ROLL_DROP = 1
"""Lowest dice discarded from each ability score roll."""

# =============================================================================
# Skills
# =============================================================================

DEFAULT_PROFICIENCY_BONUS = 2
"""Proficiency bonus for level 1 characters, used when none is supplied."""

PASSIVE_SKILL_BASE = 10
"""Added to a skill's value to get its passive score."""


__all__ = [
    "ABILITY_SCORE_BASELINE",
    "ABILITY_ROLL_DICE",
    "ABILITY_ROLL_SIDES",
    "ABILITY_ROLL_DROP",
    "DEFAULT_PROFICIENCY_BONUS",
    "PASSIVE_SKILL_BASE",
]
