"""Character sheet engine for dnd-party.

Submodules:
    dice: Dice rolling from an injectable random source, plus d20 notation.
    sheet: The Character aggregate and skill derivation.

Example:
    >>> from dnd_party.engine import Character, DiceRoller
    >>> hero = Character()
    >>> rolled = hero.randomize_stats(["PERCEPTION"], roller=DiceRoller(seed=1))
    >>> len(hero.skills)
    18
"""

from __future__ import annotations

# =============================================================================
# Dice Rolling
# =============================================================================
from dnd_party.engine.dice import (
    DiceExpression,
    DiceRoller,
    RandomSource,
    roll_die,
    roll_sum,
)

# =============================================================================
# Character Sheet
# =============================================================================
from dnd_party.engine.sheet import (
    Character,
    ability_modifier,
    derive_skills,
    roll_ability_scores,
)


__all__ = [
    # Dice Rolling
    "RandomSource",
    "DiceExpression",
    "DiceRoller",
    "roll_die",
    "roll_sum",
    # Character Sheet
    "Character",
    "ability_modifier",
    "derive_skills",
    "roll_ability_scores",
]
