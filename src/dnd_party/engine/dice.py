"""Dice rolling mechanics for D&D 5E.

Single dice and sums are drawn from an injected random source so that
ability score generation can be replayed in tests. Free-form dice notation
(``"1d20+5"``, ``"4d6kh3"``) is evaluated with the d20 library.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Protocol

from dnd_party.core.constants import ABILITY_ROLL_DICE, ABILITY_ROLL_DROP, ABILITY_ROLL_SIDES
from dnd_party.core.exceptions import DiceRollError, RandomSourceError
from dnd_party.core.logging import get_logger


logger = get_logger(__name__)


class RandomSource(Protocol):
    """Anything that can produce a uniform integer in a closed range.

    ``random.Random`` and ``random.SystemRandom`` both satisfy this.
    """

    def randint(self, a: int, b: int) -> int: ...


@dataclass(frozen=True)
class DiceExpression:
    """A rolled dice expression.

    Attributes:
        expression: The original dice expression string.
        total: The total result of the roll.
        dice: Kept dice results.
        modifier: Static modifier applied.
    """

    expression: str
    total: int
    dice: list[int]
    modifier: int


class DiceRoller:
    """Dice rolling backed by an injectable random source.

    Example:
        >>> roller = DiceRoller(seed=42)
        >>> 1 <= roller.roll_die(20) <= 20
        True
        >>> 3 <= roller.roll_ability_score() <= 18
        True
    """

    def __init__(self, rng: RandomSource | None = None, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            rng: Random source to draw from. Defaults to a new random.Random.
            seed: Seed for the default random source; ignored when rng is given.
        """
        self._rng: RandomSource = rng if rng is not None else random.Random(seed)
        logger.debug("DiceRoller initialized", seed=seed, injected=rng is not None)

    def roll_die(self, sides: int) -> int:
        """Roll a single die.

        Args:
            sides: Number of faces on the die.

        Returns:
            A uniformly distributed integer in [1, sides].

        Raises:
            DiceRollError: If sides is less than 1.
            RandomSourceError: If the random source fails.
        """
        if sides < 1:
            raise DiceRollError(
                f"A die needs at least one side, got {sides}",
                expression=f"1d{sides}",
            )
        try:
            return self._rng.randint(1, sides)
        except (OSError, NotImplementedError) as exc:
            raise RandomSourceError(
                f"Random source unavailable: {exc}",
                details={"sides": sides},
            ) from exc

    def roll_dice(self, num_dice: int, sides: int) -> list[int]:
        """Roll several identical dice and return each result.

        Raises:
            DiceRollError: If num_dice is negative or sides is less than 1.
        """
        if num_dice < 0:
            raise DiceRollError(
                f"Cannot roll a negative number of dice, got {num_dice}",
                expression=f"{num_dice}d{sides}",
            )
        return [self.roll_die(sides) for _ in range(num_dice)]

    def roll_sum(self, num_dice: int, sides: int) -> int:
        """Roll several identical dice and return their sum."""
        return sum(self.roll_dice(num_dice, sides))

    def roll_drop_lowest(
        self,
        num_dice: int = ABILITY_ROLL_DICE,
        sides: int = ABILITY_ROLL_SIDES,
        drop: int = ABILITY_ROLL_DROP,
    ) -> int:
        """Roll dice and sum them after discarding the lowest results.

        Exactly ``drop`` dice are discarded, so duplicate minimums only lose
        one occurrence each: [6, 6, 6, 1] gives 18 and [3, 3, 3, 3] gives 9.

        Args:
            num_dice: Number of dice to roll.
            sides: Sides on each die.
            drop: Number of lowest dice to discard.

        Returns:
            Sum of the kept dice.
        """
        if not 0 <= drop <= num_dice:
            raise DiceRollError(
                f"Cannot drop {drop} of {num_dice} dice",
                expression=f"{num_dice}d{sides}dl{drop}",
            )
        rolls = sorted(self.roll_dice(num_dice, sides))
        return sum(rolls[drop:])

    def roll_ability_score(self) -> int:
        """Roll one ability score using 4d6 drop lowest."""
        return self.roll_drop_lowest(ABILITY_ROLL_DICE, ABILITY_ROLL_SIDES, ABILITY_ROLL_DROP)

    def roll_expression(self, expression: str) -> DiceExpression:
        """Roll dice notation with the d20 library.

        d20 draws from its own generator, not this roller's random source.

        Args:
            expression: Dice expression (e.g., '1d20+5', '4d6kh3').

        Returns:
            DiceExpression containing roll results.

        Raises:
            DiceRollError: If the expression is empty or invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        import d20

        try:
            result = d20.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        dice_values = self._extract_dice_values(result.expr)
        rolled = DiceExpression(
            expression=expression,
            total=result.total,
            dice=dice_values,
            modifier=result.total - sum(dice_values),
        )
        logger.info("Dice rolled", expression=expression, total=result.total)
        return rolled

    def _extract_dice_values(self, expr: Any) -> list[int]:
        """Collect kept dice values from a d20 expression tree."""
        import d20

        values: list[int] = []

        def traverse(node: Any) -> None:
            if isinstance(node, d20.Dice):
                values.extend(die.number for die in node.values if die.kept)
                return
            for child in getattr(node, "children", []):
                traverse(child)

        traverse(expr)
        return values


# Module-level convenience roller
_default_roller: DiceRoller | None = None


def _get_default_roller() -> DiceRoller:
    global _default_roller  # noqa: PLW0603
    if _default_roller is None:
        _default_roller = DiceRoller()
    return _default_roller


def roll_die(sides: int) -> int:
    """Roll a single die with the shared default roller."""
    return _get_default_roller().roll_die(sides)


def roll_sum(num_dice: int, sides: int) -> int:
    """Roll and sum dice with the shared default roller."""
    return _get_default_roller().roll_sum(num_dice, sides)


__all__ = [
    "RandomSource",
    "DiceExpression",
    "DiceRoller",
    "roll_die",
    "roll_sum",
]
