"""Die faces, rolling and roll display.

The rules core only ever receives two face values; ``TurnState`` decides
what a roll grants. Rolling lives here for front ends that need dice.
"""

import numpy as np

from backgammon_engine.core.types import Dice


DIE_FACES = range(1, 7)


def validate_die(value: int) -> int:
    """Check that a die value is a legal face.

    Args:
        value: Face value to check

    Returns:
        The value as a plain int

    Raises:
        ValueError: If the value is not in 1..6
    """
    if int(value) not in DIE_FACES:
        raise ValueError(f"Invalid die value: {value}")
    return int(value)


def roll_dice(rng: np.random.Generator) -> Dice:
    """Draw two faces from ``rng`` as plain ints."""
    first, second = rng.integers(DIE_FACES.start, DIE_FACES.stop, size=2)
    return (int(first), int(second))


def format_roll(dice: Dice) -> str:
    """Roll as shown to players, e.g. ``3-1`` or ``4-4 (doubles)``."""
    text = f"{dice[0]}-{dice[1]}"
    if dice[0] == dice[1]:
        text += " (doubles)"
    return text
