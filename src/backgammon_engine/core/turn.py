"""Turn bookkeeping: whose move it is, which pips are left, and the roll log."""

from dataclasses import dataclass, field
from typing import List

from loguru import logger

from backgammon_engine.core.dice import validate_die
from backgammon_engine.core.types import Color, GameLogEntry


@dataclass
class TurnState:
    """Dice and player state for the turn in progress.

    Attributes:
        player: Color to move
        dice_rolls: Unused pip values for this turn (0-4 entries)
        rolled: Whether the dice have been rolled this turn
        log: Every roll so far, oldest first. Never pruned.
    """
    player: Color = Color.WHITE
    dice_rolls: List[int] = field(default_factory=list)
    rolled: bool = False
    log: List[GameLogEntry] = field(default_factory=list)

    def apply_roll(self, d1: int, d2: int) -> List[int]:
        """Queue the pips granted by a roll and record it.

        Doubles grant four pips of the rolled value.

        Args:
            d1: First die (1-6)
            d2: Second die (1-6)

        Returns:
            The pips now available

        Raises:
            ValueError: If a die value is not 1-6
        """
        dice = (validate_die(d1), validate_die(d2))
        if dice[0] == dice[1]:
            self.dice_rolls = [dice[0]] * 4
        else:
            self.dice_rolls = list(dice)
        self.rolled = True
        self.log.append(GameLogEntry(player=self.player, dice=dice))
        logger.debug(f"{self.player} rolls {dice}, pips {self.dice_rolls}")
        return list(self.dice_rolls)

    def consume_pip(self, value: int) -> None:
        """Remove exactly one occurrence of a pip value.

        The remaining pips keep their order and multiplicity.

        Raises:
            ValueError: If the value is not among the remaining pips
        """
        if value not in self.dice_rolls:
            raise ValueError(f"Pip {value} not available in {self.dice_rolls}")
        self.dice_rolls.remove(value)

    def switch_turn(self) -> None:
        """Hand the move to the other color with no dice rolled."""
        self.player = self.player.opposite()
        self.rolled = False
        self.dice_rolls = []
        logger.debug(f"Turn passes to {self.player}")
