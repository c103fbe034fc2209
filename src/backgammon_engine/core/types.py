"""Core type definitions for the backgammon rules engine.

This module defines the small value types shared by the board, the turn
bookkeeping and the game orchestration.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


# ==============================================================================
# COLORS
# ==============================================================================

# Type aliases
Point = int  # 0-23 on the track; past either edge means bar or bear-off
Dice = Tuple[int, int]  # (die1, die2) where 1 <= die1, die2 <= 6
Move = Tuple[Point, Point]  # (origin, destination)


class Color(Enum):
    """Player colors.

    White advances toward increasing point indices, Black toward decreasing
    ones.
    """
    WHITE = "white"
    BLACK = "black"

    def opposite(self) -> "Color":
        """Return the other color."""
        return Color.BLACK if self == Color.WHITE else Color.WHITE

    @property
    def direction(self) -> int:
        """Sign of movement along the track (also the sign of owned points)."""
        return 1 if self == Color.WHITE else -1

    @property
    def bar_index(self) -> int:
        """Slot of this color in ``Board.bar``."""
        return 0 if self == Color.WHITE else 1

    @property
    def home(self) -> range:
        """Point indices of this color's home zone."""
        return range(18, 24) if self == Color.WHITE else range(0, 6)

    @property
    def bar_origin(self) -> Point:
        """Virtual origin for checkers entering from the bar.

        It sits one step behind the first point of the color's track, so
        entering with pip ``n`` lands where ``origin + n * direction`` says.
        """
        return -1 if self == Color.WHITE else 24

    def __str__(self) -> str:
        return self.value


# ==============================================================================
# RULE PARAMETERS
# ==============================================================================

@dataclass(frozen=True)
class RuleConfig:
    """Adjustable rule parameters.

    Attributes:
        max_stack: Maximum number of own checkers a point may hold before
            further checkers are refused. None means no cap (standard rules).
        bar_entry: Whether hit checkers must re-enter from the bar before
            any other checker of that color moves.
    """
    max_stack: Optional[int] = None
    bar_entry: bool = True

    def __post_init__(self):
        if self.max_stack is not None and self.max_stack < 1:
            raise ValueError(f"max_stack must be >= 1, got {self.max_stack}")


# ==============================================================================
# ERRORS
# ==============================================================================

class InvalidMove(ValueError):
    """Raised when an origin/destination pair fails the move rules.

    The board and turn state are left untouched when this is raised.
    """

    def __init__(self, player: Color, origin: Point, destination: Point, reason: str = "illegal move"):
        self.player = player
        self.origin = origin
        self.destination = destination
        self.reason = reason
        super().__init__(f"Invalid move for {player}: {origin} -> {destination} ({reason})")


# ==============================================================================
# TURN BOOKKEEPING
# ==============================================================================

@dataclass(frozen=True)
class GameLogEntry:
    """One roll event.

    Attributes:
        player: Who rolled
        dice: The rolled pair as thrown (doubles are not expanded here)
    """
    player: Color
    dice: Dice


class TurnPhase(Enum):
    """Where a game stands between external events."""
    AWAITING_ROLL = "awaiting_roll"
    MOVING = "moving"
    GAME_OVER = "game_over"
