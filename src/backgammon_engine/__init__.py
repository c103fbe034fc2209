"""
Backgammon Engine - rules core for two-player backgammon.
"""

__version__ = "0.1.0"

from loguru import logger

# Library code stays quiet until an application enables it
logger.disable("backgammon_engine")

# Core exports
from backgammon_engine.core.types import (
    Color,
    Move,
    Dice,
    RuleConfig,
    InvalidMove,
    GameLogEntry,
    TurnPhase,
)
from backgammon_engine.core.board import Board
from backgammon_engine.core.turn import TurnState
from backgammon_engine.core.game import Game

__all__ = [
    "Color",
    "Move",
    "Dice",
    "RuleConfig",
    "InvalidMove",
    "GameLogEntry",
    "TurnPhase",
    "Board",
    "TurnState",
    "Game",
]
