"""Core game logic and data structures."""

from backgammon_engine.core.types import (
    Color,
    Point,
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
    "Point",
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
