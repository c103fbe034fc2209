"""Hot-seat terminal front end.

Two people share one terminal. The front end only talks to the public
``Game`` API: it rolls, shows which checkers can move, asks for an origin
and a destination, and applies the choice. Points are shown in traditional
1-24 numbering, ``bar`` stands for the bar and ``off`` for bearing off.
"""

import sys
from enum import Enum
from typing import Callable, Dict, List, Optional, TextIO

import numpy as np

from backgammon_engine.core.board import board_to_string
from backgammon_engine.core.dice import roll_dice, format_roll
from backgammon_engine.core.game import Game
from backgammon_engine.core.types import Color, Dice, InvalidMove, Point


class SelectionState(Enum):
    """Display state of a point while a move is being picked."""
    IDLE = "idle"
    HIGHLIGHTED = "highlighted"  # an origin the player may pick
    CHOSEN = "chosen"  # the picked origin
    CANDIDATE = "candidate"  # a destination for the picked origin


class ConsoleGame:
    """Terminal loop around a ``Game``.

    Args:
        game: Game to drive (a fresh one by default)
        rng: Random generator used for the dice
        roller: Optional dice source overriding ``rng``
        input_fn: Prompt reader, ``input`` by default
        out: Stream the board and messages are written to
    """

    def __init__(
        self,
        game: Optional[Game] = None,
        rng: Optional[np.random.Generator] = None,
        roller: Optional[Callable[[], Dice]] = None,
        input_fn: Optional[Callable[[str], str]] = None,
        out: TextIO = sys.stdout,
    ):
        self.game = game if game is not None else Game()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.roller = roller if roller is not None else (lambda: roll_dice(self.rng))
        self.input_fn = input_fn if input_fn is not None else input
        self.out = out
        self.selection: Dict[Point, SelectionState] = {}

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    # --------------------------------------------------------------------------
    # Labels
    # --------------------------------------------------------------------------

    def label(self, point: Point) -> str:
        """Display name of an origin or destination for the player to move."""
        player = self.game.player
        if self.game.rules.bar_entry and point == player.bar_origin:
            return "bar"
        if not 0 <= point < 24:
            return "off"
        return str(point + 1)

    def _labels(self, state: SelectionState) -> List[str]:
        points = [p for p, s in self.selection.items() if s == state]
        labels = []
        for point in sorted(points, reverse=self.game.player == Color.BLACK):
            name = self.label(point)
            if name not in labels:
                labels.append(name)
        return labels

    def _lookup(self, text: str, state: SelectionState) -> Optional[Point]:
        wanted = text.strip().lower()
        for point in sorted(self.selection):
            if self.state(point) == state and self.label(point) == wanted:
                return point
        return None

    # --------------------------------------------------------------------------
    # Selection
    # --------------------------------------------------------------------------

    def state(self, point: Point) -> SelectionState:
        return self.selection.get(point, SelectionState.IDLE)

    def highlight(self) -> None:
        """Mark every origin the player may move from."""
        origins = self.game.choosable_pieces(self.game.player)
        self.selection = {origin: SelectionState.HIGHLIGHTED for origin in origins}

    def choose(self, origin: Point) -> None:
        """Mark an origin as picked and its destinations as candidates."""
        self.selection = {origin: SelectionState.CHOSEN}
        for destination in self.game.possible_moves_for_origin(self.game.player, origin):
            self.selection[destination] = SelectionState.CANDIDATE

    def clear(self) -> None:
        self.selection = {}

    # --------------------------------------------------------------------------
    # Prompts
    # --------------------------------------------------------------------------

    def ask_origin(self) -> Point:
        """Prompt until the player names a movable checker."""
        self.highlight()
        choices = ", ".join(self._labels(SelectionState.HIGHLIGHTED))
        while True:
            text = self.input_fn(f"Move {self.game.player} checker from [{choices}]: ")
            origin = self._lookup(text, SelectionState.HIGHLIGHTED)
            if origin is not None:
                return origin
            self._print(f"Invalid piece: {text.strip()!r}")

    def ask_destination(self, origin: Point) -> Optional[Point]:
        """Prompt for a destination; None if the player goes back."""
        self.choose(origin)
        choices = ", ".join(self._labels(SelectionState.CANDIDATE))
        while True:
            text = self.input_fn(f"Move from {self.label(origin)} to [{choices}] (or 'back'): ")
            if text.strip().lower() == "back":
                self.clear()
                return None
            destination = self._lookup(text, SelectionState.CANDIDATE)
            if destination is not None:
                return destination
            self._print(f"Invalid move destination: {text.strip()!r}")

    # --------------------------------------------------------------------------
    # Game loop
    # --------------------------------------------------------------------------

    def play_turn(self) -> None:
        """Roll for the player to move and play until the turn passes."""
        game = self.game
        player = game.player
        self._print(board_to_string(game.board))
        self._print(f"It's {player}'s turn")

        dice = self.roller()
        game.apply_roll(*dice)
        self._print(f"{player} rolled {format_roll(dice)}")

        while not game.is_over():
            if game.dice_rolls and not game.can_move(player):
                self._print(f"{player} can't move, switching turn")
            if game.finish_turn_if_blocked():
                break

            origin = self.ask_origin()
            destination = self.ask_destination(origin)
            if destination is None:
                continue
            try:
                pip = game.apply_move(origin, destination)
            except InvalidMove as err:
                self._print(str(err))
                continue
            self._print(f"{player} moved {self.label(origin)} -> {self.label(destination)} ({pip})")
            self.clear()

    def play(self, max_turns: Optional[int] = None) -> Optional[Color]:
        """Play turns until someone wins (or ``max_turns`` turns have run).

        Returns:
            The winner, or None if stopped early
        """
        turns = 0
        while not self.game.is_over():
            if max_turns is not None and turns >= max_turns:
                return None
            self.play_turn()
            turns += 1

        winner = self.game.winner()
        self._print(board_to_string(self.game.board))
        self._print(f"Game over! {winner} wins")
        return winner
