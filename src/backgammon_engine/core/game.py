"""Game orchestration.

A ``Game`` owns one board and one turn state and is driven entirely by its
caller: a roll comes in, moves are queried and applied, and the turn is
handed over when the dice are spent or nothing can move. Nothing here runs
on its own.

Turn flow:
    AWAITING_ROLL → apply_roll → MOVING → apply_move* → finish_turn_if_blocked
    → AWAITING_ROLL, with GAME_OVER once a color has borne off all 15.
"""

from typing import List, Optional, Sequence, Set

from loguru import logger

from backgammon_engine.core.board import (
    Board,
    NUM_POINTS,
    CHECKERS_PER_PLAYER,
    initial_board,
    checkers_borne_off,
)
from backgammon_engine.core.turn import TurnState
from backgammon_engine.core.types import (
    Color,
    Point,
    Move,
    RuleConfig,
    InvalidMove,
    GameLogEntry,
    TurnPhase,
)


def bear_off_distance(color: Color, origin: Point) -> int:
    """Smallest pip that carries a checker on ``origin`` off the board."""
    return NUM_POINTS - origin if color == Color.WHITE else origin + 1


class Game:
    """A single match between White and Black.

    Attributes:
        board: The board, mutated in place by every accepted move
        turn: Player to move, remaining pips and the roll log
    """

    def __init__(self, rules: Optional[RuleConfig] = None):
        self.board: Board = initial_board(rules)
        self.turn = TurnState()

    # --------------------------------------------------------------------------
    # State
    # --------------------------------------------------------------------------

    @property
    def rules(self) -> RuleConfig:
        return self.board.rules

    @property
    def player(self) -> Color:
        return self.turn.player

    @property
    def dice_rolls(self) -> List[int]:
        return self.turn.dice_rolls

    @property
    def log(self) -> List[GameLogEntry]:
        return self.turn.log

    @property
    def phase(self) -> TurnPhase:
        if self.is_over():
            return TurnPhase.GAME_OVER
        if self.turn.rolled:
            return TurnPhase.MOVING
        return TurnPhase.AWAITING_ROLL

    # --------------------------------------------------------------------------
    # Move enumeration
    # --------------------------------------------------------------------------

    def _origins(self, player: Color) -> List[Point]:
        if self.rules.bar_entry and self.board.checkers_on_bar(player) > 0:
            return [player.bar_origin]
        return self.board.points_for_color(player)

    def possible_moves(self, player: Color, pips: Sequence[int]) -> Set[Move]:
        """All single-checker moves a player could make with the given pips.

        Args:
            player: Color to move
            pips: Pip values to try (duplicates are harmless)

        Returns:
            Set of (origin, destination) pairs. A destination outside 0-23
            is a bear-off.
        """
        moves = set()
        for origin in self._origins(player):
            for pip in pips:
                destination = self.board.candidate_destination(player, origin, pip)
                if self.board.can_move_piece(player, origin, destination):
                    moves.add((origin, destination))
        return moves

    def possible_moves_for_origin(self, player: Color, origin: Point) -> List[Point]:
        """Destinations reachable from one origin with the pips left this turn.

        Returned in the order a player scans the board: ascending for White,
        descending for Black.
        """
        unique_pips = sorted(set(self.turn.dice_rolls))
        destinations = sorted(
            destination
            for start, destination in self.possible_moves(player, unique_pips)
            if start == origin
        )
        if player == Color.BLACK:
            destinations.reverse()
        return destinations

    def choosable_pieces(self, player: Color) -> Set[Point]:
        """Origins a player can move from with the pips left this turn."""
        return {origin for origin, _ in self.possible_moves(player, self.turn.dice_rolls)}

    def can_move(self, player: Color) -> bool:
        """Check if any of the remaining pips can be played."""
        return len(self.possible_moves(player, self.turn.dice_rolls)) > 0

    # --------------------------------------------------------------------------
    # Mutators
    # --------------------------------------------------------------------------

    def apply_roll(self, d1: int, d2: int) -> List[int]:
        """Take a roll for the player to move.

        Args:
            d1: First die (1-6)
            d2: Second die (1-6)

        Returns:
            The pips now available (four of a kind for doubles)

        Raises:
            ValueError: If a die value is invalid or the game is already over
        """
        if self.is_over():
            raise ValueError("Game is over")
        return self.turn.apply_roll(d1, d2)

    def _pip_for(self, player: Color, origin: Point, destination: Point) -> Optional[int]:
        """Pip that pays for a move, or None if no remaining pip does."""
        available = self.turn.dice_rolls
        bar_move = self.rules.bar_entry and origin == player.bar_origin
        if self.board.is_bear_off(player, destination) and not bar_move:
            needed = bear_off_distance(player, origin)
            sufficient = [pip for pip in available if pip >= needed]
            return min(sufficient) if sufficient else None

        pip = abs(destination - origin)
        if pip in available and self.board.candidate_destination(player, origin, pip) == destination:
            return pip
        return None

    def apply_move(self, origin: Point, destination: Point) -> int:
        """Move a checker for the player to move and spend the matching pip.

        On-board moves spend ``|destination - origin|``. Bear-offs spend the
        smallest remaining pip that reaches past the edge from ``origin``.

        Args:
            origin: Point the checker leaves (or the bar origin)
            destination: Point the checker lands on, or past the edge

        Returns:
            The pip consumed

        Raises:
            InvalidMove: If the move is illegal or no remaining pip covers
                it. Nothing is changed in that case.
        """
        player = self.player
        if self.is_over():
            reason = "game is over"
        else:
            reason = self.board.move_error(player, origin, destination)
        pip = None
        if reason is None:
            pip = self._pip_for(player, origin, destination)
            if pip is None:
                reason = f"no remaining pip in {self.turn.dice_rolls} covers it"
        if reason is not None:
            logger.warning(f"Rejected {player} move {origin} -> {destination}: {reason}")
            raise InvalidMove(player, origin, destination, reason)

        self.board.make_move(player, origin, destination)
        self.turn.consume_pip(pip)
        logger.debug(f"{player} moves {origin} -> {destination} using {pip}")
        return pip

    def bear_off_piece(self, pip: int) -> Move:
        """Play one pip during the bear-off, following the inexact-roll rule.

        A checker on the point the pip bears off exactly is removed. If that
        point is empty, a checker further back that can move the full pip on
        the board is moved instead, nearest first; when none of them can,
        a checker is borne off from the nearest occupied point behind. If no
        checker is further back, the checker furthest from the edge is
        borne off.

        Args:
            pip: Remaining pip to play

        Returns:
            The (origin, destination) move that was applied

        Raises:
            InvalidMove: If the pip is not available or the home board is
                not complete.
        """
        player = self.player
        board = self.board
        exact_origin = NUM_POINTS - pip if player == Color.WHITE else pip - 1
        edge = board.candidate_destination(player, exact_origin, pip)

        if self.is_over():
            raise InvalidMove(player, exact_origin, edge, "game is over")
        if pip not in self.turn.dice_rolls:
            raise InvalidMove(player, exact_origin, edge, f"pip {pip} not in {self.turn.dice_rolls}")
        if self.rules.bar_entry and board.checkers_on_bar(player) > 0:
            raise InvalidMove(player, exact_origin, edge, "checkers on the bar must enter first")
        if not board.is_home_complete(player):
            raise InvalidMove(player, exact_origin, edge, "cannot bear off before all checkers are home")

        home = player.home
        if board.point_owner(exact_origin) == player:
            move = (exact_origin, edge)
        else:
            # Home points further from the edge than the exact point, nearest first
            if player == Color.WHITE:
                behind = range(exact_origin - 1, home.start - 1, -1)
            else:
                behind = range(exact_origin + 1, home.stop)
            occupied_behind = [i for i in behind if board.point_owner(i) == player]

            if occupied_behind:
                playable = [
                    (origin, board.candidate_destination(player, origin, pip))
                    for origin in occupied_behind
                    if board.can_move_piece(player, origin, board.candidate_destination(player, origin, pip))
                ]
                if playable:
                    move = playable[0]
                else:
                    nearest = occupied_behind[0]
                    move = (nearest, NUM_POINTS if player == Color.WHITE else -1)
            else:
                occupied = board.points_for_color(player)
                if not occupied:
                    raise InvalidMove(player, exact_origin, edge, "no checkers left to bear off")
                furthest = min(occupied) if player == Color.WHITE else max(occupied)
                move = (furthest, board.candidate_destination(player, furthest, pip))

        board.make_move(player, *move)
        self.turn.consume_pip(pip)
        logger.debug(f"{player} plays {pip} in the bear-off: {move[0]} -> {move[1]}")
        return move

    def switch_turn(self) -> None:
        """Hand the move to the other color."""
        self.turn.switch_turn()

    def finish_turn_if_blocked(self) -> bool:
        """Switch the turn once the pips are spent or none can be played.

        Returns:
            True if the turn was switched
        """
        if not self.turn.rolled or self.is_over():
            return False
        if self.turn.dice_rolls and self.can_move(self.player):
            return False
        if self.turn.dice_rolls:
            logger.debug(f"{self.player} cannot play {self.turn.dice_rolls}")
        self.switch_turn()
        return True

    # --------------------------------------------------------------------------
    # Outcome
    # --------------------------------------------------------------------------

    def is_over(self) -> bool:
        """Check if a color has borne off all of its checkers."""
        return self.winner() is not None

    def winner(self) -> Optional[Color]:
        """Color that has borne off all 15 checkers, if any."""
        for color in Color:
            if checkers_borne_off(self.board, color) == CHECKERS_PER_PLAYER:
                return color
        return None
