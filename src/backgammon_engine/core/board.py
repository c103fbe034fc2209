"""Board representation and move rules.

This module implements the backgammon board and the per-checker move rules:
- Board construction (standard opening layout)
- Point occupancy queries
- Move legality and move execution, including hits and bearing off
- Board display

Board Layout:
    Points are stored zero-based as signed counts: positive = White,
    negative = Black. Traditional numbering is index + 1.

    White moves 1→24→off (home board: 19-24, indices 18-23)
    Black moves 24→1→off (home board: 1-6, indices 0-5)

     13 14 15 16 17 18       19 20 21 22 23 24
    +------------------+---+------------------+
    |                  |   |                  |  White home
    |                  |BAR|                  |
    |                  |   |                  |  Black home
    +------------------+---+------------------+
     12 11 10  9  8  7        6  5  4  3  2  1
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np
from loguru import logger
from numpy.typing import NDArray

from backgammon_engine.core.types import Color, Point, RuleConfig, InvalidMove


NUM_POINTS = 24
CHECKERS_PER_PLAYER = 15

# Standard opening: index -> signed checker count
OPENING_LAYOUT: Dict[Point, int] = {
    0: 2,     # White: two on the 1-point
    11: 5,    # five on the 12-point
    16: 3,    # three on the 17-point
    18: 5,    # five on the 19-point
    23: -2,   # Black mirrors White
    12: -5,
    7: -3,
    5: -5,
}


# ==============================================================================
# BOARD
# ==============================================================================

@dataclass
class Board:
    """Board state: the 24-point track plus the bar.

    Checkers that have been borne off are not stored anywhere; their number
    is whatever is missing from the 15 each color starts with.

    Attributes:
        points: Signed checker counts for the 24 points (length 24)
        bar: Hit checkers waiting on the bar, indexed by ``Color.bar_index``
        rules: Rule parameters in force for this board
    """
    points: NDArray[np.int32] = field(default_factory=lambda: np.zeros(NUM_POINTS, dtype=np.int32))
    bar: NDArray[np.int32] = field(default_factory=lambda: np.zeros(2, dtype=np.int32))
    rules: RuleConfig = field(default_factory=RuleConfig)

    def __post_init__(self):
        """Validate board shape."""
        self.points = np.asarray(self.points, dtype=np.int32)
        self.bar = np.asarray(self.bar, dtype=np.int32)
        assert len(self.points) == NUM_POINTS, "points must have length 24"
        assert len(self.bar) == 2, "bar must have length 2"

    def copy(self) -> "Board":
        """Create a deep copy of the board."""
        return Board(points=self.points.copy(), bar=self.bar.copy(), rules=self.rules)

    # --------------------------------------------------------------------------
    # Queries
    # --------------------------------------------------------------------------

    def _check_point(self, point: Point) -> None:
        if not 0 <= point < NUM_POINTS:
            raise ValueError(f"Point index must be in 0..23, got {point}")

    def point_owner(self, point: Point) -> Optional[Color]:
        """Color holding a point, or None if it is empty.

        Raises:
            ValueError: If the index is not on the track
        """
        self._check_point(point)
        value = self.points[point]
        if value > 0:
            return Color.WHITE
        if value < 0:
            return Color.BLACK
        return None

    def point_count(self, point: Point) -> int:
        """Number of checkers on a point, whatever their color."""
        self._check_point(point)
        return abs(int(self.points[point]))

    def points_for_color(self, color: Color) -> List[Point]:
        """Indices of all points occupied by a color, in ascending order."""
        return [i for i in range(NUM_POINTS) if self.point_owner(i) == color]

    def checkers_on_track(self, color: Color) -> int:
        """Number of a color's checkers on the 24 points."""
        return sum(self.point_count(i) for i in self.points_for_color(color))

    def checkers_on_bar(self, color: Color) -> int:
        """Number of a color's checkers waiting on the bar."""
        return int(self.bar[color.bar_index])

    def is_home_complete(self, color: Color) -> bool:
        """Check whether every checker of a color on the track is in its home zone.

        Checkers on the bar or already borne off do not count against this.

        Args:
            color: Which player

        Returns:
            True if the color may bear off
        """
        home = color.home
        return all(i in home for i in self.points_for_color(color))

    def is_bear_off(self, color: Color, destination: Point) -> bool:
        """Check whether a destination lies past the color's bear-off edge."""
        if color == Color.WHITE:
            return destination >= NUM_POINTS
        return destination < 0

    def candidate_destination(self, color: Color, origin: Point, pips: int) -> Point:
        """Destination reached by moving ``pips`` from ``origin``.

        The result may fall outside 0-23, which signals a bear-off attempt.
        """
        return origin + pips * color.direction

    # --------------------------------------------------------------------------
    # Move rules
    # --------------------------------------------------------------------------

    def _from_bar(self, player: Color, origin: Point) -> bool:
        return self.rules.bar_entry and origin == player.bar_origin

    def move_error(self, player: Color, origin: Point, destination: Point) -> Optional[str]:
        """Explain why a move is illegal.

        Args:
            player: Color moving
            origin: Point the checker leaves (or the bar origin)
            destination: Point the checker lands on, or past the edge

        Returns:
            None if the move is legal, otherwise a short reason
        """
        if self._from_bar(player, origin):
            if self.checkers_on_bar(player) == 0:
                return "no checker on the bar"
        else:
            if not 0 <= origin < NUM_POINTS:
                return "origin is off the board"
            if self.point_count(origin) == 0:
                return "origin is empty"
            if self.point_owner(origin) != player:
                return "origin belongs to the opponent"
            if self.rules.bar_entry and self.checkers_on_bar(player) > 0:
                return "checkers on the bar must enter first"
            if self.is_bear_off(player, destination):
                if self.is_home_complete(player):
                    return None
                return "cannot bear off before all checkers are home"

        if not 0 <= destination < NUM_POINTS:
            return "destination is off the board"

        owner = self.point_owner(destination)
        count = self.point_count(destination)
        if owner == player.opposite():
            if count >= 2:
                return "destination is blocked"
            if (destination - origin) * player.direction <= 0:
                return "cannot hit moving backward"
        elif owner == player and self.rules.max_stack is not None and count >= self.rules.max_stack:
            return f"stack limit of {self.rules.max_stack} reached"

        return None

    def can_move_piece(self, player: Color, origin: Point, destination: Point) -> bool:
        """Check if a single checker may move from origin to destination."""
        return self.move_error(player, origin, destination) is None

    def make_move(self, player: Color, origin: Point, destination: Point) -> None:
        """Move one checker (mutates board).

        Landing on a lone opposing checker hits it onto the bar; moving past
        the edge bears the checker off.

        Args:
            player: Color moving
            origin: Point the checker leaves (or the bar origin)
            destination: Point the checker lands on, or past the edge

        Raises:
            InvalidMove: If the move is illegal. The board is left unchanged.
        """
        reason = self.move_error(player, origin, destination)
        if reason is not None:
            raise InvalidMove(player, origin, destination, reason)

        direction = player.direction
        if self._from_bar(player, origin):
            self.bar[player.bar_index] -= 1
        else:
            self.points[origin] -= direction

        if self.is_bear_off(player, destination):
            logger.debug(f"{player} bears off from point {origin + 1}")
            return

        if self.points[destination] == -direction:
            self.points[destination] = direction
            self.bar[player.opposite().bar_index] += 1
            logger.debug(f"{player} hits on point {destination + 1}")
        else:
            self.points[destination] += direction


# ==============================================================================
# BOARD CONSTRUCTION
# ==============================================================================

def initial_board(rules: Optional[RuleConfig] = None) -> Board:
    """Create the standard backgammon starting position.

    Standard setup (traditional numbering):
    - White: 2 on 1, 5 on 12, 3 on 17, 5 on 19
    - Black: 2 on 24, 5 on 13, 3 on 8, 5 on 6

    Args:
        rules: Rule parameters (defaults to standard rules)

    Returns:
        Board in starting position
    """
    board = empty_board(rules)
    for point, count in OPENING_LAYOUT.items():
        board.points[point] = count
    return board


def empty_board(rules: Optional[RuleConfig] = None) -> Board:
    """Create an empty board with no checkers."""
    return Board(rules=rules if rules is not None else RuleConfig())


# ==============================================================================
# BOARD QUERIES
# ==============================================================================

def checkers_borne_off(board: Board, color: Color) -> int:
    """Get number of checkers a color has borne off.

    Borne-off checkers are implicit: whatever is on neither the track nor
    the bar has left the game.
    """
    return CHECKERS_PER_PLAYER - board.checkers_on_track(color) - board.checkers_on_bar(color)


def pip_count(board: Board, color: Color) -> int:
    """Calculate pip count for a player.

    Pip count = total distance every checker still has to travel to bear
    off. A checker on the bar counts 25.

    Args:
        board: Current board
        color: Which player

    Returns:
        Total pip count
    """
    total = 25 * board.checkers_on_bar(color)
    for point in board.points_for_color(color):
        distance = NUM_POINTS - point if color == Color.WHITE else point + 1
        total += distance * board.point_count(point)
    return total


def is_valid_board(board: Board) -> Tuple[bool, str]:
    """Validate a board state against the checker-count invariants.

    Args:
        board: Board to validate

    Returns:
        (is_valid, error_message) tuple
    """
    for color in Color:
        if board.checkers_on_bar(color) < 0:
            return False, f"{color} has a negative bar count"
        off = checkers_borne_off(board, color)
        if off < 0:
            total = CHECKERS_PER_PLAYER - off
            return False, f"{color} has {total} checkers, should have at most 15"

    return True, ""


# ==============================================================================
# BOARD DISPLAY
# ==============================================================================

def _cell(board: Board, point: Point, row: int) -> str:
    value = int(board.points[point])
    count = abs(value)
    if row == 5 and count > 5:
        return f"{count:>2} "
    if count >= row:
        return " W " if value > 0 else " B "
    return "   "


def _half(board: Board, numbers: List[int], rows: range) -> List[str]:
    lines = []
    for row in rows:
        cells = [_cell(board, n - 1, row) for n in numbers]
        lines.append("|" + "".join(cells[:6]) + "|   |" + "".join(cells[6:]) + "|")
    return lines


def board_to_string(board: Board) -> str:
    """Convert board to string representation.

    Args:
        board: Board to display

    Returns:
        ASCII art representation in traditional 1-24 numbering
    """
    top = list(range(13, 25))
    bottom = list(range(12, 0, -1))
    border = "+" + "-" * 18 + "+---+" + "-" * 18 + "+"

    def labels(numbers: List[int]) -> str:
        cells = [f"{n:>3}" for n in numbers]
        return " " + "".join(cells[:6]) + "     " + "".join(cells[6:])

    lines = [labels(top), border]
    lines.extend(_half(board, top, range(1, 6)))
    lines.append(border)
    lines.extend(_half(board, bottom, range(5, 0, -1)))
    lines.append(border)
    lines.append(labels(bottom))
    lines.append("")
    lines.append(
        f"Bar: white {board.checkers_on_bar(Color.WHITE)}, "
        f"black {board.checkers_on_bar(Color.BLACK)}"
    )
    lines.append(
        f"Off: white {checkers_borne_off(board, Color.WHITE)}, "
        f"black {checkers_borne_off(board, Color.BLACK)}"
    )
    lines.append(
        f"Pips: white {pip_count(board, Color.WHITE)}, "
        f"black {pip_count(board, Color.BLACK)}"
    )
    return "\n".join(lines)
