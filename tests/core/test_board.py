"""Tests for board module."""

import numpy as np
import pytest

from backgammon_engine.core.board import (
    Board,
    NUM_POINTS,
    initial_board,
    empty_board,
    checkers_borne_off,
    pip_count,
    is_valid_board,
    board_to_string,
)
from backgammon_engine.core.types import Color, RuleConfig, InvalidMove


def board_with(layout, bar=(0, 0), rules=None):
    board = empty_board(rules)
    for point, count in layout.items():
        board.points[point] = count
    board.bar[:] = bar
    return board


class TestBoardInitialization:
    """Tests for board initialization."""

    def test_initial_board(self):
        """Test standard starting position."""
        board = initial_board()

        # Check white pieces
        assert board.points[0] == 2
        assert board.points[11] == 5
        assert board.points[16] == 3
        assert board.points[18] == 5

        # Check black pieces
        assert board.points[23] == -2
        assert board.points[12] == -5
        assert board.points[7] == -3
        assert board.points[5] == -5

        # Check totals
        assert board.checkers_on_track(Color.WHITE) == 15
        assert board.checkers_on_track(Color.BLACK) == 15
        assert list(board.bar) == [0, 0]

    def test_empty_board(self):
        """Test empty board."""
        board = empty_board()
        assert not board.points.any()
        assert board.rules == RuleConfig()

    def test_board_shape_checked(self):
        with pytest.raises(AssertionError):
            Board(points=np.zeros(23, dtype=np.int32))

    def test_copy_is_independent(self):
        board = initial_board()
        clone = board.copy()
        clone.points[0] = 0
        clone.bar[1] = 3
        assert board.points[0] == 2
        assert board.bar[1] == 0


class TestBoardQueries:
    """Tests for board state queries."""

    def test_point_owner_and_count(self):
        board = initial_board()
        assert board.point_owner(0) == Color.WHITE
        assert board.point_owner(5) == Color.BLACK
        assert board.point_owner(1) is None
        assert board.point_count(12) == 5
        assert board.point_count(1) == 0

    def test_point_index_out_of_range(self):
        """Negative indices must not wrap around to the far end."""
        board = initial_board()
        for bad in (-1, 24, 30):
            with pytest.raises(ValueError):
                board.point_owner(bad)
            with pytest.raises(ValueError):
                board.point_count(bad)

    def test_points_for_color(self):
        board = initial_board()
        assert board.points_for_color(Color.WHITE) == [0, 11, 16, 18]
        assert board.points_for_color(Color.BLACK) == [5, 7, 12, 23]

    def test_candidate_destination(self):
        board = initial_board()
        assert board.candidate_destination(Color.WHITE, 20, 3) == 23
        assert board.candidate_destination(Color.WHITE, 20, 5) == 25
        assert board.candidate_destination(Color.BLACK, 3, 2) == 1
        assert board.candidate_destination(Color.BLACK, 3, 6) == -3

    def test_pip_count_initial(self):
        """Standard pip count at start is 167 for each player."""
        board = initial_board()
        assert pip_count(board, Color.WHITE) == 167
        assert pip_count(board, Color.BLACK) == 167

    def test_pip_count_bar(self):
        board = board_with({22: 1}, bar=(1, 0))
        assert pip_count(board, Color.WHITE) == 2 + 25

    def test_checkers_borne_off(self):
        board = board_with({20: 3, 2: -4}, bar=(0, 1))
        assert checkers_borne_off(board, Color.WHITE) == 12
        assert checkers_borne_off(board, Color.BLACK) == 10
        assert checkers_borne_off(initial_board(), Color.WHITE) == 0


class TestHomeComplete:
    """Tests for bear-off eligibility."""

    def test_opening_not_complete(self):
        board = initial_board()
        assert not board.is_home_complete(Color.WHITE)
        assert not board.is_home_complete(Color.BLACK)

    def test_all_home(self):
        board = board_with({18: 5, 23: 10, 0: -3, 5: -12})
        assert board.is_home_complete(Color.WHITE)
        assert board.is_home_complete(Color.BLACK)

    def test_one_straggler(self):
        board = board_with({18: 5, 17: 1})
        assert not board.is_home_complete(Color.WHITE)

    def test_bar_does_not_block(self):
        """Checkers on the bar are not on the track."""
        board = board_with({20: 2}, bar=(1, 0))
        assert board.is_home_complete(Color.WHITE)


class TestCanMovePiece:
    """Tests for single-checker move legality."""

    def test_empty_origin_rejected(self):
        board = initial_board()
        assert not board.can_move_piece(Color.WHITE, 1, 3)

    def test_opponent_origin_rejected(self):
        board = initial_board()
        assert not board.can_move_piece(Color.WHITE, 5, 8)
        assert not board.can_move_piece(Color.BLACK, 0, 3)

    def test_blocked_destination(self):
        """Two or more opposing checkers block a point."""
        board = initial_board()
        assert not board.can_move_piece(Color.WHITE, 0, 5)
        assert not board.can_move_piece(Color.WHITE, 11, 12)
        assert not board.can_move_piece(Color.BLACK, 23, 18)

    def test_open_destination(self):
        board = initial_board()
        assert board.can_move_piece(Color.WHITE, 0, 3)
        assert board.can_move_piece(Color.WHITE, 16, 17)
        assert board.can_move_piece(Color.BLACK, 12, 9)

    def test_destination_off_board_without_home(self):
        board = initial_board()
        assert not board.can_move_piece(Color.WHITE, 18, 24)
        assert not board.can_move_piece(Color.BLACK, 5, -1)

    def test_bear_off_when_home_complete(self):
        board = board_with({20: 2, 23: 1, 3: -2})
        assert board.can_move_piece(Color.WHITE, 20, 24)
        assert board.can_move_piece(Color.WHITE, 20, 26)
        assert board.can_move_piece(Color.BLACK, 3, -1)
        assert board.can_move_piece(Color.BLACK, 3, -3)

    def test_hit_allowed_forward(self):
        board = board_with({8: 1, 11: -1})
        assert board.can_move_piece(Color.WHITE, 8, 11)

    def test_hit_rejected_backward(self):
        board = board_with({10: 1, 8: -1})
        assert not board.can_move_piece(Color.WHITE, 10, 8)
        assert board.move_error(Color.WHITE, 10, 8) == "cannot hit moving backward"

    def test_no_stack_limit_by_default(self):
        board = board_with({6: 1, 11: 9})
        assert board.can_move_piece(Color.WHITE, 6, 11)

    def test_stack_limit(self):
        board = board_with({6: 1, 11: 5, 9: 4}, rules=RuleConfig(max_stack=5))
        assert not board.can_move_piece(Color.WHITE, 6, 11)
        assert board.can_move_piece(Color.WHITE, 6, 9)

    def test_stack_limit_ignores_bear_off(self):
        board = board_with({22: 6}, rules=RuleConfig(max_stack=5))
        assert board.can_move_piece(Color.WHITE, 22, 25)


class TestMakeMove:
    """Tests for applying single-checker moves."""

    def test_simple_move(self):
        board = initial_board()
        board.make_move(Color.WHITE, 0, 3)
        assert board.points[0] == 1
        assert board.points[3] == 1

        board.make_move(Color.BLACK, 12, 9)
        assert board.points[12] == -4
        assert board.points[9] == -1

    def test_hit_sends_to_bar(self):
        """White on 22 hits the Black blot on 23."""
        board = board_with({22: 1, 23: -1})
        board.make_move(Color.WHITE, 22, 23)

        assert board.points[22] == 0
        assert board.points[23] == 1
        assert board.checkers_on_bar(Color.BLACK) == 1
        assert board.bar[Color.BLACK.bar_index] == 1
        assert board.checkers_on_bar(Color.WHITE) == 0

    def test_bear_off_removes_checker(self):
        board = board_with({20: 2, 23: 1})
        board.make_move(Color.WHITE, 20, 26)
        assert board.points[20] == 1
        assert checkers_borne_off(board, Color.WHITE) == 13
        assert list(board.bar) == [0, 0]

    def test_black_bear_off(self):
        board = board_with({1: -3})
        board.make_move(Color.BLACK, 1, -1)
        assert board.points[1] == -2
        assert checkers_borne_off(board, Color.BLACK) == 13

    def test_illegal_move_leaves_board_untouched(self):
        board = initial_board()
        before = board.copy()
        with pytest.raises(InvalidMove) as info:
            board.make_move(Color.WHITE, 0, 5)
        assert info.value.reason == "destination is blocked"
        assert np.array_equal(board.points, before.points)
        assert np.array_equal(board.bar, before.bar)

    def test_early_bear_off_rejected(self):
        board = initial_board()
        with pytest.raises(InvalidMove):
            board.make_move(Color.WHITE, 18, 24)


class TestBarEntry:
    """Tests for re-entering hit checkers."""

    def test_must_enter_first(self):
        board = board_with({12: -2}, bar=(0, 1))
        assert not board.can_move_piece(Color.BLACK, 12, 10)
        assert board.move_error(Color.BLACK, 12, 10) == "checkers on the bar must enter first"

    def test_enter_on_open_point(self):
        board = board_with({12: -2}, bar=(0, 1))
        assert board.can_move_piece(Color.BLACK, 24, 20)
        board.make_move(Color.BLACK, 24, 20)
        assert board.points[20] == -1
        assert board.checkers_on_bar(Color.BLACK) == 0

    def test_white_enters_low(self):
        board = board_with({}, bar=(1, 0))
        board.make_move(Color.WHITE, -1, 2)
        assert board.points[2] == 1
        assert board.checkers_on_bar(Color.WHITE) == 0

    def test_enter_with_hit(self):
        board = board_with({21: 1, 12: -2}, bar=(0, 1))
        board.make_move(Color.BLACK, 24, 21)
        assert board.points[21] == -1
        assert board.checkers_on_bar(Color.WHITE) == 1
        assert board.checkers_on_bar(Color.BLACK) == 0

    def test_entry_blocked(self):
        board = board_with({20: 2}, bar=(0, 1))
        assert not board.can_move_piece(Color.BLACK, 24, 20)

    def test_empty_bar(self):
        board = initial_board()
        assert not board.can_move_piece(Color.BLACK, 24, 20)

    def test_bar_entry_disabled(self):
        """Without re-entry, bar checkers never hold up other moves."""
        board = board_with({12: -2}, bar=(0, 1), rules=RuleConfig(bar_entry=False))
        assert board.can_move_piece(Color.BLACK, 12, 10)
        assert not board.can_move_piece(Color.BLACK, 24, 20)


class TestBoardValidation:

    def test_initial_board_valid(self):
        assert is_valid_board(initial_board()) == (True, "")

    def test_too_many_checkers(self):
        board = initial_board()
        board.points[1] = 1
        valid, message = is_valid_board(board)
        assert not valid
        assert "16" in message

    def test_negative_bar(self):
        board = initial_board()
        board.bar[0] = -1
        assert not is_valid_board(board)[0]


class TestBoardDisplay:
    """Tests for board display."""

    def test_board_to_string(self):
        """Test board string representation."""
        s = board_to_string(initial_board())
        lines = s.splitlines()

        assert "13" in lines[0] and "24" in lines[0]
        assert " W " in lines[2] and " B " in lines[2]
        assert "Pips: white 167, black 167" in s
        assert "Off: white 0, black 0" in s
        assert "Bar: white 0, black 0" in s

    def test_tall_stack_shows_count(self):
        board = board_with({0: 7})
        lines = board_to_string(board).splitlines()
        # Row 5 of the lower half, point 1 is the last cell
        assert lines[8].endswith(" 7 |")
        assert lines[12].endswith(" W |")

    def test_rows_have_equal_width(self):
        lines = board_to_string(initial_board()).splitlines()
        assert len({len(line) for line in lines[1:14]}) == 1
        assert NUM_POINTS == 24
