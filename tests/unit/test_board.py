import logging

import numpy as np
import pytest

from c4engine.debug import LOGGER_NAME
from c4engine.errors import ConfigurationError, OutOfRangeError
from c4engine.game.board import Board
from c4engine.utils import ROWS, COLS, Slot


def test_new_board_is_empty():
    board = Board()

    assert board.grid.shape == (ROWS, COLS)
    assert board.count_pieces() == 0
    assert board.get_valid_moves() == list(range(COLS))


@pytest.mark.parametrize("rows, cols", [(3, 7), (6, 3), (0, 0)])
def test_too_small_board_is_rejected(rows, cols):
    with pytest.raises(ConfigurationError):
        Board(rows, cols)


def test_minimum_board_is_accepted():
    board = Board(4, 4)
    assert board.find_drop_row(3) == 3


def test_find_drop_row_scans_from_bottom():
    board = Board()
    assert board.find_drop_row(2) == ROWS - 1

    board.place(2, Slot.ONE)
    board.place(2, Slot.TWO)

    assert board.find_drop_row(2) == ROWS - 3
    assert board.column_height(2) == 2


def test_find_drop_row_returns_none_for_full_column():
    board = Board()
    for i in range(ROWS):
        board.place(0, Slot.ONE if i % 2 == 0 else Slot.TWO)

    assert board.find_drop_row(0) is None
    assert board.place(0, Slot.ONE) is None
    assert 0 not in board.get_valid_moves()


@pytest.mark.parametrize("column", [-1, COLS, 100, "3", 2.0, True])
def test_find_drop_row_rejects_bad_columns(column):
    board = Board()
    with pytest.raises(OutOfRangeError):
        board.find_drop_row(column)


def test_rejected_column_is_logged(caplog, propagate):
    board = Board()

    with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
        with pytest.raises(OutOfRangeError):
            board.find_drop_row(COLS)

    assert any("Column 7 rejected" in r.getMessage() for r in caplog.records)


def test_find_drop_row_accepts_numpy_integers():
    board = Board()
    assert board.find_drop_row(np.int64(3)) == ROWS - 1


def test_place_empty_slot_is_rejected():
    board = Board()
    with pytest.raises(ValueError):
        board.place(0, Slot.EMPTY)


def test_get_cell_outside_board_raises():
    board = Board()
    with pytest.raises(OutOfRangeError):
        board.get_cell(ROWS, 0)


def test_horizontal_win_from_full_scan():
    board = Board()
    for col in range(2, 6):
        board.grid[ROWS - 3, col] = Slot.TWO.value

    assert board.has_win(Slot.TWO)
    assert not board.has_win(Slot.ONE)
    assert board.find_winning_line(Slot.TWO) == [(ROWS - 3, c) for c in range(2, 6)]


def test_three_in_a_row_is_not_a_win():
    board = Board()
    for col in range(3):
        board.grid[ROWS - 1, col] = Slot.ONE.value

    assert not board.has_win(Slot.ONE)
    assert not board.check_win_at(ROWS - 1, 0)


def test_broken_line_is_not_a_win():
    board = Board()
    for col in (0, 1, 3, 4):
        board.grid[ROWS - 1, col] = Slot.ONE.value

    assert not board.has_win(Slot.ONE)


def test_vertical_win_detection():
    board = Board()
    for row in range(ROWS - 1, ROWS - 5, -1):
        board.grid[row, 3] = Slot.ONE.value

    assert board.has_win(Slot.ONE)
    assert board.check_win_at(ROWS - 4, 3)


def test_diagonal_down_right_win():
    board = Board()
    for i in range(4):
        board.grid[i, i] = Slot.TWO.value

    assert board.has_win(Slot.TWO)
    assert board.find_winning_line(Slot.TWO) == [(0, 0), (1, 1), (2, 2), (3, 3)]


def test_diagonal_down_left_win():
    board = Board()
    for i in range(4):
        board.grid[ROWS - 4 + i, 6 - i] = Slot.ONE.value

    assert board.has_win(Slot.ONE)
    assert board.check_win_at(ROWS - 1, 3)


def test_runs_do_not_wrap_around_edges():
    board = Board()
    for col in (5, 6):
        board.grid[ROWS - 1, col] = Slot.ONE.value
    for col in (0, 1):
        board.grid[ROWS - 2, col] = Slot.ONE.value

    assert not board.has_win(Slot.ONE)


def test_winning_line_includes_every_connected_piece():
    board = Board()
    for col in range(1, 6):
        board.grid[ROWS - 1, col] = Slot.ONE.value

    line = board.get_winning_line(ROWS - 1, 3)

    assert sorted(line) == [(ROWS - 1, c) for c in range(1, 6)]


def test_winning_line_of_empty_cell_is_empty():
    board = Board()
    assert board.get_winning_line(0, 0) == []


def test_from_position_round_trip():
    values = [0] * (ROWS * COLS)
    values[-1] = 1
    values[-2] = 2
    board = Board.from_position(",".join(str(v) for v in values))

    assert board.get_cell(ROWS - 1, COLS - 1) == Slot.ONE
    assert board.get_cell(ROWS - 1, COLS - 2) == Slot.TWO
    assert not board.has_floating_pieces()


@pytest.mark.parametrize("position", ["1,2,0", ",".join(["3"] * (ROWS * COLS))])
def test_from_position_rejects_bad_input(position):
    with pytest.raises(ValueError):
        Board.from_position(position)


def test_floating_piece_is_detected():
    board = Board()
    board.grid[0, 0] = Slot.ONE.value

    assert board.has_floating_pieces()


def test_copy_is_independent():
    board = Board()
    board.place(3, Slot.ONE)

    clone = board.copy()
    clone.place(3, Slot.TWO)

    assert board.column_height(3) == 1
    assert clone.column_height(3) == 2


def test_get_state_returns_a_copy():
    board = Board()
    state = board.get_state()
    state[ROWS - 1, 0] = Slot.ONE.value

    assert board.count_pieces() == 0


def test_render_shows_pieces_and_column_numbers():
    board = Board()
    board.place(0, Slot.ONE)
    board.place(1, Slot.TWO)

    lines = board.render().splitlines()

    assert lines[-3] == "|X O . . . . .|"
    assert lines[-1] == "|0 1 2 3 4 5 6|"
