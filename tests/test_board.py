from __future__ import annotations

import numpy as np
import pytest

from conftest import place, tie_pattern
from fourinarow.game.board import Board
from fourinarow.utils import (CELLS, DIRECTION_VECTORS, Cell, Outcome, PlayerColor,
                              is_valid_position, parse_location, to_location)


def all_lines():
    for row in range(6):
        for col in range(6):
            for dr, dc in DIRECTION_VECTORS.values():
                cells = [(row + dr * i, col + dc * i) for i in range(4)]
                if all(is_valid_position(r, c) for r, c in cells):
                    yield [to_location(r, c) for r, c in cells]


LINES = list(all_lines())


def test_new_board_is_empty(board):
    assert all(board.cell_at(loc) == Cell.EMPTY for loc in range(CELLS))
    assert board.evaluate_outcome() == Outcome.ONGOING
    assert board.empty_locations() == list(range(CELLS))


@pytest.mark.parametrize("location", [-1, -36, 36, 37, 100, True, 2.0, "3", None])
def test_out_of_bounds_is_ignored(board, location):
    place(board, PlayerColor.RED, 0)
    before = board.get_state()

    assert not board.is_in_bounds(location)
    assert board.cell_at(location) is None
    assert board.apply_move(PlayerColor.BLUE, location) is False
    assert board.set_cell(location, Cell.BLUE) is False
    assert np.array_equal(board.grid, before)


def test_numpy_integer_locations_are_accepted(board):
    assert board.apply_move(PlayerColor.RED, np.int64(7))
    assert board.cell_at(np.int64(7)) == Cell.RED


def test_move_changes_exactly_one_cell(board):
    place(board, PlayerColor.BLUE, 5, 30)
    before = board.get_state()

    assert board.apply_move(PlayerColor.RED, 14)

    changed = np.argwhere(board.grid != before)
    assert changed.tolist() == [[2, 2]]
    assert board.cell_at(14) == Cell.RED


def test_move_on_occupied_cell_changes_nothing(board):
    place(board, PlayerColor.RED, 14)
    before = board.get_state()

    assert board.apply_move(PlayerColor.BLUE, 14) is False
    assert board.apply_move(PlayerColor.RED, 14) is False
    assert np.array_equal(board.grid, before)


def test_set_cell_overwrites(board):
    place(board, PlayerColor.RED, 3)
    assert board.set_cell(3, Cell.BLUE)
    assert board.cell_at(3) == Cell.BLUE
    assert board.set_cell(3, Cell.EMPTY)
    assert board.cell_at(3) == Cell.EMPTY


def test_clear_resets_in_place():
    board = Board.from_cells(tie_pattern())
    grid = board.grid

    board.clear()

    assert board.grid is grid
    assert board.evaluate_outcome() == Outcome.ONGOING
    assert all(board.cell_at(loc) == Cell.EMPTY for loc in range(CELLS))


def test_every_line_shape_is_counted():
    # 18 horizontal, 18 vertical, 9 on each diagonal
    assert len(LINES) == 54


@pytest.mark.parametrize("color", list(PlayerColor))
@pytest.mark.parametrize("line", LINES)
def test_every_line_of_four_wins(line, color):
    board = place(Board(), color, *line)

    assert board.evaluate_outcome() == Outcome.won_by(color)
    assert sorted(board.winning_line()) == sorted(line)


@pytest.mark.parametrize("locations", [
    [0, 1, 2],          # only three
    [0, 1, 3, 4],       # gap
    [3, 4, 5, 6],       # would wrap from row 0 into row 1
    [0, 5, 10, 15],     # flat step of 5 is not a diagonal from column 0
    [4, 11, 18, 25],    # flat step of 7 wraps past the right edge
])
def test_no_win_without_a_straight_line(board, locations):
    place(board, PlayerColor.RED, *locations)

    assert board.evaluate_outcome() == Outcome.ONGOING
    assert board.winning_line() == []


def test_full_board_without_line_is_a_tie():
    board = Board.from_cells(tie_pattern())

    assert board.is_full()
    assert board.evaluate_outcome() == Outcome.TIE
    assert board.evaluate_outcome().winner is None


def test_nearly_full_board_is_ongoing():
    cells = tie_pattern()
    cells[20] = Cell.EMPTY
    board = Board.from_cells(cells)

    assert board.evaluate_outcome() == Outcome.ONGOING
    assert board.empty_locations() == [20]


def test_full_board_with_line_is_a_win():
    board = Board.from_cells([Cell.BLUE] * CELLS)
    assert board.evaluate_outcome() == Outcome.BLUE_WON


def test_first_line_in_row_major_order_decides(board):
    place(board, PlayerColor.RED, 30, 31, 32, 33)
    place(board, PlayerColor.BLUE, 6, 7, 8, 9)

    # Red completed first, but Blue's line is anchored earlier on the board
    assert board.evaluate_outcome() == Outcome.BLUE_WON
    assert board.winning_line() == [6, 7, 8, 9]


def test_outcome_after_does_not_touch_board(board):
    place(board, PlayerColor.RED, 0, 1, 2)
    before = board.get_state()

    assert board.outcome_after(PlayerColor.RED, 3) == Outcome.RED_WON
    assert board.outcome_after(PlayerColor.BLUE, 3) == Outcome.ONGOING
    assert np.array_equal(board.grid, before)
    assert board.evaluate_outcome() == Outcome.ONGOING


def test_copy_is_independent(board):
    place(board, PlayerColor.RED, 0)
    clone = board.copy()
    clone.apply_move(PlayerColor.BLUE, 1)

    assert board.cell_at(1) == Cell.EMPTY
    assert clone != board


def test_from_cells_accepts_symbols_and_ints():
    text = "RB." + "." * 33
    board = Board.from_cells(text)

    assert board.cell_at(0) == Cell.RED
    assert board.cell_at(1) == Cell.BLUE
    assert board.to_string() == text
    assert Board.from_cells([1, 2] + [0] * 34) == board


@pytest.mark.parametrize("cells", ["RRR", "X" * 36, [3] * 36])
def test_from_cells_rejects_bad_input(cells):
    with pytest.raises(ValueError):
        Board.from_cells(cells)


def test_render_marks_winning_line(board):
    place(board, PlayerColor.RED, 0, 1, 2, 3)
    place(board, PlayerColor.BLUE, 6)

    text = board.render()

    assert "r r r r . ." in text
    assert "B . . . . ." in text


@pytest.mark.parametrize("text, expected", [
    ("14", 14),
    (" 0 ", 0),
    ("2,2", 14),
    ("5, 5", 35),
    ("36", None),
    ("-1", None),
    ("6,0", None),
    ("1,2,3", None),
    ("abc", None),
    ("", None),
])
def test_parse_location(text, expected):
    assert parse_location(text) == expected
