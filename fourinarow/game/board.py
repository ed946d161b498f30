"""
board.py - Board representation and core rules for Four-in-a-Row

This module implements the Board class: a fixed 6x6 grid on which a piece may
be placed on any empty cell. It validates and applies moves, and derives the
outcome (win, tie, ongoing) from the cells on demand.

The board does not track whose turn it is. Illegal input (an off-board
location or an occupied cell) is ignored rather than raised: mutators return
False and leave the grid untouched, and queries return None.
"""

from typing import Iterable, List, Optional, Union

import numpy as np

from fourinarow.debug import debug
from fourinarow.utils import (CELLS, COLS, CONNECT_N, DIRECTION_VECTORS, ROWS,
                              Cell, Outcome, PlayerColor, is_valid_location,
                              is_valid_position, render_board_ascii,
                              to_location, to_position)


class Board:
    """
    A Four-in-a-Row game board.

    Cells are stored in a numpy array of Cell values and can be addressed by
    flat location (0-35) or by (row, col).
    """

    def __init__(self):
        """Initialize an empty board."""
        self.grid = np.full((ROWS, COLS), Cell.EMPTY.value, dtype=np.int8)

    @classmethod
    def from_cells(cls, cells: Union[str, Iterable]) -> 'Board':
        """
        Build a board from CELLS values in location order.

        Args:
            cells: Cell members, ints 0-2, or a string of '.', 'R', 'B'
                characters. Strings may contain whitespace and commas.

        Returns:
            A new Board

        Raises:
            ValueError: If a value is not a cell or the count is wrong
        """
        if isinstance(cells, str):
            values = [ch for ch in cells if not ch.isspace() and ch != ',']
        else:
            values = list(cells)

        if len(values) != CELLS:
            raise ValueError(f"Expected {CELLS} cells, got {len(values)}")

        board = cls()
        for location, value in enumerate(values):
            if isinstance(value, Cell):
                cell = value
            elif isinstance(value, str):
                cell = Cell.from_symbol(value)
            else:
                cell = Cell(int(value))
            board.set_cell(location, cell)
        return board

    def clear(self) -> None:
        """Reset every cell to EMPTY in place."""
        debug.debug("Clearing board", "board")
        self.grid.fill(Cell.EMPTY.value)

    def copy(self) -> 'Board':
        new_board = Board()
        new_board.grid = self.grid.copy()
        return new_board

    def is_in_bounds(self, location) -> bool:
        return is_valid_location(location)

    def cell_at(self, location) -> Optional[Cell]:
        """
        Get the contents of a cell.

        Returns:
            The Cell at location, or None if location is off the board
        """
        if not self.is_in_bounds(location):
            return None
        row, col = to_position(location)
        return Cell(int(self.grid[row, col]))

    def cell_at_position(self, row: int, col: int) -> Optional[Cell]:
        if not is_valid_position(row, col):
            return None
        return Cell(int(self.grid[row, col]))

    def set_cell(self, location, value: Cell) -> bool:
        """
        Write a cell unconditionally.

        Returns:
            True if written, False if location is off the board
        """
        if not self.is_in_bounds(location):
            debug.trace(f"Ignoring write to out-of-bounds location {location}", "board")
            return False
        row, col = to_position(location)
        self.grid[row, col] = value.value
        return True

    def apply_move(self, player: PlayerColor, location) -> bool:
        """
        Place a piece for player on an empty cell.

        Moves on occupied or off-board cells are ignored.

        Args:
            player: Color of the piece to place
            location: Flat location index (0-35)

        Returns:
            True if the piece was placed, False if the move was ignored
        """
        cell = self.cell_at(location)
        if cell is None:
            debug.debug(f"Ignored move by {player}: location {location} out of bounds", "board")
            return False
        if cell != Cell.EMPTY:
            debug.debug(f"Ignored move by {player}: location {location} holds {cell.name}", "board")
            return False

        self.set_cell(location, player.cell)
        debug.trace(f"{player} placed at {location} {to_position(location)}", "board")
        return True

    def empty_locations(self) -> List[int]:
        """Locations of all empty cells in ascending order."""
        return [int(loc) for loc in np.flatnonzero(self.grid == Cell.EMPTY.value)]

    def is_full(self) -> bool:
        return not np.any(self.grid == Cell.EMPTY.value)

    def _line_from(self, row: int, col: int, dr: int, dc: int) -> Optional[List[int]]:
        """Locations of a CONNECT_N line starting at (row, col), if all match it."""
        value = self.grid[row, col]
        line = []
        for i in range(CONNECT_N):
            r, c = row + dr * i, col + dc * i
            if not is_valid_position(r, c) or self.grid[r, c] != value:
                return None
            line.append(to_location(r, c))
        return line

    def _find_line(self) -> Optional[List[int]]:
        # Row-major scan; the first anchor with a complete line wins.
        for row in range(ROWS):
            for col in range(COLS):
                if self.grid[row, col] == Cell.EMPTY.value:
                    continue
                for dr, dc in DIRECTION_VECTORS.values():
                    line = self._line_from(row, col, dr, dc)
                    if line is not None:
                        return line
        return None

    def evaluate_outcome(self) -> Outcome:
        """
        Derive the outcome from the current cells.

        When several lines exist at once, the one whose first cell comes
        first in row-major order decides the result.

        Returns:
            RED_WON or BLUE_WON for a line of four, TIE for a full board,
            otherwise ONGOING
        """
        line = self._find_line()
        if line is not None:
            player = self.cell_at(line[0]).player
            return Outcome.won_by(player)

        if self.is_full():
            return Outcome.TIE
        return Outcome.ONGOING

    def winning_line(self) -> List[int]:
        """Locations of the line evaluate_outcome reports, or an empty list."""
        return self._find_line() or []

    def outcome_after(self, player: PlayerColor, location) -> Outcome:
        """
        Outcome if player occupied location, computed on a copy of the grid.

        The board itself is never modified.
        """
        probe = self.copy()
        probe.set_cell(location, player.cell)
        return probe.evaluate_outcome()

    def get_state(self) -> np.ndarray:
        return self.grid.copy()

    def to_string(self) -> str:
        """Compact one-line form accepted by from_cells."""
        return "".join(Cell(int(v)).symbol for v in self.grid.flat)

    def render(self, highlight_win: bool = True) -> str:
        highlight = self.winning_line() if highlight_win else None
        return render_board_ascii(self.grid, highlight)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    def __str__(self) -> str:
        return self.render()
