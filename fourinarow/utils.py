"""
utils.py - Constants, enumerations and helpers for the Four-in-a-Row engine

The board is a fixed 6x6 grid without gravity: a piece may be placed on any
empty cell. Cells are addressed either by (row, col) or by a flat location
index, location = row * COLS + col.
"""

from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 6
CELLS = ROWS * COLS
CONNECT_N = 4  # Number of pieces in a row to win


class Cell(Enum):
    """Contents of a single board cell."""
    EMPTY = 0
    RED = 1
    BLUE = 2

    @property
    def player(self) -> Optional['PlayerColor']:
        """The player occupying this cell, or None for an empty cell."""
        if self == Cell.EMPTY:
            return None
        return PlayerColor(self.value)

    @property
    def symbol(self) -> str:
        return CELL_SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> 'Cell':
        """Parse '.', 'R' or 'B' (case insensitive), or a digit 0-2."""
        key = symbol.strip().upper()
        for cell, text in CELL_SYMBOLS.items():
            if key == text or key == str(cell.value):
                return cell
        raise ValueError(f"Unknown cell symbol: {symbol!r}")


class PlayerColor(Enum):
    """The two piece colors. Values match the corresponding Cell values."""
    RED = 1
    BLUE = 2

    @property
    def cell(self) -> Cell:
        return Cell(self.value)

    def other(self) -> 'PlayerColor':
        return PlayerColor.BLUE if self == PlayerColor.RED else PlayerColor.RED

    def __str__(self):
        return self.name.capitalize()


class Outcome(Enum):
    """Status of a board, derived from its cells."""
    ONGOING = auto()
    RED_WON = auto()
    BLUE_WON = auto()
    TIE = auto()

    def is_game_over(self) -> bool:
        return self != Outcome.ONGOING

    @property
    def winner(self) -> Optional[PlayerColor]:
        if self == Outcome.RED_WON:
            return PlayerColor.RED
        if self == Outcome.BLUE_WON:
            return PlayerColor.BLUE
        return None

    @staticmethod
    def won_by(player: PlayerColor) -> 'Outcome':
        return Outcome.RED_WON if player == PlayerColor.RED else Outcome.BLUE_WON


class Direction(Enum):
    """The four axes a line can run along, named by their forward step."""
    RIGHT = auto()
    DOWN_LEFT = auto()
    DOWN = auto()
    DOWN_RIGHT = auto()


# Forward (row, col) step for each axis, in scan order
DIRECTION_VECTORS = {
    Direction.RIGHT: (0, 1),
    Direction.DOWN_LEFT: (1, -1),
    Direction.DOWN: (1, 0),
    Direction.DOWN_RIGHT: (1, 1),
}

CELL_SYMBOLS = {
    Cell.EMPTY: ".",
    Cell.RED: "R",
    Cell.BLUE: "B",
}


def is_valid_position(row: int, col: int) -> bool:
    return 0 <= row < ROWS and 0 <= col < COLS


def is_valid_location(location) -> bool:
    """True for integer locations in [0, CELLS). Booleans are rejected."""
    if isinstance(location, bool) or not isinstance(location, (int, np.integer)):
        return False
    return 0 <= location < CELLS


def to_location(row: int, col: int) -> int:
    return row * COLS + col


def to_position(location: int) -> Tuple[int, int]:
    return divmod(int(location), COLS)


def parse_location(text: str) -> Optional[int]:
    """
    Parse user input naming a cell.

    Accepts a flat location ("14") or a "row,col" pair ("2,2").

    Returns:
        The location, or None if the text is malformed or off the board
    """
    parts = [p.strip() for p in text.split(',')]
    try:
        if len(parts) == 1:
            location = int(parts[0])
        elif len(parts) == 2:
            row, col = int(parts[0]), int(parts[1])
            if not is_valid_position(row, col):
                return None
            location = to_location(row, col)
        else:
            return None
    except ValueError:
        return None

    return location if is_valid_location(location) else None


def render_board_ascii(grid: np.ndarray, highlight: Optional[List[int]] = None) -> str:
    """
    Render a grid as text, one row per line with row and column labels.

    Args:
        grid: ROWS x COLS array of Cell values
        highlight: Locations to draw in lower case (e.g. a winning line)

    Returns:
        Multi-line string
    """
    marked = set(highlight or [])
    lines = ["    " + " ".join(str(col) for col in range(COLS))]
    lines.append("   +" + "-" * (COLS * 2 - 1) + "+")

    for row in range(ROWS):
        symbols = []
        for col in range(COLS):
            symbol = Cell(int(grid[row, col])).symbol
            if to_location(row, col) in marked:
                symbol = symbol.lower()
            symbols.append(symbol)
        lines.append(f"{row * COLS:2d} |" + " ".join(symbols) + "|")

    lines.append("   +" + "-" * (COLS * 2 - 1) + "+")
    return "\n".join(lines)
