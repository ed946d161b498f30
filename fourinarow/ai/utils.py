"""
utils.py - Board encodings for agents

Helpers that turn a Board into the arrays an agent consumes: one-hot planes
seen from one player's side, and a mask of playable locations.
"""

import numpy as np

from fourinarow.game.board import Board
from fourinarow.utils import CELLS, Cell, PlayerColor


def board_to_state(board: Board, perspective: PlayerColor) -> np.ndarray:
    """
    Encode the board as three one-hot planes.

    Plane 0 marks empty cells, plane 1 the pieces of perspective, and
    plane 2 the opponent's pieces.

    Returns:
        float32 array of shape (3, ROWS, COLS)
    """
    grid = board.grid
    return np.stack([
        grid == Cell.EMPTY.value,
        grid == perspective.cell.value,
        grid == perspective.other().cell.value,
    ]).astype(np.float32)


def get_valid_action_mask(board: Board) -> np.ndarray:
    """int8 array of length CELLS with 1 for each empty location."""
    mask = np.zeros(CELLS, dtype=np.int8)
    mask[board.empty_locations()] = 1
    return mask
