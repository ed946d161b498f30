from __future__ import annotations

import numpy as np
import pytest

from fourinarow.debug import debug
from fourinarow.game.board import Board
from fourinarow.utils import COLS, ROWS, Cell, PlayerColor


def tie_pattern() -> list:
    """A full board with no four in a row: rows alternate RRBBRR / BBRRBB."""
    cells = []
    for row in range(ROWS):
        for col in range(COLS):
            cells.append(Cell.RED if (col // 2 + row) % 2 == 0 else Cell.BLUE)
    return cells


def place(board: Board, color: PlayerColor, *locations: int) -> Board:
    for location in locations:
        assert board.apply_move(color, location)
    return board


@pytest.fixture
def board() -> Board:
    return Board()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    path = tmp_path / "data"
    monkeypatch.setenv("FOURINAROW_DATA_DIR", str(path))
    return path


@pytest.fixture(autouse=True)
def restore_debug_level():
    level = debug.level
    yield
    debug.configure(level=level, enabled=True, components=[])

