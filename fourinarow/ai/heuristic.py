"""
heuristic.py - One-ply heuristic computer player for Four-in-a-Row

The computer picks its move in three tiers:

1. Take any move that ends the game (a win, or a tie on the last cell)
2. Otherwise block any move that would end the game for the opponent
3. Otherwise score every empty cell by how much it helps build the computer's
   own lines and how much it spoils the opponent's, weighting the opponent
   twice as heavily, and choose uniformly at random among the best cells

Tiers 1 and 2 take the first match in ascending location order.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from fourinarow.debug import debug
from fourinarow.game.board import Board
from fourinarow.utils import (CONNECT_N, DIRECTION_VECTORS, Cell, PlayerColor,
                              to_position)

COMPUTER_WEIGHT = 1
OPPONENT_WEIGHT = 2
MIN_RUN_LENGTH = 3  # combined walk length needed before a cell's pieces count


class NoLegalMoveError(RuntimeError):
    """Raised when the computer is asked to move on a full board."""


@dataclass
class MoveDecision:
    """A chosen move and why it was chosen."""
    location: int
    reason: str  # "win", "block" or "heuristic"
    score: Optional[int] = None
    candidates: List[int] = field(default_factory=list)


def evaluate_position(board: Board, location: int, player: PlayerColor) -> Optional[int]:
    """
    Score how useful an empty cell is for building player's lines.

    Along each axis the walk visits offsets 0..CONNECT_N-1 forward and
    backward from location, so the cell itself is visited by both walks. A
    walk extends over empty or player cells and stops for good at an opposing
    piece or the board edge. If the combined walk length on an axis reaches
    MIN_RUN_LENGTH, the player's pieces met on that axis are added to the score.

    Args:
        board: The board to inspect
        location: Flat location of the candidate cell
        player: The player the cell is scored for

    Returns:
        The score, or None if location is off the board or not empty
    """
    if board.cell_at(location) != Cell.EMPTY:
        return None

    row, col = to_position(location)
    own = player.cell
    score = 0

    for dr, dc in DIRECTION_VECTORS.values():
        length = 0
        count = 0
        for sign in (1, -1):
            for i in range(CONNECT_N):
                probe = board.cell_at_position(row + sign * dr * i, col + sign * dc * i)
                if probe is None or probe not in (Cell.EMPTY, own):
                    break
                length += 1
                if probe == own:
                    count += 1
        if length >= MIN_RUN_LENGTH:
            score += count

    return score


class HeuristicPlayer:
    """
    Computer player using the win / block / score strategy.

    The random generator is injected so that a seeded generator gives
    repeatable games.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.last_decision: Optional[MoveDecision] = None

    def _first_ending_move(self, board: Board, candidates: List[int],
                           player: PlayerColor) -> Optional[int]:
        for location in candidates:
            if board.outcome_after(player, location).is_game_over():
                return location
        return None

    def score_moves(self, board: Board, candidates: List[int],
                    computer_color: PlayerColor, human_color: PlayerColor) -> List[int]:
        """Heuristic score for each candidate, in the same order."""
        return [
            evaluate_position(board, loc, computer_color) * COMPUTER_WEIGHT
            + evaluate_position(board, loc, human_color) * OPPONENT_WEIGHT
            for loc in candidates
        ]

    def choose(self, board: Board, computer_color: PlayerColor,
               human_color: PlayerColor) -> MoveDecision:
        """
        Choose the computer's move.

        Args:
            board: Current board; it is not modified
            computer_color: Color the computer plays
            human_color: Color of the opponent

        Returns:
            MoveDecision describing the move

        Raises:
            NoLegalMoveError: If the board has no empty cell
        """
        candidates = board.empty_locations()
        if not candidates:
            raise NoLegalMoveError("No empty cell left for the computer to play")

        location = self._first_ending_move(board, candidates, computer_color)
        if location is not None:
            decision = MoveDecision(location, "win", candidates=[location])
        else:
            location = self._first_ending_move(board, candidates, human_color)
            if location is not None:
                decision = MoveDecision(location, "block", candidates=[location])
            else:
                decision = self._choose_by_score(board, candidates, computer_color, human_color)

        debug.debug(f"{computer_color} chooses {decision.location} ({decision.reason}, "
                    f"score={decision.score}, tied={len(decision.candidates)})", "ai")
        self.last_decision = decision
        return decision

    def _choose_by_score(self, board: Board, candidates: List[int],
                         computer_color: PlayerColor, human_color: PlayerColor) -> MoveDecision:
        best_score = None
        best_moves: List[int] = []

        for location, score in zip(candidates,
                                   self.score_moves(board, candidates, computer_color, human_color)):
            if best_score is None or score > best_score:
                best_score = score
                best_moves = [location]
            elif score == best_score:
                best_moves.append(location)

        debug.trace(f"Best score {best_score} shared by {best_moves}", "ai")
        pick = best_moves[int(self.rng.integers(len(best_moves)))]
        return MoveDecision(pick, "heuristic", score=best_score, candidates=best_moves)

    def select_move(self, board: Board, computer_color: PlayerColor,
                    human_color: PlayerColor) -> int:
        """Location of the computer's move. See choose."""
        return self.choose(board, computer_color, human_color).location
