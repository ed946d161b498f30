"""
rules.py - Game management and Gymnasium environment for Four-in-a-Row

This module provides:
1. FourInARowGame, the engine a host drives: it owns the board, applies moves
   for the human and the computer, and reports the outcome
2. FourInARowEnv, a gymnasium environment in which an agent plays the human
   side against the heuristic computer
"""

from typing import Dict, List, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from fourinarow.ai.heuristic import HeuristicPlayer, MoveDecision
from fourinarow.ai.utils import board_to_state, get_valid_action_mask
from fourinarow.config import GameConfig
from fourinarow.debug import debug
from fourinarow.game.board import Board
from fourinarow.utils import CELLS, COLS, ROWS, Cell, Outcome, PlayerColor


class FourInARowGame:
    """
    Four-in-a-Row engine for one human and one computer player.

    The engine does not enforce turn order; the host decides who moves next.
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Args:
            config: Color assignment and seed (defaults: human red, computer blue)
            rng: Generator for the computer's tie-breaks. If omitted, one is
                created from config.seed
        """
        self.config = config or GameConfig()
        self.board = Board()
        self.ai = HeuristicPlayer(rng if rng is not None else np.random.default_rng(self.config.seed))
        self.history: List[Tuple[PlayerColor, int]] = []
        debug.debug(f"New game: player {self.config.player_color}, "
                    f"computer {self.config.computer_color}", "game")

    @property
    def rng(self) -> np.random.Generator:
        return self.ai.rng

    @rng.setter
    def rng(self, generator: np.random.Generator) -> None:
        self.ai.rng = generator

    @property
    def player_color(self) -> PlayerColor:
        return self.config.player_color

    @property
    def computer_color(self) -> PlayerColor:
        return self.config.computer_color

    def reset(self) -> None:
        """Clear the board and the move history."""
        debug.debug("Resetting game", "game")
        self.board.clear()
        self.history = []

    clear = reset

    def is_in_bounds(self, location) -> bool:
        return self.board.is_in_bounds(location)

    def cell_at(self, location) -> Optional[Cell]:
        return self.board.cell_at(location)

    def set_cell(self, location, value: Cell) -> bool:
        return self.board.set_cell(location, value)

    def apply_move(self, player: PlayerColor, location) -> bool:
        """
        Place a piece and record it in the history.

        Returns:
            True if placed, False if the move was ignored
        """
        if not self.board.apply_move(player, location):
            return False
        self.history.append((player, int(location)))
        return True

    def evaluate_outcome(self) -> Outcome:
        return self.board.evaluate_outcome()

    @property
    def outcome(self) -> Outcome:
        return self.board.evaluate_outcome()

    def is_game_over(self) -> bool:
        return self.outcome.is_game_over()

    @property
    def winner(self) -> Optional[PlayerColor]:
        return self.outcome.winner

    def choose_computer_move(self, computer_color: Optional[PlayerColor] = None,
                             human_color: Optional[PlayerColor] = None) -> MoveDecision:
        computer_color = computer_color or self.computer_color
        human_color = human_color or computer_color.other()
        return self.ai.choose(self.board, computer_color, human_color)

    def select_computer_move(self, computer_color: Optional[PlayerColor] = None,
                             human_color: Optional[PlayerColor] = None) -> int:
        """
        Location the computer would play. The board is not modified.

        Raises:
            NoLegalMoveError: If the board is full
        """
        return self.choose_computer_move(computer_color, human_color).location

    def play_human_move(self, location) -> bool:
        return self.apply_move(self.player_color, location)

    def play_computer_move(self) -> int:
        """
        Choose and apply the computer's move.

        Returns:
            The location played

        Raises:
            NoLegalMoveError: If the board is full
        """
        location = self.select_computer_move()
        self.apply_move(self.computer_color, location)
        return location

    def undo_move(self) -> bool:
        """
        Remove the most recent move.

        Returns:
            True if a move was undone, False if the history is empty
        """
        if not self.history:
            debug.debug("No moves to undo", "game")
            return False

        player, location = self.history.pop()
        self.board.set_cell(location, Cell.EMPTY)
        debug.debug(f"Undid {player} at {location}", "game")
        return True

    def render(self) -> str:
        return self.board.render()


class FourInARowEnv(gym.Env):
    """
    Four-in-a-Row environment following the Gymnasium interface.

    The agent plays config.player_color; after each legal agent move the
    heuristic computer replies. Actions are flat locations 0-35.
    """

    metadata = {'render_modes': ['ansi', 'human'], 'render_fps': 4}

    def __init__(self, config: Optional[GameConfig] = None,
                 render_mode: Optional[str] = None):
        debug.debug("Initializing FourInARowEnv", "env")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.action_space = spaces.Discrete(CELLS)
        # Planes: empty, agent pieces, computer pieces
        self.observation_space = spaces.Box(
            low=0.0, high=1.0, shape=(3, ROWS, COLS), dtype=np.float32
        )

        self.game = FourInARowGame(config)
        self.render_mode = render_mode
        self.last_computer_move: Optional[int] = None

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = 0.0

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new game.

        Args:
            seed: Seeds the environment generator, which also drives the
                computer's tie-breaks
            options: {'computer_first': True} lets the computer open
        """
        super().reset(seed=seed)
        self.game.rng = self.np_random
        self.game.reset()
        self.last_computer_move = None

        if options and options.get('computer_first'):
            self.last_computer_move = self.game.play_computer_move()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        debug.trace(f"Environment step with action {action}", "env")
        self.last_computer_move = None

        if self.game.is_game_over() or not self.game.play_human_move(int(action)):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        outcome = self.game.outcome
        if not outcome.is_game_over():
            self.last_computer_move = self.game.play_computer_move()
            outcome = self.game.outcome

        reward = self._reward_for(outcome)
        terminated = outcome.is_game_over()
        if terminated:
            debug.info(f"Game over: {outcome.name}", "env")

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def _reward_for(self, outcome: Outcome) -> float:
        if outcome == Outcome.TIE:
            return self.reward_draw
        if outcome.winner == self.game.player_color:
            return self.reward_win
        if outcome.winner == self.game.computer_color:
            return self.reward_lose
        return self.reward_step

    def render(self) -> Optional[str]:
        if self.render_mode == "ansi":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return board_to_state(self.game.board, self.game.player_color)

    def _get_info(self) -> Dict:
        mask = get_valid_action_mask(self.game.board)
        return {
            'valid_moves': [int(loc) for loc in np.flatnonzero(mask)],
            'action_mask': mask,
            'outcome': self.game.outcome.name,
            'moves_made': len(self.game.history),
            'last_computer_move': self.last_computer_move,
            'winning_line': self.game.board.winning_line(),
        }
