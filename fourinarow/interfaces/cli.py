"""
cli.py - Command-line host for Four-in-a-Row

This module lets a person play against the computer in the terminal, analyze
board positions, replay saved games, manage settings and scores, and
benchmark the engine.
"""

import argparse
import sys
import time
from typing import List, Optional, Union

import numpy as np

from fourinarow.ai.heuristic import HeuristicPlayer
from fourinarow.config import ConfigError, GameConfig
from fourinarow.data import data_manager
from fourinarow.debug import DebugLevel, debug
from fourinarow.game.board import Board
from fourinarow.game.rules import FourInARowGame
from fourinarow.utils import CELLS, Outcome, PlayerColor, parse_location, to_position

QUIT = 'quit'
UNDO = 'undo'
RESTART = 'restart'

COMMANDS = {'q': QUIT, 'u': UNDO, 'r': RESTART}


class SimpleCLI:
    """Command-line interface for playing and inspecting Four-in-a-Row."""

    def __init__(self, args: argparse.Namespace):
        self.args = args

    def run(self) -> int:
        """Dispatch to the handler for the parsed command. Returns an exit code."""
        handlers = {
            ('game', 'play'): self.play_game,
            ('game', 'test'): self.test_position,
            ('game', 'benchmark'): self.benchmark,
            ('data', 'scores'): self.show_scores,
            ('data', 'games'): self.show_games,
            ('data', 'settings'): self.edit_settings,
            ('data', 'purge'): self.purge,
        }
        handler = handlers.get((self.args.component, self.args.command))
        if handler is None:
            print("Please specify a command. Use --help for options.")
            return 1
        return handler() or 0

    # --- Playing ---

    def _game_config(self) -> GameConfig:
        config, _ = data_manager.load_settings()
        if self.args.player_color:
            config = GameConfig.for_player(self.args.player_color, seed=config.seed)
        if self.args.seed is not None:
            config = GameConfig(config.player_color, config.computer_color, self.args.seed)
        return config

    def play_game(self) -> int:
        """Play one game against the computer."""
        try:
            config = self._game_config()
        except ConfigError as e:
            print(f"Invalid configuration: {e}")
            return 1

        _, saved_name = data_manager.load_settings()
        name = self.args.name or saved_name
        game = FourInARowGame(config)

        print(f"Starting a new game, {name}! You are {config.player_color}, "
              f"the computer is {config.computer_color}.")
        print(f"Enter a location (0-{CELLS - 1}) or 'row,col' to place a piece.")
        print("Other commands: 'q' to quit, 'u' to undo, 'r' to restart.")

        self._open(game)
        human_turn = True
        while not game.is_game_over():
            if human_turn:
                move = self.get_human_move()
                if move is None:
                    continue
                if move == QUIT:
                    print("Quitting game.")
                    return 0
                if move == UNDO:
                    self._undo_turn(game)
                    print(game.render())
                    human_turn = True
                    continue
                if move == RESTART:
                    game.reset()
                    print("Game restarted.")
                    self._open(game)
                    human_turn = True
                    continue

                if not game.play_human_move(move):
                    print(f"Location {move} is already taken.")
                    continue
                print(game.render())
            else:
                print("Computer is thinking...")
                time.sleep(self.args.delay)
                location = game.play_computer_move()
                print(f"Computer plays {location} {to_position(location)}")
                print(game.render())
            human_turn = not human_turn

        self._announce(game, name)
        return 0

    def _open(self, game: FourInARowGame) -> None:
        """Make the computer's opening move if requested and show the board."""
        if self.args.computer_first:
            location = game.play_computer_move()
            print(f"Computer opens at {location} {to_position(location)}")
        print(game.render())

    def _undo_turn(self, game: FourInARowGame) -> None:
        if not any(color == game.player_color for color, _ in game.history):
            print("No moves to undo.")
            return
        # Take back the computer's reply along with the human move before it
        while game.history and game.history[-1][0] != game.player_color:
            game.undo_move()
        game.undo_move()
        print("Move undone.")

    def _announce(self, game: FourInARowGame, name: str) -> None:
        outcome = game.outcome
        print("Game over!")
        if outcome == Outcome.TIE:
            print("It's a tie!")
        elif outcome.winner == game.player_color:
            print(f"You win, {name}! Congratulations!")
        else:
            print("The computer wins! Better luck next time.")

        if self.args.no_save:
            return
        data_manager.record_result(name, outcome, game.player_color)
        data_manager.save_game(name, game.config, game.history, outcome)
        score = data_manager.get_scores(name)
        print(f"Score for {name}: {score['wins']} wins, "
              f"{score['losses']} losses, {score['ties']} ties")

    def get_human_move(self) -> Union[int, str, None]:
        """
        Read one move from the player.

        Returns:
            A location, one of QUIT/UNDO/RESTART, or None for invalid input
        """
        try:
            user_input = input(f"Your move (0-{CELLS - 1} or row,col; q/u/r): ").strip().lower()
        except EOFError:
            return QUIT

        if user_input in COMMANDS:
            return COMMANDS[user_input]

        location = parse_location(user_input)
        if location is None:
            print("Invalid input. Enter a location, 'row,col', or a command.")
        return location

    # --- Analysis ---

    def test_position(self) -> int:
        """Show the outcome of a position and what the computer would play."""
        if not self.args.position:
            print("Please provide a position string with --position")
            return 1

        try:
            board = Board.from_cells(self.args.position)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(board.render())

        outcome = board.evaluate_outcome()
        print(f"\nOutcome: {outcome.name}")
        line = board.winning_line()
        if line:
            print(f"Winning line: {line}")

        empty = board.empty_locations()
        print(f"Empty cells: {len(empty)}")
        if not empty:
            return 0

        ai = HeuristicPlayer(np.random.default_rng(self.args.seed))
        for color in PlayerColor:
            decision = ai.choose(board, color, color.other())
            detail = f"score {decision.score}, tied with {decision.candidates}" \
                if decision.reason == 'heuristic' else decision.reason
            print(f"Computer as {color} would play {decision.location} ({detail})")
        return 0

    def benchmark(self) -> int:
        """Time outcome evaluation, move selection and whole games."""
        iterations = self.args.iterations
        rng = np.random.default_rng(self.args.seed)
        print(f"Running benchmark with {iterations} iterations...")

        boards = [self._random_board(rng) for _ in range(iterations)]

        debug.start_timer("outcome")
        for board in boards:
            board.evaluate_outcome()
        elapsed = debug.end_timer("outcome", "cli")
        print(f"Outcome evaluation: {elapsed:.6f} s total, "
              f"{elapsed / iterations * 1000:.4f} ms per board")

        ai = HeuristicPlayer(rng)
        playable = [b for b in boards if b.empty_locations()]
        debug.start_timer("select")
        for board in playable:
            ai.select_move(board, PlayerColor.BLUE, PlayerColor.RED)
        elapsed = debug.end_timer("select", "cli")
        if playable:
            print(f"Move selection: {elapsed:.6f} s total, "
                  f"{elapsed / len(playable) * 1000:.4f} ms per move")

        games = max(1, iterations // 10)
        results = {outcome: 0 for outcome in Outcome if outcome.is_game_over()}
        debug.start_timer("games")
        for _ in range(games):
            results[self._self_play(rng)] += 1
        elapsed = debug.end_timer("games", "cli")
        print(f"Played {games} computer-vs-computer games: {elapsed:.6f} s total, "
              f"{elapsed / games * 1000:.4f} ms per game")
        print("Results: " + ", ".join(f"{o.name}={n}" for o, n in results.items()))
        return 0

    @staticmethod
    def _random_board(rng: np.random.Generator) -> Board:
        board = Board()
        color = PlayerColor.RED
        for location in rng.permutation(CELLS)[:int(rng.integers(0, CELLS + 1))]:
            board.apply_move(color, int(location))
            color = color.other()
        return board

    @staticmethod
    def _self_play(rng: np.random.Generator) -> Outcome:
        game = FourInARowGame(rng=rng)
        color = PlayerColor.RED
        while not game.is_game_over():
            game.apply_move(color, game.select_computer_move(color, color.other()))
            color = color.other()
        return game.outcome

    # --- Stored data ---

    def show_scores(self) -> int:
        scores = data_manager.get_scores()
        if self.args.name:
            scores = {self.args.name: data_manager.get_scores(self.args.name)}
        if not scores:
            print("No scores recorded yet")
            return 0

        print("Player               | Wins | Losses | Ties")
        print("-" * 44)
        for name, score in sorted(scores.items()):
            print(f"{name[:20]:20s} | {score['wins']:4d} | {score['losses']:6d} | {score['ties']:4d}")
        return 0

    def show_games(self) -> int:
        if self.args.replay is not None:
            record = data_manager.get_saved_game(self.args.replay)
            if record is None:
                print(f"Error: Game ID {self.args.replay} not found")
                return 1
            replay_game(record, self.args.delay)
            return 0

        games = data_manager.get_saved_games(self.args.name)
        if not games:
            print("No saved games found")
            return 0

        print(f"Found {len(games)} saved games:")
        print("\n  ID | Player               | Outcome  | Moves | Date")
        print("-" * 60)
        for game in games:
            date = game.get('timestamp', 'Unknown').split('T')[0]
            print(f"{game['game_id']:4d} | {game['player_name'][:20]:20s} | "
                  f"{game['outcome']:8s} | {game['game_length']:5d} | {date}")
        print("\nTo replay a game: python run.py data games --replay GAME_ID")
        return 0

    def edit_settings(self) -> int:
        config, name = data_manager.load_settings()
        try:
            if self.args.player_color:
                config = GameConfig.for_player(self.args.player_color, seed=config.seed)
            if self.args.swap:
                config = config.swapped()
            if self.args.seed is not None:
                config = GameConfig(config.player_color, config.computer_color, self.args.seed)
        except ConfigError as e:
            print(f"Invalid configuration: {e}")
            return 1

        changed = self.args.player_color or self.args.swap or self.args.seed is not None or self.args.name
        if changed:
            name = self.args.name or name
            if not data_manager.save_settings(config, name):
                print("Could not save settings")
                return 1

        print(f"Player name:    {name}")
        print(f"Player color:   {config.player_color}")
        print(f"Computer color: {config.computer_color}")
        print(f"Seed:           {config.seed if config.seed is not None else 'random'}")
        return 0

    def purge(self) -> int:
        if not self.args.confirm:
            print("WARNING: This will delete saved settings, scores and games.")
            print("To confirm, run: python run.py data purge --confirm")
            return 1
        removed = data_manager.purge_data()
        print(f"Removed {len(removed)} data files")
        return 0


def replay_game(record: dict, delay: float = 0.5) -> Board:
    """Print a saved game move by move and return the final board."""
    print(f"Replaying game {record['game_id']} ({record['player_name']}), "
          f"outcome {record['outcome']}")
    board = Board()
    print(board.render())
    for i, (color, location) in enumerate(data_manager.game_moves(record)):
        time.sleep(delay)
        board.apply_move(color, location)
        print(f"\nMove {i + 1}: {color} plays {location} {to_position(location)}")
        print(board.render())
    print(f"\nFinal outcome: {board.evaluate_outcome().name}")
    return board


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Four-in-a-Row against a heuristic computer player',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

    # Play as red against the computer
    python run.py game play --name Ada

    # Play as blue and let the computer open
    python run.py game play --player-color blue --computer-first

    # Analyze a position (36 cells in row order, '.', 'R' or 'B')
    python run.py game test --position RRR.................................

    # Benchmark the engine
    python run.py game benchmark --iterations 2000

    # Show the scoreboard, list and replay games
    python run.py data scores
    python run.py data games --list
    python run.py data games --replay 0 --delay 1.0

    # Save the default color and name
    python run.py data settings --player-color blue --name Ada
    """
    )
    parser.add_argument('--debug_level',
        choices=[level.name.lower() for level in DebugLevel],
        default='warning',
        help='Logging verbosity: none (silent) up to trace (most verbose)')
    parser.add_argument('--log_file', type=str, help='Also write log messages to this file')

    subparsers = parser.add_subparsers(dest='component', help='Component to run')

    game_parser = subparsers.add_parser('game', help='Play or analyze games')
    game_parser.add_argument('command', choices=['play', 'test', 'benchmark'],
        help='play (interactive game), test (analyze a position), benchmark (timing)')
    game_parser.add_argument('--name', type=str, help='Player name (defaults to the saved name)')
    game_parser.add_argument('--player-color', dest='player_color', choices=['red', 'blue'],
        help='Color the human plays (defaults to the saved setting)')
    game_parser.add_argument('--computer-first', dest='computer_first', action='store_true',
        help='Let the computer make the first move')
    game_parser.add_argument('--seed', type=int, help='Seed for the computer player')
    game_parser.add_argument('--delay', type=float, default=0.3,
        help='Pause before each computer move in seconds')
    game_parser.add_argument('--no-save', dest='no_save', action='store_true',
        help='Do not record the result or the game')
    game_parser.add_argument('--position', type=str,
        help=f'{CELLS} cells in row order for the test command')
    game_parser.add_argument('--iterations', type=int, default=1000,
        help='Number of boards for benchmarking')

    data_parser = subparsers.add_parser('data', help='Manage saved settings, scores and games')
    data_parser.add_argument('command', choices=['scores', 'games', 'settings', 'purge'],
        help='scores (scoreboard), games (list or replay), settings (view or change), '
             'purge (delete all data)')
    data_parser.add_argument('--name', type=str, help='Player name to filter by or save')
    data_parser.add_argument('--player-color', dest='player_color', choices=['red', 'blue'],
        help='Color to save for the human player')
    data_parser.add_argument('--swap', action='store_true', help='Swap the saved colors')
    data_parser.add_argument('--seed', type=int, help='Seed to save for the computer player')
    data_parser.add_argument('--list', action='store_true', help='List saved games')
    data_parser.add_argument('--replay', type=int, help='Replay the saved game with this ID')
    data_parser.add_argument('--delay', type=float, default=0.5,
        help='Delay between moves during replay in seconds')
    data_parser.add_argument('--confirm', action='store_true',
        help='Confirm the purge command')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    debug.set_from_string(args.debug_level)
    if args.log_file:
        debug.configure(log_file=args.log_file)

    if args.component is None:
        parser.print_help()
        return 1
    return SimpleCLI(args).run()


if __name__ == "__main__":
    sys.exit(main())
