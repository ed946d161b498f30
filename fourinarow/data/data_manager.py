"""
data_manager.py - Persistent host data for Four-in-a-Row

This module stores what the host keeps between runs: the saved settings
(game configuration and player name), a scoreboard per player name, and a
record of every finished game for replay. Everything lives in JSON files in
the data directory, which is read from the FOURINAROW_DATA_DIR environment
variable (default: ./data).
"""

import datetime
import json
import os
import shutil
from typing import Any, Dict, List, Optional, Tuple

import filelock

from fourinarow.config import ConfigError, GameConfig
from fourinarow.debug import debug
from fourinarow.utils import Outcome, PlayerColor

DATA_DIR_ENV = 'FOURINAROW_DATA_DIR'
DEFAULT_DATA_DIR = 'data'

SETTINGS_FILENAME = 'settings.json'
SCORES_FILENAME = 'scores.json'
GAMES_FILENAME = 'games.json'

DEFAULT_PLAYER_NAME = 'Player'
MAX_SAVED_GAMES = 500  # oldest records are dropped beyond this


def get_data_dir() -> str:
    return os.path.abspath(os.environ.get(DATA_DIR_ENV) or DEFAULT_DATA_DIR)


def _data_file(filename: str) -> str:
    return os.path.join(get_data_dir(), filename)


# File utility functions
def safe_read_json(file_path: str, default: Any = None) -> Any:
    """
    Read a JSON file under its lock.

    Args:
        file_path: Path to JSON file
        default: Returned when the file is missing or not valid JSON

    Returns:
        Parsed JSON data, or default
    """
    if not os.path.exists(file_path):
        return default

    with filelock.FileLock(f"{file_path}.lock"):
        try:
            with open(file_path, 'r') as f:
                return json.load(f)
        except json.JSONDecodeError:
            debug.error(f"Error decoding JSON from {file_path}", "data")
            return default


def safe_write_json(file_path: str, data: Any) -> bool:
    """
    Write data as JSON under the file's lock, replacing the file atomically.

    Returns:
        True if successful, False otherwise
    """
    try:
        os.makedirs(os.path.dirname(file_path), exist_ok=True)
        with filelock.FileLock(f"{file_path}.lock"):
            temp_file = f"{file_path}.tmp"
            with open(temp_file, 'w') as f:
                json.dump(data, f, indent=2)
            shutil.move(temp_file, file_path)
        return True
    except (OSError, TypeError, ValueError) as e:
        debug.error(f"Error writing to {file_path}: {e}", "data")
        return False


# Settings
def load_settings() -> Tuple[GameConfig, str]:
    """
    Load the saved configuration and player name.

    Missing or invalid settings fall back to the defaults.

    Returns:
        (config, player_name)
    """
    data = safe_read_json(_data_file(SETTINGS_FILENAME), {})
    if not isinstance(data, dict):
        debug.warning("Settings file is not a mapping, using defaults", "data")
        data = {}

    try:
        config = GameConfig.from_dict(data.get('config') or {})
    except ConfigError as e:
        debug.warning(f"Ignoring saved config: {e}", "data")
        config = GameConfig()

    name = data.get('player_name') or DEFAULT_PLAYER_NAME
    return config, str(name)


def save_settings(config: GameConfig, player_name: Optional[str] = None) -> bool:
    if player_name is None:
        _, player_name = load_settings()

    data = {
        'config': config.to_dict(),
        'player_name': player_name,
        'updated': datetime.datetime.now().isoformat(),
    }
    if safe_write_json(_data_file(SETTINGS_FILENAME), data):
        debug.info(f"Saved settings for {player_name}", "data")
        return True
    debug.error("Failed to save settings", "data")
    return False


# Scoreboard
def _empty_score() -> Dict[str, int]:
    return {'wins': 0, 'losses': 0, 'ties': 0}


def get_scores(player_name: Optional[str] = None) -> Dict:
    """
    Get the scoreboard.

    Args:
        player_name: Name to look up, or None for every player

    Returns:
        {'wins', 'losses', 'ties'} for one player, or a mapping of name to
        those counts
    """
    scores = safe_read_json(_data_file(SCORES_FILENAME), {})
    if not isinstance(scores, dict):
        scores = {}

    if player_name is None:
        return scores
    return scores.get(player_name, _empty_score())


def record_result(player_name: str, outcome: Outcome, player_color: PlayerColor) -> bool:
    """
    Add a finished game to the player's score.

    Args:
        player_name: Name of the human player
        outcome: Final outcome; ONGOING is rejected
        player_color: Color the human played in that game

    Returns:
        True if the scoreboard was updated
    """
    if not outcome.is_game_over():
        debug.warning(f"Not recording unfinished game for {player_name}", "data")
        return False

    scores = get_scores()
    entry = scores.setdefault(player_name, _empty_score())
    if outcome == Outcome.TIE:
        entry['ties'] += 1
    elif outcome.winner == player_color:
        entry['wins'] += 1
    else:
        entry['losses'] += 1

    if safe_write_json(_data_file(SCORES_FILENAME), scores):
        debug.info(f"Recorded {outcome.name} for {player_name}", "data")
        return True
    debug.error(f"Failed to record result for {player_name}", "data")
    return False


# Game records
def save_game(player_name: str, config: GameConfig,
              moves: List[Tuple[PlayerColor, int]], outcome: Outcome) -> int:
    """
    Append a game record.

    Returns:
        ID of the saved game, or -1 if it could not be written
    """
    games = get_saved_games()
    record = {
        'game_id': (games[-1]['game_id'] + 1) if games else 0,
        'player_name': player_name,
        'config': config.to_dict(),
        'moves': [[color.name.lower(), int(location)] for color, location in moves],
        'outcome': outcome.name,
        'game_length': len(moves),
        'timestamp': datetime.datetime.now().isoformat(),
    }
    games.append(record)
    games = games[-MAX_SAVED_GAMES:]

    if safe_write_json(_data_file(GAMES_FILENAME), games):
        debug.info(f"Saved game {record['game_id']} for {player_name}", "data")
        return record['game_id']
    debug.error(f"Failed to save game for {player_name}", "data")
    return -1


def get_saved_games(player_name: Optional[str] = None) -> List[Dict]:
    games = safe_read_json(_data_file(GAMES_FILENAME), [])
    if not isinstance(games, list):
        return []
    if player_name is None:
        return games
    return [game for game in games if game.get('player_name') == player_name]


def get_saved_game(game_id: int) -> Optional[Dict]:
    for game in get_saved_games():
        if game.get('game_id') == game_id:
            return game
    debug.warning(f"Game {game_id} not found", "data")
    return None


def game_moves(record: Dict) -> List[Tuple[PlayerColor, int]]:
    """Moves of a saved game as (PlayerColor, location) pairs."""
    return [(PlayerColor[color.upper()], int(location)) for color, location in record['moves']]


def purge_data() -> List[str]:
    """
    Delete the settings, scoreboard and game records.

    Returns:
        Names of the files that were removed
    """
    removed = []
    for filename in (SETTINGS_FILENAME, SCORES_FILENAME, GAMES_FILENAME):
        path = _data_file(filename)
        for candidate in (path, f"{path}.lock"):
            if os.path.exists(candidate):
                os.remove(candidate)
                if candidate == path:
                    removed.append(filename)
    debug.info(f"Purged {len(removed)} data files", "data")
    return removed
