from __future__ import annotations

import pytest

from fourinarow.config import GameConfig
from fourinarow.data import data_manager
from fourinarow.interfaces import cli
from fourinarow.utils import Cell, Outcome, PlayerColor


def feed_input(monkeypatch, *responses):
    answers = iter(responses)

    def fake_input(prompt=""):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError
    monkeypatch.setattr("builtins.input", fake_input)


def test_no_component_prints_help(capsys):
    assert cli.main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_position_analysis(capsys):
    code = cli.main(["game", "test", "--position", "RRR" + "." * 33, "--seed", "0"])
    out = capsys.readouterr().out

    assert code == 0
    assert "Outcome: ONGOING" in out
    assert "Computer as Red would play 3 (win)" in out
    assert "Computer as Blue would play 3 (block)" in out


def test_position_with_win(capsys):
    cli.main(["game", "test", "--position", "BBBB" + "." * 32])
    out = capsys.readouterr().out

    assert "Outcome: BLUE_WON" in out
    assert "Winning line: [0, 1, 2, 3]" in out


def test_bad_position(capsys):
    assert cli.main(["game", "test", "--position", "RRX"]) == 1
    assert "Error parsing position" in capsys.readouterr().out


def test_play_handles_bad_input_undo_and_quit(data_dir, monkeypatch, capsys):
    feed_input(monkeypatch, "hello", "9,9", "0", "0", "u", "q")

    code = cli.main(["game", "play", "--seed", "1", "--delay", "0", "--no-save"])
    out = capsys.readouterr().out

    assert code == 0
    assert out.count("Invalid input") == 2
    assert "Computer plays" in out
    assert "Move undone." in out
    assert "Quitting game." in out


def test_play_to_the_end_records_result(data_dir, monkeypatch, capsys):
    # Enough human moves to finish any game; the loop stops reading once it ends
    feed_input(monkeypatch, *[str(loc) for loc in range(36)])

    code = cli.main(["game", "play", "--name", "Ada", "--seed", "2", "--delay", "0"])
    out = capsys.readouterr().out

    assert code == 0
    assert "Game over!" in out
    score = data_manager.get_scores("Ada")
    assert sum(score.values()) == 1
    games = data_manager.get_saved_games("Ada")
    assert len(games) == 1
    assert games[0]['outcome'] in {o.name for o in Outcome if o.is_game_over()}


def test_computer_first(data_dir, monkeypatch, capsys):
    feed_input(monkeypatch, "q")

    cli.main(["game", "play", "--computer-first", "--player-color", "blue",
              "--delay", "0", "--no-save"])

    assert "Computer opens at" in capsys.readouterr().out


def test_settings_command(data_dir, capsys):
    assert cli.main(["data", "settings", "--player-color", "blue", "--name", "Ada"]) == 0
    assert data_manager.load_settings() == (GameConfig.for_player('blue'), "Ada")

    assert cli.main(["data", "settings", "--swap", "--seed", "5"]) == 0
    assert data_manager.load_settings() == (GameConfig(seed=5), "Ada")
    assert "Seed:           5" in capsys.readouterr().out


def test_scores_and_games_listing(data_dir, capsys):
    cli.main(["data", "scores"])
    assert "No scores recorded yet" in capsys.readouterr().out

    data_manager.record_result("Ada", Outcome.RED_WON, PlayerColor.RED)
    data_manager.save_game("Ada", GameConfig(), [(PlayerColor.RED, 0)], Outcome.RED_WON)

    cli.main(["data", "scores"])
    out = capsys.readouterr().out
    assert "Ada" in out and "|    1 |" in out

    cli.main(["data", "games", "--list"])
    assert "Found 1 saved games" in capsys.readouterr().out


def test_replay_game(data_dir, capsys):
    moves = [(PlayerColor.RED, 0), (PlayerColor.BLUE, 6), (PlayerColor.RED, 1)]
    game_id = data_manager.save_game("Ada", GameConfig(), moves, Outcome.ONGOING)

    board = cli.replay_game(data_manager.get_saved_game(game_id), delay=0)

    assert board.cell_at(0) == Cell.RED
    assert board.cell_at(6) == Cell.BLUE
    assert "Move 3: Red plays 1" in capsys.readouterr().out
    assert cli.main(["data", "games", "--replay", "42", "--delay", "0"]) == 1


def test_purge_requires_confirmation(data_dir, capsys):
    data_manager.save_settings(GameConfig(), "Ada")

    assert cli.main(["data", "purge"]) == 1
    assert data_manager.load_settings()[1] == "Ada"

    assert cli.main(["data", "purge", "--confirm"]) == 0
    assert data_manager.load_settings()[1] == data_manager.DEFAULT_PLAYER_NAME


@pytest.mark.parametrize("argv", [["game", "benchmark", "--iterations", "20", "--seed", "3"]])
def test_benchmark_runs(argv, capsys):
    assert cli.main(argv) == 0
    out = capsys.readouterr().out
    assert "Outcome evaluation" in out
    assert "computer-vs-computer" in out
