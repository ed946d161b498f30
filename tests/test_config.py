from __future__ import annotations

import pytest

from fourinarow.config import ConfigError, GameConfig, parse_color
from fourinarow.utils import PlayerColor

RED, BLUE = PlayerColor.RED, PlayerColor.BLUE


def test_defaults():
    config = GameConfig()
    assert (config.player_color, config.computer_color, config.seed) == (RED, BLUE, None)


def test_colors_from_names_and_values():
    config = GameConfig(player_color='blue', computer_color=1, seed=3)
    assert config.player_color == BLUE
    assert config.computer_color == RED


def test_for_player_and_swapped():
    config = GameConfig.for_player('Blue', seed=11)
    assert config == GameConfig(BLUE, RED, 11)
    assert config.swapped() == GameConfig(RED, BLUE, 11)


@pytest.mark.parametrize("kwargs", [
    {'player_color': RED, 'computer_color': RED},
    {'player_color': 'green'},
    {'computer_color': 0},
    {'player_color': True},
    {'seed': 'abc'},
    {'seed': 1.5},
])
def test_invalid_configs(kwargs):
    with pytest.raises(ConfigError):
        GameConfig(**kwargs)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        parse_color('purple')


def test_dict_round_trip():
    config = GameConfig(BLUE, RED, seed=99)
    data = config.to_dict()

    assert data == {'player_color': 'blue', 'computer_color': 'red', 'seed': 99}
    assert GameConfig.from_dict(data) == config


def test_from_dict_fills_missing_color():
    assert GameConfig.from_dict({'player_color': 'blue'}) == GameConfig(BLUE, RED)
    assert GameConfig.from_dict({'computer_color': 'blue'}) == GameConfig(RED, BLUE)
    assert GameConfig.from_dict({}) == GameConfig()


@pytest.mark.parametrize("data", [None, [], {'player_color': 'red', 'computer_color': 'red'}])
def test_from_dict_rejects_bad_data(data):
    with pytest.raises(ConfigError):
        GameConfig.from_dict(data)
