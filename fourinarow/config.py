"""
config.py - Construction parameters for a Four-in-a-Row game

A GameConfig decides which color the human plays and which the computer
plays, and optionally seeds the computer's tie-break randomness. Hosts save
and restore it with to_dict/from_dict.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from fourinarow.utils import PlayerColor


class ConfigError(ValueError):
    """Raised for an invalid or unreadable game configuration."""


def parse_color(value) -> PlayerColor:
    """Accept a PlayerColor, its name ('red'/'blue') or its value (1/2)."""
    if isinstance(value, PlayerColor):
        return value
    if isinstance(value, str):
        try:
            return PlayerColor[value.strip().upper()]
        except KeyError:
            pass
    elif isinstance(value, int) and not isinstance(value, bool):
        try:
            return PlayerColor(value)
        except ValueError:
            pass
    raise ConfigError(f"Unknown player color: {value!r}")


@dataclass(frozen=True)
class GameConfig:
    player_color: PlayerColor = PlayerColor.RED
    computer_color: PlayerColor = PlayerColor.BLUE
    seed: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, 'player_color', parse_color(self.player_color))
        object.__setattr__(self, 'computer_color', parse_color(self.computer_color))
        if self.player_color == self.computer_color:
            raise ConfigError(
                f"Player and computer must use different colors (both {self.player_color})")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigError(f"Seed must be an integer, got {self.seed!r}")

    @classmethod
    def for_player(cls, player_color, seed: Optional[int] = None) -> 'GameConfig':
        """Config where the human plays player_color and the computer the other one."""
        color = parse_color(player_color)
        return cls(player_color=color, computer_color=color.other(), seed=seed)

    def swapped(self) -> 'GameConfig':
        """The same config with the two colors exchanged."""
        return replace(self, player_color=self.computer_color,
                       computer_color=self.player_color)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player_color': self.player_color.name.lower(),
            'computer_color': self.computer_color.name.lower(),
            'seed': self.seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameConfig':
        """
        Rebuild a config saved with to_dict. Missing keys take their defaults.

        Raises:
            ConfigError: If data is not a mapping or holds invalid values
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

        kwargs = {key: data[key] for key in ('player_color', 'computer_color', 'seed')
                  if data.get(key) is not None}

        # A single saved color implies the other one
        if 'player_color' in kwargs and 'computer_color' not in kwargs:
            kwargs['computer_color'] = parse_color(kwargs['player_color']).other()
        elif 'computer_color' in kwargs and 'player_color' not in kwargs:
            kwargs['player_color'] = parse_color(kwargs['computer_color']).other()
        return cls(**kwargs)
