"""
Game Configuration Constants Module

This module defines the game rules: health pools, timings, wave recipes and
the objective tiers faced each wave. Values that operators may tune come from
the app Config through GameSettings.
"""

from dataclasses import dataclass
from typing import Final, List, Tuple

TEAM_HEALTH: Final[int] = 15
BOSS_HEALTH: Final[int] = 60
MAX_PLAYERS: Final[int] = 22
WAVE_SECONDS: Final[int] = 15
SESSION_TIME_LIMIT_SECONDS: Final[int] = 15 * 60
NUMBER_OF_WAVES: Final[int] = 3

# Tiles added to the pool each wave. 'C' is a random consonant, 'V' a random
# vowel, anything else names a fixed wildcard tile.
WAVE_TILE_RECIPES: Final[Tuple[Tuple[str, ...], ...]] = (
    ('C', 'C', 'C', 'V', 'V', 'V', 'C', 'C'),
    ('C', 'C', 'C', 'C', 'C', 'V', 'V', 'WILD'),
    ('C', 'C', 'C', 'V', 'V', 'WILD_VOWEL', 'WILD_CONSONANT', 'WILD'),
)

# Damage tiers of the objectives drawn for each wave.
WAVE_OBJECTIVE_TIERS: Final[Tuple[Tuple[int, ...], ...]] = (
    (),
    (5, 4, 3, 2, 2),
    (6, 5, 4, 3, 3),
)

# Seconds the "get ready" screen waits is this plus the wave number.
GET_READY_BASE_SECONDS: Final[int] = 1
TILES_PER_ROW: Final[int] = 8
WORDS_SHOWN_PER_PLAYER: Final[int] = 6
RECAP_WORDS_PER_PLAYER: Final[int] = 3


@dataclass(frozen=True)
class GameSettings:
    """Tunable limits read by the game engine and the lobby."""
    team_health: int = TEAM_HEALTH
    boss_health: int = BOSS_HEALTH
    max_players: int = MAX_PLAYERS
    wave_seconds: int = WAVE_SECONDS
    session_time_limit: float = SESSION_TIME_LIMIT_SECONDS

    def __post_init__(self):
        if self.team_health <= 0 or self.boss_health <= 0:
            raise ValueError("Health pools must be positive")
        if self.max_players <= 0:
            raise ValueError("max_players must be positive")
        if self.wave_seconds < 1:
            raise ValueError("wave_seconds must be at least 1")

    @classmethod
    def from_config(cls, config_class) -> "GameSettings":
        """Build settings from a Config class or a Flask config mapping."""
        def read(name, default):
            if isinstance(config_class, dict):
                return config_class.get(name, default)
            return getattr(config_class, name, default)

        return cls(
            team_health=int(read('TEAM_HEALTH', TEAM_HEALTH)),
            boss_health=int(read('BOSS_HEALTH', BOSS_HEALTH)),
            max_players=int(read('MAX_PLAYERS', MAX_PLAYERS)),
            wave_seconds=int(read('WAVE_SECONDS', WAVE_SECONDS)),
            session_time_limit=float(read('SESSION_TIME_LIMIT_SECONDS', SESSION_TIME_LIMIT_SECONDS)),
        )
