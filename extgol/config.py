"""Configuration constants and game setup parameters.

Rule constants (thresholds, birth count, reprieve budget) live with the
rules in extgol.core.rules and are re-exported here so callers can import
every tunable from one place.
"""

from dataclasses import dataclass
from typing import Union

from .core.rules import (
    BIRTH_COUNT,
    DEFAULT_MAX_THRESHOLD,
    DEFAULT_MIN_THRESHOLD,
    HIGHLANDER_MAX_REPRIEVES,
    CellType,
    Mood,
    coerce_cell_type,
    coerce_mood,
)

__all__ = [
    "BIRTH_COUNT",
    "DEFAULT_MAX_THRESHOLD",
    "DEFAULT_MIN_THRESHOLD",
    "HIGHLANDER_MAX_REPRIEVES",
    "MAX_BOARD_SIZE",
    "DEFAULT_BOARD_WIDTH",
    "DEFAULT_BOARD_HEIGHT",
    "DEFAULT_LIFE_POINTS",
    "LOG_FORMAT",
    "GameConfig",
]

MAX_BOARD_SIZE = 512
"""Largest accepted board side, keeps tile maps within memory budget."""

DEFAULT_BOARD_WIDTH = 10
DEFAULT_BOARD_HEIGHT = 10

DEFAULT_LIFE_POINTS = 0
"""Life points given to cells created by Board.populate."""

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


@dataclass(frozen=True)
class GameConfig:
    """Parameters for building a fully populated game."""

    width: int = DEFAULT_BOARD_WIDTH
    height: int = DEFAULT_BOARD_HEIGHT
    initial_life_points: int = DEFAULT_LIFE_POINTS
    default_mood: Union[Mood, str] = Mood.NAIVE
    default_type: Union[CellType, str] = CellType.BASIC
    interactions: bool = True

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.width > MAX_BOARD_SIZE or self.height > MAX_BOARD_SIZE:
            raise ValueError(f"Board dimensions cannot exceed {MAX_BOARD_SIZE}x{MAX_BOARD_SIZE}")
        # Accept names as well as members
        object.__setattr__(self, "default_mood", coerce_mood(self.default_mood))
        object.__setattr__(self, "default_type", coerce_cell_type(self.default_type))
