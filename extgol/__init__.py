"""Extended Conway's Game of Life.

Cells carry life points, a mood that drives pairwise energy exchange and a
type that changes the survival thresholds. The engine evolves a fixed
board one generation at a time and records each generation.
"""

from .config import GameConfig
from .core.board import Board, Tile
from .core.cell import Cell
from .core.coord import Coord
from .core.engine import EvolutionEngine
from .core.errors import (
    ExtGOLError,
    InconsistentBoard,
    InvalidCoordinate,
    InvalidMoodOrType,
    NullInteractionTarget,
    StepAborted,
)
from .core.game import Game
from .core.generation import Generation
from .core.interaction import InteractionEffect, effect_for
from .core.rules import CellType, Mood, next_state

__version__ = "0.1.0"

__all__ = [
    'Board',
    'Cell',
    'CellType',
    'Coord',
    'EvolutionEngine',
    'ExtGOLError',
    'Game',
    'GameConfig',
    'Generation',
    'InconsistentBoard',
    'InteractionEffect',
    'InvalidCoordinate',
    'InvalidMoodOrType',
    'Mood',
    'NullInteractionTarget',
    'StepAborted',
    'Tile',
    'effect_for',
    'next_state',
]
