"""Game aggregate: one board plus the generations produced so far."""

import logging
from typing import List, Optional

from ..config import GameConfig
from .board import Board
from .engine import EvolutionEngine
from .generation import Generation

logger = logging.getLogger(__name__)


class Game:
    """Extended Game of Life run.

    The seed state counts as generation 0 and is not recorded; the first
    step records Generation 1.

    Attributes:
        board: Fully populated board the game evolves
        engine: Engine used by step()
    """

    def __init__(self, board: Board, engine: Optional[EvolutionEngine] = None):
        self.board = board
        self.engine = engine if engine is not None else EvolutionEngine()
        self._generations: List[Generation] = []

    @classmethod
    def create(cls, width: int, height: int, **kwargs) -> 'Game':
        """Create a game on a new board where every tile hosts a dead cell.

        Keyword arguments are passed to GameConfig.
        """
        return cls.from_config(GameConfig(width=width, height=height, **kwargs))

    @classmethod
    def from_config(cls, config: GameConfig) -> 'Game':
        board = Board(config.width, config.height)
        board.populate(config.initial_life_points, config.default_mood, config.default_type)
        logger.debug(f"Created game from {config}")
        return cls(board, EvolutionEngine(interactions=config.interactions))

    @property
    def generations(self) -> tuple:
        return tuple(self._generations)

    @property
    def current_index(self) -> int:
        """Index of the latest generation, 0 for the seed state."""
        return self._generations[-1].index if self._generations else 0

    @property
    def latest(self) -> Optional[Generation]:
        return self._generations[-1] if self._generations else None

    def record_generation(self, generation: Generation) -> None:
        """Append a generation.

        Raises:
            ValueError: If the index does not follow the latest one
        """
        if self._generations and generation.index <= self.current_index:
            raise ValueError(f"Generation {generation.index} does not follow {self.current_index}")
        self._generations.append(generation)

    def step(self) -> Generation:
        """Advance one generation and return it."""
        return self.engine.step(self)

    def run(self, steps: int) -> List[Generation]:
        """Advance several generations.

        Args:
            steps: Number of generations to compute

        Returns:
            The new generations, oldest first
        """
        if steps < 0:
            raise ValueError("steps must be non-negative")
        return [self.step() for _ in range(steps)]

    def __repr__(self) -> str:
        return f"Game({self.board!r}, generation={self.current_index})"
