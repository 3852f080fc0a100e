"""Cell entity of the extended Game of Life.

A cell carries its alive/dead state, an energy budget (life points), a mood
that drives interactions and a type that adjusts the survival thresholds.
It can evolve (decide its next state from a neighbour count) and interact
(exchange energy with another cell).

The cell does not own its tile. It keeps a handle to the board it was
placed on and resolves its tile by coordinate through that board.
"""

import logging
from typing import TYPE_CHECKING, Optional, Tuple, Union

from .coord import Coord
from .errors import InconsistentBoard, NullInteractionTarget
from .interaction import InteractionEffect, effect_for
from .rules import (
    CellType,
    EvolutionOutcome,
    MAX_NEIGHBORS,
    Mood,
    REPRIEVE_EXHAUSTED,
    coerce_cell_type,
    coerce_mood,
    next_state,
    thresholds_for,
)

if TYPE_CHECKING:
    from .board import Board, Tile
    from .generation import Generation

logger = logging.getLogger(__name__)


class Cell:
    """Stateful simulation unit placed on one board tile.

    Attributes:
        coord: Board position of the cell (read-only)
        alive: Current alive/dead state
        life_points: Energy budget
        mood: Interaction role
        cell_type: Survival rule modifier
        min_threshold: Fewest live neighbours a live cell survives with
        max_threshold: Most live neighbours a live cell survives with
        skipped_gen: Highlander reprieve counter (-1 once exhausted)
    """

    def __init__(self,
                 coord: Coord,
                 alive: bool = False,
                 life_points: int = 0,
                 mood: Union[Mood, str] = Mood.NAIVE,
                 cell_type: Union[CellType, str] = CellType.BASIC):
        """Create a detached cell.

        Args:
            coord: Board position
            alive: Initial state, dead by default
            life_points: Initial energy
            mood: Initial mood (member or name)
            cell_type: Initial type (member or name)

        Raises:
            InvalidMoodOrType: If mood or cell_type is not recognized
        """
        self._coord = coord
        self._alive = bool(alive)
        self._life_points = int(life_points)
        self._mood = coerce_mood(mood)
        self._cell_type = CellType.BASIC
        self._min_threshold, self._max_threshold = thresholds_for(CellType.BASIC)
        self._skipped_gen = 0
        self._generations: list = []
        self._board: Optional['Board'] = None
        self.cell_type = cell_type

    # --- identity and placement -------------------------------------------

    @property
    def coord(self) -> Coord:
        return self._coord

    @property
    def x(self) -> int:
        return self._coord.x

    @property
    def y(self) -> int:
        return self._coord.y

    @property
    def board(self) -> Optional['Board']:
        """Board the cell was placed on, None while detached."""
        return self._board

    def attach(self, board: 'Board') -> None:
        """Bind the cell to its board. A cell never moves to another board.

        Raises:
            InconsistentBoard: If the cell already belongs to a different board
        """
        if self._board is not None and self._board is not board:
            raise InconsistentBoard(f"Cell {self} already belongs to another board")
        self._board = board

    @property
    def tile(self) -> 'Tile':
        """Tile hosting this cell.

        Raises:
            InconsistentBoard: If the cell has not been placed on a board
        """
        if self._board is None:
            raise InconsistentBoard(f"Cell {self} is not placed on a board")
        return self._board.tile_at(self._coord)

    def neighbors(self) -> Tuple['Tile', ...]:
        """Tiles adjacent to this cell's tile."""
        return self.tile.neighbors

    def count_alive_neighbors(self) -> int:
        """Count neighbouring tiles hosting a live cell."""
        return sum(1 for t in self.tile.neighbors if t.cell is not None and t.cell.alive)

    # --- state ------------------------------------------------------------

    @property
    def alive(self) -> bool:
        return self._alive

    @alive.setter
    def alive(self, value: bool) -> None:
        self._alive = bool(value)

    @property
    def life_points(self) -> int:
        return self._life_points

    @life_points.setter
    def life_points(self, value: int) -> None:
        self._life_points = int(value)

    @property
    def mood(self) -> Mood:
        return self._mood

    @mood.setter
    def mood(self, value: Union[Mood, str]) -> None:
        self._mood = coerce_mood(value)

    @property
    def cell_type(self) -> CellType:
        return self._cell_type

    @cell_type.setter
    def cell_type(self, value: Union[CellType, str]) -> None:
        """Assign a type, resetting thresholds to the type's defaults.

        Both thresholds are reset, not only the one the type overrides, so
        retyping never leaves min above max. Assigning HIGHLANDER also
        restarts the reprieve counter.
        """
        cell_type = coerce_cell_type(value)
        self._cell_type = cell_type
        self._min_threshold, self._max_threshold = thresholds_for(cell_type)
        if cell_type is CellType.HIGHLANDER:
            self._skipped_gen = 0

    @property
    def min_threshold(self) -> int:
        return self._min_threshold

    @min_threshold.setter
    def min_threshold(self, value: int) -> None:
        self.set_thresholds(value, self._max_threshold)

    @property
    def max_threshold(self) -> int:
        return self._max_threshold

    @max_threshold.setter
    def max_threshold(self, value: int) -> None:
        self.set_thresholds(self._min_threshold, value)

    def set_thresholds(self, min_threshold: int, max_threshold: int) -> None:
        """Set both survival thresholds at once.

        Raises:
            ValueError: If the bounds are outside 0-8 or min exceeds max
        """
        if not (0 <= min_threshold <= max_threshold <= MAX_NEIGHBORS):
            raise ValueError(
                f"Thresholds must satisfy 0 <= min <= max <= {MAX_NEIGHBORS}, "
                f"got min={min_threshold}, max={max_threshold}")
        self._min_threshold = min_threshold
        self._max_threshold = max_threshold

    @property
    def skipped_gen(self) -> int:
        return self._skipped_gen

    @skipped_gen.setter
    def skipped_gen(self, value: int) -> None:
        if value < REPRIEVE_EXHAUSTED:
            raise ValueError(f"skipped_gen cannot be below {REPRIEVE_EXHAUSTED}, got {value}")
        self._skipped_gen = value

    @property
    def generations(self) -> Tuple['Generation', ...]:
        """Immutable view of the generations this cell was evaluated in."""
        return tuple(self._generations)

    def add_generation(self, generation: 'Generation') -> None:
        """Append a generation to the cell's history.

        Raises:
            ValueError: If the index does not follow the last recorded one
        """
        if self._generations and generation.index <= self._generations[-1].index:
            raise ValueError(
                f"Generation {generation.index} does not follow {self._generations[-1].index} for cell {self}")
        self._generations.append(generation)

    # --- Evolvable --------------------------------------------------------

    def decide(self, alive_neighbors: int) -> EvolutionOutcome:
        """Compute the next state without touching the cell."""
        return next_state(self._alive, alive_neighbors, self._cell_type,
                          self._min_threshold, self._max_threshold, self._skipped_gen)

    def evolve(self, alive_neighbors: int) -> bool:
        """Apply the extended rules for the given live neighbour count.

        The Highlander reprieve counter is updated in place; the alive flag
        is left for the caller to commit.

        Args:
            alive_neighbors: Number of live neighbours (0-8)

        Returns:
            True if the cell lives in the next generation
        """
        outcome = self.decide(alive_neighbors)
        self._skipped_gen = outcome.skipped_gen
        return outcome.alive

    # --- Interactable -----------------------------------------------------

    def interact(self, other: Optional['Cell']) -> InteractionEffect:
        """Exchange energy with another cell according to both moods.

        Args:
            other: Interaction partner

        Returns:
            The effect that was applied

        Raises:
            NullInteractionTarget: If other is None
        """
        if other is None:
            raise NullInteractionTarget(f"Cell {self} cannot interact with a missing partner")

        effect = effect_for(self._mood, other._mood)
        self._life_points += effect.this_delta
        other._life_points += effect.other_delta
        if effect.this_mood is not None:
            self._mood = effect.this_mood
        if effect.other_mood is not None:
            other._mood = effect.other_mood
        return effect

    def __str__(self) -> str:
        return str(self._coord)

    def __repr__(self) -> str:
        state = "alive" if self._alive else "dead"
        return (f"Cell({self._coord.x},{self._coord.y}, {state}, lp={self._life_points}, "
                f"{self._mood.name}, {self._cell_type.name})")
