"""Evolution engine for the extended Game of Life.

One step runs in five phases over a single snapshot of the previous
generation:

1. snapshot  - read every cell's state once
2. evolve    - decide each cell's next state from snapshot neighbour counts
3. interact  - exchange energy between adjacent cells alive in the snapshot
4. commit    - write alive flags, reprieve counters, life points and moods
5. record    - append a Generation to the game and to every member cell

Nothing on the board changes before phase 4, so a failure in phases 1-3
aborts the step with the board exactly as it was.

Interactions visit each unordered pair of adjacent live cells once. The
cell that comes first in row-major (y, x) order acts as "this", its later
neighbour as "other". Effects are looked up with snapshot moods, so a cell
turned into a vampire keeps acting with its old mood until the next step.
"""

import logging
from typing import TYPE_CHECKING, Dict, List, NamedTuple, Tuple

from .board import Board
from .cell import Cell
from .coord import Coord
from .errors import ExtGOLError, InconsistentBoard, StepAborted
from .generation import Generation
from .interaction import effect_for
from .rules import CellType, EvolutionOutcome, Mood, next_state

if TYPE_CHECKING:
    from .game import Game

logger = logging.getLogger(__name__)


class CellSnapshot(NamedTuple):
    """Read-only view of one cell at the start of a step."""
    alive: bool
    life_points: int
    mood: Mood
    cell_type: CellType
    min_threshold: int
    max_threshold: int
    skipped_gen: int

    @classmethod
    def of(cls, cell: Cell) -> 'CellSnapshot':
        return cls(cell.alive, cell.life_points, cell.mood, cell.cell_type,
                   cell.min_threshold, cell.max_threshold, cell.skipped_gen)


Snapshot = Dict[Coord, CellSnapshot]


class InteractionResult(NamedTuple):
    """Accumulated interaction changes for one step."""
    life_deltas: Dict[Coord, int]
    moods: Dict[Coord, Mood]
    pairs: int


class EvolutionEngine:
    """Runs generation steps on a game's board.

    Attributes:
        interactions: Whether the mood interaction phase runs
    """

    def __init__(self, interactions: bool = True):
        """Initialize the engine.

        Args:
            interactions: Set False for plain Conway evolution without
                energy exchange
        """
        self.interactions = interactions

    def snapshot(self, board: Board) -> Snapshot:
        """Capture every cell's state. The board must be fully populated."""
        board.validate(require_cells=True)
        return {coord: CellSnapshot.of(tile.cell) for coord, tile in board.tiles.items()}

    def count_alive_neighbors(self, board: Board, snapshot: Snapshot, coord: Coord) -> int:
        """Count live neighbours of coord as recorded in the snapshot."""
        return sum(1 for tile in board.neighbors_of(coord) if snapshot[tile.coord].alive)

    def check_history(self, board: Board, index: int) -> None:
        """Ensure generation index can be appended to every cell's history.

        Raises:
            InconsistentBoard: If a cell already recorded index or a later one
        """
        for coord, tile in board.tiles.items():
            history = tile.cell.generations
            if history and history[-1].index >= index:
                raise InconsistentBoard(
                    f"Cell {coord} already recorded generation {history[-1].index}; "
                    f"game is at generation {index - 1}")

    def evolve_all(self, board: Board, snapshot: Snapshot) -> Dict[Coord, EvolutionOutcome]:
        """Decide the next state of every cell from the snapshot."""
        outcomes: Dict[Coord, EvolutionOutcome] = {}

        for coord, state in snapshot.items():
            neighbors = self.count_alive_neighbors(board, snapshot, coord)
            outcomes[coord] = next_state(state.alive, neighbors, state.cell_type,
                                         state.min_threshold, state.max_threshold,
                                         state.skipped_gen)

        return outcomes

    def interaction_pairs(self, board: Board, snapshot: Snapshot) -> List[Tuple[Coord, Coord]]:
        """Adjacent live pairs in canonical order, each pair exactly once."""
        pairs = []

        for coord, tile in board.tiles.items():
            if not snapshot[coord].alive:
                continue
            for neighbor in tile.neighbors:
                if neighbor.coord.sort_key() <= coord.sort_key():
                    continue  # Visited from the other side
                if snapshot[neighbor.coord].alive:
                    pairs.append((coord, neighbor.coord))

        return pairs

    def interact_all(self, board: Board, snapshot: Snapshot) -> InteractionResult:
        """Accumulate the effects of all interactions using snapshot moods."""
        life_deltas: Dict[Coord, int] = {}
        moods: Dict[Coord, Mood] = {}
        pairs = self.interaction_pairs(board, snapshot)

        for this, other in pairs:
            effect = effect_for(snapshot[this].mood, snapshot[other].mood)
            if effect.is_noop:
                continue

            life_deltas[this] = life_deltas.get(this, 0) + effect.this_delta
            life_deltas[other] = life_deltas.get(other, 0) + effect.other_delta
            if effect.this_mood is not None:
                moods[this] = effect.this_mood
            if effect.other_mood is not None:
                moods[other] = effect.other_mood

        return InteractionResult(life_deltas, moods, len(pairs))

    def step(self, game: 'Game') -> Generation:
        """Advance the game by one generation.

        Args:
            game: Game whose board is fully populated

        Returns:
            The newly recorded Generation

        Raises:
            InconsistentBoard: If the board has gaps or empty tiles, or a
                cell already recorded this generation or a later one
            StepAborted: If a cell fails while evolving or interacting;
                no cell is modified in that case
        """
        board = game.board
        index = game.current_index + 1

        snapshot = self.snapshot(board)
        self.check_history(board, index)

        try:
            outcomes = self.evolve_all(board, snapshot)
            if self.interactions:
                result = self.interact_all(board, snapshot)
            else:
                result = InteractionResult({}, {}, 0)
        except (ExtGOLError, ValueError, KeyError) as e:
            logger.error(f"Generation {index} aborted: {e}")
            raise StepAborted(f"Generation {index} aborted: {e}", index) from e

        members = self._commit(board, outcomes, result)
        generation = Generation(index, members, board.alive_coords())

        for cell in members:
            cell.add_generation(generation)
        game.record_generation(generation)

        logger.debug(f"Generation {index}: alive={generation.alive_count}, "
                     f"pairs={result.pairs}, changed_moods={len(result.moods)}")
        return generation

    def _commit(self, board: Board, outcomes: Dict[Coord, EvolutionOutcome],
                result: InteractionResult) -> Tuple[Cell, ...]:
        members = []

        for coord, tile in board.tiles.items():
            cell = tile.cell
            outcome = outcomes[coord]
            cell.alive = outcome.alive
            cell.skipped_gen = outcome.skipped_gen
            cell.life_points += result.life_deltas.get(coord, 0)
            if coord in result.moods:
                cell.mood = result.moods[coord]
            members.append(cell)

        return tuple(members)


default_engine = EvolutionEngine()
