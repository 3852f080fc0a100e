"""Extended Conway rules: moods, cell types and the per-cell evolution rule.

The evolution rule is a pure function of a cell's own state and the number
of live neighbours the engine counted for it. It never looks at the board,
so every branch of the decision table can be tested in isolation.
"""

from enum import Enum
from typing import Dict, NamedTuple, Tuple, Type, TypeVar, Union

from .errors import InvalidMoodOrType


class Mood(Enum):
    """Behavioural role that decides pairwise energy exchange."""
    NAIVE = "NAIVE"
    HEALER = "HEALER"
    VAMPIRE = "VAMPIRE"


class CellType(Enum):
    """Structural modifier of the survival rule."""
    BASIC = "BASIC"
    HIGHLANDER = "HIGHLANDER"
    LONER = "LONER"
    SOCIAL = "SOCIAL"


# Classic Conway thresholds
DEFAULT_MIN_THRESHOLD: int = 2
DEFAULT_MAX_THRESHOLD: int = 3
BIRTH_COUNT: int = 3
MAX_NEIGHBORS: int = 8

# (min_threshold, max_threshold) applied when a type is assigned
TYPE_THRESHOLDS: Dict[CellType, Tuple[int, int]] = {
    CellType.BASIC: (DEFAULT_MIN_THRESHOLD, DEFAULT_MAX_THRESHOLD),
    CellType.HIGHLANDER: (DEFAULT_MIN_THRESHOLD, DEFAULT_MAX_THRESHOLD),
    CellType.LONER: (1, DEFAULT_MAX_THRESHOLD),
    CellType.SOCIAL: (DEFAULT_MIN_THRESHOLD, MAX_NEIGHBORS),
}

# Highlander reprieve budget; REPRIEVE_EXHAUSTED is terminal
HIGHLANDER_MAX_REPRIEVES: int = 3
REPRIEVE_EXHAUSTED: int = -1

E = TypeVar('E', bound=Enum)


def _coerce(enum_cls: Type[E], value: Union[E, str]) -> E:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls[value.upper()]
        except KeyError:
            pass
    raise InvalidMoodOrType(f"Unrecognized {enum_cls.__name__} value: {value!r}")


def coerce_mood(value: Union[Mood, str]) -> Mood:
    """Return value as a Mood, accepting members or their names.

    Raises:
        InvalidMoodOrType: If value names no mood
    """
    return _coerce(Mood, value)


def coerce_cell_type(value: Union[CellType, str]) -> CellType:
    """Return value as a CellType, accepting members or their names.

    Raises:
        InvalidMoodOrType: If value names no cell type
    """
    return _coerce(CellType, value)


def thresholds_for(cell_type: CellType) -> Tuple[int, int]:
    """Get the (min, max) survival thresholds a type starts with."""
    return TYPE_THRESHOLDS[coerce_cell_type(cell_type)]


class EvolutionOutcome(NamedTuple):
    """Next alive state plus the updated Highlander reprieve counter."""
    alive: bool
    skipped_gen: int


def next_state(alive: bool,
               live_neighbors: int,
               cell_type: CellType = CellType.BASIC,
               min_threshold: int = DEFAULT_MIN_THRESHOLD,
               max_threshold: int = DEFAULT_MAX_THRESHOLD,
               skipped_gen: int = 0) -> EvolutionOutcome:
    """Apply the extended rules to determine a cell's next state.

    Rules, checked in order:
    - A neighbour count outside [min, max] kills the cell, unless it is a
      Highlander with reprieves left: then it lives (dead Highlanders come
      back) and the reprieve counter goes up by one. Once 3 reprieves have
      been spent the next out-of-range count kills it and pins the counter
      at -1.
    - A dead cell with exactly 3 live neighbours is born, whatever its type.
    - Every other cell keeps its state.

    Args:
        alive: Current cell state
        live_neighbors: Number of live neighbours (0-8)
        cell_type: Type of the cell
        min_threshold: Fewest neighbours a live cell survives with
        max_threshold: Most neighbours a live cell survives with
        skipped_gen: Current Highlander reprieve counter

    Returns:
        EvolutionOutcome with the next alive flag and reprieve counter

    Raises:
        ValueError: If live_neighbors is outside 0-8
    """
    if not (0 <= live_neighbors <= MAX_NEIGHBORS):
        raise ValueError(f"Neighbour count must be between 0 and {MAX_NEIGHBORS}, got {live_neighbors}")

    # Over- and underpopulation
    if live_neighbors > max_threshold or live_neighbors < min_threshold:
        if cell_type is CellType.HIGHLANDER:
            if skipped_gen != REPRIEVE_EXHAUSTED and skipped_gen < HIGHLANDER_MAX_REPRIEVES:
                return EvolutionOutcome(True, skipped_gen + 1)
            return EvolutionOutcome(False, REPRIEVE_EXHAUSTED)
        return EvolutionOutcome(False, skipped_gen)

    if not alive:
        return EvolutionOutcome(live_neighbors == BIRTH_COUNT, skipped_gen)

    return EvolutionOutcome(True, skipped_gen)


def rule_table(cell_type: CellType = CellType.BASIC) -> Dict[Tuple[bool, int], bool]:
    """Get the complete rule table for a fresh cell of the given type.

    Returns:
        Dictionary mapping (current_state, neighbor_count) to next_state
    """
    cell_type = coerce_cell_type(cell_type)
    min_threshold, max_threshold = thresholds_for(cell_type)
    rules = {}

    for current_state in [False, True]:
        for neighbors in range(MAX_NEIGHBORS + 1):
            outcome = next_state(current_state, neighbors, cell_type, min_threshold, max_threshold)
            rules[(current_state, neighbors)] = outcome.alive

    return rules
