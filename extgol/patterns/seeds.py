"""Seed pattern definitions.

Patterns are 2D boolean numpy arrays indexed [row, column], ready for
Board.load_pattern.
"""

from typing import Callable, Dict, FrozenSet

import numpy as np

from ..core.coord import Coord


def create_glider_pattern() -> np.ndarray:
    """Create the classic 5-cell glider, heading south-east."""
    return np.array([
        [False, True, False],
        [False, False, True],
        [True, True, True]
    ], dtype=bool)


def create_blinker_pattern() -> np.ndarray:
    """Create horizontal blinker pattern (3 cells)."""
    return np.array([[True, True, True]], dtype=bool)


def create_block_pattern() -> np.ndarray:
    """Create stable 2x2 block still life."""
    return np.array([
        [True, True],
        [True, True]
    ], dtype=bool)


SEEDS: Dict[str, Callable[[], np.ndarray]] = {
    'glider': create_glider_pattern,
    'blinker': create_blinker_pattern,
    'block': create_block_pattern,
}


def get_seed(name: str) -> np.ndarray:
    """Look up a seed pattern by name.

    Raises:
        ValueError: If no seed has that name
    """
    try:
        return SEEDS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown seed pattern: {name!r} (choose from {sorted(SEEDS)})") from None


def pattern_coords(pattern: np.ndarray, x: int = 0, y: int = 0) -> FrozenSet[Coord]:
    """Coordinates covered by the live entries of pattern placed at (x, y)."""
    rows, cols = np.nonzero(np.asarray(pattern, dtype=bool))
    return frozenset(Coord(x + int(c), y + int(r)) for r, c in zip(rows, cols))
