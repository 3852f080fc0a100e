"""Classic seed patterns for populating boards."""

from .seeds import (
    SEEDS,
    create_blinker_pattern,
    create_block_pattern,
    create_glider_pattern,
    get_seed,
    pattern_coords,
)

__all__ = [
    'SEEDS',
    'create_blinker_pattern',
    'create_block_pattern',
    'create_glider_pattern',
    'get_seed',
    'pattern_coords',
]
