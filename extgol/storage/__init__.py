"""Loader/saver collaborators for games.

The evolution core never imports this package; drivers use it to move
game state in and out of memory around steps.
"""

from .repository import GameRepository
from .snapshot import dumps, game_from_dict, game_to_dict, loads

__all__ = ['GameRepository', 'dumps', 'game_from_dict', 'game_to_dict', 'loads']
