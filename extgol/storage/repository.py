"""In-memory game repository.

Stores encoded snapshots rather than live objects, so a loaded game never
shares cells with the one that was saved and later mutations of either are
invisible to the other.
"""

import copy
import itertools
import logging
from typing import Any, Dict, List, Optional

from ..core.board import Board
from ..core.cell import Cell
from ..core.game import Game
from .snapshot import game_from_dict, game_to_dict

logger = logging.getLogger(__name__)


class GameRepository:
    """Keeps saved games keyed by integer id.

    Attributes:
        saves: Number of save operations performed
        loads: Number of successful load operations
    """

    def __init__(self):
        self._games: Dict[int, Dict[str, Any]] = {}
        self._ids = itertools.count(1)
        self.saves = 0
        self.loads = 0

    def save(self, game: Game, game_id: Optional[int] = None) -> int:
        """Store the game's current state.

        Args:
            game: Game to store
            game_id: Existing id to overwrite; a new id is assigned when None

        Returns:
            The id the game is stored under

        Raises:
            KeyError: If game_id is given but unknown
        """
        if game_id is None:
            game_id = next(self._ids)
        elif game_id not in self._games:
            raise KeyError(f"No saved game with id {game_id}")

        self._games[game_id] = game_to_dict(game)
        self.saves += 1
        logger.debug(f"Saved game {game_id} at generation {game.current_index}")
        return game_id

    def load(self, game_id: int) -> Optional[Game]:
        """Rebuild a saved game with every tile's cell attached."""
        data = self._games.get(game_id)
        if data is None:
            return None

        self.loads += 1
        return game_from_dict(copy.deepcopy(data))

    def load_board(self, game_id: int) -> Optional[Board]:
        game = self.load(game_id)
        return game.board if game is not None else None

    def load_alive_cells(self, game_id: int) -> Optional[List[Cell]]:
        """Live cells of a saved game, row-major."""
        board = self.load_board(game_id)
        return board.alive_cells() if board is not None else None

    def delete(self, game_id: int) -> bool:
        """Remove a saved game. Returns False if it did not exist."""
        if self._games.pop(game_id, None) is None:
            return False
        logger.debug(f"Deleted game {game_id}")
        return True

    def ids(self) -> List[int]:
        return sorted(self._games)

    def __contains__(self, game_id: object) -> bool:
        return game_id in self._games

    def __len__(self) -> int:
        return len(self._games)
