"""Plain-dict and JSON encoding of a game's full state.

Layout:

    {
      "format": 1,
      "width": 3, "height": 3,
      "interactions": true,
      "cells": [{"x": 0, "y": 0, "alive": false, "life_points": 0,
                 "mood": "NAIVE", "type": "BASIC",
                 "min_threshold": 2, "max_threshold": 3,
                 "skipped_gen": 0, "history": [1, 2]}, ...],
      "generations": [{"index": 1, "alive": [[1, 1], ...]}, ...]
    }

A cell's history lists the indices of the generations it belongs to, so
membership is rebuilt on load without duplicating cell records.
"""

import json
import logging
from typing import Any, Dict, List

from ..core.board import Board
from ..core.cell import Cell
from ..core.coord import Coord
from ..core.engine import EvolutionEngine
from ..core.errors import InconsistentBoard
from ..core.game import Game
from ..core.generation import Generation

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def cell_to_dict(cell: Cell) -> Dict[str, Any]:
    return {
        "x": cell.x,
        "y": cell.y,
        "alive": cell.alive,
        "life_points": cell.life_points,
        "mood": cell.mood.name,
        "type": cell.cell_type.name,
        "min_threshold": cell.min_threshold,
        "max_threshold": cell.max_threshold,
        "skipped_gen": cell.skipped_gen,
        "history": [g.index for g in cell.generations],
    }


def cell_from_dict(data: Dict[str, Any]) -> Cell:
    """Rebuild a detached cell, history excluded.

    Raises:
        InvalidMoodOrType: If the stored mood or type is unknown
    """
    cell = Cell(Coord(data["x"], data["y"]),
                alive=data.get("alive", False),
                life_points=data.get("life_points", 0),
                mood=data.get("mood", "NAIVE"),
                cell_type=data.get("type", "BASIC"))
    # Type assignment set the default thresholds; restore stored overrides
    cell.set_thresholds(data.get("min_threshold", cell.min_threshold),
                        data.get("max_threshold", cell.max_threshold))
    cell.skipped_gen = data.get("skipped_gen", 0)
    return cell


def game_to_dict(game: Game) -> Dict[str, Any]:
    """Encode board, cells and generation records."""
    board = game.board
    return {
        "format": FORMAT_VERSION,
        "width": board.width,
        "height": board.height,
        "interactions": game.engine.interactions,
        "cells": [cell_to_dict(cell) for cell in board.cells()],
        "generations": [
            {"index": g.index, "alive": sorted([c.x, c.y] for c in g.alive)}
            for g in game.generations
        ],
    }


def game_from_dict(data: Dict[str, Any]) -> Game:
    """Decode a game produced by game_to_dict.

    Raises:
        ValueError: If the format version is unsupported
        InvalidCoordinate: If a cell lies outside the stored dimensions
        InconsistentBoard: If a history refers to an unknown generation
    """
    version = data.get("format", FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise ValueError(f"Unsupported snapshot format {version}")

    board = Board(data["width"], data["height"])
    histories: Dict[Coord, List[int]] = {}
    for cell_data in data.get("cells", []):
        cell = cell_from_dict(cell_data)
        board.place_cell(cell)
        histories[cell.coord] = list(cell_data.get("history", []))

    game = Game(board, EvolutionEngine(interactions=data.get("interactions", True)))

    known = {g["index"] for g in data.get("generations", [])}
    for coord, history in histories.items():
        unknown = set(history) - known
        if unknown:
            raise InconsistentBoard(f"Cell {coord} refers to unknown generations {sorted(unknown)}")

    for gen_data in sorted(data.get("generations", []), key=lambda g: g["index"]):
        index = gen_data["index"]
        members = tuple(cell for cell in board.cells() if index in histories[cell.coord])
        generation = Generation(index, members, frozenset(Coord(x, y) for x, y in gen_data["alive"]))
        for cell in members:
            cell.add_generation(generation)
        game.record_generation(generation)

    logger.debug(f"Decoded game {board.width}x{board.height} at generation {game.current_index}")
    return game


def dumps(game: Game, **kwargs) -> str:
    """Serialize a game to a JSON string."""
    return json.dumps(game_to_dict(game), **kwargs)


def loads(text: str) -> Game:
    """Deserialize a game from a JSON string."""
    return game_from_dict(json.loads(text))
