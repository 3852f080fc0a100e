"""Board topology for the extended Game of Life.

The board is a fixed rectangle of tiles keyed by coordinate. Each tile's
Moore neighbourhood is resolved once when the board is built; edges and
corners simply have fewer neighbours (no wraparound).
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple, Union

import numpy as np

from ..config import DEFAULT_LIFE_POINTS, MAX_BOARD_SIZE
from .cell import Cell
from .coord import Coord
from .errors import InconsistentBoard, InvalidCoordinate
from .rules import CellType, Mood

logger = logging.getLogger(__name__)

CoordLike = Union[Coord, Tuple[int, int]]


def _as_coord(value: CoordLike) -> Coord:
    if isinstance(value, Coord):
        return value
    x, y = value
    return Coord(x, y)


class Tile:
    """Fixed board position hosting at most one cell."""

    def __init__(self, coord: Coord):
        self.coord = coord
        self.cell: Optional[Cell] = None
        self._neighbors: Optional[Tuple['Tile', ...]] = None

    @property
    def neighbors(self) -> Tuple['Tile', ...]:
        """Adjacent tiles in row-major order."""
        if self._neighbors is None:
            raise InconsistentBoard(f"Tile {self.coord} has no resolved neighbourhood")
        return self._neighbors

    def wire(self, neighbors: Tuple['Tile', ...]) -> None:
        """Set the neighbourhood. Allowed exactly once."""
        if self._neighbors is not None:
            raise InconsistentBoard(f"Neighbourhood of tile {self.coord} is already set")
        self._neighbors = neighbors

    def has_cell(self) -> bool:
        return self.cell is not None

    def __repr__(self) -> str:
        return f"Tile({self.coord}, cell={'yes' if self.cell is not None else 'no'})"


class Board:
    """Rectangular grid of tiles.

    Attributes:
        width: Board width in tiles
        height: Board height in tiles
        tiles: Mapping of every coordinate in the rectangle to its tile
    """

    def __init__(self, width: int, height: int):
        """Build every tile and resolve its neighbourhood.

        Args:
            width: Board width (tiles)
            height: Board height (tiles)

        Raises:
            ValueError: If dimensions are not positive or exceed the size limit
        """
        if width <= 0 or height <= 0:
            raise ValueError("Board dimensions must be positive")

        if width > MAX_BOARD_SIZE or height > MAX_BOARD_SIZE:
            raise ValueError(f"Board dimensions cannot exceed {MAX_BOARD_SIZE}x{MAX_BOARD_SIZE}")

        self.width = width
        self.height = height

        # Row-major insertion order doubles as iteration order
        self.tiles: Dict[Coord, Tile] = {}
        for y in range(height):
            for x in range(width):
                coord = Coord(x, y)
                self.tiles[coord] = Tile(coord)

        for tile in self.tiles.values():
            tile.wire(tuple(self.tiles[c] for c in tile.coord.surrounding() if self.in_bounds(c)))

        logger.debug(f"Created board {width}x{height} with {len(self.tiles)} tiles")

    # --- topology ---------------------------------------------------------

    def in_bounds(self, coord: CoordLike) -> bool:
        coord = _as_coord(coord)
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    def tile_at(self, coord: CoordLike) -> Tile:
        """Get the tile at a coordinate.

        Raises:
            InvalidCoordinate: If coord is outside the board
        """
        coord = _as_coord(coord)
        if not self.in_bounds(coord):
            raise InvalidCoordinate(coord.x, coord.y, self.width, self.height)
        try:
            return self.tiles[coord]
        except KeyError:
            raise InconsistentBoard(f"No tile mapped at {coord}") from None

    def get_tile(self, coord: CoordLike) -> Optional[Tile]:
        """Get the tile at a coordinate, or None when outside the board."""
        return self.tiles.get(_as_coord(coord))

    def neighbors_of(self, coord: CoordLike) -> Tuple[Tile, ...]:
        """Get the up to 8 tiles adjacent to coord."""
        return self.tile_at(coord).neighbors

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles.values())

    def __len__(self) -> int:
        return len(self.tiles)

    # --- cells ------------------------------------------------------------

    def cell_at(self, coord: CoordLike) -> Optional[Cell]:
        return self.tile_at(coord).cell

    def cells(self) -> List[Cell]:
        """All placed cells, row-major."""
        return [tile.cell for tile in self.tiles.values() if tile.cell is not None]

    def alive_cells(self) -> List[Cell]:
        """All live cells, row-major."""
        return [cell for cell in self.cells() if cell.alive]

    def place_cell(self, cell: Cell) -> None:
        """Attach a cell to the tile at its coordinate.

        Raises:
            InvalidCoordinate: If the cell lies outside the board
            InconsistentBoard: If the tile is taken or the cell belongs elsewhere
        """
        tile = self.tile_at(cell.coord)
        if tile.cell is not None and tile.cell is not cell:
            raise InconsistentBoard(f"Tile {tile.coord} already hosts a cell")
        cell.attach(self)
        tile.cell = cell

    def populate(self,
                 life_points: int = DEFAULT_LIFE_POINTS,
                 mood: Union[Mood, str] = Mood.NAIVE,
                 cell_type: Union[CellType, str] = CellType.BASIC) -> int:
        """Give every empty tile a fresh dead cell.

        Returns:
            Number of cells created
        """
        created = 0
        for tile in self.tiles.values():
            if tile.cell is None:
                self.place_cell(Cell(tile.coord, life_points=life_points, mood=mood, cell_type=cell_type))
                created += 1
        logger.debug(f"Populated {created} tiles")
        return created

    def load_pattern(self, pattern: np.ndarray, x: int = 0, y: int = 0) -> None:
        """Set cells alive from a boolean pattern placed at (x, y).

        Cells under False entries are left as they are. Tiles without a
        cell get one.

        Args:
            pattern: 2D boolean array, indexed [row, column]
            x: Left column of the placement
            y: Top row of the placement

        Raises:
            InvalidCoordinate: If the pattern does not fit on the board
        """
        pattern = np.asarray(pattern, dtype=bool)
        if pattern.ndim != 2:
            raise ValueError(f"Pattern must be 2D, got shape {pattern.shape}")

        pattern_height, pattern_width = pattern.shape
        for corner in ((x, y), (x + pattern_width - 1, y + pattern_height - 1)):
            if not self.in_bounds(corner):
                raise InvalidCoordinate(corner[0], corner[1], self.width, self.height)

        for py, px in zip(*np.nonzero(pattern)):
            tile = self.tile_at((x + int(px), y + int(py)))
            if tile.cell is None:
                self.place_cell(Cell(tile.coord))
            tile.cell.alive = True

    # --- inspection -------------------------------------------------------

    def to_array(self) -> np.ndarray:
        """Alive state as a (height, width) boolean array."""
        state = np.zeros((self.height, self.width), dtype=bool)
        for cell in self.alive_cells():
            state[cell.y, cell.x] = True
        return state

    def alive_coords(self) -> frozenset:
        return frozenset(cell.coord for cell in self.alive_cells())

    def count_alive(self) -> int:
        return len(self.alive_cells())

    def total_life_points(self) -> int:
        return sum(cell.life_points for cell in self.cells())

    def center_of_mass(self) -> Tuple[float, float]:
        """Centroid (x, y) of live cells, (0.0, 0.0) when none are alive."""
        live_rows, live_cols = np.nonzero(self.to_array())
        if len(live_rows) == 0:
            return (0.0, 0.0)
        return (float(np.mean(live_cols)), float(np.mean(live_rows)))

    def validate(self, require_cells: bool = True) -> None:
        """Check the tile map covers the rectangle exactly.

        Args:
            require_cells: Also require every tile to host a cell of this board

        Raises:
            InconsistentBoard: On gaps, stray tiles, unmapped tiles or missing cells
        """
        for y in range(self.height):
            for x in range(self.width):
                if Coord(x, y) not in self.tiles:
                    raise InconsistentBoard(f"Board is missing tile ({x}, {y})")

        if len(self.tiles) != self.width * self.height:
            raise InconsistentBoard(
                f"Board has {len(self.tiles)} tiles, expected {self.width * self.height}")

        for coord, tile in self.tiles.items():
            if tile.coord != coord:
                raise InconsistentBoard(f"Tile {tile.coord} is mapped at {coord}")
            if not require_cells:
                continue
            if tile.cell is None:
                raise InconsistentBoard(f"Tile {coord} has no cell")
            if tile.cell.coord != coord:
                raise InconsistentBoard(f"Cell {tile.cell} sits on tile {coord}")
            if tile.cell.board is not self:
                raise InconsistentBoard(f"Cell {tile.cell} is not bound to this board")

    def __str__(self) -> str:
        """Alive cells as X, dead or empty tiles as '.'."""
        state = self.to_array()
        return "\n".join(
            "".join("X" if state[y, x] else "." for x in range(self.width))
            for y in range(self.height))

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, alive={self.count_alive()})"
