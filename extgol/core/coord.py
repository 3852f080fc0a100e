"""Immutable 2-D integer coordinate."""

from dataclasses import dataclass
from typing import Iterator, Tuple

# Moore neighbourhood offsets in row-major order, centre excluded
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy)
    for dy in (-1, 0, 1)
    for dx in (-1, 0, 1)
    if not (dx == 0 and dy == 0)
)


@dataclass(frozen=True)
class Coord:
    """Board position. x is the column, y is the row."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> 'Coord':
        """Return the coordinate shifted by (dx, dy)."""
        return Coord(self.x + dx, self.y + dy)

    def surrounding(self) -> Iterator['Coord']:
        """Yield the 8 Moore neighbours, ignoring any board bounds."""
        for dx, dy in NEIGHBOR_OFFSETS:
            yield self.offset(dx, dy)

    def sort_key(self) -> Tuple[int, int]:
        """Row-major ordering key."""
        return (self.y, self.x)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"{self.x},{self.y}"
