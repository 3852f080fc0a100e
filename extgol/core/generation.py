"""Generation snapshot markers."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, FrozenSet, Tuple

from .coord import Coord

if TYPE_CHECKING:
    from .cell import Cell


@dataclass(frozen=True, eq=False)
class Generation:
    """Cells evaluated in one step and the coordinates alive after it.

    Attributes:
        index: Step number, increasing by one per step of a game
        members: Cells evaluated in the step, row-major order
        alive: Coordinates of the cells alive once the step committed
    """

    index: int
    members: Tuple['Cell', ...] = field(repr=False)
    alive: FrozenSet[Coord] = field(default_factory=frozenset, repr=False)

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Generation index must be non-negative, got {self.index}")

    @property
    def alive_count(self) -> int:
        return len(self.alive)

    def is_alive(self, coord: Coord) -> bool:
        """Whether coord was alive at the end of this generation."""
        return coord in self.alive

    def __contains__(self, cell: object) -> bool:
        return any(member is cell for member in self.members)

    def __len__(self) -> int:
        return len(self.members)

    def __repr__(self) -> str:
        return f"Generation({self.index}, members={len(self.members)}, alive={len(self.alive)})"
