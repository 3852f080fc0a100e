"""Exception hierarchy for the extended Game of Life core.

Every error raised by the board, cell and engine code derives from
ExtGOLError so drivers can catch the whole family at once. Where a built-in
exception already describes the failure (IndexError for bad coordinates,
ValueError for bad arguments) the error also derives from it.
"""


class ExtGOLError(Exception):
    """Base class for all extended Game of Life errors."""


class InvalidCoordinate(ExtGOLError, IndexError):
    """Raised when a coordinate falls outside the board rectangle."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(f"Coordinates ({x}, {y}) out of bounds for {width}x{height} board")
        self.x = x
        self.y = y


class NullInteractionTarget(ExtGOLError, ValueError):
    """Raised when a cell is asked to interact with no partner."""


class InvalidMoodOrType(ExtGOLError, ValueError):
    """Raised when an unrecognized mood or cell type is assigned."""


class InconsistentBoard(ExtGOLError):
    """Raised when the board topology or its cell population is broken."""


class StepAborted(ExtGOLError):
    """Raised when a generation step fails before committing any change."""

    def __init__(self, message: str, generation_index: int):
        super().__init__(message)
        self.generation_index = generation_index
