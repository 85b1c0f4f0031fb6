"""Placement of agents, safe zones and barricades onto a grid."""

from typing import Callable, FrozenSet, Optional

from .cell import Cell
from .grid import Grid

DEFAULT_MAX_PLACEMENT = 5

# Barricades are not capped.
LIMITED_TYPES: FrozenSet[Cell] = frozenset({Cell.HUMAN, Cell.ZOMBIE, Cell.SAFE})


class PlacementError(ValueError):
    """Raised when a placement would break a limit or the grid is locked."""


class PlacementController:
    """
    Toggle-style cell placement with per-type limits.

    Placing the type a cell already holds erases it; placing EMPTY always
    erases. Humans, zombies and safe zones are capped at ``max_placement``
    each. Counts are read from the grid, so edits made elsewhere are
    always reflected.
    """

    def __init__(self, grid: Grid, max_placement: int = DEFAULT_MAX_PLACEMENT,
                 is_locked: Optional[Callable[[], bool]] = None):
        self.grid = grid
        self.max_placement = max_placement
        self._locked = False
        self._is_locked = is_locked

    @property
    def locked(self) -> bool:
        """True while placement is refused, either set here or by the owner."""
        if self._locked:
            return True
        return bool(self._is_locked()) if self._is_locked is not None else False

    @locked.setter
    def locked(self, value: bool) -> None:
        self._locked = value

    def remaining(self, cell: Cell) -> int:
        """How many more cells of this type may be placed."""
        if cell not in LIMITED_TYPES:
            raise ValueError(f"{Cell(cell).name} placements are not limited")
        return max(0, self.max_placement - self.grid.count(cell))

    def place(self, row: int, col: int, cell: Cell) -> Cell:
        """Apply one placement command and return the resulting cell state."""
        if self.locked:
            raise PlacementError("Placement is disabled while the simulation is running")

        cell = Cell(cell)
        current = self.grid.get(row, col)
        if cell == Cell.EMPTY or current == cell:
            self.grid.set(row, col, Cell.EMPTY)
            return Cell.EMPTY

        if cell in LIMITED_TYPES and self.remaining(cell) == 0:
            raise PlacementError(
                f"Max {self.max_placement} {cell.name.lower()} cells allowed")

        self.grid.set(row, col, cell)
        return cell

    def erase(self, row: int, col: int) -> None:
        self.place(row, col, Cell.EMPTY)

    def clear(self) -> None:
        """Empty every cell of the grid."""
        if self.locked:
            raise PlacementError("Placement is disabled while the simulation is running")
        for row in range(self.grid.size):
            for col in range(self.grid.size):
                self.grid.set(row, col, Cell.EMPTY)
