"""Multi-source BFS distance fields for the zombie grid simulation."""

import numpy as np
from collections import deque
from typing import Iterable

from .cell import Cell, Position, DIRECTIONS
from .grid import Grid

# Distances are bounded by N*N, so the int32 maximum is never a real value.
UNREACHABLE = int(np.iinfo(np.int32).max)


class DistanceField:
    """
    Shortest obstacle-aware distance from every cell to the nearest source.
    Lower distance values = closer to the sources.
    Cells with no path to any source hold UNREACHABLE.
    """

    def __init__(self, size: int):
        self.size = size
        self.field = np.full((size, size), UNREACHABLE, dtype=np.int32)

    def distance(self, position: Position) -> int:
        """Return raw distance value at position."""
        row, col = position
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(
                f"Position ({row}, {col}) outside {self.size}x{self.size} field")
        return int(self.field[row, col])

    def is_reachable(self, position: Position) -> bool:
        return self.distance(position) != UNREACHABLE

    @property
    def values(self) -> np.ndarray:
        return self.field.copy()

    def __getitem__(self, position: Position) -> int:
        return self.distance(position)


def compute_distance_field(grid: Grid, sources: Iterable[Position]) -> DistanceField:
    """
    Compute distance gradient using multi-source BFS from all sources.

    Barricades are impassable; every other cell type is traversable whatever
    occupies it. Sources are seeded at distance 0 without a barricade check,
    so callers must only pass safe zone or human positions.
    """
    result = DistanceField(grid.size)
    field = result.field
    cells = grid.cells
    barricade = Cell.BARRICADE.value
    n = grid.size

    queue = deque()
    for row, col in sources:
        if not grid.in_bounds(row, col):
            raise IndexError(f"Source ({row}, {col}) outside {n}x{n} grid")
        if field[row, col] != 0:
            field[row, col] = 0
            queue.append((row, col))

    # BFS expansion (4-connected)
    while queue:
        row, col = queue.popleft()
        dist = field[row, col] + 1
        for dr, dc in DIRECTIONS:
            nr, nc = row + dr, col + dc
            if (0 <= nr < n and 0 <= nc < n
                    and field[nr, nc] == UNREACHABLE
                    and cells[nr, nc] != barricade):
                field[nr, nc] = dist
                queue.append((nr, nc))

    return result
