"""Grid model for the zombie grid simulation."""

import numpy as np
from typing import Dict, Iterable, List

from .cell import Cell, Position, DIRECTIONS

_VALID_CODES = np.array([c.value for c in Cell], dtype=np.int8)


class Grid:
    """
    Square N x N board of cell states.

    Coordinate convention: (row, col) for API and array indexing.

    Besides the cell layer, the grid keeps a boolean ``sheltered`` mask:
    True where a human stepped onto a safe zone. The cell itself reads
    HUMAN; the mask only records that the occupant has reached safety.
    """

    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"Grid size must be >= 1, got {size}")
        self.size = size
        self._cells = np.zeros((size, size), dtype=np.int8)
        self._sheltered = np.zeros((size, size), dtype=bool)

    @classmethod
    def from_array(cls, array, sheltered=None) -> "Grid":
        """Build a grid from a square 2-D array of cell codes."""
        try:
            cells = np.asarray(array, dtype=np.int8)
        except ValueError:
            raise ValueError("Grid rows must all have the same length") from None
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise ValueError(f"Grid must be square, got shape {cells.shape}")
        if not np.isin(cells, _VALID_CODES).all():
            raise ValueError("Grid contains unknown cell codes")

        grid = cls(cells.shape[0])
        grid._cells[:, :] = cells
        if sheltered is not None:
            mask = np.asarray(sheltered, dtype=bool)
            if mask.shape != cells.shape:
                raise ValueError("Shelter mask must match grid shape")
            grid._sheltered[:, :] = mask & (cells == Cell.HUMAN)
        return grid

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "Grid":
        """
        Parse an ASCII map, one string per row.

        Symbols: '.' empty, 'H' human, 'Z' zombie, 'S' safe, '#' barricade.
        """
        rows = [row.strip() for row in rows if row.strip()]
        if not rows:
            raise ValueError("ASCII map is empty")
        if any(len(row) != len(rows) for row in rows):
            raise ValueError(
                f"ASCII map must be square, got {len(rows)} rows of lengths "
                f"{sorted({len(r) for r in rows})}")
        return cls.from_array(
            [[Cell.from_symbol(ch).value for ch in row] for row in rows])

    def to_rows(self) -> List[str]:
        """Render the grid as ASCII rows (inverse of from_rows)."""
        return [''.join(Cell(int(v)).symbol for v in row) for row in self._cells]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise IndexError(
                f"Position ({row}, {col}) outside {self.size}x{self.size} grid")

    def get(self, row: int, col: int) -> Cell:
        """Return the cell state at (row, col)."""
        self._check_bounds(row, col)
        return Cell(int(self._cells[row, col]))

    def set(self, row: int, col: int, cell: Cell) -> None:
        """Overwrite the cell state at (row, col), clearing any shelter mark."""
        self._check_bounds(row, col)
        self._cells[row, col] = Cell(cell).value
        self._sheltered[row, col] = False

    def is_sheltered(self, row: int, col: int) -> bool:
        self._check_bounds(row, col)
        return bool(self._sheltered[row, col])

    def shelter(self, row: int, col: int) -> None:
        """Mark the human at (row, col) as having reached a safe zone."""
        if self.get(row, col) != Cell.HUMAN:
            raise ValueError(f"No human to shelter at ({row}, {col})")
        self._sheltered[row, col] = True

    def neighbors(self, row: int, col: int) -> List[Position]:
        """In-bounds orthogonal neighbours in up, down, left, right order."""
        result = []
        for dr, dc in DIRECTIONS:
            nr, nc = row + dr, col + dc
            if self.in_bounds(nr, nc):
                result.append((nr, nc))
        return result

    def positions_of(self, cell: Cell) -> List[Position]:
        """Positions holding ``cell``, in row-major scan order."""
        rows, cols = np.nonzero(self._cells == Cell(cell).value)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def count(self, cell: Cell) -> int:
        return int(np.count_nonzero(self._cells == Cell(cell).value))

    def counts(self) -> Dict[Cell, int]:
        """Per-type cell counts (placement bookkeeping)."""
        return {cell: self.count(cell) for cell in Cell}

    def sheltered_count(self) -> int:
        return int(np.count_nonzero(self._sheltered))

    @property
    def cells(self) -> np.ndarray:
        """Copy of the raw cell-code matrix."""
        return self._cells.copy()

    @property
    def sheltered(self) -> np.ndarray:
        """Copy of the shelter mask."""
        return self._sheltered.copy()

    def copy(self) -> "Grid":
        """Defensive deep copy; mutating it never affects this grid."""
        clone = Grid(self.size)
        clone._cells[:, :] = self._cells
        clone._sheltered[:, :] = self._sheltered
        return clone

    snapshot = copy

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.size == other.size
                and np.array_equal(self._cells, other._cells)
                and np.array_equal(self._sheltered, other._sheltered))

    __hash__ = None

    def __repr__(self) -> str:
        counts = {c.name.lower(): n for c, n in self.counts().items() if n}
        return f"Grid(size={self.size}, counts={counts})"

    def __str__(self) -> str:
        return '\n'.join(self.to_rows())
