"""Cell states and move intents for the zombie grid simulation."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Tuple

Position = Tuple[int, int]  # (row, col)

# Neighbour order is also the tie-break order: up, down, left, right.
DIRECTIONS: Tuple[Position, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Cell(IntEnum):
    """Occupancy state of a single grid cell."""
    EMPTY = 0
    HUMAN = 1
    ZOMBIE = 2
    SAFE = 3
    BARRICADE = 4

    @property
    def symbol(self) -> str:
        return CELL_SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Cell":
        try:
            return SYMBOL_CELLS[symbol]
        except KeyError:
            raise ValueError(f"Unknown cell symbol: {symbol!r}") from None


CELL_SYMBOLS: Dict[Cell, str] = {
    Cell.EMPTY: '.',
    Cell.HUMAN: 'H',
    Cell.ZOMBIE: 'Z',
    Cell.SAFE: 'S',
    Cell.BARRICADE: '#',
}

SYMBOL_CELLS: Dict[str, Cell] = {s: c for c, s in CELL_SYMBOLS.items()}


@dataclass(frozen=True)
class MoveIntent:
    """A proposed, not yet applied relocation of one agent."""
    source: Position
    target: Position
