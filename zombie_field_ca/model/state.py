"""State snapshot dataclasses for the zombie grid simulation."""

from dataclasses import dataclass
from typing import List, Dict
import numpy as np

from .cell import Cell


@dataclass(frozen=True)
class AgentSnapshot:
    """Immutable snapshot of one agent's cell at a given turn."""
    row: int
    col: int
    kind: str  # "human", "zombie"
    sheltered: bool = False


@dataclass
class SimulationState:
    """Complete snapshot of simulation state after a given turn."""
    turn: int
    agents: List[AgentSnapshot]
    cells: np.ndarray        # Copy of the cell-code matrix
    sheltered: np.ndarray    # Copy of the shelter mask
    metrics: Dict[str, float]

    @property
    def size(self) -> int:
        return self.cells.shape[0]

    def count(self, cell: Cell) -> int:
        return int(np.count_nonzero(self.cells == Cell(cell).value))

    def to_csv_rows(self) -> List[Dict]:
        """Convert to CSV-compatible format."""
        return [
            {
                "turn": self.turn,
                "row": a.row,
                "col": a.col,
                "cell": a.kind,
                "sheltered": int(a.sheltered),
            }
            for a in self.agents
        ]
