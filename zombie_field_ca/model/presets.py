"""Random scenario presets."""

from dataclasses import dataclass
from typing import Dict, Optional
import numpy as np

from .cell import Cell
from .grid import Grid
from .placement import DEFAULT_MAX_PLACEMENT


@dataclass(frozen=True)
class PresetParams:
    humans: int
    zombies: int
    safes: int
    barricade_density: float


PRESETS: Dict[str, PresetParams] = {
    'random': PresetParams(humans=3, zombies=3, safes=1, barricade_density=0.06),
    'hard': PresetParams(humans=1, zombies=5, safes=1, barricade_density=0.02),
}


def random_scenario(size: int,
                    params: PresetParams,
                    rng: Optional[np.random.Generator] = None,
                    max_placement: int = DEFAULT_MAX_PLACEMENT) -> Grid:
    """
    Scatter agents, safe zones and barricades on a fresh grid.

    Agent and safe zone counts are capped at ``max_placement``. Barricades
    are drawn per cell with probability ``barricade_density`` and only land
    on cells left empty, so the capped counts are exact.
    """
    if not 0.0 <= params.barricade_density <= 1.0:
        raise ValueError(
            f"barricade_density must be in [0, 1], got {params.barricade_density}")
    if rng is None:
        rng = np.random.default_rng()

    grid = Grid(size)
    wanted = [
        (Cell.HUMAN, min(params.humans, max_placement)),
        (Cell.ZOMBIE, min(params.zombies, max_placement)),
        (Cell.SAFE, min(params.safes, max_placement)),
    ]
    total = sum(count for _, count in wanted)
    if total > size * size:
        raise ValueError(f"Cannot place {total} cells on a {size}x{size} grid")

    for cell, count in wanted:
        placed = 0
        while placed < count:
            row = int(rng.integers(0, size))
            col = int(rng.integers(0, size))
            if grid.get(row, col) == Cell.EMPTY:
                grid.set(row, col, cell)
                placed += 1

    mask = rng.random((size, size)) < params.barricade_density
    cells = grid.cells
    mask &= cells == Cell.EMPTY.value
    cells[mask] = Cell.BARRICADE.value
    return Grid.from_array(cells)


def build_preset(name: str, size: int,
                 rng: Optional[np.random.Generator] = None,
                 max_placement: int = DEFAULT_MAX_PLACEMENT) -> Grid:
    """Build one of the named presets ('random', 'hard')."""
    try:
        params = PRESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown preset: {name} (choose from {', '.join(sorted(PRESETS))})"
        ) from None
    return random_scenario(size, params, rng, max_placement)
