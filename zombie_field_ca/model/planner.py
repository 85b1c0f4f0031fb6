"""Greedy move selection for humans and zombies."""

import logging
from typing import FrozenSet, List, Optional

from .cell import Cell, MoveIntent, Position
from .distance_field import DistanceField
from .grid import Grid

logger = logging.getLogger(__name__)

HUMAN_DESTINATIONS: FrozenSet[Cell] = frozenset({Cell.EMPTY, Cell.SAFE})
# Zombies may step onto a human: that is the catch.
ZOMBIE_DESTINATIONS: FrozenSet[Cell] = frozenset({Cell.EMPTY, Cell.SAFE, Cell.HUMAN})


def choose_move(grid: Grid, field: DistanceField, position: Position,
                destinations: FrozenSet[Cell]) -> Optional[Position]:
    """
    Pick the neighbour that gets strictly closer to the field's sources.

    Neighbours are scanned up, down, left, right; the smallest distance
    wins and the first one scanned wins a tie. Returns None when no valid
    neighbour is strictly closer than the current cell, which includes
    every case where the current cell is unreachable.
    """
    current = field.distance(position)
    best_pos = None
    best_dist = current

    for neighbor in grid.neighbors(*position):
        if grid.get(*neighbor) not in destinations:
            continue
        dist = field.distance(neighbor)
        if dist < best_dist:
            best_dist = dist
            best_pos = neighbor

    return best_pos


def plan_human_moves(grid: Grid, field: DistanceField) -> List[MoveIntent]:
    """
    Plan one move per human toward the nearest safe zone.

    ``field`` must be the distance-to-safe field. Sheltered humans stay put;
    occupied cells and barricades are never chosen.
    """
    intents = []
    for position in grid.positions_of(Cell.HUMAN):
        if grid.is_sheltered(*position):
            continue
        target = choose_move(grid, field, position, HUMAN_DESTINATIONS)
        if target is not None:
            intents.append(MoveIntent(position, target))
    logger.debug("Planned %d human moves", len(intents))
    return intents


def plan_zombie_moves(grid: Grid, field: DistanceField) -> List[MoveIntent]:
    """Plan one move per zombie toward the nearest human (distance-to-human field)."""
    intents = []
    for position in grid.positions_of(Cell.ZOMBIE):
        target = choose_move(grid, field, position, ZOMBIE_DESTINATIONS)
        if target is not None:
            intents.append(MoveIntent(position, target))
    logger.debug("Planned %d zombie moves", len(intents))
    return intents


class MovementPlanner:
    """Dispatches to the per-class movement policy."""

    def plan(self, grid: Grid, field: DistanceField, mover: Cell) -> List[MoveIntent]:
        if mover == Cell.HUMAN:
            return plan_human_moves(grid, field)
        elif mover == Cell.ZOMBIE:
            return plan_zombie_moves(grid, field)
        raise ValueError(f"Cell type {Cell(mover).name} does not move")
