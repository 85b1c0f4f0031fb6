"""Conflict resolution for simultaneous moves."""

import logging
from dataclasses import dataclass, field
from typing import List, Set

from .cell import Cell, MoveIntent, Position
from .grid import Grid

logger = logging.getLogger(__name__)


@dataclass
class Resolution:
    """Outcome of applying one sub-step's move intents."""
    grid: Grid
    applied: List[MoveIntent] = field(default_factory=list)
    dropped: List[MoveIntent] = field(default_factory=list)
    caught: List[Position] = field(default_factory=list)
    sheltered: List[Position] = field(default_factory=list)


def resolve_moves(grid: Grid, intents: List[MoveIntent], mover: Cell) -> Resolution:
    """
    Apply move intents first-come-first-served.

    Intents are processed in the order given (row-major source order from
    the planner). The first intent claiming a target wins; later intents
    for the same target are dropped and those agents stay put. Moves are
    written to a working copy, so ``grid`` keeps the start-of-substep board
    the intents were planned against.
    """
    mover = Cell(mover)
    if mover not in (Cell.HUMAN, Cell.ZOMBIE):
        raise ValueError(f"Cell type {mover.name} does not move")

    working = grid.copy()
    result = Resolution(grid=working)
    claimed: Set[Position] = set()

    for intent in intents:
        if intent.target in claimed:
            result.dropped.append(intent)
            continue
        claimed.add(intent.target)

        target_cell = grid.get(*intent.target)
        working.set(*intent.source, Cell.EMPTY)
        working.set(*intent.target, mover)

        if mover == Cell.HUMAN and target_cell == Cell.SAFE:
            working.shelter(*intent.target)
            result.sheltered.append(intent.target)
        elif mover == Cell.ZOMBIE and target_cell == Cell.HUMAN:
            result.caught.append(intent.target)
            logger.info("Zombie from %s caught human at %s",
                        intent.source, intent.target)

        result.applied.append(intent)

    if result.dropped:
        logger.debug("Dropped %d conflicting %s moves",
                     len(result.dropped), mover.name.lower())
    return result


class ConflictResolver:
    """Claims targets for at most one mover per sub-step."""

    def apply_human_moves(self, grid: Grid, intents: List[MoveIntent]) -> Resolution:
        return resolve_moves(grid, intents, Cell.HUMAN)

    def apply_zombie_moves(self, grid: Grid, intents: List[MoveIntent]) -> Resolution:
        return resolve_moves(grid, intents, Cell.ZOMBIE)
