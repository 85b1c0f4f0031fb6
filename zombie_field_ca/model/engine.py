"""Simulation engine for the zombie grid simulation."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, TYPE_CHECKING

import numpy as np

from .cell import Cell, Position
from .grid import Grid
from .distance_field import compute_distance_field
from .planner import plan_human_moves, plan_zombie_moves
from .resolver import Resolution, resolve_moves
from .placement import DEFAULT_MAX_PLACEMENT, PlacementController
from .presets import PresetParams, build_preset, random_scenario
from .state import AgentSnapshot, SimulationState

if TYPE_CHECKING:
    from ..config import SimulationConfig

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    """Phases one turn passes through, in order."""
    IDLE = "idle"
    COMPUTING_SAFE_FIELD = "computing_safe_field"
    PLANNING_HUMANS = "planning_humans"
    APPLYING_HUMAN_MOVES = "applying_human_moves"
    COMPUTING_HUMAN_FIELD = "computing_human_field"
    PLANNING_ZOMBIES = "planning_zombies"
    APPLYING_ZOMBIE_MOVES = "applying_zombie_moves"


@dataclass
class TurnResult:
    """Next grid plus a record of what happened during the turn."""
    grid: Grid
    turn: int
    human_phase_ran: bool
    zombie_phase_ran: bool
    phases: List[TurnPhase] = field(default_factory=list)
    human_resolution: Optional[Resolution] = None
    zombie_resolution: Optional[Resolution] = None

    @property
    def caught(self) -> List[Position]:
        if self.zombie_resolution is None:
            return []
        return list(self.zombie_resolution.caught)

    @property
    def moves(self) -> int:
        return sum(len(r.applied) for r in (self.human_resolution, self.zombie_resolution)
                   if r is not None)

    @property
    def dropped(self) -> int:
        return sum(len(r.dropped) for r in (self.human_resolution, self.zombie_resolution)
                   if r is not None)


def advance_turn(grid: Grid, turn: int = 0) -> TurnResult:
    """
    Run one full turn: human phase, then zombie phase.

    1. Distance field from safe zones, plan and apply human moves
       (skipped without safe zones or humans)
    2. Distance field from the humans' new positions, plan and apply
       zombie moves (skipped without humans or zombies)

    ``grid`` is never mutated; the returned TurnResult holds a fresh grid
    and ``turn + 1``.
    """
    phases = [TurnPhase.IDLE]
    board = grid.copy()

    human_resolution = None
    safes = board.positions_of(Cell.SAFE)
    humans = board.positions_of(Cell.HUMAN)
    if safes and humans:
        phases.append(TurnPhase.COMPUTING_SAFE_FIELD)
        safe_field = compute_distance_field(board, safes)
        phases.append(TurnPhase.PLANNING_HUMANS)
        intents = plan_human_moves(board, safe_field)
        phases.append(TurnPhase.APPLYING_HUMAN_MOVES)
        human_resolution = resolve_moves(board, intents, Cell.HUMAN)
        board = human_resolution.grid
    else:
        logger.debug("Turn %d: human phase skipped (%d safe zones, %d humans)",
                     turn + 1, len(safes), len(humans))

    zombie_resolution = None
    humans = board.positions_of(Cell.HUMAN)
    zombies = board.positions_of(Cell.ZOMBIE)
    if humans and zombies:
        phases.append(TurnPhase.COMPUTING_HUMAN_FIELD)
        human_field = compute_distance_field(board, humans)
        phases.append(TurnPhase.PLANNING_ZOMBIES)
        intents = plan_zombie_moves(board, human_field)
        phases.append(TurnPhase.APPLYING_ZOMBIE_MOVES)
        zombie_resolution = resolve_moves(board, intents, Cell.ZOMBIE)
        board = zombie_resolution.grid
    else:
        logger.debug("Turn %d: zombie phase skipped (%d humans, %d zombies)",
                     turn + 1, len(humans), len(zombies))

    phases.append(TurnPhase.IDLE)
    return TurnResult(
        grid=board,
        turn=turn + 1,
        human_phase_ran=human_resolution is not None,
        zombie_phase_ran=zombie_resolution is not None,
        phases=phases,
        human_resolution=human_resolution,
        zombie_resolution=zombie_resolution,
    )


class SimulationError(RuntimeError):
    """Raised when a session cannot start."""


class SimulationEngine:
    """
    Session state around the pure turn function.

    Holds the live grid, the turn counter and the run flag. Placement is
    only allowed while paused; each step hands the grid to advance_turn
    and keeps the grid it returns.
    """

    def __init__(self, grid: Grid, max_turns: int = 200,
                 max_placement: int = DEFAULT_MAX_PLACEMENT):
        self.grid = grid.copy()
        self.max_turns = max_turns
        self.max_placement = max_placement
        self.running = False
        self._placement = PlacementController(self.grid, max_placement,
                                              is_locked=lambda: self.running)
        self._reset_counters()

    def _reset_counters(self) -> None:
        self.current_turn = 0
        self.caught_count = 0
        self.total_moves = 0
        self.total_dropped = 0
        self.last_result: Optional[TurnResult] = None
        # Grid the last step left unchanged; any later edit ends the stall
        self._settled_grid: Optional[Grid] = None

    @classmethod
    def from_config(cls, config: "SimulationConfig") -> "SimulationEngine":
        """Build the starting grid from a loaded scenario configuration."""
        size = config.grid.size
        if config.preset is not None:
            rng = np.random.default_rng(config.seed)
            preset = config.preset
            if preset.name is not None:
                grid = build_preset(preset.name, size, rng, config.max_placement)
            else:
                params = PresetParams(preset.humans, preset.zombies,
                                      preset.safes, preset.barricade_density)
                grid = random_scenario(size, params, rng, config.max_placement)
        else:
            grid = config.layout.build_grid(size)

        for cell in (Cell.HUMAN, Cell.ZOMBIE, Cell.SAFE):
            if grid.count(cell) > config.max_placement:
                raise ValueError(
                    f"Scenario has {grid.count(cell)} {cell.name.lower()} cells, "
                    f"max {config.max_placement} allowed")

        return cls(grid, config.max_turns, config.max_placement)

    @property
    def placement(self) -> PlacementController:
        """Placement commands against the live grid, locked while running."""
        return self._placement

    def start(self) -> None:
        """Begin running; needs at least one human, zombie and safe zone."""
        for cell, label in ((Cell.HUMAN, "human"), (Cell.ZOMBIE, "zombie"),
                            (Cell.SAFE, "safe zone")):
            if self.grid.count(cell) == 0:
                raise SimulationError(f"Place at least one {label}")
        self.running = True
        logger.info("Simulation started on %dx%d grid", self.grid.size, self.grid.size)

    def pause(self) -> None:
        self.running = False

    def reset(self, size: Optional[int] = None) -> None:
        """Stop, empty the grid (optionally resizing it) and zero the counters."""
        self.running = False
        self.grid = Grid(size if size is not None else self.grid.size)
        self._placement.grid = self.grid
        self._reset_counters()

    def step(self) -> SimulationState:
        """
        Execute one turn.

        1. Advance the grid through the human and zombie phases
        2. Update session totals
        3. Return current state snapshot
        """
        previous = self.grid
        result = advance_turn(previous, self.current_turn)

        self.grid = result.grid
        self._placement.grid = self.grid
        self.current_turn = result.turn
        self.last_result = result
        self.caught_count += len(result.caught)
        self.total_moves += result.moves
        self.total_dropped += result.dropped
        # Turns are deterministic: an unchanged grid stays unchanged.
        self._settled_grid = result.grid.copy() if result.grid == previous else None

        logger.debug("Turn %d: %d moves, %d dropped, %d caught",
                     result.turn, result.moves, result.dropped, len(result.caught))
        return self._create_state_snapshot()

    @property
    def _stalled(self) -> bool:
        """True while the live grid still equals the grid the last step left unchanged."""
        return self._settled_grid is not None and self._settled_grid == self.grid

    def is_finished(self) -> bool:
        """Check if simulation should terminate."""
        return (self.current_turn >= self.max_turns
                or self.grid.count(Cell.HUMAN) == 0
                or self._stalled)

    def outcome(self) -> str:
        humans = self.grid.count(Cell.HUMAN)
        if humans == 0:
            return "all humans caught" if self.caught_count else "no humans"
        if humans == self.grid.sheltered_count():
            return "all humans sheltered"
        if self._stalled:
            return "stalled"
        if self.current_turn >= self.max_turns:
            return "turn limit reached"
        return "in progress"

    def _create_state_snapshot(self) -> SimulationState:
        """Create immutable snapshot of current simulation state."""
        sheltered = self.grid.sheltered
        agents = [
            AgentSnapshot(row=r, col=c, kind=cell.name.lower(),
                          sheltered=bool(sheltered[r, c]))
            for cell in (Cell.HUMAN, Cell.ZOMBIE)
            for r, c in self.grid.positions_of(cell)
        ]
        agents.sort(key=lambda a: (a.row, a.col))

        result = self.last_result
        metrics = {
            'humans': self.grid.count(Cell.HUMAN),
            'zombies': self.grid.count(Cell.ZOMBIE),
            'safe_zones': self.grid.count(Cell.SAFE),
            'sheltered': self.grid.sheltered_count(),
            'caught': self.caught_count,
            'caught_this_turn': len(result.caught) if result else 0,
            'moves_this_turn': result.moves if result else 0,
            'dropped_this_turn': result.dropped if result else 0,
        }

        return SimulationState(
            turn=self.current_turn,
            agents=agents,
            cells=self.grid.cells,
            sheltered=sheltered,
            metrics=metrics,
        )

    def snapshot(self) -> SimulationState:
        return self._create_state_snapshot()

    def get_summary(self) -> Dict:
        """Get summary statistics for the simulation."""
        return {
            'total_turns': self.current_turn,
            'humans_remaining': self.grid.count(Cell.HUMAN),
            'humans_sheltered': self.grid.sheltered_count(),
            'humans_caught': self.caught_count,
            'zombies': self.grid.count(Cell.ZOMBIE),
            'total_moves': self.total_moves,
            'dropped_moves': self.total_dropped,
            'outcome': self.outcome(),
        }
