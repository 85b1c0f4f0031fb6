"""Model package for the zombie grid simulation."""

from .cell import Cell, MoveIntent, Position
from .grid import Grid
from .distance_field import DistanceField, UNREACHABLE, compute_distance_field
from .planner import MovementPlanner, plan_human_moves, plan_zombie_moves
from .resolver import ConflictResolver, Resolution, resolve_moves
from .placement import PlacementController, PlacementError
from .state import AgentSnapshot, SimulationState
from .engine import (SimulationEngine, SimulationError, TurnPhase, TurnResult,
                     advance_turn)

__all__ = [
    'Cell',
    'MoveIntent',
    'Position',
    'Grid',
    'DistanceField',
    'UNREACHABLE',
    'compute_distance_field',
    'MovementPlanner',
    'plan_human_moves',
    'plan_zombie_moves',
    'ConflictResolver',
    'Resolution',
    'resolve_moves',
    'PlacementController',
    'PlacementError',
    'AgentSnapshot',
    'SimulationState',
    'SimulationEngine',
    'SimulationError',
    'TurnPhase',
    'TurnResult',
    'advance_turn',
]
