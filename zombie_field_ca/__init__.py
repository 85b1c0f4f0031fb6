"""Zombie grid simulation driven by multi-source BFS distance fields."""

from .model import Cell, Grid, advance_turn, compute_distance_field

__version__ = "0.1.0"

__all__ = ['Cell', 'Grid', 'advance_turn', 'compute_distance_field']
