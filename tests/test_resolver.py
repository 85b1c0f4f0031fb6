from __future__ import annotations

import pytest

from zombie_field_ca.model.cell import Cell, MoveIntent
from zombie_field_ca.model.distance_field import compute_distance_field
from zombie_field_ca.model.grid import Grid
from zombie_field_ca.model.planner import plan_human_moves, plan_zombie_moves
from zombie_field_ca.model.resolver import ConflictResolver, resolve_moves


def test_two_zombies_claiming_one_human_only_first_succeeds() -> None:
    grid = Grid.from_rows([
        ".Z.",
        "ZH.",
        "...",
    ])
    intents = plan_zombie_moves(grid, compute_distance_field(grid, [(1, 1)]))
    assert [i.target for i in intents] == [(1, 1), (1, 1)]

    result = resolve_moves(grid, intents, Cell.ZOMBIE)
    assert result.applied == [MoveIntent((0, 1), (1, 1))]
    assert result.dropped == [MoveIntent((1, 0), (1, 1))]
    assert result.caught == [(1, 1)]
    assert result.grid.to_rows() == [
        "...",
        "ZZ.",
        "...",
    ]


def test_conflicting_humans_first_in_scan_order_wins() -> None:
    grid = Grid.from_rows([
        "H.H",
        "#.#",
        "#S#",
    ])
    intents = plan_human_moves(grid, compute_distance_field(grid, [(2, 1)]))
    result = ConflictResolver().apply_human_moves(grid, intents)
    assert result.applied == [MoveIntent((0, 0), (0, 1))]
    assert len(result.dropped) == 1
    assert result.grid.to_rows() == [
        ".HH",
        "#.#",
        "#S#",
    ]


def test_human_onto_safe_zone_is_sheltered() -> None:
    grid = Grid.from_rows([
        "HS.",
        "...",
        "...",
    ])
    result = resolve_moves(grid, [MoveIntent((0, 0), (0, 1))], Cell.HUMAN)
    assert result.grid.get(0, 1) == Cell.HUMAN
    assert result.grid.is_sheltered(0, 1)
    assert result.sheltered == [(0, 1)]
    assert result.grid.count(Cell.SAFE) == 0


def test_zombie_catching_sheltered_human_clears_shelter() -> None:
    grid = Grid.from_rows([
        "ZH.",
        "...",
        "...",
    ])
    grid.shelter(0, 1)
    result = ConflictResolver().apply_zombie_moves(grid, [MoveIntent((0, 0), (0, 1))])
    assert result.grid.get(0, 1) == Cell.ZOMBIE
    assert result.grid.get(0, 0) == Cell.EMPTY
    assert not result.grid.is_sheltered(0, 1)
    assert result.caught == [(0, 1)]


def test_zombie_onto_empty_cell_catches_nobody() -> None:
    grid = Grid.from_rows([
        "Z..",
        "...",
        "..H",
    ])
    result = resolve_moves(grid, [MoveIntent((0, 0), (1, 0))], Cell.ZOMBIE)
    assert result.caught == []
    assert result.grid.get(1, 0) == Cell.ZOMBIE


def test_input_grid_is_not_mutated() -> None:
    grid = Grid.from_rows([
        "ZH.",
        "...",
        "...",
    ])
    before = grid.copy()
    resolve_moves(grid, [MoveIntent((0, 0), (0, 1))], Cell.ZOMBIE)
    assert grid == before


def test_no_intents_returns_equal_copy() -> None:
    grid = Grid.from_rows(["H.", ".S"])
    result = resolve_moves(grid, [], Cell.HUMAN)
    assert result.grid == grid
    assert result.grid is not grid


def test_static_cells_cannot_be_resolved() -> None:
    with pytest.raises(ValueError):
        resolve_moves(Grid(2), [], Cell.SAFE)
