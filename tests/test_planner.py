from __future__ import annotations

import pytest

from zombie_field_ca.model.cell import Cell, MoveIntent
from zombie_field_ca.model.distance_field import compute_distance_field
from zombie_field_ca.model.grid import Grid
from zombie_field_ca.model.planner import (
    MovementPlanner,
    plan_human_moves,
    plan_zombie_moves,
)


def _human_plan(rows: list[str]) -> list[MoveIntent]:
    grid = Grid.from_rows(rows)
    field = compute_distance_field(grid, grid.positions_of(Cell.SAFE))
    return plan_human_moves(grid, field)


def _zombie_plan(grid: Grid) -> list[MoveIntent]:
    field = compute_distance_field(grid, grid.positions_of(Cell.HUMAN))
    return plan_zombie_moves(grid, field)


def test_human_steps_toward_safe_zone() -> None:
    intents = _human_plan([
        "H..S",
        "....",
        "....",
        "....",
    ])
    assert intents == [MoveIntent((0, 0), (0, 1))]


def test_human_tie_break_prefers_up() -> None:
    intents = _human_plan([
        "S..",
        ".H.",
        "..S",
    ])
    assert intents == [MoveIntent((1, 1), (0, 1))]


def test_human_tie_break_prefers_down_over_left_and_right() -> None:
    intents = _human_plan([
        "#.#",
        ".H.",
        "S.S",
    ])
    assert intents == [MoveIntent((1, 1), (2, 1))]


def test_human_never_steps_onto_zombie() -> None:
    # The only shorter route runs through the zombie, so the human is stranded.
    intents = _human_plan([
        "HZS",
        "...",
        "...",
    ])
    assert intents == []


def test_human_never_steps_onto_another_human() -> None:
    intents = _human_plan([
        "HHS",
        "...",
        "...",
    ])
    assert intents == [MoveIntent((0, 1), (0, 2))]


def test_human_never_steps_onto_barricade() -> None:
    intents = _human_plan([
        "H#S",
        "...",
        "...",
    ])
    assert intents == [MoveIntent((0, 0), (1, 0))]


def test_sheltered_human_has_no_intent() -> None:
    grid = Grid.from_rows([
        "H..",
        "...",
        "..S",
    ])
    grid.shelter(0, 0)
    field = compute_distance_field(grid, grid.positions_of(Cell.SAFE))
    assert plan_human_moves(grid, field) == []


def test_human_cut_off_from_safe_zone_stays() -> None:
    intents = _human_plan([
        "H#.",
        "##.",
        "..S",
    ])
    assert intents == []


def test_zombie_targets_adjacent_human() -> None:
    grid = Grid.from_rows([
        "ZH.",
        "...",
        "...",
    ])
    assert _zombie_plan(grid) == [MoveIntent((0, 0), (0, 1))]


def test_zombie_may_cross_safe_zone() -> None:
    grid = Grid.from_rows([
        "ZSH",
        "###",
        "...",
    ])
    assert _zombie_plan(grid) == [MoveIntent((0, 0), (0, 1))]


def test_zombie_never_steps_onto_another_zombie() -> None:
    grid = Grid.from_rows([
        "ZZH",
        "...",
        "...",
    ])
    assert _zombie_plan(grid) == [MoveIntent((0, 1), (0, 2))]


def test_enclosed_zombie_stays() -> None:
    grid = Grid.from_rows([
        "#..",
        "Z#.",
        "#.H",
    ])
    assert _zombie_plan(grid) == []


def test_intents_are_in_row_major_order() -> None:
    grid = Grid.from_rows([
        "...Z",
        "Z...",
        "..H.",
        "Z...",
    ])
    sources = [intent.source for intent in _zombie_plan(grid)]
    assert sources == [(0, 3), (1, 0), (3, 0)]


def test_planner_dispatches_by_mover() -> None:
    grid = Grid.from_rows([
        "ZH.",
        "...",
        "..S",
    ])
    safe_field = compute_distance_field(grid, grid.positions_of(Cell.SAFE))
    planner = MovementPlanner()
    assert planner.plan(grid, safe_field, Cell.HUMAN) == plan_human_moves(grid, safe_field)
    with pytest.raises(ValueError):
        planner.plan(grid, safe_field, Cell.SAFE)
