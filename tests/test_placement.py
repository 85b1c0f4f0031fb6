from __future__ import annotations

import numpy as np
import pytest

from zombie_field_ca.model.cell import Cell
from zombie_field_ca.model.grid import Grid
from zombie_field_ca.model.placement import PlacementController, PlacementError
from zombie_field_ca.model.presets import (
    PRESETS,
    PresetParams,
    build_preset,
    random_scenario,
)


def test_placing_same_type_twice_toggles_it_off() -> None:
    controller = PlacementController(Grid(4))
    assert controller.place(1, 1, Cell.HUMAN) == Cell.HUMAN
    assert controller.place(1, 1, Cell.HUMAN) == Cell.EMPTY
    assert controller.grid.get(1, 1) == Cell.EMPTY


def test_placing_other_type_replaces_cell() -> None:
    controller = PlacementController(Grid(4))
    controller.place(0, 0, Cell.HUMAN)
    controller.place(0, 0, Cell.ZOMBIE)
    assert controller.grid.get(0, 0) == Cell.ZOMBIE
    assert controller.grid.count(Cell.HUMAN) == 0


def test_limit_applies_per_type() -> None:
    controller = PlacementController(Grid(6), max_placement=2)
    controller.place(0, 0, Cell.SAFE)
    controller.place(0, 1, Cell.SAFE)
    assert controller.remaining(Cell.SAFE) == 0
    with pytest.raises(PlacementError, match="Max 2"):
        controller.place(0, 2, Cell.SAFE)
    controller.place(0, 2, Cell.HUMAN)

    # Erasing frees a slot again.
    controller.erase(0, 0)
    controller.place(0, 3, Cell.SAFE)
    assert controller.grid.count(Cell.SAFE) == 2


def test_replacing_a_limited_cell_frees_its_slot() -> None:
    controller = PlacementController(Grid(3), max_placement=1)
    controller.place(0, 0, Cell.HUMAN)
    controller.place(0, 0, Cell.BARRICADE)
    controller.place(1, 1, Cell.HUMAN)
    assert controller.grid.get(1, 1) == Cell.HUMAN


def test_barricades_are_unlimited() -> None:
    controller = PlacementController(Grid(4), max_placement=1)
    for col in range(4):
        controller.place(2, col, Cell.BARRICADE)
    assert controller.grid.count(Cell.BARRICADE) == 4
    with pytest.raises(ValueError):
        controller.remaining(Cell.BARRICADE)


def test_locked_controller_refuses_placement() -> None:
    controller = PlacementController(Grid(3))
    controller.locked = True
    with pytest.raises(PlacementError):
        controller.place(0, 0, Cell.HUMAN)
    with pytest.raises(PlacementError):
        controller.clear()


def test_clear_empties_grid() -> None:
    controller = PlacementController(Grid.from_rows(["HZ", "S#"]))
    controller.clear()
    assert controller.grid == Grid(2)


def test_out_of_bounds_placement_raises() -> None:
    with pytest.raises(IndexError):
        PlacementController(Grid(3)).place(3, 3, Cell.HUMAN)


def test_random_scenario_places_exact_counts() -> None:
    grid = random_scenario(12, PresetParams(3, 4, 2, 0.1),
                           np.random.default_rng(0))
    assert grid.count(Cell.HUMAN) == 3
    assert grid.count(Cell.ZOMBIE) == 4
    assert grid.count(Cell.SAFE) == 2


def test_random_scenario_caps_counts_at_limit() -> None:
    grid = random_scenario(10, PresetParams(9, 9, 9, 0.0),
                           np.random.default_rng(1), max_placement=5)
    assert grid.count(Cell.HUMAN) == 5
    assert grid.count(Cell.ZOMBIE) == 5
    assert grid.count(Cell.SAFE) == 5
    assert grid.count(Cell.BARRICADE) == 0


def test_full_barricade_density_fills_remaining_cells() -> None:
    grid = random_scenario(6, PresetParams(1, 1, 1, 1.0),
                           np.random.default_rng(2))
    assert grid.count(Cell.BARRICADE) == 33
    assert grid.count(Cell.EMPTY) == 0


def test_same_seed_gives_same_scenario() -> None:
    a = build_preset('random', 20, np.random.default_rng(42))
    b = build_preset('random', 20, np.random.default_rng(42))
    assert a == b


def test_named_presets() -> None:
    assert set(PRESETS) == {'random', 'hard'}
    grid = build_preset('hard', 15, np.random.default_rng(3))
    assert grid.count(Cell.HUMAN) == 1
    assert grid.count(Cell.ZOMBIE) == 5
    assert grid.count(Cell.SAFE) == 1


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown preset"):
        build_preset('nightmare', 10)


def test_preset_too_large_for_grid_is_rejected() -> None:
    with pytest.raises(ValueError):
        random_scenario(2, PresetParams(3, 3, 1, 0.0))


def test_invalid_density_is_rejected() -> None:
    with pytest.raises(ValueError):
        random_scenario(5, PresetParams(1, 1, 1, 1.5))
