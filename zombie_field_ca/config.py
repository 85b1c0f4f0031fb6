"""Configuration dataclasses and YAML loader for the zombie grid simulation."""

from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Any, Optional
from pathlib import Path
import yaml

from .model.cell import Cell
from .model.grid import Grid
from .model.placement import DEFAULT_MAX_PLACEMENT


@dataclass
class GridConfig:
    size: int


@dataclass
class BarricadeSpec:
    spec_type: str  # "rectangle" or "points"
    data: Dict[str, Any]

    def positions(self) -> List[Tuple[int, int]]:
        if self.spec_type == "rectangle":
            row, col = self.data['row'], self.data['col']
            return [(r, c)
                    for r in range(row, row + self.data['height'])
                    for c in range(col, col + self.data['width'])]
        return list(self.data['coords'])


@dataclass
class LayoutConfig:
    ascii_map: List[str] = field(default_factory=list)
    humans: List[Tuple[int, int]] = field(default_factory=list)
    zombies: List[Tuple[int, int]] = field(default_factory=list)
    safe_zones: List[Tuple[int, int]] = field(default_factory=list)
    barricades: List[BarricadeSpec] = field(default_factory=list)

    def build_grid(self, size: int) -> Grid:
        """
        Lay the scenario out on a fresh grid.

        An ASCII map, when present, is drawn first; barricades, safe zones,
        zombies and humans are then placed on top in that order.
        """
        if self.ascii_map:
            grid = Grid.from_rows(self.ascii_map)
            if grid.size != size:
                raise ValueError(
                    f"ASCII map is {grid.size}x{grid.size} but grid.size is {size}")
        else:
            grid = Grid(size)

        placements = [(pos, Cell.BARRICADE)
                      for spec in self.barricades for pos in spec.positions()]
        placements += [(pos, Cell.SAFE) for pos in self.safe_zones]
        placements += [(pos, Cell.ZOMBIE) for pos in self.zombies]
        placements += [(pos, Cell.HUMAN) for pos in self.humans]

        for (row, col), cell in placements:
            if not grid.in_bounds(row, col):
                raise ValueError(
                    f"{cell.name.lower()} at ({row}, {col}) is outside the "
                    f"{size}x{size} grid")
            grid.set(row, col, cell)
        return grid


@dataclass
class PresetConfig:
    name: Optional[str] = None  # "random", "hard", or None for explicit counts
    humans: int = 3
    zombies: int = 3
    safes: int = 1
    barricade_density: float = 0.06


@dataclass
class SimulationConfig:
    grid: GridConfig
    max_turns: int
    layout: LayoutConfig
    max_placement: int = DEFAULT_MAX_PLACEMENT
    preset: Optional[PresetConfig] = None

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))


def _parse_positions(raw: List) -> List[Tuple[int, int]]:
    """Parse [[row, col], ...] lists from raw YAML data."""
    positions = []
    for p in raw or []:
        if len(p) != 2:
            raise ValueError(f"Position must be [row, col], got {p!r}")
        positions.append((int(p[0]), int(p[1])))
    return positions


def _parse_barricades(barricades_raw: List[Dict]) -> List[BarricadeSpec]:
    """Parse barricade specifications from raw YAML data."""
    barricades = []
    for b in barricades_raw or []:
        spec_type = b.get('type', 'rectangle')
        if spec_type == 'rectangle':
            data = {
                'row': b['row'],
                'col': b['col'],
                'width': b['width'],
                'height': b['height']
            }
        elif spec_type == 'points':
            data = {'coords': _parse_positions(b['coords'])}
        else:
            raise ValueError(f"Unknown barricade type: {spec_type}")
        barricades.append(BarricadeSpec(spec_type=spec_type, data=data))
    return barricades


def _parse_layout(layout_raw: Dict) -> LayoutConfig:
    ascii_map = layout_raw.get('map') or []
    if isinstance(ascii_map, str):
        ascii_map = ascii_map.split()
    return LayoutConfig(
        ascii_map=list(ascii_map),
        humans=_parse_positions(layout_raw.get('humans')),
        zombies=_parse_positions(layout_raw.get('zombies')),
        safe_zones=_parse_positions(layout_raw.get('safe_zones')),
        barricades=_parse_barricades(layout_raw.get('barricades'))
    )


def _parse_preset(preset_raw) -> Optional[PresetConfig]:
    """Parse the optional preset section (a name or explicit counts)."""
    if preset_raw is None:
        return None
    if isinstance(preset_raw, str):
        return PresetConfig(name=preset_raw)
    return PresetConfig(
        name=preset_raw.get('name'),
        humans=preset_raw.get('humans', 3),
        zombies=preset_raw.get('zombies', 3),
        safes=preset_raw.get('safes', 1),
        barricade_density=preset_raw.get('barricade_density', 0.06)
    )


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Configuration must be a mapping, got {type(raw).__name__}")

    # Sections left empty in YAML load as None
    layout = _parse_layout(raw.get('layout') or {})

    # Grid size defaults to the ASCII map's size when only a map is given
    grid_raw = raw.get('grid') or {}
    if 'size' in grid_raw:
        size = grid_raw['size']
    elif layout.ascii_map:
        size = len(layout.ascii_map)
    else:
        raise ValueError("grid.size is required without a layout map")
    if size < 1:
        raise ValueError(f"grid.size must be >= 1, got {size}")
    grid = GridConfig(size=size)

    sim_raw = raw.get('simulation') or {}
    export_raw = raw.get('export') or {}

    return SimulationConfig(
        grid=grid,
        max_turns=sim_raw.get('max_turns', 200),
        layout=layout,
        max_placement=sim_raw.get('max_placement', DEFAULT_MAX_PLACEMENT),
        preset=_parse_preset(raw.get('preset')),
        csv_enabled=export_raw.get('csv', True),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False),
        seed=sim_raw.get('seed')
    )
