"""Visualization and export for the zombie grid simulation."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from matplotlib.patches import Patch
from pathlib import Path
from typing import List, TYPE_CHECKING
from PIL import Image
import io

from ..model.cell import Cell

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Visualizer:
    """
    Generates visual outputs using matplotlib.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Color scheme
    COLORS = {
        Cell.EMPTY: '#F8FAFC',      # White-ish
        Cell.HUMAN: '#2563EB',      # Blue
        Cell.ZOMBIE: '#EF4444',     # Red
        Cell.SAFE: '#16A34A',       # Green
        Cell.BARRICADE: '#6B7280',  # Gray
    }
    GRID_LINE = '#E6E6E6'
    SHELTER_EDGE = '#16A34A'

    def __init__(self, grid_size: int, show_labels: bool = True):
        self.size = grid_size
        self.show_labels = show_labels
        self.frames: List[Image.Image] = []

        # Lookup table indexed by cell code
        self._palette = np.zeros((len(Cell), 3))
        for cell, color in self.COLORS.items():
            self._palette[cell.value] = to_rgb(color)

    def _create_figure(self, state: "SimulationState") -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        fig_size = max(4.0, min(10.0, self.size * 0.3))
        fig, ax = plt.subplots(figsize=(fig_size, fig_size))

        image = self._palette[state.cells.astype(int)]
        ax.imshow(image, origin='upper', aspect='equal',
                  extent=[-0.5, self.size - 0.5, self.size - 0.5, -0.5])

        # Cell borders
        ticks = np.arange(-0.5, self.size, 1.0)
        ax.set_xticks(ticks, minor=True)
        ax.set_yticks(ticks, minor=True)
        ax.grid(which='minor', color=self.GRID_LINE, linewidth=0.5)
        ax.tick_params(which='both', length=0, labelbottom=False, labelleft=False)

        if self.show_labels and self.size <= 40:
            for row in range(self.size):
                for col in range(self.size):
                    cell = Cell(int(state.cells[row, col]))
                    if cell != Cell.EMPTY:
                        ax.text(col, row, cell.symbol, ha='center', va='center',
                                color='white', fontsize=7, family='monospace')

        # Outline humans that reached a safe zone
        rows, cols = np.nonzero(state.sheltered)
        for row, col in zip(rows, cols):
            ax.add_patch(plt.Rectangle((col - 0.5, row - 0.5), 1, 1, fill=False,
                                       edgecolor=self.SHELTER_EDGE, linewidth=2))

        ax.set_title(f'Turn {state.turn} | Humans: {state.metrics.get("humans", 0)} | '
                     f'Zombies: {state.metrics.get("zombies", 0)} | '
                     f'Caught: {state.metrics.get("caught", 0)}')

        legend_elements = [
            Patch(facecolor=self.COLORS[cell], edgecolor='black',
                  label=cell.name.capitalize())
            for cell in (Cell.HUMAN, Cell.ZOMBIE, Cell.SAFE, Cell.BARRICADE)
        ]
        ax.legend(handles=legend_elements, loc='upper left',
                  bbox_to_anchor=(1.01, 1.0), fontsize=8)

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "SimulationState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "SimulationState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 4) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )

    def clear_frames(self) -> None:
        """Clear buffered frames."""
        self.frames.clear()
