"""Summary report generation for the zombie grid simulation."""

from typing import List, Dict, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Reporter:
    """Generates summary statistics and formatted text report."""

    def __init__(self, config_path: str, seed: Optional[int]):
        self.config_path = config_path
        self.seed = seed
        self.turn_metrics: List[Dict] = []
        self.initial_humans: Optional[int] = None
        self.first_catch_turn: Optional[int] = None
        self.last_catch_turn: Optional[int] = None
        self.conflict_turns = 0

    def record_initial(self, state: "SimulationState") -> None:
        """Remember the head count before the first turn."""
        self.initial_humans = int(state.metrics.get('humans', 0))

    def update(self, state: "SimulationState") -> None:
        """Accumulate metrics per turn."""
        self.turn_metrics.append(state.metrics.copy())
        if self.initial_humans is None:
            self.initial_humans = (int(state.metrics.get('humans', 0))
                                   + int(state.metrics.get('caught', 0)))

        if state.metrics.get('caught_this_turn', 0) > 0:
            if self.first_catch_turn is None:
                self.first_catch_turn = state.turn
            self.last_catch_turn = state.turn

        if state.metrics.get('dropped_this_turn', 0) > 0:
            self.conflict_turns += 1

    def generate_summary(self, final_state: "SimulationState",
                         outcome: str,
                         output_dir: Path,
                         csv_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        metrics = final_state.metrics
        initial = self.initial_humans or 0
        sheltered = int(metrics.get('sheltered', 0))
        caught = int(metrics.get('caught', 0))
        remaining = int(metrics.get('humans', 0))

        survival_pct = (remaining / initial * 100) if initial > 0 else 0

        lines = [
            "",
            "=" * 80,
            "                    ZOMBIE GRID SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            "",
            "SIMULATION METRICS",
            "-" * 40,
            f"Total Turns:           {final_state.turn}",
            f"Outcome:               {outcome}",
            f"Humans Surviving:      {remaining} / {initial} ({survival_pct:.1f}%)",
            f"Humans Sheltered:      {sheltered}",
            f"Humans Caught:         {caught}",
            f"Zombies:               {int(metrics.get('zombies', 0))}",
            f"First Catch:           {self._turn_label(self.first_catch_turn)}",
            f"Last Catch:            {self._turn_label(self.last_catch_turn)}",
            f"Turns With Conflicts:  {self.conflict_turns}",
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        # Output file paths
        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'simulation_log.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)

    @staticmethod
    def _turn_label(turn: Optional[int]) -> str:
        return f"turn {turn}" if turn is not None else "-"
