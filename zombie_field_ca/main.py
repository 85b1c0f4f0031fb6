#!/usr/bin/env python3
"""
Zombie Grid Simulation

Humans head for the nearest safe zone while zombies chase the nearest
human, both guided by multi-source BFS distance fields.

Usage:
    zombie-field-ca --config configs/corridor.yaml [options]

Examples:
    zombie-field-ca --config configs/corridor.yaml
    zombie-field-ca --config configs/open_field.yaml --gif --out-dir results/
    zombie-field-ca --config configs/open_field.yaml --preset hard --seed 42
    zombie-field-ca --config configs/corridor.yaml --no-csv --no-snapshot --quiet
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from .config import PresetConfig, load_config
from .model.engine import SimulationEngine, SimulationError
from .model.presets import PRESETS
from .export.csv_writer import CSVWriter
from .export.visualizer import Visualizer
from .export.reporter import Reporter


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Zombie Grid Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    zombie-field-ca --config configs/corridor.yaml
    zombie-field-ca --config configs/open_field.yaml --gif --out-dir results/
    zombie-field-ca --config configs/open_field.yaml --preset hard --seed 42
    zombie-field-ca --config configs/corridor.yaml --no-csv --no-snapshot --quiet
        """
    )

    # Required arguments
    parser.add_argument('--config', type=Path, required=True,
                        help='Path to YAML scenario file')

    # Optional overrides
    parser.add_argument('--turns', type=int, default=None,
                        help='Override max simulation turns')
    parser.add_argument('--preset', choices=sorted(PRESETS), default=None,
                        help='Replace the layout with a random preset')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV export')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')
    parser.add_argument('--verbose', action='store_true', default=False,
                        help='Log every phase of every turn')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for presets')

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(levelname)s %(name)s: %(message)s')

    # Load configuration
    try:
        config = load_config(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except (ValueError, KeyError, TypeError, yaml.YAMLError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.turns is not None:
        config.max_turns = args.turns
    if args.preset is not None:
        config.preset = PresetConfig(name=args.preset)
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir

    try:
        engine = SimulationEngine.from_config(config)
        engine.start()
    except (ValueError, SimulationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not config.quiet:
        print("Initializing simulation...")
        print(f"  Grid: {config.grid.size}x{config.grid.size}")
        print(f"  Max turns: {config.max_turns}")
        print()
        print("\n".join(f"  {row}" for row in engine.grid.to_rows()))

    # Initialize exporters
    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(config.out_dir / 'simulation_log.csv')
        csv_writer.open()

    visualizer = Visualizer(config.grid.size)
    reporter = Reporter(str(args.config), config.seed)

    initial_state = engine.snapshot()
    reporter.record_initial(initial_state)
    if config.gif_enabled:
        visualizer.buffer_frame(initial_state)

    if not config.quiet:
        print("\nRunning simulation...")

    final_state = initial_state
    try:
        while not engine.is_finished():
            state = engine.step()
            final_state = state

            if csv_writer:
                csv_writer.append(state)

            if config.gif_enabled:
                visualizer.buffer_frame(state)

            reporter.update(state)

            if not config.quiet and state.metrics.get('caught_this_turn', 0):
                print(f"  Turn {state.turn}: {state.metrics['caught_this_turn']} caught, "
                      f"{state.metrics['humans']} humans left")

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")
    finally:
        engine.pause()

    # Cleanup and final exports
    if csv_writer:
        csv_writer.close()
        if not config.quiet:
            print(f"\nCSV saved: {config.out_dir / 'simulation_log.csv'}")

    if config.snapshot_enabled:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        gif_path = config.out_dir / 'simulation.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path)
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    # Print summary report
    if not config.quiet:
        report = reporter.generate_summary(
            final_state,
            engine.outcome(),
            config.out_dir,
            config.csv_enabled,
            config.snapshot_enabled,
            config.gif_enabled
        )
        print(report)

    return 0


if __name__ == '__main__':
    sys.exit(main())
