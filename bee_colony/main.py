#!/usr/bin/env python3
"""
Bee Colony Simulation

An Artificial Bee Colony foraging simulator: scouts explore, onlookers wait
at the hive, and foragers recruited by waggle dances drain food sources.

Usage:
    python -m bee_colony.main [--config configs/meadow.yaml] [options]

Examples:
    python -m bee_colony.main
    python -m bee_colony.main --config configs/meadow.yaml --gif --out-dir results/
    python -m bee_colony.main --config configs/meadow.yaml --tick-rate 30
    python -m bee_colony.main --fallback reassign --seed 42 --quiet
"""

import argparse
import sys
import time
from pathlib import Path

from bee_colony.config import (ConfigError, ForagerFallback, SimulationConfig,
                               load_config, validate_config)
from bee_colony.model.engine import ColonyEngine
from bee_colony.export.visualizer import Visualizer
from bee_colony.export.reporter import Reporter


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Artificial Bee Colony Foraging Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m bee_colony.main
    python -m bee_colony.main --config configs/meadow.yaml --gif --out-dir results/
    python -m bee_colony.main --config configs/meadow.yaml --tick-rate 30
    python -m bee_colony.main --fallback reassign --seed 42 --quiet
        """
    )

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file (defaults if omitted)')

    # Optional overrides
    parser.add_argument('--steps', type=int, default=None,
                        help='Override max simulation steps')
    parser.add_argument('--tick-rate', type=float, default=None,
                        help='Pace the run at this many ticks per second (1-100)')
    parser.add_argument('--fallback', choices=[f.value for f in ForagerFallback],
                        default=None,
                        help='What a forager does when its source runs dry')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Load configuration
    try:
        config = load_config(args.config) if args.config else SimulationConfig()
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.steps is not None:
        config.max_steps = args.steps
    if args.tick_rate is not None:
        config.tick_rate = args.tick_rate
    if args.fallback is not None:
        config.colony.forager_fallback = ForagerFallback(args.fallback)
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir

    try:
        validate_config(config)
    except ConfigError as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    # Initialize engine
    if not config.quiet:
        print("Initializing simulation...")
        print(f"  World: {config.world.width:g}x{config.world.height:g}")
        print(f"  Bees: {config.bee_count}")
        print(f"  Food sources: {config.food.count + len(config.food.sources)}")
        print(f"  Max steps: {config.max_steps}")

    engine = ColonyEngine(config)

    visualizer = Visualizer(config.world.width, config.world.height)
    reporter = Reporter(str(args.config) if args.config else None, config.seed)

    # The engine owns no clock; pacing is the driver's business
    interval = 1.0 / config.tick_rate if config.tick_rate else 0.0

    # Main simulation loop
    if not config.quiet:
        print("\nRunning simulation...")

    final_state = engine.snapshot()
    reporter.update(final_state)
    try:
        while not engine.is_finished():
            started = time.monotonic()
            state = engine.tick()
            final_state = state

            # Buffer GIF frame (every N steps to reduce memory)
            if config.gif_enabled:
                if state.step % 5 == 0 or engine.is_finished():
                    visualizer.buffer_frame(state)

            reporter.update(state)

            # Progress indicator
            if not config.quiet and state.step % 100 == 0:
                roles = state.role_counts()
                print(f"  Step {state.step}: {state.stats.discovered_count} discovered, "
                      f"{state.stats.total_nectar} nectar left, "
                      f"{roles['forager']} foragers")

            if interval:
                time.sleep(max(0.0, interval - (time.monotonic() - started)))

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")

    if config.snapshot_enabled:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        gif_path = config.out_dir / 'simulation.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path, fps=10)
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    # Print summary report
    if not config.quiet:
        report = reporter.generate_summary(
            final_state,
            config.out_dir,
            config.snapshot_enabled,
            config.gif_enabled
        )
        print(report)

    return 0


if __name__ == '__main__':
    sys.exit(main())
