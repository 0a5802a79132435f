#!/usr/bin/env python3
"""
Guard Patrol Simulation

Walks a guard across a grid of obstacles until it leaves the grid or
loops, then counts the single extra obstacles that would trap it.

Usage:
    python -m patrol_sim.main [LAYOUT] [options]

Examples:
    python -m patrol_sim.main data/day_6/input
    python -m patrol_sim.main data/day_6/input --render --report
    python -m patrol_sim.main --config configs/patrol.yaml --gif --out-dir results/
    python -m patrol_sim.main data/day_6/input --no-prune --workers 4
"""

import argparse
import sys
from pathlib import Path

from .config import load_config
from .layout import MalformedLayoutError, load_layout
from .model.guard import Guard
from .model.simulator import PatrolSimulator
from .model.sweep import ObstacleSweep
from .export.csv_writer import CSVWriter
from .export.visualizer import Visualizer
from .export.reporter import Reporter
from .export.text_render import render_text

PROGRESS_EVERY = 1000
GIF_FRAME_EVERY = 5


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Guard Patrol Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m patrol_sim.main data/day_6/input
    python -m patrol_sim.main data/day_6/input --render --report
    python -m patrol_sim.main --config configs/patrol.yaml --gif --out-dir results/
    python -m patrol_sim.main data/day_6/input --no-prune --workers 4
        """
    )

    parser.add_argument('layout', type=Path, nargs='?', default=None,
                        help='Path to layout file (overrides config)')
    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file')

    # Simulation overrides
    parser.add_argument('--exit-margin', type=int, choices=(0, 1), default=None,
                        help='Low-side cells treated as outside the grid')
    parser.add_argument('--prune', dest='prune', action='store_true', default=None,
                        help='Only sweep cells on the unobstructed path (default)')
    parser.add_argument('--no-prune', dest='prune', action='store_false',
                        help='Sweep every open cell')
    parser.add_argument('--workers', type=int, default=None,
                        help='Worker processes for the obstacle sweep')

    # Export toggles
    parser.add_argument('--csv', action='store_true', default=False,
                        help='Enable CSV export of sweep outcomes')
    parser.add_argument('--snapshot', action='store_true', default=False,
                        help='Enable PNG snapshot of the patrol')
    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation of the patrol')
    parser.add_argument('--render', action='store_true', default=False,
                        help='Print the visited grid to stderr')
    parser.add_argument('--report', action='store_true', default=False,
                        help='Print a summary report to stderr')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress progress output')

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Load configuration
    try:
        config = load_config(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.layout is not None:
        config.layout = args.layout
    if args.exit_margin is not None:
        config.simulation.exit_margin = args.exit_margin
    if args.prune is not None:
        config.sweep.prune_to_path = args.prune
    if args.workers is not None:
        if args.workers < 1:
            print("Error: --workers must be at least 1", file=sys.stderr)
            return 1
        config.sweep.workers = args.workers
    config.export.csv = config.export.csv or args.csv
    config.export.snapshot = config.export.snapshot or args.snapshot
    config.export.gif = config.export.gif or args.gif
    config.export.render = config.export.render or args.render
    config.export.report = config.export.report or args.report
    config.quiet = args.quiet
    config.out_dir = args.out_dir

    def log(message: str) -> None:
        if not config.quiet:
            print(message, file=sys.stderr)

    # Load layout
    try:
        layout = load_layout(config.layout)
    except FileNotFoundError:
        print(f"Error: Layout file not found: {config.layout}", file=sys.stderr)
        return 1
    except MalformedLayoutError as e:
        print(f"Error: Malformed layout: {e}", file=sys.stderr)
        return 1

    margin = config.simulation.exit_margin
    log(f"Initializing simulation...")
    log(f"  Grid: {layout.width}x{layout.height}")
    log(f"  Guard: {layout.start.position} facing "
        f"{layout.start.direction.name.lower()}")

    visualizer = Visualizer(layout.width, layout.height)

    try:
        # Unobstructed patrol
        working = layout.grid.copy()
        simulator = PatrolSimulator(working, Guard.from_state(layout.start), margin)
        if config.export.gif:
            for state in simulator.trace():
                if simulator.moves % GIF_FRAME_EVERY == 0:
                    visualizer.buffer_frame(working, state,
                                            f'Move {simulator.moves}')
            visualizer.buffer_frame(working, simulator.guard.state,
                                    f'Move {simulator.moves} ({simulator.outcome.value})')
        patrol = simulator.patrol()
        log(f"  Patrol: {patrol.outcome.value} after {patrol.moves} moves")
        print(patrol.unique_cells)

        if config.export.render:
            log(render_text(working))

        # Obstacle sweep
        sweep = ObstacleSweep(layout.grid, layout.start, margin,
                              prune_to_path=config.sweep.prune_to_path,
                              workers=config.sweep.workers)

        def progress(state) -> None:
            if state.tested % PROGRESS_EVERY == 0:
                log(f"  Candidate {state.tested}: {state.loop_count} loops")

        log(f"\nRunning obstacle sweep...")
        result = sweep.run(on_progress=progress)
        print(result.loop_count)

    except KeyboardInterrupt:
        log("\nSimulation interrupted by user.")
        return 1

    # Final exports
    if config.export.csv:
        csv_path = config.out_dir / 'sweep_log.csv'
        with CSVWriter(csv_path) as writer:
            writer.append(result)
        log(f"\nCSV saved: {csv_path}")

    if config.export.snapshot:
        snapshot_path = config.out_dir / 'patrol.png'
        visualizer.save_snapshot(working, snapshot_path, patrol.final_state)
        log(f"Snapshot saved: {snapshot_path}")

    if config.export.gif:
        gif_path = config.out_dir / 'patrol.gif'
        log(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path, fps=10)
        log(f"Animation saved: {gif_path}")

    if config.export.report:
        reporter = Reporter(str(config.layout), layout.width, layout.height)
        log(reporter.generate_summary(patrol, result, config))

    return 0


if __name__ == '__main__':
    sys.exit(main())
