import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'maze_compare' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_compare.core.grid import InvalidDimensionError

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def add_maze_args(parser: argparse.ArgumentParser):
    parser.add_argument("--width", dest="maze_width", type=int, default=None, help="Maze Width (default 240)")
    parser.add_argument("--height", dest="maze_height", type=int, default=None, help="Maze Height (default 140)")
    parser.add_argument("--perfect", dest="use_perfect_maze", action="store_true", default=None,
                        help="Generate a perfect maze (no loops)")
    parser.add_argument("--loop-fraction", dest="loop_fraction", type=float, default=None,
                        help="Loop injection attempts as a fraction of the cell count (default 0.08)")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Compare: BFS vs DFS on a generated maze")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run Command
    run_parser = subparsers.add_parser("run", help="Generate a maze, solve it with BFS and DFS, show the comparison")
    add_maze_args(run_parser)
    run_parser.add_argument("--headless", dest="skip_visualization", action="store_true", default=None,
                            help="Skip the window and print the report")
    run_parser.add_argument("--screen-width", dest="screen_width", type=int, default=None, help="Window width")
    run_parser.add_argument("--screen-height", dest="screen_height", type=int, default=None, help="Window height")
    run_parser.add_argument("--batch-size", dest="batch_size", type=int, default=None,
                            help="Explored cells drawn per frame")
    run_parser.add_argument("--cell-size", dest="cell_size_override", type=int, default=None,
                            help="Pixels per cell (default: fit the maze to the window)")
    run_parser.add_argument("--fps", type=int, default=None, help="Frame rate cap")
    run_parser.add_argument("--record", action="store_true", default=None, help="Record the animation to mp4")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Average BFS/DFS figures over many mazes")
    add_maze_args(bench_parser)
    bench_parser.add_argument("--runs", type=int, default=10, help="Number of mazes")

    return parser

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_compare")

    if args.command is None:
        parser.print_help()
        return 0

    from maze_compare.config import SimulationConfig
    from maze_compare.simulation import build_maze, format_report, run_batch, run_comparison

    try:
        config = SimulationConfig.from_args(args)
    except InvalidDimensionError as e:
        logger.error(str(e))
        return 2
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    logger.info(f"Running command: {args.command}")

    if args.command == "run":
        maze = build_maze(config)
        report = run_comparison(config, maze=maze)

        if config.skip_visualization:
            if config.record:
                logger.warning("--record has no effect with --headless, nothing is drawn")
            print("\n".join(format_report(report)))
        else:
            logger.info("Visual mode enabled - Opening window...")
            from maze_compare.viz.renderer import Renderer
            renderer = Renderer(maze, report, config)
            renderer.init_window()
            renderer.run_loop()

    elif args.command == "benchmark":
        logger.info(f"Benchmarking {args.runs} mazes of {config.maze_width}x{config.maze_height} ({config.maze_type})...")
        try:
            summary = run_batch(config, args.runs)
        except ValueError as e:
            logger.error(str(e))
            return 2

        print(f"\n{'ALGORITHM':<10} | {'STEPS':<10} | {'PATH LEN':<10} | {'TIME (ms)':<10} | {'FOUND':<6}")
        print("-" * 58)
        for name, row in summary.items():
            if name == "dfs_longer_runs":
                continue
            print(f"{name.upper():<10} | {row['mean_steps']:<10.1f} | {row['mean_path_len']:<10.1f} | "
                  f"{row['mean_time_ms']:<10.3f} | {row['found']:<6}")
        longer = summary["dfs_longer_runs"]
        print(f"\nDFS path longer than BFS in {longer['count']}/{longer['runs']} mazes")

    return 0

if __name__ == "__main__":
    sys.exit(main())
