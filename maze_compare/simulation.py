import logging
import statistics
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from maze_compare.config import SimulationConfig
from maze_compare.core.grid import Maze
from maze_compare.core.complexity import MazePostProcessor
from maze_compare.algo.dfs import generate_perfect, generate_with_loops
from maze_compare.algo.solvers import SOLVERS, SearchResult

logger = logging.getLogger(__name__)


@dataclass
class ComparisonReport:
    maze_type: str
    width: int
    height: int
    seed: Optional[int]
    results: Dict[str, SearchResult]
    stats: Dict[str, float] = field(default_factory=dict)


def build_maze(config: SimulationConfig, seed: Optional[int] = None) -> Maze:
    if seed is None:
        seed = config.seed
    maze = Maze(config.maze_width, config.maze_height)
    if config.use_perfect_maze:
        generate_perfect(maze, seed=seed)
    else:
        generate_with_loops(maze, seed=seed, loop_fraction=config.loop_fraction)
    return maze


def solve_all(maze: Maze) -> Dict[str, SearchResult]:
    results = {}
    for name, info in SOLVERS.items():
        result = info.solver_cls(maze).solve()
        if not result.found:
            logger.warning(f"{info.display_name}: end {maze.end} is unreachable from {maze.start}")
        logger.info(
            f"{info.display_name}: steps={result.steps} time={result.duration_ms:.2f}ms "
            f"path_len={result.path_length} explored={len(result.exploration_order)}"
        )
        results[name] = result
    return results


def run_comparison(config: SimulationConfig, maze: Optional[Maze] = None,
                   seed: Optional[int] = None) -> ComparisonReport:
    if seed is None:
        seed = config.seed
    if maze is None:
        logger.info(f"Generating {config.maze_width}x{config.maze_height} maze ({config.maze_type})...")
        maze = build_maze(config, seed=seed)

    stats = MazePostProcessor.calculate_stats(maze)
    logger.debug(f"Stats: {stats}")

    return ComparisonReport(
        maze_type=config.maze_type,
        width=maze.width,
        height=maze.height,
        seed=seed,
        results=solve_all(maze),
        stats=stats,
    )


def format_report(report: ComparisonReport) -> List[str]:
    """Lines of the comparison panel, one per row of text."""
    lines = [
        "--- Pathfinding Comparison ---",
        f"Maze Type:       {report.maze_type}",
        f"Maze Dimensions: {report.width}x{report.height}",
    ]
    for name, result in report.results.items():
        info = SOLVERS[name]
        lines.append("")
        lines.append(f"Algorithm:      {info.display_name}")
        lines.append(f"Steps Taken:    {result.steps}")
        lines.append(f"Time Elapsed:   {result.duration_ms:.0f} ms")
        if result.found:
            lines.append(f"Final Path Len: {result.path_length}")
        else:
            lines.append("Final Path Len: unreachable")
    return lines


def run_batch(config: SimulationConfig, runs: int) -> Dict[str, Dict[str, float]]:
    """
    Repeats the comparison on ``runs`` fresh mazes and averages per-algorithm
    figures. Seeds run seed, seed+1, ... when a base seed is configured.
    """
    if runs < 1:
        raise ValueError(f"runs must be at least 1, got {runs}")

    collected: Dict[str, List[SearchResult]] = {name: [] for name in SOLVERS}
    dfs_longer = 0

    for i in range(runs):
        seed = None if config.seed is None else config.seed + i
        report = run_comparison(config, seed=seed)
        for name, result in report.results.items():
            collected[name].append(result)
        if report.results["dfs"].path_length > report.results["bfs"].path_length:
            dfs_longer += 1

    summary = {}
    for name, results in collected.items():
        summary[name] = {
            "mean_steps": statistics.mean(r.steps for r in results),
            "mean_path_len": statistics.mean(r.path_length for r in results),
            "mean_time_ms": statistics.mean(r.duration_ms for r in results),
            "found": sum(1 for r in results if r.found),
        }
    summary["dfs_longer_runs"] = {"count": dfs_longer, "runs": runs}
    return summary
