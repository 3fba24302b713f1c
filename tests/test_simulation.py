import unittest
import sys
import os
import argparse
import io
from contextlib import redirect_stdout

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_compare.config import SimulationConfig
from maze_compare.core.grid import Maze, InvalidDimensionError
from maze_compare.simulation import build_maze, format_report, run_batch, run_comparison
from maze_compare.main import build_parser, main

class TestConfig(unittest.TestCase):
    def test_defaults(self):
        config = SimulationConfig()
        self.assertEqual((config.maze_width, config.maze_height), (240, 140))
        self.assertEqual(config.batch_size, 20)
        self.assertEqual(config.loop_fraction, 0.08)
        self.assertEqual(config.maze_type, "Imperfect (With Loops)")
        # (1920 - 100) // 240 = 7, (1080 - 100) // 140 = 7
        self.assertEqual(config.cell_size(), 7)
        self.assertEqual(config.maze_offset(), ((1920 - 240 * 7) // 2, (1080 - 140 * 7) // 2))

    def test_cell_size_never_below_one(self):
        config = SimulationConfig(screen_width=200, screen_height=200, maze_width=500, maze_height=500)
        self.assertEqual(config.cell_size(), 1)
        self.assertEqual(config.maze_offset(), (0, 0))

    def test_validation(self):
        with self.assertRaises(InvalidDimensionError):
            SimulationConfig(maze_width=0)
        with self.assertRaises(ValueError):
            SimulationConfig(batch_size=0)
        with self.assertRaises(ValueError):
            SimulationConfig(loop_fraction=1.5)
        with self.assertRaises(ValueError):
            SimulationConfig(screen_height=-1)

    def test_cell_size_override(self):
        config = SimulationConfig(maze_width=20, maze_height=10, cell_size_override=5)
        self.assertEqual(config.cell_size(), 5)
        self.assertEqual(config.maze_offset(), ((1920 - 100) // 2, (1080 - 50) // 2))
        with self.assertRaises(ValueError):
            SimulationConfig(cell_size_override=0)

    def test_from_args(self):
        args = argparse.Namespace(maze_width=30, maze_height=None, seed=4, use_perfect_maze=True,
                                  verbose=False, command="run")
        config = SimulationConfig.from_args(args)
        self.assertEqual(config.maze_width, 30)
        self.assertEqual(config.maze_height, 140)
        self.assertEqual(config.seed, 4)
        self.assertTrue(config.use_perfect_maze)
        self.assertEqual(config.to_dict()["maze_width"], 30)

class TestCommandLine(unittest.TestCase):
    def test_cell_size_flag(self):
        args = build_parser().parse_args(["run", "--headless", "--cell-size", "5"])
        config = SimulationConfig.from_args(args)
        self.assertEqual(config.cell_size_override, 5)
        self.assertEqual(config.cell_size(), 5)
        self.assertTrue(config.skip_visualization)

    def test_headless_run_prints_report(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["run", "--headless", "--width", "6", "--height", "4", "--seed", "3"])
        self.assertEqual(code, 0)
        self.assertIn("--- Pathfinding Comparison ---", out.getvalue())
        self.assertIn("Maze Dimensions: 6x4", out.getvalue())

    def test_record_with_headless_warns(self):
        out = io.StringIO()
        with self.assertLogs("maze_compare", level="WARNING") as logs, redirect_stdout(out):
            code = main(["run", "--headless", "--record", "--width", "5", "--height", "5", "--seed", "1"])
        self.assertEqual(code, 0)
        self.assertTrue(any("--record" in line for line in logs.output))

    def test_zero_width_exits_with_error(self):
        with self.assertLogs("maze_compare", level="ERROR"):
            self.assertEqual(main(["run", "--headless", "--width", "0"]), 2)

class TestSimulation(unittest.TestCase):
    def test_build_maze_perfect(self):
        config = SimulationConfig(maze_width=12, maze_height=8, use_perfect_maze=True, seed=1)
        maze = build_maze(config)
        self.assertEqual(maze.carved_edge_count(), 12 * 8 - 1)

    def test_build_maze_is_seeded(self):
        config = SimulationConfig(maze_width=12, maze_height=8, seed=5)
        self.assertEqual(build_maze(config).snapshot(), build_maze(config).snapshot())

    def test_run_comparison(self):
        config = SimulationConfig(maze_width=16, maze_height=10, seed=2)
        report = run_comparison(config)
        self.assertEqual(list(report.results), ["bfs", "dfs"])
        self.assertEqual((report.width, report.height), (16, 10))
        self.assertEqual(report.seed, 2)
        self.assertTrue(report.results["bfs"].found)
        self.assertLessEqual(report.results["bfs"].path_length, report.results["dfs"].path_length)
        self.assertGreaterEqual(report.stats["carved_edges"], 16 * 10 - 1)

    def test_run_comparison_on_given_maze(self):
        maze = Maze(3, 3)
        report = run_comparison(SimulationConfig(maze_width=3, maze_height=3), maze=maze)
        self.assertFalse(report.results["bfs"].found)
        self.assertFalse(report.results["dfs"].found)
        lines = format_report(report)
        self.assertEqual(lines.count("Final Path Len: unreachable"), 2)

    def test_format_report(self):
        config = SimulationConfig(maze_width=10, maze_height=6, use_perfect_maze=True, seed=9)
        report = run_comparison(config)
        lines = format_report(report)
        self.assertEqual(lines[0], "--- Pathfinding Comparison ---")
        self.assertEqual(lines[1], "Maze Type:       Perfect (No Loops)")
        self.assertEqual(lines[2], "Maze Dimensions: 10x6")
        self.assertIn("Algorithm:      BFS", lines)
        self.assertIn("Algorithm:      DFS", lines)
        self.assertIn(f"Steps Taken:    {report.results['bfs'].steps}", lines)
        self.assertIn(f"Final Path Len: {report.results['dfs'].path_length}", lines)

    def test_run_batch(self):
        config = SimulationConfig(maze_width=10, maze_height=10, seed=100)
        summary = run_batch(config, 4)
        self.assertEqual(summary["bfs"]["found"], 4)
        self.assertEqual(summary["dfs"]["found"], 4)
        self.assertLessEqual(summary["bfs"]["mean_path_len"], summary["dfs"]["mean_path_len"])
        self.assertEqual(summary["dfs_longer_runs"]["runs"], 4)
        self.assertLessEqual(summary["dfs_longer_runs"]["count"], 4)

    def test_run_batch_rejects_zero_runs(self):
        with self.assertRaises(ValueError):
            run_batch(SimulationConfig(maze_width=4, maze_height=4), 0)

if __name__ == '__main__':
    unittest.main()
