import unittest
import sys
import os
import shutil
from datetime import datetime
import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_compare.config import SimulationConfig
from maze_compare.core.grid import Maze
from maze_compare.viz.raster import rasterize
from maze_compare.viz.recorder import VideoRecorder, recording_filename

class TestRecorder(unittest.TestCase):
    def setUp(self):
        os.makedirs("test_out", exist_ok=True)

    def tearDown(self):
        shutil.rmtree("test_out", ignore_errors=True)

    def test_filename_describes_run(self):
        now = datetime(2024, 5, 6, 7, 8, 9)
        config = SimulationConfig(maze_width=30, maze_height=20, seed=42)
        self.assertEqual(recording_filename(config, now), "compare_30x20_loops_seed42_20240506_070809.mp4")

        config = SimulationConfig(maze_width=8, maze_height=8, use_perfect_maze=True)
        self.assertEqual(recording_filename(config, now), "compare_8x8_perfect_random_20240506_070809.mp4")

    def test_writes_raster_frames(self):
        config = SimulationConfig(screen_width=64, screen_height=48, maze_width=6, maze_height=4, min_margin=4)
        frame = rasterize(Maze(6, 4), config)

        path = "test_out/frames.avi"
        rec = VideoRecorder(active=True, output_file=path, fps=10)
        for _ in range(3):
            rec.write(frame)
        self.assertEqual(rec.frame_count, 3)
        self.assertEqual(rec.frame_size, (64, 48))
        rec.stop()

        self.assertIsNone(rec.writer)
        self.assertGreater(os.path.getsize(path), 0)

    def test_rejects_size_change(self):
        rec = VideoRecorder(active=True, output_file="test_out/size.avi", fps=10)
        rec.write(np.zeros((32, 32, 3), dtype=np.uint8))
        with self.assertRaises(ValueError):
            rec.write(np.zeros((16, 32, 3), dtype=np.uint8))
        with self.assertRaises(ValueError):
            rec.write(np.zeros((32, 32), dtype=np.uint8))
        rec.stop()

    def test_inactive_recorder_is_noop(self):
        rec = VideoRecorder(active=False)
        rec.write(np.zeros((8, 8, 3), dtype=np.uint8))
        self.assertEqual(rec.frame_count, 0)
        self.assertIsNone(rec.output_file)
        rec.stop()

if __name__ == '__main__':
    unittest.main()
