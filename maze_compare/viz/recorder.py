import os
import logging
import cv2
import numpy as np
from datetime import datetime
from typing import Optional

from maze_compare.config import SimulationConfig

logger = logging.getLogger(__name__)

# Container extension -> fourcc
CODECS = {".mp4": "mp4v", ".avi": "MJPG"}


def recording_filename(config: SimulationConfig, now: Optional[datetime] = None) -> str:
    """e.g. compare_240x140_loops_seed42_20250101_120000.mp4"""
    ts = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    kind = "perfect" if config.use_perfect_maze else "loops"
    seed = "random" if config.seed is None else f"seed{config.seed}"
    return f"compare_{config.maze_width}x{config.maze_height}_{kind}_{seed}_{ts}.mp4"


class VideoRecorder:
    """
    Writes RGB frames of shape (height, width, 3), the layout raster.rasterize
    produces, to a video file. The first frame fixes the frame size.
    """

    def __init__(self, active=False, output_file=None, fps=60, config: Optional[SimulationConfig] = None):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_size = None
        self.frame_count = 0

        if self.active and not self.output_file:
            fname = recording_filename(config or SimulationConfig())
            if os.path.exists("recordings"):
                self.output_file = os.path.join("recordings", fname)
            else:
                self.output_file = fname

    def _open(self, width: int, height: int):
        ext = os.path.splitext(self.output_file)[1].lower()
        fourcc = cv2.VideoWriter_fourcc(*CODECS.get(ext, "mp4v"))
        self.frame_size = (width, height)
        self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, self.frame_size)
        if not self.writer.isOpened():
            self.writer = None
            raise RuntimeError(f"Could not open video writer for {self.output_file}")
        logger.info(f"Recording started: {self.output_file}")

    def write(self, frame: np.ndarray):
        if not self.active:
            return
        if frame.ndim != 3 or frame.shape[2] != 3:
            raise ValueError(f"Expected an (height, width, 3) RGB frame, got shape {frame.shape}")

        height, width = frame.shape[:2]
        if self.writer is None:
            self._open(width, height)
        elif (width, height) != self.frame_size:
            raise ValueError(f"Frame size {(width, height)} differs from recording size {self.frame_size}")

        bgr = cv2.cvtColor(np.ascontiguousarray(frame, dtype=np.uint8), cv2.COLOR_RGB2BGR)
        self.writer.write(bgr)
        self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
            self.writer = None
