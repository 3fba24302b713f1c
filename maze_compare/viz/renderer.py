import logging
import pygame
import numpy as np
from typing import List
from maze_compare.core.grid import Coord, Maze
from maze_compare.config import SimulationConfig
from maze_compare.algo.solvers import SOLVERS
from maze_compare.simulation import ComparisonReport, format_report
from maze_compare.viz.raster import COLOR_BG, COLOR_END, COLOR_START, marker_rect, rasterize

logger = logging.getLogger(__name__)

class Renderer:
    COLOR_TEXT = (255, 255, 255)
    COLOR_SUBTEXT = (128, 128, 128)

    def __init__(self, maze: Maze, report: ComparisonReport, config: SimulationConfig):
        self.maze = maze
        self.report = report
        self.config = config
        self.cell_size = config.cell_size()
        self.offset_x, self.offset_y = config.maze_offset()

        from maze_compare.viz.recorder import VideoRecorder
        self.recorder = VideoRecorder(active=config.record, fps=config.fps, config=config)

        self.running = True
        self.surface = None
        self.background = None
        self.clock = None
        self.font = None

    def init_window(self):
        pygame.init()
        pygame.display.set_caption("Maze Pathfinding Comparison")
        self.surface = pygame.display.set_mode((self.config.screen_width, self.config.screen_height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

        # Maze is finished and immutable from here on, rasterize once
        frame = rasterize(self.maze, self.config)
        self.background = pygame.surfarray.make_surface(np.ascontiguousarray(frame.swapaxes(0, 1)))

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False

    def present(self):
        self.handle_input()
        pygame.display.flip()
        if self.recorder.active:
            # surfarray is (width, height, 3), the recorder takes (height, width, 3)
            self.recorder.write(pygame.surfarray.array3d(self.surface).swapaxes(0, 1))
        self.clock.tick(self.config.fps)

    def pause(self, seconds: float):
        for _ in range(int(seconds * self.config.fps)):
            if not self.running:
                return
            self.present()

    def draw_cell(self, x: int, y: int, color):
        rect = marker_rect(x, y, self.cell_size, self.offset_x, self.offset_y)
        pygame.draw.rect(self.surface, color, rect)

    def draw_label(self, text: str, color=COLOR_TEXT, y: int = 10):
        lbl = self.font.render(text, True, color)
        self.surface.blit(lbl, (10, y))

    def reset_board(self):
        self.surface.blit(self.background, (0, 0))
        self.draw_cell(*self.maze.start, COLOR_START)
        self.draw_cell(*self.maze.end, COLOR_END)

    def animate(self, cells: List[Coord], color, batch: int):
        drawn = 0
        for x, y in cells:
            if not self.running:
                return
            self.draw_cell(x, y, color)
            drawn += 1
            if drawn >= batch:
                self.present()
                drawn = 0
        self.present()

    def draw_stats(self):
        self.surface.fill(COLOR_BG)
        lines = format_report(self.report)
        y = 10
        for i, line in enumerate(lines):
            if i == 0:
                color = self.COLOR_TEXT
            elif line.startswith("Algorithm:"):
                name = line.split(":", 1)[1].strip().lower()
                color = SOLVERS[name].path_color if name in SOLVERS else self.COLOR_TEXT
            elif i < 3:
                color = self.COLOR_SUBTEXT
            else:
                color = self.COLOR_TEXT
            self.draw_label(line, color, y)
            y += 20

    def run_loop(self):
        self.reset_board()
        self.present()
        self.pause(1)

        for name, result in self.report.results.items():
            if not self.running:
                break
            info = SOLVERS[name]
            logger.debug(f"Animating {info.display_name} ({len(result.exploration_order)} cells)")

            self.reset_board()
            self.draw_label(f"Algorithm: {info.display_name}")
            self.animate(result.exploration_order, info.explore_color, self.config.batch_size)
            # Path is drawn slower so it reads as a trace
            self.animate(result.path, info.path_color, max(1, self.config.batch_size // 4))
            self.pause(3)

        self.draw_stats()
        while self.running:
            self.present()

        self.recorder.stop()
        pygame.quit()
