import random
from typing import Optional
from maze_compare.core.grid import Maze

class MazePostProcessor:
    LOOP_FRACTION = 0.08

    @staticmethod
    def add_loops(maze: Maze, fraction: float = LOOP_FRACTION, seed: Optional[int] = None,
                  rng: Optional[random.Random] = None) -> int:
        """
        Knocks down extra walls to create loops.
        fraction: share of the cell count used as the number of removal attempts.
                  Attempts that hit an already open wall are skipped, so this is a
                  ceiling on removed walls, not an exact count.
        Returns the number of walls actually removed.
        """
        if rng is None:
            rng = random.Random(seed)

        # Attempts only touch interior coordinates (x < width-1, y < height-1)
        if maze.width < 2 or maze.height < 2:
            return 0

        attempts = int(maze.width * maze.height * fraction)
        removed_count = 0

        for _ in range(attempts):
            x = rng.randrange(maze.width - 1)
            y = rng.randrange(maze.height - 1)

            if rng.random() < 0.5:
                direction = Maze.EAST
            else:
                direction = Maze.SOUTH

            if maze.has_wall(x, y, direction):
                maze.carve_path(x, y, direction)
                removed_count += 1

        return removed_count

    @staticmethod
    def calculate_stats(maze: Maze):
        dead_ends = 0
        intersections = 0 # 0, 1 walls
        corridors = 0 # 2 walls

        def popcount_walls(val):
            c = 0
            if val & Maze.NORTH: c += 1
            if val & Maze.EAST: c += 1
            if val & Maze.SOUTH: c += 1
            if val & Maze.WEST: c += 1
            return c

        for i in range(maze.width * maze.height):
            walls = popcount_walls(maze.cells[i])
            if walls == 3: dead_ends += 1
            elif walls == 2: corridors += 1
            elif walls <= 1: intersections += 1

        total = maze.width * maze.height
        carved = maze.carved_edge_count()
        return {
            "dead_ends": dead_ends,
            "corridors": corridors,
            "intersections": intersections,
            "dead_end_percent": (dead_ends / total) * 100,
            "carved_edges": carved,
            # Passages beyond a spanning tree, each one closes a cycle
            "loops": max(0, carved - (total - 1)),
        }
