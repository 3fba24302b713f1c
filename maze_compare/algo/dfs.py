import logging
import random
from typing import Iterator, List, Optional
from maze_compare.core.grid import Coord, Maze
from maze_compare.algo.base import Generator
from maze_compare.core.complexity import MazePostProcessor

logger = logging.getLogger(__name__)

class RecursiveBacktracker(Generator):
    def run(self) -> Iterator[str]:
        rng = self.rng
        maze = self.maze

        # Regeneration on an existing maze starts from a clean visited state
        maze.reset_visited()

        start_x, start_y = maze.start
        maze.set_visited(start_x, start_y)

        # Stack of (x, y)
        stack: List[Coord] = [(start_x, start_y)]

        while stack:
            cx, cy = stack[-1]

            # Find unvisited neighbors (N, E, S, W order)
            neighbors = []
            for nx, ny, dir_bit in maze.get_neighbors(cx, cy):
                if not maze.is_visited(nx, ny):
                    neighbors.append((nx, ny, dir_bit))

            if neighbors:
                # Uniform over the candidates only
                nx, ny, dir_bit = rng.choice(neighbors)

                maze.set_visited(nx, ny)
                maze.carve_path(cx, cy, dir_bit)

                stack.append((nx, ny))
                self.step_count += 1

                # Yield every N steps to keep UI responsive without spamming
                if self.step_count % 100 == 0:
                    yield f"Carving... Stack: {len(stack)}"
            else:
                # Backtrack
                stack.pop()

        yield "Done"


def generate_perfect(maze: Maze, seed: Optional[int] = None, rng: Optional[random.Random] = None):
    """Carves a spanning tree into ``maze`` in place."""
    RecursiveBacktracker(maze, seed=seed, rng=rng).run_all()
    logger.debug(f"Carved {maze.carved_edge_count()} passages in {maze.width}x{maze.height} maze")


def generate_with_loops(maze: Maze, seed: Optional[int] = None,
                        loop_fraction: float = MazePostProcessor.LOOP_FRACTION):
    """
    Perfect maze followed by the loop injection pass. Both passes draw from
    one RNG stream so a seed fixes the final layout.
    """
    rng = random.Random(seed)
    generate_perfect(maze, rng=rng)
    removed = MazePostProcessor.add_loops(maze, fraction=loop_fraction, rng=rng)
    logger.debug(f"Loop pass removed {removed} extra walls")
