import numpy as np
from maze_compare.core.grid import Maze
from maze_compare.config import SimulationConfig

COLOR_BG = (16, 16, 32)
COLOR_WALL = (128, 128, 128)
COLOR_START = (0, 255, 0)
COLOR_END = (255, 0, 0)


def cell_bits(maze: Maze) -> np.ndarray:
    """(height, width) uint8 view of a copy of the cell bytes."""
    return np.frombuffer(maze.snapshot(), dtype=np.uint8).reshape(maze.height, maze.width)


def wall_mask(maze: Maze, cell_size: int) -> np.ndarray:
    """
    Boolean image of shape (height * cell_size, width * cell_size), True on wall pixels.
    A wall occupies the outermost pixel row/column of its side of the cell.
    """
    if cell_size < 1:
        raise ValueError(f"cell_size must be positive, got {cell_size}")

    bits = cell_bits(maze)
    inner = np.arange(cell_size)
    iy = inner[:, None]
    ix = inner[None, :]
    patterns = {
        Maze.NORTH: np.broadcast_to(iy == 0, (cell_size, cell_size)),
        Maze.EAST: np.broadcast_to(ix == cell_size - 1, (cell_size, cell_size)),
        Maze.SOUTH: np.broadcast_to(iy == cell_size - 1, (cell_size, cell_size)),
        Maze.WEST: np.broadcast_to(ix == 0, (cell_size, cell_size)),
    }

    mask = np.zeros((maze.height * cell_size, maze.width * cell_size), dtype=bool)
    for dir_bit, pattern in patterns.items():
        has = (bits & dir_bit) != 0
        expanded = np.repeat(np.repeat(has, cell_size, axis=0), cell_size, axis=1)
        mask |= expanded & np.tile(pattern, (maze.height, maze.width))
    return mask


def marker_rect(x: int, y: int, cell_size: int, offset_x: int, offset_y: int):
    """Screen rect (left, top, size, size) of the centered half-cell marker for (x, y)."""
    size = max(1, cell_size // 2)
    pad = (cell_size - size) // 2
    return (offset_x + x * cell_size + pad, offset_y + y * cell_size + pad, size, size)


def paint_cell(frame: np.ndarray, x: int, y: int, cell_size: int,
               offset_x: int, offset_y: int, color) -> None:
    left, top, w, h = marker_rect(x, y, cell_size, offset_x, offset_y)
    frame[top:top + h, left:left + w] = color


def rasterize(maze: Maze, config: SimulationConfig) -> np.ndarray:
    """
    Full RGB frame (screen_height, screen_width, 3) with walls, start and end.
    The maze is not mutated; parts that fall outside the screen are clipped.
    """
    frame = np.empty((config.screen_height, config.screen_width, 3), dtype=np.uint8)
    frame[:, :] = COLOR_BG

    cell_size = config.cell_size()
    offset_x, offset_y = config.maze_offset()

    mask = wall_mask(maze, cell_size)
    region = frame[offset_y:offset_y + mask.shape[0], offset_x:offset_x + mask.shape[1]]
    region[mask[:region.shape[0], :region.shape[1]]] = COLOR_WALL

    paint_cell(frame, *maze.start, cell_size, offset_x, offset_y, COLOR_START)
    paint_cell(frame, *maze.end, cell_size, offset_x, offset_y, COLOR_END)
    return frame
