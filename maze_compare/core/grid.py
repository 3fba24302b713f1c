from array import array
from typing import Iterator, Tuple

Coord = Tuple[int, int]


class InvalidDimensionError(ValueError):
    """Raised when a maze is built with a zero or negative dimension."""


class Maze:
    # Bitmask Constants
    NORTH = 0b00000001
    EAST  = 0b00000010
    SOUTH = 0b00000100
    WEST  = 0b00001000

    # Flags
    VISITED = 0b00010000

    # All walls present by default (N|E|S|W) = 15
    ALL_WALLS = NORTH | EAST | SOUTH | WEST

    # Fixed ordering N, E, S, W. Opposite of index d is (d + 2) % 4.
    DIRECTIONS = (NORTH, EAST, SOUTH, WEST)
    DX = {NORTH: 0, EAST: 1, SOUTH: 0, WEST: -1}
    DY = {NORTH: -1, EAST: 0, SOUTH: 1, WEST: 0}

    __slots__ = ('width', 'height', 'start', 'end', 'cells')

    def __init__(self, width: int, height: int):
        if not isinstance(width, int) or not isinstance(height, int):
            raise TypeError(f"Maze dimensions must be integers, got {width!r}x{height!r}")
        if width < 1 or height < 1:
            raise InvalidDimensionError(f"Maze dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.start: Coord = (0, 0)
        self.end: Coord = (width - 1, height - 1)
        # 'B' (unsigned char) -> 1 byte per cell, all walls up, not visited
        self.cells = array('B', [self.ALL_WALLS] * (width * height))

    @classmethod
    def opposite(cls, dir_bit: int) -> int:
        i = cls.DIRECTIONS.index(dir_bit)
        return cls.DIRECTIONS[(i + 2) % 4]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def carve_path(self, x1: int, y1: int, dir_bit: int):
        """
        Removes the wall between cell (x1, y1) and its neighbor in 'dir_bit'.
        Also removes the OPPOSITE wall from the neighbor, so the pair stays symmetric.
        """
        x2 = x1 + self.DX[dir_bit]
        y2 = y1 + self.DY[dir_bit]
        if not (self.in_bounds(x1, y1) and self.in_bounds(x2, y2)):
            return # Cannot carve into void

        self.cells[y1 * self.width + x1] &= ~dir_bit
        self.cells[y2 * self.width + x2] &= ~self.opposite(dir_bit)

    def add_wall(self, x: int, y: int, dir_bit: int):
        idx = self.get_index(x, y)
        self.cells[idx] |= dir_bit

        # Handle neighbor (strict consistency)
        nx, ny = x + self.DX[dir_bit], y + self.DY[dir_bit]
        if self.in_bounds(nx, ny):
            self.cells[ny * self.width + nx] |= self.opposite(dir_bit)

    def has_wall(self, x: int, y: int, dir_bit: int) -> bool:
        return (self.cells[self.get_index(x, y)] & dir_bit) != 0

    def walls(self, x: int, y: int) -> Tuple[bool, bool, bool, bool]:
        """Wall flags of one cell in (north, east, south, west) order."""
        val = self.cells[self.get_index(x, y)]
        return tuple((val & d) != 0 for d in self.DIRECTIONS)

    def set_visited(self, x: int, y: int, visited: bool = True):
        idx = self.get_index(x, y)
        if visited:
            self.cells[idx] |= self.VISITED
        else:
            self.cells[idx] &= ~self.VISITED

    def is_visited(self, x: int, y: int) -> bool:
        return (self.cells[self.get_index(x, y)] & self.VISITED) != 0

    def reset_visited(self):
        mask = ~self.VISITED & 0xFF
        for i in range(len(self.cells)):
            self.cells[i] &= mask

    def get_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int, int]]:
        """
        Yields (nx, ny, direction_to_neighbor) for all in-bounds grid neighbors,
        in N, E, S, W order. Does NOT check walls (that's for pathfinding).
        """
        if y > 0:
            yield (x, y - 1, self.NORTH)
        if x < self.width - 1:
            yield (x + 1, y, self.EAST)
        if y < self.height - 1:
            yield (x, y + 1, self.SOUTH)
        if x > 0:
            yield (x - 1, y, self.WEST)

    def get_open_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int, int]]:
        """
        Yields (nx, ny, direction) for neighbors that are NOT blocked by a wall.
        """
        val = self.cells[self.get_index(x, y)]
        for nx, ny, dir_bit in self.get_neighbors(x, y):
            if not (val & dir_bit):
                yield (nx, ny, dir_bit)

    def carved_edge_count(self) -> int:
        # Each open passage is counted once, from its west/north side
        count = 0
        for y in range(self.height):
            for x in range(self.width):
                val = self.cells[y * self.width + x]
                if x < self.width - 1 and not (val & self.EAST):
                    count += 1
                if y < self.height - 1 and not (val & self.SOUTH):
                    count += 1
        return count

    def snapshot(self) -> bytes:
        """Immutable copy of the cell bytes for read-only consumers."""
        return self.cells.tobytes()


def new_maze(width: int, height: int) -> Maze:
    return Maze(width, height)
