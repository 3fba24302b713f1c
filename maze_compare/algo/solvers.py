import time
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple, Type
from maze_compare.core.grid import Coord, Maze

Color = Tuple[int, int, int]


class SearchResult(NamedTuple):
    """
    Outcome of one search: (steps, duration_ms, path, exploration_order).

    When ``end`` is unreachable the path is the partial trail walked back from
    ``end`` and does not begin with ``start``; check ``found`` before using it.
    """
    steps: int
    duration_ms: float
    path: List[Coord]
    exploration_order: List[Coord]

    @property
    def found(self) -> bool:
        # exploration_order always opens with start
        return bool(self.path) and self.path[0] == self.exploration_order[0]

    @property
    def path_length(self) -> int:
        return len(self.path)


def reconstruct_path(parents: Sequence[Optional[Coord]], width: int,
                     start: Coord, end: Coord) -> List[Coord]:
    """
    Walks parent pointers backward from end to start.

    The root carries itself as parent. Hitting that sentinel (or an empty slot)
    before reaching start means end was never connected to the search tree;
    the partial trail is returned without start prepended.
    """
    path = []
    curr = end
    while curr != start:
        path.append(curr)
        parent = parents[curr[1] * width + curr[0]]
        if parent is None or parent == curr:
            path.reverse()
            return path
        curr = parent

    path.append(start)
    path.reverse()
    return path


class Solver(ABC):
    def __init__(self, maze: Maze):
        self.maze = maze
        self.steps = 0
        self.path: List[Coord] = []
        self.exploration_order: List[Coord] = []
        self.parents: List[Optional[Coord]] = []

    @abstractmethod
    def search(self):
        """Fills steps, parents and exploration_order. Runs to completion."""
        pass

    def solve(self) -> SearchResult:
        self.steps = 0
        self.path = []
        self.exploration_order = []

        t_start = time.perf_counter()
        self.search()
        self.path = reconstruct_path(self.parents, self.maze.width, self.maze.start, self.maze.end)
        duration_ms = (time.perf_counter() - t_start) * 1000.0

        return SearchResult(self.steps, duration_ms, self.path, self.exploration_order)


class BFS(Solver):
    def search(self):
        maze = self.maze
        start, end = maze.start, maze.end

        queue = deque([start])
        self.parents = [None] * (maze.width * maze.height)
        self.parents[maze.get_index(*start)] = start
        self.exploration_order.append(start)

        while queue:
            current = queue.popleft()
            self.steps += 1
            if current == end:
                break

            cx, cy = current
            for nx, ny, _ in maze.get_open_neighbors(cx, cy):
                idx = ny * maze.width + nx
                # Parent recorded at first discovery only
                if self.parents[idx] is None:
                    self.parents[idx] = current
                    self.exploration_order.append((nx, ny))
                    queue.append((nx, ny))


class DFS(Solver):
    def search(self):
        maze = self.maze
        start, end = maze.start, maze.end

        stack = [start]
        self.parents = [None] * (maze.width * maze.height)
        # Separate from the maze's generation-time VISITED bit
        visited_for_dfs = [False] * (maze.width * maze.height)

        start_idx = maze.get_index(*start)
        visited_for_dfs[start_idx] = True
        self.parents[start_idx] = start
        self.exploration_order.append(start)

        while stack:
            current = stack.pop()
            self.steps += 1
            if current == end:
                break

            cx, cy = current
            for nx, ny, _ in maze.get_open_neighbors(cx, cy):
                idx = ny * maze.width + nx
                if not visited_for_dfs[idx]:
                    visited_for_dfs[idx] = True
                    self.parents[idx] = current
                    self.exploration_order.append((nx, ny))
                    stack.append((nx, ny))


@dataclass(frozen=True)
class SolverInfo:
    solver_cls: Type[Solver]
    display_name: str
    explore_color: Color
    path_color: Color
    description: str = field(default="")


SOLVERS: Dict[str, SolverInfo] = {
    "bfs": SolverInfo(BFS, "BFS", (0, 0, 255), (255, 255, 0), "Breadth-first, shortest path"),
    "dfs": SolverInfo(DFS, "DFS", (0, 255, 255), (255, 0, 255), "Depth-first, any path"),
}


def get_solver(name: str) -> SolverInfo:
    try:
        return SOLVERS[name]
    except KeyError:
        raise KeyError(f"Unknown solver '{name}'. Choose from: {', '.join(SOLVERS)}") from None


def find_path_bfs(maze: Maze) -> SearchResult:
    return BFS(maze).solve()


def find_path_dfs(maze: Maze) -> SearchResult:
    return DFS(maze).solve()
