from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple

from maze_compare.core.grid import InvalidDimensionError


@dataclass
class SimulationConfig:
    """Everything one generate + solve + display cycle needs."""
    screen_width: int = 1920
    screen_height: int = 1080
    maze_width: int = 240
    maze_height: int = 140
    use_perfect_maze: bool = False
    skip_visualization: bool = False
    batch_size: int = 20 # Exploration cells drawn per screen update
    loop_fraction: float = 0.08
    seed: Optional[int] = None
    min_margin: int = 50
    fps: int = 60
    record: bool = False
    cell_size_override: Optional[int] = None # Fixed pixels per cell instead of fitting the screen

    def __post_init__(self):
        if self.maze_width < 1 or self.maze_height < 1:
            raise InvalidDimensionError(
                f"Maze dimensions must be positive, got {self.maze_width}x{self.maze_height}")
        for name in ("screen_width", "screen_height", "batch_size", "fps"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.cell_size_override is not None and self.cell_size_override <= 0:
            raise ValueError(f"cell_size_override must be positive, got {self.cell_size_override}")
        if self.min_margin < 0:
            raise ValueError(f"min_margin must not be negative, got {self.min_margin}")
        if not 0.0 <= self.loop_fraction <= 1.0:
            raise ValueError(f"loop_fraction must be within [0, 1], got {self.loop_fraction}")

    @property
    def maze_type(self) -> str:
        return "Perfect (No Loops)" if self.use_perfect_maze else "Imperfect (With Loops)"

    def cell_size(self) -> int:
        """Largest whole-pixel cell that fits the maze inside the margins."""
        if self.cell_size_override is not None:
            return self.cell_size_override
        usable_w = max(0, self.screen_width - 2 * self.min_margin)
        usable_h = max(0, self.screen_height - 2 * self.min_margin)
        max_cell_width = usable_w // self.maze_width
        max_cell_height = usable_h // self.maze_height
        return max(1, min(max_cell_width, max_cell_height))

    def maze_offset(self) -> Tuple[int, int]:
        size = self.cell_size()
        offset_x = max(0, self.screen_width - self.maze_width * size) // 2
        offset_y = max(0, self.screen_height - self.maze_height * size) // 2
        return offset_x, offset_y

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_args(cls, args) -> "SimulationConfig":
        """Builds a config from an argparse namespace, keeping defaults for missing flags."""
        values = {}
        for key in cls.__dataclass_fields__:
            val = getattr(args, key, None)
            if val is not None:
                values[key] = val
        return cls(**values)
