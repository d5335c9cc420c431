from enum import Enum
from typing import Iterable, Optional

from mazes.core.errors import UnknownAlgorithmError
from mazes.core.grid import Grid

# Generators yield a progress string every PROGRESS_INTERVAL steps
PROGRESS_INTERVAL = 100

# Random-walk step cap, per included cell, when the caller gives none
DEFAULT_WALK_FACTOR = 1000


class Algorithm(Enum):
    BINARY_TREE = "binary_tree"
    SIDEWINDER = "sidewinder"
    ALDOUS_BRODER = "aldous_broder"
    WILSON = "wilson"
    RECURSIVE_BACKTRACKER = "recursive_backtracker"
    HUNT_AND_KILL = "hunt_and_kill"
    PRIM = "prim"

    @classmethod
    def parse(cls, name) -> "Algorithm":
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace('-', '_').replace(' ', '_')
        key = ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnknownAlgorithmError(f"Unknown maze algorithm {name!r}") from None

    @property
    def is_biased(self) -> bool:
        """Biased algorithms only follow fixed directions and may fail to span masked grids."""
        return self in (Algorithm.BINARY_TREE, Algorithm.SIDEWINDER)


ALIASES = {
    "binary": "binary_tree",
    "dfs": "recursive_backtracker",
    "backtracker": "recursive_backtracker",
    "hunt_kill": "hunt_and_kill",
    "aldous": "aldous_broder",
    "prims": "prim",
}


def resolve_step_limit(grid: Grid, step_limit: Optional[int]) -> int:
    if step_limit is None:
        return DEFAULT_WALK_FACTOR * max(1, grid.cell_count())
    if step_limit < 1:
        raise ValueError(f"step_limit must be positive, got {step_limit}")
    return step_limit


def run_all(steps: Iterable[str]):
    """Helper to run a generator to completion."""
    for _ in steps:
        pass
