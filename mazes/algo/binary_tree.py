from typing import Iterator, Optional

from mazes.algo.base import PROGRESS_INTERVAL
from mazes.core.grid import Grid


def binary_tree(grid: Grid, rng, step_limit: Optional[int] = None) -> Iterator[str]:
    """
    Visits every cell in scan order and links it to either its 'up' or its
    'along' neighbour (north/east, or inward/clockwise on polar grids).
    Leaves a diagonal bias and two unbroken corridors along the far edges.
    """
    count = 0
    for cell in grid.cells():
        candidates = [n for n in grid.biased_neighbors(cell) if n is not None]
        if candidates:
            grid.link(cell, rng.choice(candidates))

        count += 1
        if count % PROGRESS_INTERVAL == 0:
            yield f"Binary tree: {count} cells"

    yield "Done"
