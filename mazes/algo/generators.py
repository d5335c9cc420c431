import logging
import random
from typing import Callable, Dict, Iterator, Optional

from mazes.algo.base import Algorithm, run_all
from mazes.algo.binary_tree import binary_tree
from mazes.algo.dfs import hunt_and_kill, recursive_backtracker
from mazes.algo.prim import prim
from mazes.algo.random_walk import aldous_broder, wilson
from mazes.algo.sidewinder import sidewinder
from mazes.core.errors import UnsupportedGridError
from mazes.core.grid import Grid

logger = logging.getLogger(__name__)

GeneratorFn = Callable[..., Iterator[str]]

GENERATORS: Dict[Algorithm, GeneratorFn] = {
    Algorithm.BINARY_TREE: binary_tree,
    Algorithm.SIDEWINDER: sidewinder,
    Algorithm.ALDOUS_BRODER: aldous_broder,
    Algorithm.WILSON: wilson,
    Algorithm.RECURSIVE_BACKTRACKER: recursive_backtracker,
    Algorithm.HUNT_AND_KILL: hunt_and_kill,
    Algorithm.PRIM: prim,
}


def is_spanning_tree(grid: Grid) -> bool:
    """Connected over every included cell with exactly N - 1 passages."""
    count = grid.cell_count()
    if count == 0:
        return grid.link_count() == 0
    if grid.link_count() != count - 1:
        return False
    return grid.reachable_count(next(grid.cells())) == count


def check_generatable(grid: Grid):
    if grid.link_count() != 0:
        raise UnsupportedGridError("Grid already has passages; generators need an unlinked grid")
    count = grid.cell_count()
    if count and grid.reachable_count(next(grid.cells()), through_links=False) != count:
        raise UnsupportedGridError("Included cells do not form one connected region")


def steps(algorithm, grid: Grid, rng: random.Random, step_limit: Optional[int] = None) -> Iterator[str]:
    """
    Progress iterator for one generation run, for callers that animate.
    No validation or rollback; use generate() for that.
    """
    return GENERATORS[Algorithm.parse(algorithm)](grid, rng, step_limit)


def generate(algorithm, grid: Grid, seed: Optional[int] = None,
             step_limit: Optional[int] = None) -> Grid:
    """
    Runs 'algorithm' on an unlinked grid, seeded for reproducibility.

    On any failure the grid's passages are restored to their prior state
    before the error propagates.
    """
    algo = Algorithm.parse(algorithm)
    check_generatable(grid)

    rng = random.Random(seed)
    snapshot = grid.snapshot_links()
    logger.debug(f"Generating {grid!r} with {algo.value} (seed={seed})")

    try:
        run_all(GENERATORS[algo](grid, rng, step_limit))
        if not is_spanning_tree(grid):
            if algo.is_biased:
                raise UnsupportedGridError(
                    f"{algo.value} could not span this grid; it needs every cell "
                    f"but the last to have an up or along neighbour")
            raise UnsupportedGridError(f"{algo.value} did not produce a spanning tree")
    except Exception:
        grid.restore_links(snapshot)
        raise

    logger.debug(f"Generated {grid.link_count()} passages")
    return grid
