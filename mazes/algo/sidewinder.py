from typing import Iterator, List, Optional

from mazes.algo.base import PROGRESS_INTERVAL
from mazes.core.grid import Grid


def sidewinder(grid: Grid, rng, step_limit: Optional[int] = None) -> Iterator[str]:
    """
    Row by row, grows a horizontal run of linked cells. Each step either
    extends the run along the row or closes it by linking one random run
    member upward. The topmost row (or the centre on polar grids) has no
    upward neighbours and becomes one long corridor.
    """
    count = 0
    for row in grid.rows_of_cells():
        run: List[int] = []
        for cell in row:
            run.append(cell)
            up, along = grid.biased_neighbors(cell)

            at_run_end = along is None
            close_run = at_run_end or (up is not None and rng.randrange(2) == 0)

            if close_run:
                # Only members with an upward neighbour can close the run
                exits = [(member, grid.biased_neighbors(member)[0]) for member in run]
                exits = [(member, above) for member, above in exits if above is not None]
                if exits:
                    member, above = rng.choice(exits)
                    grid.link(member, above)
                run = []
            else:
                grid.link(cell, along)

            count += 1
            if count % PROGRESS_INTERVAL == 0:
                yield f"Sidewinder: {count} cells"

    yield "Done"
