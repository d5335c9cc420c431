from typing import Iterator, List, Optional, Set

from mazes.algo.base import PROGRESS_INTERVAL
from mazes.core.grid import Grid


def prim(grid: Grid, rng, step_limit: Optional[int] = None) -> Iterator[str]:
    """
    Simplified Prim's: grow the maze from one cell by repeatedly picking a
    random frontier cell and linking it to one random visited neighbour.
    Produces short, branchy passages radiating from the start.
    """
    if grid.cell_count() == 0:
        yield "Done"
        return

    visited = bytearray(grid.size)
    start = grid.random_cell(rng)
    visited[start] = 1

    # Set for O(1) membership, list for random choice
    frontier_set: Set[int] = set(grid.neighbors(start))
    frontier_list: List[int] = [n for n in grid.neighbors(start)]
    step_count = 0

    while frontier_list:
        # Pick random cell from frontier, swap remove for O(1)
        idx = rng.randrange(len(frontier_list))
        cell = frontier_list[idx]
        frontier_list[idx] = frontier_list[-1]
        frontier_list.pop()
        frontier_set.discard(cell)

        # Carve to one random visited neighbour
        possible_neighbors = [n for n in grid.neighbors(cell) if visited[n]]
        grid.link(cell, rng.choice(possible_neighbors))
        visited[cell] = 1
        step_count += 1

        # Add unvisited neighbors of this new cell to frontier
        for n in grid.neighbors(cell):
            if not visited[n] and n not in frontier_set:
                frontier_set.add(n)
                frontier_list.append(n)

        if step_count % PROGRESS_INTERVAL == 0:
            yield f"Frontier: {len(frontier_list)}"

    yield "Done"
