"""
Uniform spanning tree generators driven by random walks.

Both algorithms produce every spanning tree of the grid with equal
probability. Their running time is a random variable (Aldous-Broder's
expected walk length grows like the grid's cover time), so each walk step
counts against a step limit and exceeding it aborts the generation.
"""
from typing import Dict, Iterator, List, Optional

from mazes.algo.base import PROGRESS_INTERVAL, resolve_step_limit
from mazes.core.errors import GenerationLimitExceededError
from mazes.core.grid import Grid


def aldous_broder(grid: Grid, rng, step_limit: Optional[int] = None) -> Iterator[str]:
    """
    Unbiased random walk from a random cell; entering a cell for the first
    time links it to the cell the walk came from.
    """
    limit = resolve_step_limit(grid, step_limit)
    if grid.cell_count() == 0:
        yield "Done"
        return

    visited = bytearray(grid.size)
    cell = grid.random_cell(rng)
    visited[cell] = 1
    unvisited = grid.cell_count() - 1
    steps = 0

    while unvisited > 0:
        if steps >= limit:
            raise GenerationLimitExceededError("aldous_broder", limit)
        neighbor = rng.choice(grid.neighbors(cell))
        if not visited[neighbor]:
            grid.link(cell, neighbor)
            visited[neighbor] = 1
            unvisited -= 1
        cell = neighbor

        steps += 1
        if steps % PROGRESS_INTERVAL == 0:
            yield f"Walking... Unvisited: {unvisited}"

    yield "Done"


def wilson(grid: Grid, rng, step_limit: Optional[int] = None) -> Iterator[str]:
    """
    Loop-erased random walks. Each walk starts from a random cell outside
    the tree and wanders until it hits the tree; any loop the walk makes is
    erased as soon as it closes, and the surviving path is then linked
    into the tree.
    """
    limit = resolve_step_limit(grid, step_limit)
    if grid.cell_count() == 0:
        yield "Done"
        return

    # Unvisited cells as a list for random choice plus a position map for O(1) swap-remove
    outside: List[int] = list(grid.cells())
    position: Dict[int, int] = {cell: i for i, cell in enumerate(outside)}

    def remove(cell: int):
        i = position.pop(cell)
        last = outside.pop()
        if last != cell:
            outside[i] = last
            position[last] = i

    remove(rng.choice(outside))
    steps = 0

    while outside:
        cell = rng.choice(outside)
        path = [cell]
        on_path = {cell: 0}

        while cell in position:
            if steps >= limit:
                raise GenerationLimitExceededError("wilson", limit)
            cell = rng.choice(grid.neighbors(cell))
            if cell in on_path:
                # Erase the loop back to the first visit of this cell
                for erased in path[on_path[cell] + 1:]:
                    del on_path[erased]
                del path[on_path[cell] + 1:]
            else:
                on_path[cell] = len(path)
                path.append(cell)

            steps += 1
            if steps % PROGRESS_INTERVAL == 0:
                yield f"Walking... Outside tree: {len(outside)}"

        for a, b in zip(path, path[1:]):
            grid.link(a, b)
            remove(a)

    yield "Done"
