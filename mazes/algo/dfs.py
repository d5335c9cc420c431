from typing import Iterator, List, Optional

from mazes.algo.base import PROGRESS_INTERVAL
from mazes.core.grid import Grid


def recursive_backtracker(grid: Grid, rng, step_limit: Optional[int] = None) -> Iterator[str]:
    """
    Randomized depth-first search with an explicit stack, so grid size is
    never bounded by the interpreter's recursion limit.
    """
    if grid.cell_count() == 0:
        yield "Done"
        return

    visited = bytearray(grid.size)
    start = grid.random_cell(rng)
    visited[start] = 1

    stack: List[int] = [start]
    step_count = 0

    while stack:
        current = stack[-1]

        # Find unvisited neighbors
        neighbors = [n for n in grid.neighbors(current) if not visited[n]]

        if neighbors:
            # Choose random neighbor
            nxt = rng.choice(neighbors)

            # Carve
            grid.link(current, nxt)
            visited[nxt] = 1

            stack.append(nxt)
            step_count += 1

            # Yield every N steps to keep UI responsive without spamming
            if step_count % PROGRESS_INTERVAL == 0:
                yield f"Carving... Stack: {len(stack)}"
        else:
            # Backtrack
            stack.pop()

    yield "Done"


def hunt_and_kill(grid: Grid, rng, step_limit: Optional[int] = None) -> Iterator[str]:
    """
    Random walk over unvisited cells; when the walk boxes itself in, hunt in
    scan order for the first unvisited cell bordering the visited region,
    link it in, and resume walking from there.
    """
    if grid.cell_count() == 0:
        yield "Done"
        return

    visited = bytearray(grid.size)
    order = list(grid.cells())
    # Every cell before hunt_from in scan order is already visited
    hunt_from = 0

    current: Optional[int] = grid.random_cell(rng)
    visited[current] = 1
    step_count = 0

    while current is not None:
        neighbors = [n for n in grid.neighbors(current) if not visited[n]]

        if neighbors:
            nxt = rng.choice(neighbors)
            grid.link(current, nxt)
            visited[nxt] = 1
            current = nxt
        else:
            # Hunt
            current = None
            while hunt_from < len(order) and visited[order[hunt_from]]:
                hunt_from += 1

            for i in range(hunt_from, len(order)):
                cell = order[i]
                if visited[cell]:
                    continue
                visited_neighbors = [n for n in grid.neighbors(cell) if visited[n]]
                if visited_neighbors:
                    grid.link(cell, rng.choice(visited_neighbors))
                    visited[cell] = 1
                    current = cell
                    break

        step_count += 1
        if step_count % PROGRESS_INTERVAL == 0:
            yield f"Hunting... Steps: {step_count}"

    yield "Done"
