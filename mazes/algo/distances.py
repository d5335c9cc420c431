from array import array
from typing import Iterator, List, Optional, Tuple

import numpy as np

from mazes.core.errors import InvalidCellError, UnreachedTargetError
from mazes.core.grid import Grid

UNREACHED = -1


class Distances:
    """
    Breadth-first hop counts from one source cell over the grid's passages.

    Read-only with respect to the grid. The result describes the grid as it
    was when computed; recompute after adding passages.
    """
    __slots__ = ('grid', 'source', 'max_distance', '_dist', '_order')

    def __init__(self, grid: Grid, source: int):
        if not grid.is_enabled(source):
            raise InvalidCellError(f"Source cell {source!r} is not an included cell of this grid")
        self.grid = grid
        self.source = source
        # Dense distance array, -1 = unreached
        self._dist = array('i', [UNREACHED]) * grid.size
        self._order: List[int] = []
        self.max_distance = 0
        self._flood()

    def _flood(self):
        grid = self.grid
        dist = self._dist
        dist[self.source] = 0
        frontier = [self.source]
        order = self._order
        distance = 0

        # Level by level: every cell in a frontier shares one distance
        while frontier:
            order.extend(frontier)
            self.max_distance = distance
            distance += 1
            next_frontier = []
            for cell in frontier:
                for n in grid.linked_neighbors(cell):
                    if dist[n] == UNREACHED:
                        dist[n] = distance
                        next_frontier.append(n)
            frontier = next_frontier

    def distance_to(self, cell: int) -> Optional[int]:
        """Hop count to 'cell', or None if unreached or not a grid cell."""
        if not self.grid.is_enabled(cell):
            return None
        d = self._dist[cell]
        return None if d == UNREACHED else d

    def __getitem__(self, cell: int) -> Optional[int]:
        return self.distance_to(cell)

    def __contains__(self, cell: int) -> bool:
        return self.distance_to(cell) is not None

    def __len__(self) -> int:
        return len(self._order)

    def reached(self) -> Iterator[Tuple[int, int]]:
        """(cell, distance) for every reached cell, in grid cell order."""
        dist = self._dist
        for cell in self.grid.cells():
            if dist[cell] != UNREACHED:
                yield cell, dist[cell]

    def farthest(self) -> Tuple[int, int]:
        """The first cell, in grid cell order, at the maximum distance."""
        dist = self._dist
        best = self.max_distance
        for cell in self.grid.cells():
            if dist[cell] == best:
                return cell, best
        # The source is always reached
        return self.source, 0

    def path_to(self, target: int) -> List[int]:
        """
        Cells from source to target inclusive, walking back from the target
        through linked neighbours exactly one step closer. Ties go to the
        first such neighbour in neighbour order.
        """
        if not self.grid.is_enabled(target):
            raise InvalidCellError(f"Target cell {target!r} is not an included cell of this grid")
        dist = self._dist
        if dist[target] == UNREACHED:
            raise UnreachedTargetError(f"Cell {target} is not reachable from {self.source}")

        path = [target]
        current = target
        while current != self.source:
            wanted = dist[current] - 1
            for n in self.grid.linked_neighbors(current):
                if dist[n] == wanted:
                    current = n
                    break
            else:
                raise UnreachedTargetError(
                    f"Distances are stale: no way back from {current} to {self.source}")
            path.append(current)

        path.reverse()
        return path

    def as_array(self) -> np.ndarray:
        """Distances shaped like the grid (rows x cols, or flat for polar), -1 where unreached."""
        return np.array(self._dist, dtype=np.int32).reshape(self.grid.shape)


def compute(grid: Grid, source: int) -> Distances:
    return Distances(grid, source)


def diameter(grid: Grid) -> Tuple[int, int, int]:
    """
    (start, end, distance) of the longest shortest path. Two BFS passes:
    the farthest cell from an arbitrary cell is one end of a diameter, exact
    on trees and a good approximation otherwise.
    """
    first = next(grid.cells(), None)
    if first is None:
        raise InvalidCellError("Grid has no included cells")
    start, _ = Distances(grid, first).farthest()
    from_start = Distances(grid, start)
    end, distance = from_start.farthest()
    return start, end, distance


def longest_path(grid: Grid) -> List[int]:
    start, end, _ = diameter(grid)
    return Distances(grid, start).path_to(end)
