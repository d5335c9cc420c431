from typing import Callable, Iterable, Optional

from mazes.algo.distances import Distances
from mazes.core.errors import UnsupportedGridError
from mazes.core.grid import Grid
from mazes.core.polar import PolarGrid

CellBody = Callable[[int], str]

BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
EMPTY_BODY = "   "
MASKED_BODY = "###"


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(BASE36[rem])
    return "".join(reversed(digits))


def distance_body(distances: Distances) -> CellBody:
    """Cell interiors showing base-36 distances from the source."""
    def body(cell: int) -> str:
        d = distances.distance_to(cell)
        return EMPTY_BODY if d is None else f"{to_base36(d):^3}"[-3:]
    return body


def path_body(path: Iterable[int], distances: Optional[Distances] = None) -> CellBody:
    """Marks path cells: S and E at the ends, distances (or dots) in between."""
    cells = list(path)
    on_path = set(cells)
    start, end = (cells[0], cells[-1]) if cells else (None, None)
    show = distance_body(distances) if distances is not None else None

    def body(cell: int) -> str:
        if cell == start:
            return " S "
        if cell == end:
            return " E "
        if cell in on_path:
            return show(cell) if show else " . "
        return EMPTY_BODY
    return body


def render_text(grid: Grid, body: Optional[CellBody] = None) -> str:
    """
    Draws the grid with +---+ walls; a missing wall segment is a passage.
    Each row is drawn as its cell line then its southern wall line; the
    northern boundary comes first.
    """
    if isinstance(grid, PolarGrid):
        raise UnsupportedGridError("Text rendering supports rectangular grids only")

    lines = ["+" + "---+" * grid.cols]
    for r in range(grid.rows):
        top = "|"
        bottom = "+"
        for c in range(grid.cols):
            cell = grid.to_id(r, c)
            if grid.is_enabled(cell):
                interior = body(cell) if body else EMPTY_BODY
                east_open = grid.is_linked_towards(cell, Grid.EAST)
                south_open = grid.is_linked_towards(cell, Grid.SOUTH)
            else:
                interior = MASKED_BODY
                east_open = south_open = False

            top += interior + (" " if east_open else "|")
            bottom += ("   " if south_open else "---") + "+"
        lines.append(top)
        lines.append(bottom)
    return "\n".join(lines) + "\n"
