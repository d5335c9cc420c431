from array import array
from collections import deque
from typing import FrozenSet, Iterator, List, Optional, Tuple

from mazes.core.cells import CellIndex
from mazes.core.errors import (
    InvalidCellError,
    InvalidDimensionsError,
    NonAdjacentLinkError,
)
from mazes.core.mask import Mask

# (direction, neighbour id) pairs in fixed neighbour order
Slots = Tuple[Tuple[int, int], ...]


class Grid:
    """
    Rectangular maze grid, optionally shaped by a Mask.

    Cells are dense integer ids (row-major). Each included cell owns a fixed
    tuple of neighbour slots computed once at construction; a passage to the
    neighbour in slot i is bit (1 << i) of links[cell]. Excluded cells have
    no slots and never appear in iteration or neighbour queries.
    """
    # Direction bits
    NORTH = 0b00000001
    EAST  = 0b00000010
    SOUTH = 0b00000100
    WEST  = 0b00001000

    # Neighbour order N, S, E, W
    DIRECTIONS = (NORTH, SOUTH, EAST, WEST)

    DX = {NORTH: 0, SOUTH: 0, EAST: 1, WEST: -1}
    DY = {NORTH: -1, SOUTH: 1, EAST: 0, WEST: 0}

    __slots__ = ('index', 'mask', 'links', '_slots', '_cells')

    def __init__(self, rows: int, cols: int, mask: Optional[Mask] = None):
        self.index = CellIndex(rows, cols)
        if mask is not None and mask.shape != (rows, cols):
            raise InvalidDimensionsError(
                f"Mask shape {mask.shape} does not match grid {rows}x{cols}")
        self.mask = mask
        self._build(self._rect_slots())

    def _build(self, slots: List[Slots]):
        self._slots = slots
        self._cells = array('I', (cell for cell, s in enumerate(slots) if s is not None))
        # Per-cell slot bitmask, 0 = no passages
        self.links = array('I', bytes(4 * len(slots)))

    def _rect_slots(self) -> List[Slots]:
        rows, cols = self.index.rows, self.index.cols
        enabled = self.mask.bits if self.mask is not None else None

        def included(r, c):
            return 0 <= r < rows and 0 <= c < cols and (enabled is None or enabled[r, c])

        slots: List[Slots] = []
        for r in range(rows):
            for c in range(cols):
                if not included(r, c):
                    slots.append(None)
                    continue
                cell_slots = []
                for direction in self.DIRECTIONS:
                    nr, nc = r + self.DY[direction], c + self.DX[direction]
                    if included(nr, nc):
                        cell_slots.append((direction, nr * cols + nc))
                slots.append(tuple(cell_slots))
        return slots

    # --- Dimensions & identity ---

    @property
    def rows(self) -> int:
        return self.index.rows

    @property
    def cols(self) -> int:
        return self.index.cols

    @property
    def size(self) -> int:
        """Number of coordinates, included or not."""
        return len(self._slots)

    @property
    def shape(self) -> Tuple[int, ...]:
        return (self.index.rows, self.index.cols)

    def to_id(self, row: int, col: int) -> int:
        return self.index.to_id(row, col)

    def to_coordinate(self, cell: int) -> Tuple[int, int]:
        return self.index.to_coordinate(cell)

    def is_enabled(self, cell: int) -> bool:
        return 0 <= cell < len(self._slots) and self._slots[cell] is not None

    def _check_cell(self, cell: int) -> Slots:
        if not 0 <= cell < len(self._slots):
            raise InvalidCellError(f"Cell {cell!r} is not in this grid")
        slots = self._slots[cell]
        if slots is None:
            raise InvalidCellError(f"Cell {cell} is excluded by the mask")
        return slots

    # --- Iteration ---

    def cells(self) -> Iterator[int]:
        """Included cells in fixed row-major order."""
        return iter(self._cells)

    def cell_count(self) -> int:
        return len(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[int]:
        return iter(self._cells)

    def rows_of_cells(self) -> Iterator[List[int]]:
        """Included cells batched per row, top to bottom."""
        cols = self.index.cols
        for r in range(self.index.rows):
            start = r * cols
            yield [cell for cell in range(start, start + cols) if self._slots[cell] is not None]

    def random_cell(self, rng) -> int:
        return rng.choice(self._cells)

    # --- Topology ---

    def neighbors(self, cell: int, direction: Optional[int] = None) -> List[int]:
        slots = self._check_cell(cell)
        if direction is None:
            return [n for _, n in slots]
        return [n for d, n in slots if d == direction]

    def neighbor(self, cell: int, direction: int) -> Optional[int]:
        for d, n in self._check_cell(cell):
            if d == direction:
                return n
        return None

    def biased_neighbors(self, cell: int) -> Tuple[Optional[int], Optional[int]]:
        """
        (up, along) neighbours for the directionally biased generators.
        Following either strictly approaches the top-right corner.
        """
        return self.neighbor(cell, self.NORTH), self.neighbor(cell, self.EAST)

    def _slot_of(self, cell: int, other: int) -> int:
        for i, (_, n) in enumerate(self._slots[cell]):
            if n == other:
                return i
        return -1

    # --- Passages ---

    def link(self, a: int, b: int):
        """
        Creates a passage between two adjacent included cells.
        Validates everything before mutating so a rejected call leaves no trace.
        """
        self._check_cell(a)
        self._check_cell(b)
        slot_a = self._slot_of(a, b)
        if slot_a < 0:
            raise NonAdjacentLinkError(f"Cells {a} and {b} are not adjacent")
        slot_b = self._slot_of(b, a)

        self.links[a] |= 1 << slot_a
        self.links[b] |= 1 << slot_b

    def carve(self, cell: int, direction: int) -> int:
        """Links the cell to its neighbour in 'direction' and returns that neighbour."""
        other = self.neighbor(cell, direction)
        if other is None:
            raise NonAdjacentLinkError(f"Cell {cell} has no neighbour in direction {direction}")
        self.link(cell, other)
        return other

    def is_linked(self, a: int, b: int) -> bool:
        self._check_cell(a)
        self._check_cell(b)
        slot = self._slot_of(a, b)
        return slot >= 0 and (self.links[a] >> slot) & 1 == 1

    def is_linked_towards(self, cell: int, direction: int) -> bool:
        slots = self._check_cell(cell)
        bits = self.links[cell]
        for i, (d, _) in enumerate(slots):
            if d == direction and (bits >> i) & 1:
                return True
        return False

    def linked_neighbors(self, cell: int) -> List[int]:
        slots = self._check_cell(cell)
        bits = self.links[cell]
        return [n for i, (_, n) in enumerate(slots) if (bits >> i) & 1]

    def degree(self, cell: int) -> int:
        self._check_cell(cell)
        return bin(self.links[cell]).count('1')

    def link_count(self) -> int:
        return sum(bin(bits).count('1') for bits in self.links) // 2

    def link_set(self) -> FrozenSet[Tuple[int, int]]:
        pairs = set()
        for cell in self._cells:
            for other in self.linked_neighbors(cell):
                pairs.add((cell, other) if cell < other else (other, cell))
        return frozenset(pairs)

    def snapshot_links(self) -> array:
        return array('I', self.links)

    def restore_links(self, snapshot: array):
        if len(snapshot) != len(self.links):
            raise ValueError(f"Link snapshot has {len(snapshot)} cells, grid has {len(self.links)}")
        self.links = array('I', snapshot)

    def load_links(self, links: array):
        """
        Installs passages from an outside source such as a file. Unlike
        restore_links, the data is checked first: excluded cells carry no
        bits, every bit names an existing slot, and every passage is present
        on both ends. Raises ValueError and leaves the grid untouched otherwise.
        """
        if len(links) != len(self.links):
            raise ValueError(f"Link data has {len(links)} cells, grid has {len(self.links)}")
        for cell, bits in enumerate(links):
            slots = self._slots[cell]
            if slots is None:
                if bits:
                    raise ValueError(f"Excluded cell {cell} has passages")
                continue
            if bits >> len(slots):
                raise ValueError(f"Cell {cell} has passages through slots it does not have")
            for i, (_, n) in enumerate(slots):
                if (bits >> i) & 1 and not (links[n] >> self._slot_of(n, cell)) & 1:
                    raise ValueError(f"Passage {cell} -> {n} is one-sided")
        self.links = array('I', links)

    def reachable_count(self, start: int, through_links: bool = True) -> int:
        """
        Counts included cells reachable from start, either through passages
        or (through_links=False) through raw adjacency.
        """
        self._check_cell(start)
        seen = bytearray(len(self._slots))
        seen[start] = 1
        queue = deque([start])
        count = 1
        while queue:
            cell = queue.popleft()
            bits = self.links[cell]
            for i, (_, n) in enumerate(self._slots[cell]):
                if through_links and not (bits >> i) & 1:
                    continue
                if not seen[n]:
                    seen[n] = 1
                    count += 1
                    queue.append(n)
        return count

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rows}x{self.cols}, cells={len(self._cells)}, links={self.link_count()})"
