from bisect import bisect_right
from typing import List, Sequence, Tuple

from mazes.core.errors import InvalidDimensionsError, OutOfBoundsError


class CellIndex:
    """
    Row-major bijection between (row, col) and a dense cell id.
    id = row * cols + col
    """
    __slots__ = ('rows', 'cols', 'size')

    def __init__(self, rows: int, cols: int):
        if rows < 1 or cols < 1:
            raise InvalidDimensionsError(f"Grid extents must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.size = rows * cols

    def to_id(self, row: int, col: int) -> int:
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return row * self.cols + col
        raise OutOfBoundsError(f"Coordinate ({row}, {col}) out of bounds")

    def to_coordinate(self, cell: int) -> Tuple[int, int]:
        if 0 <= cell < self.size:
            return divmod(cell, self.cols)
        raise OutOfBoundsError(f"Cell id {cell} out of bounds")


class PolarCellIndex:
    """
    Maps (ring, position) to a dense id. Ring 0 is the centre; ids run
    ring by ring outward, clockwise within a ring.
    """
    __slots__ = ('ring_lengths', 'offsets', 'size')

    def __init__(self, ring_lengths: Sequence[int]):
        if not ring_lengths or any(length < 1 for length in ring_lengths):
            raise InvalidDimensionsError(f"Invalid ring lengths {list(ring_lengths)}")
        self.ring_lengths: Tuple[int, ...] = tuple(ring_lengths)

        offsets: List[int] = []
        total = 0
        for length in self.ring_lengths:
            offsets.append(total)
            total += length
        self.offsets: Tuple[int, ...] = tuple(offsets)
        self.size = total

    @property
    def rings(self) -> int:
        return len(self.ring_lengths)

    def to_id(self, ring: int, position: int) -> int:
        if 0 <= ring < len(self.ring_lengths) and 0 <= position < self.ring_lengths[ring]:
            return self.offsets[ring] + position
        raise OutOfBoundsError(f"Coordinate ({ring}, {position}) out of bounds")

    def to_coordinate(self, cell: int) -> Tuple[int, int]:
        if not 0 <= cell < self.size:
            raise OutOfBoundsError(f"Cell id {cell} out of bounds")
        ring = bisect_right(self.offsets, cell) - 1
        return ring, cell - self.offsets[ring]
