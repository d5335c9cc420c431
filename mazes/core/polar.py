import math
from typing import Iterator, List, Optional, Tuple

from mazes.core.cells import PolarCellIndex
from mazes.core.errors import InvalidDimensionsError
from mazes.core.grid import Grid, Slots


def ring_lengths(rings: int) -> List[int]:
    """
    Cell count per ring. Ring 0 is one centre cell; every other ring
    subdivides the previous ring's cells so that cells stay roughly square.
    """
    if rings < 1:
        raise InvalidDimensionsError(f"A polar grid needs at least one ring, got {rings}")

    ring_height = 1.0 / rings
    lengths = [1]
    for ring in range(1, rings):
        radius = ring / rings
        circumference = 2 * math.pi * radius
        previous = lengths[-1]
        estimated_width = circumference / previous
        ratio = max(1, round(estimated_width / ring_height))
        lengths.append(previous * ratio)
    return lengths


class PolarGrid(Grid):
    """
    Circular grid of concentric rings. Coordinates are (ring, position),
    with positions increasing clockwise. Outward neighbours may be several
    cells wide where the next ring subdivides.
    """
    CLOCKWISE         = 0b00010000
    COUNTER_CLOCKWISE = 0b00100000
    INWARD            = 0b01000000
    OUTWARD           = 0b10000000

    __slots__ = ()

    def __init__(self, rings: int):
        self.index = PolarCellIndex(ring_lengths(rings))
        self.mask = None
        self._build(self._polar_slots())

    def _polar_slots(self) -> List[Slots]:
        lengths = self.index.ring_lengths
        to_id = self.index.to_id
        slots: List[Slots] = []

        for ring, length in enumerate(lengths):
            for position in range(length):
                cell_slots = []
                if length > 1:
                    cell_slots.append((self.CLOCKWISE, to_id(ring, (position + 1) % length)))
                    if length > 2:
                        cell_slots.append((self.COUNTER_CLOCKWISE, to_id(ring, (position - 1) % length)))
                if ring > 0:
                    ratio = length // lengths[ring - 1]
                    cell_slots.append((self.INWARD, to_id(ring - 1, position // ratio)))
                if ring + 1 < len(lengths):
                    ratio = lengths[ring + 1] // length
                    for k in range(ratio):
                        cell_slots.append((self.OUTWARD, to_id(ring + 1, position * ratio + k)))

                if len(cell_slots) > 32:
                    raise InvalidDimensionsError(f"Ring {ring} fans out to too many cells")
                slots.append(tuple(cell_slots))
        return slots

    @property
    def rings(self) -> int:
        return self.index.rings

    @property
    def rows(self) -> int:
        return self.index.rings

    @property
    def cols(self) -> int:
        return self.index.ring_lengths[-1]

    @property
    def shape(self) -> Tuple[int, ...]:
        return (self.index.size,)

    def rows_of_cells(self) -> Iterator[List[int]]:
        """Cells batched per ring, centre first."""
        for offset, length in zip(self.index.offsets, self.index.ring_lengths):
            yield list(range(offset, offset + length))

    def biased_neighbors(self, cell: int) -> Tuple[Optional[int], Optional[int]]:
        """
        (inward, clockwise) neighbours. Clockwise stops at the last position
        of a ring so that runs never wrap into a cycle.
        """
        inward = self.neighbor(cell, self.INWARD)
        ring, position = self.index.to_coordinate(cell)
        if position == self.index.ring_lengths[ring] - 1:
            return inward, None
        return inward, self.neighbor(cell, self.CLOCKWISE)

    def __repr__(self) -> str:
        return f"PolarGrid(rings={self.rings}, cells={len(self._cells)}, links={self.link_count()})"
