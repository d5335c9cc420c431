from typing import Optional, Tuple

import numpy as np

from mazes.core.errors import InvalidDimensionsError, OutOfBoundsError


class Mask:
    """
    Boolean inclusion predicate over a rows x cols coordinate space.
    True = cell enabled, False = carved out of the maze entirely.
    """
    DISABLED_GLYPH = 'X'
    # Grayscale pixels darker than this are disabled
    IMAGE_THRESHOLD = 128

    __slots__ = ('bits',)

    def __init__(self, rows: int, cols: int):
        if rows < 1 or cols < 1:
            raise InvalidDimensionsError(f"Mask extents must be positive, got {rows}x{cols}")
        self.bits = np.ones((rows, cols), dtype=bool)

    @property
    def rows(self) -> int:
        return self.bits.shape[0]

    @property
    def cols(self) -> int:
        return self.bits.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.bits.shape

    @classmethod
    def from_array(cls, data) -> "Mask":
        arr = np.asarray(data, dtype=bool)
        if arr.ndim != 2:
            raise InvalidDimensionsError(f"Mask data must be 2D, got shape {arr.shape}")
        mask = cls(*arr.shape)
        mask.bits[:, :] = arr
        return mask

    @classmethod
    def from_text(cls, text: str) -> "Mask":
        """
        One line per row. 'X' disables a cell, any other glyph enables it.
        Short lines are padded with enabled cells.
        """
        lines = [line.rstrip('\r') for line in text.split('\n')]
        # Only empty lines at either end are dropped; a row of spaces is enabled cells
        while lines and not lines[-1]:
            lines.pop()
        while lines and not lines[0]:
            lines.pop(0)
        if not lines:
            raise InvalidDimensionsError("Mask text is empty")

        cols = max(len(line) for line in lines)
        mask = cls(len(lines), cols)
        for row, line in enumerate(lines):
            for col, glyph in enumerate(line):
                if glyph.upper() == cls.DISABLED_GLYPH:
                    mask.bits[row, col] = False
        return mask

    @classmethod
    def from_image(cls, path: str) -> "Mask":
        import cv2

        image = cv2.imread(path, cv2.IMREAD_GRAYSCALE)
        if image is None:
            raise ValueError(f"Could not read mask image {path}")
        return cls.from_array(image >= cls.IMAGE_THRESHOLD)

    def _check(self, row: int, col: int):
        if not (0 <= row < self.bits.shape[0] and 0 <= col < self.bits.shape[1]):
            raise OutOfBoundsError(f"Coordinate ({row}, {col}) out of bounds")

    def is_enabled(self, row: int, col: int) -> bool:
        self._check(row, col)
        return bool(self.bits[row, col])

    def disable(self, row: int, col: int):
        self._check(row, col)
        self.bits[row, col] = False

    def enable(self, row: int, col: int):
        self._check(row, col)
        self.bits[row, col] = True

    def count_enabled(self) -> int:
        return int(np.count_nonzero(self.bits))

    def first_enabled(self) -> Optional[Tuple[int, int]]:
        # flatnonzero is row-major, matching grid iteration order
        enabled = np.flatnonzero(self.bits)
        if enabled.size == 0:
            return None
        return divmod(int(enabled[0]), self.bits.shape[1])
