"""Exceptions raised by the seam carving core."""


class SeamCarvingError(Exception):
    """Base class for all seamcarve errors."""


class OutOfRangeError(SeamCarvingError, IndexError):
    """A (row, col) position lies outside the current buffer."""

    def __init__(self, row: int, col: int, width: int, height: int):
        self.row = row
        self.col = col
        self.width = width
        self.height = height
        super().__init__(
            f"Position ({row}, {col}) out of range for {width}x{height} buffer"
        )


class UnsupportedError(SeamCarvingError, RuntimeError):
    """The requested carve cannot be performed on the current buffer."""
