"""
High-level carving: pick the globally cheapest seam and cut it out.
"""

import logging
from typing import List

from .buffer import PixelBuffer
from .energy import EnergyField
from .errors import UnsupportedError
from .imaging import buffer_from_image, buffer_to_image
from .seam import Seam, SeamSearch, remove_seam

logger = logging.getLogger(__name__)


class SeamCarver:
    """
    Narrows an image one vertical seam at a time.

    The carver owns its PixelBuffer; every search gets its own cache, so two
    carvers never share state.
    """

    def __init__(self, buffer: PixelBuffer):
        self._buffer = buffer

    @classmethod
    def from_image(cls, image, device='cpu') -> 'SeamCarver':
        """Create a carver from a Pillow image."""
        return cls(buffer_from_image(image, device=device))

    def to_image(self):
        """Current pixels as a Pillow image."""
        return buffer_to_image(self._buffer)

    @property
    def buffer(self) -> PixelBuffer:
        return self._buffer

    @property
    def width(self) -> int:
        return self._buffer.width

    @property
    def height(self) -> int:
        return self._buffer.height

    def best_seam(self) -> Seam:
        """
        Cheapest seam starting anywhere in the first row.

        Ties go to the smallest starting column.
        """
        if self.width == 0:
            raise UnsupportedError("No seam in a buffer of width 0")

        search = SeamSearch(EnergyField(self._buffer))
        best = search.find_seam(0, 0)
        for col in range(1, self.width):
            seam = search.find_seam(0, col)
            if seam.cost < best.cost:
                best = seam
        return best

    def cut_seam(self) -> Seam:
        """
        Remove the cheapest seam, narrowing the buffer by one column.

        Returns:
            The seam that was removed
        """
        if self.width == 0:
            raise UnsupportedError("Cannot carve a buffer of width 0")

        width, height = self._buffer.dimensions()
        seam = self.best_seam()
        carved = remove_seam(self._buffer.pixels, width, height, seam.columns)
        self._buffer.replace(width - 1, carved)

        logger.debug("Removed seam with cost %d, width now %d", seam.cost, width - 1)
        return seam

    def carve(self, n_seams: int) -> List[Seam]:
        """
        Remove n_seams seams.

        Args:
            n_seams: Number of seams to remove, at most the current width

        Returns:
            Removed seams, in removal order
        """
        if n_seams < 0:
            raise ValueError(f"Invalid number of seams: {n_seams}")
        if n_seams > self.width:
            raise UnsupportedError(
                f"Cannot remove {n_seams} seams from a buffer of width {self.width}")

        return [self.cut_seam() for _ in range(n_seams)]
