"""
Energy function for seam carving.

The energy of a pixel measures how much it differs from its horizontal and
vertical neighbors. Low-energy pixels are preferred for removal.

For each neighbor that exists, the squared differences of the R, G and B
channels against the center pixel are summed; the energy is the total over
all neighbors. Edge pixels have 3 neighbors and corners 2, and their sums
are not normalized.
"""

import torch
from typing import List

from .buffer import PixelBuffer, Position
from .errors import OutOfRangeError

# Alpha is never part of the energy
RGB_CHANNELS = 3


class EnergyField:
    """Per-pixel energy computed on demand from a PixelBuffer."""

    def __init__(self, buffer: PixelBuffer):
        self.buffer = buffer

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Orthogonal neighbors of (row, col) that lie inside the buffer.

        Order: below, above, right, left.
        """
        candidates = [
            Position(row + 1, col),
            Position(row - 1, col),
            Position(row, col + 1),
            Position(row, col - 1),
        ]
        return [p for p in candidates if self.buffer.in_bounds(p.row, p.col)]

    def energy(self, row: int, col: int) -> int:
        """
        Energy of a single pixel.

        Args:
            row: Pixel row
            col: Pixel column

        Returns:
            Sum over existing neighbors of squared RGB differences
        """
        buffer = self.buffer
        if not buffer.in_bounds(row, col):
            raise OutOfRangeError(row, col, buffer.width, buffer.height)

        center = buffer.get(row, col)
        total = 0
        for neighbor in self.neighbors(row, col):
            color = buffer.get(neighbor.row, neighbor.col)
            total += sum((color[k] - center[k]) ** 2 for k in range(RGB_CHANNELS))
        return total

    def energy_map(self) -> torch.Tensor:
        """
        Energy of every pixel at once.

        Each squared difference between two adjacent pixels is computed once
        and credited to both of them.

        Returns:
            Energy map (H, W), int64
        """
        rgb = self.buffer.grid()[..., :RGB_CHANNELS]
        H, W = rgb.shape[0], rgb.shape[1]
        energy = torch.zeros(H, W, dtype=torch.int64, device=rgb.device)

        # Vertical pairs (row, row + 1)
        diff_v = ((rgb[1:] - rgb[:-1]) ** 2).sum(dim=-1)
        energy[:-1] += diff_v
        energy[1:] += diff_v

        # Horizontal pairs (col, col + 1)
        diff_h = ((rgb[:, 1:] - rgb[:, :-1]) ** 2).sum(dim=-1)
        energy[:, :-1] += diff_h
        energy[:, 1:] += diff_h

        return energy
