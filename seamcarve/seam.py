"""
Minimum-cost vertical seam search and seam removal.

A seam runs from a starting pixel down to the last row, moving at most one
column per row. The cheapest seam from (row, col) is that pixel's energy plus
the cheapest seam from one of the pixels just below it:

    cost(row, col) = energy(row, col) + min(cost(row + 1, col),
                                            cost(row + 1, col + 1),
                                            cost(row + 1, col - 1))

Candidates are compared in that order and only a strictly smaller cost
replaces the current best, so ties go straight down, then down-right.

Rows depend only on the row below, so the costs are filled in one sweep from
the last row upward instead of recursing once per row.
"""

import logging
import torch
from typing import Dict, List, NamedTuple, Optional, Tuple

from .buffer import Position
from .energy import EnergyField
from .errors import OutOfRangeError

logger = logging.getLogger(__name__)

# Column offsets of the below-neighbors, in priority order
BELOW_OFFSETS = (0, 1, -1)

# Stands in for a missing neighbor; never added to
_MISSING = torch.iinfo(torch.int64).max


class Seam(NamedTuple):
    """Seam positions, one per row from top to bottom, and its total energy."""
    positions: Tuple[Position, ...]
    cost: int

    @property
    def columns(self) -> torch.Tensor:
        """Column index per row (len(positions),)."""
        return torch.tensor([p.col for p in self.positions], dtype=torch.long)


class SeamSearch:
    """
    Cheapest downward seam from any pixel of one buffer.

    Results are cached for the lifetime of the search. The cache is only
    valid while the buffer is unchanged; call `clear` (or use a new
    SeamSearch) after the buffer has been modified.
    """

    def __init__(self, energy_field: EnergyField):
        self.energy_field = energy_field
        self._cache: Dict[Position, Seam] = {}
        self._costs: Optional[torch.Tensor] = None
        self._choices: Optional[torch.Tensor] = None

    @property
    def buffer(self):
        return self.energy_field.buffer

    def clear(self) -> None:
        """Forget every cached result."""
        self._cache.clear()
        self._costs = None
        self._choices = None

    def below_neighbors(self, row: int, col: int) -> List[Position]:
        """Pixels just below (row, col): straight down, down-right, down-left."""
        candidates = [Position(row + 1, col + offset) for offset in BELOW_OFFSETS]
        return [p for p in candidates if self.buffer.in_bounds(p.row, p.col)]

    def find_seam(self, row: int, col: int) -> Seam:
        """
        Cheapest seam from (row, col) to the last row.

        Args:
            row: Starting row
            col: Starting column

        Returns:
            Seam with one position per row from `row` down, and its cost
        """
        buffer = self.buffer
        if not buffer.in_bounds(row, col):
            raise OutOfRangeError(row, col, buffer.width, buffer.height)

        key = Position(row, col)
        if key in self._cache:
            return self._cache[key]

        if self._costs is None:
            self._sweep()

        positions = [key]
        current = col
        for r in range(row, buffer.height - 1):
            current = self._choices[r, current].item()
            positions.append(Position(r + 1, current))

        seam = Seam(tuple(positions), self._costs[row, col].item())
        self._cache[key] = seam
        return seam

    def _sweep(self) -> None:
        """Fill the cost and next-column tables from the last row upward."""
        energy = self.energy_field.energy_map()
        H, W = energy.shape
        logger.debug("Seam sweep over %dx%d buffer", W, H)

        costs = torch.empty_like(energy)
        choices = torch.zeros(H, W, dtype=torch.long, device=energy.device)
        offsets = torch.tensor(BELOW_OFFSETS, dtype=torch.long, device=energy.device)
        cols = torch.arange(W, device=energy.device)

        costs[H - 1] = energy[H - 1]
        for r in range(H - 2, -1, -1):
            below = costs[r + 1]

            # Shifted copies of the row below, one per offset
            down_right = torch.full_like(below, _MISSING)
            down_right[:-1] = below[1:]
            down_left = torch.full_like(below, _MISSING)
            down_left[1:] = below[:-1]

            candidates = torch.stack([below, down_right, down_left])  # (3, W)
            # argmin returns the first minimum, which keeps the priority order
            best = torch.argmin(candidates, dim=0)
            best_cost = candidates.gather(0, best.unsqueeze(0)).squeeze(0)

            choices[r] = cols + offsets[best]
            costs[r] = energy[r] + best_cost

        self._costs = costs
        self._choices = choices


def remove_seam(pixels: torch.Tensor, width: int, height: int,
                seam: torch.Tensor) -> torch.Tensor:
    """
    Remove a vertical seam from a flat row-major pixel array.

    Args:
        pixels: Pixel tensor (width * height, C)
        width: Current width
        height: Current height
        seam: Column index per row (height,)

    Returns:
        Compacted pixel tensor ((width - 1) * height, C)
    """
    C = pixels.shape[1]
    image = pixels.reshape(height, width, C)

    carved = torch.zeros(height, width - 1, C, dtype=pixels.dtype, device=pixels.device)
    for i in range(height):
        col = seam[i].item()
        carved[i, :col] = image[i, :col]
        carved[i, col:] = image[i, col + 1:]

    return carved.reshape(height * (width - 1), C)
