"""
Pixel storage for seam carving.

Pixels are kept as a flat, row-major tensor of shape (width * height, C):
pixel (row, col) lives at index col + row * width. Channels are R, G, B and
optionally A; alpha is carried along but never looked at by the energy.
"""

import torch
from typing import NamedTuple, Sequence, Tuple, Union

from .errors import OutOfRangeError

MODE_CHANNELS = {'RGB': 3, 'RGBA': 4}


class Position(NamedTuple):
    row: int
    col: int


Color = Tuple[int, ...]


class PixelBuffer:
    """
    Raw pixel data plus dimensions.

    The width and the backing tensor only ever change together through
    `replace`, so len(pixels) == width * height holds at all times.
    """

    def __init__(self, width: int, height: int,
                 pixels: Union[torch.Tensor, Sequence[Sequence[int]]],
                 mode: str = 'RGB', device='cpu'):
        """
        Args:
            width: Number of columns
            height: Number of rows
            pixels: Row-major colors, tensor (width * height, C) or a
                    sequence of color tuples
            mode: Pixel-format tag, 'RGB' or 'RGBA'
            device: torch device for the pixel tensor
        """
        if mode not in MODE_CHANNELS:
            raise ValueError(f"Invalid mode: {mode!r}. Must be one of {sorted(MODE_CHANNELS)}")
        if width < 0 or height < 1:
            raise ValueError(f"Invalid dimensions: {width}x{height}")

        self._mode = mode
        self._height = height
        self._width = width
        # Own a private copy; later writes to the source must not leak in
        if isinstance(pixels, torch.Tensor):
            pixels = pixels.clone()
        self._pixels = self._validate(width, pixels, device=device)

    def _validate(self, width: int, pixels, device=None) -> torch.Tensor:
        channels = MODE_CHANNELS[self._mode]
        pixels = torch.as_tensor(pixels, device=device)
        if pixels.numel() == 0:
            pixels = pixels.reshape(0, channels)
        elif pixels.is_floating_point() or pixels.is_complex():
            raise ValueError(f"Expected integer channel values, got {pixels.dtype}")
        pixels = pixels.to(torch.int64)

        expected = width * self._height
        if pixels.dim() != 2 or pixels.shape[1] != channels:
            raise ValueError(
                f"Expected pixels of shape ({expected}, {channels}), got {tuple(pixels.shape)}")
        if pixels.shape[0] != expected:
            raise ValueError(
                f"Expected {expected} pixels for {width}x{self._height}, got {pixels.shape[0]}")
        return pixels

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def channels(self) -> int:
        return MODE_CHANNELS[self._mode]

    @property
    def pixels(self) -> torch.Tensor:
        """Copy of the flat pixel array (width * height, C)."""
        return self._pixels.clone()

    @property
    def device(self) -> torch.device:
        return self._pixels.device

    def dimensions(self) -> Tuple[int, int]:
        return self._width, self._height

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._height and 0 <= col < self._width

    def get(self, row: int, col: int) -> Color:
        """Color at (row, col). Raises OutOfRangeError outside the buffer."""
        if not self.in_bounds(row, col):
            raise OutOfRangeError(row, col, self._width, self._height)
        return tuple(self._pixels[col + row * self._width].tolist())

    def grid(self) -> torch.Tensor:
        """Copy of the pixels shaped (height, width, C)."""
        return self._pixels.clone().reshape(self._height, self._width, self.channels)

    def replace(self, new_width: int, new_pixels: torch.Tensor) -> None:
        """
        Swap in a new width and pixel array.

        The new array is validated first; on failure the buffer is left
        exactly as it was. The buffer takes ownership of `new_pixels`.
        """
        if new_width < 0:
            raise ValueError(f"Invalid width: {new_width}")
        pixels = self._validate(new_width, new_pixels, device=self.device)
        self._width, self._pixels = new_width, pixels

    def clone(self) -> 'PixelBuffer':
        return PixelBuffer(self._width, self._height, self._pixels,
                           mode=self._mode, device=self.device)

    def __repr__(self):
        return f"PixelBuffer(width={self._width}, height={self._height}, mode={self._mode!r})"
