"""
Conversion between Pillow images and PixelBuffers.

Reading and writing files is left to the caller; these helpers only move
pixels between an in-memory PIL image and a buffer.
"""

import numpy as np
import torch
from PIL import Image
from typing import Sequence

from .buffer import MODE_CHANNELS, PixelBuffer
from .seam import Seam


def buffer_from_image(image: Image.Image, device='cpu') -> PixelBuffer:
    """
    Snapshot a Pillow image into a PixelBuffer.

    Modes other than RGB and RGBA are converted first, to RGBA if the image
    has an alpha band and to RGB otherwise.
    """
    if image.mode not in MODE_CHANNELS:
        image = image.convert('RGBA' if 'A' in image.getbands() else 'RGB')

    width, height = image.size
    img_array = np.array(image, dtype=np.int64).reshape(width * height, len(image.getbands()))
    pixels = torch.from_numpy(img_array).to(device)
    return PixelBuffer(width, height, pixels, mode=image.mode, device=device)


def buffer_to_image(buffer: PixelBuffer) -> Image.Image:
    """Pillow image holding the buffer's current pixels."""
    if buffer.width == 0:
        return Image.new(buffer.mode, (0, buffer.height))

    img_array = buffer.grid().cpu().numpy()
    img_array = img_array.clip(0, 255).astype(np.uint8)
    return Image.fromarray(img_array)


def visualize_seam(buffer: PixelBuffer, seam: Seam,
                   color: Sequence[int] = (255, 0, 0)) -> PixelBuffer:
    """Copy of the buffer with the seam painted in `color` (alpha kept)."""
    grid = buffer.grid()
    paint = torch.tensor(color[:3], dtype=grid.dtype, device=grid.device)

    for row, col in seam.positions:
        grid[row, col, :3] = paint

    return PixelBuffer(buffer.width, buffer.height, grid.reshape(-1, buffer.channels),
                       mode=buffer.mode, device=buffer.device)
