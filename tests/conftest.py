"""Shared test fixtures for the seamcarve test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.buffer import PixelBuffer


@pytest.fixture
def random_buffer():
    """Seeded 6x5 RGB buffer with arbitrary colors."""
    torch.manual_seed(42)
    return make_random_buffer(5, 6)


def make_uniform_buffer(H, W, color=(40, 80, 120), mode='RGB'):
    """Every pixel the same color."""
    pixels = torch.tensor(color, dtype=torch.int64).unsqueeze(0).repeat(H * W, 1)
    return PixelBuffer(W, H, pixels, mode=mode)


def make_random_buffer(H, W, channels=3):
    """Random 8-bit colors, RGB or RGBA."""
    mode = 'RGBA' if channels == 4 else 'RGB'
    pixels = torch.randint(0, 256, (H * W, channels), dtype=torch.int64)
    return PixelBuffer(W, H, pixels, mode=mode)


def make_gray_buffer(rows):
    """RGB buffer from a list of rows of gray levels (same value on R, G, B)."""
    H, W = len(rows), len(rows[0])
    colors = [(v, v, v) for row in rows for v in row]
    return PixelBuffer(W, H, colors)


def make_index_buffer(H, W):
    """Each pixel encodes its own (row, col) in the R and G channels."""
    colors = [(r, c, 0) for r in range(H) for c in range(W)]
    return PixelBuffer(W, H, colors)
