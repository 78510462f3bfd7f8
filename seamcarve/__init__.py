"""
Content-aware image narrowing by vertical seam carving.

Based on "Seam Carving for Content-Aware Image Resizing"
by Avidan & Shamir, 2007.
"""

__version__ = "0.1.0"

from .errors import SeamCarvingError, OutOfRangeError, UnsupportedError
from .buffer import PixelBuffer, Position
from .energy import EnergyField
from .seam import Seam, SeamSearch, remove_seam
from .carving import SeamCarver
from .imaging import buffer_from_image, buffer_to_image, visualize_seam

__all__ = [
    'SeamCarvingError',
    'OutOfRangeError',
    'UnsupportedError',
    'PixelBuffer',
    'Position',
    'EnergyField',
    'Seam',
    'SeamSearch',
    'remove_seam',
    'SeamCarver',
    'buffer_from_image',
    'buffer_to_image',
    'visualize_seam',
]
