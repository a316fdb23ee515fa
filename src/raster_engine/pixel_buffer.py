"""Fixed-size RGBA pixel buffer with bounds-tolerant access.

The buffer is a row-major byte array, 4 bytes per pixel (R, G, B, A):

    offset(x, y) = (y * width + x) * 4

Storage is a C-contiguous numpy uint8 array of shape (H, W, 4), so the flat
view ``data`` has exactly that layout and can be handed to a presentation
layer (Pillow, a GUI blit, a socket) without copying.

Invariants:
    - width and height are fixed at creation; the array is never reallocated
    - every write is bounds-checked; out-of-range coordinates are a no-op
    - reads outside the buffer return None instead of raising
"""

import logging
from typing import NamedTuple, Optional

import numpy as np
from PIL import Image

from src.utils.color import TRANSPARENT, Color, ColorLike

logger = logging.getLogger(__name__)

CHANNELS = 4


class Point(NamedTuple):
    """Integer buffer-space coordinate (may lie outside the buffer)."""
    x: int
    y: int


class PixelBuffer:
    """RGBA pixel surface mutated in place by the raster engine.

    Attributes
    ----------
    width : int
        Width in pixels
    height : int
        Height in pixels
    background : Color
        Color used by clear() and for the initial fill
    pixels : np.ndarray
        (H, W, 4) uint8 view of the storage
    """

    def __init__(self, width: int, height: int, background: ColorLike = TRANSPARENT):
        if width <= 0 or height <= 0:
            raise ValueError(f"Buffer size must be positive, got {width}x{height}")

        self.width = int(width)
        self.height = int(height)
        self.background = Color.parse(background)
        self.pixels = np.empty((self.height, self.width, CHANNELS), dtype=np.uint8)
        self.clear()

        logger.debug(f"PixelBuffer allocated: {self.width}x{self.height}, bg={self.background}")

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"

    @property
    def data(self) -> np.ndarray:
        """Flat uint8 view of length width * height * 4 (shares storage)."""
        return self.pixels.reshape(-1)

    def offset(self, x: int, y: int) -> int:
        """Byte offset of pixel (x, y) in ``data``."""
        return (y * self.width + x) * CHANNELS

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Optional[Color]:
        """Read pixel (x, y); None when outside the buffer."""
        if not self.in_bounds(x, y):
            return None
        r, g, b, a = self.pixels[y, x]
        return Color(int(r), int(g), int(b), int(a))

    def set(self, x: int, y: int, color: Color) -> None:
        """Write pixel (x, y); silently ignored when outside the buffer.

        ``color`` is written as-is and must have channels in [0, 255]; Brush
        and StrokeSession.set_color run every color through Color.parse.
        """
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y, x] = color

    def fill_span(self, x0: int, x1: int, y: int, color: Color) -> None:
        """Write the inclusive horizontal run x0..x1 on row y, clipped to the buffer.

        Same color contract as ``set``.
        """
        if y < 0 or y >= self.height:
            return
        if x0 > x1:
            x0, x1 = x1, x0
        x0 = max(x0, 0)
        x1 = min(x1, self.width - 1)
        if x0 > x1:
            return
        self.pixels[y, x0:x1 + 1] = color

    def clear(self, color: Optional[ColorLike] = None) -> None:
        """Fill the whole buffer (default: background color)."""
        fill = self.background if color is None else Color.parse(color)
        self.pixels[...] = fill

    def count_painted(self, color: Color) -> int:
        """Number of pixels exactly equal to ``color``."""
        return int(np.all(self.pixels == np.asarray(color, dtype=np.uint8), axis=-1).sum())

    def copy(self) -> "PixelBuffer":
        """Independent snapshot with the same size, background and content."""
        clone = PixelBuffer(self.width, self.height, self.background)
        clone.pixels[...] = self.pixels
        return clone

    def tobytes(self) -> bytes:
        return self.pixels.tobytes()

    def to_image(self) -> Image.Image:
        """Presentation copy of the buffer as a Pillow RGBA image."""
        return Image.fromarray(self.pixels.copy())
