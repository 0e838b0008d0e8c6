"""Pixel buffers and the borrowed PixelView.

A pixel buffer is a caller-owned, one-dimensional, C-contiguous numpy array
of packed uint32 colors (0xAABBGGRR), row-major, of length width*height.
Width and height travel alongside the array and are never inferred from it.

PixelView bundles a reference to such an array with its dimensions. It never
copies or resizes the pixels; the drawing methods forward to the functions in
raster.primitives and raster.ppm.

Usage:
    from opencad.raster.buffer import PixelView, new_pixels

    view = PixelView.allocate(800, 600)
    view.fill(0xFF202020)
    view.draw_line(0, 0, 799, 599, 0xFF2020FF)
    err = view.save_ppm("lines.ppm")
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

import numpy as np

from opencad.raster import ppm, primitives
from opencad.raster.primitives import PIXEL_DTYPE, as_grid


def new_pixels(width: int, height: int, color: int = 0) -> np.ndarray:
    """Allocate a width*height buffer filled with color.

    Raises
    ------
    ValueError
        If width or height is negative
    """
    if width < 0 or height < 0:
        raise ValueError(f"Buffer dimensions must be non-negative, got {width}x{height}")
    return np.full(width * height, color & 0xFFFFFFFF, dtype=PIXEL_DTYPE)


@dataclass(eq=False)
class PixelView:
    """Borrowed view over a caller-owned pixel buffer.

    Attributes
    ----------
    pixels : np.ndarray
        The caller's uint32 buffer (not copied)
    width : int
        Columns per row
    height : int
        Number of rows
    """

    pixels: np.ndarray
    width: int
    height: int

    @classmethod
    def allocate(cls, width: int, height: int, color: int = 0) -> "PixelView":
        """Create a view over a freshly allocated buffer."""
        return cls(new_pixels(width, height, color), width, height)

    @classmethod
    def from_ppm(cls, file_path: Union[str, Path]) -> "PixelView":
        """Load a P6 file into a new buffer (alpha set to 0xFF)."""
        pixels, width, height = ppm.read_ppm(file_path)
        return cls(pixels, width, height)

    @property
    def grid(self) -> np.ndarray:
        return as_grid(self.pixels, self.width, self.height)

    def get(self, x: int, y: int) -> int:
        """Read the packed color at (x, y); raises IndexError outside the buffer."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        return int(self.pixels[y * self.width + x])

    def fill(self, color: int) -> None:
        primitives.fill(self.pixels, self.width, self.height, color)

    def fill_rect(self, x0: int, y0: int, w: int, h: int, color: int) -> None:
        primitives.fill_rect(self.pixels, self.width, self.height, x0, y0, w, h, color)

    def fill_circle(self, cx: int, cy: int, r: int, color: int) -> None:
        primitives.fill_circle(self.pixels, self.width, self.height, cx, cy, r, color)

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, color: int) -> None:
        primitives.draw_line(self.pixels, self.width, self.height, x1, y1, x2, y2, color)

    def save_ppm(self, file_path: Union[str, Path]) -> int:
        """Write the buffer as P6; returns 0 or the OS error number."""
        return ppm.save_to_ppm_file(self.pixels, self.width, self.height, file_path)
