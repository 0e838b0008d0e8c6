"""Rasterization primitives and PPM serialization.

Modules:
    - primitives: fill, fill_rect, fill_circle, draw_line
    - buffer: PixelView (borrowed buffer + dimensions), buffer allocation
    - ppm: P6 encoding, writing and reading
    - scene: rendering of validated scene.v1 descriptions

Invariants:
    - Primitives never allocate pixel storage and never raise for geometry
    - save_to_ppm_file reports OS failures as errno codes, write_ppm raises

Used by:
    - examples: the checker/circle/lines/brick pictures
    - scripts/render_scene.py, scripts/render_examples.py
"""

from opencad.raster.buffer import PixelView, new_pixels
from opencad.raster.ppm import (
    PPMFormatError,
    encode_ppm,
    read_ppm,
    save_to_ppm_file,
    write_ppm,
)
from opencad.raster.primitives import draw_line, fill, fill_circle, fill_rect

__all__ = [
    "PPMFormatError",
    "PixelView",
    "draw_line",
    "encode_ppm",
    "fill",
    "fill_circle",
    "fill_rect",
    "new_pixels",
    "read_ppm",
    "save_to_ppm_file",
    "write_ppm",
]
