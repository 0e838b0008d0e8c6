"""OpenCAD: minimal 2D rasterization on packed RGBA pixel buffers.

This package draws solid fills, rectangles, disks and lines into a
caller-owned uint32 buffer and serializes it as binary PPM (P6).

Architecture layers (strict one-way dependency):
    scripts/ → opencad/{examples,raster.scene}/ → opencad/raster/{buffer,primitives,ppm}/ → opencad/utils/

Key invariants:
    - Buffers are 1-D, row-major, len == width*height; dimensions are always
      passed explicitly
    - Colors are packed 0xAABBGGRR; alpha is stored, never blended
    - Out-of-range geometry is clipped, never an error
    - YAML-only configs
"""

__version__ = "0.3.0"
