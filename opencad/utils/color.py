"""Packed RGBA color helpers.

Provides:
    - Packing four 8-bit channels into one 32-bit color and back
    - Parsing colors from config values (ints or "#RRGGBB[AA]" strings)
    - Extracting RGB byte triplets from a packed pixel buffer

Layout:
    Bits 0-7 red, 8-15 green, 16-23 blue, 24-31 alpha, so a color written as
    a single hex literal reads 0xAABBGGRR. Alpha is carried but never blended.

Used by:
    - raster.ppm: RGB byte extraction for P6 output
    - utils.validators: color fields in scene and example configs
"""

from typing import Tuple, Union

import numpy as np

COLOR_MASK = 0xFFFFFFFF
OPAQUE = 0xFF

# Common colors (0xAABBGGRR)
BLACK = 0xFF000000
WHITE = 0xFFFFFFFF
RED = 0xFF0000FF
GREEN = 0xFF00FF00
BLUE = 0xFFFF0000


def pack_rgba(r: int, g: int, b: int, a: int = OPAQUE) -> int:
    """Pack 8-bit channels into a 0xAABBGGRR color.

    Parameters
    ----------
    r, g, b : int
        Channel values in [0, 255]
    a : int
        Alpha in [0, 255], default fully opaque

    Returns
    -------
    int
        Packed 32-bit color

    Raises
    ------
    ValueError
        If any channel is outside [0, 255]
    """
    for name, value in (('r', r), ('g', g), ('b', b), ('a', a)):
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Channel {name}={value} out of range [0, 255]")
    return (a << 24) | (b << 16) | (g << 8) | r


def unpack_rgba(color: int) -> Tuple[int, int, int, int]:
    """Split a packed color into (r, g, b, a)."""
    color &= COLOR_MASK
    return (
        color & 0xFF,
        (color >> 8) & 0xFF,
        (color >> 16) & 0xFF,
        (color >> 24) & 0xFF,
    )


def parse_color(value: Union[int, str]) -> int:
    """Convert a config color into a packed 0xAABBGGRR value.

    Parameters
    ----------
    value : int or str
        - int: already packed, must fit in 32 bits
        - "#RRGGBB": web-style hex, alpha set to 0xFF
        - "#RRGGBBAA": web-style hex with explicit alpha

    Returns
    -------
    int
        Packed color

    Raises
    ------
    ValueError
        Malformed string or integer outside [0, 0xFFFFFFFF]

    Notes
    -----
    Web-style strings list channels in reading order (red first), unlike the
    packed hex literal which lists alpha first.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid color: {value!r}")

    if isinstance(value, int):
        if not 0 <= value <= COLOR_MASK:
            raise ValueError(f"Packed color {value:#x} does not fit in 32 bits")
        return value

    if isinstance(value, str):
        text = value.strip()
        if text.startswith('#') and len(text) in (7, 9):
            try:
                channels = [int(text[i:i + 2], 16) for i in range(1, len(text), 2)]
            except ValueError as e:
                raise ValueError(f"Invalid hex color: {value!r}") from e
            if len(channels) == 3:
                channels.append(OPAQUE)
            return pack_rgba(*channels)

    raise ValueError(f"Invalid color: {value!r} (expected int or '#RRGGBB[AA]')")


def to_hex(color: int) -> str:
    """Format a packed color as "#RRGGBBAA"."""
    r, g, b, a = unpack_rgba(color)
    return f"#{r:02x}{g:02x}{b:02x}{a:02x}"


def rgb_bytes(pixels: np.ndarray) -> np.ndarray:
    """Extract (N, 3) uint8 RGB triplets from packed uint32 pixels.

    Parameters
    ----------
    pixels : np.ndarray
        Packed colors, any shape, dtype uint32

    Returns
    -------
    np.ndarray
        Shape (N, 3), dtype uint8, channels in R, G, B order

    Notes
    -----
    Forces little-endian byte order so byte 0 is red on every host.
    """
    packed = np.ascontiguousarray(pixels, dtype='<u4').reshape(-1)
    return packed.view(np.uint8).reshape(-1, 4)[:, :3]


def from_rgb_bytes(rgb: np.ndarray, alpha: int = OPAQUE) -> np.ndarray:
    """Pack (N, 3) uint8 RGB triplets into uint32 colors with a fixed alpha."""
    rgb = np.asarray(rgb, dtype=np.uint32).reshape(-1, 3)
    return (
        (np.uint32(alpha) << np.uint32(24))
        | (rgb[:, 2] << np.uint32(16))
        | (rgb[:, 1] << np.uint32(8))
        | rgb[:, 0]
    ).astype(np.uint32)
