"""Binary PPM (P6) serialization.

File layout:
    b"P6\\n{width} {height}\\n255\\n" followed by width*height RGB triplets,
    row-major, no padding. Each triplet is bits 0-7, 8-15 and 16-23 of the
    packed pixel; the alpha byte is dropped.

Public API:
    encode_ppm(pixels, width, height) -> bytes
    write_ppm(pixels, width, height, path)          # raises OSError
    save_to_ppm_file(pixels, width, height, path)   # returns errno, 0 = ok
    read_ppm(path) -> (pixels, width, height)       # raises PPMFormatError

Writes go straight to the destination. There is no tmp-file/rename step, so
a failure part way through leaves a truncated file on disk.
"""

import errno
import logging
import os
from pathlib import Path
from typing import Tuple, Union

import numpy as np

from opencad.utils import color as color_utils

logger = logging.getLogger(__name__)

MAGIC = b"P6"
MAXVAL = 255


class PPMFormatError(ValueError):
    """Raised when a file is not a binary PPM this module can read."""

    pass


def encode_header(width: int, height: int) -> bytes:
    """Return the ASCII P6 header for the given dimensions."""
    if width < 0 or height < 0:
        raise ValueError(f"Image dimensions must be non-negative, got {width}x{height}")
    return b"%s\n%d %d\n%d\n" % (MAGIC, width, height, MAXVAL)


def encode_pixels(pixels: np.ndarray, width: int, height: int) -> bytes:
    """Return the raw RGB body for the first width*height pixels."""
    count = width * height
    return color_utils.rgb_bytes(np.asarray(pixels).reshape(-1)[:count]).tobytes()


def encode_ppm(pixels: np.ndarray, width: int, height: int) -> bytes:
    """Return the complete P6 file image (header + body)."""
    return encode_header(width, height) + encode_pixels(pixels, width, height)


def write_ppm(
    pixels: np.ndarray,
    width: int,
    height: int,
    file_path: Union[str, Path],
) -> None:
    """Write the buffer to file_path as binary PPM.

    Parameters
    ----------
    pixels : np.ndarray
        Packed uint32 buffer, row-major
    width, height : int
        Buffer dimensions
    file_path : Union[str, Path]
        Destination; created or truncated

    Raises
    ------
    OSError
        Open or write failure, unchanged (errno preserved)

    Notes
    -----
    The handle is closed on every exit path. Rows are written one at a time
    so large buffers are never duplicated in memory as a whole.
    """
    header = encode_header(width, height)
    rgb = color_utils.rgb_bytes(np.asarray(pixels).reshape(-1)[:width * height])

    with open(file_path, 'wb') as f:
        f.write(header)
        if width:
            for start in range(0, width * height, width):
                f.write(rgb[start:start + width].tobytes())


def save_to_ppm_file(
    pixels: np.ndarray,
    width: int,
    height: int,
    file_path: Union[str, Path],
) -> int:
    """Write the buffer as binary PPM and report the outcome as an error code.

    Parameters
    ----------
    pixels : np.ndarray
        Packed uint32 buffer, row-major
    width, height : int
        Buffer dimensions
    file_path : Union[str, Path]
        Destination; created or truncated

    Returns
    -------
    int
        0 on success, otherwise the OS error number of the failed open or
        write (render it with os.strerror)

    Notes
    -----
    No retry and no cleanup of a partially written file.
    """
    try:
        write_ppm(pixels, width, height, file_path)
    except OSError as e:
        code = e.errno or errno.EIO
        logger.debug(f"Write to {file_path} failed: {os.strerror(code)}")
        return code

    logger.debug(f"Saved {width}x{height} PPM to {file_path}")
    return 0


def _read_token(data: bytes, pos: int) -> Tuple[bytes, int]:
    """Read one whitespace-delimited header token, skipping # comments."""
    n = len(data)
    while pos < n:
        if data[pos:pos + 1].isspace():
            pos += 1
        elif data[pos:pos + 1] == b"#":
            end = data.find(b"\n", pos)
            pos = n if end < 0 else end + 1
        else:
            break

    start = pos
    while pos < n and not data[pos:pos + 1].isspace() and data[pos:pos + 1] != b"#":
        pos += 1

    if start == pos:
        raise PPMFormatError("Unexpected end of PPM header")
    return data[start:pos], pos


def _read_int(data: bytes, pos: int, name: str) -> Tuple[int, int]:
    token, pos = _read_token(data, pos)
    if not token.isdigit():
        raise PPMFormatError(f"Invalid PPM {name}: {token!r}")
    return int(token), pos


def decode_ppm(data: bytes) -> Tuple[np.ndarray, int, int]:
    """Parse a P6 file image into (pixels, width, height).

    Raises
    ------
    PPMFormatError
        Wrong magic, malformed header, maxval other than 255, short body
    """
    magic, pos = _read_token(data, 0)
    if magic != MAGIC:
        raise PPMFormatError(f"Not a binary PPM file (magic {magic!r}, expected {MAGIC!r})")

    width, pos = _read_int(data, pos, "width")
    height, pos = _read_int(data, pos, "height")
    maxval, pos = _read_int(data, pos, "maxval")
    if maxval != MAXVAL:
        raise PPMFormatError(f"Unsupported PPM maxval {maxval}, only {MAXVAL} is supported")

    # Exactly one whitespace byte separates the header from the body
    if pos >= len(data) or not data[pos:pos + 1].isspace():
        raise PPMFormatError("Missing whitespace after PPM header")
    pos += 1

    expected = width * height * 3
    body = data[pos:pos + expected]
    if len(body) != expected:
        raise PPMFormatError(f"PPM body too short: expected {expected} bytes, got {len(body)}")

    rgb = np.frombuffer(body, dtype=np.uint8).reshape(-1, 3)
    return color_utils.from_rgb_bytes(rgb), width, height


def read_ppm(file_path: Union[str, Path]) -> Tuple[np.ndarray, int, int]:
    """Load a binary PPM file into a new buffer.

    Returns
    -------
    Tuple[np.ndarray, int, int]
        (pixels, width, height); pixels carry alpha 0xFF

    Raises
    ------
    OSError
        If the file cannot be read
    PPMFormatError
        If the content is not a readable P6 image
    """
    with open(file_path, 'rb') as f:
        data = f.read()
    return decode_ppm(data)
