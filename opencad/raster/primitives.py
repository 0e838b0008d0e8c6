"""Rasterization primitives on a caller-owned pixel buffer.

Every function takes the buffer plus its width and height explicitly and
writes in place. Coordinates are signed ints and may lie anywhere: geometry
outside [0, width) x [0, height) is clipped silently, never reported.

Primitives:
    - fill: whole buffer
    - fill_rect: half-open rectangle [x0, x0+w) x [y0, y0+h)
    - fill_circle: disk with inclusive boundary, integer distance test
    - draw_line: column-spanning rasterizer with truncating slope math

Invariants:
    - len(pixels) == width*height (a mismatch makes the reshape raise)
    - No allocation of pixel storage; only (height, width) views
    - Alpha is written as given, never blended
"""

import numpy as np

PIXEL_DTYPE = np.uint32


def as_grid(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    """Return a (height, width) view onto the caller's buffer.

    Parameters
    ----------
    pixels : np.ndarray
        Contiguous uint32 buffer of length width*height
    width, height : int
        Buffer dimensions

    Returns
    -------
    np.ndarray
        View sharing memory with pixels; writes go to the caller's buffer

    Raises
    ------
    ValueError
        If the buffer is not C-contiguous (a reshape would silently copy),
        or if its size does not match width*height
    """
    if not pixels.flags.c_contiguous:
        raise ValueError("Pixel buffer must be C-contiguous")
    return pixels.reshape(height, width)


def _pixel(color: int) -> np.uint32:
    return PIXEL_DTYPE(color & 0xFFFFFFFF)


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero (Python's // rounds down)."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def fill(pixels: np.ndarray, width: int, height: int, color: int) -> None:
    """Overwrite every pixel with color."""
    as_grid(pixels, width, height)[...] = _pixel(color)


def fill_rect(
    pixels: np.ndarray,
    width: int,
    height: int,
    x0: int,
    y0: int,
    w: int,
    h: int,
    color: int,
) -> None:
    """Fill the rectangle [x0, x0+w) x [y0, y0+h), clipped to the buffer.

    Parameters
    ----------
    pixels : np.ndarray
        Target buffer (modified in place)
    width, height : int
        Buffer dimensions
    x0, y0 : int
        Top-left corner, may be negative
    w, h : int
        Rectangle size; a non-positive size fills nothing
    color : int
        Packed 0xAABBGGRR color

    Notes
    -----
    A rectangle entirely outside the buffer is a no-op.
    """
    grid = as_grid(pixels, width, height)

    x_lo, x_hi = max(x0, 0), min(x0 + w, width)
    y_lo, y_hi = max(y0, 0), min(y0 + h, height)
    if x_lo >= x_hi or y_lo >= y_hi:
        return

    grid[y_lo:y_hi, x_lo:x_hi] = _pixel(color)


def fill_circle(
    pixels: np.ndarray,
    width: int,
    height: int,
    cx: int,
    cy: int,
    r: int,
    color: int,
) -> None:
    """Fill every pixel with (x-cx)² + (y-cy)² <= r², clipped to the buffer.

    Parameters
    ----------
    pixels : np.ndarray
        Target buffer (modified in place)
    width, height : int
        Buffer dimensions
    cx, cy : int
        Center, may lie outside the buffer
    r : int
        Radius; 0 fills the center pixel only, negative fills nothing
    color : int
        Packed 0xAABBGGRR color

    Notes
    -----
    Only the bounding box [cx-r, cx+r] x [cy-r, cy+r] intersected with the
    buffer is tested.
    """
    grid = as_grid(pixels, width, height)

    x_lo, x_hi = max(cx - r, 0), min(cx + r, width - 1)
    y_lo, y_hi = max(cy - r, 0), min(cy + r, height - 1)
    if x_lo > x_hi or y_lo > y_hi:
        return

    dx = np.arange(x_lo, x_hi + 1, dtype=np.int64) - cx
    dy = np.arange(y_lo, y_hi + 1, dtype=np.int64) - cy
    inside = dx[np.newaxis, :] ** 2 + dy[:, np.newaxis] ** 2 <= r * r

    grid[y_lo:y_hi + 1, x_lo:x_hi + 1][inside] = _pixel(color)


def _fill_column(grid: np.ndarray, x: int, y1: int, y2: int, value: np.uint32) -> None:
    """Fill rows [y1, y2] (inclusive, y1 <= y2) of column x, clipped to the height."""
    y_lo, y_hi = max(y1, 0), min(y2, grid.shape[0] - 1)
    if y_lo <= y_hi:
        grid[y_lo:y_hi + 1, x] = value


def draw_line(
    pixels: np.ndarray,
    width: int,
    height: int,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: int,
) -> None:
    """Draw the segment (x1, y1)-(x2, y2), one column span at a time.

    Parameters
    ----------
    pixels : np.ndarray
        Target buffer (modified in place)
    width, height : int
        Buffer dimensions
    x1, y1, x2, y2 : int
        Endpoints, may lie outside the buffer
    color : int
        Packed 0xAABBGGRR color

    Notes
    -----
    With slope dy/dx and intercept c = y1 - dy*x1/dx, column x covers the
    rows between dy*x/dx + c and dy*(x+1)/dx + c inclusive. Every division
    truncates toward zero. Steep segments therefore come out as solid
    vertical runs per column instead of isolated pixels, and the last column
    extends to the y of x2+1.

    A vertical segment fills rows min(y1, y2)..max(y1, y2) of column x1.
    A zero-length segment sets one pixel.
    """
    grid = as_grid(pixels, width, height)
    value = _pixel(color)

    dx = x2 - x1
    dy = y2 - y1

    if dx == 0:
        if 0 <= x1 < width:
            _fill_column(grid, x1, min(y1, y2), max(y1, y2), value)
        return

    c = y1 - _trunc_div(dy * x1, dx)

    if x1 > x2:
        x1, x2 = x2, x1

    for x in range(max(x1, 0), min(x2, width - 1) + 1):
        sy1 = _trunc_div(dy * x, dx) + c
        sy2 = _trunc_div(dy * (x + 1), dx) + c
        if sy1 > sy2:
            sy1, sy2 = sy2, sy1
        _fill_column(grid, x, sy1, sy2, value)
