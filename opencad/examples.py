"""Example pictures drawn with the raster primitives.

Four pictures, each drawn into a shared buffer and saved as <name>.ppm:
    - checker: grid of alternating foreground/background cells
    - circle: one disk per grid cell, radius growing toward the bottom right
    - lines: diagonals, corner-to-quarter lines and center axes
    - brick: white wireframe of a 3D brick on black

Canvas size, grid and palette come from an ExamplesConfigV1
(configs/examples.yaml). The brick coordinates are fixed and assume the
default 800x600 canvas; other sizes simply clip or leave margin.

Usage:
    from opencad import examples
    from opencad.utils import validators

    cfg = validators.load_examples_config("configs/examples.yaml")
    err = examples.render_examples(cfg, output_dir="outputs/examples")
"""

import logging
import os
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Union

from opencad.raster.buffer import PixelView
from opencad.utils import fs
from opencad.utils.logging_config import pop_context, push_context
from opencad.utils.validators import ExamplesConfigV1

logger = logging.getLogger(__name__)

# Brick wireframe segments (x1, y1, x2, y2)
BRICK_EDGES = (
    # Front face
    (200, 400, 400, 400),
    (400, 400, 400, 300),
    (400, 300, 200, 300),
    (200, 300, 200, 400),
    # Top face
    (200, 300, 250, 250),
    (250, 250, 450, 250),
    # Right face
    (400, 400, 450, 350),
    (450, 350, 450, 250),
    (450, 250, 400, 300),
    (400, 300, 400, 400),
)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b."""
    return a + (b - a) * t


def _cell_size(cfg: ExamplesConfigV1):
    return cfg.width // cfg.cols, cfg.height // cfg.rows


def draw_checker(view: PixelView, cfg: ExamplesConfigV1) -> None:
    """Cells with an even (col + row) get the foreground color."""
    palette = cfg.palette
    cell_w, cell_h = _cell_size(cfg)

    view.fill(palette.background)
    for row in range(cfg.rows):
        for col in range(cfg.cols):
            color = palette.foreground if (col + row) % 2 == 0 else palette.background
            view.fill_rect(col * cell_w, row * cell_h, cell_w, cell_h, color)


def draw_circles(view: PixelView, cfg: ExamplesConfigV1) -> None:
    """One disk per cell, radius lerped from radius/8 to radius/2 along the diagonal."""
    palette = cfg.palette
    cell_w, cell_h = _cell_size(cfg)
    radius = min(cell_w, cell_h)

    view.fill(palette.background)
    for row in range(cfg.rows):
        for col in range(cfg.cols):
            u = col / cfg.cols
            v = row / cfg.rows
            t = (u + v) / 2
            view.fill_circle(
                col * cell_w + cell_w // 2,
                row * cell_h + cell_h // 2,
                int(lerp(radius // 8, radius // 2, t)),
                palette.foreground,
            )


def draw_lines(view: PixelView, cfg: ExamplesConfigV1) -> None:
    """Diagonals, corner-to-quarter lines and the two center axes."""
    palette = cfg.palette
    w, h = cfg.width, cfg.height

    view.fill(palette.background)

    view.draw_line(0, 0, w, h, palette.foreground)
    view.draw_line(w, 0, 0, h, palette.foreground)

    view.draw_line(0, 0, w // 4, h, palette.accent)
    view.draw_line(w // 4, 0, 0, h, palette.accent)
    view.draw_line(w, 0, w // 4 * 3, h, palette.accent)
    view.draw_line(w // 4 * 3, 0, w, h, palette.accent)

    view.draw_line(0, h // 2, w, h // 2, palette.axis)
    view.draw_line(w // 2, 0, w // 2, h, palette.axis)


def draw_brick(view: PixelView, cfg: ExamplesConfigV1) -> None:
    """Wireframe brick: front, top and right faces."""
    view.fill(cfg.palette.brick_background)
    for x1, y1, x2, y2 in BRICK_EDGES:
        view.draw_line(x1, y1, x2, y2, cfg.palette.brick_edge)


EXAMPLES: Dict[str, Callable[[PixelView, ExamplesConfigV1], None]] = {
    "checker": draw_checker,
    "circle": draw_circles,
    "lines": draw_lines,
    "brick": draw_brick,
}


def render_examples(
    cfg: ExamplesConfigV1,
    output_dir: Union[str, Path, None] = None,
    names: Optional[Iterable[str]] = None,
) -> int:
    """Draw and save the selected example pictures through one buffer.

    Parameters
    ----------
    cfg : ExamplesConfigV1
        Canvas, grid and palette
    output_dir : Union[str, Path], optional
        Destination directory; defaults to cfg.output_dir. Created if missing.
    names : Iterable[str], optional
        Subset of EXAMPLES keys, in the order to render; all when omitted

    Returns
    -------
    int
        0 when every file was saved, otherwise the error number of the first
        failed save (remaining pictures are skipped)

    Raises
    ------
    KeyError
        If a name is not one of EXAMPLES
    """
    names = list(EXAMPLES) if names is None else list(names)
    unknown = [n for n in names if n not in EXAMPLES]
    if unknown:
        raise KeyError(f"Unknown examples: {unknown}. Available: {list(EXAMPLES)}")

    out_dir = fs.ensure_dir(output_dir if output_dir is not None else cfg.output_dir)
    view = PixelView.allocate(cfg.width, cfg.height)

    for name in names:
        push_context(example=name)
        try:
            EXAMPLES[name](view, cfg)
            path = out_dir / f"{name}.ppm"
            err = view.save_ppm(path)
        finally:
            pop_context(keys=["example"])

        if err:
            logger.error(f"Could not save file {path}: {os.strerror(err)}")
            return err
        logger.info(f"Saved {path}")

    return 0
