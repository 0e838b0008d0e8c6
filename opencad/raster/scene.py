"""Render validated scene.v1 descriptions onto pixel buffers.

A scene is a canvas size, an output file and an ordered list of drawing ops
(fill, rect, circle, line). Ops are applied in file order, so later ops paint
over earlier ones.

Usage:
    from opencad.raster import scene
    from opencad.utils import validators

    scenes_file = validators.load_scene_file("configs/scenes/brick.yaml")
    err = scene.save_scenes(scenes_file, output_dir="outputs")
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from opencad.raster.buffer import PixelView
from opencad.utils import fs
from opencad.utils.logging_config import pop_context, push_context
from opencad.utils.validators import (
    CircleOp,
    FillOp,
    LineOp,
    RectOp,
    SceneV1,
    ScenesFileV1,
)

logger = logging.getLogger(__name__)


def apply_op(view: PixelView, op) -> None:
    """Apply a single validated drawing op to the view."""
    if isinstance(op, FillOp):
        view.fill(op.color)
    elif isinstance(op, RectOp):
        view.fill_rect(op.x, op.y, op.w, op.h, op.color)
    elif isinstance(op, CircleOp):
        view.fill_circle(op.cx, op.cy, op.r, op.color)
    elif isinstance(op, LineOp):
        view.draw_line(op.x1, op.y1, op.x2, op.y2, op.color)
    else:
        raise TypeError(f"Unsupported drawing op: {type(op).__name__}")


def render_scene(scene: SceneV1, view: Optional[PixelView] = None) -> PixelView:
    """Draw the scene's ops in order.

    Parameters
    ----------
    scene : SceneV1
        Validated scene
    view : PixelView, optional
        Buffer to draw into; must match the scene's size. A new zeroed buffer
        is allocated when omitted.

    Returns
    -------
    PixelView
        The view drawn into

    Raises
    ------
    ValueError
        If view's dimensions differ from the scene's
    """
    if view is None:
        view = PixelView.allocate(scene.width, scene.height)
    elif (view.width, view.height) != (scene.width, scene.height):
        raise ValueError(
            f"Scene '{scene.name}' is {scene.width}x{scene.height}, "
            f"buffer is {view.width}x{view.height}"
        )

    for op in scene.ops:
        apply_op(view, op)

    logger.debug(f"Rendered scene '{scene.name}' ({len(scene.ops)} ops)")
    return view


def save_scene(
    scene: SceneV1,
    output_dir: Union[str, Path, None] = None,
    view: Optional[PixelView] = None,
) -> int:
    """Render a scene and write it as PPM.

    Returns
    -------
    int
        0 on success, otherwise the OS error number from the PPM writer
    """
    view = render_scene(scene, view)
    path = fs.resolve_output(output_dir, scene.output)

    err = view.save_ppm(path)
    if err:
        logger.error(f"Could not save file {path}: {os.strerror(err)}")
    else:
        logger.info(f"Saved scene '{scene.name}' to {path}")
    return err


def save_scenes(scenes_file: ScenesFileV1, output_dir: Union[str, Path, None] = None) -> int:
    """Render and save every scene, stopping at the first failure.

    Buffers are reused (cleared to 0) between consecutive scenes of the same
    size.

    Returns
    -------
    int
        0 when all scenes were saved, otherwise the first error number
    """
    if output_dir is not None:
        fs.ensure_dir(output_dir)

    view = None
    for scene in scenes_file.scenes:
        if view is None or (view.width, view.height) != (scene.width, scene.height):
            view = PixelView.allocate(scene.width, scene.height)
        else:
            view.fill(0)

        push_context(scene=scene.name)
        try:
            err = save_scene(scene, output_dir, view)
        finally:
            pop_context(keys=["scene"])

        if err:
            return err

    return 0
