#!/usr/bin/env python3
"""Render scene.v1 YAML files to PPM images.

Usage:
    python scripts/render_scene.py --scene_file configs/scenes/brick.yaml
    python scripts/render_scene.py --scene_file my_scenes.yaml --output_dir outputs/scenes --verbose

Scene format (see configs/scenes/brick.yaml):
    schema: scene.v1
    scenes:
      - name: brick
        width: 800
        height: 600
        output: brick.ppm
        ops:
          - {op: fill, color: 0xFF000000}
          - {op: line, x1: 200, y1: 400, x2: 400, y2: 400, color: "#ffffff"}

Exit codes:
    0: All scenes saved
    1: Invalid scene file, or a file could not be saved
"""

import argparse
import logging
import sys

import yaml
from pydantic import ValidationError

from opencad.raster import scene
from opencad.utils import logging_config, validators


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render scene.v1 YAML files to PPM images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '--scene_file',
        type=str,
        required=True,
        help='Path to scene.v1 YAML file'
    )
    parser.add_argument(
        '--output_dir',
        type=str,
        default='outputs/scenes',
        help='Output directory (default: outputs/scenes)'
    )
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    log_level = "DEBUG" if args.verbose else "INFO"
    logging_config.setup_logging(log_level=log_level, context={"app": "scene"})
    logger = logging.getLogger(__name__)

    try:
        scenes_file = validators.load_scene_file(args.scene_file)
    except (FileNotFoundError, yaml.YAMLError, ValidationError) as e:
        logger.error(f"Invalid scene file {args.scene_file}: {e}")
        return 1

    logger.info(f"Rendering {len(scenes_file.scenes)} scene(s) from {args.scene_file}")
    err = scene.save_scenes(scenes_file, output_dir=args.output_dir)
    return 1 if err else 0


if __name__ == '__main__':
    sys.exit(main())
