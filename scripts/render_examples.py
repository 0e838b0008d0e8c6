#!/usr/bin/env python3
"""Render the example pictures (checker, circle, lines, brick) to PPM files.

Usage:
    # All pictures with the default config
    python scripts/render_examples.py

    # Only some pictures, custom output directory
    python scripts/render_examples.py --only checker brick --output_dir outputs/tmp

    # JSON log lines
    python scripts/render_examples.py --json_logs

Outputs:
    - <output_dir>/<name>.ppm for each selected picture

Exit codes:
    0: All pictures saved
    1: Invalid config, or a file could not be saved (remaining pictures skipped)
"""

import argparse
import logging
import sys
import time

import yaml
from pydantic import ValidationError

from opencad import examples
from opencad.utils import logging_config, validators

DEFAULT_CONFIG = "configs/examples.yaml"


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the example pictures to PPM files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '--config',
        type=str,
        default=DEFAULT_CONFIG,
        help=f'Examples config (default: {DEFAULT_CONFIG})'
    )
    parser.add_argument(
        '--output_dir',
        type=str,
        default=None,
        help='Output directory (default: output_dir from config)'
    )
    parser.add_argument(
        '--only',
        nargs='+',
        choices=list(examples.EXAMPLES),
        default=None,
        help='Render only these pictures'
    )
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('--json_logs', action='store_true', help='Log as JSON lines')
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    log_level = "DEBUG" if args.verbose else "INFO"
    logging_config.setup_logging(
        log_level=log_level,
        json=args.json_logs,
        context={"app": "examples"}
    )
    logger = logging.getLogger(__name__)

    try:
        cfg = validators.load_examples_config(args.config)
    except (FileNotFoundError, yaml.YAMLError, ValidationError) as e:
        logger.error(f"Invalid examples config {args.config}: {e}")
        return 1

    logger.info(f"Canvas: {cfg.width}×{cfg.height} px, grid {cfg.cols}×{cfg.rows}")

    start_time = time.time()
    err = examples.render_examples(cfg, output_dir=args.output_dir, names=args.only)
    if err:
        return 1

    logger.info(f"Rendered examples in {time.time() - start_time:.3f}s")
    return 0


if __name__ == '__main__':
    sys.exit(main())
