"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Packed color helpers (color)
    - Directory creation and YAML loading (fs)
    - Unified logging (logging_config)
    - Config validation (validators)

No module in utils/ may import from upper layers (raster, examples).

Convenience imports:
    from opencad.utils import color, fs, validators
    from opencad.utils.logging_config import setup_logging, get_logger
"""

from . import color
from . import fs
from . import logging_config
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'color',
    'fs',
    'logging_config',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
