"""Filesystem helpers for config loading and output directories.

Provides:
    - Directory creation with exist_ok semantics
    - YAML loading with actionable errors
    - Output path resolution for rendered images

All paths use pathlib.Path for cross-platform compatibility.

Image files are NOT written here: the PPM writer opens its destination
directly (no tmp file, no rename), so a failed write may leave a truncated
file behind. See raster.ppm.

Usage:
    from opencad.utils import fs
    cfg = fs.load_yaml("configs/examples.yaml")
    out = fs.ensure_dir("outputs/examples")
"""

from pathlib import Path
from typing import Any, Dict, Union

import yaml


def ensure_dir(p: Union[str, Path]) -> Path:
    """Create directory if it doesn't exist, return Path object.

    Parameters
    ----------
    p : Union[str, Path]
        Directory path

    Returns
    -------
    Path
        Path object (guaranteed to exist)

    Notes
    -----
    Creates parent directories as needed.
    """
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Load YAML file safely.

    Parameters
    ----------
    path : Union[str, Path]
        YAML file path

    Returns
    -------
    Dict[str, Any]
        Parsed YAML content (empty dict for an empty file)

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    yaml.YAMLError
        If YAML parsing fails

    Notes
    -----
    Uses safe_load to prevent arbitrary code execution. Hex literals such as
    0xFF2020FF load as ints, which is how packed colors are written.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e

    return data if data is not None else {}


def resolve_output(output_dir: Union[str, Path, None], file_name: Union[str, Path]) -> Path:
    """Join a file name onto an output directory.

    Absolute file names are returned unchanged; relative ones are placed
    under output_dir (or the current directory when output_dir is None).
    The directory is not created.
    """
    file_name = Path(file_name)
    if file_name.is_absolute() or output_dir is None:
        return file_name
    return Path(output_dir) / file_name
