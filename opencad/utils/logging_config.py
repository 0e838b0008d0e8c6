"""Unified logging configuration for the rendering scripts.

Provides consistent logging across render_examples.py and render_scene.py:
    - Console handler and optional file handler
    - JSON output mode for ingestion
    - Contextual fields (app, scene, file)
    - Warning capture (Python warnings → logging)

Public API:
    setup_logging(log_level="INFO", context={"app": "examples"})
    get_logger(name)
    push_context(scene="brick")
    pop_context(keys=["scene"])

Format examples:
    Human: 2026-10-17T13:45:12.345Z | INFO     | app=examples | Saved brick.ppm
    JSON: {"t":"2026-10-17T13:45:12.345+00:00","lvl":"INFO","app":"examples","msg":"..."}

Library modules only call logging.getLogger(__name__); handlers are
installed by the scripts. Repeated setup_logging() calls don't duplicate
handlers.
"""

import contextvars
import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


# Contextual fields attached to every record
_context_var = contextvars.ContextVar('logging_context', default={})

# Handlers installed by setup_logging (removed on reconfiguration)
_installed_handlers: List[logging.Handler] = []


class ContextFormatter(logging.Formatter):
    """Formatter that includes contextual fields.

    Supports:
        - Human-readable format with colors (optional)
        - JSON format for machine ingestion
    """

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt_mode: str = "human", use_color: bool = True):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown format mode: {fmt_mode}. Use 'human' or 'json'.")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get({})
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)

        if self.fmt_mode == "json":
            return self._format_json(record, ts, context)
        return self._format_human(record, ts, context)

    def _format_json(self, record: logging.LogRecord, ts: datetime, context: dict) -> str:
        log_dict = {
            't': ts.isoformat(),
            'lvl': record.levelname,
            'name': record.name,
            'pid': os.getpid(),
        }
        log_dict.update(context)
        log_dict['msg'] = record.getMessage()

        if record.exc_info:
            log_dict['exc'] = self.formatException(record.exc_info)

        return json.dumps(log_dict)

    def _format_human(self, record: logging.LogRecord, ts: datetime, context: dict) -> str:
        ts_str = ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z'

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        parts = [ts_str, '|', level, '|']
        context_str = ' '.join(f"{k}={v}" for k, v in context.items())
        if context_str:
            parts.extend([context_str, '|'])
        parts.append(record.getMessage())

        line = ' '.join(parts)
        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    capture_warnings: bool = True,
    context: Optional[Dict[str, Any]] = None,
) -> List[logging.Handler]:
    """Configure root logger (idempotent).

    Parameters
    ----------
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"
    log_file : str, optional
        Log file path; None for no file logging
    json : bool
        Use JSON format for console and file output, default False
    color : bool
        Use ANSI colors in console output, default True
    to_stderr : bool
        Log to stderr (console), default True
    capture_warnings : bool
        Capture Python warnings to logging, default True
    context : dict, optional
        Initial contextual fields (e.g., {"app": "examples"})

    Returns
    -------
    list[logging.Handler]
        Handlers installed on the root logger

    Examples
    --------
    >>> setup_logging(log_level="DEBUG", context={"app": "scene"})
    """
    root = logging.getLogger()

    for handler in _installed_handlers:
        root.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root.setLevel(getattr(logging, log_level.upper()))

    fmt_mode = "json" if json else "human"

    if to_stderr:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ContextFormatter(fmt_mode, use_color=color))
        _installed_handlers.append(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(ContextFormatter(fmt_mode, use_color=False))
        _installed_handlers.append(file_handler)

    for handler in _installed_handlers:
        root.addHandler(handler)

    if context:
        push_context(**context)

    if capture_warnings:
        logging.captureWarnings(True)

    return list(_installed_handlers)


def get_logger(name: str) -> logging.Logger:
    """Get logger by name (typically __name__)."""
    return logging.getLogger(name)


def push_context(**kwargs) -> None:
    """Add contextual fields to all subsequent log records.

    Examples
    --------
    >>> push_context(app="examples")
    >>> push_context(scene="brick")
    >>> logger.info("Saved")  # → "... | app=examples scene=brick | Saved"
    """
    current = _context_var.get({})
    _context_var.set({**current, **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove contextual fields; clears all context when keys is None."""
    if keys is None:
        _context_var.set({})
        return

    current = dict(_context_var.get({}))
    for key in keys:
        current.pop(key, None)
    _context_var.set(current)


def get_context() -> Dict[str, Any]:
    """Return a copy of the current contextual fields."""
    return dict(_context_var.get({}))
