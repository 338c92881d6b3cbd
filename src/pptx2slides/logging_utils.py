"""Logging setup shared by the pptx2slides CLI and host services."""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER_NAME = "pptx2slides"

_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_PLAIN_FORMAT = "%(levelname)s: %(message)s"


def resolve_log_level(log_level: int | str) -> int:
    """Turn a level name such as ``"debug"`` into its numeric value, defaulting to INFO."""
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    package_only: bool = False,
) -> logging.Logger:
    """Attach console (and optional file) handlers for import logging.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Path to a log file that receives a copy of the output.
    trace_mode : bool, default False
        Emit timestamps and logger names, useful when following one slide
        through the pipeline.
    package_only : bool, default False
        Configure only the ``pptx2slides`` logger and leave the root logger
        alone. Services embedding the importer set this so their own handlers
        stay in place.

    Returns
    -------
    logging.Logger
        The logger that received the handlers.

    """
    resolved_level = resolve_log_level(log_level)

    target = logging.getLogger(PACKAGE_LOGGER_NAME if package_only else None)
    target.setLevel(resolved_level)
    target.handlers.clear()
    if package_only:
        target.propagate = False

    formatter = logging.Formatter(
        _TRACE_FORMAT if trace_mode else _PLAIN_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S" if trace_mode else None,
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    target.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:  # pragma: no cover - handled at runtime
            target.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            target.addHandler(file_handler)
            target.info("Logging to file: %s", log_file)

    return target
