"""
Logging helpers for nicevitals.

Every module logs through ``get_logger(__name__)`` and nothing else. The
package logger carries only a NullHandler, so an importing application sees
nicevitals records on its own handlers and nothing is printed otherwise.

What gets logged
----------------
- INFO: one line per chart recompute (signal, grouping, series and visible
  counts, domain, zone count) and each selector/legend trigger.
- DEBUG: aggregation and threshold summary sizes, figure trace counts, config
  keys that were ignored.

The demo app (or a notebook) turns output on:
    ```python
    from nicevitals.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, Optional, Union

PACKAGE_LOGGER = "nicevitals"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Consulted when configure_logging() gets no explicit level
LOG_LEVEL_ENV = "NICEVITALS_LOG_LEVEL"


def parse_level(level: Union[str, int, None]) -> int:
    """Level name or number -> logging level; unknown names and None give INFO."""
    if isinstance(level, int):
        return level
    if not level:
        return logging.INFO
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    stream: Optional[IO[str]] = None,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Attach one stream handler to the nicevitals logger (root is untouched).

    Parameters
    ----------
    level:
        Level name or number. Defaults to $NICEVITALS_LOG_LEVEL, then INFO.
    stream:
        Where records go. Defaults to sys.stderr.
    fmt, datefmt:
        Formatter strings, DEFAULT_FMT / DEFAULT_DATEFMT when omitted.
    force:
        Drop existing handlers first. Without it a second call targeting the
        same stream only updates the level.

    Returns
    -------
    The package logger.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV)
    numeric = parse_level(level)
    target = stream if stream is not None else sys.stderr

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric)

    if force:
        for h in logger.handlers[:]:
            if isinstance(h, logging.NullHandler):
                continue
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is target:
                h.setLevel(numeric)
                return logger

    handler = logging.StreamHandler(target)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT))
    logger.addHandler(handler)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for `name`, or the package logger when name is None."""
    return logging.getLogger(name or PACKAGE_LOGGER)
