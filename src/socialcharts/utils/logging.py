"""Package logger setup for socialcharts.

Modules log through get_logger(__name__), which yields children of the
"socialcharts" logger. That logger carries only a NullHandler until the
dashboard entry point (socialcharts.app.dashboard.main) calls
configure_logging(), which attaches one stderr handler. A host application
that embeds socialcharts and configures logging itself sees our records
through normal propagation. Nothing here writes log files.

    logger = get_logger(__name__)
    logger.info("Loaded %d rows", n)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "socialcharts"
LOG_LEVEL_ENV = "SOCIALCHARTS_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Attach a stderr handler to the "socialcharts" logger (the root logger is left alone).

    Parameters
    ----------
    level:
        Name or number of the level. When None, SOCIALCHARTS_LOG_LEVEL is read;
        unset or unknown names mean INFO.
    fmt, datefmt:
        Formatter strings; DEFAULT_FMT and DEFAULT_DATEFMT when None.
    force:
        Drop the handlers already on the logger first. Without it, a second
        call is a no-op once a stderr handler exists (the level is still updated).
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    formatter = logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        # idempotent: one stderr handler per process
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for a module (pass __name__); the package logger when name is None."""
    if name is None:
        name = LOGGER_NAME
    return logging.getLogger(name)
