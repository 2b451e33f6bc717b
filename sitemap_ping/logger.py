# sitemap_ping/logger.py
"""Hook logger: plain lines on stdout, optionally mirrored to a rotating file.

Import :data:`logger` and log; the CLI calls :func:`configure` to change the
level, the format or to add a log file.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

LOGGER_NAME: Final[str] = "SitemapPing"
DEFAULT_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(message)s"


def configure(
    level: Union[int, str] = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the handlers of the hook logger.

    Output always goes to stdout; *log_file* adds a rotating file copy.
    Nothing is written to disk when it is None.
    """
    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(RotatingFileHandler(str(log_file), maxBytes=1024 * 1024, backupCount=2, encoding="utf-8"))

    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for old in lg.handlers:
        old.close()
    lg.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)
    lg.propagate = False
    return lg


logger: logging.Logger = configure()

__all__ = ["LOGGER_NAME", "DEFAULT_FORMAT", "logger", "configure"]
