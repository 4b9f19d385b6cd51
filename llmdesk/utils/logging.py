# -*- coding: utf-8 -*-
"""Logger setup shared by the CLI and the app."""

from __future__ import annotations

import datetime
import logging
import os
from pathlib import Path
from typing import Optional, Union

from ..constant import LOG_DIR, LOG_LEVEL_ENV

LOGGER_NAME = "llmdesk"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _parse_level(level: Union[str, int, None]) -> int:
    if isinstance(level, int):
        return level
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "info").lower()
    return _LEVELS.get(name, logging.INFO)


def setup_logger(
    level: Union[str, int, None] = None,
    log_dir: Optional[Path] = LOG_DIR,
    console: bool = True,
) -> logging.Logger:
    """Configure the ``llmdesk`` logger.

    Logs go to ``<log_dir>/YYYY-MM-DD.log`` (append) and, with *console*,
    to stderr. Calling again replaces the handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_parse_level(level))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"{datetime.date.today().isoformat()}.log"
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    logger.propagate = False
    return logger
