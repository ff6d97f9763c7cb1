# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Logging setup for a batch run.

Console output is short (level + message) and follows the configured level.
The optional run log keeps everything at DEBUG, including the grid dumps
and placement attempts, so a failed puzzle can be diagnosed afterwards.
"""

import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Iterable, Optional, TextIO


CONSOLE_FORMAT = "%(levelname)-8s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Pillow logs every PNG chunk at DEBUG
QUIET_LOGGERS = ("PIL",)


def run_log_path(log_directory: str, prefix: str, now: Optional[datetime] = None) -> str:
    """Timestamped log file name for one batch run."""
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return os.path.join(log_directory, f"{prefix}_{stamp}.log")


def reset_handlers(logger: logging.Logger):
    """Detach every handler on logger, closing log files from an earlier run."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()


def quiet(names: Iterable[str], level: int = logging.INFO):
    for name in names:
        logging.getLogger(name).setLevel(level)


def setup_logging(
    log_level: str = "INFO",
    log_directory: Optional[str] = None,
    log_file_prefix: str = "wordsearch_generator",
    enable_console: bool = True,
    stream: Optional[TextIO] = None,
    quiet_loggers: Iterable[str] = QUIET_LOGGERS,
) -> Optional[str]:
    """
    Configure the root logger for a batch run.

    Args:
        log_level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_directory: Where to write the run log; None for console only
        log_file_prefix: Prefix for the run log file name
        enable_console: Whether to log to the console
        stream: Console stream (default: stderr, so stdout stays clean)
        quiet_loggers: Library loggers held at INFO

    Returns:
        Path to the run log, or None when no file is written
    """
    console_level = getattr(logging, log_level.upper(), logging.INFO)

    root = logging.getLogger()
    reset_handlers(root)
    root.setLevel(logging.DEBUG)

    log_path = None
    if log_directory:
        os.makedirs(log_directory, exist_ok=True)
        log_path = run_log_path(log_directory, log_file_prefix)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        root.addHandler(file_handler)

    if enable_console:
        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root.addHandler(console_handler)

    if not root.handlers:
        root.addHandler(logging.NullHandler())

    # Pillow reports decompression and font issues through warnings
    logging.captureWarnings(True)
    quiet(quiet_loggers)

    logger = logging.getLogger(__name__)
    logger.debug(
        f"Logging initialized: level={log_level}, file={log_path}, "
        f"console={enable_console}"
    )
    return log_path
