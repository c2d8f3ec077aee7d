"""
Logging configuration for Zebra Bridge.

Every line carries the thread name, which tells request threads apart from
the print-job workers:

    2026-10-19 10:15:30 [INFO    ] [MainThread] zebra_bridge.core - Bridge listening on 127.0.0.1:9100
    2026-10-19 10:15:31 [INFO    ] [print-job_0] zebra_bridge.connection - Connected to printer: AA:BB:CC:DD:EE:FF
"""

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER = 'zebra_bridge'


class ThreadContextFilter(logging.Filter):
    """Adds ``thread_name`` to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.thread_name = threading.current_thread().name
        return True


def setup_logging(log_level: Union[int, str] = logging.INFO,
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        log_level: Minimum level, as int or name ("DEBUG", "INFO", ...)
        log_file: Optional path for a rotating log file

    Returns:
        The configured ``zebra_bridge`` logger
    """
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)
    logger.propagate = False
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] [%(thread_name)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    thread_filter = ThreadContextFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(thread_filter)
    logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=path,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(thread_filter)
        logger.addHandler(file_handler)
        logger.info("File logging enabled: %s", path)

    # werkzeug logs every request at INFO
    logging.getLogger('werkzeug').setLevel(logging.WARNING)

    return logger
