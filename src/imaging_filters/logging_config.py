"""
logging_config.py - handlers for the ``imaging_filters`` logger

Library modules only create module loggers; the command-line front end calls
``setup_logging`` once to decide where the messages go.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "imaging_filters"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def setup_logging(verbose: bool = False, log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Route package log records to stdout and, optionally, to ``log_file``.

    Calling it again replaces the previous handlers. ``verbose`` lowers the
    level from INFO to DEBUG.
    """
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    pkg_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        pkg_logger.addHandler(handler)
    return pkg_logger
