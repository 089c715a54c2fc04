"""Logging setup for the command-line tool."""

import logging
import sys

LOGGER_NAME = "turnushelper"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Safe to call more than once; each call replaces the previous handler
    with one bound to the current stderr.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for old in list(logger.handlers):
        logger.removeHandler(old)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
