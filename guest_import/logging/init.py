from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Console output of the guest import CLI.

Every line is ``LABEL message`` where LABEL is one of
DEBUG | INFO | WARN | ERROR | SUMMARY. SUMMARY (level 25) is reserved for
the one closing line of a run, so ``grep ^SUMMARY`` always finds exactly one
line. Module loggers (``guest_import.services.pipeline``, ...) inherit the
handler of the ``guest_import`` logger; nothing reaches the root logger.

The handler installed here is tagged, so repeated setup calls reuse it and
reset_logging() removes only what this module added.
"""

__all__ = [
    "setup_logging",
    "get_logger",
    "log_summary",
    "reset_logging",
    "set_debug",
    "LabeledFormatter",
    "SUMMARY_LEVEL",
    "LOGGER_NAME",
]

SUMMARY_LEVEL = 25
LOGGER_NAME = "guest_import"

_HANDLER_TAG = "_guest_import_console"

_LABELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    SUMMARY_LEVEL: "SUMMARY",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRITICAL",
}


class LabeledFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        label = _LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def _console_handler(logger: logging.Logger) -> logging.Handler | None:
    return next((h for h in logger.handlers if getattr(h, _HANDLER_TAG, False)), None)


def setup_logging(level: int = logging.INFO, stream: TextIO | None = None) -> logging.Logger:
    """Attach the labeled console handler to the ``guest_import`` logger.

    Idempotent: when the handler is already attached the logger is returned
    unchanged. ``stream`` defaults to the current ``sys.stdout``.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if _console_handler(logger) is not None:
        return logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(LabeledFormatter())
    handler.setLevel(level)
    setattr(handler, _HANDLER_TAG, True)

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger() -> logging.Logger:
    return setup_logging()


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def set_debug(logger: logging.Logger) -> None:
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG)


def reset_logging() -> None:
    """Detach the console handler (tests rebind stdout between runs)."""
    logger = logging.getLogger(LOGGER_NAME)
    handler = _console_handler(logger)
    if handler is not None:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
