"""Logging setup for the API process."""

import logging
import sys

LOGGING_DATETIME_FORMAT_STRING = "%Y-%m-%d %H:%M:%S"
LOGGING_LOG_FORMAT_STRING = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOGGING_HANDLER_NAME = "app-console"


def configure_logging(level: str = "INFO") -> None:
    """
    Attach a stdout handler to the ``app`` logger.

    Safe to call more than once; the handler is only added the first time.
    """
    logger = logging.getLogger("app")
    logger.setLevel(level.upper())

    if any(h.get_name() == LOGGING_HANDLER_NAME for h in logger.handlers):
        return

    console_stream = logging.StreamHandler(sys.stdout)
    console_stream.set_name(LOGGING_HANDLER_NAME)
    console_stream.setFormatter(
        logging.Formatter(LOGGING_LOG_FORMAT_STRING, LOGGING_DATETIME_FORMAT_STRING)
    )
    logger.addHandler(console_stream)
