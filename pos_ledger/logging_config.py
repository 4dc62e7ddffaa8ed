"""
Logging setup.

Modules log through logging.getLogger(__name__), so everything
lives under the "pos_ledger" logger. configure_logging() attaches
a single stream handler to that logger and is safe to call more
than once (tests and the app factory both call it).
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_HANDLER_NAME = "pos_ledger-stream"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Configure the package logger and return it."""
    logger = logging.getLogger("pos_ledger")
    logger.setLevel(level)

    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
