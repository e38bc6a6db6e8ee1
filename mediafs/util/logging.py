"""Logging setup for scripts and test runs."""

import logging
import sys
from typing import Optional

_HANDLER_FLAG = "_mediafs_stream_handler"


def configure_logging(level: int = logging.INFO, formatter: Optional[logging.Formatter] = None) -> logging.Logger:
    """
    Attaches a single stdout handler to the ``mediafs`` logger.

    Calling it again only updates the level and format of the handler it
    installed the first time.
    """
    logger = logging.getLogger("mediafs")
    if formatter is None:
        formatter = logging.Formatter("[%(levelname)s] %(name)s: %(message)s")

    handler = next((h for h in logger.handlers if getattr(h, _HANDLER_FLAG, False)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        setattr(handler, _HANDLER_FLAG, True)
        logger.addHandler(handler)

    handler.setFormatter(formatter)
    handler.setLevel(level)
    logger.setLevel(level)
    return logger
