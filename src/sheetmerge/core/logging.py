"""Console logging setup shared by the CLI and the API."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "sheetmerge-console"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single console handler to the ``sheetmerge`` logger.

    Calling this more than once only updates the level.
    """
    root = logging.getLogger("sheetmerge")
    root.setLevel(level)
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
    return root
