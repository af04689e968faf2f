"""Package loggers.

Modules log through ``get_logger(__name__)``. The ``s5crypto`` logger only
carries a ``NullHandler``; applications that want the JSON lines on stderr
call ``configure_logging()``.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time
from typing import TextIO

from .constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV

ROOT_LOGGER = "s5crypto"
HANDLER_NAME = "s5crypto-json"


def _configured_level() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else logging.WARNING


class JsonFormatter(logging.Formatter):
    """One JSON object per record, UTC timestamps."""

    converter = time.gmtime

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps({
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%SZ"),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        })


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Logger for an s5crypto module.

    The first call gives the ``s5crypto`` logger a ``NullHandler`` and the
    level from ``S5CRYPTO_LOG_LEVEL``. Module loggers propagate to it.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        root.addHandler(logging.NullHandler())
        root.setLevel(_configured_level())
    return logging.getLogger(name)


def configure_logging(
    level: int | None = None, stream: TextIO | None = None
) -> logging.Handler:
    """Send s5crypto records to ``stream`` (stderr by default) as JSON lines.

    Calling it again reuses the installed handler and only updates the level.

    Args:
        level: Logger level. Defaults to ``S5CRYPTO_LOG_LEVEL``.
        stream: Text stream for the handler, used on the first call only.

    Returns:
        The JSON handler attached to the ``s5crypto`` logger.
    """
    root = get_logger()
    for handler in root.handlers:
        if handler.get_name() == HANDLER_NAME:
            break
    else:
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(JsonFormatter())
        root.addHandler(handler)
    root.setLevel(level if level is not None else _configured_level())
    return handler
