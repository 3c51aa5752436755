"""Logging setup for the pcmwave command line.

Library modules only create loggers under the ``pcmwave`` namespace. The CLI
calls `configure_logging` once to attach a stderr handler to that namespace
and pick a level from its flags or ``PCMWAVE_LOG_LEVEL``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO


LOG_LEVEL_ENV = "PCMWAVE_LOG_LEVEL"
PACKAGE_LOGGER = "pcmwave"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"

# -v steps down from WARNING; anything past -vv is DEBUG.
_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def level_from_env(default: int) -> int:
    raw = (os.environ.get(LOG_LEVEL_ENV) or "").strip().upper()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


def level_for(*, verbosity: int = 0, quiet: bool = False) -> int:
    """Resolve CLI flags to a level; flags beat the environment."""
    if quiet:
        return logging.ERROR
    if verbosity > 0:
        return _VERBOSITY_LEVELS[min(verbosity, len(_VERBOSITY_LEVELS) - 1)]
    return level_from_env(logging.WARNING)


class _PcmWaveHandler(logging.StreamHandler):
    """Stream handler that follows the current sys.stderr unless given a stream.

    Its type also lets repeated setup find the handler it installed.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__(stream or sys.stderr)
        self.follow_stderr = stream is None

    def emit(self, record: logging.LogRecord) -> None:
        if self.follow_stderr:
            self.stream = sys.stderr
        super().emit(record)


def configure_logging(
    *,
    verbosity: int = 0,
    quiet: bool = False,
    stream: Optional[TextIO] = None,
) -> int:
    """Attach one stderr handler to the ``pcmwave`` logger and return its level."""
    level = level_for(verbosity=verbosity, quiet=quiet)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    handler = next((h for h in logger.handlers if isinstance(h, _PcmWaveHandler)), None)
    if handler is None:
        handler = _PcmWaveHandler(stream)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
        logger.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)
        handler.follow_stderr = False
    handler.setLevel(level)
    return level
