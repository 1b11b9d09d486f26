"""Console logging for the smartcal command line.

Store writes, parser decisions and scoring retries all log through the
standard :mod:`logging` tree.  The ``smartcal`` CLI routes that tree to
stderr, leaving stdout to the parsed event and the suggestion list.
"""

from __future__ import annotations

import logging
import sys

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Attribute set on the stderr handler owned by this module.
_HANDLER_ATTR = "_smartcal_log_handler"


def setup_logging(level: str = "INFO") -> None:
    """Send smartcal's log records to stderr at *level*.

    The CLI calls this once with ``DEBUG`` or ``INFO`` depending on ``-v``,
    and without ``-v`` the ``suggest`` command calls it again with the
    ``LOG_LEVEL`` setting.  A later call retunes the stderr handler from
    the earlier one instead of attaching a second.

    Args:
        level: Level name, any case, e.g. ``"debug"`` or ``"WARNING"``.

    Raises:
        ValueError: If *level* does not name a logging level.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level!r}")

    root = logging.getLogger()
    root.setLevel(numeric_level)

    existing = next(
        (h for h in root.handlers if getattr(h, _HANDLER_ATTR, False)), None
    )
    if existing is not None:
        existing.setLevel(numeric_level)
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Logger for a smartcal module; pass the module's ``__name__``."""
    return logging.getLogger(name)
