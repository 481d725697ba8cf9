"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stdout handler to the root logger.

    Calling it again only updates the level, so app factories invoked several
    times (tests) do not stack handlers.
    """

    root = logging.getLogger()
    root.setLevel(level.upper())

    if not any(getattr(h, "_lumina", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._lumina = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    # engineio/socketio are chatty at INFO
    logging.getLogger("engineio").setLevel(logging.WARNING)
    logging.getLogger("socketio").setLevel(logging.WARNING)
    return root
