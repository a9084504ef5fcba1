"""Debug trace for the listing pipeline.

Set ``PDIR_DEBUG`` to trace buffer growth, queue traffic and directory visits
on standard error. Standard output stays reserved for listings.
"""

from __future__ import annotations

import logging
import os
import sys

DEBUG_ENV_VAR = "PDIR_DEBUG"
DEBUG_FORMAT = "(%(filename)s: %(lineno)d): %(funcName)s: %(message)s"

logger = logging.getLogger("pdir")


def debug_requested(environ: dict[str, str] | None = None) -> bool:
    """Return whether the environment asks for the debug trace."""
    env = os.environ if environ is None else environ
    value = env.get(DEBUG_ENV_VAR, "").strip()
    return value not in {"", "0"}


def configure_debug_logging(enabled: bool, stream=None) -> logging.Logger:
    """Attach (or detach) the stderr debug handler on the ``pdir`` logger.

    Calling this twice does not stack handlers.
    """
    for handler in list(logger.handlers):
        if getattr(handler, "_pdir_debug", False):
            logger.removeHandler(handler)

    if not enabled:
        logger.setLevel(logging.WARNING)
        return logger

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(DEBUG_FORMAT))
    handler._pdir_debug = True
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger


__all__ = ["DEBUG_ENV_VAR", "debug_requested", "configure_debug_logging"]
