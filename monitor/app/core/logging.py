"""loguru sink setup for the process entry point."""
from __future__ import annotations

import sys

from loguru import logger

_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | {message} {extra}"


def configure_logging(level: str = "INFO", *, serialize: bool = False) -> None:
    """Replace the default sink with a single stderr sink."""
    logger.remove()
    if serialize:
        logger.add(sys.stderr, level=level.upper(), serialize=True)
    else:
        logger.add(sys.stderr, level=level.upper(), format=_FORMAT)
