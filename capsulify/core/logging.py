"""Root logger configuration."""

import logging
from typing import Optional

from capsulify.config import settings


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Install a single stream handler on the root logger.

    Args:
        level: Level name; defaults to ``settings.log_level``
    """
    logging.root.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(level=level or settings.log_level, handlers=[handler])
