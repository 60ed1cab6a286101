import logging
import sys
from typing import Optional

from oneepay.core.config import settings

logger = logging.getLogger("oneepay")


def setup_logging(level: Optional[str] = None) -> None:
    """Attach a stream handler to the SDK logger.

    The level falls back to ``settings.LOG_LEVEL`` when not given.
    Calling it again only changes the level.
    """
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(handler)
