"""
Logging configuration
"""

import logging
import sys
from typing import Optional
from core.config import settings

NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: Optional[str] = None):
    """Configure root logging for a sync run (``level`` overrides LOG_LEVEL)"""

    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ],
        force=True
    )

    # httpx logs every request at INFO; keep pages and retries readable
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at {level_name} level")
