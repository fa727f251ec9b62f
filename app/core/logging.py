import logging
import sys
from typing import Optional

from app.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"

# Rule problems found while loading vendor configs stay visible at any root level
RULE_LOGGERS = ("registry.loader",)

NOISY_LOGGERS = ("uvicorn.access", "watchfiles.main")


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure stdout logging for the penalty service.

    Args:
        level: Root level name; defaults to ``settings.log_level``.
            Set DEBUG to see per-metric uncosted reasons from penalty.engine.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel((level or settings.log_level).upper())

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
    root_logger.addHandler(handler)

    if root_logger.level > logging.WARNING:
        for name in RULE_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
