"""
Logging setup for processes embedding the rate engine.

Modules only ever call logging.getLogger(__name__); handlers are
configured once here by the host process.
"""
import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[Union[str, int]] = None) -> None:
    """Configure root logging, defaulting to the LOG_LEVEL setting."""
    if level is None:
        from carrier_rates.core.config import settings
        level = settings.LOG_LEVEL

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )
    # httpx logs every request at INFO, including full URLs
    logging.getLogger("httpx").setLevel(logging.WARNING)
