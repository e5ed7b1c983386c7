import logging
from typing import Optional

from . import config


def setup_logging(level: int = logging.INFO) -> None:
    """Configure root logging for a host application."""
    logging.basicConfig(level=level, format=config.LOG_FORMAT)


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Treat an empty optional field as absent."""
    return value if value else None
