"""Logging setup shared by the server and the tests."""

import logging
import sys
from typing import Optional

# Core modules log as shortlink.<module> and propagate here.
ROOT_LOGGER = "shortlink"

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
    '"logger": "%(name)s", "message": "%(message)s"}'
)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Configure the ``shortlink`` logger.
    
    Calling this again replaces the previous handlers, so tests can reconfigure
    freely.
    
    Args:
        level: Level name, case-insensitive; unknown names fall back to INFO
        log_file: Also append to this file when given
        json_format: Emit one JSON object per line instead of plain text
        
    Returns:
        The configured ``shortlink`` logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(
        JSON_FORMAT if json_format else PLAIN_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(numeric_level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    
    return logger
