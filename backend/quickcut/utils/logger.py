"""Logging configuration for the application."""
import logging
import sys
from quickcut.config import settings

level = logging.DEBUG if settings.environment == "development" else logging.INFO

logger = logging.getLogger("quickcut")
logger.setLevel(level)

handler = logging.StreamHandler(sys.stdout)
handler.setLevel(level)
handler.setFormatter(
    logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
)

# Add handler to logger if not already added
if not logger.handlers:
    logger.addHandler(handler)

# Prevent duplicate logs
logger.propagate = False

__all__ = ["logger"]
