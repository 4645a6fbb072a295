"""Environment configuration and logging setup."""

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file in project root
_project_root = Path(__file__).resolve().parent.parent
load_dotenv(_project_root / ".env")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Config:
    """Configuration for the rental CLI."""

    # Fleet file used when none is given on the command line
    FLEET_FILE = os.getenv("RENTAL_FLEET_FILE", str(_project_root / "fleet" / "demo.yaml"))
    LOG_LEVEL = os.getenv("RENTAL_LOG_LEVEL", "WARNING")


def setup_logging(level=None):
    """Send package logs to stdout at the given (or configured) level."""
    level = (level or Config.LOG_LEVEL).upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("rental")
    logger.handlers = [handler]
    logger.setLevel(getattr(logging, level, logging.WARNING))
    return logger
