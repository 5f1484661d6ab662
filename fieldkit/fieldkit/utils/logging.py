"""
Logging setup for fieldkit.

- Level from FIELDKIT_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)
- Console handler on stderr so CLI stdout stays parseable
- Optional file handler for session debugging
"""

import logging
import sys
from pathlib import Path
from typing import Optional

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    """Configure the fieldkit logger. Safe to call more than once."""
    level_value = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger("fieldkit")
    logger.setLevel(level_value)
    # Avoid duplicate handlers on repeated CLI invocations in one process
    for h in list(logger.handlers):
        logger.removeHandler(h)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level_value)
    console.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level_value)
        file_handler.setFormatter(logging.Formatter(FORMAT))
        logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module (e.g. fieldkit.engine)."""
    return logging.getLogger(name)
