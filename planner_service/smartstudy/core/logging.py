"""
Artifact: planner_service/smartstudy/core/logging.py
Purpose: Provides centralized logging configuration and named logger accessors.
Author: SmartStudy Team
Created: 2026-10-12
Revised:
- 2026-10-12: Root level is now read from LOG_LEVEL via settings. (SmartStudy Team)
Preconditions:
- Python logging module is available.
Inputs:
- Acceptable: Logger names as non-empty strings; standard level names.
- Unacceptable: Invalid logger names that are not string-compatible.
Postconditions:
- Root logging is configured once and loggers can be retrieved by name.
Returns:
- `configure_logging` returns None; `get_logger` returns `logging.Logger`.
Errors/Exceptions:
- No custom exceptions; unknown level names fall back to DEBUG.
"""

import logging
from typing import Optional

from .config import settings


def configure_logging(level: Optional[str] = None) -> None:
    """Apply process-wide logging configuration for the service."""
    level_name = (level or settings.log_level()).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.DEBUG),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def get_logger(name: str) -> logging.Logger:
    """Return a named logger instance."""
    return logging.getLogger(name)
