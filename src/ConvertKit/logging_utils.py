# ============================================================================
# ConvertKit - Logging Utilities
#
# Purpose: Centralized logging configuration and utilities
# Inputs: Log level, format string
# Outputs: Configured logger instances
# Dependencies: logging (stdlib)
# Usage: logger = get_logger(__name__)
#
# Changelog:
#   2026-03-02: Initial logging setup
#   2026-03-10: setup_logging accepts force=True so the CLI can re-apply
#               the level after loading a config file
# ============================================================================

import logging
from typing import Optional


_LOGGING_CONFIGURED = False

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "WARNING", format_string: Optional[str] = None, force: bool = False) -> None:
    """
    Configure logging for the entire package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        format_string: Optional custom format string
        force: Reconfigure even if logging was already set up
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED and not force:
        return

    if format_string is None:
        format_string = DEFAULT_FORMAT

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=force,
    )

    _LOGGING_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
