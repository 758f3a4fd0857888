"""
Environment Settings and Logging

Small readers for the environment variables the toolset understands, and the
one-call logging setup used by the CLI:

    from browser_toolset.config import configure_logging, get_logger

    configure_logging()          # level from LOG_LEVEL
    logger = get_logger(__name__)
"""

import logging
import os
import sys
from typing import Optional

DEFAULT_LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s: %(message)s"

# Chatty at INFO; only their warnings reach the console
QUIET_LOGGERS = ("playwright", "asyncio", "claude_agent_sdk", "mcp")

TRUE_VALUES = ("true", "1", "yes", "on")

logger = logging.getLogger(__name__)


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable (true/1/yes/on)."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in TRUE_VALUES


def env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back on unparsable values."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, value, default)
        return default


def parse_log_level(value: Optional[str]) -> Optional[int]:
    """
    Map a level name ("debug", "WARNING") or number ("10") to a logging level.

    Returns:
        The level, or None if ``value`` names no level
    """
    if value is None or not value.strip():
        return None
    value = value.strip().upper()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value)
    return level if isinstance(level, int) else None


def configure_logging(
    level: Optional[int] = None,
    verbose: bool = False,
) -> int:
    """
    Configure logging for the browser toolset.

    Args:
        level: Override log level (default: LOG_LEVEL, else INFO)
        verbose: Detailed format with timestamps and logger names

    Returns:
        The level in effect
    """
    raw = os.getenv("LOG_LEVEL")
    invalid = False
    if level is None:
        level = parse_log_level(raw)
        invalid = level is None and bool(raw and raw.strip())
        if level is None:
            level = DEFAULT_LOG_LEVEL

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT if verbose else LOG_FORMAT_SIMPLE,
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger("browser_toolset").setLevel(level)

    if level > logging.DEBUG:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    if invalid:
        logger.warning("Ignoring LOG_LEVEL=%r, using %s", raw, logging.getLevelName(level))
    return level


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
