"""
Application settings.

Plain module constants. Every value can be overridden with an environment variable (prefix CHECKERS_).
"""

import logging
import os


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL: str = os.environ.get("CHECKERS_DATABASE_URL", "sqlite:///checkers.db")
SQL_ECHO: bool = _env_flag("CHECKERS_SQL_ECHO", False)
LOG_LEVEL: str = os.environ.get("CHECKERS_LOG_LEVEL", "INFO")

# The slot used when a save/load request does not name one
DEFAULT_SAVE_SLOT: str = "checkers_save"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Set up the root logger once for the whole application. Unknown level names fall back to INFO."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT
    )
