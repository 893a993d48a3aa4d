"""Logging configuration for the contact onboarding tool."""

import logging
import os
from pathlib import Path

DEFAULT_LOG_FILE = "automation.log"

# Names of loggers built by setup_logger, so configure_logging can rebuild them
_configured: set[str] = set()
# Level forced by configure_logging (e.g. from --log-level); wins over LOG_LEVEL
_level_override: str | None = None


def setup_logger(
    name: str,
    log_level: str | None = None,
    log_file: str | Path | None = None,
) -> logging.Logger:
    """
    Configure and return a logger.

    - Level from LOG_LEVEL env var (default INFO)
    - Format: "[YYYY-MM-DD HH:MM:SS] [LEVEL] [name] message"
    - Output to stderr
    - Also append to LOG_FILE (default automation.log); an empty LOG_FILE
      disables file output
    """
    logger = logging.getLogger(name)

    # Avoid adding duplicate handlers if called multiple times
    if logger.handlers:
        return logger

    level_str = log_level or _level_override or os.getenv("LOG_LEVEL", "INFO")
    level = getattr(logging, level_str.upper(), logging.INFO)
    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    stderr_handler = logging.StreamHandler()
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    # Append-only file handler; never truncated, never rotated
    if log_file is None:
        log_file = os.getenv("LOG_FILE", DEFAULT_LOG_FILE)
    if str(log_file).strip():
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _configured.add(name)
    return logger


def configure_logging(log_level: str | None = None) -> None:
    """
    Rebuild every logger created so far from the current settings.

    Module-level loggers are created at import time, before the CLI has
    loaded ``.env``. Calling this afterwards applies LOG_LEVEL and LOG_FILE
    from it to those loggers too. A non-empty ``log_level`` overrides
    LOG_LEVEL for existing loggers and for every logger created later.
    """
    global _level_override
    _level_override = log_level or None

    for name in sorted(_configured):
        logger = logging.getLogger(name)
        if not logger.handlers:
            continue
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        setup_logger(name)
