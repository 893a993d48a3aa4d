from .env_helpers import is_dry_run, parse_bool, split_csv
from .logging_config import configure_logging, setup_logger

__all__ = [
    "configure_logging",
    "setup_logger",
    "is_dry_run",
    "parse_bool",
    "split_csv",
]
