"""Environment parsing helpers."""

import os

_TRUE_VALUES = ("true", "1", "yes")
_FALSE_VALUES = ("false", "0", "no")


def parse_bool(raw: str) -> bool:
    """Parse a boolean env value. Raise ValueError on anything unrecognised."""
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"expected one of {_TRUE_VALUES + _FALSE_VALUES}, got {raw!r}")


def split_csv(raw: str) -> list[str]:
    """
    Split a comma-separated string.

    Entries are returned exactly as written: no trimming, and empty entries
    are kept.
    """
    return raw.split(",")


def is_dry_run() -> bool:
    """Check DRY_RUN env var. Default False (enrollment runs)."""
    return os.getenv("DRY_RUN", "false").lower() in _TRUE_VALUES
