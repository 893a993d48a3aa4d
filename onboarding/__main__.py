"""Package entry point for ``python -m onboarding``."""

import sys

from onboarding.cli import main

if __name__ == "__main__":  # pragma: no cover - module entry point
    sys.exit(main())
