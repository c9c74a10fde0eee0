"""Allow ``python -m presentation_builder``."""

import sys

from presentation_builder.cli import main

if __name__ == "__main__":  # pragma: no cover - import guard
    sys.exit(main())
