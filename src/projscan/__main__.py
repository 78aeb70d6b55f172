"""Allow ``python -m projscan``."""

import sys

from projscan.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
