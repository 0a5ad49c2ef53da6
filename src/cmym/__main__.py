"""Allow ``python -m cmym``."""

import sys

from cmym.ui.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
