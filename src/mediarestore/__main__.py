"""Allow ``python -m mediarestore``."""

import sys

from mediarestore.ui.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
