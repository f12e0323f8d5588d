"""Allow `python -m marks_toolkit`."""

import sys

from marks_toolkit.cli import main

if __name__ == "__main__":
    sys.exit(main())
