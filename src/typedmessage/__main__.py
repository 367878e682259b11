"""Allow ``python -m typedmessage``."""

import sys

from typedmessage.cli import main

if __name__ == "__main__":
    sys.exit(main())
