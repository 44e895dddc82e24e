"""
Entry point for ``python -m timestampr.cli``.

Usage:
    python -m timestampr.cli [port]
"""

import sys

from timestampr.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
