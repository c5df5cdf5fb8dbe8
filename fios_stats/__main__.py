"""
Main entry point for the fios_stats package.

Allows running the retriever as: python -m fios_stats
"""

import sys

from fios_stats.cli import main

if __name__ == "__main__":
    sys.exit(main())
