"""
Main entry point for the edgeos_api package.

Allows running the client as: python -m edgeos_api
"""

import sys

from edgeos_api.cli import main

if __name__ == "__main__":
    sys.exit(main())
