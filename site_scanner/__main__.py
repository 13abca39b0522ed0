"""
Main entry point for the site_scanner package.

Allows running the scanner as: python -m site_scanner
"""

import sys

from site_scanner.cli import main

if __name__ == "__main__":
    sys.exit(main())
