"""
Main entry point for running the package as a module.

Usage:
    python -m image_thumbs file penguin.jpg --dest thumbs
    python -m image_thumbs dir uploads --dest thumbs
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
