"""
Main entry point for running the package as a module.

Usage:
    python -m galleryforge build ./MyGallery
    python -m galleryforge report --manifest ./MyGallery/public/data.json
    python -m galleryforge hash SECRET
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
