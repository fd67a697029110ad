#!/usr/bin/env python3
#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/__main__.py
"""Entry point for running cmark-translate as a module.

This allows the package to be executed as:
    python -m cmark_translate [arguments]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
