#!/usr/bin/env python3
"""
PagePicker - Entry point for python -m pagepicker

This module allows the package to be run as a module:
    python -m pagepicker
"""

import sys

from pagepicker import main

if __name__ == "__main__":
    sys.exit(main())
