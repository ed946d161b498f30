#!/usr/bin/env python3
"""
run.py - Main entry point for Four-in-a-Row

See `python run.py --help` for the available commands.
"""

import sys

from fourinarow.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
