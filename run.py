#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four engine CLI

Examples:
    python run.py analyze --moves 3,3,4 --depth 8
    python run.py selfplay --time-ms 500
    python run.py --debug-level debug benchmark --depth 7
"""

import sys

from standalone_connect4.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
