#!/usr/bin/env python3
"""
run.py - Main entry point for the dropfour command-line shell

    python run.py play --red Alice --yellow Bob --save friday
    python run.py load 3344556
    python run.py load --slot friday
    python run.py check 799
    python run.py saves
"""

import sys

from dropfour.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
