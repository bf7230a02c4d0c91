#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four engine harness

Examples:
  python run.py play --p1-color red --p2-color yellow
  python run.py check --position 0,0,...,1,1,1,1
  python run.py benchmark --iterations 500 --seed 7
"""

import sys

from c4engine.interfaces.cli import main


if __name__ == "__main__":
    sys.exit(main())
