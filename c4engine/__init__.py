"""
c4engine - Connect Four rules engine

This package provides the board, turn and win/tie logic of Connect Four
as a small synchronous state machine, plus a command-line harness and a
Gymnasium environment built on top of it.
"""

# Version number
__version__ = '0.1.0'
