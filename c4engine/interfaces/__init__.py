"""
c4engine.interfaces - Front ends for the Connect Four engine

This package contains the command-line harness used to play and
inspect games.
"""

# Don't import anything here to avoid circular imports
__all__ = []
