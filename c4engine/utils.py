"""
utils.py - Constants, enumerations and helpers for the Connect Four engine

This module provides the board defaults, the cell and outcome enumerations,
the Player bundle, direction vectors for win checking and the ASCII
renderer shared by the board and the command-line harness.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Pieces in a row needed to win, not configurable
MIN_DIMENSION = CONNECT_N  # Smaller boards can never produce a win

Cell = Tuple[int, int]


class Slot(Enum):
    """Contents of a single board cell."""
    EMPTY = 0
    ONE = 1    # First player's piece
    TWO = 2    # Second player's piece

    def other(self) -> 'Slot':
        """Get the opposing slot."""
        if self == Slot.ONE:
            return Slot.TWO
        elif self == Slot.TWO:
            return Slot.ONE
        return Slot.EMPTY

    def __str__(self):
        if self == Slot.EMPTY:
            return "."
        elif self == Slot.ONE:
            return "X"
        else:
            return "O"


@dataclass(frozen=True, eq=False)
class Player:
    """
    A participant in a game.

    Players compare by identity, so two players sharing a colour are
    still told apart by the engine.
    """
    color: str
    name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name or self.color

    def __str__(self):
        return self.label


class GameStatus(Enum):
    """State of the game as a whole."""
    IN_PROGRESS = auto()
    WON = auto()
    TIED = auto()

    def is_game_over(self) -> bool:
        return self != GameStatus.IN_PROGRESS


class MoveKind(Enum):
    """Outcome of a single drop."""
    INVALID = auto()   # Column full, nothing changed
    CONTINUE = auto()
    WIN = auto()
    TIE = auto()


class Direction(Enum):
    """Directions a winning run can take."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN_RIGHT = auto()
    DIAGONAL_DOWN_LEFT = auto()


# (row, col) step for each direction; row grows towards the bottom
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1),
}


def is_valid_position(row: int, col: int, rows: int = ROWS, cols: int = COLS) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index
        rows: Board height
        cols: Board width

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < rows and 0 <= col < cols


def run_cells(row: int, col: int, direction: Direction, length: int = CONNECT_N) -> List[Cell]:
    """List the cells of a run starting at (row, col) in the given direction."""
    dr, dc = DIRECTION_VECTORS[direction]
    return [(row + i * dr, col + i * dc) for i in range(length)]


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a grid of slot values as ASCII art.

    Args:
        grid: 2D array of Slot values

    Returns:
        ASCII representation with column numbers underneath
    """
    rows, cols = grid.shape
    border = "|" + "-" * (cols * 2 - 1) + "|"

    lines = [border]
    for row in range(rows):
        lines.append("|" + " ".join(str(Slot(int(cell))) for cell in grid[row]) + "|")
    lines.append(border)

    # Column numbers past 9 only show their last digit
    lines.append("|" + " ".join(str(i % 10) for i in range(cols)) + "|")

    return "\n".join(lines)
