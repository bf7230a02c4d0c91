"""
board.py - Board representation and win detection for Connect Four

This module implements the Board class: a fixed-size grid of Slot values
with gravity drops and the two equivalent win checks (a full scan of every
cell as a run start, and a scan through a single placed piece).
"""

import numpy as np
from typing import List, Optional

from c4engine.debug import debug
from c4engine.errors import ConfigurationError, OutOfRangeError
from c4engine.utils import (ROWS, COLS, CONNECT_N, MIN_DIMENSION, Cell, Slot,
                            Direction, DIRECTION_VECTORS, is_valid_position,
                            run_cells, render_board_ascii)


class Board:
    """
    A Connect Four grid.

    Row 0 is the top and row ``rows - 1`` the bottom. Pieces stack from the
    bottom, so occupied cells in a column always form a contiguous run
    ending at the bottom row.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS):
        """
        Create an empty board.

        Args:
            rows: Board height, at least 4
            cols: Board width, at least 4

        Raises:
            ConfigurationError: If either dimension is too small for a win
        """
        for label, value in (("rows", rows), ("cols", cols)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ConfigurationError(f"Board {label} must be an integer, got {value!r}")
            if value < MIN_DIMENSION:
                raise ConfigurationError(
                    f"Board {label} must be at least {MIN_DIMENSION}, got {value}")

        debug.debug(f"Initializing {rows}x{cols} Board", "board")
        self.rows = int(rows)
        self.cols = int(cols)
        self.reset()

    def reset(self):
        """Empty every cell."""
        self.grid = np.zeros((self.rows, self.cols), dtype=np.int8)

    @classmethod
    def from_position(cls, position: str, rows: int = ROWS, cols: int = COLS) -> 'Board':
        """
        Build a board from a flat, comma-separated list of slot values.

        Values are read row by row from the top, 0 for empty, 1 and 2 for
        the two players. No gravity check is made; see has_floating_pieces.

        Raises:
            ValueError: If the string has the wrong length or bad values
        """
        values = [int(v) for v in position.split(',')]
        if len(values) != rows * cols:
            raise ValueError(f"Position string must have {rows * cols} values, got {len(values)}")

        valid = {slot.value for slot in Slot}
        bad = sorted(set(values) - valid)
        if bad:
            raise ValueError(f"Position contains invalid cell values: {bad}")

        board = cls(rows, cols)
        board.grid = np.array(values, dtype=np.int8).reshape(rows, cols)
        return board

    def copy(self) -> 'Board':
        """Return an independent copy of this board."""
        new_board = Board(self.rows, self.cols)
        new_board.grid = self.grid.copy()
        return new_board

    def _check_column(self, column) -> int:
        if isinstance(column, bool) or not isinstance(column, (int, np.integer)):
            debug.warning(f"Column {column!r} rejected: not an integer", "board")
            raise OutOfRangeError(f"Column must be an integer, got {column!r}")
        if not 0 <= column < self.cols:
            debug.warning(f"Column {column} rejected: outside 0-{self.cols - 1}", "board")
            raise OutOfRangeError(f"Column {column} outside valid range 0-{self.cols - 1}")
        return int(column)

    def find_drop_row(self, column: int) -> Optional[int]:
        """
        Find the row a piece dropped into ``column`` would land in.

        Returns:
            The lowest empty row index, or None if the column is full

        Raises:
            OutOfRangeError: If the column is outside the board
        """
        column = self._check_column(column)
        for row in range(self.rows - 1, -1, -1):
            if self.grid[row, column] == Slot.EMPTY.value:
                return row
        return None

    def place(self, column: int, slot: Slot) -> Optional[int]:
        """
        Drop a piece for ``slot`` into ``column``.

        Returns:
            The row the piece landed in, or None if the column was full
        """
        if slot == Slot.EMPTY:
            raise ValueError("Cannot place an empty slot")

        row = self.find_drop_row(column)
        if row is None:
            debug.debug(f"Column {column} is full", "board")
            return None

        debug.trace(f"Placing {slot.name} at ({row}, {column})", "board")
        self.grid[row, column] = slot.value
        return row

    def get_cell(self, row: int, col: int) -> Slot:
        if not is_valid_position(row, col, self.rows, self.cols):
            raise OutOfRangeError(f"Cell ({row}, {col}) is outside the board")
        return Slot(int(self.grid[row, col]))

    def column_height(self, column: int) -> int:
        """Number of pieces currently in ``column``."""
        column = self._check_column(column)
        return int(np.count_nonzero(self.grid[:, column]))

    def get_valid_moves(self) -> List[int]:
        """Columns that still have room."""
        return [col for col in range(self.cols) if self.grid[0, col] == Slot.EMPTY.value]

    def count_pieces(self) -> int:
        return int(np.count_nonzero(self.grid))

    def is_full(self) -> bool:
        return bool(np.all(self.grid != Slot.EMPTY.value))

    def has_floating_pieces(self) -> bool:
        """True if any piece sits above an empty cell in its column."""
        occupied = self.grid != Slot.EMPTY.value
        # A floating piece means an occupied cell directly above an empty one
        return bool(np.any(occupied[:-1, :] & ~occupied[1:, :]))

    def _run_owned_by(self, cells: List[Cell], value: int) -> bool:
        return all(is_valid_position(r, c, self.rows, self.cols) and self.grid[r, c] == value
                   for r, c in cells)

    def find_winning_line(self, slot: Slot) -> Optional[List[Cell]]:
        """
        Scan every cell as the start of a run and return the first winning run.

        Each cell is tried in row-major order against the horizontal,
        vertical, down-right and down-left runs of CONNECT_N cells.

        Returns:
            The cells of the first winning run, or None if ``slot`` has none
        """
        if slot == Slot.EMPTY:
            return None

        for row in range(self.rows):
            for col in range(self.cols):
                if self.grid[row, col] != slot.value:
                    continue
                for direction in Direction:
                    cells = run_cells(row, col, direction)
                    if self._run_owned_by(cells, slot.value):
                        return cells
        return None

    def has_win(self, slot: Slot) -> bool:
        """Full-board check for four in a row belonging to ``slot``."""
        return self.find_winning_line(slot) is not None

    def _line_through(self, row: int, col: int, dr: int, dc: int) -> List[Cell]:
        value = self.grid[row, col]
        positions = [(row, col)]

        r, c = row + dr, col + dc
        while is_valid_position(r, c, self.rows, self.cols) and self.grid[r, c] == value:
            positions.append((r, c))
            r += dr
            c += dc

        r, c = row - dr, col - dc
        while is_valid_position(r, c, self.rows, self.cols) and self.grid[r, c] == value:
            positions.insert(0, (r, c))
            r -= dr
            c -= dc

        return positions

    def get_winning_line(self, row: int, col: int) -> List[Cell]:
        """
        Get the winning line passing through the piece at (row, col).

        Returns:
            Every connected cell of the first direction holding at least
            CONNECT_N pieces, or an empty list if the piece wins nothing
        """
        if self.get_cell(row, col) == Slot.EMPTY:
            return []

        for dr, dc in DIRECTION_VECTORS.values():
            positions = self._line_through(row, col, dr, dc)
            if len(positions) >= CONNECT_N:
                return positions
        return []

    def check_win_at(self, row: int, col: int) -> bool:
        """Check whether the piece at (row, col) is part of four in a row."""
        return bool(self.get_winning_line(row, col))

    def get_state(self) -> np.ndarray:
        """Copy of the grid as a numpy array of slot values."""
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
