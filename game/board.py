"""
Board for a TicTacToe session.
A fixed 3x3 grid of cells, backed by a small numpy array.
"""

from enum import Enum, IntEnum
from typing import List, Optional, Sequence, Tuple

import numpy as np


BOARD_SIZE = 3

# Characters used when rendering and persisting the board
EMPTY_SPACE = " "
X_SPACE = "X"
O_SPACE = "O"


class Player(Enum):
    """The two marks a session binds to its participants."""
    X = "X"
    O = "O"

    def opposite(self) -> "Player":
        """Get the opposite player."""
        return Player.O if self == Player.X else Player.X

    @property
    def cell(self) -> "Cell":
        return Cell.X if self == Player.X else Cell.O


class Cell(IntEnum):
    """State of one square. Stored as its integer code in the grid."""
    EMPTY = 0
    X = 1
    O = 2

    @property
    def player(self) -> Optional[Player]:
        if self == Cell.EMPTY:
            return None
        return Player.X if self == Cell.X else Player.O

    @property
    def char(self) -> str:
        return _CELL_CHARS[self]

    @classmethod
    def from_char(cls, char: str) -> "Cell":
        for cell, cell_char in _CELL_CHARS.items():
            if cell_char == char:
                return cell
        raise ValueError(f"Unknown board character {char!r}")


_CELL_CHARS = {
    Cell.EMPTY: EMPTY_SPACE,
    Cell.X: X_SPACE,
    Cell.O: O_SPACE,
}


class Board:
    """
    The 3x3 TicTacToe grid.

    Rows go 0-2 top-to-bottom, columns 0-2 left-to-right. All indexes are
    zero-based; converting 1-based user input is the caller's job.
    The board has no idea whose turn it is.
    """

    def __init__(self, grid: Optional[np.ndarray] = None):
        if grid is None:
            grid = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
        if grid.shape != (BOARD_SIZE, BOARD_SIZE):
            raise ValueError(f"Board grid must be {BOARD_SIZE}x{BOARD_SIZE}, got {grid.shape}")
        self.grid = grid

    @staticmethod
    def _check_index(row: int, col: int):
        # numpy would happily accept -1, so check explicitly
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise IndexError(f"Cell ({row}, {col}) is off the board")

    def get(self, row: int, col: int) -> Cell:
        """
        Get the state of a cell.

        Args:
            row: Row index (0-2).
            col: Column index (0-2).

        Returns:
            The Cell at that position.
        """
        self._check_index(row, col)
        return Cell(int(self.grid[row, col]))

    def set(self, row: int, col: int, mark: Player):
        """
        Place a mark on an empty cell.

        Cells never go back to empty, so writing over a mark is a bug in the
        caller and raises ValueError.
        """
        self._check_index(row, col)
        if self.grid[row, col] != Cell.EMPTY:
            raise ValueError(f"Cell ({row}, {col}) is already occupied")
        self.grid[row, col] = mark.cell

    def is_occupied(self, row: int, col: int) -> bool:
        return self.get(row, col) != Cell.EMPTY

    def marks_placed(self) -> int:
        """Number of non-empty cells."""
        return int(np.count_nonzero(self.grid))

    def empty_cells(self) -> List[Tuple[int, int]]:
        """
        Get all empty cells on the board.

        Returns:
            List of (row, col) tuples, row by row.
        """
        rows, cols = np.nonzero(self.grid == Cell.EMPTY)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def copy(self) -> "Board":
        return Board(self.grid.copy())

    # ==================== TEXT FORMS ====================

    def to_rows(self) -> List[str]:
        """Board as three 3-character strings, e.g. ["X O", "   ", " X "]."""
        return [
            "".join(Cell(int(value)).char for value in row)
            for row in self.grid
        ]

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """Rebuild a board from the strings produced by to_rows()."""
        if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
            raise ValueError(f"Expected {BOARD_SIZE} rows of {BOARD_SIZE} characters, got {rows!r}")
        grid = np.array(
            [[Cell.from_char(char) for char in row] for row in rows],
            dtype=np.int8,
        )
        return cls(grid)

    def render(self) -> str:
        """
        Render the board for logs and the console:

             X | O |
            -----------
               | X |
            -----------
               |   | O
        """
        lines = [
            " " + " | ".join(row) + " "
            for row in self.to_rows()
        ]
        return "\n-----------\n".join(lines)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    def __repr__(self) -> str:
        return f"Board({self.to_rows()!r})"
