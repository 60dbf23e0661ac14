"""
Win detection for TicTacToe.
Checks whether the cell that was just played completed a line.
"""

from typing import List, Optional, Tuple

import numpy as np

from .board import Board, Player, BOARD_SIZE


Line = List[Tuple[int, int]]


class WinDetector:
    """
    Checks for a win through the most recently played cell.

    A win can only be created by the move just made, so only the lines
    running through that cell are checked:
    1. its row
    2. its column
    3. the main diagonal, if row == col
    4. the anti-diagonal, if row + col == 2

    The centre cell lies on both diagonals. The first complete line wins.
    """

    def winning_line(self, board: Board, row: int, col: int, mark: Player) -> Optional[Line]:
        """
        Find the first complete line of `mark` through (row, col).

        Args:
            board: The board to inspect.
            row: Row of the just-played cell (0-2).
            col: Column of the just-played cell (0-2).
            mark: The mark that was played.

        Returns:
            The cells of the completed line, or None.
        """
        if board.get(row, col) != mark.cell:
            return None

        for line in self._lines_through(row, col):
            if self._is_complete(board, line, mark):
                return line
        return None

    def wins(self, board: Board, row: int, col: int, mark: Player) -> bool:
        return self.winning_line(board, row, col, mark) is not None

    @staticmethod
    def _lines_through(row: int, col: int):
        last = BOARD_SIZE - 1
        yield [(row, c) for c in range(BOARD_SIZE)]
        yield [(r, col) for r in range(BOARD_SIZE)]
        if row == col:
            yield [(i, i) for i in range(BOARD_SIZE)]
        if row + col == last:
            yield [(i, last - i) for i in range(BOARD_SIZE)]

    @staticmethod
    def _is_complete(board: Board, line: Line, mark: Player) -> bool:
        rows, cols = zip(*line)
        return bool(np.all(board.grid[list(rows), list(cols)] == mark.cell))


_detector = WinDetector()


def wins(board: Board, row: int, col: int, mark: Player) -> bool:
    """Module-level shortcut for WinDetector().wins()."""
    return _detector.wins(board, row, col, mark)
