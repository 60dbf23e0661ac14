"""
Move validator for TicTacToe sessions.
Validates that a move follows the rules before anything is changed.
"""

from typing import Optional, Tuple, List, TYPE_CHECKING
from dataclasses import dataclass

from .board import BOARD_SIZE
from .errors import (
    TicTacToeError,
    NotYourTurn,
    PositionTooHigh,
    PositionTooLow,
    PositionOccupied,
)

if TYPE_CHECKING:
    from .game_session import GameSession


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error: Optional[TicTacToeError] = None

    @property
    def error_message(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules, checked in this order:
    1. It must be the caller's turn
    2. Row and column must both be 1-3 (user-facing, 1-based)
    3. The target cell must be empty
    """

    def validate_move(
        self,
        session: "GameSession",
        caller: str,
        row: int,
        col: int
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            session: Current game session.
            caller: Id of the player trying to move.
            row: Row to play (1-3).
            col: Column to play (1-3).

        Returns:
            ValidationResult with is_valid and the error to raise.
        """
        if caller != session.current_player_id:
            return ValidationResult(
                is_valid=False,
                error=NotYourTurn(caller, expected=session.current_player_id)
            )

        range_error = self.check_placement(row, col)
        if range_error is not None:
            return ValidationResult(is_valid=False, error=range_error)

        if session.board.is_occupied(row - 1, col - 1):
            return ValidationResult(
                is_valid=False,
                error=PositionOccupied(row, col)
            )

        return ValidationResult(is_valid=True)

    @staticmethod
    def check_placement(row: int, col: int) -> Optional[TicTacToeError]:
        """Range check for 1-based positions. "Too high" wins over "too low"."""
        if row > BOARD_SIZE or col > BOARD_SIZE:
            return PositionTooHigh(row, col)
        if row < 1 or col < 1:
            return PositionTooLow(row, col)
        return None

    def get_valid_moves(self, session: "GameSession") -> List[Tuple[int, int]]:
        """
        Get all open positions for the player whose turn it is.

        Returns:
            List of 1-based (row, col) positions, empty once the game is over.
        """
        if session.is_terminal:
            return []

        return [(row + 1, col + 1) for row, col in session.board.empty_cells()]
