"""
Errors for the TicTacToe session core.

Every error here is a caller mistake (bad input or bad flow), never a
transient failure. The call that raised it is aborted and no state changes.
"""

from typing import Optional


class TicTacToeError(Exception):
    """Base class for all caller-facing errors."""


# ==================== SESSION / FLOW ERRORS ====================

class AlreadyInSession(TicTacToeError):
    """A participant already has an unfinished game."""

    def __init__(self, player_id: str, is_caller: bool = True):
        self.player_id = player_id
        self.is_caller = is_caller
        if is_caller:
            message = "You must finish your current game before playing a new one."
        else:
            message = f"{player_id} is currently in a game."
        super().__init__(message)


class NoActiveSession(TicTacToeError):
    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"{player_id} does not have an active game")


class NotYourTurn(TicTacToeError):
    def __init__(self, player_id: str, expected: Optional[str] = None):
        self.player_id = player_id
        self.expected = expected
        super().__init__("It is not your turn")


class InvalidOpponent(TicTacToeError):
    """Both sides of a game must be different players."""

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"{player_id} cannot start a game against themselves")


# ==================== POSITION ERRORS ====================

class PositionError(TicTacToeError):
    """Base class for errors about a (row, col) the caller asked for."""

    def __init__(self, row: int, col: int, message: str):
        self.row = row
        self.col = col
        super().__init__(message)


class PositionTooHigh(PositionError):
    def __init__(self, row: int, col: int):
        super().__init__(row, col, f"Positions only go up to 3, {row},{col} is too high")


class PositionTooLow(PositionError):
    def __init__(self, row: int, col: int):
        super().__init__(row, col, f"The lowest position is 1, {row},{col} is too low")


class PositionOccupied(PositionError):
    def __init__(self, row: int, col: int):
        super().__init__(row, col, f"Position {row},{col} is already played")


# ==================== STATS / BILLING ERRORS ====================

class NoStats(TicTacToeError):
    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"{player_id} does not have any statistics")


class InsufficientDeposit(TicTacToeError):
    """The attached deposit does not cover the storage a call allocated."""

    def __init__(self, required: int, attached: int):
        self.required = required
        self.attached = attached
        super().__init__(f"Must attach {required} to cover storage (attached {attached})")
