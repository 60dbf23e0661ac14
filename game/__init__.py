"""
Game module for remote TicTacToe.
Pure session logic: board, rules, win detection. No storage, no I/O.
"""

from .board import Board, Cell, Player, BOARD_SIZE
from .errors import (
    TicTacToeError,
    AlreadyInSession,
    NoActiveSession,
    NotYourTurn,
    InvalidOpponent,
    PositionError,
    PositionTooHigh,
    PositionTooLow,
    PositionOccupied,
    NoStats,
    InsufficientDeposit,
)
from .game_session import GameSession, MoveOutcome, OutcomeKind, SessionState, MAX_TURNS
from .move_validator import MoveValidator, ValidationResult
from .win_detector import WinDetector, wins
