"""
Game session state machine for remote TicTacToe.
Tracks the players, whose turn it is, the board and the move counter.
"""

import logging
from enum import Enum
from typing import Optional
from dataclasses import dataclass, field

from .board import Board, Player, BOARD_SIZE
from .errors import NotYourTurn
from .move_validator import MoveValidator
from .win_detector import WinDetector


logger = logging.getLogger(__name__)

MAX_TURNS = BOARD_SIZE * BOARD_SIZE


class SessionState(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    TIED = "tied"


class OutcomeKind(Enum):
    CONTINUED = "continued"
    WON = "won"
    TIED = "tied"
    LOST = "lost"


@dataclass(frozen=True)
class MoveOutcome:
    """
    What a call to apply_move resulted in.

    `player` is the mark the outcome is about (the winner for WON, the
    caller for LOST). `forced` is set when the session had already ended
    and the call only settled it for the caller.
    """
    kind: OutcomeKind
    player: Optional[Player] = None
    forced: bool = False

    @classmethod
    def continued(cls) -> "MoveOutcome":
        return cls(OutcomeKind.CONTINUED)

    @classmethod
    def won(cls, player: Player, forced: bool = False) -> "MoveOutcome":
        return cls(OutcomeKind.WON, player, forced)

    @classmethod
    def tied(cls, forced: bool = False) -> "MoveOutcome":
        return cls(OutcomeKind.TIED, None, forced)

    @classmethod
    def lost(cls, player: Player) -> "MoveOutcome":
        return cls(OutcomeKind.LOST, player, True)

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.CONTINUED


@dataclass
class GameSession:
    """
    One match between two players.

    Tracks:
    - Which PlayerId plays X and which plays O
    - Whose turn it is
    - The 3x3 board
    - How many moves have been played (0-9)
    - Whether the game has been won

    A won session keeps `turn` on the winner. A session with 9 turns played
    that is not completed is a tie.
    """

    player_x: str
    player_o: str
    turn: Player = Player.X
    board: Board = field(default_factory=Board)
    turns_played: int = 0
    completed: bool = False

    @classmethod
    def new(cls, initiator: str, opponent: str) -> "GameSession":
        """The initiator plays X and moves first."""
        return cls(player_x=initiator, player_o=opponent)

    # ==================== PLAYERS ====================

    def player_id(self, mark: Player) -> str:
        return self.player_x if mark == Player.X else self.player_o

    def mark_of(self, player_id: str) -> Optional[Player]:
        if player_id == self.player_x:
            return Player.X
        if player_id == self.player_o:
            return Player.O
        return None

    def opponent_of(self, player_id: str) -> Optional[str]:
        mark = self.mark_of(player_id)
        if mark is None:
            return None
        return self.player_id(mark.opposite())

    @property
    def current_player_id(self) -> str:
        return self.player_id(self.turn)

    # ==================== STATE ====================

    @property
    def state(self) -> SessionState:
        if self.completed:
            return SessionState.WON
        if self.turns_played >= MAX_TURNS:
            return SessionState.TIED
        return SessionState.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        return self.turn if self.completed else None

    @property
    def is_terminal(self) -> bool:
        return self.state != SessionState.IN_PROGRESS

    # ==================== MOVES ====================

    def apply_move(self, caller: str, row: int, col: int) -> MoveOutcome:
        """
        Play the caller's mark at a 1-based (row, col).

        Args:
            caller: Id of the player making the move.
            row: Row (1-3).
            col: Column (1-3).

        Returns:
            CONTINUED, WON(mover) or TIED. Against a session that already
            ended, a forced LOST/TIED (or WON for the recorded winner) without
            touching the board.

        Raises:
            NotYourTurn, PositionTooHigh, PositionTooLow, PositionOccupied.
            Nothing is changed when these are raised.
        """
        if self.is_terminal:
            return self._resolve_finished(caller)

        result = MoveValidator().validate_move(self, caller, row, col)
        if not result.is_valid:
            raise result.error

        mover = self.turn
        r, c = row - 1, col - 1
        self.board.set(r, c, mover)
        self.turns_played += 1

        if WinDetector().wins(self.board, r, c, mover):
            self.completed = True
            logger.debug("%s completed a line at (%d, %d)", mover.value, row, col)
            return MoveOutcome.won(mover)

        if self.turns_played == MAX_TURNS:
            return MoveOutcome.tied()

        self.turn = mover.opposite()
        return MoveOutcome.continued()

    def _resolve_finished(self, caller: str) -> MoveOutcome:
        mark = self.mark_of(caller)
        if mark is None:
            raise NotYourTurn(caller)

        if self.state == SessionState.TIED:
            return MoveOutcome.tied(forced=True)
        if mark == self.winner:
            return MoveOutcome.won(mark, forced=True)
        return MoveOutcome.lost(mark)

