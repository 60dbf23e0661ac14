"""
Match registry for remote TicTacToe.
Maps players to their active session and creates, resolves and tears down
sessions.
"""

import hashlib
import logging
from typing import Optional

from game.board import Board
from game.errors import AlreadyInSession, InvalidOpponent, NoActiveSession
from game.game_session import GameSession, MoveOutcome, OutcomeKind
from .config import MatchConfig
from .kv_store import KeyValueStore
from .records import (
    LookupMap,
    GAME_KEYS_PREFIX,
    GAMES_PREFIX,
    encode_str,
    decode_str,
    encode_session,
    decode_session,
)
from .stats import StatsTracker


logger = logging.getLogger(__name__)

_OUTCOME_MESSAGES = {
    OutcomeKind.WON: "You've won!!!!",
    OutcomeKind.TIED: "You've tied :|",
    OutcomeKind.LOST: "You have lost :'(",
}


class MatchRegistry:
    """
    Owns the player -> session key and session key -> GameSession maps.

    Game flow:
    1. start_session() registers both players under one session key
    2. submit_move() loads the session, applies the move and saves it
    3. On a win or tie the session is torn down and the stats are recorded

    Every operation is one store transaction: if it raises, nothing it wrote
    is kept.
    """

    def __init__(
        self,
        store: KeyValueStore,
        stats: Optional[StatsTracker] = None,
        config: Optional[MatchConfig] = None
    ):
        """
        Initialize the registry.

        Args:
            store: Backend holding the session and stats records.
            stats: Stats tracker. One over the same store is created if not provided.
            config: Match configuration. Uses defaults if not provided.
        """
        self.config = config or MatchConfig()
        self.store = store
        self.game_keys: LookupMap[str] = LookupMap(store, GAME_KEYS_PREFIX, encode_str, decode_str)
        self.games: LookupMap[GameSession] = LookupMap(store, GAMES_PREFIX, encode_session, decode_session)
        self.stats = stats or StatsTracker(store)

    @staticmethod
    def session_key(initiator: str, opponent: str) -> str:
        """Deterministic key for the ordered pair (initiator, opponent)."""
        digest = hashlib.sha256(f"{initiator}\0{opponent}".encode("utf-8"))
        return digest.hexdigest()

    def active_session_key(self, player: str) -> Optional[str]:
        """Session key for the player's game, or None if they have none."""
        key = self.game_keys.get(player)
        if key is None or not self.games.contains(key):
            return None
        return key

    # ==================== OPERATIONS ====================

    def start_session(self, initiator: str, opponent: str) -> str:
        """
        Start a game. The initiator plays X and moves first.

        Raises:
            InvalidOpponent: initiator and opponent are the same player.
            AlreadyInSession: either player still has a game.
        """
        if initiator == opponent:
            raise InvalidOpponent(initiator)
        if self.active_session_key(initiator) is not None:
            raise AlreadyInSession(initiator, is_caller=True)
        if self.active_session_key(opponent) is not None:
            raise AlreadyInSession(opponent, is_caller=False)

        key = self.session_key(initiator, opponent)
        with self.store.transaction():
            self.game_keys.insert(initiator, key)
            self.game_keys.insert(opponent, key)
            self.games.insert(key, GameSession.new(initiator, opponent))

            self.stats.ensure(opponent)
            self.stats.ensure(initiator)

        logger.info("New game %s: %s (X) vs %s (O)", key[:12], initiator, opponent)
        return key

    def submit_move(self, caller: str, row: int, col: int) -> MoveOutcome:
        """
        Play a move for the caller at 1-based (row, col).

        Raises:
            NoActiveSession, NotYourTurn, PositionTooHigh, PositionTooLow,
            PositionOccupied.
        """
        with self.store.transaction():
            key, session = self._load(caller)

            outcome = session.apply_move(caller, row, col)

            if outcome.forced:
                self._settle_forced(caller, key, session, outcome)
            elif outcome.is_terminal:
                logger.info("%s played (%d, %d)\n%s", caller, row, col, session.board.render())
                self._finish(caller, key, session, outcome)
            else:
                logger.info("%s played (%d, %d)\n%s", caller, row, col, session.board.render())
                self.games.insert(key, session)

        if outcome.is_terminal:
            logger.info("%s: %s", caller, _OUTCOME_MESSAGES[outcome.kind])
        return outcome

    def view_session(self, caller: str) -> GameSession:
        """Snapshot of the caller's session (board, turn, completed)."""
        _, session = self._load(caller)
        return session

    def view_board(self, caller: str) -> Board:
        return self.view_session(caller).board

    # ==================== INTERNALS ====================

    def _load(self, caller: str):
        key = self.active_session_key(caller)
        if key is None:
            raise NoActiveSession(caller)
        return key, self.games.get(key)

    def _finish(self, caller: str, key: str, session: GameSession, outcome: MoveOutcome):
        opponent = session.opponent_of(caller)
        self.game_keys.remove(caller)

        if self.config.EAGER_TEARDOWN:
            self.game_keys.remove(opponent)
            self.games.remove(key)
            self.stats.record(outcome, caller, opponent)
        else:
            # Opponent settles this game on their next move
            self.games.insert(key, session)
            self.stats.record(outcome, caller)

    def _settle_forced(self, caller: str, key: str, session: GameSession, outcome: MoveOutcome):
        self.game_keys.remove(caller)

        opponent = session.opponent_of(caller)
        if self.game_keys.get(opponent) != key:
            self.games.remove(key)
        self.stats.record(outcome, caller)
