"""
TicTacToe service: the operations a host exposes to remote players.

Resolves the caller through an IdentityProvider, runs each operation as one
store transaction, and reports the storage a new game allocated to the
StorageBiller.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from game.game_session import MoveOutcome
from .collaborators import IdentityProvider, StorageBiller, NullBiller
from .config import MatchConfig
from .kv_store import KeyValueStore
from .match_registry import MatchRegistry
from .stats import Stats, StatsTracker


logger = logging.getLogger(__name__)


@dataclass
class SessionReceipt:
    """Result of start_session."""
    session_key: str
    bytes_allocated: int
    refund: int = 0


class TicTacToeService:
    """
    Collaborator-facing TicTacToe operations.

    Operations:
    - start_session(opponent, attached_deposit)
    - submit_move(row, col)
    - view_session()
    - view_stats(player)
    """

    def __init__(
        self,
        store: KeyValueStore,
        identity: IdentityProvider,
        biller: Optional[StorageBiller] = None,
        config: Optional[MatchConfig] = None
    ):
        self.config = config or MatchConfig()
        self.store = store
        self.identity = identity
        self.biller = biller or NullBiller()
        self.stats = StatsTracker(store)
        self.registry = MatchRegistry(store, stats=self.stats, config=self.config)

    def start_session(self, opponent: str, attached_deposit: int = 0) -> SessionReceipt:
        """
        Challenge `opponent` to a game. The caller plays X.

        The storage the new records take is charged against the attached
        deposit. If the deposit is short, the game is not created.
        """
        caller = self.identity.current_player()

        with self.store.transaction():
            initial_storage = self.store.storage_usage()
            key = self.registry.start_session(caller, opponent)
            bytes_allocated = self.store.storage_usage() - initial_storage
            refund = self.biller.settle(caller, bytes_allocated, attached_deposit)

        if refund:
            self.biller.pay_refund(caller, refund)
        return SessionReceipt(key, bytes_allocated, refund)

    def submit_move(self, row: int, col: int) -> MoveOutcome:
        caller = self.identity.current_player()
        return self.registry.submit_move(caller, row, col)

    def view_session(self) -> str:
        """Rendered board of the caller's game."""
        caller = self.identity.current_player()
        rendered = self.registry.view_board(caller).render()
        logger.info("\n%s", rendered)
        return rendered

    def view_stats(self, player: str) -> Stats:
        stats = self.stats.view(player)
        logger.info(self.stats.describe(player))
        return stats
