"""
Registry module for remote TicTacToe.
Persists sessions and stats, and exposes the operations hosts call.
"""

from .config import MatchConfig
from .kv_store import KeyValueStore, MemoryStore, JsonFileStore
from .records import LookupMap
from .stats import Stats, StatsTracker
from .match_registry import MatchRegistry
from .collaborators import (
    IdentityProvider,
    StaticIdentity,
    StorageBiller,
    NullBiller,
    DepositBiller,
    Refund,
)
from .service import TicTacToeService, SessionReceipt
