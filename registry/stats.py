"""
Per-player win/loss/tie counters.
"""

import json
import logging
from dataclasses import dataclass, asdict
from typing import Optional

from game.errors import NoStats
from game.game_session import MoveOutcome, OutcomeKind
from .kv_store import KeyValueStore
from .records import LookupMap, USER_STATS_PREFIX


logger = logging.getLogger(__name__)


@dataclass
class Stats:
    wins: int = 0
    losses: int = 0
    ties: int = 0

    def to_bytes(self) -> bytes:
        return json.dumps(asdict(self), separators=(",", ":")).encode("utf-8")

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Stats":
        record = json.loads(raw.decode("utf-8"))
        return cls(
            wins=int(record.get("wins", 0)),
            losses=int(record.get("losses", 0)),
            ties=int(record.get("ties", 0)),
        )


class StatsTracker:
    """
    Owns the player -> Stats map.

    Stats are created at zero the first time a player enters a session and
    never removed. Only `record()` changes the counters.
    """

    def __init__(self, store: KeyValueStore):
        self.user_stats: LookupMap[Stats] = LookupMap(
            store, USER_STATS_PREFIX, Stats.to_bytes, Stats.from_bytes
        )

    def ensure(self, player: str):
        """Create zero stats for a player who has none yet."""
        if not self.has_stats(player):
            self.user_stats.insert(player, Stats())

    def has_stats(self, player: str) -> bool:
        return self.user_stats.contains(player)

    def view(self, player: str) -> Stats:
        stats = self.user_stats.get(player)
        if stats is None:
            raise NoStats(player)
        return stats

    def describe(self, player: str) -> str:
        stats = self.view(player)
        return f"{player} has {stats.wins} wins, {stats.ties} ties, and {stats.losses} losses."

    def record(self, outcome: MoveOutcome, mover: str, opponent: Optional[str] = None):
        """
        Apply a session result to the counters.

        Args:
            outcome: The terminal outcome of the mover's call.
            mover: The player whose call produced the outcome.
            opponent: The other participant, or None when only the mover is
                being settled (lazy teardown and forced resolution).
        """
        if outcome.kind == OutcomeKind.WON:
            self._increment(mover, "wins")
            if opponent is not None:
                self._increment(opponent, "losses")
        elif outcome.kind == OutcomeKind.LOST:
            self._increment(mover, "losses")
            if opponent is not None:
                self._increment(opponent, "wins")
        elif outcome.kind == OutcomeKind.TIED:
            self._increment(mover, "ties")
            if opponent is not None:
                self._increment(opponent, "ties")
        else:
            raise ValueError(f"Cannot record a non-terminal outcome: {outcome}")

    def _increment(self, player: str, counter: str):
        stats = self.view(player)
        setattr(stats, counter, getattr(stats, counter) + 1)
        self.user_stats.insert(player, stats)
        logger.debug("%s %s -> %d", player, counter, getattr(stats, counter))
