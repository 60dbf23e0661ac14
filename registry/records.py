"""
Typed views over a KeyValueStore, plus the JSON record format for sessions.
"""

import json
from typing import Callable, Generic, Optional, TypeVar

from game.board import Board, Player
from game.game_session import GameSession
from .kv_store import KeyValueStore


T = TypeVar("T")

# Key prefixes, one per map
GAME_KEYS_PREFIX = "u:"
GAMES_PREFIX = "c:"
USER_STATS_PREFIX = "d:"


class LookupMap(Generic[T]):
    """
    A map of records stored under a shared key prefix.

    Values go through `encode`/`decode` on the way in and out of the store.
    """

    def __init__(
        self,
        store: KeyValueStore,
        prefix: str,
        encode: Callable[[T], bytes],
        decode: Callable[[bytes], T],
    ):
        self.store = store
        self.prefix = prefix
        self._encode = encode
        self._decode = decode

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[T]:
        raw = self.store.get(self._key(key))
        if raw is None:
            return None
        return self._decode(raw)

    def insert(self, key: str, value: T):
        self.store.put(self._key(key), self._encode(value))

    def remove(self, key: str):
        self.store.delete(self._key(key))

    def contains(self, key: str) -> bool:
        return self.store.contains(self._key(key))

    def __contains__(self, key: str) -> bool:
        return self.contains(key)


def encode_str(value: str) -> bytes:
    return value.encode("utf-8")


def decode_str(raw: bytes) -> str:
    return raw.decode("utf-8")


def encode_session(session: GameSession) -> bytes:
    record = {
        "users_turn": session.turn.value,
        "x_player": session.player_x,
        "o_player": session.player_o,
        "board": session.board.to_rows(),
        "game_complete_status": session.completed,
        "number_of_turns_played": session.turns_played,
    }
    return json.dumps(record, separators=(",", ":")).encode("utf-8")


def decode_session(raw: bytes) -> GameSession:
    record = json.loads(raw.decode("utf-8"))
    return GameSession(
        player_x=record["x_player"],
        player_o=record["o_player"],
        turn=Player(record["users_turn"]),
        board=Board.from_rows(record["board"]),
        turns_played=int(record["number_of_turns_played"]),
        completed=bool(record["game_complete_status"]),
    )
