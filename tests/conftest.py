import os
import sys
import pytest

# Ensure the project root (containing the `game` and `registry` packages) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from registry.config import MatchConfig
from registry.collaborators import StaticIdentity
from registry.kv_store import MemoryStore
from registry.match_registry import MatchRegistry
from registry.service import TicTacToeService


# Fills the board without anyone completing a line
DRAW_SEQUENCE = [
    (1, 1), (1, 2), (1, 3),
    (2, 2), (2, 1), (2, 3),
    (3, 2), (3, 1), (3, 3),
]


class LazyConfig(MatchConfig):
    EAGER_TEARDOWN = False


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def registry(store):
    return MatchRegistry(store)


@pytest.fixture()
def lazy_registry(store):
    return MatchRegistry(store, config=LazyConfig())


@pytest.fixture()
def identity():
    return StaticIdentity('alice')


@pytest.fixture()
def service(store, identity):
    return TicTacToeService(store, identity)


@pytest.fixture()
def play():
    """Play alternating moves, X first, and return every outcome."""
    def _play(reg, player_x, player_o, moves):
        outcomes = []
        for i, (row, col) in enumerate(moves):
            mover = player_x if i % 2 == 0 else player_o
            outcomes.append(reg.submit_move(mover, row, col))
        return outcomes
    return _play
