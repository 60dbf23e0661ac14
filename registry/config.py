"""
Match configuration for remote TicTacToe.
Storage, billing and teardown settings.
"""

import os


class MatchConfig:
    """
    Configuration for the match registry and service.

    Override by subclassing, by setting attributes on an instance, or
    through the TICTACTOE_* environment variables.
    """

    # ==================== BOARD ====================
    BOARD_SIZE = 3

    # ==================== TEARDOWN ====================
    # True: a win or tie clears both players and records both stats at once.
    # False: only the mover is cleared; the opponent settles the finished
    # game on their next move (forced resolution).
    EAGER_TEARDOWN = True

    # ==================== STORAGE ====================
    # File used by the command line front end
    STORE_PATH = os.environ.get("TICTACTOE_STORE", "tictactoe_state.json")

    # Price of one byte of persisted state, in the smallest deposit unit
    STORAGE_BYTE_COST = int(os.environ.get("TICTACTOE_STORAGE_BYTE_COST", str(10 ** 19)))

    # ==================== LOGGING ====================
    # Game events are logged at INFO. The CLI prints results itself, so it
    # only shows them with --verbose or a lower level here
    LOG_LEVEL = os.environ.get("TICTACTOE_LOG_LEVEL", "WARNING")
