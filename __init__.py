"""
Remote TicTacToe
================
Turn-based TicTacToe for two remote players. Games and per-player
win/loss/tie stats are persisted between calls in a key-value store.

Packages:
- game: board, rules, win detection (pure logic)
- registry: sessions, stats, storage and the service hosts call
"""

__version__ = "1.0.0"
