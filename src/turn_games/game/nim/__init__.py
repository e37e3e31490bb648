"""Nim, a complete-information pile game for any number of players."""

from turn_games.game.nim.state import NimMove, NimState

__all__ = ["NimMove", "NimState"]
