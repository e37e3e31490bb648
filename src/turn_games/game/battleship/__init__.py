"""Hidden-ship game (two players, ship placement then shooting)."""

from turn_games.game.battleship.board import Board
from turn_games.game.battleship.moves import Move, PlaceShip, Shoot, parse_move
from turn_games.game.battleship.state import BattleshipState
from turn_games.game.battleship.types import (
    DIRECTIONS,
    STANDARD_CONFIG,
    BattleshipConfig,
    Cell,
    Coord,
    Direction,
    HitResult,
)

__all__ = [
    "BattleshipConfig",
    "BattleshipState",
    "Board",
    "Cell",
    "Coord",
    "DIRECTIONS",
    "Direction",
    "HitResult",
    "Move",
    "PlaceShip",
    "STANDARD_CONFIG",
    "Shoot",
    "parse_move",
]
