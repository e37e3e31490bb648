"""Move types and text parsing for the hidden-ship game.

艦隊戦の手の定義と、文字列からの変換。

手の書式（整数のみ。括弧・カンマは空白と同じ扱い）:
- 船の配置: 長さ 行 列 行方向 列方向   例: "4 0 0 1 0"（下向きに長さ4）
- 射撃:     行 列                    例: "(3, 7)"

ここでは個数と整数であることだけを確認する。
盤内か・未配置の船か・置けるかは BattleshipState.check_move() が判定する。
"""

from __future__ import annotations

from dataclasses import dataclass

from turn_games.game.battleship.types import Coord, Direction
from turn_games.game.protocol import MoveParseError
from turn_games.util import parse_ints


@dataclass(frozen=True)
class PlaceShip:
    """Place a ship of ``length`` from ``coord`` stepping by ``direction``."""

    length: int
    coord: Coord
    direction: Direction

    def __str__(self) -> str:
        return (
            f"place ship of length {self.length} at ({self.coord.row}, {self.coord.col}) "
            f"heading ({self.direction.drow}, {self.direction.dcol})"
        )


@dataclass(frozen=True)
class Shoot:
    """Shoot at ``coord`` on the opponent's board."""

    coord: Coord

    def __str__(self) -> str:
        return f"shoot at ({self.coord.row}, {self.coord.col})"


Move = PlaceShip | Shoot

MOVE_HELP = (
    "Place a ship with 5 integers: length row col row-step col-step "
    "(e.g. 4 0 0 1 0). Shoot with 2 integers: row col (e.g. 3 7)."
)


def parse_move(raw: str) -> Move:
    """Parse move text. Raises MoveParseError on the wrong shape."""
    ints = parse_ints(raw)
    if ints is None:
        raise MoveParseError(f"Could not parse move: expected integers. {MOVE_HELP}")
    if len(ints) == 5:
        length, row, col, drow, dcol = ints
        return PlaceShip(length, Coord(row, col), Direction(drow, dcol))
    if len(ints) == 2:
        row, col = ints
        return Shoot(Coord(row, col))
    raise MoveParseError(f"Could not parse move: got {len(ints)} integers. {MOVE_HELP}")
