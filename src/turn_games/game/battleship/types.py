"""Types and constants for the hidden-ship game.

艦隊戦（バトルシップ）の基本型・定数定義。
マスの状態（Cell）、射撃結果、座標、方向、盤面設定を定義する。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import NamedTuple


@unique
class HitResult(Enum):
    """Outcome of a shot."""

    HIT = "hit"
    MISS = "miss"


@unique
class Cell(Enum):
    """Ground truth of a single square.

    マスの真の状態（ground truth）。
    SHIP_HIT と SEA_MISS は終端状態: 一度撃たれたマスは元に戻らない。

    公開ビュー（hide）では撃たれていない船は海に見える。
    """

    SHIP = "s"      # 船（未被弾）
    SHIP_HIT = "x"  # 被弾した船
    SEA = "-"       # 海
    SEA_MISS = "o"  # 外れた射撃

    def hide(self) -> Cell:
        """公開ビューに射影する（SHIP → SEA、それ以外はそのまま）。"""
        if self is Cell.SHIP:
            return Cell.SEA
        return self

    def shoot(self) -> tuple[Cell, HitResult]:
        """Fire at this square; return the new state and the result.

        未被弾の船を撃ったときだけ HIT。撃ち済みのマスを撃っても変化なし（MISS）。
        """
        if self is Cell.SHIP:
            return Cell.SHIP_HIT, HitResult.HIT
        if self is Cell.SEA:
            return Cell.SEA_MISS, HitResult.MISS
        return self, HitResult.MISS  # 終端状態: 冪等

    @property
    def is_shot(self) -> bool:
        return self in (Cell.SHIP_HIT, Cell.SEA_MISS)

    # --- View プロトコル ---

    def equal_private(self, other: object) -> bool:
        return self is other

    def equal_public(self, other: object) -> bool:
        return isinstance(other, Cell) and self.hide() is other.hide()

    def render_private(self) -> str:
        return self.value

    def render_public(self) -> str:
        return self.hide().value


class Coord(NamedTuple):
    """(row, col) on a board, 0-indexed. Not bounds-checked."""

    row: int
    col: int

    def step(self, direction: Direction, times: int = 1) -> Coord:
        return Coord(self.row + direction.drow * times, self.col + direction.dcol * times)


class Direction(NamedTuple):
    """Unit step (drow, dcol) used to lay out a ship."""

    drow: int
    dcol: int

    def is_valid(self) -> bool:
        """8方向のいずれか（(0, 0) 以外で、各成分が -1, 0, 1）。"""
        return (
            self.drow in (-1, 0, 1)
            and self.dcol in (-1, 0, 1)
            and (self.drow, self.dcol) != (0, 0)
        )


# 縦横斜めの8方向
DIRECTIONS: list[Direction] = [
    Direction(-1, -1), Direction(-1, 0), Direction(-1, 1),
    Direction(0, -1), Direction(0, 1),
    Direction(1, -1), Direction(1, 0), Direction(1, 1),
]


@dataclass(frozen=True)
class BattleshipConfig:
    """Board size and fleet for one game.

    Attributes:
        rows:         盤面の行数
        cols:         盤面の列数
        ship_lengths: 各プレイヤーが配置する船の長さ（重複可）
    """

    rows: int = 10
    cols: int = 10
    ship_lengths: tuple[int, ...] = (3, 4, 5)

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Board must be at least 1x1, got {self.rows}x{self.cols}")
        if not self.ship_lengths:
            raise ValueError("The fleet must contain at least one ship")
        if sum(self.ship_lengths) > self.rows * self.cols:
            raise ValueError(
                f"A fleet of {sum(self.ship_lengths)} squares does not fit a "
                f"{self.rows}x{self.cols} board"
            )
        longest = max(self.rows, self.cols)
        for length in self.ship_lengths:
            if length <= 0 or length > longest:
                raise ValueError(f"Ship length {length} does not fit a {self.rows}x{self.cols} board")


# 標準設定: 10×10、船は長さ 3, 4, 5 の3隻
STANDARD_CONFIG = BattleshipConfig()
