"""Board representation for the hidden-ship game.

艦隊戦の盤面。各プレイヤーが1枚ずつ持つ。
各マスは真の状態（Cell）を持ち、相手に見せるときは公開ビュー（Cell.hide）に射影する。

盤面はミュータブル: shoot() や place_ship_line() はその場で変更する。
残りの船マス数はカウンタで管理し、常に SHIP のマス数と一致させる。
"""

from __future__ import annotations

from turn_games.game.battleship.types import Cell, Coord, Direction, HitResult
from turn_games.game.protocol import InvariantError
from turn_games.game.view import (
    equal_private_all,
    equal_public_all,
    render_private_all,
    render_public_all,
)


class BoardRow:
    """One row of cells. Its view is derived cell by cell."""

    __slots__ = ("cells",)

    def __init__(self, cells: list[Cell]) -> None:
        self.cells = cells

    def equal_private(self, other: object) -> bool:
        return isinstance(other, BoardRow) and equal_private_all(self.cells, other.cells)

    def equal_public(self, other: object) -> bool:
        return isinstance(other, BoardRow) and equal_public_all(self.cells, other.cells)

    def render_private(self) -> str:
        return render_private_all(self.cells)

    def render_public(self) -> str:
        return render_public_all(self.cells)


class Board:
    """R x C grid of cells plus a counter of unsunk ship cells.

    盤面のデータ構造。grid[row] が BoardRow、grid[row].cells[col] が Cell。
    _ships_left は SHIP 状態のマス数（撃沈されていない船マス数）。
    """

    def __init__(self, rows: int = 10, cols: int = 10) -> None:
        self.rows = rows
        self.cols = cols
        self.grid = [BoardRow([Cell.SEA] * cols) for _ in range(rows)]
        self._ships_left = 0

    def in_bounds(self, coord: Coord) -> bool:
        """座標が盤面の内側なら True。"""
        return 0 <= coord.row < self.rows and 0 <= coord.col < self.cols

    def _check_bounds(self, coord: Coord) -> None:
        if not self.in_bounds(coord):
            raise IndexError(f"{coord} is outside a {self.rows}x{self.cols} board")

    def get_private(self, coord: Coord) -> Cell:
        """マスの真の状態を返す。"""
        self._check_bounds(coord)
        return self.grid[coord.row].cells[coord.col]

    def get_public(self, coord: Coord) -> Cell:
        """マスの公開ビューを返す（未被弾の船は海に見える）。"""
        return self.get_private(coord).hide()

    def _set(self, coord: Coord, cell: Cell) -> None:
        self.grid[coord.row].cells[coord.col] = cell

    def shoot(self, coord: Coord) -> HitResult:
        """Fire a shot at ``coord``.

        マスを撃つ。新たに船に命中したときだけ残り船マス数を1減らす。
        撃ち済みのマスを撃っても何も変わらない（MISS を返す）。
        """
        new_cell, result = self.get_private(coord).shoot()
        self._set(coord, new_cell)
        if result is HitResult.HIT:
            if self._ships_left <= 0:
                raise InvariantError(f"Hit at {coord} but no ship squares were left")
            self._ships_left -= 1
        return result

    def place_ship_square(self, coord: Coord) -> bool:
        """Place one ship square. Fails (no change) unless the cell is sea.

        前提: 配置フェーズ中なので撃たれたマスは存在しない。
        """
        cell = self.get_private(coord)
        if cell is not Cell.SEA:
            return False
        self._set(coord, Cell.SHIP)
        self._ships_left += 1
        return True

    def ship_line(self, start: Coord, direction: Direction, length: int) -> list[Coord]:
        """start から direction 方向に length マス分の座標を返す。"""
        return [start.step(direction, i) for i in range(length)]

    def valid_ship_line(self, start: Coord, direction: Direction, length: int) -> bool:
        """Whether ``length`` cells from ``start`` along ``direction`` are all free sea.

        船を置けるか判定する: すべてのマスが盤内かつ SEA であること。
        length が 0 なら常に True。
        """
        for coord in self.ship_line(start, direction, length):
            if not self.in_bounds(coord) or self.get_private(coord) is not Cell.SEA:
                return False
        return True

    def place_ship_line(self, start: Coord, direction: Direction, length: int) -> bool:
        """Place a whole ship, or nothing.

        先に valid_ship_line() で検証してから変更するので、
        途中まで置かれた状態になることはない。
        """
        if not self.valid_ship_line(start, direction, length):
            return False
        for coord in self.ship_line(start, direction, length):
            if not self.place_ship_square(coord):
                raise InvariantError(f"Validated ship square {coord} was not free")
        return True

    def ship_squares_left(self) -> int:
        """撃沈されていない船マスの数（O(1)）。"""
        return self._ships_left

    # --- View プロトコル（行ごとの View から導出） ---

    def equal_private(self, other: object) -> bool:
        return isinstance(other, Board) and equal_private_all(self.grid, other.grid)

    def equal_public(self, other: object) -> bool:
        return isinstance(other, Board) and equal_public_all(self.grid, other.grid)

    def render_private(self) -> str:
        """Ground truth, one line per row (``s x - o``)."""
        return render_private_all(self.grid, sep="\n")

    def render_public(self) -> str:
        """What the opponent sees: unhit ships render as sea."""
        return render_public_all(self.grid, sep="\n")
