"""Game implementation for the hidden-ship game.

艦隊戦の対局状態。Board が盤面データを持ち、BattleshipState が対局ルール・勝敗判定を担当する。

対局の流れ:
1. 配置フェーズ: プレイヤー1 → プレイヤー2 の順に、自分の盤面へすべての船を置く
2. 射撃フェーズ: プレイヤー1 から交互に相手の盤面を撃つ
3. 相手の船マスをすべて撃ち抜いたプレイヤーの勝ち
"""

from __future__ import annotations

import logging
from typing import ClassVar

import torch

from turn_games.game.battleship.board import Board
from turn_games.game.battleship.moves import Move, PlaceShip, Shoot
from turn_games.game.battleship.moves import parse_move as _parse_move
from turn_games.game.battleship.types import (
    DIRECTIONS,
    STANDARD_CONFIG,
    BattleshipConfig,
    Cell,
    Coord,
)
from turn_games.game.player import TwoPlayers
from turn_games.game.protocol import (
    Game,
    GameStatus,
    IllegalMoveError,
    InvariantError,
    ToMove,
    Won,
)

logger = logging.getLogger(__name__)

# 観測テンソルのチャンネル数
NUM_PLANES = 5


class BattleshipState(Game[Move]):
    """Mutable state of a two-player hidden-ship game.

    Game プロトコルを実装する。

    to_move: 射撃フェーズでの手番（配置フェーズ中は使われない）
    pending: プレイヤーごとの未配置の船の長さ（重複可）
    boards:  プレイヤーごとの盤面（共有しない）
    """

    PLAYERS: ClassVar[type[TwoPlayers]] = TwoPlayers

    def __init__(self, config: BattleshipConfig = STANDARD_CONFIG) -> None:
        self.config = config
        self.to_move = TwoPlayers.ONE  # 射撃はプレイヤー1から
        self.pending: list[list[int]] = [
            sorted(config.ship_lengths) for _ in TwoPlayers.all()
        ]
        self.boards = [Board(config.rows, config.cols) for _ in TwoPlayers.all()]

    @classmethod
    def setup(cls, config: BattleshipConfig = STANDARD_CONFIG) -> BattleshipState:
        """初期局面を作る。"""
        return cls(config)

    def board(self, player: TwoPlayers) -> Board:
        return self.boards[player.as_index()]

    def pending_for(self, player: TwoPlayers) -> list[int]:
        return self.pending[player.as_index()]

    def all_placed(self) -> bool:
        """全員が船を置き終えていれば True。"""
        return all(not lengths for lengths in self.pending)

    def status(self) -> GameStatus:
        """Who is to move, or who has won.

        判定順序:
        1. 未配置の船があるプレイヤー（プレイヤー1 → 2 の順）が手番
        2. 相手の船マスが0になったプレイヤーの勝ち
        3. それ以外は to_move の手番
        """
        for player in TwoPlayers.all():
            if self.pending_for(player):
                return ToMove(player)

        for player in TwoPlayers.all():
            if self.board(player).ship_squares_left() == 0:
                # 同時に両者が0になることはない
                if self.board(player.opponent()).ship_squares_left() == 0:
                    raise InvariantError("Both fleets are sunk")
                return Won(player.opponent())

        return ToMove(self.to_move)

    def query(self) -> str:
        if self.all_placed():
            return "Shoot (row col): "
        return "Place a ship (length row col row-step col-step): "

    def parse_move(self, raw: str) -> Move:
        return _parse_move(raw)

    def check_move(self, move: Move) -> None:
        """Raise IllegalMoveError if ``move`` is not legal for the current mover."""
        player = self.cur_player()
        if player is None:
            raise IllegalMoveError("The game is over.")
        own_board = self.board(player)

        if isinstance(move, PlaceShip):
            pending = self.pending_for(player)
            if move.length not in pending:
                left = " ".join(str(n) for n in pending) or "none"
                raise IllegalMoveError(
                    f"No ship of length {move.length} left to place (remaining: {left})."
                )
            if not own_board.in_bounds(move.coord):
                raise IllegalMoveError(self._out_of_bounds(move.coord))
            if not move.direction.is_valid():
                raise IllegalMoveError(
                    "Direction must be a non-zero step with each part -1, 0 or 1."
                )
            if not own_board.valid_ship_line(move.coord, move.direction, move.length):
                raise IllegalMoveError(
                    "The ship does not fit there: it leaves the board or overlaps another ship."
                )
        elif isinstance(move, Shoot):
            if not self.all_placed():
                raise IllegalMoveError("All ships must be placed before shooting.")
            target = self.board(player.opponent())
            if not target.in_bounds(move.coord):
                raise IllegalMoveError(self._out_of_bounds(move.coord))
        else:
            raise IllegalMoveError(f"Unknown move: {move!r}")

    def _out_of_bounds(self, coord: Coord) -> str:
        return (
            f"({coord.row}, {coord.col}) is off the board: rows are 0-{self.config.rows - 1}, "
            f"columns are 0-{self.config.cols - 1}."
        )

    def make_move(self, move: Move) -> None:
        """手を適用する。

        船の配置: 自分の盤面に置き、未配置リストから1隻取り除く
        射撃:     相手の盤面を撃ち、手番を交代する
        """
        player = self.cur_player()
        if not self.is_valid_move(move):
            raise InvariantError(f"make_move called with an invalid move: {move}")

        if isinstance(move, PlaceShip):
            placed = self.board(player).place_ship_line(move.coord, move.direction, move.length)
            if not placed:
                raise InvariantError(f"Validated ship could not be placed: {move}")
            self.pending_for(player).remove(move.length)
            logger.debug("%s placed %s", player, move)
        else:
            result = self.board(player.opponent()).shoot(move.coord)
            self.to_move = player.opponent()
            logger.debug("%s: %s -> %s", player, move, result.value)

    def print_state_visible(self, player: TwoPlayers) -> str:
        """Render what ``player`` may see.

        配置フェーズ中: 自分の盤面（真の状態）と未配置の船
        それ以外:       自分の盤面（真の状態）と相手の盤面（公開ビュー）
        """
        own = self.board(player).render_private()
        pending = self.pending_for(player)
        if pending:
            lengths = " ".join(str(n) for n in pending)
            return f"=== Your Board ===\n{own}\n=== Ships to Place ===\n{lengths}\n"
        shots = self.board(player.opponent()).render_public()
        return f"=== Your Board ===\n{own}\n=== Shots ===\n{shots}\n"

    def legal_moves(self) -> list[Move]:
        """合法手のリストを返す。

        配置フェーズ: 置けるすべての (長さ, 座標, 方向)
        射撃フェーズ: 公開ビューでまだ撃っていない相手のマス
        （撃ち済みのマスへの射撃も合法だが、意味がないので列挙しない）
        """
        player = self.cur_player()
        if player is None:
            return []
        own_board = self.board(player)
        moves: list[Move] = []

        pending = self.pending_for(player)
        if pending:
            for length in sorted(set(pending)):
                for row in range(self.config.rows):
                    for col in range(self.config.cols):
                        coord = Coord(row, col)
                        for direction in DIRECTIONS:
                            if own_board.valid_ship_line(coord, direction, length):
                                moves.append(PlaceShip(length, coord, direction))
            return moves

        target = self.board(player.opponent())
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                coord = Coord(row, col)
                if not target.get_public(coord).is_shot:
                    moves.append(Shoot(coord))
        return moves

    def to_tensor_planes(self, player: TwoPlayers) -> torch.Tensor:
        """Encode what ``player`` may see as tensor planes.

        Planes（チャンネル）の構成（合計5チャンネル、各 rows × cols）:
        ch.0: 自分の未被弾の船
        ch.1: 自分の被弾した船
        ch.2: 自分の盤面への外れ弾
        ch.3: 相手の盤面への命中（公開情報）
        ch.4: 相手の盤面への外れ弾（公開情報）

        相手の盤面は公開ビューしか使わないので、未被弾の船の位置は含まれない。
        """
        planes = torch.zeros(NUM_PLANES, self.config.rows, self.config.cols)
        own = self.board(player)
        other = self.board(player.opponent())

        for r in range(self.config.rows):
            for c in range(self.config.cols):
                coord = Coord(r, c)
                cell = own.get_private(coord)
                if cell is Cell.SHIP:
                    planes[0, r, c] = 1.0
                elif cell is Cell.SHIP_HIT:
                    planes[1, r, c] = 1.0
                elif cell is Cell.SEA_MISS:
                    planes[2, r, c] = 1.0

                seen = other.get_public(coord)
                if seen is Cell.SHIP_HIT:
                    planes[3, r, c] = 1.0
                elif seen is Cell.SEA_MISS:
                    planes[4, r, c] = 1.0

        return planes
