"""Game implementation for Nim.

ニム: 完全情報ゲーム。複数の山から交互に棒を取り、最後の1本を取ったプレイヤーの勝ち。
プレイヤー数は任意（setup 時に決める）。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar

import torch

from turn_games.game.player import PlayerIndex, players_of
from turn_games.game.protocol import (
    Game,
    GameStatus,
    IllegalMoveError,
    InvariantError,
    MoveParseError,
    ToMove,
    Won,
)
from turn_games.util import Output, Prompt, ask, parse_ints

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NimMove:
    """Take ``take`` sticks from pile ``pile`` (1-based)."""

    pile: int
    take: int

    def __str__(self) -> str:
        return f"take {self.take} from pile {self.pile}"


class NimState(Game[NimMove]):
    """Mutable Nim state.

    piles:        各山の棒の数
    to_move:      手番のプレイヤー
    total_sticks: 残りの棒の合計（status 判定用）
    """

    PLAYERS: ClassVar[type[PlayerIndex]]

    def __init__(self, piles: list[int], num_players: int = 2) -> None:
        if any(p < 0 for p in piles):
            raise ValueError(f"Pile sizes must be non-negative: {piles}")
        # インスタンスごとに人数を固定する
        self.PLAYERS = players_of(num_players)
        self.piles = list(piles)
        self.total_sticks = sum(piles)
        self.to_move = self.PLAYERS(0)

    @classmethod
    def setup(cls, piles: list[int], num_players: int = 2) -> NimState:
        return cls(piles, num_players)

    @classmethod
    def setup_from_input(cls, prompt: Prompt, output: Output, num_players: int = 2) -> NimState:
        """Ask a human for the number of piles and each pile size."""

        def non_negative(raw: str) -> int:
            ints = parse_ints(raw)
            if ints is None or len(ints) != 1 or ints[0] < 0:
                raise ValueError("Type a nonnegative integer.")
            return ints[0]

        def positive(raw: str) -> int:
            ints = parse_ints(raw)
            if ints is None or len(ints) != 1 or ints[0] <= 0:
                raise ValueError("Type a positive integer.")
            return ints[0]

        num_piles = ask(prompt, output, "Number of piles? ", non_negative)
        piles = [ask(prompt, output, f"Pile {i} size? ", positive) for i in range(1, num_piles + 1)]
        output(f"Piles: {piles}")
        return cls(piles, num_players)

    def status(self) -> GameStatus:
        """最後の1本を取ったプレイヤー（= 手番の1つ前）の勝ち。"""
        if self.total_sticks == 0:
            return Won(self.to_move.prev())
        return ToMove(self.to_move)

    def query(self) -> str:
        return "Choose a pile and number of sticks: "

    def parse_move(self, raw: str) -> NimMove:
        ints = parse_ints(raw)
        if ints is None:
            raise MoveParseError("Move should be two integers separated by a space.")
        if len(ints) != 2:
            raise MoveParseError("Move should be exactly two integers.")
        return NimMove(pile=ints[0], take=ints[1])

    def check_move(self, move: NimMove) -> None:
        if self.is_ended():
            raise IllegalMoveError("The game is over.")
        if not 1 <= move.pile <= len(self.piles):
            raise IllegalMoveError(f"Pile should be between 1 and {len(self.piles)}.")
        if move.take <= 0:
            raise IllegalMoveError("Must take at least one stick.")
        if move.take > self.piles[move.pile - 1]:
            raise IllegalMoveError("Not enough sticks in that pile.")

    def make_move(self, move: NimMove) -> None:
        if not self.is_valid_move(move):
            raise InvariantError(f"make_move called with an invalid move: {move}")
        self.piles[move.pile - 1] -= move.take
        self.total_sticks -= move.take
        logger.debug("%s: %s", self.to_move, move)
        self.to_move = self.to_move.next()

    def print_state_visible(self, player: PlayerIndex) -> str:
        # 完全情報ゲームなので全員に同じものを見せる
        return f"Piles: {self.piles}"

    def legal_moves(self) -> list[NimMove]:
        if self.is_ended():
            return []
        return [
            NimMove(pile=i + 1, take=take)
            for i, size in enumerate(self.piles)
            for take in range(1, size + 1)
        ]

    def to_tensor_planes(self, player: PlayerIndex) -> torch.Tensor:
        """各山の棒の数を (1, 山の数) のテンソルにする。"""
        return torch.tensor([self.piles], dtype=torch.float32)
