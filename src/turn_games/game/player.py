"""Player index for a game with a fixed number of players.

プレイヤー番号の型。N人ゲームのプレイヤーを 0〜N-1 の整数で表す。
N はクラスごとに固定（TwoPlayers なら 2）し、インスタンス側には持たせない。
これにより人数の異なるゲームのプレイヤーを取り違えても等しいとは判定されない。
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import ClassVar


@dataclass(frozen=True)
class PlayerIndex:
    """A validated player index in ``[0, NUM_PLAYERS)``.

    範囲外の index で直接生成すると ValueError（プログラムの不具合扱い）。
    範囲チェックをしたいだけなら from_index() を使う（None を返す）。
    """

    NUM_PLAYERS: ClassVar[int] = 0

    index: int

    def __post_init__(self) -> None:
        if not 0 <= self.index < self.NUM_PLAYERS:
            raise ValueError(
                f"Player index {self.index} out of range for {self.NUM_PLAYERS} players"
            )

    @classmethod
    def from_index(cls, n: int) -> PlayerIndex | None:
        """範囲内なら PlayerIndex、範囲外なら None を返す。"""
        if 0 <= n < cls.NUM_PLAYERS:
            return cls(n)
        return None

    @classmethod
    def all(cls) -> list[PlayerIndex]:
        """全プレイヤーを手番順に返す。"""
        return [cls(i) for i in range(cls.NUM_PLAYERS)]

    @classmethod
    def parse(cls, raw: str) -> PlayerIndex:
        """Parse a 1-based player number such as ``"2"``.

        人間向けの番号（1始まり）を読み取る。
        整数でない・0・人数より大きい場合は ValueError。
        """
        try:
            number = int(raw.strip())
        except ValueError:
            raise ValueError(f"Not an integer: {raw!r}") from None
        if number <= 0:
            raise ValueError("Player number must be at least 1")
        if number > cls.NUM_PLAYERS:
            raise ValueError(f"Player number too large: {number}")
        return cls(number - 1)

    def as_index(self) -> int:
        return self.index

    def next(self) -> PlayerIndex:
        """次のプレイヤー（最後のプレイヤーの次は最初に戻る）。"""
        return type(self)((self.index + 1) % self.NUM_PLAYERS)

    def prev(self) -> PlayerIndex:
        """前のプレイヤー。"""
        return type(self)((self.index - 1) % self.NUM_PLAYERS)

    def name(self) -> str:
        """Human-readable name, 1-based (``"Player 2"``)."""
        return f"Player {self.index + 1}"

    def __str__(self) -> str:
        return self.name()


class TwoPlayers(PlayerIndex):
    """Player index for two-player games.

    2人ゲーム用。ONE / TWO の定数と opponent() を持つ。
    """

    NUM_PLAYERS: ClassVar[int] = 2

    ONE: ClassVar[TwoPlayers]
    TWO: ClassVar[TwoPlayers]

    def opponent(self) -> TwoPlayers:
        """相手プレイヤーを返す。0↔1 の切り替え。"""
        return TwoPlayers(1 - self.index)


TwoPlayers.ONE = TwoPlayers(0)
TwoPlayers.TWO = TwoPlayers(1)


@lru_cache(maxsize=None)
def players_of(num_players: int) -> type[PlayerIndex]:
    """Return the PlayerIndex subclass for ``num_players`` players.

    人数ごとのプレイヤー型を返す。同じ人数なら常に同じクラス（キャッシュ）。
    2人なら TwoPlayers を返す。
    """
    if num_players < 1:
        raise ValueError(f"A game needs at least one player, got {num_players}")
    if num_players == TwoPlayers.NUM_PLAYERS:
        return TwoPlayers
    return type(
        f"Players{num_players}",
        (PlayerIndex,),
        {"NUM_PLAYERS": num_players, "__module__": __name__},
    )
