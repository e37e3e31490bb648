"""Random player — selects a legal move uniformly at random.

ランダムプレイヤー: 合法手の中からランダムに手を選ぶ。

用途:
- 実装の動作確認（ルールが正しく実装されているかテスト）
- 人間の対戦相手（戦略は持たない）
"""

from __future__ import annotations

import random

from turn_games.game.player import PlayerIndex
from turn_games.game.protocol import Game, MoveT


def random_move(game: Game[MoveT], rng: random.Random | None = None) -> MoveT:
    """Return a random legal move.

    合法手の中から一様ランダムで1手を返す。
    合法手がない場合は ValueError を送出する（終局局面では呼ばれないはず）。
    """
    moves = game.legal_moves()
    if not moves:
        raise ValueError("No legal moves available")
    return (rng or random).choice(moves)


class RandomAgent:
    """Agent that plays uniformly random legal moves.

    legal_moves() は手番プレイヤーに見える情報だけから作られるので、
    このエージェントも見てよい情報しか使わない。
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def choose_move(self, game: Game[MoveT], player: PlayerIndex) -> MoveT:
        return random_move(game, self._rng)
