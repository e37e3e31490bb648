"""Game protocol — all games implement this interface.

ゲームの共通インタフェース（プロトコル）。

プレイヤー数や各プレイヤーが見える情報量について、できるだけ仮定を置かない。
艦隊戦（非公開情報あり）もニム（完全情報）もこのプロトコルを実装することで、
対局エンジンやAIがゲームに依存せず動作できる。

手の扱いは2段階に分かれている:
- parse_move(): 文字列 → 手（書式エラーは MoveParseError）
- check_move(): 手が合法か（ルール違反は IllegalMoveError）
これにより「読めない入力」と「読めたが反則」を別のメッセージで伝えられる。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Protocol, TypeVar, runtime_checkable

import torch

from turn_games.game.player import PlayerIndex

MoveT = TypeVar("MoveT")


class GameError(Exception):
    """Base class for game errors."""


class MoveParseError(GameError, ValueError):
    """Move text could not be read (syntax error). The player may retry."""


class IllegalMoveError(GameError, ValueError):
    """A well-formed move breaks a game rule. The player may retry."""


class InvariantError(GameError, RuntimeError):
    """A programming invariant was violated.

    不変条件違反（不正な手を make_move に渡した、AIが反則手を返した等）。
    続行すると公開/非公開ビューの整合性が壊れるので、捕捉せずに停止する。
    """


class NoLegalMoveError(GameError, RuntimeError):
    """The mover has no legal move, so the game cannot continue.

    例: 狭い盤面で先に置いた船が邪魔をして、残りの船をどこにも置けない。
    """


@dataclass(frozen=True)
class ToMove:
    """対局中: player の手番。"""

    player: PlayerIndex


@dataclass(frozen=True)
class Won:
    """終局: player の勝ち。"""

    player: PlayerIndex


GameStatus = ToMove | Won


@runtime_checkable
class Game(Protocol[MoveT]):
    """Common interface for turn-based games.

    すべてのゲームが実装すべき共通インタフェース。
    具象ゲームはこのクラスを明示的に継承して、派生メソッド
    （is_valid_move, is_ended, cur_player, num_players）を利用する。

    重要: status() は状態から毎回計算する（キャッシュしない）。
    make_move() は状態をその場で変更する。
    """

    PLAYERS: ClassVar[type[PlayerIndex]]

    def status(self) -> GameStatus:
        """手番のプレイヤー、または（終局なら）勝者を返す。"""
        ...

    def query(self) -> str:
        """人間の手番で表示するプロンプト。"""
        ...

    def parse_move(self, raw: str) -> MoveT:
        """文字列を手に変換する。読めなければ MoveParseError。"""
        ...

    def check_move(self, move: MoveT) -> None:
        """現在の手番プレイヤーにとって合法か確認する。反則なら IllegalMoveError。"""
        ...

    def make_move(self, move: MoveT) -> None:
        """手を適用する。不正な手なら状態を変えずに InvariantError。"""
        ...

    def print_state_visible(self, player: PlayerIndex) -> str:
        """player に見えてよい情報だけで局面を文字列にする。"""
        ...

    def legal_moves(self) -> list[MoveT]:
        """AI が選択できる合法手のリスト。"""
        ...

    def to_tensor_planes(self, player: PlayerIndex) -> torch.Tensor:
        """player に見える情報だけをテンソルに変換する。

        学習型エージェント向けの観測インタフェース。対局エンジンとランダムAIは使わない。
        """
        ...

    # --- 派生メソッド（ゲームに依存しない） ---

    @property
    def num_players(self) -> int:
        return self.PLAYERS.NUM_PLAYERS

    def is_valid_move(self, move: MoveT) -> bool:
        """check_move() が例外を出さなければ True。"""
        try:
            self.check_move(move)
        except IllegalMoveError:
            return False
        return True

    def is_ended(self) -> bool:
        """終局していれば True。"""
        return isinstance(self.status(), Won)

    def cur_player(self) -> PlayerIndex | None:
        """手番のプレイヤー。終局していれば None。"""
        status = self.status()
        if isinstance(status, ToMove):
            return status.player
        return None


@runtime_checkable
class Agent(Protocol[MoveT]):
    """Automated player.

    自動プレイヤー（AI）のインタフェース。choose_move() は次を満たすこと:
    1. player が見てよい情報だけを使う
    2. 返す手は合法手である（エンジンは反則手を InvariantError として扱う）
    """

    def choose_move(self, game: Game[MoveT], player: PlayerIndex) -> MoveT:
        ...
