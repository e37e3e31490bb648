"""Turn engine: drive a game from start to finish.

対局エンジン: ゲームを終局まで進める。

状態遷移:
  Running(p) --手を取得・検証・適用--> Running(q) または Ended(w)
  Ended(w)   --> 勝者を報告して終了

手の取得元は席（Seat）ごとに決まる:
- HumanSeat: 入力を読み、書式エラー・反則なら聞き直す（検証前の手は絶対に適用しない）
- AgentSeat: AI に選ばせる。AI が反則手を返したらプログラムの不具合として停止する

エンジンは唯一の状態変更者で、1手ずつ最後まで処理してから次の status を問い合わせる。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from turn_games.game.player import PlayerIndex
from turn_games.game.protocol import (
    Agent,
    Game,
    GameStatus,
    IllegalMoveError,
    InvariantError,
    MoveParseError,
    MoveT,
    NoLegalMoveError,
    ToMove,
)
from turn_games.util import TRY_AGAIN, Output, Prompt

logger = logging.getLogger(__name__)


@dataclass
class HumanSeat:
    """A seat whose moves are typed by a person."""

    prompt: Prompt = input
    output: Output = print


@dataclass
class AgentSeat:
    """A seat played by an automated agent."""

    agent: Agent


Seat = HumanSeat | AgentSeat


def human_move(game: Game[MoveT], player: PlayerIndex, prompt: Prompt, output: Output) -> MoveT:
    """Read moves until one parses and is legal.

    入力検証ループ:
    1. 読めなければ（MoveParseError）理由を表示して聞き直す
    2. 読めたが反則なら（IllegalMoveError）理由を表示して聞き直す
    3. 合法手なら返す
    """
    raw = prompt(game.query())
    while True:
        try:
            move = game.parse_move(raw)
            game.check_move(move)
        except (MoveParseError, IllegalMoveError) as e:
            logger.info("%s: rejected %r: %s", player, raw, e)
            output(str(e))
            raw = prompt(TRY_AGAIN)
            continue
        return move


def agent_move(game: Game[MoveT], player: PlayerIndex, agent: Agent) -> MoveT:
    """Ask ``agent`` for a move. An illegal move is a fatal error."""
    move = agent.choose_move(game, player)
    if not game.is_valid_move(move):
        raise InvariantError(f"Agent {type(agent).__name__} returned an illegal move for {player}: {move}")
    return move


def play_turn(
    game: Game[MoveT],
    seats: Sequence[Seat],
    player: PlayerIndex,
    output: Output = print,
    show_state: bool = True,
) -> GameStatus:
    """Obtain one move for ``player``, apply it, and return the new status.

    合法手が1つもなければ、人間に聞き続けたり AI に選ばせたりせず NoLegalMoveError。
    """
    if not game.legal_moves():
        raise NoLegalMoveError(f"{player} has no legal move")
    seat = seats[player.as_index()]
    if isinstance(seat, HumanSeat):
        if show_state:
            seat.output(f"--- {player} ---")
            seat.output(game.print_state_visible(player))
        move = human_move(game, player, seat.prompt, seat.output)
    else:
        move = agent_move(game, player, seat.agent)
        if show_state:
            output(f"{player} plays: {move}")

    game.make_move(move)
    status = game.status()
    logger.debug("%s played %s -> %s", player, move, status)
    return status


def play_game(
    game: Game[MoveT],
    seats: Sequence[Seat],
    output: Output = print,
    show_state: bool = True,
) -> PlayerIndex:
    """Play ``game`` to the end and return the winner.

    対局ループ: 終局（Won）になるまで play_turn() を繰り返す。
    """
    if len(seats) != game.num_players:
        raise ValueError(f"Expected {game.num_players} seats, got {len(seats)}")

    status = game.status()
    while isinstance(status, ToMove):
        status = play_turn(game, seats, status.player, output, show_state)

    winner = status.player
    logger.debug("Game over: %s wins", winner)
    output(f"{winner} wins!")
    return winner


def play_vs_ai(
    game: Game[MoveT],
    agent: Agent,
    prompt: Prompt = input,
    output: Output = print,
) -> PlayerIndex:
    """人間（プレイヤー1）対 AI（残り全員）で対局する。"""
    seats: list[Seat] = [HumanSeat(prompt, output)]
    seats += [AgentSeat(agent) for _ in range(game.num_players - 1)]
    return play_game(game, seats, output)


def play_hotseat(
    game: Game[MoveT],
    prompt: Prompt = input,
    output: Output = print,
) -> PlayerIndex:
    """全員が人間（同じ端末を交代で使う）で対局する。"""
    seats: list[Seat] = [HumanSeat(prompt, output) for _ in range(game.num_players)]
    return play_game(game, seats, output)
