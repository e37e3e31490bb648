"""CLI entry point for turn-games.

コマンドラインで動く対局プログラム。艦隊戦またはニムを遊べる。

起動方法:
    turn-games battleship                 # 人間（プレイヤー1）対 ランダムAI
    turn-games battleship --mode hotseat  # 人間同士（同じ端末で交代）
    turn-games nim --piles 3 4 5 --players 3
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from turn_games.engine.play import AgentSeat, HumanSeat, Seat, play_game
from turn_games.engine.random_player import RandomAgent
from turn_games.game.battleship.moves import MOVE_HELP
from turn_games.game.battleship.state import BattleshipState
from turn_games.game.battleship.types import BattleshipConfig
from turn_games.game.nim.state import NimState
from turn_games.game.protocol import Game, NoLegalMoveError
from turn_games.util import Output, Prompt

logger = logging.getLogger(__name__)

MODES = ("vs-ai", "hotseat", "ai-vs-ai")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="turn-games", description="Play turn-based games in the terminal")
    parser.add_argument("--mode", choices=MODES, default="vs-ai", help="Who sits at each seat")
    parser.add_argument("--seed", type=int, help="Random seed for the AI players")
    parser.add_argument("--verbose", action="store_true", help="Log every move at DEBUG level")
    parser.add_argument("--seat", default="1", help="Seat (1-based) the human takes in vs-ai mode")
    sub = parser.add_subparsers(dest="game", required=True)

    b = sub.add_parser("battleship", help="Hidden-ship game for two players")
    b.add_argument("--rows", type=int, default=10)
    b.add_argument("--cols", type=int, default=10)
    b.add_argument("--ships", type=int, nargs="+", default=[3, 4, 5], help="Ship lengths to place")

    n = sub.add_parser("nim", help="Take sticks from piles; taking the last stick wins")
    n.add_argument("--piles", type=int, nargs="+", help="Pile sizes (asked interactively if omitted)")
    n.add_argument("--players", type=int, default=2)

    return parser


def make_seats(
    mode: str,
    num_players: int,
    seed: int | None,
    prompt: Prompt,
    output: Output,
    human_seat: int = 0,
) -> list[Seat]:
    """モードに応じて各席を人間または AI に割り当てる（vs-ai では human_seat 番目が人間）。"""
    if mode == "hotseat":
        return [HumanSeat(prompt, output) for _ in range(num_players)]
    agent = RandomAgent(seed)
    if mode == "ai-vs-ai":
        return [AgentSeat(agent) for _ in range(num_players)]
    return [
        HumanSeat(prompt, output) if i == human_seat else AgentSeat(agent)
        for i in range(num_players)
    ]


def make_game(args: argparse.Namespace, prompt: Prompt, output: Output) -> Game:
    if args.game == "battleship":
        output("======= BATTLESHIP =======")
        output(MOVE_HELP)
        config = BattleshipConfig(rows=args.rows, cols=args.cols, ship_lengths=tuple(args.ships))
        return BattleshipState.setup(config)
    output("======= NIM =======")
    if args.piles is None:
        return NimState.setup_from_input(prompt, output, num_players=args.players)
    return NimState.setup(args.piles, num_players=args.players)


def main(argv: Sequence[str] | None = None, prompt: Prompt = input, output: Output = print) -> int:
    """Run one game and return the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        try:
            game = make_game(args, prompt, output)
            human = game.PLAYERS.parse(args.seat)
        except ValueError as e:
            # 設定値の誤り（盤面サイズ・山の大きさなど）
            output(f"Error: {e}")
            return 2
        seats = make_seats(args.mode, game.num_players, args.seed, prompt, output, human.as_index())
        play_game(game, seats, output)
    except NoLegalMoveError as e:
        # 船がどこにも置けなくなった等、続行できない局面
        output(f"Error: {e}")
        return 2
    except (EOFError, KeyboardInterrupt):
        output("\nGame aborted.")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
