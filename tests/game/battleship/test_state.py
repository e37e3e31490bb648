"""Tests for BattleshipState."""

import pytest

from turn_games.game.battleship.moves import PlaceShip, Shoot
from turn_games.game.battleship.state import NUM_PLANES, BattleshipState
from turn_games.game.battleship.types import BattleshipConfig, Cell, Coord, Direction
from turn_games.game.player import TwoPlayers
from turn_games.game.protocol import Game, IllegalMoveError, InvariantError, ToMove, Won

ONE = TwoPlayers.ONE
TWO = TwoPlayers.TWO
DOWN = Direction(1, 0)
RIGHT = Direction(0, 1)

# 各プレイヤーの船: 行 0, 2, 4 に横向きで 3, 4, 5
FLEET = [(3, Coord(0, 0)), (4, Coord(2, 0)), (5, Coord(4, 0))]


def place_fleet(state: BattleshipState) -> None:
    for _ in TwoPlayers.all():
        for length, coord in FLEET:
            state.make_move(PlaceShip(length, coord, RIGHT))


def fleet_cells() -> list[Coord]:
    return [Coord(coord.row, coord.col + i) for length, coord in FLEET for i in range(length)]


class TestProtocolCompliance:
    def test_implements_game(self) -> None:
        assert isinstance(BattleshipState(), Game)

    def test_num_players(self) -> None:
        assert BattleshipState().num_players == 2


class TestPlacementPhase:
    def test_player_one_places_first(self) -> None:
        state = BattleshipState()
        assert state.status() == ToMove(ONE)

    def test_player_two_places_after_player_one(self) -> None:
        state = BattleshipState()
        for length, coord in FLEET:
            assert state.status() == ToMove(ONE)
            state.make_move(PlaceShip(length, coord, RIGHT))
        assert state.status() == ToMove(TWO)
        assert state.pending_for(ONE) == []

    def test_place_ship_on_own_board(self) -> None:
        state = BattleshipState()
        state.make_move(PlaceShip(4, Coord(0, 0), DOWN))
        assert state.board(ONE).ship_squares_left() == 4
        assert state.board(TWO).ship_squares_left() == 0
        assert state.pending_for(ONE) == [3, 5]

    def test_shoot_while_placing_is_illegal(self) -> None:
        state = BattleshipState()
        state.make_move(PlaceShip(3, Coord(0, 0), RIGHT))
        state.make_move(PlaceShip(5, Coord(2, 0), RIGHT))
        assert state.pending_for(ONE) == [4]
        with pytest.raises(IllegalMoveError, match="placed before shooting"):
            state.check_move(Shoot(Coord(0, 0)))
        assert not state.is_valid_move(Shoot(Coord(0, 0)))

    def test_shoot_while_placing_is_not_applied(self) -> None:
        state = BattleshipState()
        with pytest.raises(InvariantError):
            state.make_move(Shoot(Coord(0, 0)))
        assert state.board(TWO).get_private(Coord(0, 0)) is Cell.SEA

    def test_length_not_pending(self) -> None:
        state = BattleshipState()
        state.make_move(PlaceShip(3, Coord(0, 0), RIGHT))
        with pytest.raises(IllegalMoveError, match="length 3"):
            state.check_move(PlaceShip(3, Coord(5, 0), RIGHT))

    def test_off_the_board_coordinate(self) -> None:
        state = BattleshipState()
        with pytest.raises(IllegalMoveError, match="off the board"):
            state.check_move(PlaceShip(3, Coord(10, 0), RIGHT))

    def test_bad_direction(self) -> None:
        state = BattleshipState()
        with pytest.raises(IllegalMoveError, match="Direction"):
            state.check_move(PlaceShip(3, Coord(0, 0), Direction(0, 0)))

    def test_line_out_of_bounds(self) -> None:
        state = BattleshipState()
        move = PlaceShip(3, Coord(9, 0), DOWN)
        with pytest.raises(IllegalMoveError, match="does not fit"):
            state.check_move(move)
        with pytest.raises(InvariantError):
            state.make_move(move)
        assert state.board(ONE).ship_squares_left() == 0
        assert state.pending_for(ONE) == [3, 4, 5]

    def test_overlap(self) -> None:
        state = BattleshipState()
        state.make_move(PlaceShip(5, Coord(2, 0), RIGHT))
        with pytest.raises(IllegalMoveError, match="does not fit"):
            state.check_move(PlaceShip(4, Coord(0, 2), DOWN))

    def test_duplicate_ship_lengths(self) -> None:
        state = BattleshipState(BattleshipConfig(ship_lengths=(2, 2)))
        state.make_move(PlaceShip(2, Coord(0, 0), RIGHT))
        assert state.pending_for(ONE) == [2]
        state.make_move(PlaceShip(2, Coord(1, 0), RIGHT))
        assert state.status() == ToMove(TWO)


class TestShootingPhase:
    def test_player_one_shoots_first(self) -> None:
        state = BattleshipState()
        place_fleet(state)
        assert state.status() == ToMove(ONE)

    def test_shot_hits_opponent_board_and_passes_turn(self) -> None:
        state = BattleshipState()
        place_fleet(state)
        state.make_move(Shoot(Coord(0, 0)))
        assert state.board(TWO).get_private(Coord(0, 0)) is Cell.SHIP_HIT
        assert state.board(ONE).get_private(Coord(0, 0)) is Cell.SHIP
        assert state.status() == ToMove(TWO)

    def test_shot_off_the_board(self) -> None:
        state = BattleshipState()
        place_fleet(state)
        with pytest.raises(IllegalMoveError, match="off the board"):
            state.check_move(Shoot(Coord(0, 10)))

    def test_repeat_shot_is_legal(self) -> None:
        state = BattleshipState()
        place_fleet(state)
        state.make_move(Shoot(Coord(9, 9)))
        state.make_move(Shoot(Coord(9, 9)))
        assert state.is_valid_move(Shoot(Coord(9, 9)))

    def test_placement_after_all_placed_is_illegal(self) -> None:
        state = BattleshipState()
        place_fleet(state)
        with pytest.raises(IllegalMoveError):
            state.check_move(PlaceShip(3, Coord(8, 0), RIGHT))


class TestEndToEnd:
    def test_full_game_won_and_stays_won(self) -> None:
        state = BattleshipState()
        place_fleet(state)
        assert state.status() == ToMove(ONE)

        # プレイヤー1 は船を撃ち、プレイヤー2 は空きマスを撃ち続ける
        misses = [Coord(9, c) for c in range(10)] + [Coord(8, c) for c in range(10)]
        for target, miss in zip(fleet_cells(), misses):
            assert not state.is_ended()
            state.make_move(Shoot(target))
            if state.is_ended():
                break
            state.make_move(Shoot(miss))

        assert state.board(TWO).ship_squares_left() == 0
        assert state.board(ONE).ship_squares_left() == 12
        assert state.status() == Won(ONE)
        assert state.status() == Won(ONE)
        assert state.is_ended()
        assert state.cur_player() is None
        assert state.legal_moves() == []
        with pytest.raises(IllegalMoveError, match="over"):
            state.check_move(Shoot(Coord(0, 0)))

    def test_both_fleets_sunk_is_an_invariant_error(self) -> None:
        state = BattleshipState(BattleshipConfig(rows=2, cols=2, ship_lengths=(1,)))
        state.make_move(PlaceShip(1, Coord(0, 0), RIGHT))
        state.make_move(PlaceShip(1, Coord(0, 0), RIGHT))
        # 通常の手順では起こらない: 両者の盤を直接撃って両方とも沈める
        state.board(ONE).shoot(Coord(0, 0))
        state.board(TWO).shoot(Coord(0, 0))
        with pytest.raises(InvariantError, match="Both fleets"):
            state.status()


class TestVisibleState:
    def test_placement_view(self) -> None:
        state = BattleshipState()
        state.make_move(PlaceShip(3, Coord(0, 0), RIGHT))
        text = state.print_state_visible(ONE)
        assert text.startswith("=== Your Board ===\ns s s -")
        assert "=== Ships to Place ===\n4 5\n" in text

    def test_shooting_view_hides_opponent_ships(self) -> None:
        state = BattleshipState()
        place_fleet(state)
        state.make_move(Shoot(Coord(0, 0)))
        state.make_move(Shoot(Coord(9, 9)))
        lines = state.print_state_visible(ONE).splitlines()
        assert lines[0] == "=== Your Board ==="
        assert lines[1] == "s s s - - - - - - -"
        assert lines[10] == "- - - - - - - - - o"
        assert lines[11] == "=== Shots ==="
        assert lines[12] == "x - - - - - - - - -"
        assert "s" not in "".join(lines[12:])

    def test_view_ignores_opponent_hidden_ships(self) -> None:
        a = BattleshipState()
        b = BattleshipState()
        for length, coord in FLEET:
            a.make_move(PlaceShip(length, coord, RIGHT))
            b.make_move(PlaceShip(length, coord, RIGHT))
        for length, coord in FLEET:
            a.make_move(PlaceShip(length, coord, RIGHT))
            b.make_move(PlaceShip(length, Coord(coord.row + 1, coord.col + 2), RIGHT))
        assert a.print_state_visible(ONE) == b.print_state_visible(ONE)
        assert (a.to_tensor_planes(ONE) == b.to_tensor_planes(ONE)).all()
        assert a.print_state_visible(TWO) != b.print_state_visible(TWO)


class TestLegalMoves:
    def test_all_placements_are_valid(self) -> None:
        state = BattleshipState(BattleshipConfig(rows=4, cols=4, ship_lengths=(3,)))
        moves = state.legal_moves()
        assert moves
        assert all(isinstance(m, PlaceShip) and state.is_valid_move(m) for m in moves)
        # 4×4 盤で長さ3: 横 2×4×2 + 縦 2×4×2 + 斜め 2×2×4
        assert len(moves) == 48

    def test_shots_skip_known_cells(self) -> None:
        state = BattleshipState()
        place_fleet(state)
        state.make_move(Shoot(Coord(0, 0)))
        state.make_move(Shoot(Coord(5, 5)))
        moves = state.legal_moves()
        assert len(moves) == 99
        assert Shoot(Coord(0, 0)) not in moves
        assert all(state.is_valid_move(m) for m in moves)


class TestTensorPlanes:
    def test_shape(self) -> None:
        state = BattleshipState(BattleshipConfig(rows=6, cols=8, ship_lengths=(2,)))
        assert state.to_tensor_planes(ONE).shape == (NUM_PLANES, 6, 8)

    def test_planes(self) -> None:
        state = BattleshipState()
        place_fleet(state)
        state.make_move(Shoot(Coord(0, 0)))   # ONE hits TWO
        state.make_move(Shoot(Coord(9, 9)))   # TWO misses ONE
        planes = state.to_tensor_planes(ONE)
        assert planes[0].sum() == 12
        assert planes[1].sum() == 0
        assert planes[2, 9, 9] == 1.0
        assert planes[3, 0, 0] == 1.0
        assert planes[4].sum() == 0
