"""Tests for Cell, Coord and Direction."""

import pytest

from turn_games.game.battleship.types import (
    DIRECTIONS,
    BattleshipConfig,
    Cell,
    Coord,
    Direction,
    HitResult,
)
from turn_games.game.view import View


class TestCellShoot:
    def test_ship_becomes_hit(self) -> None:
        assert Cell.SHIP.shoot() == (Cell.SHIP_HIT, HitResult.HIT)

    def test_sea_becomes_miss(self) -> None:
        assert Cell.SEA.shoot() == (Cell.SEA_MISS, HitResult.MISS)

    @pytest.mark.parametrize("cell", [Cell.SHIP_HIT, Cell.SEA_MISS])
    def test_terminal_cells_are_idempotent(self, cell: Cell) -> None:
        assert cell.shoot() == (cell, HitResult.MISS)

    def test_is_shot(self) -> None:
        assert {c for c in Cell if c.is_shot} == {Cell.SHIP_HIT, Cell.SEA_MISS}


class TestCellView:
    def test_implements_view(self) -> None:
        assert isinstance(Cell.SEA, View)

    def test_hidden_ship_looks_like_sea(self) -> None:
        assert Cell.SHIP.equal_public(Cell.SEA)
        assert not Cell.SHIP.equal_private(Cell.SEA)

    def test_hit_ship_is_visible(self) -> None:
        assert not Cell.SHIP_HIT.equal_public(Cell.SHIP)

    def test_render(self) -> None:
        assert [c.render_private() for c in Cell] == ["s", "x", "-", "o"]
        assert [c.render_public() for c in Cell] == ["-", "x", "-", "o"]


class TestDirection:
    def test_eight_directions(self) -> None:
        assert len(DIRECTIONS) == 8
        assert all(d.is_valid() for d in DIRECTIONS)

    @pytest.mark.parametrize("direction", [Direction(0, 0), Direction(2, 0), Direction(-1, -2)])
    def test_invalid(self, direction: Direction) -> None:
        assert not direction.is_valid()

    def test_coord_step(self) -> None:
        assert Coord(2, 3).step(Direction(1, -1), 2) == Coord(4, 1)


class TestConfig:
    def test_defaults(self) -> None:
        config = BattleshipConfig()
        assert (config.rows, config.cols, config.ship_lengths) == (10, 10, (3, 4, 5))

    def test_rejects_empty_board(self) -> None:
        with pytest.raises(ValueError):
            BattleshipConfig(rows=0)

    def test_rejects_ship_too_long(self) -> None:
        with pytest.raises(ValueError):
            BattleshipConfig(rows=3, cols=3, ship_lengths=(4,))

    def test_rejects_empty_fleet(self) -> None:
        with pytest.raises(ValueError, match="at least one ship"):
            BattleshipConfig(ship_lengths=())

    def test_rejects_fleet_larger_than_board(self) -> None:
        # 1隻ずつなら収まるが、合計6マスは 2x2 の盤に入らない
        with pytest.raises(ValueError, match="does not fit"):
            BattleshipConfig(rows=2, cols=2, ship_lengths=(2, 2, 2))

    def test_fleet_filling_the_board_is_allowed(self) -> None:
        assert BattleshipConfig(rows=2, cols=2, ship_lengths=(2, 2)).ship_lengths == (2, 2)
