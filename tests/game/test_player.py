"""Tests for PlayerIndex."""

import pytest

from turn_games.game.player import PlayerIndex, TwoPlayers, players_of


class TestConstruction:
    @pytest.mark.parametrize("n", [1, 2, 3, 5])
    def test_from_index_out_of_range(self, n: int) -> None:
        players = players_of(n)
        assert players.from_index(n) is None
        assert players.from_index(n + 7) is None
        assert players.from_index(-1) is None

    def test_from_index_in_range(self) -> None:
        assert TwoPlayers.from_index(0) == TwoPlayers.ONE
        assert TwoPlayers.from_index(1) == TwoPlayers.TWO

    def test_direct_construction_out_of_range_fails(self) -> None:
        with pytest.raises(ValueError):
            TwoPlayers(2)

    def test_as_index(self) -> None:
        assert TwoPlayers.ONE.as_index() == 0
        assert TwoPlayers.TWO.as_index() == 1

    def test_players_of_is_cached(self) -> None:
        assert players_of(3) is players_of(3)
        assert players_of(2) is TwoPlayers

    def test_players_of_zero_fails(self) -> None:
        with pytest.raises(ValueError):
            players_of(0)

    def test_different_player_counts_never_equal(self) -> None:
        assert players_of(3)(0) != TwoPlayers(0)

    def test_all(self) -> None:
        assert TwoPlayers.all() == [TwoPlayers.ONE, TwoPlayers.TWO]


class TestCycling:
    @pytest.mark.parametrize("n", [1, 2, 3, 4, 7])
    def test_next_n_times_is_identity(self, n: int) -> None:
        players = players_of(n)
        for start in players.all():
            p: PlayerIndex = start
            for _ in range(n):
                p = p.next()
            assert p == start

    def test_prev_undoes_next(self) -> None:
        players = players_of(4)
        for p in players.all():
            assert p.next().prev() == p

    def test_wraps_around(self) -> None:
        players = players_of(3)
        assert players(2).next() == players(0)
        assert players(0).prev() == players(2)

    def test_opponent(self) -> None:
        assert TwoPlayers.ONE.opponent() == TwoPlayers.TWO
        assert TwoPlayers.TWO.opponent() == TwoPlayers.ONE


class TestNames:
    def test_name_is_one_based(self) -> None:
        assert TwoPlayers.ONE.name() == "Player 1"
        assert TwoPlayers.TWO.name() == "Player 2"
        assert str(TwoPlayers.TWO) == "Player 2"

    def test_parse(self) -> None:
        assert TwoPlayers.parse("2") == TwoPlayers.TWO
        assert TwoPlayers.parse(" 1 ") == TwoPlayers.ONE

    @pytest.mark.parametrize("raw", ["0", "3", "x", ""])
    def test_parse_rejects(self, raw: str) -> None:
        with pytest.raises(ValueError):
            TwoPlayers.parse(raw)
