"""
Unit tests for group-advancement ladder construction.
"""
import random

import pytest

from bracket_engine.bracket.group_builder import (
    advancement_count,
    build_group_advancement_bracket,
    partition_heats,
    plan_ladder,
)
from bracket_engine.bracket.models import GroupAdvancementBracket


class TestPartitionHeats:

    @pytest.mark.parametrize("pool,expected", [
        (2, (2,)),
        (3, (3,)),
        (4, (4,)),
        (5, (3, 2)),
        (6, (3, 3)),
        (7, (4, 3)),
        (8, (4, 4)),
        (9, (4, 3, 2)),
        (10, (4, 3, 3)),
        (11, (4, 4, 3)),
        (12, (4, 4, 4)),
        (13, (4, 4, 3, 2)),
    ])
    def test_known_partitions(self, pool, expected):
        assert partition_heats(pool) == expected

    def test_six_prefers_two_heats_of_three(self):
        assert partition_heats(6) != (4, 2)

    @pytest.mark.parametrize("pool", range(2, 101))
    def test_sizes_cover_pool_without_singletons(self, pool):
        heats = partition_heats(pool)
        assert sum(heats) == pool
        assert set(heats) <= {2, 3, 4}

    def test_empty_pool(self):
        assert partition_heats(0) == ()


class TestAdvancementCount:

    @pytest.mark.parametrize("size,expected", [(4, 2), (3, 2), (2, 1)])
    def test_regular_heats(self, size, expected):
        assert advancement_count(size) == expected

    @pytest.mark.parametrize("size", [2, 3, 4])
    def test_final_heat_crowns_one(self, size):
        assert advancement_count(size, is_final=True) == 1


class TestPlanLadder:

    @pytest.mark.parametrize("players,expected", [
        (2, [(2,)]),
        (4, [(4,)]),
        (5, [(3, 2), (3,)]),
        (6, [(3, 3), (4,)]),
        (9, [(4, 3, 2), (3, 2), (3,)]),
        (16, [(4, 4, 4, 4), (4, 4), (4,)]),
    ])
    def test_round_plans(self, players, expected):
        assert plan_ladder(players) == expected


class TestBuildLadder:

    @pytest.mark.parametrize("n", [0, 1])
    def test_fewer_than_two_players(self, make_players, n):
        assert build_group_advancement_bracket(make_players(n)) == GroupAdvancementBracket()

    def test_small_roster_is_a_single_final_race(self, make_players, identity_rng):
        bracket = build_group_advancement_bracket(make_players(4), rng=identity_rng)

        assert [r.name for r in bracket.rounds] == ["Final Race"]
        race = bracket.rounds[0].races[0]
        assert [p.id for p in race.players] == ["p1", "p2", "p3", "p4"]
        assert race.positions == (None, None, None, None)
        assert race.advancement_count == 1
        assert race.is_finished is False

    def test_six_players(self, make_players, identity_rng):
        bracket = build_group_advancement_bracket(make_players(6), rng=identity_rng)

        assert [r.name for r in bracket.rounds] == ["Semifinals", "Final Race"]
        first, final = bracket.rounds
        assert [[p.id for p in r.players] for r in first.races] == [["p1", "p2", "p3"], ["p4", "p5", "p6"]]
        assert [r.advancement_count for r in first.races] == [2, 2]
        assert final.races[0].players == (None, None, None, None)
        assert final.races[0].advancement_count == 1

    def test_nine_players_names_and_ids(self, make_players, identity_rng):
        bracket = build_group_advancement_bracket(make_players(9), rng=identity_rng)

        assert [r.name for r in bracket.rounds] == ["Quarterfinals", "Semifinals", "Final Race"]
        assert [race.id for race in bracket.rounds[0].races] == ["r0h0", "r0h1", "r0h2"]
        assert [race.advancement_count for race in bracket.rounds[0].races] == [2, 2, 1]
        assert [len(race.players) for race in bracket.rounds[1].races] == [3, 2]

    def test_long_ladder_uses_round_numbers(self, make_players):
        bracket = build_group_advancement_bracket(make_players(40), rng=random.Random(2))
        assert bracket.rounds[0].name == "Round 1"
        assert bracket.rounds[-1].name == "Final Race"

    @pytest.mark.parametrize("n", range(2, 80))
    def test_advancing_total_matches_next_round(self, make_players, n):
        players = make_players(n)
        bracket = build_group_advancement_bracket(players, rng=random.Random(n))

        for current, following in zip(bracket.rounds, bracket.rounds[1:]):
            assert current.advancing_count == following.slot_count
            assert len(current.races) > 1

        final = bracket.rounds[-1]
        assert len(final.races) == 1
        assert final.races[0].advancement_count == 1

        seeded = [p.id for race in bracket.rounds[0].races for p in race.players]
        assert sorted(seeded) == sorted(p.id for p in players)
        for rnd in bracket.rounds[1:]:
            assert all(p is None for race in rnd.races for p in race.players)
