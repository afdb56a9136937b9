"""
Unit tests for bracket data structures.
"""
import dataclasses

import pytest

from bracket_engine.bracket.models import (
    GroupAdvancementTournament,
    KnockoutTournament,
    Match,
    Player,
    PRELIMINARY_ROUND_NAME,
    Race,
    Round,
    SlotRef,
    TournamentFormat,
    coerce_number,
)


class TestCoerceNumber:

    @pytest.mark.parametrize("value", [0, 3, 2.5, -1])
    def test_numbers_pass_through(self, value):
        assert coerce_number(value) == value

    @pytest.mark.parametrize("value", [None, "3", True, False, float("nan"), float("-inf"), [1]])
    def test_everything_else_is_missing(self, value):
        assert coerce_number(value) is None


class TestMatch:

    def test_winner_resolves_player(self):
        a, b = Player("a", "A"), Player("b", "B")
        match = Match(id="r0m0", players=(a, b), scores=(1, 2), winner_id="b")

        assert match.winner == b
        assert match.is_completed

    def test_frozen(self):
        match = Match(id="r0m0")
        with pytest.raises(dataclasses.FrozenInstanceError):
            match.winner_id = "x"

    def test_to_dict(self):
        a = Player("a", "A")
        match = Match(id="pr0", players=(a, None), feeds=SlotRef("r0m1", 1))

        assert match.to_dict() == {
            "id": "pr0",
            "players": [{"id": "a", "name": "A"}, None],
            "scores": [None, None],
            "winner_id": None,
            "feeds": {"match_id": "r0m1", "slot": 1},
        }


class TestRace:

    def test_finished_ignores_empty_slots(self):
        a, b = Player("a", "A"), Player("b", "B")
        race = Race(id="r1h0", players=(a, b, None), positions=(2, 1, None), advancement_count=2)

        assert race.occupied_slots == (0, 1)
        assert race.is_finished is True
        assert race.to_dict()["is_finished"] is True

    def test_empty_race_is_not_finished(self):
        race = Race(id="r1h0", players=(None, None, None), positions=(None, None, None))

        assert race.is_finished is False
        assert race.to_dict()["is_finished"] is False


class TestRound:

    def test_preliminary_flag(self):
        assert Round(name=PRELIMINARY_ROUND_NAME).is_preliminary is True
        assert Round(name="Semifinals").is_preliminary is False

    def test_to_dict_carries_preliminary_flag(self):
        data = Round(name=PRELIMINARY_ROUND_NAME, matches=(Match(id="pr0"),)).to_dict()

        assert data["is_preliminary"] is True
        assert [m["id"] for m in data["matches"]] == ["pr0"]


class TestTournamentVariants:

    def test_format_tags(self):
        assert KnockoutTournament(id="k", name="K").format == TournamentFormat.KNOCKOUT
        assert GroupAdvancementTournament(id="g", name="G").format == TournamentFormat.GROUP_ADVANCEMENT

    def test_to_dict_includes_format(self):
        data = GroupAdvancementTournament(id="g", name="G", players=(Player("a", "A"),)).to_dict()

        assert data["format"] == "group_advancement"
        assert data["players"] == [{"id": "a", "name": "A"}]
        assert data["rounds"] == []
        assert data["winner"] is None
