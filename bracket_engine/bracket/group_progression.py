"""
Group-Advancement Result Progression.

A heat result can change the make-up of every later heat, so each
submission clears the whole ladder after the edited round and refills the
next round from scratch once all heats of the edited round are finished.
"""
import logging
from dataclasses import replace
from typing import List, Optional, Sequence, TypeVar

from .models import HeatRound, Player, Race, coerce_number

logger = logging.getLogger(__name__)

T = TypeVar("T")


def rank_finishers(race: Race) -> List[Player]:
    """
    Occupied slots ordered by finishing position.

    Equal positions keep their slot order. Slots without a position are
    left out.
    """
    ranked = sorted(
        (race.positions[i], i)
        for i in race.occupied_slots
        if race.positions[i] is not None
    )
    return [race.players[i] for _, i in ranked]


def advancing_players(race: Race) -> List[Player]:
    """Players leaving a finished race for the next round."""
    if not race.is_finished:
        return []
    return rank_finishers(race)[:race.advancement_count]


def clear_round(heat_round: HeatRound) -> HeatRound:
    races = tuple(
        replace(
            race,
            players=(None,) * len(race.players),
            positions=(None,) * len(race.positions),
        )
        for race in heat_round.races
    )
    return replace(heat_round, races=races)


def fill_round(heat_round: HeatRound, players: Sequence[Player]) -> HeatRound:
    """Place players into the round's slots left to right, heat by heat."""
    remaining = list(players)
    races = []
    for race in heat_round.races:
        size = len(race.players)
        taken, remaining = remaining[:size], remaining[size:]
        slots = tuple(taken) + (None,) * (size - len(taken))
        races.append(replace(race, players=slots, positions=(None,) * size))
    if remaining:
        logger.warning(f"{len(remaining)} advancing player(s) had no slot in {heat_round.name}")
    return replace(heat_round, races=tuple(races))


def submit_group_advancement_result(
    tournament: T,
    round_index: int,
    race_index: int,
    positions: Sequence,
) -> T:
    """
    Record finishing positions for one heat.

    Args:
        tournament: GroupAdvancementTournament or GroupAdvancementBracket
        round_index: Index of the round holding the heat
        race_index: Index of the heat within its round
        positions: 1-based finishing position per player slot; None or
            non-numeric entries count as not yet recorded

    Returns:
        A new structure of the same type. Unknown indices and position
        sequences of the wrong length return the input unchanged.
    """
    rounds: List[HeatRound] = list(tournament.rounds)
    if not 0 <= round_index < len(rounds):
        logger.debug(f"Unknown round index, ignoring result: {round_index}")
        return tournament
    races = list(rounds[round_index].races)
    if not 0 <= race_index < len(races):
        logger.debug(f"Unknown race index in round {round_index}, ignoring result: {race_index}")
        return tournament

    race = races[race_index]
    if positions is None or len(positions) != len(race.players):
        logger.debug(f"Malformed positions for {race.id}: {positions!r}")
        return tournament

    races[race_index] = replace(race, positions=tuple(coerce_number(p) for p in positions))
    current = replace(rounds[round_index], races=tuple(races))
    rounds[round_index] = current

    winner: Optional[Player] = None
    if round_index == len(rounds) - 1:
        finishers = advancing_players(races[race_index])
        winner = finishers[0] if finishers else None
    else:
        for later in range(round_index + 1, len(rounds)):
            rounds[later] = clear_round(rounds[later])

        if all(r.is_finished for r in current.races):
            advancing: List[Player] = []
            for r in current.races:
                advancing.extend(advancing_players(r))
            rounds[round_index + 1] = fill_round(rounds[round_index + 1], advancing)
            logger.debug(f"{len(advancing)} player(s) advanced from {current.name}")

    return replace(tournament, rounds=tuple(rounds), winner=winner)
