"""
Knockout Result Progression.

Applies one match score to a knockout bracket and returns the new
bracket. When a match's winner changes, the winner is written into the
slot the match feeds and every downstream result that depended on the
superseded winner is reset.
"""
import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple, TypeVar

from .models import Match, Player, SlotRef, coerce_number

logger = logging.getLogger(__name__)

T = TypeVar("T")


def decide_winner(
    players: Tuple[Optional[Player], Optional[Player]],
    scores: Tuple[Optional[float], Optional[float]],
) -> Optional[Player]:
    """
    Winner of a match, or None while it is incomplete.

    Player 1 wins ties.
    """
    p1, p2 = players
    s1, s2 = scores
    if p1 is None or p2 is None or s1 is None or s2 is None:
        return None
    return p1 if s1 >= s2 else p2


def _index_matches(rounds: Sequence[Sequence[Match]]) -> Dict[str, Tuple[int, int]]:
    return {
        match.id: (round_index, match_index)
        for round_index, matches in enumerate(rounds)
        for match_index, match in enumerate(matches)
    }


def _advance(
    matches: List[List[Match]],
    index: Dict[str, Tuple[int, int]],
    target: SlotRef,
    occupant: Optional[Player],
    champion: Optional[Player],
) -> Tuple[Optional[Player], int]:
    """
    Place ``occupant`` in ``target`` and reset results that depended on it.

    The reset keeps walking forward while the match being reset had a
    winner that was already placed further on.

    Returns:
        (tournament winner after the reset, number of matches reset)
    """
    reset = 0
    while target is not None and target.match_id in index:
        round_index, match_index = index[target.match_id]
        downstream = matches[round_index][match_index]

        slots = list(downstream.players)
        slots[target.slot] = occupant
        had_winner = downstream.winner_id is not None
        matches[round_index][match_index] = replace(
            downstream, players=tuple(slots), scores=(None, None), winner_id=None
        )
        reset += 1

        if downstream.feeds is None:
            return None, reset
        if not had_winner:
            break
        target, occupant = downstream.feeds, None

    return champion, reset


def submit_knockout_score(tournament: T, match_id: str, scores: Sequence) -> T:
    """
    Record the score of one match.

    Args:
        tournament: KnockoutTournament or KnockoutBracket
        match_id: Id of the match being scored
        scores: Two scores, player 1 first. Non-numeric entries count as
            not yet recorded.

    Returns:
        A new structure of the same type. Unknown match ids and score
        sequences of the wrong length return the input unchanged.
    """
    matches = [list(r.matches) for r in tournament.rounds]
    index = _index_matches(matches)
    if match_id not in index:
        logger.debug(f"Unknown match id, ignoring score: {match_id}")
        return tournament
    if scores is None or len(scores) != 2:
        logger.debug(f"Malformed score for {match_id}, expected two entries: {scores!r}")
        return tournament

    round_index, match_index = index[match_id]
    match = matches[round_index][match_index]
    recorded = (coerce_number(scores[0]), coerce_number(scores[1]))
    winner = decide_winner(match.players, recorded)
    winner_id = winner.id if winner is not None else None

    matches[round_index][match_index] = replace(match, scores=recorded, winner_id=winner_id)

    champion = tournament.winner
    if match.feeds is None:
        champion = winner
    elif winner_id != match.winner_id:
        champion, reset = _advance(matches, index, match.feeds, winner, champion)
        logger.debug(
            f"Match {match_id} winner changed {match.winner_id} -> {winner_id}; "
            f"reset {reset} downstream match(es)"
        )

    rounds = tuple(
        replace(r, matches=tuple(m))
        for r, m in zip(tournament.rounds, matches)
    )
    return replace(tournament, rounds=rounds, winner=champion)
