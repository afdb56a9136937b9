"""
Knockout Bracket Construction.

Seeds N players into a single elimination bracket. When N is not a power
of two the lowest seeds play a preliminary round that reduces the field
to the largest power of two below N; the remaining players receive byes
straight into the first main round.
"""
import logging
import random
from typing import List, Optional, Sequence

from .models import (
    KnockoutBracket,
    Match,
    Player,
    Round,
    SlotRef,
    PRELIMINARY_ROUND_NAME,
)
from .naming import get_round_name
from .seeding import shuffled

logger = logging.getLogger(__name__)


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def largest_power_of_two_at_most(n: int) -> int:
    return 1 << (n.bit_length() - 1)


def match_id(round_index: int, match_index: int) -> str:
    """Id of a main-bracket match; round 0 is the first main round."""
    return f"r{round_index}m{match_index}"


def preliminary_match_id(match_index: int) -> str:
    return f"pr{match_index}"


def _build_main_rounds(first_round_slots: List[Optional[Player]]) -> List[Round]:
    """
    Build the halving main bracket from its first round's slot contents.

    Every match except the final feeds slot ``j % 2`` of match ``j // 2``
    in the following round.
    """
    total_rounds = len(first_round_slots).bit_length() - 1
    rounds: List[Round] = []
    slots = first_round_slots

    for i in range(total_rounds):
        is_last = i == total_rounds - 1
        matches = []
        for j in range(len(slots) // 2):
            feeds = None if is_last else SlotRef(match_id(i + 1, j // 2), j % 2)
            matches.append(Match(
                id=match_id(i, j),
                players=(slots[2 * j], slots[2 * j + 1]),
                feeds=feeds,
            ))
        rounds.append(Round(name=get_round_name(i, total_rounds), matches=tuple(matches)))
        slots = [None] * len(matches)

    return rounds


def _first_round_with_byes(bye_players: List[Player], bracket_size: int) -> List[Optional[Player]]:
    """
    Lay out the first main round around the bye players.

    Bye players are paired among themselves first, then each remaining bye
    player gets an open slot as opponent. If there are more open slots than
    bye players, the leftover matches are entirely open.
    """
    open_slots = bracket_size - len(bye_players)
    paired = max(len(bye_players) - open_slots, 0)

    slots: List[Optional[Player]] = list(bye_players[:paired])
    for player in bye_players[paired:]:
        slots.extend([player, None])
    while len(slots) < bracket_size:
        slots.extend([None, None])
    return slots


def build_knockout_bracket(
    players: Sequence[Player],
    rng: Optional[random.Random] = None,
) -> KnockoutBracket:
    """
    Seed players into a complete single elimination bracket.

    Args:
        players: Finalized, deduplicated roster (order is irrelevant, the
            roster is shuffled before seeding)
        rng: Optional random source for the shuffle

    Returns:
        KnockoutBracket with every round built and no results. Fewer than
        two players yields an empty bracket.
    """
    num_players = len(players)
    if num_players < 2:
        logger.debug(f"Not enough players for a knockout bracket: {num_players}")
        return KnockoutBracket()

    seeded = shuffled(players, rng)

    if is_power_of_two(num_players):
        rounds = _build_main_rounds(seeded)
        logger.debug(f"Built {len(rounds)} round knockout bracket for {num_players} players")
        return KnockoutBracket(rounds=tuple(rounds))

    bracket_size = largest_power_of_two_at_most(num_players)
    num_prelim_matches = num_players - bracket_size
    prelim_players = seeded[num_players - 2 * num_prelim_matches:]
    bye_players = seeded[:num_players - 2 * num_prelim_matches]

    first_round_slots = _first_round_with_byes(bye_players, bracket_size)
    main_rounds = _build_main_rounds(first_round_slots)

    # Preliminary match i fills the i-th open slot of the first main round
    targets = [
        SlotRef(match_id(0, idx // 2), idx % 2)
        for idx, player in enumerate(first_round_slots)
        if player is None
    ]
    prelim_matches = tuple(
        Match(
            id=preliminary_match_id(i),
            players=(prelim_players[2 * i], prelim_players[2 * i + 1]),
            feeds=targets[i],
        )
        for i in range(num_prelim_matches)
    )

    logger.debug(
        f"Built knockout bracket for {num_players} players: "
        f"{num_prelim_matches} preliminary matches, {len(bye_players)} byes"
    )
    return KnockoutBracket(rounds=(Round(PRELIMINARY_ROUND_NAME, prelim_matches),) + tuple(main_rounds))
