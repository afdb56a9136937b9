"""
Group-Advancement Ladder Construction.

Players race in heats of 2-4. The best finishers of each heat advance to
the next round, whose heats are sized from the number of advancing
players, until a single heat - the Final Race - remains.
"""
import logging
import random
from typing import List, Optional, Sequence, Tuple

from .models import GroupAdvancementBracket, HeatRound, Player, Race
from .naming import GROUP_FINAL, get_round_name
from .seeding import shuffled

logger = logging.getLogger(__name__)

MAX_HEAT_SIZE = 4


def partition_heats(pool_size: int) -> Tuple[int, ...]:
    """
    Split a pool of runners into heat sizes.

    Heats of 4 are preferred. A remainder of 1 turns one heat of 4 into
    3 + 2, a remainder of 2 turns one heat of 4 into 3 + 3, and a remainder
    of 3 adds a heat of 3. A pool of 4 or fewer is a single heat.

    Examples:
        >>> partition_heats(6)
        (3, 3)
        >>> partition_heats(9)
        (4, 3, 2)
    """
    if pool_size <= 0:
        return ()
    if pool_size <= MAX_HEAT_SIZE:
        return (pool_size,)

    full, remainder = divmod(pool_size, MAX_HEAT_SIZE)
    if remainder == 0:
        return (4,) * full
    if remainder == 1:
        return (4,) * (full - 1) + (3, 2)
    if remainder == 2:
        return (4,) * (full - 1) + (3, 3)
    return (4,) * full + (3,)


def advancement_count(heat_size: int, is_final: bool = False) -> int:
    """Players advancing from a heat: 2 from heats of 3-4, 1 from a pair or the final."""
    if is_final or heat_size <= 2:
        return 1
    return 2


def race_id(round_index: int, race_index: int) -> str:
    return f"r{round_index}h{race_index}"


def plan_ladder(num_players: int) -> List[Tuple[int, ...]]:
    """Heat sizes for every round, first round first."""
    plan: List[Tuple[int, ...]] = []
    pool = num_players
    while pool >= 2:
        heats = partition_heats(pool)
        plan.append(heats)
        if len(heats) == 1:
            break
        pool = sum(advancement_count(size) for size in heats)
    return plan


def build_group_advancement_bracket(
    players: Sequence[Player],
    rng: Optional[random.Random] = None,
) -> GroupAdvancementBracket:
    """
    Seed players into a complete heat ladder.

    Args:
        players: Finalized, deduplicated roster (shuffled before seeding)
        rng: Optional random source for the shuffle

    Returns:
        GroupAdvancementBracket whose first round holds the players and
        whose later rounds hold empty slots. Fewer than two players yields
        an empty bracket.
    """
    num_players = len(players)
    if num_players < 2:
        logger.debug(f"Not enough players for a heat ladder: {num_players}")
        return GroupAdvancementBracket()

    seeded = shuffled(players, rng)
    plan = plan_ladder(num_players)
    total_rounds = len(plan)

    rounds = []
    cursor = 0
    for round_index, heats in enumerate(plan):
        is_final = round_index == total_rounds - 1
        races = []
        for race_index, size in enumerate(heats):
            if round_index == 0:
                slots = tuple(seeded[cursor:cursor + size])
                cursor += size
            else:
                slots = (None,) * size
            races.append(Race(
                id=race_id(round_index, race_index),
                players=slots,
                positions=(None,) * size,
                advancement_count=advancement_count(size, is_final=is_final),
            ))
        rounds.append(HeatRound(
            name=get_round_name(round_index, total_rounds, final_name=GROUP_FINAL),
            races=tuple(races),
        ))

    logger.debug(
        f"Built {total_rounds} round heat ladder for {num_players} players: "
        f"{[len(heats) for heats in plan]} heats per round"
    )
    return GroupAdvancementBracket(rounds=tuple(rounds))
