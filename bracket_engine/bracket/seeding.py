"""
Seeding shuffle shared by the bracket builders.
"""
import random
from typing import List, Optional, Sequence, TypeVar

from bracket_engine.config import settings

T = TypeVar("T")


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Random source for a build; falls back to BRACKET_SHUFFLE_SEED."""
    if seed is None:
        seed = settings.bracket.shuffle_seed
    return random.Random(seed)


def shuffled(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Uniformly shuffled copy of ``items``; the input is left untouched."""
    rng = rng or make_rng()
    result = list(items)
    rng.shuffle(result)
    return result
