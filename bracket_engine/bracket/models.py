"""
Tournament Bracket Data Structures.

Immutable representation of players, knockout matches, group-advancement
races, rounds and the two tournament variants. Progression code never
mutates these objects; it builds new ones with ``dataclasses.replace``.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union
import math


PRELIMINARY_ROUND_NAME = "Preliminary Round"


class TournamentFormat(str, Enum):
    KNOCKOUT = "knockout"
    GROUP_ADVANCEMENT = "group_advancement"


@dataclass(frozen=True)
class Player:
    """A participant. Identity is by ``id``."""
    id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class SlotRef:
    """Address of one player slot in a later match."""
    match_id: str
    slot: int

    def to_dict(self) -> Dict[str, Any]:
        return {"match_id": self.match_id, "slot": self.slot}


def coerce_number(value: Any) -> Optional[float]:
    """
    Normalize a submitted score or position.

    Anything that is not a finite real number (None, strings, bools, NaN)
    is treated as "not recorded yet".
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _player_dict(player: Optional[Player]) -> Optional[Dict[str, Any]]:
    return player.to_dict() if player is not None else None


# =============================================================================
# KNOCKOUT
# =============================================================================

@dataclass(frozen=True)
class Match:
    """A single knockout match between two slots."""
    id: str
    players: Tuple[Optional[Player], Optional[Player]] = (None, None)
    scores: Tuple[Optional[float], Optional[float]] = (None, None)
    winner_id: Optional[str] = None
    feeds: Optional[SlotRef] = None     # None for the final

    @property
    def winner(self) -> Optional[Player]:
        for player in self.players:
            if player is not None and player.id == self.winner_id:
                return player
        return None

    @property
    def is_completed(self) -> bool:
        return self.winner_id is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "players": [_player_dict(p) for p in self.players],
            "scores": list(self.scores),
            "winner_id": self.winner_id,
            "feeds": self.feeds.to_dict() if self.feeds else None,
        }


@dataclass(frozen=True)
class Round:
    name: str
    matches: Tuple[Match, ...] = ()

    @property
    def is_preliminary(self) -> bool:
        return self.name == PRELIMINARY_ROUND_NAME

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "is_preliminary": self.is_preliminary,
            "matches": [m.to_dict() for m in self.matches],
        }


@dataclass(frozen=True)
class KnockoutBracket:
    """Builder output for single elimination play."""
    rounds: Tuple[Round, ...] = ()
    winner: Optional[Player] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rounds": [r.to_dict() for r in self.rounds],
            "winner": _player_dict(self.winner),
        }


@dataclass(frozen=True)
class KnockoutTournament:
    """
    A knockout tournament.

    ``winner`` is set iff the final match has a winner, and then equals
    that match's winning player.
    """
    id: str
    name: str
    players: Tuple[Player, ...] = ()
    rounds: Tuple[Round, ...] = ()
    winner: Optional[Player] = None

    @property
    def format(self) -> TournamentFormat:
        return TournamentFormat.KNOCKOUT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "format": self.format.value,
            "players": [p.to_dict() for p in self.players],
            "rounds": [r.to_dict() for r in self.rounds],
            "winner": _player_dict(self.winner),
        }


# =============================================================================
# GROUP ADVANCEMENT
# =============================================================================

@dataclass(frozen=True)
class Race:
    """
    One heat of the group-advancement format.

    ``positions[i]`` is the 1-based finishing rank of ``players[i]``.
    ``advancement_count`` is fixed when the ladder is built.
    """
    id: str
    players: Tuple[Optional[Player], ...] = ()
    positions: Tuple[Optional[float], ...] = ()
    advancement_count: int = 1

    @property
    def occupied_slots(self) -> Tuple[int, ...]:
        return tuple(i for i, p in enumerate(self.players) if p is not None)

    @property
    def is_finished(self) -> bool:
        """
        True when the race has runners and every one of them has a position.

        A race with no occupied slots is not finished, even though no runner
        lacks a position. Rounds waiting for advancing players therefore
        report ``is_finished: false`` in ``to_dict``.
        """
        occupied = self.occupied_slots
        if not occupied:
            return False
        return all(self.positions[i] is not None for i in occupied)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "players": [_player_dict(p) for p in self.players],
            "positions": list(self.positions),
            "advancement_count": self.advancement_count,
            "is_finished": self.is_finished,
        }


@dataclass(frozen=True)
class HeatRound:
    name: str
    races: Tuple[Race, ...] = ()

    @property
    def slot_count(self) -> int:
        return sum(len(r.players) for r in self.races)

    @property
    def advancing_count(self) -> int:
        return sum(r.advancement_count for r in self.races)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "races": [r.to_dict() for r in self.races]}


@dataclass(frozen=True)
class GroupAdvancementBracket:
    """Builder output for the heat ladder."""
    rounds: Tuple[HeatRound, ...] = ()
    winner: Optional[Player] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rounds": [r.to_dict() for r in self.rounds],
            "winner": _player_dict(self.winner),
        }


@dataclass(frozen=True)
class GroupAdvancementTournament:
    id: str
    name: str
    players: Tuple[Player, ...] = ()
    rounds: Tuple[HeatRound, ...] = ()
    winner: Optional[Player] = None

    @property
    def format(self) -> TournamentFormat:
        return TournamentFormat.GROUP_ADVANCEMENT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "format": self.format.value,
            "players": [p.to_dict() for p in self.players],
            "rounds": [r.to_dict() for r in self.rounds],
            "winner": _player_dict(self.winner),
        }


Tournament = Union[KnockoutTournament, GroupAdvancementTournament]
