"""
Tournament Brackets - construction and result progression.

Builders seed a roster into a knockout bracket or a group-advancement
heat ladder; progression functions apply one result and return the new
structure, resetting any downstream state the result invalidated.
"""
from .models import (
    Player,
    Match,
    Round,
    Race,
    HeatRound,
    SlotRef,
    KnockoutBracket,
    KnockoutTournament,
    GroupAdvancementBracket,
    GroupAdvancementTournament,
    Tournament,
    TournamentFormat,
)
from .knockout_builder import build_knockout_bracket
from .knockout_progression import submit_knockout_score
from .group_builder import build_group_advancement_bracket, partition_heats
from .group_progression import submit_group_advancement_result
from .reporting import bracket_frame, progress_summary
from .service import TournamentService

__all__ = [
    "Player",
    "Match",
    "Round",
    "Race",
    "HeatRound",
    "SlotRef",
    "KnockoutBracket",
    "KnockoutTournament",
    "GroupAdvancementBracket",
    "GroupAdvancementTournament",
    "Tournament",
    "TournamentFormat",
    "build_knockout_bracket",
    "submit_knockout_score",
    "build_group_advancement_bracket",
    "partition_heats",
    "submit_group_advancement_result",
    "bracket_frame",
    "progress_summary",
    "TournamentService",
]
