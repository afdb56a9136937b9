"""
Bracket Reporting.

Flattens a tournament into a polars DataFrame with one row per player
slot, and summarizes how far the tournament has progressed.
"""
from typing import Any, Dict, List

import polars as pl

from .models import (
    GroupAdvancementTournament,
    KnockoutTournament,
    TournamentFormat,
)
from .group_progression import advancing_players
from ..exceptions import UnsupportedFormatError

FRAME_SCHEMA = {
    "round_index": pl.Int64,
    "round_name": pl.Utf8,
    "contest_id": pl.Utf8,
    "slot": pl.Int64,
    "player_id": pl.Utf8,
    "player_name": pl.Utf8,
    "result": pl.Float64,
    "advanced": pl.Boolean,
}


def _as_float(value):
    return float(value) if value is not None else None


def _knockout_rows(tournament: KnockoutTournament) -> List[Dict[str, Any]]:
    rows = []
    for round_index, rnd in enumerate(tournament.rounds):
        for match in rnd.matches:
            for slot, player in enumerate(match.players):
                rows.append({
                    "round_index": round_index,
                    "round_name": rnd.name,
                    "contest_id": match.id,
                    "slot": slot,
                    "player_id": player.id if player else None,
                    "player_name": player.name if player else "TBD",
                    "result": _as_float(match.scores[slot]),
                    "advanced": player is not None and player.id == match.winner_id,
                })
    return rows


def _group_rows(tournament: GroupAdvancementTournament) -> List[Dict[str, Any]]:
    rows = []
    for round_index, rnd in enumerate(tournament.rounds):
        for race in rnd.races:
            advanced_ids = {p.id for p in advancing_players(race)}
            for slot, player in enumerate(race.players):
                rows.append({
                    "round_index": round_index,
                    "round_name": rnd.name,
                    "contest_id": race.id,
                    "slot": slot,
                    "player_id": player.id if player else None,
                    "player_name": player.name if player else "TBD",
                    "result": _as_float(race.positions[slot]),
                    "advanced": player is not None and player.id in advanced_ids,
                })
    return rows


def bracket_frame(tournament) -> pl.DataFrame:
    """
    One row per slot: round, contest id, occupant, score/position and
    whether the occupant won or advanced.
    """
    if tournament.format == TournamentFormat.KNOCKOUT:
        rows = _knockout_rows(tournament)
    elif tournament.format == TournamentFormat.GROUP_ADVANCEMENT:
        rows = _group_rows(tournament)
    else:
        raise UnsupportedFormatError(f"No report for format: {tournament.format}")

    if not rows:
        return pl.DataFrame(schema=FRAME_SCHEMA)
    return pl.DataFrame(rows, schema=FRAME_SCHEMA)


def progress_summary(tournament) -> Dict[str, Any]:
    """Completed vs. total contests and the current winner."""
    if tournament.format == TournamentFormat.KNOCKOUT:
        contests = [m for r in tournament.rounds for m in r.matches]
        completed = sum(1 for m in contests if m.is_completed)
    elif tournament.format == TournamentFormat.GROUP_ADVANCEMENT:
        contests = [race for r in tournament.rounds for race in r.races]
        completed = sum(1 for race in contests if race.is_finished)
    else:
        raise UnsupportedFormatError(f"No summary for format: {tournament.format}")

    return {
        "tournament_id": tournament.id,
        "name": tournament.name,
        "format": tournament.format.value,
        "players": len(tournament.players),
        "rounds": len(tournament.rounds),
        "contests": len(contests),
        "completed": completed,
        "progress": completed / len(contests) if contests else 0.0,
        "winner": tournament.winner.name if tournament.winner else None,
    }
