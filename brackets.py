#!/usr/bin/env python
"""
Esports Bracket Engine - CLI for building and simulating brackets.
"""
import sys
from pathlib import Path
import argparse
import json
import random
import time
import uuid

ROOT = Path(__file__).parent
sys.path.insert(0, str(ROOT))

from bracket_engine.utils.observability import initialize_observability, Logger, CORRELATION_ID
from bracket_engine.config import settings
from bracket_engine.utils.logging import setup_logging

ENVIRONMENT = settings.observability.environment

logger = Logger(__name__)

FORMATS = {
    "knockout": "knockout",
    "group": "group_advancement",
}


def _roster(args):
    """Players from --names, else Player 1..N."""
    from bracket_engine.bracket import Player
    
    if args.names:
        names = [n.strip() for n in args.names.split(",") if n.strip()]
    else:
        names = [f"Player {i}" for i in range(1, args.players + 1)]
    return [Player(id=f"player-{i}", name=name) for i, name in enumerate(names, start=1)]


def _print_tournament(tournament, as_json: bool = False):
    from bracket_engine.bracket import bracket_frame, progress_summary
    
    if as_json:
        print(json.dumps(tournament.to_dict(), indent=2))
        return
    
    summary = progress_summary(tournament)
    print(f"\n{'='*60}")
    print(f" {summary['name']} ({summary['format']}) - {summary['players']} players")
    print(f"{'='*60}")
    frame = bracket_frame(tournament)
    for (round_name,), rows in frame.group_by(["round_name"], maintain_order=True):
        print(f"\n[{round_name}]")
        for (contest_id,), rows_by_contest in rows.group_by(["contest_id"], maintain_order=True):
            entries = []
            for row in rows_by_contest.iter_rows(named=True):
                mark = "*" if row["advanced"] else " "
                result = "" if row["result"] is None else f" ({row['result']:g})"
                entries.append(f"{mark}{row['player_name']}{result}")
            print(f"  {contest_id:<6} " + "  |  ".join(entries))
    print(f"\n Completed: {summary['completed']}/{summary['contests']}", end="")
    print(f" | Winner: {summary['winner'] or 'TBD'}\n")


def _service():
    from bracket_engine.bracket import TournamentService
    return TournamentService()


def cmd_build(args):
    """Build a bracket and print it."""
    logger.log_event('build_command_started', format=args.format)
    
    rng = random.Random(args.seed) if args.seed is not None else None
    tournament = _service().create_tournament(args.name, FORMATS[args.format], _roster(args), rng=rng)
    if not tournament.rounds:
        print("Need at least 2 players to build a bracket.")
        return 1
    _print_tournament(tournament, as_json=args.json)
    return 0


def cmd_simulate(args):
    """Build a bracket and play it out with random results."""
    from bracket_engine.bracket import TournamentFormat
    
    logger.log_event('simulate_command_started', format=args.format)
    
    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    service = _service()
    tournament = service.create_tournament(args.name, FORMATS[args.format], _roster(args), rng=rng)
    if not tournament.rounds:
        print("Need at least 2 players to simulate a tournament.")
        return 1
    
    if tournament.format == TournamentFormat.KNOCKOUT:
        for rnd in tournament.rounds:
            for match in rnd.matches:
                scores = [rng.randint(0, 5), rng.randint(0, 5)]
                tournament = service.submit_knockout_score(tournament.id, match.id, scores)
    else:
        for round_index, rnd in enumerate(tournament.rounds):
            for race_index, race in enumerate(rnd.races):
                positions = list(range(1, len(race.players) + 1))
                rng.shuffle(positions)
                tournament = service.submit_group_advancement_result(
                    tournament.id, round_index, race_index, positions
                )
    
    _print_tournament(tournament, as_json=args.json)
    return 0


def main():
    parser = argparse.ArgumentParser(description="Esports Bracket Engine")
    subparsers = parser.add_subparsers(dest="command", required=True)
    
    for command, func, help_text in (
        ("build", cmd_build, "Seed players into a new bracket"),
        ("simulate", cmd_simulate, "Play a bracket through with random results"),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument("--format", "-f", choices=sorted(FORMATS), default="knockout")
        sub.add_argument("--players", "-n", type=int, default=8, help="Number of generated players")
        sub.add_argument("--names", help="Comma separated player names (overrides --players)")
        sub.add_argument("--name", default="Exhibition Cup", help="Tournament name")
        sub.add_argument("--seed", type=int, help="Seed for shuffling and simulated results")
        sub.add_argument("--json", action="store_true", help="Print the tournament as JSON")
        sub.set_defaults(func=func)
    
    args = parser.parse_args()
    
    initialize_observability(environment=ENVIRONMENT)
    # stdlib loggers used by the core and storage modules
    setup_logging("bracket_engine", environment=ENVIRONMENT)
    
    # Initialize correlation ID for this run
    correlation_id = str(uuid.uuid4())
    CORRELATION_ID.set(correlation_id)
    
    start_time = time.time()
    exit_code = 0
    
    try:
        exit_code = args.func(args) or 0
    except Exception as e:
        logger.log_error("command_failed", error=str(e), exc_info=True)
        sys.exit(1)
    finally:
        duration = time.time() - start_time
        logger.log_event('command_completed', duration_seconds=duration)
    
    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
