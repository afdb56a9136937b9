"""
Tournament Service - the caller of the pure bracket core.

Creates tournaments, routes result submissions to the engine for the
tournament's format, serializes updates per tournament id and hands every
new snapshot to the registered repository.
"""
from collections import Counter
from contextlib import contextmanager
from threading import Lock
from typing import Any, Dict, Iterator, Optional, Sequence, TYPE_CHECKING
import random
import time
import uuid

from bracket_engine.config import settings
from bracket_engine.core.container import ServiceContainer
from bracket_engine.exceptions import (
    DuplicatePlayerError,
    TournamentBusyError,
    TournamentNotFoundError,
    UnsupportedFormatError,
)
from bracket_engine.utils.observability import Logger, MetricsRegistry, get_metrics

from .group_builder import build_group_advancement_bracket
from .group_progression import submit_group_advancement_result
from .knockout_builder import build_knockout_bracket
from .knockout_progression import submit_knockout_score
from .models import (
    GroupAdvancementTournament,
    KnockoutTournament,
    Player,
    Tournament,
    TournamentFormat,
)
from .reporting import progress_summary

if TYPE_CHECKING:
    from bracket_engine.core.protocols import TournamentRepository

logger = Logger(__name__)


def new_tournament_id() -> str:
    return f"tourney-{uuid.uuid4().hex[:12]}"


class TournamentService:
    """
    Entry point for applications managing tournaments.

    Updates to one tournament are applied one at a time; updates to
    different tournaments never wait on each other.

    Example:
        service = TournamentService()
        t = service.create_tournament("Friday Cup", TournamentFormat.KNOCKOUT, players)
        t = service.submit_knockout_score(t.id, "r0m0", [3, 1])
    """

    def __init__(
        self,
        repository: Optional["TournamentRepository"] = None,
        metrics: Optional[MetricsRegistry] = None,
        lock_timeout_s: Optional[float] = None,
    ):
        self.repository = repository or ServiceContainer.get_repository()
        self.metrics = metrics or get_metrics()
        if lock_timeout_s is None:
            lock_timeout_s = settings.service.lock_timeout_s
        self.lock_timeout_s = lock_timeout_s
        self._locks: Dict[str, Lock] = {}
        self._locks_guard = Lock()

    @contextmanager
    def _tournament_lock(self, tournament_id: str) -> Iterator[Lock]:
        """
        Hold the update lock of one tournament.

        Ids that turn out not to exist give their entry back, so the lock
        map only holds stored tournaments.
        """
        with self._locks_guard:
            lock = self._locks.setdefault(tournament_id, Lock())
        if not lock.acquire(timeout=self.lock_timeout_s):
            self.metrics.lock_timeouts.inc()
            logger.log_warning("tournament_lock_timeout", tournament_id=tournament_id)
            raise TournamentBusyError(tournament_id, self.lock_timeout_s)
        try:
            yield lock
        except TournamentNotFoundError:
            self._forget_lock(tournament_id, lock)
            raise
        finally:
            lock.release()

    def _forget_lock(self, tournament_id: str, lock: Lock) -> None:
        with self._locks_guard:
            if self._locks.get(tournament_id) is lock:
                del self._locks[tournament_id]

    def create_tournament(
        self,
        name: str,
        fmt: TournamentFormat,
        players: Sequence[Player],
        rng: Optional[random.Random] = None,
    ) -> Tournament:
        """
        Build the bracket for a new tournament and store it.

        Args:
            name: Display name
            fmt: Tournament format
            players: Roster; player ids must be unique
            rng: Optional random source for seeding

        Returns:
            The stored tournament snapshot
        """
        counts = Counter(p.id for p in players)
        duplicates = [pid for pid, n in counts.items() if n > 1]
        if duplicates:
            raise DuplicatePlayerError(duplicates)

        try:
            fmt = TournamentFormat(fmt)
        except ValueError as e:
            raise UnsupportedFormatError(f"Unknown tournament format: {fmt}") from e
        roster = tuple(players)
        tournament_id = new_tournament_id()

        if fmt == TournamentFormat.KNOCKOUT:
            bracket = build_knockout_bracket(roster, rng=rng)
            tournament = KnockoutTournament(
                id=tournament_id, name=name, players=roster, rounds=bracket.rounds
            )
        elif fmt == TournamentFormat.GROUP_ADVANCEMENT:
            bracket = build_group_advancement_bracket(roster, rng=rng)
            tournament = GroupAdvancementTournament(
                id=tournament_id, name=name, players=roster, rounds=bracket.rounds
            )
        else:
            raise UnsupportedFormatError(f"No bracket builder for format: {fmt}")

        self.repository.save(tournament)
        self.metrics.brackets_built.labels(format=fmt.value).inc()
        logger.log_event(
            "tournament_created",
            tournament_id=tournament_id,
            format=fmt.value,
            players=len(roster),
            rounds=len(tournament.rounds),
        )
        return tournament

    def get(self, tournament_id: str) -> Tournament:
        tournament = self.repository.load(tournament_id)
        if tournament is None:
            raise TournamentNotFoundError(tournament_id)
        return tournament

    def delete(self, tournament_id: str) -> None:
        """Remove a tournament once any in-flight update to it has been stored."""
        with self._tournament_lock(tournament_id) as lock:
            if not self.repository.delete(tournament_id):
                raise TournamentNotFoundError(tournament_id)
            self._forget_lock(tournament_id, lock)
        logger.log_event("tournament_deleted", tournament_id=tournament_id)

    def _apply(self, tournament_id: str, fmt: TournamentFormat, update, **details) -> Tournament:
        """
        Load, check format, run ``update`` and store the result under the tournament lock.

        The tournament is loaded after the lock is taken, so one deleted while
        this call waited raises TournamentNotFoundError instead of being stored again.
        """
        with self._tournament_lock(tournament_id):
            current = self.get(tournament_id)
            if current.format != fmt:
                raise UnsupportedFormatError(
                    f"Tournament {tournament_id} is {current.format.value}, not {fmt.value}"
                )

            start = time.perf_counter()
            updated = update(current)
            self.metrics.update_latency.labels(format=fmt.value).observe(time.perf_counter() - start)

            if updated is current:
                self.metrics.results_submitted.labels(format=fmt.value, outcome="noop").inc()
                logger.log_warning("result_ignored", tournament_id=tournament_id, **details)
                return current

            self.repository.save(updated)
            self.metrics.results_submitted.labels(format=fmt.value, outcome="applied").inc()
            if updated.winner is not None and current.winner != updated.winner:
                self.metrics.champions_decided.labels(format=fmt.value).inc()
                logger.log_event(
                    "tournament_won",
                    tournament_id=tournament_id,
                    winner_id=updated.winner.id,
                )
            logger.log_event("result_applied", tournament_id=tournament_id, **details)
            return updated

    def submit_knockout_score(
        self, tournament_id: str, match_id: str, scores: Sequence[Any]
    ) -> Tournament:
        return self._apply(
            tournament_id,
            TournamentFormat.KNOCKOUT,
            lambda t: submit_knockout_score(t, match_id, scores),
            match_id=match_id,
        )

    def submit_group_advancement_result(
        self,
        tournament_id: str,
        round_index: int,
        race_index: int,
        positions: Sequence[Any],
    ) -> Tournament:
        return self._apply(
            tournament_id,
            TournamentFormat.GROUP_ADVANCEMENT,
            lambda t: submit_group_advancement_result(t, round_index, race_index, positions),
            round_index=round_index,
            race_index=race_index,
        )

    def summary(self, tournament_id: str) -> Dict[str, Any]:
        return progress_summary(self.get(tournament_id))
