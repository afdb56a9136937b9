"""
In-Memory Tournament Repository - Default storage implementation.

Snapshots are immutable, so storing the objects themselves is enough.
"""
from threading import Lock
from typing import Dict, List, Optional
import logging

from bracket_engine.bracket.models import Tournament

logger = logging.getLogger(__name__)


class InMemoryTournamentRepository:
    """Process-local storage keyed by tournament id."""
    
    def __init__(self):
        self._snapshots: Dict[str, Tournament] = {}
        self._lock = Lock()
    
    def save(self, tournament: Tournament) -> None:
        with self._lock:
            self._snapshots[tournament.id] = tournament
        logger.debug(f"Saved snapshot for {tournament.id}")
    
    def load(self, tournament_id: str) -> Optional[Tournament]:
        with self._lock:
            snapshot = self._snapshots.get(tournament_id)
        if snapshot is None:
            logger.warning(f"Tournament not found: {tournament_id}")
        return snapshot
    
    def delete(self, tournament_id: str) -> bool:
        with self._lock:
            removed = self._snapshots.pop(tournament_id, None)
        return removed is not None
    
    def list_ids(self) -> List[str]:
        with self._lock:
            return list(self._snapshots)
