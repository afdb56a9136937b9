"""
Protocol definitions for the storage collaborator.

The bracket core never persists anything itself; the service hands every
new snapshot to whatever repository is registered.
"""
from typing import Protocol, Optional, List, runtime_checkable

from bracket_engine.bracket.models import Tournament


@runtime_checkable
class TournamentRepository(Protocol):
    """
    Storage abstraction for tournament snapshots.
    
    Implementations:
    - InMemoryTournamentRepository (default): process-local dict
    """
    
    def save(self, tournament: Tournament) -> None:
        """
        Store a snapshot, replacing any previous one with the same id.
        
        Args:
            tournament: Snapshot to store
        """
        ...
    
    def load(self, tournament_id: str) -> Optional[Tournament]:
        """
        Load the latest snapshot.
        
        Args:
            tournament_id: Tournament identifier
            
        Returns:
            The snapshot, or None if the id is unknown
        """
        ...
    
    def delete(self, tournament_id: str) -> bool:
        """Remove a tournament. Returns False if it did not exist."""
        ...
    
    def list_ids(self) -> List[str]:
        """List stored tournament ids."""
        ...
