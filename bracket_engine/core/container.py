"""
Service Container - Simple dependency injection for the storage collaborator.

Usage:
    from bracket_engine.core import ServiceContainer
    
    # Get default implementation
    repository = ServiceContainer.get_repository()
    
    # Register custom implementation
    ServiceContainer.register_repository(MyDatabaseRepository())
"""
from typing import Optional, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from .protocols import TournamentRepository

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Simple dependency injection container.
    
    Provides lazy initialization of the default repository
    and allows swapping to an alternative implementation.
    """
    
    _repository: Optional["TournamentRepository"] = None
    
    @classmethod
    def get_repository(cls) -> "TournamentRepository":
        """Get the configured tournament repository."""
        if cls._repository is None:
            from .storage import InMemoryTournamentRepository
            cls._repository = InMemoryTournamentRepository()
            logger.debug("Initialized default InMemoryTournamentRepository")
        return cls._repository
    
    @classmethod
    def register_repository(cls, repository: "TournamentRepository") -> None:
        """Register a custom repository implementation."""
        cls._repository = repository
        logger.info(f"Registered repository: {type(repository).__name__}")
    
    @classmethod
    def reset(cls) -> None:
        """Reset to defaults (for testing)."""
        cls._repository = None
